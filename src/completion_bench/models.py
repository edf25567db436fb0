"""Data models for the benchmarking system."""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict

from .constants import BenchmarkConstants


@dataclass(frozen=True)
class TokenizedPrompt:
    """A prompt together with the token ids the endpoint receives."""
    tokens: Tuple[int, ...]
    text: str = ""

    def __post_init__(self):
        if not self.tokens:
            raise ValueError("Tokenized prompt must contain at least one token")
        # Accept any sequence, store an immutable copy
        object.__setattr__(self, "tokens", tuple(int(token) for token in self.tokens))

    @property
    def token_count(self) -> int:
        return len(self.tokens)


@dataclass(frozen=True)
class InferenceRequest:
    """Body of one completion call."""
    model: str
    prompt: Sequence[int]
    stop: List[str] = field(default_factory=lambda: list(BenchmarkConstants.STOP_SEQUENCES))
    max_tokens: int = BenchmarkConstants.MAX_TOKENS
    n: int = BenchmarkConstants.SAMPLE_COUNT
    temperature: float = BenchmarkConstants.TEMPERATURE
    stream: bool = False

    def to_payload(self) -> Dict[str, Any]:
        """Return the JSON body sent to the completion endpoint."""
        return {
            "model": self.model,
            "prompt": list(self.prompt),
            "stream": self.stream,
            "stop": list(self.stop),
            "max_tokens": self.max_tokens,
            "n": self.n,
            "temperature": self.temperature,
        }


class CompletionChoice(BaseModel):
    """One candidate completion."""
    model_config = ConfigDict(extra="ignore")

    text: str


class CompletionResponse(BaseModel):
    """Parsed completion endpoint response."""
    model_config = ConfigDict(extra="ignore")

    choices: List[CompletionChoice]


@dataclass(frozen=True)
class CallResult:
    """Raw outcome of an HTTP completion call."""
    status_code: int
    body: str


@dataclass(frozen=True)
class TimingRecord:
    """Latency and size metrics of one completed request."""
    time_ms: int
    context_tokens: int
    response_chars: int


@dataclass
class LatencyResults:
    """Container for latency percentiles."""
    p50: float
    p90: float
    p95: float
    mean: float = 0.0
    mean_per_token: float = 0.0
    count: int = 0


@dataclass(frozen=True)
class ReportData:
    """A report loaded back from disk."""
    info: str
    settings: Dict[str, Optional[str]]
    records: List[TimingRecord]
