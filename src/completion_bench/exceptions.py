"""Custom exceptions for the benchmarking system."""
from typing import Optional

from src.shared.config import ConfigurationError


class BenchmarkError(Exception):
    """Base class for benchmark failures."""
    pass


class ContextOverflowError(BenchmarkError):
    """Exception raised when a prompt plus reserved output exceeds the context window."""

    def __init__(self, context_size: int, prompt_size: int, max_tokens: int):
        super().__init__(
            f"Context overflow(modelSize:{context_size}, promptSize:{prompt_size}, maxTokens:{max_tokens})"
        )
        self.context_size = context_size
        self.prompt_size = prompt_size
        self.max_tokens = max_tokens


class ProtocolError(BenchmarkError):
    """Exception raised when the endpoint answers with an unusable response."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class TransportError(BenchmarkError):
    """Exception raised when a request cannot be delivered to the endpoint."""
    pass


class PromptAssemblyError(BenchmarkError):
    """Exception raised when a dataset row cannot be turned into a prompt."""
    pass


class DatasetLoadError(BenchmarkError):
    """Exception raised when dataset loading fails."""
    pass
