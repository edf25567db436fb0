"""Issues completion calls and records their timing."""
import logging
import time
from typing import Optional

from pydantic import ValidationError

from src.shared.config import BenchmarkSettings

from .call_strategy import CallStrategy
from .constants import BenchmarkConstants
from .exceptions import ContextOverflowError, ProtocolError
from .models import CallResult, CompletionResponse, InferenceRequest, TimingRecord, TokenizedPrompt
from .timing_collector import TimingCollector


# Configure logging
logger = logging.getLogger(__name__)


class InferenceClient:
    """Sends tokenized prompts to the completion endpoint one at a time."""

    def __init__(self, settings: BenchmarkSettings, call_strategy: CallStrategy, timing_collector: TimingCollector,
                 max_tokens: int = BenchmarkConstants.MAX_TOKENS):
        self.settings = settings
        self.call_strategy = call_strategy
        self.timing_collector = timing_collector
        self.max_tokens = max_tokens

    def validate(self, prompt: TokenizedPrompt) -> None:
        """
        Check the token budget of a prompt.

        Raises:
            ContextOverflowError: If the prompt plus reserved output does not fit the context window.
        """
        if prompt.token_count + self.max_tokens >= self.settings.context_size:
            raise ContextOverflowError(self.settings.context_size, prompt.token_count, self.max_tokens)

    def build_request(self, prompt: TokenizedPrompt) -> InferenceRequest:
        return InferenceRequest(
            model=self.settings.model_name,
            prompt=prompt.tokens,
            max_tokens=self.max_tokens,
        )

    @staticmethod
    def parse_completion(result: Optional[CallResult]) -> str:
        """
        Extract the completion text from a call result.

        A missing result (simulated backend) counts as an empty completion.

        Raises:
            ProtocolError: On a non-200 status, an unparsable body or no choices.
        """
        if result is None:
            return ""

        if result.status_code != BenchmarkConstants.HTTP_SUCCESS:
            raise ProtocolError(f"Unexpected status {result.status_code}: {result.body[:200]}",
                                status_code=result.status_code)

        try:
            response = CompletionResponse.model_validate_json(result.body)
        except ValidationError as e:
            raise ProtocolError(f"Invalid response format: {e.error_count()} error(s)",
                                status_code=result.status_code) from e

        if not response.choices:
            raise ProtocolError("Choices empty", status_code=result.status_code)

        return response.choices[0].text

    def generate(self, prompt: TokenizedPrompt) -> Optional[str]:
        """
        Request a completion for one prompt.

        Prompts over the token budget are skipped without any call, and unusable
        responses are logged and dropped; neither produces a timing record.

        Args:
            prompt: Tokenized prompt.

        Returns:
            The completion text, or None if the request was skipped or failed.

        Raises:
            TransportError: If the endpoint could not be reached.
        """
        try:
            self.validate(prompt)
        except ContextOverflowError as e:
            logger.warning(f"Skipping prompt: {e}")
            self.timing_collector.record_skip()
            return None

        request = self.build_request(prompt)

        start_time = time.perf_counter()
        result = self.call_strategy.call(request)
        end_time = time.perf_counter()

        try:
            text = self.parse_completion(result)
        except ProtocolError as e:
            logger.error(f"Request failed: {e}")
            self.timing_collector.record_failure()
            return None

        self.timing_collector.add(
            TimingRecord(
                time_ms=int((end_time - start_time) * 1000),
                context_tokens=prompt.token_count,
                response_chars=len(text),
            )
        )

        logger.debug(f"Response: {text!r}; prompt tokens: {prompt.token_count}")
        return text
