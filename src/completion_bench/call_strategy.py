"""Backends that deliver a completion request: a real HTTP call or a local simulation."""
import logging
import random
import time
from abc import ABC, abstractmethod
from typing import Optional

import requests

from src.shared.config import BenchmarkSettings

from .constants import BenchmarkConstants
from .exceptions import TransportError
from .models import CallResult, InferenceRequest
from .request_session_manager import RequestSessionManager


# Configure logging
logger = logging.getLogger(__name__)


class CallStrategy(ABC):
    """Delivers one completion request to an endpoint."""

    @abstractmethod
    def call(self, request: InferenceRequest) -> Optional[CallResult]:
        """
        Execute the request.

        Returns:
            The HTTP outcome, or None when the backend produces no body.

        Raises:
            TransportError: If the request could not be delivered.
        """

    def close(self) -> None:
        """Release resources held by the backend."""

    @staticmethod
    def from_settings(settings: BenchmarkSettings) -> "CallStrategy":
        """Select the backend once, from the simulated flag."""
        if settings.simulated:
            logger.info("Using simulated completion endpoint")
            return SimulatedCall()
        api_key = settings.api_key.get_secret_value() if settings.api_key else None
        logger.info(f"Using completion endpoint {settings.model_url}")
        return RealCall(settings.model_url, RequestSessionManager.create_session(settings.threads, api_key))


class RealCall(CallStrategy):
    """POSTs the request as JSON to the completion endpoint."""

    def __init__(self, url: str, session: requests.Session):
        self.url = url
        self.session = session

    def call(self, request: InferenceRequest) -> Optional[CallResult]:
        try:
            # Bound only the connect phase; generation time is what is measured
            response = self.session.post(
                self.url,
                json=request.to_payload(),
                timeout=(BenchmarkConstants.CONNECT_TIMEOUT, None),
            )
        except requests.RequestException as e:
            logger.error(f"Request failed: {e}")
            raise TransportError(f"Request to {self.url} failed") from e
        return CallResult(status_code=response.status_code, body=response.text)

    def close(self) -> None:
        self.session.close()


class SimulatedCall(CallStrategy):
    """Stands in for an endpoint: waits for a synthetic latency and returns no body."""

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()

    def synthetic_delay_ms(self, token_count: int) -> float:
        """Latency for a prompt: base + one ms per ten tokens + jitter in [0, 50)."""
        return (
            BenchmarkConstants.SIMULATED_BASE_MS
            + token_count / BenchmarkConstants.SIMULATED_TOKENS_PER_MS
            + self._rng.random() * BenchmarkConstants.SIMULATED_JITTER_MS
        )

    def call(self, request: InferenceRequest) -> Optional[CallResult]:
        time.sleep(self.synthetic_delay_ms(len(request.prompt)) / 1000)
        return None
