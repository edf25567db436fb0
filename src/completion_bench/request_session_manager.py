"""Manages HTTP request sessions for the completion endpoint."""
import logging
from typing import Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .constants import BenchmarkConstants


# Configure logging
logger = logging.getLogger(__name__)


class RequestSessionManager:
    """Manages HTTP request sessions."""

    @staticmethod
    def create_session(pool_size: int = 1, api_key: Optional[str] = None) -> requests.Session:
        """
        Create a requests session without retries.

        Args:
            pool_size: Connections kept per host, one per worker thread.
            api_key: Bearer token sent with every request, if any.

        Returns:
            Configured session.
        """
        session = requests.Session()
        # Failed requests are reported, never replayed
        retry = Retry(total=0, connect=0, read=0, redirect=0, status=0, raise_on_status=False)
        adapter = HTTPAdapter(max_retries=retry, pool_connections=1, pool_maxsize=max(1, pool_size))
        session.mount("http://", adapter)
        session.mount("https://", adapter)
        session.headers.update({"Content-Type": BenchmarkConstants.CONTENT_TYPE_JSON})
        if api_key:
            session.headers.update({"Authorization": f"Bearer {api_key}"})
        logger.debug(f"Created HTTP session with pool size {pool_size}")
        return session
