"""HTTP transport backed by requests."""

import logging

import requests
from tenacity import Retrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from .config import Settings
from .core.exceptions import NetworkError

logger = logging.getLogger(__name__)


class HttpTransport:
    """Fetches backend pages with a shared session, retrying connection failures."""

    def __init__(self, settings: Settings | None = None):
        """Initialize the transport.

        Args:
            settings: Timeout, retry and header configuration
        """
        self.settings = settings or Settings()
        self.timeout = self.settings.timeout
        self.session = requests.Session()
        self.session.headers.update(
            {
                "User-Agent": self.settings.user_agent,
                "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
                "Accept-Language": "de-DE,de;q=0.9,en;q=0.8",
                "Accept-Encoding": "gzip, deflate",
                "Connection": "keep-alive",
            }
        )

    def fetch_text(self, url: str, encoding: str) -> str:
        """Fetch a URL and decode it with the backend's charset.

        Raises:
            NetworkError: If the request fails or returns an error status
        """
        try:
            for attempt in Retrying(
                stop=stop_after_attempt(self.settings.retry_attempts),
                wait=wait_exponential(multiplier=1, min=1, max=10),
                retry=retry_if_exception_type(
                    (requests.exceptions.ConnectionError, requests.exceptions.Timeout)
                ),
                reraise=True,
            ):
                with attempt:
                    response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise NetworkError(f"Failed to fetch {url}: {str(e)}") from e

        response.encoding = encoding
        return response.text
