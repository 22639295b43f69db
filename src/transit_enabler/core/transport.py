"""Boundary to the HTTP layer."""

from typing import Protocol


class Transport(Protocol):
    """Fetches a URL and decodes the body with the given charset.

    Implementations raise ``NetworkError`` on any transport failure. Retries
    and timeouts are their business, the core never retries.
    """

    def fetch_text(self, url: str, encoding: str) -> str: ...
