"""
Protocols for pluggable extractors and page fetchers.
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol, runtime_checkable

from .models import FetchResponse


@runtime_checkable
class Extractor(Protocol):
    """Pure HTML-to-values strategy."""

    name: str

    def extract(self, html: str) -> Any:
        """Extract values from an HTML string.

        Must not raise for any string input; an empty result is returned
        when nothing is found.
        """
        ...


@runtime_checkable
class PageFetcher(Protocol):
    """Transport capable of a single GET request."""

    async def get(self, url: str, *, timeout: float, headers: Mapping[str, str] | None = None) -> FetchResponse:
        """Fetch ``url`` once.

        Args:
            url: Absolute URL to request
            timeout: Timeout in seconds for the whole request
            headers: Extra request headers

        Returns:
            FetchResponse for any HTTP status

        Raises:
            PageFetchError: On transport failure or timeout
        """
        ...
