"""
httpx based page fetcher.
"""

from __future__ import annotations

from typing import Dict, List, Mapping, Optional, Tuple

import httpx
import structlog

from ..config import FetchConfig
from ..errors import PageFetchError
from ..extractor.models import FetchResponse
from .user_agents import browser_headers

logger = structlog.get_logger(__name__)


def group_headers(headers: httpx.Headers) -> Dict[str, Tuple[str, ...]]:
    """Lower-cased header names mapped to every value received for them."""
    grouped: Dict[str, List[str]] = {}
    for name, value in headers.multi_items():
        grouped.setdefault(name.lower(), []).append(value)
    return {name: tuple(values) for name, values in grouped.items()}


class HttpxPageFetcher:
    """
    Single-attempt GET over a shared ``httpx.AsyncClient``.

    Use as an async context manager so the connection pool is closed::

        async with HttpxPageFetcher(config.fetch) as fetcher:
            response = await fetcher.get(url, timeout=15.0)
    """

    def __init__(
        self,
        config: Optional[FetchConfig] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.config = config or FetchConfig()
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "HttpxPageFetcher":
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def initialize(self) -> None:
        if self._client is None:
            self._client = httpx.AsyncClient(
                headers=browser_headers(self.config),
                timeout=httpx.Timeout(self.config.timeout),
                follow_redirects=self.config.follow_redirects,
                transport=self._transport,
            )
            logger.debug("HTTP client initialized", follow_redirects=self.config.follow_redirects)

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def get(self, url: str, *, timeout: float, headers: Mapping[str, str] | None = None) -> FetchResponse:
        """Fetch ``url`` once. Any HTTP status is returned; transport problems raise ``PageFetchError``."""
        if self._client is None:
            await self.initialize()
        assert self._client is not None

        try:
            response = await self._client.get(url, headers=dict(headers or {}), timeout=httpx.Timeout(timeout))
        except httpx.TimeoutException as e:
            raise PageFetchError(url, f"Timeout after {timeout:g}s", timed_out=True) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise PageFetchError(url, str(e) or type(e).__name__) from e

        return FetchResponse(
            url=str(response.url),
            status=response.status_code,
            headers=group_headers(response.headers),
            body=response.text,
        )
