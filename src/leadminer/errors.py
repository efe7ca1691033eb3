"""
Exception hierarchy for LeadMiner.
"""

from __future__ import annotations

from typing import Optional


class LeadMinerError(Exception):
    """Base class for all LeadMiner errors."""


class PageFetchError(LeadMinerError):
    """Raised by a fetcher when a page could not be retrieved at transport level."""

    def __init__(self, url: str, message: str, *, timed_out: bool = False) -> None:
        super().__init__(f"{message} ({url})")
        self.url = url
        self.message = message
        self.timed_out = timed_out


class ConfigurationError(LeadMinerError):
    """Raised when configuration cannot be loaded."""

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        super().__init__(message if path is None else f"{message}: {path}")
        self.path = path
