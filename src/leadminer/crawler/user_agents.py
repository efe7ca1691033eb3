"""
Realistic browser request headers.

Small business sites often sit behind naive bot filters, so every request
looks like an ordinary desktop browser visit.
"""

from __future__ import annotations

from typing import Dict

from ..config import FetchConfig

ACCEPT_HTML = "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,*/*;q=0.8"


def browser_headers(config: FetchConfig) -> Dict[str, str]:
    """Build the default request headers for ``config``."""
    return {
        "User-Agent": config.user_agent,
        "Accept": ACCEPT_HTML,
        "Accept-Language": config.accept_language,
        "Upgrade-Insecure-Requests": "1",
    }
