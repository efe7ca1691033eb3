"""
Discovery of same-site contact and about pages.
"""

from __future__ import annotations

from typing import List, Tuple
from urllib.parse import urldefrag, urljoin, urlparse

import structlog
from bs4 import BeautifulSoup

logger = structlog.get_logger(__name__)

CONTACT_KEYWORDS: Tuple[str, ...] = (
    "kontakt",
    "kontakty",
    "napiste-nam",
    "napiste_nam",
    "o-nas",
    "o_nas",
    "contact",
    "contacts",
    "contact-us",
    "contact_us",
    "about",
    "about-us",
    "about_us",
    "impressum",
)

# Anchor texts are matched with spaces instead of separators ("napište nám")
ANCHOR_KEYWORDS: Tuple[str, ...] = ("kontakt", "napište nám", "napiste nam", "o nás", "o nas", "contact", "about", "impressum")

_SKIPPED_SCHEMES = ("javascript:", "mailto:", "tel:")


def _host(netloc: str) -> str:
    host = netloc.lower().split("@")[-1].split(":")[0]
    return host[4:] if host.startswith("www.") else host


def base_url(url: str) -> str:
    """Scheme and host of ``url`` (``https://example.cz``)."""
    parsed = urlparse(url)
    return f"{parsed.scheme or 'https'}://{parsed.netloc}"


def is_contact_link(href: str, text: str) -> bool:
    path = urlparse(href).path.lower()
    if any(keyword in path for keyword in CONTACT_KEYWORDS):
        return True
    label = " ".join(text.lower().split())
    return any(keyword in label for keyword in ANCHOR_KEYWORDS)


def find_contact_page_urls(html: str, page_url: str, *, limit: int = 3) -> List[str]:
    """
    Return up to ``limit`` absolute contact page URLs on the same host as
    ``page_url``, in document order, without duplicates.

    Relative links are resolved against the page's scheme and host. The page
    itself is never returned.
    """
    if not html or limit <= 0:
        return []

    base = base_url(page_url)
    own_host = _host(urlparse(page_url).netloc)
    own_page = urldefrag(page_url)[0].rstrip("/")

    soup = BeautifulSoup(html, "html.parser")
    urls: List[str] = []
    for anchor in soup.select("a[href]"):
        href = str(anchor.get("href", "")).strip()
        if not href or href.startswith("#") or href.lower().startswith(_SKIPPED_SCHEMES):
            continue
        if not is_contact_link(href, anchor.get_text(" ")):
            continue

        absolute = urldefrag(urljoin(base + "/", href))[0]
        parsed = urlparse(absolute)
        if parsed.scheme not in ("http", "https") or _host(parsed.netloc) != own_host:
            continue
        if absolute.rstrip("/") == own_page or absolute in urls:
            continue

        urls.append(absolute)
        if len(urls) >= limit:
            break

    logger.debug("Contact page discovery finished", page_url=page_url, found=len(urls))
    return urls
