"""
Lightweight markup helpers.

Only limited tag stripping is needed by the extractors; no document tree is
kept around after a helper returns.
"""

from __future__ import annotations

import html
import re
from typing import Dict, Mapping, Sequence, Tuple, Union

import structlog
from bs4 import BeautifulSoup, ParserRejectedMarkup

logger = structlog.get_logger(__name__)

HeaderValues = Union[str, Sequence[str]]

# Elements whose contents never carry visible contact data
_NON_CONTENT_BLOCKS = re.compile(r"<(script|style|noscript|template)\b[^>]*>.*?</\1\s*>", re.IGNORECASE | re.DOTALL)

# Asset references that collide with the email pattern (e.g. ``logo@2x.webp``)
_ASSET_REFERENCES = (
    re.compile(r"<img\b[^>]*>", re.IGNORECASE | re.DOTALL),
    re.compile(r"<source\b[^>]*>", re.IGNORECASE | re.DOTALL),
    re.compile(r"\bsrcset\s*=\s*[\"'][^\"']*[\"']", re.IGNORECASE),
    re.compile(r"background(?:-image)?\s*:\s*url\([^)]*\)", re.IGNORECASE),
    re.compile(r"\bdata-(?:src|background|bg|image|srcset)\s*=\s*[\"'][^\"']*[\"']", re.IGNORECASE),
)

_TAG = re.compile(r"<[^>]+>")
_BLANK_LINES = re.compile(r"\s*\n\s*")
_SPACES = re.compile(r"[ \t\r\f\v\u00a0]+")


def decode_entities(text: str) -> str:
    """Decode HTML character references (``&#64;``, ``&copy;``, ``&nbsp;``...)."""
    return html.unescape(text) if "&" in text else text


def strip_non_content(markup: str) -> str:
    """Remove scripts, styles, images and asset-bearing attributes from ``markup``."""
    cleaned = _NON_CONTENT_BLOCKS.sub(" ", markup)
    for pattern in _ASSET_REFERENCES:
        cleaned = pattern.sub(" ", cleaned)
    return cleaned


def visible_text(markup: str) -> str:
    """
    Return the text content of ``markup`` with one line per block of text.

    Entities are decoded. Scripts, styles and templates are dropped.
    """
    if not markup:
        return ""
    cleaned = _NON_CONTENT_BLOCKS.sub("\n", markup)
    try:
        soup = BeautifulSoup(cleaned, "html.parser")
        text = soup.get_text("\n")
    except (ParserRejectedMarkup, AssertionError, ValueError, RecursionError) as e:
        # html.parser gives up on some broken declarations; fall back to a plain tag strip
        logger.debug("Falling back to regex tag stripping", error=str(e))
        text = decode_entities(_TAG.sub("\n", cleaned))
    text = _SPACES.sub(" ", text)
    return _BLANK_LINES.sub("\n", text).strip()


def normalize_headers(headers: Mapping[str, HeaderValues] | None) -> Dict[str, Tuple[str, ...]]:
    """Lower-case header names and coerce every value to a tuple of strings."""
    normalized: Dict[str, Tuple[str, ...]] = {}
    if not headers:
        return normalized
    for name, values in headers.items():
        key = str(name).strip().lower()
        if isinstance(values, (str, bytes)):
            items: Tuple[str, ...] = (values.decode("latin-1") if isinstance(values, bytes) else values,)
        else:
            items = tuple(str(v) for v in values)
        normalized[key] = normalized.get(key, ()) + items
    return normalized
