"""
Email address extraction.

Candidates are collected from three channels in decreasing order of
confidence (``mailto:`` links, attribute-obfuscated addresses, free text),
validated against the placeholder and asset-filename exclusion lists, then
ordered by how likely the local part is to reach a general inbox.
"""

from __future__ import annotations

import re
from typing import FrozenSet, Iterator, List, Tuple
from urllib.parse import unquote

from .markup import decode_entities, strip_non_content
from .signatures import Signature, signature

MAILTO = signature("mailto_link", r"mailto:([^\"'>\s?]+)", group=1)

# Local part and domain split across two attributes, e.g. data-mail="info" data-domain="firma.cz"
OBFUSCATED_MAIL_FIRST = signature(
    "data_mail_then_domain",
    r"\bdata-mail\s*=\s*[\"']([^\"'@\s]+)[\"'][^>]*?\bdata-domain\s*=\s*[\"']([^\"'@\s]+)[\"']",
)
OBFUSCATED_DOMAIN_FIRST = signature(
    "data_domain_then_mail",
    r"\bdata-domain\s*=\s*[\"']([^\"'@\s]+)[\"'][^>]*?\bdata-mail\s*=\s*[\"']([^\"'@\s]+)[\"']",
)

# Start guard and length caps keep the scan linear on long unbroken tokens
FREE_TEXT = signature(
    "free_text",
    r"(?<![a-zA-Z0-9._%+\-])[a-zA-Z0-9._%+\-]{1,64}@[a-zA-Z0-9.\-]{1,253}\.[a-zA-Z]{2,63}(?![a-zA-Z])",
)

_VALID_EMAIL = re.compile(
    r"^[a-z0-9!#$%&'*+/=?^_`{|}~\-]+(?:\.[a-z0-9!#$%&'*+/=?^_`{|}~\-]+)*"
    r"@(?:[a-z0-9](?:[a-z0-9\-]{0,61}[a-z0-9])?\.)+[a-z]{2,63}$"
)

# Placeholder, testing and vendor domains (exact or parent-domain match)
IGNORED_DOMAINS: Tuple[str, ...] = (
    "example.com",
    "example.org",
    "example.net",
    "domain.tld",
    "domain.com",
    "domena.cz",
    "yourdomain.com",
    "vasedomena.cz",
    "email.com",
    "wixpress.com",
    "sentry.io",
    "sentry-next.wixpress.com",
    "placeholder.com",
    "test.com",
    "localhost",
)

# File extensions that look like top-level domains in asset names such as "image@2x.webp"
ASSET_EXTENSIONS: FrozenSet[str] = frozenset(
    {
        "png",
        "jpg",
        "jpeg",
        "gif",
        "webp",
        "svg",
        "ico",
        "bmp",
        "tiff",
        "avif",
        "css",
        "js",
        "map",
        "woff",
        "woff2",
        "ttf",
        "eot",
        "otf",
        "mp4",
        "webm",
        "pdf",
    }
)

_NUMERIC_FILENAME = (
    re.compile(r"^\d+\.\w+$"),
    re.compile(r"^[\dx]+\.\d+\.\w+$"),
)

PLACEHOLDER_LOCAL_PARTS: FrozenSet[str] = frozenset(
    {"your", "youremail", "email", "name", "user", "xxx", "test", "sample", "demo", "jmeno", "vas"}
)

# Index is the priority tier; anything unmatched falls into len(PRIORITY_PREFIXES)
PRIORITY_PREFIXES: Tuple[Tuple[str, ...], ...] = (
    ("info", "kontakt", "contact", "objednavky", "obchod", "office", "podpora", "support", "recepce"),
    ("sales", "marketing", "fakturace", "uctarna", "hr", "jobs", "career", "servis", "service"),
)


def clean_email(raw: str) -> str:
    """Percent-decode, trim trailing punctuation and lower-case a candidate."""
    value = unquote(raw).strip()
    value = value.rstrip(".,;:!?)")
    return value.strip().lower()


def is_valid_email(email: str) -> bool:
    """Return True when ``email`` is well formed and not a placeholder or asset name."""
    if not _VALID_EMAIL.match(email):
        return False

    local_part, _, domain = email.partition("@")

    for ignored in IGNORED_DOMAINS:
        if domain == ignored or domain.endswith("." + ignored):
            return False

    if domain.rsplit(".", 1)[-1] in ASSET_EXTENSIONS:
        return False

    if any(p.match(domain) for p in _NUMERIC_FILENAME):
        return False

    return local_part not in PLACEHOLDER_LOCAL_PARTS


def email_priority(email: str) -> int:
    local_part = email.split("@", 1)[0]
    for tier, prefixes in enumerate(PRIORITY_PREFIXES):
        if local_part.startswith(prefixes):
            return tier
    return len(PRIORITY_PREFIXES)


class EmailExtractor:
    """Extracts validated, priority-ordered email addresses from HTML."""

    name = "email"

    def extract(self, html: str) -> List[str]:
        if not html:
            return []

        decoded = decode_entities(html)

        seen: set[str] = set()
        emails: List[str] = []
        for candidate in self._candidates(decoded):
            email = clean_email(candidate)
            if email in seen or not is_valid_email(email):
                continue
            seen.add(email)
            emails.append(email)

        # sorted() is stable, so first-seen order survives within a tier
        return sorted(emails, key=email_priority)

    def _candidates(self, decoded: str) -> Iterator[str]:
        yield from MAILTO.values(decoded)
        yield from _obfuscated(OBFUSCATED_MAIL_FIRST, decoded, local_group=1, domain_group=2)
        yield from _obfuscated(OBFUSCATED_DOMAIN_FIRST, decoded, local_group=2, domain_group=1)
        yield from FREE_TEXT.values(strip_non_content(decoded))


def _obfuscated(sig: Signature, text: str, *, local_group: int, domain_group: int) -> Iterator[str]:
    for match in sig.pattern.finditer(text):
        yield f"{match.group(local_group)}@{match.group(domain_group)}"
