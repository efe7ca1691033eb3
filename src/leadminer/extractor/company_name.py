"""
Company Name Extractor - Legal Entity Name Detection

Combines five signal channels, highest confidence first:

1. Schema.org Organization / LocalBusiness names (JSON-LD and microdata)
2. The ``og:site_name`` meta tag
3. Names followed by a legal form suffix (s.r.o., a.s., ...) in the page text
4. Copyright notices (``© 2024 Firma s.r.o.``)
5. Fragments of the page title that look like a company name
"""

from __future__ import annotations

import json
import re
from typing import Any, Iterator, List, Optional, Tuple

import structlog

from .markup import decode_entities, visible_text

logger = structlog.get_logger(__name__)

PRIORITY_STRUCTURED_DATA = 100
PRIORITY_SITE_NAME = 90
PRIORITY_LEGAL_FORM = 80
PRIORITY_COPYRIGHT = 70
PRIORITY_TITLE = 50

ORGANIZATION_TYPES = frozenset(
    {
        "Organization",
        "LocalBusiness",
        "Corporation",
        "Company",
        "Store",
        "OnlineStore",
        "Restaurant",
        "Hotel",
        "ProfessionalService",
        "MedicalBusiness",
        "EducationalOrganization",
        "NGO",
    }
)

# Punctuated legal forms must carry their internal periods ("s.r.o", not "sro")
_PUNCTUATED_FORMS = (
    r"spol\.\s?s\s?r\.\s?o\b\.?",
    r"s\.\s?r\.\s?o\b\.?",
    r"v\.\s?o\.\s?s\b\.?",
    r"o\.\s?p\.\s?s\b\.?",
    r"a\.\s?s\b\.?",
    r"k\.\s?s\b\.?",
    r"z\.\s?s\b\.?",
    r"s\.\s?p\b\.?",
    r"z\.\s?ú\b\.?",
    r"n\.\s?o\b\.?",
)
# Bare forms are only recognised in upper case at a word boundary
_BARE_FORMS = ("SE", "SRO", "LTD", "INC", "LLC", "GmbH")

LEGAL_FORM = rf"(?:(?i:{'|'.join(_PUNCTUATED_FORMS)})|\b(?:{'|'.join(_BARE_FORMS)})\b)"

_UPPER = "A-ZÁČĎÉĚÍŇÓŘŠŤÚŮÝŽÄÖÜ"
# Capped so a long unbroken token cannot trigger quadratic backtracking
_WORD = rf"[{_UPPER}0-9][\w&'’\-]{{0,40}}"
_CONNECTOR = r"(?:&|a|and|und|-|–)"

LEGAL_NAME_PATTERN = re.compile(
    rf"(?<![\w])(?P<name>{_WORD}(?:[ \t]+(?:{_WORD}|{_CONNECTOR})){{0,5}}?)"
    rf"(?P<sep>[ \t]*,[ \t]*|[ \t]+)(?P<form>{LEGAL_FORM})(?![\w])"
)
_LEGAL_FORM_ANYWHERE = re.compile(rf"(?<![\w]){LEGAL_FORM}(?![\w])")

# Capitalised words that commonly precede a name in running text
_LEADING_NOISE = frozenset(
    {"kontakt", "kontakty", "contact", "provozovatel", "dodavatel", "operator", "welcome", "vítejte", "copyright"}
)

_JSON_LD = re.compile(
    r"<script[^>]+type\s*=\s*[\"']application/ld\+json[\"'][^>]*>(.*?)</script\s*>",
    re.IGNORECASE | re.DOTALL,
)
_MICRODATA_SCOPE = re.compile(
    r"<[^>]+itemtype\s*=\s*[\"'][^\"']*(?:Organization|LocalBusiness|Corporation)[^\"']*[\"'][^>]*>",
    re.IGNORECASE,
)
_MICRODATA_NAME = (
    re.compile(r"<[^>]+itemprop\s*=\s*[\"']name[\"'][^>]*\bcontent\s*=\s*[\"']([^\"']+)[\"']", re.IGNORECASE),
    re.compile(r"<[^>]+itemprop\s*=\s*[\"']name[\"'][^>]*>\s*([^<]+?)\s*<", re.IGNORECASE),
)
_MICRODATA_WINDOW = 4000

_SITE_NAME = (
    re.compile(
        r"<meta[^>]+(?:property|name)\s*=\s*[\"']og:site_name[\"'][^>]*?content\s*=\s*[\"']([^\"']+)[\"']",
        re.IGNORECASE,
    ),
    re.compile(
        r"<meta[^>]+content\s*=\s*[\"']([^\"']+)[\"'][^>]*?(?:property|name)\s*=\s*[\"']og:site_name[\"']",
        re.IGNORECASE,
    ),
)

_COPYRIGHT = re.compile(
    r"(?:©|\(c\)|copyright)\s*(?:©\s*)?(?:\d{4}\s*[-–]\s*)?\d{4}\s*[-–:]?\s*(?P<fragment>[^\n|]+)",
    re.IGNORECASE,
)
_COPYRIGHT_CUT = re.compile(r"\s*(?:[,.|]|\ball rights\b|\bvšechna práva\b|\bvsechna prava\b)", re.IGNORECASE)

_TITLE = re.compile(r"<title[^>]*>([^<]+)</title\s*>", re.IGNORECASE)
_TITLE_SEPARATORS = re.compile(r"\s+[-–—]\s+|\s*[|·•»:]\s*")

_REJECT_PATTERNS = (
    re.compile(
        r"^(?:home|homepage|úvod|uvod|kontakt|kontakty|o nás|o nas|about|about us|contact|contact us|services|"
        r"služby|sluzby|produkty|products|blog|novinky|news|e-shop|eshop)$",
        re.IGNORECASE,
    ),
    re.compile(r"^(?:hlavní strana|hlavní stránka|domů|domovská stránka|welcome|vítejte)$", re.IGNORECASE),
    re.compile(r"^(?:menu|navigation|navigace|footer|header|search|hledat|košík|cart|login|přihlášení)$", re.IGNORECASE),
    re.compile(r"^\d+$"),
    re.compile(r"^https?://", re.IGNORECASE),
    re.compile(r"[<>=\"{}]|\b(?:class|href|src|style)\s*="),
    re.compile(r"all rights reserved|všechna práva vyhrazena|vsechna prava vyhrazena|^copyright\b", re.IGNORECASE),
)

Candidate = Tuple[str, int]


def clean_company_name(name: str) -> str:
    """Collapse whitespace and trim separators, keeping the periods of legal forms."""
    name = re.sub(r"\s+", " ", name)
    name = name.strip(" \t\n\r\x00\x0b,;:-–—|")
    name = re.sub(r",\s*,", ",", name)
    return name.strip()


def is_valid_company_name(name: Any) -> bool:
    if not isinstance(name, str):
        return False
    if not 2 <= len(name) <= 200:
        return False
    if not re.search(r"[^\W\d_]", name):
        return False
    return not any(p.search(name) for p in _REJECT_PATTERNS)


def looks_like_company_name(name: str) -> bool:
    """A title fragment qualifies when it carries a legal form or is a short proper noun."""
    if _LEGAL_FORM_ANYWHERE.search(name):
        return True
    return bool(re.match(rf"[{_UPPER}]", name)) and len(name) <= 50


class CompanyNameExtractor:
    """Extracts candidate legal company names ordered by confidence."""

    name = "company_name"

    def extract(self, html: str) -> List[str]:
        if not html:
            return []

        decoded = decode_entities(html)
        text = visible_text(html)

        candidates: List[Candidate] = []
        candidates.extend((n, PRIORITY_STRUCTURED_DATA) for n in self._structured_data_names(html))
        candidates.extend((n, PRIORITY_SITE_NAME) for n in self._site_names(decoded))
        candidates.extend((n, PRIORITY_LEGAL_FORM) for n in self._legal_form_names(text))
        candidates.extend((n, PRIORITY_COPYRIGHT) for n in self._copyright_names(text))
        candidates.extend((n, PRIORITY_TITLE) for n in self._title_names(decoded))

        seen: set[str] = set()
        names: List[str] = []
        for name, _ in sorted(candidates, key=lambda c: -c[1]):
            key = name.strip().casefold()
            if key not in seen:
                seen.add(key)
                names.append(name)
        return names

    def extract_single(self, html: str) -> Optional[str]:
        names = self.extract(html)
        return names[0] if names else None

    # --- channels ---

    def _structured_data_names(self, html: str) -> Iterator[str]:
        for block in _JSON_LD.findall(html):
            try:
                data = json.loads(block.strip())
            except (ValueError, RecursionError) as e:
                logger.debug("Skipping malformed JSON-LD block", error=str(e))
                continue
            for item in _json_ld_items(data):
                if not _is_organization(item.get("@type")):
                    continue
                name = item.get("name")
                if isinstance(name, list):
                    name = name[0] if name else None
                if isinstance(name, str):
                    name = clean_company_name(decode_entities(name))
                    if is_valid_company_name(name):
                        yield name

        for scope in _MICRODATA_SCOPE.finditer(html):
            window = html[scope.end() : scope.end() + _MICRODATA_WINDOW]
            for pattern in _MICRODATA_NAME:
                found = pattern.search(window)
                if found:
                    name = clean_company_name(decode_entities(found.group(1)))
                    if is_valid_company_name(name):
                        yield name
                    break

    def _site_names(self, decoded: str) -> Iterator[str]:
        for pattern in _SITE_NAME:
            found = pattern.search(decoded)
            if found:
                name = clean_company_name(found.group(1))
                if is_valid_company_name(name):
                    yield name
                return

    def _legal_form_names(self, text: str) -> Iterator[str]:
        for line in text.split("\n"):
            for match in LEGAL_NAME_PATTERN.finditer(line):
                name = clean_company_name(_join_legal_name(match))
                if is_valid_company_name(name):
                    yield name

    def _copyright_names(self, text: str) -> Iterator[str]:
        for match in _COPYRIGHT.finditer(text):
            fragment = match.group("fragment")
            legal = LEGAL_NAME_PATTERN.search(fragment)
            if legal is not None:
                name = _join_legal_name(legal)
            else:
                name = _COPYRIGHT_CUT.split(fragment, maxsplit=1)[0]
            name = clean_company_name(name)
            if is_valid_company_name(name):
                yield name

    def _title_names(self, decoded: str) -> Iterator[str]:
        found = _TITLE.search(decoded)
        if not found:
            return
        for part in _TITLE_SEPARATORS.split(found.group(1).strip()):
            part = clean_company_name(part)
            if is_valid_company_name(part) and looks_like_company_name(part):
                yield part


def _join_legal_name(match: re.Match[str]) -> str:
    words = match.group("name").split()
    # Drop label words and years ("© 2024 Firma s.r.o.") in front of the name
    while len(words) > 1 and (words[0].casefold() in _LEADING_NOISE or words[0].isdigit()):
        words.pop(0)
    separator = ", " if "," in match.group("sep") else " "
    return f"{' '.join(words)}{separator}{match.group('form').strip()}"


def _json_ld_items(data: Any) -> Iterator[dict]:
    if isinstance(data, list):
        for entry in data:
            yield from _json_ld_items(entry)
    elif isinstance(data, dict):
        graph = data.get("@graph")
        if isinstance(graph, list):
            yield from _json_ld_items(graph)
        else:
            yield data


def _is_organization(item_type: Any) -> bool:
    types = item_type if isinstance(item_type, list) else [item_type]
    return any(isinstance(t, str) and t.rsplit("/", 1)[-1] in ORGANIZATION_TYPES for t in types)
