"""
Phone number extraction for the Czech numbering plan.

Every hit is reduced to the canonical ``+420XXXXXXXXX`` form.
"""

from __future__ import annotations

import re
from typing import FrozenSet, List, Optional, Tuple

from .markup import decode_entities
from .signatures import Signature, signature

COUNTRY_PREFIX = "+420"
INTERNATIONAL_ACCESS = "00420"
LOCAL_LENGTH = 9

_SEP = r"[\s.\-]?"

# Scan order is report order
PHONE_SIGNATURES: Tuple[Signature, ...] = (
    signature("international", rf"\+420{_SEP}\d{{3}}{_SEP}\d{{3}}{_SEP}\d{{3}}(?!\d)"),
    signature("international_without_plus", rf"(?<!\d)00420{_SEP}\d{{3}}{_SEP}\d{{3}}{_SEP}\d{{3}}(?!\d)"),
    signature("local_grouped", rf"(?<![0-9+])\d{{3}}{_SEP}\d{{3}}{_SEP}\d{{3}}(?![0-9])"),
    signature("local_compact", r"(?<![0-9+])\d{9}(?![0-9])"),
    signature("tel_uri", r"tel:\s*(\+?[0-9][0-9\s.\-/()]*[0-9])", group=1),
)

# Leading digit of the local number: 2 Prague, 3-5 regional landlines, 6-7 mobile
VALID_PREFIXES: FrozenSet[str] = frozenset({"2", "3", "4", "5", "6", "7"})

PLACEHOLDER_NUMBERS: FrozenSet[str] = frozenset({"123456789", "234567890", "987654321"})

_REPEATED_DIGIT = re.compile(r"^(\d)\1{8}$")
_CANONICAL = re.compile(r"^\+420\d{9}$")
_NOT_DIALABLE = re.compile(r"[^0-9+]")


def normalize_phone(raw: str) -> Optional[str]:
    """Reduce ``raw`` to ``+420XXXXXXXXX`` or return None when it cannot be."""
    phone = re.sub(r"^tel:\s*", "", raw.strip(), flags=re.IGNORECASE)
    phone = _NOT_DIALABLE.sub("", phone)

    if phone.startswith(INTERNATIONAL_ACCESS):
        phone = COUNTRY_PREFIX + phone[len(INTERNATIONAL_ACCESS) :]

    if not phone.startswith("+"):
        if len(phone) != LOCAL_LENGTH:
            return None
        phone = COUNTRY_PREFIX + phone

    if len(phone) != len(COUNTRY_PREFIX) + LOCAL_LENGTH or not phone.startswith(COUNTRY_PREFIX):
        return None
    return phone


def is_valid_phone(phone: str) -> bool:
    """Check a canonical number against the numbering plan and known fakes."""
    if not _CANONICAL.match(phone):
        return False

    local = phone[len(COUNTRY_PREFIX) :]
    if local[0] not in VALID_PREFIXES:
        return False
    if _REPEATED_DIGIT.match(local):
        return False
    return local not in PLACEHOLDER_NUMBERS


class PhoneExtractor:
    """Extracts canonical phone numbers in the order they are found."""

    name = "phone"

    def extract(self, html: str) -> List[str]:
        if not html:
            return []

        text = decode_entities(html)
        phones: List[str] = []
        for sig in PHONE_SIGNATURES:
            for match in sig.values(text):
                phone = normalize_phone(match)
                if phone is not None and is_valid_phone(phone) and phone not in phones:
                    phones.append(phone)
        return phones
