"""
Czech company registration number (IČO) extraction and validation.
"""

from __future__ import annotations

import re
from typing import Any, List, Optional, Tuple

from .markup import decode_entities, visible_text
from .signatures import Signature, signature

CHECKSUM_WEIGHTS: Tuple[int, ...] = (8, 7, 6, 5, 4, 3, 2)

_EIGHT_DIGITS = re.compile(r"[0-9]{8}")
_NUMBER = r"(\d{8})(?!\d)"

REGISTRATION_SIGNATURES: Tuple[Signature, ...] = (
    # IČO: 12345678, IČ: 12345678, ICO 12345678
    signature("ico_label", rf"(?<![^\W\d_])I[ČC]O?\s*[:\s]\s*{_NUMBER}", group=1),
    signature("ic_label", rf"(?<![^\W\d_])I[ČC]\s+{_NUMBER}", group=1),
    signature("identification_number", rf"identifika[čc]n[ií]\s+[čc][ií]slo\s*[:\s]\s*{_NUMBER}", group=1),
    signature("company_id", rf"company\s*id\s*[:\s]\s*{_NUMBER}", group=1),
    signature("registration_number", rf"registra(?:[čc]n[ií]\s+[čc][ií]slo|tion\s+number)\s*[:\s]\s*{_NUMBER}", group=1),
)


def is_valid_checksum(value: Any) -> bool:
    """
    Validate an IČO with the modulo 11 check digit.

    The first seven digits are weighted 8..2 and summed. The eighth digit
    must be 1 when the remainder is 0, 0 when it is 1, else 11 - remainder.
    Anything other than exactly eight ASCII digits is invalid.
    """
    if not isinstance(value, str) or not _EIGHT_DIGITS.fullmatch(value):
        return False

    total = sum(int(digit) * weight for digit, weight in zip(value, CHECKSUM_WEIGHTS))
    remainder = total % 11
    if remainder == 0:
        expected = 1
    elif remainder == 1:
        expected = 0
    else:
        expected = 11 - remainder
    return int(value[7]) == expected


class RegistrationNumberExtractor:
    """Finds the first labelled registration number whose check digit is valid."""

    name = "registration_number"

    def extract(self, html: str) -> List[str]:
        """Return a list holding the single valid number found, or an empty list."""
        if not html:
            return []

        # Labels are often wrapped in their own element (<strong>IČO:</strong> 12345678),
        # so fall back to the text content when the raw markup yields nothing.
        for text in (decode_entities(html), visible_text(html).replace("\n", " ")):
            found = self._scan(text)
            if found is not None:
                return [found]
        return []

    def extract_single(self, html: str) -> Optional[str]:
        results = self.extract(html)
        return results[0] if results else None

    @staticmethod
    def _scan(text: str) -> Optional[str]:
        for sig in REGISTRATION_SIGNATURES:
            for candidate in sig.values(text):
                if is_valid_checksum(candidate):
                    return candidate
        return None
