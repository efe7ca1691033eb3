"""
Named textual signatures shared by the extractors.

Every extractor keeps its knowledge as a table of ``Signature`` records so
that each pattern can be exercised on its own.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, Pattern


@dataclass(frozen=True)
class Signature:
    """A named pattern and the capture group holding its value."""

    name: str
    pattern: Pattern[str]
    group: int | str = 0

    def values(self, text: str) -> Iterator[str]:
        """Yield the captured value of every non-overlapping match."""
        for match in self.pattern.finditer(text):
            value = match.group(self.group)
            if value:
                yield value


def signature(name: str, regex: str, *, group: int | str = 0, flags: int = re.IGNORECASE) -> Signature:
    """Compile ``regex`` into a ``Signature``."""
    return Signature(name=name, pattern=re.compile(regex, flags), group=group)

