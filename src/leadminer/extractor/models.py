"""
Data models for extraction results.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Iterable, Mapping, Optional, Tuple


def _union(existing: Tuple[str, ...], extra: Iterable[str]) -> Tuple[str, ...]:
    merged = list(existing)
    for item in extra:
        if item not in merged:
            merged.append(item)
    return tuple(merged)


@dataclass(slots=True, frozen=True)
class ExtractionResult:
    """Immutable aggregate of every signal extracted from one page."""

    emails: Tuple[str, ...] = ()
    phones: Tuple[str, ...] = ()
    registration_number: Optional[str] = None
    cms: Optional[str] = None
    technologies: FrozenSet[str] = frozenset()
    social_profiles: Mapping[str, str] = field(default_factory=dict)
    company_name: Optional[str] = None

    def __post_init__(self) -> None:
        # Freeze containers so the aggregate cannot be mutated through them
        object.__setattr__(self, "emails", tuple(self.emails))
        object.__setattr__(self, "phones", tuple(self.phones))
        object.__setattr__(self, "technologies", frozenset(self.technologies))
        object.__setattr__(self, "social_profiles", MappingProxyType(dict(self.social_profiles)))

    def __hash__(self) -> int:
        # mappingproxy is unhashable; hash the profiles as sorted pairs
        return hash(
            (
                self.emails,
                self.phones,
                self.registration_number,
                self.cms,
                self.technologies,
                tuple(sorted(self.social_profiles.items())),
                self.company_name,
            )
        )

    @property
    def primary_email(self) -> Optional[str]:
        return self.emails[0] if self.emails else None

    @property
    def primary_phone(self) -> Optional[str]:
        return self.phones[0] if self.phones else None

    def has_contact_data(self) -> bool:
        return bool(self.emails or self.phones or self.registration_number or self.company_name)

    def has_technology_data(self) -> bool:
        return self.cms is not None or bool(self.technologies)

    def merge_contacts(self, emails: Iterable[str] = (), phones: Iterable[str] = ()) -> ExtractionResult:
        """Return a copy whose emails and phones are extended, keeping first-seen order."""
        return replace(
            self,
            emails=_union(self.emails, emails),
            phones=_union(self.phones, phones),
            social_profiles=dict(self.social_profiles),
        )

    def to_metadata(self) -> Dict[str, Any]:
        """
        Flat projection for persistence. Keys are present only for non-empty
        fields; technologies are emitted as a sorted list.
        """
        metadata: Dict[str, Any] = {}
        if self.emails:
            metadata["extracted_emails"] = list(self.emails)
        if self.phones:
            metadata["extracted_phones"] = list(self.phones)
        if self.registration_number:
            metadata["extracted_registration_number"] = self.registration_number
        if self.cms:
            metadata["detected_cms"] = self.cms
        if self.technologies:
            metadata["detected_technologies"] = sorted(self.technologies)
        if self.social_profiles:
            metadata["social_media"] = dict(self.social_profiles)
        if self.company_name:
            metadata["extracted_company_name"] = self.company_name
        return metadata


class FetchFailure(str, Enum):
    """Why a URL-based extraction produced no result."""

    NOT_CONFIGURED = "not_configured"
    HTTP_STATUS = "http_status"
    TRANSPORT = "transport"
    TIMEOUT = "timeout"


@dataclass(slots=True, frozen=True)
class FetchOutcome:
    """Result of a URL-based extraction together with a diagnostic on failure."""

    result: Optional[ExtractionResult] = None
    error: Optional[str] = None
    failure: Optional[FetchFailure] = None

    @property
    def ok(self) -> bool:
        return self.result is not None


@dataclass(slots=True, frozen=True)
class FetchResponse:
    """What a page fetcher hands back: final URL, status, grouped headers and body."""

    url: str
    status: int
    headers: Mapping[str, Tuple[str, ...]] = field(default_factory=dict)
    body: str = ""
