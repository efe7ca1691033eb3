"""
Social media profile link extraction.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, FrozenSet, Pattern, Tuple


@dataclass(frozen=True)
class SocialSignature:
    """URL shape of one platform plus the path segments that are never profiles."""

    platform: str
    pattern: Pattern[str]
    ignored: FrozenSet[str] = frozenset()

    def profile(self, match: re.Match[str]) -> str:
        return match.group("profile")


def _social(platform: str, regex: str, ignored: Tuple[str, ...] = ()) -> SocialSignature:
    return SocialSignature(
        platform=platform,
        pattern=re.compile(regex, re.IGNORECASE),
        ignored=frozenset(i.lower() for i in ignored),
    )


SOCIAL_SIGNATURES: Tuple[SocialSignature, ...] = (
    _social(
        "facebook",
        r"https?://(?:www\.|m\.)?facebook\.com/(?P<profile>[a-zA-Z0-9._\-]+)/?",
        (
            "sharer.php",
            "sharer",
            "share",
            "share.php",
            "dialog",
            "plugins",
            "home.php",
            "profile.php",
            "pages",
            "groups",
            "events",
            "watch",
            "marketplace",
            "gaming",
            "tr",
        ),
    ),
    _social(
        "instagram",
        r"https?://(?:www\.)?instagram\.com/(?P<profile>[a-zA-Z0-9._]+)/?",
        ("explore", "p", "reel", "reels", "stories", "tv", "accounts"),
    ),
    # The path discriminator tells company pages (/company/) from personal ones (/in/)
    _social(
        "linkedin",
        r"https?://(?:[a-z]{2,3}\.)?linkedin\.com/(?P<kind>company|in)/(?P<profile>[a-zA-Z0-9\-_%]+)/?",
        ("shareArticle", "feed", "jobs", "messaging", "notifications"),
    ),
    _social(
        "twitter",
        r"https?://(?:www\.)?(?:twitter|x)\.com/(?P<profile>[a-zA-Z0-9_]+)/?",
        ("intent", "share", "home", "search", "explore", "i", "hashtag", "login"),
    ),
    _social(
        "youtube",
        r"https?://(?:www\.)?youtube\.com/(?P<kind>channel/|c/|user/|@)(?P<profile>[a-zA-Z0-9\-_.]+)/?",
        ("watch", "results", "feed", "playlist", "shorts"),
    ),
    _social(
        "tiktok",
        r"https?://(?:www\.)?tiktok\.com/@(?P<profile>[a-zA-Z0-9._]+)/?",
    ),
    _social(
        "pinterest",
        r"https?://(?:[a-z]{2}\.|www\.)?pinterest\.[a-z.]+/(?P<profile>[a-zA-Z0-9_]+)/?",
        ("pin", "search", "ideas", "today"),
    ),
)


def is_valid_profile(sig: SocialSignature, profile: str) -> bool:
    return len(profile) >= 2 and profile.lower() not in sig.ignored


def clean_profile_url(url: str) -> str:
    """Force https and drop the query string and trailing slashes."""
    url = url.split("?", 1)[0].split("#", 1)[0].rstrip("/")
    _, _, rest = url.partition("://")
    return "https://" + rest


class SocialProfileExtractor:
    """Returns the first real profile URL per platform."""

    name = "social"

    def extract(self, html: str) -> Dict[str, str]:
        profiles: Dict[str, str] = {}
        if not html:
            return profiles

        for sig in SOCIAL_SIGNATURES:
            for match in sig.pattern.finditer(html):
                if is_valid_profile(sig, sig.profile(match)):
                    profiles[sig.platform] = clean_profile_url(match.group(0))
                    break
        return profiles
