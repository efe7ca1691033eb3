"""
CMS and technology fingerprinting.

CMS detection is an ordered first-match dispatch over ``CMS_RULES``: Czech
platforms come before the international ones because generic signatures
(e.g. PrestaShop's module paths) would otherwise shadow them. Technology
detection tests every signature independently.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Mapping, Optional, Pattern, Sequence, Tuple

from .markup import HeaderValues, normalize_headers


@dataclass(frozen=True)
class HeaderSignature:
    """Header name (a trailing ``-`` makes it a prefix) and a value pattern."""

    name: str
    value: Pattern[str] = re.compile(r".*")

    def matches(self, headers: Mapping[str, Tuple[str, ...]]) -> bool:
        wanted = self.name.lower()
        for header_name, values in headers.items():
            if header_name == wanted or (wanted.endswith("-") and header_name.startswith(wanted)):
                if any(self.value.search(v) for v in values):
                    return True
        return False


@dataclass(frozen=True)
class CmsRule:
    """Static fingerprint of one content management system."""

    cms: str
    content: Tuple[str, ...] = ()
    generator: Optional[Pattern[str]] = None
    headers: Tuple[HeaderSignature, ...] = ()
    _lowered: Tuple[str, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_lowered", tuple(c.lower() for c in self.content))

    def matches(self, lowered_html: str, generators: Sequence[str], headers: Mapping[str, Tuple[str, ...]]) -> bool:
        if any(c in lowered_html for c in self._lowered):
            return True
        if self.generator is not None and any(self.generator.search(g) for g in generators):
            return True
        return any(h.matches(headers) for h in self.headers)


def _gen(name: str) -> Pattern[str]:
    return re.compile(rf"\b{name}", re.IGNORECASE)


# Order is significant: the first rule with any matching signal wins.
CMS_RULES: Tuple[CmsRule, ...] = (
    # Czech platforms
    CmsRule(
        "vismo",
        content=("vismo.cz", "redakční systém vismo", "redakcni system vismo", "cms vismo"),
        generator=_gen("vismo"),
    ),
    CmsRule("shoptet", content=("/user/documents/", "shoptet.cz", "cdn.myshoptet.com"), generator=_gen("shoptet")),
    CmsRule("eshop-rychle", content=("eshop-rychle.cz", "cdn.eshop-rychle.cz")),
    CmsRule("webareal", content=("webareal.cz", "webareal.com")),
    CmsRule("webgarden", content=("webgarden.cz",)),
    CmsRule("estranky", content=("estranky.cz", "estranky.sk")),
    CmsRule("webzdarma", content=("webzdarma.cz",)),
    CmsRule("webnode", content=("webnode.cz", "webnode.com", "webnode.page"), generator=_gen("webnode")),
    # International platforms
    CmsRule(
        "wordpress",
        content=("/wp-content/", "/wp-includes/", "/wp-json/", "wp-emoji"),
        generator=_gen("wordpress"),
        headers=(HeaderSignature("link", re.compile(r"/wp-json/", re.IGNORECASE)),),
    ),
    CmsRule(
        "wix",
        content=("static.wixstatic.com", "_wix_", "wixsite.com", "wixpress.com"),
        generator=_gen("wix"),
        headers=(HeaderSignature("x-wix-request-id"),),
    ),
    CmsRule(
        "squarespace",
        content=("squarespace.com", "sqsp.net", "static1.squarespace.com"),
        generator=_gen("squarespace"),
    ),
    CmsRule(
        "shopify",
        content=("cdn.shopify.com", "myshopify.com", "shopify.com"),
        generator=_gen("shopify"),
        headers=(HeaderSignature("x-shopid"), HeaderSignature("x-shopify-")),
    ),
    CmsRule("joomla", content=("/media/jui/", "/media/system/js/"), generator=_gen("joomla")),
    CmsRule(
        "drupal",
        content=("/sites/default/files/", "/sites/all/modules/", "drupal.js", "Drupal.settings"),
        generator=_gen("drupal"),
        headers=(HeaderSignature("x-drupal-cache"), HeaderSignature("x-generator", re.compile(r"drupal", re.I))),
    ),
    CmsRule(
        "magento",
        content=("/static/frontend/", "mage/cookies.js", "Magento_"),
        headers=(HeaderSignature("x-magento-"),),
    ),
    CmsRule("opencart", content=("catalog/view/javascript/common.js", "index.php?route=product")),
    CmsRule(
        "prestashop",
        content=("/modules/ps_", "/themes/classic/", "prestashop.com", "PrestaShop"),
        generator=_gen("prestashop"),
        headers=(HeaderSignature("powered-by", re.compile(r"prestashop", re.IGNORECASE)),),
    ),
)


@dataclass(frozen=True)
class TechnologySignature:
    tag: str
    category: str
    pattern: Pattern[str]


def _tech(tag: str, category: str, regex: str) -> TechnologySignature:
    return TechnologySignature(tag, category, re.compile(regex, re.IGNORECASE))


TECHNOLOGY_SIGNATURES: Tuple[TechnologySignature, ...] = (
    # Frontend libraries
    _tech("jquery", "frontend_library", r"jquery[\-.]?\d|jquery\.min\.js|jquery\.js"),
    _tech("lodash", "frontend_library", r"lodash(?:\.min)?\.js|/lodash@"),
    _tech("moment", "frontend_library", r"moment(?:\.min)?\.js|/moment@"),
    _tech("axios", "frontend_library", r"axios(?:\.min)?\.js|/axios@"),
    _tech("modernizr", "frontend_library", r"modernizr"),
    _tech("gsap", "frontend_library", r"gsap(?:\.min)?\.js|/gsap@|/gsap/"),
    _tech("three_js", "frontend_library", r"three(?:\.min)?\.js"),
    _tech("leaflet", "frontend_library", r"leaflet(?:\.min)?\.(?:js|css)|/leaflet@"),
    _tech("mapbox", "frontend_library", r"api\.mapbox\.com|mapbox-gl"),
    # UI libraries
    _tech("bootstrap", "ui_library", r"bootstrap[\-.]?\d|bootstrap(?:\.bundle)?\.min\.(?:js|css)"),
    _tech("tailwind", "ui_library", r"tailwindcss|cdn\.tailwindcss\.com"),
    _tech("swiper", "ui_library", r"swiper(?:-bundle)?(?:\.min)?\.(?:js|css)|swiper-container|swiper-wrapper"),
    _tech("slick", "ui_library", r"slick(?:\.min)?\.(?:js|css)|slick-slider"),
    _tech("lightbox", "ui_library", r"lightbox(?:\.min)?\.(?:js|css)|data-lightbox"),
    _tech("fancybox", "ui_library", r"fancybox"),
    _tech("owl_carousel", "ui_library", r"owl\.carousel"),
    _tech("aos", "ui_library", r"\baos(?:\.min)?\.(?:js|css)|data-aos="),
    # JavaScript frameworks
    _tech("react", "js_framework", r"react[\-.]production|react[\-.]development|react(?:-dom)?\.min\.js|data-reactroot"),
    _tech("vue", "js_framework", r"vue[\-.]?\d|vue(?:\.global)?(?:\.min)?\.js|vue\.runtime|data-v-[0-9a-f]{8}"),
    _tech("angular", "js_framework", r"angular[\-.]?\d|angular\.min\.js|ng-app|ng-version="),
    _tech("next", "js_framework", r"/_next/"),
    _tech("nuxt", "js_framework", r"/_nuxt/"),
    _tech("gatsby", "js_framework", r"gatsby-|___gatsby"),
    # Build tooling
    _tech("webpack", "build_tool", r"webpack"),
    _tech("vite", "build_tool", r"/@vite/client|/assets/index-[\w\-]+\.js"),
    # Backend frameworks
    _tech("laravel", "backend_framework", r"laravel_session|laravel"),
    _tech("symfony", "backend_framework", r"/bundles/[\w\-/]+\.js|sf-toolbar|symfony"),
    # Analytics and tracking
    _tech(
        "google_analytics",
        "analytics",
        r"gtag\(|google-analytics\.com|\bga\.js|\banalytics\.js|googletagmanager\.com/gtag",
    ),
    _tech("google_tag_manager", "analytics", r"googletagmanager\.com/gtm"),
    _tech("facebook_pixel", "analytics", r"fbevents\.js|connect\.facebook\.net/[^\"']*/fbevents|fbq\("),
    _tech("hotjar", "analytics", r"hotjar\.com|static\.hotjar\.com"),
    _tech("matomo", "analytics", r"matomo\.js|piwik\.js"),
    # Fonts
    _tech("font_awesome", "font", r"font-?awesome"),
    _tech("google_fonts", "font", r"fonts\.googleapis\.com|fonts\.gstatic\.com"),
    # Infrastructure and services
    _tech("recaptcha", "service", r"google\.com/recaptcha|grecaptcha"),
    _tech("cloudflare", "infrastructure", r"cdnjs\.cloudflare\.com|cloudflare\.com|cf-beacon"),
)

_GENERATOR_META = (
    re.compile(r"<meta[^>]+name\s*=\s*[\"']generator[\"'][^>]*?content\s*=\s*[\"']([^\"']*)[\"']", re.IGNORECASE),
    re.compile(r"<meta[^>]+content\s*=\s*[\"']([^\"']*)[\"'][^>]*?name\s*=\s*[\"']generator[\"']", re.IGNORECASE),
)


@dataclass(frozen=True)
class TechnologyReport:
    """At most one CMS plus the set of recognised technology tags."""

    cms: Optional[str] = None
    technologies: FrozenSet[str] = frozenset()


def generator_values(html: str) -> List[str]:
    values: List[str] = []
    for pattern in _GENERATOR_META:
        values.extend(v.strip() for v in pattern.findall(html) if v.strip())
    return values


class TechnologyDetector:
    """Detects the CMS and frontend/analytics stack of a page."""

    name = "technology"

    def __init__(self, rules: Tuple[CmsRule, ...] = CMS_RULES) -> None:
        self.rules = rules

    def detect(self, html: str, headers: Mapping[str, HeaderValues] | None = None) -> TechnologyReport:
        return TechnologyReport(
            cms=self.detect_cms(html, headers),
            technologies=frozenset(self.detect_technologies(html)),
        )

    def detect_cms(self, html: str, headers: Mapping[str, HeaderValues] | None = None) -> Optional[str]:
        normalized = normalize_headers(headers)
        if not html and not normalized:
            return None

        lowered = html.lower()
        generators = generator_values(html)
        for rule in self.rules:
            if rule.matches(lowered, generators, normalized):
                return rule.cms
        return None

    def detect_technologies(self, html: str) -> List[str]:
        """Return matching technology tags in table order."""
        if not html:
            return []
        return [sig.tag for sig in TECHNOLOGY_SIGNATURES if sig.pattern.search(html)]

    @staticmethod
    def categorize(technologies: FrozenSet[str] | Sequence[str]) -> Dict[str, List[str]]:
        """Group technology tags by category, both in table order."""
        wanted = set(technologies)
        grouped: Dict[str, List[str]] = {}
        for sig in TECHNOLOGY_SIGNATURES:
            if sig.tag in wanted:
                grouped.setdefault(sig.category, []).append(sig.tag)
        return grouped
