"""
LeadMiner Extraction Module - Business Signals from Raw HTML

Pure extractors share one contract: ``extract(html)`` never raises for string
input and returns an empty value when nothing is found.

- Emails: mailto links, data attribute obfuscation and free text, priority ordered
- Phones: Czech numbering plan, canonical ``+420XXXXXXXXX`` form
- Registration number: labelled IČO validated by its modulo 11 check digit
- Company name: structured data, site name, legal forms, copyright, title
- Social profiles: first real profile link per platform
- Technology: ordered CMS fingerprinting plus independent technology tags

``PageDataExtractor`` combines them and adds the URL based variants.
"""

from .models import ExtractionResult, FetchFailure, FetchOutcome, FetchResponse
from .protocols import Extractor, PageFetcher
from .company_name import CompanyNameExtractor
from .email import EmailExtractor
from .phone import PhoneExtractor
from .registration import RegistrationNumberExtractor, is_valid_checksum
from .social import SocialProfileExtractor
from .technology import TechnologyDetector, TechnologyReport
from .page_data import PageDataExtractor

__all__ = [
    "ExtractionResult",
    "FetchFailure",
    "FetchOutcome",
    "FetchResponse",
    "Extractor",
    "PageFetcher",
    "CompanyNameExtractor",
    "EmailExtractor",
    "PhoneExtractor",
    "RegistrationNumberExtractor",
    "is_valid_checksum",
    "SocialProfileExtractor",
    "TechnologyDetector",
    "TechnologyReport",
    "PageDataExtractor",
]
