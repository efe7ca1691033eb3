"""
LeadMiner Crawler Module - Page Fetching and Contact Page Discovery

- ``HttpxPageFetcher``: single-attempt GET with browser-like headers
- ``find_contact_page_urls``: same-site contact/about links in document order
"""

from .contact_pages import find_contact_page_urls
from .http_client import HttpxPageFetcher
from .user_agents import browser_headers

__all__ = [
    "HttpxPageFetcher",
    "browser_headers",
    "find_contact_page_urls",
]
