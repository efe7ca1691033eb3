"""
Page Data Extractor - Orchestration of all extractors for one page.

The pure ``extract`` path runs every extractor against the same HTML and
assembles one immutable ``ExtractionResult``. The URL variants add a single
fetch through a pluggable ``PageFetcher`` and, optionally, a bounded visit of
up to ``max_contact_pages`` same-site contact pages when the primary page has
no email.
"""

from __future__ import annotations

import asyncio
import time
from typing import Mapping, Optional

import structlog

from ..config import FetchConfig
from ..crawler.contact_pages import find_contact_page_urls
from ..errors import PageFetchError
from ..observability.metrics import METRICS
from .company_name import CompanyNameExtractor
from .email import EmailExtractor
from .markup import HeaderValues
from .models import ExtractionResult, FetchFailure, FetchOutcome, FetchResponse
from .phone import PhoneExtractor
from .protocols import Extractor, PageFetcher
from .registration import RegistrationNumberExtractor
from .social import SocialProfileExtractor
from .technology import TechnologyDetector

logger = structlog.get_logger(__name__)

NOT_CONFIGURED_MESSAGE = "HTTP client not configured"
DEADLINE_MESSAGE = "Deadline exceeded"


class PageDataExtractor:
    """
    Runs the email, phone, registration number, company name, social profile
    and technology extractors and merges their findings.
    """

    def __init__(
        self,
        fetcher: Optional[PageFetcher] = None,
        config: Optional[FetchConfig] = None,
        *,
        email_extractor: Optional[Extractor] = None,
        phone_extractor: Optional[Extractor] = None,
        registration_extractor: Optional[RegistrationNumberExtractor] = None,
        company_name_extractor: Optional[CompanyNameExtractor] = None,
        social_extractor: Optional[Extractor] = None,
        technology_detector: Optional[TechnologyDetector] = None,
    ) -> None:
        self.fetcher = fetcher
        self.config = config or FetchConfig()
        self.email_extractor = email_extractor or EmailExtractor()
        self.phone_extractor = phone_extractor or PhoneExtractor()
        self.registration_extractor = registration_extractor or RegistrationNumberExtractor()
        self.company_name_extractor = company_name_extractor or CompanyNameExtractor()
        self.social_extractor = social_extractor or SocialProfileExtractor()
        self.technology_detector = technology_detector or TechnologyDetector()

    def extract(self, html: str, headers: Mapping[str, HeaderValues] | None = None) -> ExtractionResult:
        """Extract every signal from already fetched HTML. Never raises for string input."""
        report = self.technology_detector.detect(html, headers)
        return ExtractionResult(
            emails=tuple(self.email_extractor.extract(html)),
            phones=tuple(self.phone_extractor.extract(html)),
            registration_number=self.registration_extractor.extract_single(html),
            cms=report.cms,
            technologies=report.technologies,
            social_profiles=self.social_extractor.extract(html),
            company_name=self.company_name_extractor.extract_single(html),
        )

    async def extract_from_url(self, url: str) -> Optional[ExtractionResult]:
        """Fetch ``url`` and extract from it; None when the page cannot be fetched."""
        outcome = await self.extract_from_url_with_error(url)
        return outcome.result

    async def extract_from_url_with_error(self, url: str) -> FetchOutcome:
        """Like ``extract_from_url`` but carries a diagnostic message on failure."""
        response, failure = await self._fetch_primary(url, deadline=self._deadline())
        if failure is not None:
            return failure
        assert response is not None
        return FetchOutcome(result=self.extract(response.body, response.headers))

    async def extract_with_contact_pages(self, url: str) -> Optional[ExtractionResult]:
        """
        Extract from ``url`` and, when it has no email, from its contact pages.

        Contact pages are visited in document order with a fixed pause before
        each request. Only their emails and phones are merged into the primary
        result. Crawling stops at the first contact page that yields an email
        or when the overall deadline is reached.
        """
        deadline = self._deadline()
        response, failure = await self._fetch_primary(url, deadline=deadline)
        if failure is not None:
            return None
        assert response is not None

        result = self.extract(response.body, response.headers)
        if result.emails:
            return result

        contact_urls = find_contact_page_urls(response.body, url, limit=self.config.max_contact_pages)
        logger.debug("Found contact page URLs", url=url, contact_urls=contact_urls)

        for contact_url in contact_urls:
            remaining = self._remaining(deadline)
            if remaining is not None and remaining <= self.config.contact_page_delay:
                logger.debug("Deadline reached, skipping remaining contact pages", url=url)
                break

            await asyncio.sleep(self.config.contact_page_delay)
            contact = await self._fetch_contact(contact_url, deadline=deadline)
            if contact is None:
                continue

            emails = self.email_extractor.extract(contact.body)
            phones = self.phone_extractor.extract(contact.body)
            result = result.merge_contacts(emails, phones)
            logger.debug(
                "Extracted from contact page",
                contact_url=contact_url,
                emails_found=len(emails),
                phones_found=len(phones),
            )
            if emails:
                METRICS["contact_page_hits"].inc()
                break

        return result

    # --- fetching ---

    def _deadline(self) -> Optional[float]:
        if self.config.overall_deadline <= 0:
            return None
        return asyncio.get_running_loop().time() + self.config.overall_deadline

    @staticmethod
    def _remaining(deadline: Optional[float]) -> Optional[float]:
        if deadline is None:
            return None
        return deadline - asyncio.get_running_loop().time()

    async def _fetch_primary(
        self, url: str, *, deadline: Optional[float]
    ) -> tuple[Optional[FetchResponse], Optional[FetchOutcome]]:
        if self.fetcher is None:
            logger.warning("HTTP client not configured, cannot fetch URL", url=url)
            return None, FetchOutcome(error=NOT_CONFIGURED_MESSAGE, failure=FetchFailure.NOT_CONFIGURED)

        try:
            response = await self._get(url, self.config.timeout, deadline, kind="primary")
        except asyncio.TimeoutError:
            logger.warning("Deadline exceeded while fetching URL", url=url)
            return None, FetchOutcome(error=DEADLINE_MESSAGE, failure=FetchFailure.TIMEOUT)
        except PageFetchError as e:
            logger.warning("Exception while fetching URL", url=url, error=e.message)
            failure = FetchFailure.TIMEOUT if e.timed_out else FetchFailure.TRANSPORT
            return None, FetchOutcome(error=e.message, failure=failure)
        except Exception as e:
            # Fetchers other than HttpxPageFetcher may raise anything
            logger.warning("Exception while fetching URL", url=url, error=str(e) or type(e).__name__)
            return None, FetchOutcome(error=str(e) or type(e).__name__, failure=FetchFailure.TRANSPORT)

        if response.status >= 400:
            logger.warning("Failed to fetch URL", url=url, status=response.status)
            return None, FetchOutcome(error=f"HTTP {response.status}", failure=FetchFailure.HTTP_STATUS)
        return response, None

    async def _fetch_contact(self, url: str, *, deadline: Optional[float]) -> Optional[FetchResponse]:
        try:
            response = await self._get(url, self.config.contact_timeout, deadline, kind="contact")
        except asyncio.TimeoutError:
            logger.debug("Failed to fetch contact page", contact_url=url, error=DEADLINE_MESSAGE)
            return None
        except Exception as e:
            # A broken contact page never spoils the primary result
            logger.debug("Failed to fetch contact page", contact_url=url, error=str(e))
            return None

        if response.status >= 400:
            logger.debug("Failed to fetch contact page", contact_url=url, status=response.status)
            return None
        return response

    async def _get(self, url: str, timeout: float, deadline: Optional[float], *, kind: str) -> FetchResponse:
        """Single attempt, bounded by both the request timeout and the overall deadline."""
        assert self.fetcher is not None
        budget = self._remaining(deadline)
        if budget is not None:
            if budget <= 0:
                METRICS["page_fetches"].labels(kind=kind, outcome="timeout").inc()
                raise asyncio.TimeoutError()
            timeout = min(timeout, budget)

        start = time.perf_counter()
        try:
            response = await asyncio.wait_for(self.fetcher.get(url, timeout=timeout), timeout=budget)
        except asyncio.TimeoutError:
            METRICS["page_fetches"].labels(kind=kind, outcome="timeout").inc()
            raise
        except PageFetchError as e:
            outcome = "timeout" if e.timed_out else "transport_error"
            METRICS["page_fetches"].labels(kind=kind, outcome=outcome).inc()
            raise
        except Exception:
            METRICS["page_fetches"].labels(kind=kind, outcome="transport_error").inc()
            raise
        finally:
            METRICS["fetch_duration"].labels(kind=kind).observe(time.perf_counter() - start)

        outcome = "ok" if response.status < 400 else "http_error"
        METRICS["page_fetches"].labels(kind=kind, outcome=outcome).inc()
        return response
