"""LinkedIn listing source: wires metadata, pagination, extractor and matcher.

stream() is an async generator. Work happens only while the caller pulls:
breaking out of ``async for`` (or calling ``aclose()``) after a match means
no further results page is ever requested.
"""

import logging
from collections.abc import AsyncGenerator
from typing import Any

from jobhunt.browser.actions import fixed_sleep
from jobhunt.core.config import PipelineConfig, SearchCriteria
from jobhunt.core.errors import PageLoadError
from jobhunt.core.schemas import MatchResult, SearchSession
from jobhunt.pipeline.language import LangdetectDetector, LanguageDetector
from jobhunt.pipeline.matcher import MatchEvaluator
from jobhunt.pipeline.pagination import PaginationController
from jobhunt.platforms.base import ListingSource
from jobhunt.platforms.linkedin.extractor import ListingExtractor
from jobhunt.platforms.linkedin.metadata import resolve_search_metadata
from jobhunt.platforms.linkedin.searcher import build_search_url
from jobhunt.platforms.linkedin.selectors import DEFAULT_SELECTORS, Selectors

logger = logging.getLogger(__name__)


class LinkedInAdapter(ListingSource):
    """LinkedIn Easy Apply listing source.

    Requires a signed-in browser page object (patchright Page) injected via
    constructor. The page is owned by the running stream; run one stream at
    a time per adapter.
    """

    def __init__(
        self,
        page: Any,
        *,
        selectors: Selectors = DEFAULT_SELECTORS,
        pipeline: PipelineConfig | None = None,
        detector: LanguageDetector | None = None,
    ) -> None:
        self._page = page
        self._selectors = selectors
        self._pipeline = pipeline or PipelineConfig()
        self._detector = detector or LangdetectDetector()
        self._session: SearchSession | None = None

    @property
    def platform_id(self) -> str:
        return "linkedin"

    @property
    def session(self) -> SearchSession | None:
        return self._session

    async def stream(self, criteria: SearchCriteria) -> AsyncGenerator[MatchResult, None]:
        """Yield ``(link, title, company_name)`` for each matching listing.

        Raises:
            SearchSetupError: If the search form cannot be resolved.
            PageLoadError: If a results page does not render in time.
        """
        self._session = None
        evaluator = MatchEvaluator.from_criteria(criteria)
        extractor = ListingExtractor(
            self._page,
            self._selectors,
            self._detector,
            item_timeout_ms=self._pipeline.item_timeout_ms,
        )

        metadata = await resolve_search_metadata(
            self._page,
            criteria,
            self._selectors,
            timeout_ms=self._pipeline.metadata_timeout_ms,
        )
        session = SearchSession.from_metadata(metadata)
        self._session = session
        pagination = PaginationController(session)

        while not pagination.done:
            items = await self._load_page(criteria, pagination)
            counted = session.begin_page(len(items))
            if counted < len(items):
                logger.info(
                    "Ignoring %d entries past the reported total of %d",
                    len(items) - counted, session.total_available,
                )
                items = items[:counted]

            for item in items:
                outcome = await extractor.extract(item)
                if outcome.candidate is None:
                    session.record_skip()
                    continue

                candidate = outcome.candidate
                reason = evaluator.reason(candidate)
                if reason is not None:
                    logger.debug("No match (%s): %s", reason, candidate.title)
                    continue

                session.record_match()
                logger.info("Match: %s at %s", candidate.title, candidate.company_name)
                yield candidate.to_result()

            await fixed_sleep(self._pipeline.page_delay_s)
            pagination.advance(len(items))

        logger.info(
            "Search '%s' done: %d seen, %d matched, %d skipped of %d available",
            criteria.keywords,
            session.seen_count,
            session.matched_count,
            session.skipped_count,
            session.total_available,
        )

    async def _load_page(
        self,
        criteria: SearchCriteria,
        pagination: PaginationController,
    ) -> list[Any]:
        """Navigate to the next results page and wait for its entries."""
        start = pagination.next_offset()
        expected = pagination.expected_entries()
        url = build_search_url(criteria, pagination.session.geo_id, start)
        logger.info("Navigating to start=%d: %s", start, url)

        item_selector = self._selectors.search_result_item
        try:
            await self._page.goto(url, wait_until="load")
            await self._page.wait_for_selector(
                f"{item_selector}:nth-child({expected})",
                timeout=self._pipeline.page_timeout_ms,
            )
        except Exception as e:
            raise PageLoadError(start, expected, str(e)) from e

        items: list[Any] = await self._page.query_selector_all(item_selector)
        logger.info("Page start=%d: %d entries", start, len(items))
        return items
