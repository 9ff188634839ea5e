"""LinkedIn listing extractor: turns one result entry into a ListingCandidate.

Design rules:
  - The entry must be clicked first; the description only exists in the
    detail panel after selection.
  - Missing link means skip, not error.
  - Missing company falls back to "Unknown" (never crashes).
  - extract() never raises; every failure is an ItemOutcome skip.
"""

import logging
from typing import Any, Protocol, runtime_checkable
from urllib.parse import urljoin

from jobhunt.browser.actions import inner_text
from jobhunt.core.schemas import UNKNOWN_COMPANY, ItemOutcome, ListingCandidate
from jobhunt.pipeline.language import LanguageDetector, top_language
from jobhunt.platforms.linkedin.selectors import Selectors

logger = logging.getLogger(__name__)

LINKEDIN_BASE = "https://www.linkedin.com"

SKIP_MISSING_LINK = "missing-link"
SKIP_ERROR = "error"

# Detail panel is ready when the description has text and the apply status
# (enabled Easy Apply button, or "applied" feedback) has rendered.
_DETAIL_READY_JS = """
([description, easyApply, applied]) => {
    const desc = document.querySelector(description);
    const hasDescription = !!(desc && desc.innerText.trim());
    const hasStatus = !!(document.querySelector(easyApply) || document.querySelector(applied));
    return hasDescription && hasStatus;
}
"""


@runtime_checkable
class ElementLike(Protocol):
    """Minimal element interface so tests can use AsyncMock instead of patchright."""

    async def click(self) -> None: ...
    async def query_selector(self, selector: str) -> "ElementLike | None": ...
    async def get_attribute(self, name: str) -> str | None: ...
    async def inner_text(self) -> str: ...


class ListingExtractor:
    """Extracts listing data from result entries on the currently loaded page."""

    def __init__(
        self,
        page: Any,
        selectors: Selectors,
        detector: LanguageDetector,
        *,
        item_timeout_ms: int = 30000,
    ) -> None:
        self._page = page
        self._selectors = selectors
        self._detector = detector
        self._item_timeout_ms = item_timeout_ms

    async def extract(self, item: ElementLike) -> ItemOutcome:
        """Extract one entry. Returns a candidate or an explicit skip."""
        try:
            return await self._extract(item)
        except Exception as e:
            logger.warning("Failed to extract listing, skipping: %s", e)
            logger.debug("Listing extraction traceback", exc_info=True)
            return ItemOutcome.skip(SKIP_ERROR, error=f"{type(e).__name__}: {e}")

    async def _extract(self, item: ElementLike) -> ItemOutcome:
        await item.click()

        link_el = await item.query_selector(self._selectors.search_result_item_link)
        if link_el is None:
            logger.debug("Listing has no title link — skipping")
            return ItemOutcome.skip(SKIP_MISSING_LINK)

        link = self._absolute_url(await link_el.get_attribute("href"))
        title = await inner_text(link_el)

        await self._wait_for_detail_panel()

        company_name = await self._parse_company_name(item)
        description = await self._parse_description()
        eligible = await self._page.query_selector(
            self._selectors.easy_apply_button_enabled,
        ) is not None
        language = top_language(self._detector, description) if description else None

        return ItemOutcome.extracted(
            ListingCandidate(
                link=link,
                title=title,
                company_name=company_name,
                description=description,
                eligible_to_apply=eligible,
                detected_language=language,
            ),
        )

    # --- Private helpers ---

    async def _wait_for_detail_panel(self) -> None:
        s = self._selectors
        await self._page.wait_for_function(
            _DETAIL_READY_JS,
            arg=[s.job_description, s.easy_apply_button_enabled, s.applied_to_job_feedback],
            timeout=self._item_timeout_ms,
        )

    async def _parse_company_name(self, item: ElementLike) -> str:
        """Company subtitle text, or "Unknown" when absent or unreadable."""
        try:
            el = await item.query_selector(self._selectors.search_result_item_company_name)
            if el is None:
                return UNKNOWN_COMPANY
            text = await inner_text(el)
            return text or UNKNOWN_COMPANY
        except Exception:
            logger.debug("Error reading company name", exc_info=True)
            return UNKNOWN_COMPANY

    async def _parse_description(self) -> str:
        el = await self._page.query_selector(self._selectors.job_description)
        if el is None:
            return ""
        return await inner_text(el)

    @staticmethod
    def _absolute_url(href: str | None) -> str:
        """Resolve a possibly relative href against linkedin.com."""
        href = (href or "").strip()
        if not href:
            return ""
        return urljoin(LINKEDIN_BASE, href)
