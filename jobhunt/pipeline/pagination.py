"""Offset-based pagination state machine over a SearchSession.

Pure bookkeeping, no browser dependency. The adapter asks for the next
offset, loads that page, processes its entries, then reports how many
entries the page actually had.
"""

import enum
import logging

from jobhunt.core.schemas import SearchSession

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 25


class PaginationState(enum.Enum):
    SCANNING = "scanning"
    DONE = "done"


class PaginationController:
    """Drives ``start`` offsets until the reported total has been traversed.

    ``seen_count`` advances by the entries found on each page, not by the
    page size requested; LinkedIn may render fewer than 25. A page with no
    entries at all ends the scan, since retrying the same offset would never
    make progress.
    """

    def __init__(self, session: SearchSession, page_size: int = MAX_PAGE_SIZE) -> None:
        if page_size < 1:
            msg = f"page_size must be >= 1, got {page_size}"
            raise ValueError(msg)
        self._session = session
        self._page_size = page_size
        self._exhausted = False

    @property
    def session(self) -> SearchSession:
        return self._session

    @property
    def state(self) -> PaginationState:
        if self._exhausted or self._session.seen_count >= self._session.total_available:
            return PaginationState.DONE
        return PaginationState.SCANNING

    @property
    def done(self) -> bool:
        return self.state is PaginationState.DONE

    def next_offset(self) -> int:
        """Zero-based ``start`` index of the next page to request."""
        if self.done:
            msg = "pagination is done, no further pages to request"
            raise RuntimeError(msg)
        return self._session.seen_count

    def expected_entries(self) -> int:
        """Entries that must be visible before the page counts as loaded."""
        return min(self._page_size, self._session.remaining)

    def advance(self, found: int) -> PaginationState:
        """Record a fully processed page that had ``found`` entries."""
        if self.done:
            msg = "cannot advance a finished pagination"
            raise RuntimeError(msg)
        start = self._session.seen_count
        self._session.record_page(found)
        if found == 0:
            logger.warning(
                "Page at start=%d had no entries — ending scan at %d/%d",
                start,
                self._session.seen_count,
                self._session.total_available,
            )
            self._exhausted = True
        state = self.state
        logger.debug(
            "Advanced by %d entries: %d/%d seen (%s)",
            found, self._session.seen_count, self._session.total_available, state.value,
        )
        return state
