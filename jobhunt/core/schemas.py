"""Core data models for listing discovery."""

from datetime import datetime
from typing import NamedTuple

from pydantic import BaseModel, ConfigDict, Field

UNKNOWN_COMPANY = "Unknown"


class MatchResult(NamedTuple):
    """What a result stream yields. No other listing fields leave the pipeline."""

    link: str
    title: str
    company_name: str


class ListingCandidate(BaseModel):
    """Data extracted from one listing, discarded after evaluation."""

    model_config = ConfigDict(frozen=True)

    link: str
    title: str
    company_name: str = UNKNOWN_COMPANY
    description: str = ""
    eligible_to_apply: bool = False
    detected_language: str | None = None

    def to_result(self) -> MatchResult:
        return MatchResult(self.link, self.title, self.company_name)


class ItemOutcome(BaseModel):
    """Result-or-skip record produced for every listing entry on a page."""

    model_config = ConfigDict(frozen=True)

    candidate: ListingCandidate | None = None
    skip_reason: str | None = None
    error: str | None = None

    @property
    def skipped(self) -> bool:
        return self.candidate is None

    @classmethod
    def extracted(cls, candidate: ListingCandidate) -> "ItemOutcome":
        return cls(candidate=candidate)

    @classmethod
    def skip(cls, reason: str, error: str | None = None) -> "ItemOutcome":
        return cls(skip_reason=reason, error=error)


class SearchMetadata(BaseModel):
    """Session-scoped values resolved by submitting the search form."""

    model_config = ConfigDict(frozen=True)

    geo_id: str | None = None
    total_available: int = Field(ge=0)


class SearchSession:
    """Mutable counters for one pipeline invocation.

    Counters only move forward. ``seen_count`` advances once per processed
    page; matches and skips are recorded while that page is in progress, so
    they are bounded by ``seen_count + page_size`` until the page is recorded.
    """

    def __init__(self, geo_id: str | None, total_available: int) -> None:
        if total_available < 0:
            msg = f"total_available must be >= 0, got {total_available}"
            raise ValueError(msg)
        self.geo_id = geo_id
        self.total_available = total_available
        self.seen_count = 0
        self.matched_count = 0
        self.skipped_count = 0
        self._page_size = 0

    @classmethod
    def from_metadata(cls, metadata: SearchMetadata) -> "SearchSession":
        return cls(metadata.geo_id, metadata.total_available)

    @property
    def remaining(self) -> int:
        return max(0, self.total_available - self.seen_count)

    def begin_page(self, entries: int) -> int:
        """Open accounting for a loaded page with ``entries`` listing entries.

        Entries past the reported total are not counted. Returns how many of
        the page's entries belong to the session.
        """
        self._page_size = min(entries, self.remaining)
        return self._page_size

    def record_match(self) -> None:
        if self.matched_count + 1 > self.seen_count + self._page_size:
            msg = "matched_count would exceed the number of entries seen"
            raise ValueError(msg)
        self.matched_count += 1

    def record_skip(self) -> None:
        self.skipped_count += 1

    def record_page(self, found: int) -> None:
        """Advance ``seen_count`` by the entries found on the finished page."""
        if found < 0:
            msg = f"found must be >= 0, got {found}"
            raise ValueError(msg)
        self.seen_count = min(self.total_available, self.seen_count + found)
        self._page_size = 0

    def __repr__(self) -> str:
        return (
            f"SearchSession(geo_id={self.geo_id!r}, total={self.total_available}, "
            f"seen={self.seen_count}, matched={self.matched_count}, "
            f"skipped={self.skipped_count})"
        )


class SearchRunResult(BaseModel):
    """Summary of a single search run."""

    keywords: str
    location: str
    geo_id: str | None = None
    total_available: int = 0
    seen_count: int = 0
    matched_count: int = 0
    skipped_count: int = 0
    new_count: int = 0
    matches: list[MatchResult] = Field(default_factory=list)
    started_at: datetime
    finished_at: datetime
