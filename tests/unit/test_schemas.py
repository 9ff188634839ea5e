"""Tests for core data models and session counters."""

import pytest
from pydantic import ValidationError

from jobhunt.core.schemas import (
    UNKNOWN_COMPANY,
    ItemOutcome,
    ListingCandidate,
    MatchResult,
    SearchMetadata,
    SearchSession,
)


class TestListingCandidate:
    def test_defaults(self) -> None:
        c = ListingCandidate(link="https://x/1", title="Dev")
        assert c.company_name == UNKNOWN_COMPANY == "Unknown"
        assert c.description == ""
        assert c.eligible_to_apply is False
        assert c.detected_language is None

    def test_frozen(self) -> None:
        c = ListingCandidate(link="https://x/1", title="Dev")
        with pytest.raises(ValidationError):
            c.title = "Other"  # type: ignore[misc]

    def test_to_result_exposes_three_fields(self) -> None:
        c = ListingCandidate(
            link="https://x/1", title="Dev", company_name="Acme",
            description="secret", eligible_to_apply=True, detected_language="en",
        )
        result = c.to_result()
        assert result == MatchResult("https://x/1", "Dev", "Acme")
        assert tuple(result) == ("https://x/1", "Dev", "Acme")


class TestItemOutcome:
    def test_extracted(self) -> None:
        c = ListingCandidate(link="l", title="t")
        outcome = ItemOutcome.extracted(c)
        assert not outcome.skipped
        assert outcome.candidate == c

    def test_skip(self) -> None:
        outcome = ItemOutcome.skip("error", error="TimeoutError: boom")
        assert outcome.skipped
        assert outcome.skip_reason == "error"
        assert outcome.error == "TimeoutError: boom"


class TestSearchMetadata:
    def test_negative_total_rejected(self) -> None:
        with pytest.raises(ValidationError):
            SearchMetadata(geo_id="1", total_available=-1)


class TestSearchSession:
    def test_starts_at_zero(self) -> None:
        s = SearchSession.from_metadata(SearchMetadata(geo_id="9", total_available=30))
        assert (s.seen_count, s.matched_count, s.skipped_count) == (0, 0, 0)
        assert s.geo_id == "9"
        assert s.remaining == 30

    def test_negative_total_rejected(self) -> None:
        with pytest.raises(ValueError):
            SearchSession(None, -5)

    def test_match_bounded_by_page_entries(self) -> None:
        s = SearchSession(None, 30)
        s.begin_page(1)
        s.record_match()
        with pytest.raises(ValueError):
            s.record_match()

    def test_match_without_open_page_rejected(self) -> None:
        s = SearchSession(None, 30)
        with pytest.raises(ValueError):
            s.record_match()

    def test_invariant_after_page_recorded(self) -> None:
        s = SearchSession(None, 30)
        s.begin_page(25)
        for _ in range(3):
            s.record_match()
        s.record_skip()
        s.record_page(25)
        assert 0 <= s.matched_count <= s.seen_count <= s.total_available
        assert s.skipped_count == 1

    def test_begin_page_ignores_entries_past_total(self) -> None:
        s = SearchSession(None, 30)
        assert s.begin_page(25) == 25
        for _ in range(25):
            s.record_match()
        s.record_page(25)

        assert s.begin_page(25) == 5
        for _ in range(5):
            s.record_match()
        with pytest.raises(ValueError):
            s.record_match()
        s.record_page(5)
        assert s.matched_count == s.seen_count == s.total_available == 30

    def test_record_page_clamps_to_total(self) -> None:
        s = SearchSession(None, 30)
        s.record_page(25)
        s.record_page(25)
        assert s.seen_count == 30
        assert s.remaining == 0
