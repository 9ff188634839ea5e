"""Tests for search form submission and metadata resolution."""

from unittest.mock import AsyncMock

import pytest

from jobhunt.core.config import SearchCriteria
from jobhunt.core.errors import SearchSetupError
from jobhunt.platforms.linkedin.metadata import (
    geo_id_from_url,
    parse_result_count,
    resolve_search_metadata,
)
from jobhunt.platforms.linkedin.searcher import JOBS_HOME_URL
from jobhunt.platforms.linkedin.selectors import DEFAULT_SELECTORS

S = DEFAULT_SELECTORS

# ---------------------------------------------------------------------------
# Pure helpers
# ---------------------------------------------------------------------------


class TestParseResultCount:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("30 results", 30),
            ("1,234 results", 1234),
            ("12,345,678 results", 12345678),
            ("  7 result", 7),
            ("About 2.500 results", 2500),
            ("1 234 résultats", 1234),
        ],
    )
    def test_parses(self, text: str, expected: int) -> None:
        assert parse_result_count(text) == expected

    def test_no_number(self) -> None:
        with pytest.raises(ValueError, match="no result count"):
            parse_result_count("No matching jobs found")


class TestGeoIdFromUrl:
    def test_present(self) -> None:
        url = "https://www.linkedin.com/jobs/search/?geoId=101282230&keywords=php"
        assert geo_id_from_url(url) == "101282230"

    def test_absent(self) -> None:
        assert geo_id_from_url("https://www.linkedin.com/jobs/search/?keywords=php") is None

    def test_blank(self) -> None:
        assert geo_id_from_url("https://www.linkedin.com/jobs/search/?geoId=") is None


# ---------------------------------------------------------------------------
# resolve_search_metadata
# ---------------------------------------------------------------------------


def _make_page(
    *,
    count_text: str | None = "1,234 results",
    geo_timeout: bool = False,
    url: str = "https://www.linkedin.com/jobs/search/?geoId=42&keywords=php",
) -> AsyncMock:
    page = AsyncMock()
    page.url = url

    if geo_timeout:
        page.wait_for_function = AsyncMock(side_effect=TimeoutError("no geoId"))

    count_el = AsyncMock()
    count_el.inner_text = AsyncMock(return_value=count_text)

    async def _wait_for_selector(selector: str, **kwargs: object) -> AsyncMock | None:
        if selector == S.search_result_count_text:
            if count_text is None:
                raise TimeoutError("count not rendered")
            return count_el
        return AsyncMock()

    page.wait_for_selector = AsyncMock(side_effect=_wait_for_selector)
    return page


def _criteria() -> SearchCriteria:
    return SearchCriteria(keywords="Backend Developer", location="Germany")


class TestResolveSearchMetadata:
    async def test_resolves_geo_id_and_total(self) -> None:
        page = _make_page()
        meta = await resolve_search_metadata(page, _criteria(), S, timeout_ms=1000)
        assert meta.geo_id == "42"
        assert meta.total_available == 1234

    async def test_submits_form(self) -> None:
        page = _make_page()
        await resolve_search_metadata(page, _criteria(), S)

        page.goto.assert_awaited_once_with(JOBS_HOME_URL, wait_until="load")
        page.type.assert_any_await(S.keyword_input, "Backend Developer")
        page.fill.assert_awaited_once_with(S.location_input, "Germany")
        page.type.assert_any_await(S.location_input, " ")
        page.click.assert_awaited_once_with(S.search_submit_button)
        page.wait_for_function.assert_awaited_once()
        assert page.wait_for_function.call_args.kwargs["timeout"] == 5000

    async def test_geo_wait_timeout_is_fatal(self) -> None:
        page = _make_page(geo_timeout=True)
        with pytest.raises(SearchSetupError, match="geo id"):
            await resolve_search_metadata(page, _criteria(), S)

    async def test_missing_count_is_fatal(self) -> None:
        page = _make_page(count_text=None)
        with pytest.raises(SearchSetupError, match="result count"):
            await resolve_search_metadata(page, _criteria(), S)

    async def test_unparseable_count_is_fatal(self) -> None:
        page = _make_page(count_text="No results")
        with pytest.raises(SearchSetupError) as exc_info:
            await resolve_search_metadata(page, _criteria(), S)
        assert isinstance(exc_info.value.__cause__, ValueError)

    async def test_missing_geo_param_allowed(self) -> None:
        page = _make_page(url="https://www.linkedin.com/jobs/search/?keywords=php")
        meta = await resolve_search_metadata(page, _criteria(), S)
        assert meta.geo_id is None
        assert meta.total_available == 1234
