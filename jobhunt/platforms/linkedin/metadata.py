"""Search form submission: resolves the geo id and total result count.

Any failure here is fatal for the session. There is no fallback total.
"""

import logging
import re
from typing import Any
from urllib.parse import parse_qs, urlparse

from jobhunt.browser.actions import fill_and_commit, inner_text
from jobhunt.core.config import SearchCriteria
from jobhunt.core.errors import SearchSetupError
from jobhunt.core.schemas import SearchMetadata
from jobhunt.platforms.linkedin.searcher import JOBS_HOME_URL
from jobhunt.platforms.linkedin.selectors import Selectors

logger = logging.getLogger(__name__)

GEO_ID_PARAM = "geoId"

# Navigation after submit is complete once the URL is addressable by region.
_HAS_GEO_ID_JS = (
    "() => new URLSearchParams(document.location.search).has('" + GEO_ID_PARAM + "')"
)

# Leading number, allowing thousands separators: "1,234", "1.234", "1 234".
_COUNT_RE = re.compile(r"\d[\d,.\u00a0\u202f ]*")


def parse_result_count(text: str) -> int:
    """Parse LinkedIn's result-count text ("1,234 results") into an int.

    Raises:
        ValueError: If the text contains no number.
    """
    match = _COUNT_RE.search(text)
    if match is None:
        msg = f"no result count in {text!r}"
        raise ValueError(msg)
    digits = re.sub(r"\D", "", match.group())
    return int(digits)


def geo_id_from_url(url: str) -> str | None:
    """Return the ``geoId`` query parameter of ``url``, if present."""
    values = parse_qs(urlparse(url).query).get(GEO_ID_PARAM)
    if not values or not values[0].strip():
        return None
    return values[0].strip()


async def resolve_search_metadata(
    page: Any,
    criteria: SearchCriteria,
    selectors: Selectors,
    *,
    timeout_ms: int = 5000,
) -> SearchMetadata:
    """Submit the search form and read back ``(geo_id, total_available)``.

    Raises:
        SearchSetupError: If navigation never reaches a geo-scoped URL or the
            result count cannot be found or parsed within ``timeout_ms``.
    """
    try:
        await page.goto(JOBS_HOME_URL, wait_until="load")
        await page.type(selectors.keyword_input, criteria.keywords)
        await fill_and_commit(page, selectors.location_input, criteria.location)
        await page.click(selectors.search_submit_button)
        await page.wait_for_function(_HAS_GEO_ID_JS, timeout=timeout_ms)
    except Exception as e:
        msg = f"search form for '{criteria.keywords}' did not resolve a geo id"
        raise SearchSetupError(msg) from e

    geo_id = geo_id_from_url(page.url)

    try:
        count_el = await page.wait_for_selector(
            selectors.search_result_count_text, timeout=timeout_ms,
        )
        if count_el is None:
            msg = "result count element not found"
            raise ValueError(msg)
        total = parse_result_count(await inner_text(count_el))
    except Exception as e:
        msg = f"could not read result count for '{criteria.keywords}'"
        raise SearchSetupError(msg) from e

    logger.info(
        "Search '%s' in '%s': geoId=%s, %d listings available",
        criteria.keywords, criteria.location, geo_id, total,
    )
    return SearchMetadata(geo_id=geo_id, total_available=total)
