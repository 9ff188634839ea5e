"""LinkedIn URL builder and search-parameter helpers.

Pure functions — zero browser dependency.
"""

import logging
from urllib.parse import quote_plus, urlencode

from jobhunt.core.config import SearchCriteria, WorkplaceTypes

logger = logging.getLogger(__name__)

JOBS_HOME_URL = "https://www.linkedin.com/jobs"
SEARCH_BASE_URL = "https://www.linkedin.com/jobs/search"

# f_AL=true restricts results to Easy Apply listings.
EASY_APPLY_FLAG = "true"


def build_url(base: str, params: dict[str, str]) -> str:
    """Return ``base`` with ``params`` encoded as its query string."""
    if not params:
        return base
    return f"{base}?{urlencode(params, quote_via=quote_plus)}"


def workplace_codes(workplace: WorkplaceTypes) -> str:
    """Encode workplace flags as LinkedIn ``f_WT`` codes.

    Flags are read in the fixed order [on_site, remote, hybrid]; each true
    flag contributes its 1-based position. All false gives "".
    """
    flags = (workplace.on_site, workplace.remote, workplace.hybrid)
    return ",".join(str(i) for i, flag in enumerate(flags, start=1) if flag)


def build_search_params(
    criteria: SearchCriteria,
    geo_id: str | None,
    start: int,
) -> dict[str, str]:
    """Query parameters for the results page beginning at ``start``."""
    if start < 0:
        msg = f"start must be >= 0, got {start}"
        raise ValueError(msg)
    params: dict[str, str] = {
        "keywords": criteria.keywords,
        "location": criteria.location,
        "start": str(start),
        "f_WT": workplace_codes(criteria.workplace),
        "f_AL": EASY_APPLY_FLAG,
    }
    if geo_id:
        params["geoId"] = str(geo_id)
    return params


def build_search_url(criteria: SearchCriteria, geo_id: str | None, start: int) -> str:
    """Build a LinkedIn jobs search URL for one results page."""
    return build_url(SEARCH_BASE_URL, build_search_params(criteria, geo_id, start))
