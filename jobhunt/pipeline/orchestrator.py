"""Orchestrator: consumes a listing stream, stores matches, records the run.

Data flow:
  1. Source stream → matches, pulled one at a time
  2. DB insert as each match arrives (dedup by link)
  3. Stop pulling once max_results is reached (no further pages load)
  4. Record search run with seen / matched / skipped counters, also when a
     fatal error aborts the stream part way
"""

import json
import logging
import sqlite3
from collections.abc import Callable
from datetime import datetime

from jobhunt.core.config import SearchCriteria, Settings
from jobhunt.core.db import insert_match, insert_search_run
from jobhunt.core.errors import JobHuntError
from jobhunt.core.schemas import MatchResult, SearchRunResult
from jobhunt.platforms.base import ListingSource

logger = logging.getLogger(__name__)


async def collect_matches(
    source: ListingSource,
    criteria: SearchCriteria,
    limit: int | None = None,
    on_match: Callable[[MatchResult], None] | None = None,
) -> list[MatchResult]:
    """Pull matches from ``source`` until exhausted or ``limit`` is reached.

    ``on_match`` is called for each match before the next one is pulled, so
    its side effects survive a fatal error later in the stream.
    """
    matches: list[MatchResult] = []
    stream = source.stream(criteria)
    try:
        async for match in stream:
            matches.append(match)
            if on_match is not None:
                on_match(match)
            if limit is not None and len(matches) >= limit:
                logger.info("Reached limit of %d matches, stopping early", limit)
                break
    finally:
        await stream.aclose()
    return matches


async def run_search(
    criteria: SearchCriteria,
    source: ListingSource,
    conn: sqlite3.Connection,
    limit: int | None = None,
) -> SearchRunResult:
    """Execute a single search through the full pipeline.

    Raises:
        JobHuntError: If the stream fails fatally. Matches pulled before the
            failure are already stored and the partial run is recorded.
    """
    started_at = datetime.now()
    logger.info("Searching '%s' in '%s' on %s", criteria.keywords, criteria.location,
                source.platform_id)

    matches: list[MatchResult] = []
    new_count = 0

    def store(match: MatchResult) -> None:
        nonlocal new_count
        matches.append(match)
        if insert_match(conn, match, criteria.keywords):
            new_count += 1

    try:
        await collect_matches(source, criteria, limit, on_match=store)
    except JobHuntError as e:
        logger.error(
            "Search '%s' aborted after %d matches (%d new): %s",
            criteria.keywords, len(matches), new_count, e,
        )
        _record_run(conn, criteria, source, matches, new_count, started_at)
        raise

    result = _record_run(conn, criteria, source, matches, new_count, started_at)

    if result.skipped_count:
        logger.warning(
            "Search '%s': %d of %d listings could not be read and were skipped",
            criteria.keywords, result.skipped_count, result.seen_count,
        )
    logger.info(
        "Search '%s': %d seen, %d matched, %d new",
        criteria.keywords, result.seen_count, result.matched_count, new_count,
    )
    return result


def _record_run(
    conn: sqlite3.Connection,
    criteria: SearchCriteria,
    source: ListingSource,
    matches: list[MatchResult],
    new_count: int,
    started_at: datetime,
) -> SearchRunResult:
    """Build the run summary from the source's session and store it."""
    finished_at = datetime.now()
    session = source.session
    result = SearchRunResult(
        keywords=criteria.keywords,
        location=criteria.location,
        geo_id=session.geo_id if session else None,
        total_available=session.total_available if session else 0,
        seen_count=session.seen_count if session else 0,
        matched_count=session.matched_count if session else len(matches),
        skipped_count=session.skipped_count if session else 0,
        new_count=new_count,
        matches=list(matches),
        started_at=started_at,
        finished_at=finished_at,
    )

    insert_search_run(
        conn,
        keywords=result.keywords,
        location=result.location,
        geo_id=result.geo_id,
        total_available=result.total_available,
        seen_count=result.seen_count,
        matched_count=result.matched_count,
        skipped_count=result.skipped_count,
        started_at=started_at,
        finished_at=finished_at,
    )
    return result


async def run_all_searches(
    settings: Settings,
    source: ListingSource,
    conn: sqlite3.Connection,
    limit: int | None = None,
) -> list[SearchRunResult]:
    """Run all configured searches sequentially on one source."""
    cap = limit if limit is not None else settings.pipeline.max_results
    results: list[SearchRunResult] = []
    for criteria in settings.searches:
        results.append(await run_search(criteria, source, conn, cap))
    return results


def export_results_json(results: list[SearchRunResult]) -> str:
    """Export matches of all runs as a JSON string."""
    data = []
    for r in results:
        for m in r.matches:
            data.append({
                "keywords": r.keywords,
                "location": r.location,
                "link": m.link,
                "title": m.title,
                "company_name": m.company_name,
            })
    return json.dumps(data, indent=2)
