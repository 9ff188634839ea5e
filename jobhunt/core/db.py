"""SQLite database layer for matched listings and search run tracking."""

import sqlite3
from datetime import datetime
from pathlib import Path

from jobhunt.core.schemas import MatchResult

_MATCHES_TABLE = """
CREATE TABLE IF NOT EXISTS matches (
    id              INTEGER PRIMARY KEY AUTOINCREMENT,
    link            TEXT    NOT NULL UNIQUE,
    title           TEXT    NOT NULL,
    company_name    TEXT    NOT NULL DEFAULT 'Unknown',
    keywords        TEXT    NOT NULL,
    found_at        TEXT    NOT NULL
);
"""

_SEARCH_RUNS_TABLE = """
CREATE TABLE IF NOT EXISTS search_runs (
    id              INTEGER PRIMARY KEY AUTOINCREMENT,
    keywords        TEXT    NOT NULL,
    location        TEXT    NOT NULL,
    geo_id          TEXT,
    total_available INTEGER NOT NULL,
    seen_count      INTEGER NOT NULL,
    matched_count   INTEGER NOT NULL,
    skipped_count   INTEGER NOT NULL,
    started_at      TEXT    NOT NULL,
    finished_at     TEXT    NOT NULL
);
"""


def init_db(path: str | Path) -> sqlite3.Connection:
    """Create the database and tables, returning a connection."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")
    conn.execute(_MATCHES_TABLE)
    conn.execute(_SEARCH_RUNS_TABLE)
    conn.commit()
    return conn


def insert_match(
    conn: sqlite3.Connection,
    match: MatchResult,
    keywords: str,
    found_at: datetime | None = None,
) -> bool:
    """Insert a match, ignoring it if the link is already stored.

    Returns True if a new row was inserted, False if it was a duplicate.
    """
    try:
        conn.execute(
            """
            INSERT INTO matches (link, title, company_name, keywords, found_at)
            VALUES (?, ?, ?, ?, ?)
            """,
            (
                match.link,
                match.title,
                match.company_name,
                keywords,
                (found_at or datetime.now()).isoformat(),
            ),
        )
        conn.commit()
        return True
    except sqlite3.IntegrityError:
        return False


def list_matches(conn: sqlite3.Connection) -> list[MatchResult]:
    """Return all stored matches, oldest first."""
    rows = conn.execute(
        "SELECT link, title, company_name FROM matches ORDER BY id",
    ).fetchall()
    return [MatchResult(row["link"], row["title"], row["company_name"]) for row in rows]


def insert_search_run(
    conn: sqlite3.Connection,
    keywords: str,
    location: str,
    geo_id: str | None,
    total_available: int,
    seen_count: int,
    matched_count: int,
    skipped_count: int,
    started_at: datetime,
    finished_at: datetime,
) -> int:
    """Record a completed search run. Returns the row ID."""
    cursor = conn.execute(
        """
        INSERT INTO search_runs
            (keywords, location, geo_id, total_available, seen_count,
             matched_count, skipped_count, started_at, finished_at)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
        """,
        (
            keywords,
            location,
            geo_id,
            total_available,
            seen_count,
            matched_count,
            skipped_count,
            started_at.isoformat(),
            finished_at.isoformat(),
        ),
    )
    conn.commit()
    return cursor.lastrowid or 0
