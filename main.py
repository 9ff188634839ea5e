"""CLI entry point for the LinkedIn Easy Apply listing finder."""

import argparse
import asyncio
import logging
import sys

from jobhunt.browser.session import BrowserSession
from jobhunt.core.config import Settings
from jobhunt.core.db import init_db
from jobhunt.core.errors import JobHuntError
from jobhunt.pipeline.orchestrator import export_results_json, run_all_searches
from jobhunt.platforms.linkedin.adapter import LinkedInAdapter
from jobhunt.platforms.linkedin.searcher import build_search_url, workplace_codes


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Find LinkedIn Easy Apply listings matching title, description "
                    "and language criteria",
    )
    subparsers = parser.add_subparsers(dest="command")

    # --- search subcommand (default) ---
    search_parser = subparsers.add_parser("search", help="Run listing searches")
    _add_search_flags(search_parser, help_visible=True)

    # --- backward compat: top-level flags for search ---
    _add_search_flags(parser, help_visible=False)

    args = parser.parse_args(argv)

    # Default to search when no subcommand given
    if args.command is None:
        args.command = "search"

    return args


def _add_search_flags(parser: argparse.ArgumentParser, *, help_visible: bool) -> None:
    def _help(text: str) -> str:
        return text if help_visible else argparse.SUPPRESS

    parser.add_argument(
        "--config",
        default="config/settings.yaml",
        help=_help("Path to settings YAML file (default: config/settings.yaml)"),
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help=_help("Show what would be done without launching a browser"),
    )
    parser.add_argument(
        "--export",
        choices=["json"],
        help=_help("Export results to format (json)"),
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help=_help("Stop each search after this many matches"),
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help=_help("Enable verbose (DEBUG) logging"),
    )


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def dry_run(settings: Settings, limit: int | None) -> None:
    """Print what would happen without actually searching."""
    cap = limit if limit is not None else settings.pipeline.max_results
    print(f"[DRY RUN] {len(settings.searches)} searches configured")

    for criteria in settings.searches:
        print(f"[DRY RUN] '{criteria.keywords}' in '{criteria.location or 'anywhere'}'")
        print(f"  Workplace codes: {workplace_codes(criteria.workplace) or '(any)'}")
        print(f"  Title pattern: {criteria.title_pattern}")
        print(f"  Description pattern: {criteria.description_pattern}")
        print(f"  Languages: {', '.join(criteria.languages)}")
        print(f"  Max matches: {cap if cap is not None else 'unlimited'}")
        print(f"  First page: {build_search_url(criteria, None, 0)}")

    print("[DRY RUN] Would store 0 matches (no browser in dry-run)")


async def run(settings: Settings, export_format: str | None, limit: int | None) -> None:
    """Run the full search pipeline with a real browser."""
    conn = init_db(settings.database.path)

    try:
        async with BrowserSession(settings.browser) as session:
            adapter = LinkedInAdapter(
                session.page,
                selectors=settings.selectors,
                pipeline=settings.pipeline,
            )
            results = await run_all_searches(settings, adapter, conn, limit)
    finally:
        conn.close()

    total_seen = sum(r.seen_count for r in results)
    total_matched = sum(r.matched_count for r in results)
    total_new = sum(r.new_count for r in results)

    print(f"\nSearch complete: {total_seen} seen, {total_matched} matched, "
          f"{total_new} new matches written to DB.")

    for r in results:
        print(f"  '{r.keywords}': {r.seen_count}/{r.total_available} seen, "
              f"{r.matched_count} matched, {r.skipped_count} skipped, {r.new_count} new")
        for m in r.matches:
            print(f"    {m.title} — {m.company_name}: {m.link}")

    if export_format == "json" and results:
        output = export_results_json(results)
        print(f"\n{output}")


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    setup_logging(args.verbose)

    if args.limit is not None and args.limit < 1:
        print("Error: --limit must be at least 1", file=sys.stderr)
        sys.exit(1)

    try:
        settings = Settings.from_yaml(args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)

    if args.dry_run:
        dry_run(settings, args.limit)
        return

    try:
        asyncio.run(run(settings, args.export, args.limit))
    except JobHuntError as e:
        print(f"Search failed: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
