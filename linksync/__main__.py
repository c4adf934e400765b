"""Command-line entry point.

Usage:
    python -m linksync                 # one pass, exit 0/1
    python -m linksync --date 17102026 # query a specific feed date
    python -m linksync --schedule      # repeat on SYNC_CRON until stopped
    python -m linksync --json          # print the pass result as JSON
"""

import argparse
import json
import logging
import sys
from datetime import datetime

from linksync.catalog import create_catalog_store
from linksync.config import Config, get_feed_timezone, get_link_priority
from linksync.consumers import CronScheduler, SyncEngine
from linksync.consumers.matching import parse_priority
from linksync.core.errors import LinkSyncError
from linksync.database import FeedAuditLog
from linksync.providers import create_feed_provider
from linksync.utilities.logging import setup_logging
from linksync.utilities.tz import FEED_DATE_FORMAT

logger = logging.getLogger("linksync")


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="linksync",
        description="Attach live stream links from the feed to scheduled catalog events.",
    )
    parser.add_argument(
        "--date",
        help="Feed date as DDMMYYYY (default: today in FEED_TIMEZONE; single pass only)",
    )
    parser.add_argument(
        "--pages",
        type=int,
        help="Feed pages to fetch, at least 1 (default: FEED_PAGES)",
    )
    parser.add_argument(
        "--schedule",
        action="store_true",
        help="Keep running, one pass per SYNC_CRON slot",
    )
    parser.add_argument(
        "--no-audit",
        action="store_true",
        help="Skip the raw feed audit copy",
    )
    parser.add_argument("--json", action="store_true", help="Print the pass result as JSON")
    parser.add_argument("--log-level", help="Override LOG_LEVEL")
    return parser.parse_args(argv)


def build_engine(pages: int | None = None, audit: bool = True) -> SyncEngine:
    """Wire a SyncEngine from configuration."""
    Config.validate()
    return SyncEngine(
        feed=create_feed_provider(),
        catalog=create_catalog_store(),
        audit=FeedAuditLog(Config.AUDIT_DB_PATH) if audit else None,
        priority=parse_priority(get_link_priority()),
        pages=pages if pages is not None else Config.FEED_PAGES,
        feed_tz=get_feed_timezone(),
    )


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    setup_logging(log_level=args.log_level)

    if args.pages is not None and args.pages < 1:
        print(f"ERROR: --pages must be >= 1, got {args.pages}", file=sys.stderr)
        return 2
    if args.schedule and args.date:
        print("ERROR: --date cannot be combined with --schedule", file=sys.stderr)
        return 2

    target_date = None
    if args.date:
        try:
            target_date = datetime.strptime(args.date, FEED_DATE_FORMAT).date()
        except ValueError:
            print(f"ERROR: --date must be DDMMYYYY, got '{args.date}'", file=sys.stderr)
            return 2

    try:
        engine = build_engine(pages=args.pages, audit=not args.no_audit)

        if args.schedule:
            try:
                scheduler = CronScheduler(engine.run_pass, Config.SYNC_CRON)
            except ValueError as e:
                print(f"ERROR: {e}", file=sys.stderr)
                return 1
            scheduler.start()
            try:
                scheduler.wait()
            except KeyboardInterrupt:
                scheduler.stop()
                return 0
            return 1 if scheduler.exhausted else 0

        result = engine.run_pass(target_date)
    except LinkSyncError as e:
        logger.error("[SYNC] Pass aborted: %s", e)
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(f"Sync done. Processed: {result.unique}, Updated: {result.updated}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
