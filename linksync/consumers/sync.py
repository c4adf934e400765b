"""Sync engine - one reconciliation pass.

A pass:
1. Fetch feed pages for today's feed date (key exhaustion aborts the pass)
2. Store the raw records in the audit log, before any filtering
3. Read the catalog snapshot once
4. Deduplicate the feed, then for each unique event in feed order:
   match -> rank endpoints -> merge links -> write

The snapshot is never refreshed mid-pass: a write for one feed event does
not influence matching for a later one. Per-event skips (no match, no
classifiable endpoint) are recorded in the SyncResult and never raise.
"""

import logging
import uuid
from collections.abc import Sequence
from datetime import UTC, date, datetime
from zoneinfo import ZoneInfo

from linksync.consumers.link_merge import merge_links
from linksync.consumers.matching import (
    EventOutcome,
    SkipReason,
    SyncResult,
    closest_candidate,
    dedupe_feed_events,
    match_catalog_event,
    rank_endpoints,
)
from linksync.consumers.naming import BrandedNameGenerator
from linksync.core.interfaces import AuditSink, CatalogStore, FeedSource
from linksync.core.types import CatalogEvent, FeedEvent, ProviderBucket
from linksync.utilities.constants import DEFAULT_LINK_PRIORITY
from linksync.utilities.logging import bind_pass_id
from linksync.utilities.tz import feed_date_str

logger = logging.getLogger(__name__)


def new_pass_id() -> str:
    """Sortable, unique identifier for a pass."""
    return f"{datetime.now(UTC):%Y%m%dT%H%M%S}-{uuid.uuid4().hex[:6]}"


class SyncEngine:
    """Runs reconciliation passes against a feed and a catalog.

    Usage:
        engine = SyncEngine(feed, catalog, audit=FeedAuditLog())
        result = engine.run_pass()
        print(result.summary())
    """

    def __init__(
        self,
        feed: FeedSource,
        catalog: CatalogStore,
        audit: AuditSink | None = None,
        *,
        priority: Sequence[ProviderBucket] = DEFAULT_LINK_PRIORITY,
        name_generator: BrandedNameGenerator | None = None,
        pages: int = 2,
        feed_tz: ZoneInfo | None = None,
    ):
        """Initialize engine.

        Args:
            feed: Source of feed pages
            catalog: Catalog store (read once per pass, written per match)
            audit: Where the raw feed is copied; None disables the copy
            priority: Provider buckets, highest link priority first
            name_generator: Names for overflow links (inject a seeded one in tests)
            pages: Number of feed pages per pass
            feed_tz: Zone for the feed date; defaults to the configured one
        """
        self._feed = feed
        self._catalog = catalog
        self._audit = audit
        self._priority = list(priority)
        self._names = name_generator or BrandedNameGenerator()
        self._pages = pages
        self._feed_tz = feed_tz

    def run_pass(self, target_date: date | datetime | None = None) -> SyncResult:
        """Run one full pass.

        Args:
            target_date: Feed date to query; defaults to now in the feed timezone

        Returns:
            SyncResult with per-event outcomes and counts

        Raises:
            KeysExhaustedError: No feed key left (pass aborted)
            CatalogStoreError: Catalog read or write failed (pass aborted)
            AuditError: Raw feed copy could not be stored (pass aborted)
        """
        pass_id = new_pass_id()
        date_str = feed_date_str(target_date, self._feed_tz)
        with bind_pass_id(pass_id):
            return self._run_pass(pass_id, date_str)

    def _run_pass(self, pass_id: str, date_str: str) -> SyncResult:
        logger.info("[SYNC] Pass %s starting (date=%s, pages=%d)", pass_id, date_str, self._pages)

        batch = self._feed.fetch_batch(date_str, self._pages)
        result = SyncResult(pass_id=pass_id, date_str=date_str, fetched=len(batch.raw_records))

        if self._audit is not None:
            self._audit.record_feed(pass_id, date_str, batch.raw_records)

        if not batch.events:
            logger.info("[SYNC] No feed matches for %s", date_str)
            return result

        catalog = self._catalog.read_catalog()
        unique = dedupe_feed_events(batch.events)
        result.unique = len(unique)

        written: set[str] = set()
        for feed_event in unique:
            outcome = self.process_event(feed_event, catalog, written)
            result.add(outcome)

        logger.info("[SYNC] Pass %s done: %s", pass_id, result.summary())
        return result

    def process_event(
        self,
        feed_event: FeedEvent,
        catalog: Sequence[CatalogEvent],
        written: set[str] | None = None,
    ) -> EventOutcome:
        """Match one feed event and, if anything classifies, write its links.

        Args:
            feed_event: Deduplicated feed event
            catalog: Catalog snapshot for this pass
            written: Keys already written this pass (updated in place)

        Returns:
            EventOutcome for the event
        """
        entry = match_catalog_event(feed_event, catalog)
        if entry is None:
            near_miss = closest_candidate(feed_event, catalog)
            detail = near_miss.describe() if near_miss else None
            logger.debug("[SYNC] No catalog match for %s (%s)", feed_event.label, detail or "-")
            return EventOutcome.skipped(SkipReason.NO_MATCH, feed_event, detail=detail)

        ranked = rank_endpoints(feed_event.endpoints, self._priority)
        if not ranked:
            logger.debug(
                "[SYNC] %s matched %s but none of %d endpoint(s) classified",
                feed_event.label,
                entry.key,
                len(feed_event.endpoints),
            )
            return EventOutcome.skipped(
                SkipReason.NO_CLASSIFIED_ENDPOINTS,
                feed_event,
                catalog_key=entry.key,
                detail=f"{len(feed_event.endpoints)} endpoint(s), none from a known provider",
            )

        if written is not None and entry.key in written:
            logger.warning(
                "[SYNC] %s already updated this pass; %s overwrites it",
                entry.key,
                feed_event.label,
            )

        links = merge_links(entry.links, ranked, feed_event.sport_category, self._names)
        self._catalog.write_links(entry.key, links)
        if written is not None:
            written.add(entry.key)

        manual_count = sum(1 for link in links if link.is_manual)
        logger.info(
            "[SYNC] Updated %s -> %s (%d manual + %d api)",
            feed_event.label,
            entry.key,
            manual_count,
            len(ranked),
        )
        return EventOutcome.updated(
            feed_event,
            entry.key,
            manual_count=manual_count,
            api_count=len(ranked),
            buckets=[item.bucket for item in ranked],
        )
