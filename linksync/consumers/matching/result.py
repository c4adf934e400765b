"""Per-event outcomes of a sync pass.

Every unique feed event ends in exactly one category:
- UPDATED: matched a catalog entry and its link list was written
- SKIPPED: nothing written (no catalog match, or nothing classifiable)

Skips are normal outcomes, not errors. They are counted and logged at
debug level only.
"""

from dataclasses import dataclass, field
from enum import Enum

from linksync.core.types import FeedEvent, ProviderBucket

# =============================================================================
# OUTCOME CATEGORIES
# =============================================================================


class OutcomeCategory(Enum):
    """Top-level outcome for one feed event."""

    UPDATED = "updated"
    SKIPPED = "skipped"


class SkipReason(Enum):
    """Why a feed event produced no write."""

    NO_MATCH = "no_match"  # No catalog entry passed sport/teams/time checks
    NO_CLASSIFIED_ENDPOINTS = "no_classified_endpoints"  # Matched, but no known provider


SKIP_DISPLAY: dict[SkipReason, str] = {
    SkipReason.NO_MATCH: "No scheduled event found",
    SkipReason.NO_CLASSIFIED_ENDPOINTS: "No endpoint from a known provider",
}


# =============================================================================
# EVENT OUTCOME
# =============================================================================


@dataclass
class EventOutcome:
    """Result for one feed event.

    Use the factory methods:
        EventOutcome.updated(event, key, manual_count=1, api_count=3, buckets=[...])
        EventOutcome.skipped(SkipReason.NO_MATCH, event, detail="...")
    """

    category: OutcomeCategory
    feed_event: FeedEvent
    catalog_key: str | None = None
    skip_reason: SkipReason | None = None
    detail: str | None = None

    # For UPDATED
    manual_count: int = 0
    api_count: int = 0
    buckets: list[ProviderBucket] = field(default_factory=list)

    @classmethod
    def updated(
        cls,
        feed_event: FeedEvent,
        catalog_key: str,
        *,
        manual_count: int,
        api_count: int,
        buckets: list[ProviderBucket] | None = None,
    ) -> "EventOutcome":
        """Create an UPDATED result."""
        return cls(
            category=OutcomeCategory.UPDATED,
            feed_event=feed_event,
            catalog_key=catalog_key,
            manual_count=manual_count,
            api_count=api_count,
            buckets=buckets or [],
        )

    @classmethod
    def skipped(
        cls,
        reason: SkipReason,
        feed_event: FeedEvent,
        *,
        catalog_key: str | None = None,
        detail: str | None = None,
    ) -> "EventOutcome":
        """Create a SKIPPED result."""
        return cls(
            category=OutcomeCategory.SKIPPED,
            feed_event=feed_event,
            catalog_key=catalog_key,
            skip_reason=reason,
            detail=detail,
        )

    @property
    def is_updated(self) -> bool:
        return self.category == OutcomeCategory.UPDATED

    @property
    def is_skipped(self) -> bool:
        return self.category == OutcomeCategory.SKIPPED

    @property
    def is_matched(self) -> bool:
        """True if a catalog entry was found, whether or not it was written."""
        return self.catalog_key is not None

    def display_text(self) -> str:
        if self.is_updated:
            return f"Updated {self.catalog_key} ({self.api_count} api link(s))"
        text = SKIP_DISPLAY.get(self.skip_reason, "Skipped") if self.skip_reason else "Skipped"
        return f"{text}: {self.detail}" if self.detail else text


# =============================================================================
# PASS RESULT
# =============================================================================


@dataclass
class SyncResult:
    """Aggregated result of one sync pass."""

    pass_id: str
    date_str: str
    fetched: int = 0  # Raw feed records across all pages
    unique: int = 0  # After deduplication
    outcomes: list[EventOutcome] = field(default_factory=list)

    def add(self, outcome: EventOutcome) -> None:
        self.outcomes.append(outcome)

    def _count_skips(self, reason: SkipReason) -> int:
        return sum(1 for o in self.outcomes if o.skip_reason == reason)

    @property
    def matched(self) -> int:
        return sum(1 for o in self.outcomes if o.is_matched)

    @property
    def updated(self) -> int:
        return sum(1 for o in self.outcomes if o.is_updated)

    @property
    def skipped_no_match(self) -> int:
        return self._count_skips(SkipReason.NO_MATCH)

    @property
    def skipped_no_endpoints(self) -> int:
        return self._count_skips(SkipReason.NO_CLASSIFIED_ENDPOINTS)

    @property
    def updated_keys(self) -> list[str]:
        return [o.catalog_key for o in self.outcomes if o.is_updated and o.catalog_key]

    def summary(self) -> str:
        return (
            f"fetched={self.fetched} unique={self.unique} matched={self.matched} "
            f"updated={self.updated} no_match={self.skipped_no_match} "
            f"no_endpoints={self.skipped_no_endpoints}"
        )

    def to_dict(self) -> dict:
        """Convert to dict for JSON output."""
        return {
            "pass_id": self.pass_id,
            "date": self.date_str,
            "fetched": self.fetched,
            "unique": self.unique,
            "matched": self.matched,
            "updated": self.updated,
            "skipped_no_match": self.skipped_no_match,
            "skipped_no_endpoints": self.skipped_no_endpoints,
            "updated_keys": self.updated_keys,
        }
