"""Interfaces for the collaborators a sync pass talks to.

The engine depends on these protocols, not on HTTP or storage directly.
Implementations can be network-backed, sqlite-backed, or in-memory fakes
for testing.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol

from linksync.core.types import CatalogEvent, FeedEvent, Link


@dataclass
class FeedBatch:
    """Everything the feed returned for one pass.

    raw_records is the unfiltered payload exactly as received (audit copy);
    events holds the records that parsed into FeedEvents, in feed order.
    """

    date_str: str
    raw_records: list[dict[str, Any]] = field(default_factory=list)
    events: list[FeedEvent] = field(default_factory=list)
    pages_fetched: int = 0


class FeedSource(Protocol):
    """Paginated live-event feed."""

    def fetch_batch(self, date_str: str, pages: int) -> FeedBatch:
        """Fetch pages 1..pages for a feed date.

        Raises:
            KeysExhaustedError: When no usable credential remains
        """
        ...


class CatalogStore(Protocol):
    """Catalog of scheduled events."""

    def read_catalog(self) -> list[CatalogEvent]:
        """Read the full catalog in store enumeration order."""
        ...

    def write_links(self, key: str, links: Sequence[Link]) -> None:
        """Replace the link list of one catalog event."""
        ...


class AuditSink(Protocol):
    """Verbatim copy of the raw feed, persisted before deduplication."""

    def record_feed(self, pass_id: str, date_str: str, records: list[dict[str, Any]]) -> int:
        """Persist raw records, returning how many were stored."""
        ...
