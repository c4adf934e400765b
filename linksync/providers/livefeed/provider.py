"""Live streaming feed provider.

Implements the FeedSource interface on top of LiveFeedClient: walks the
configured pages, threads the key cursor from page to page, and parses
the raw records into FeedEvents.
"""

import logging

from linksync.core.errors import KeysExhaustedError
from linksync.core.interfaces import FeedBatch
from linksync.providers.livefeed.client import KeyCursor, LiveFeedClient
from linksync.providers.livefeed.models import parse_feed_records

logger = logging.getLogger(__name__)


class LiveFeedProvider:
    """FeedSource backed by the RapidAPI live streaming feed."""

    def __init__(self, client: LiveFeedClient):
        self._client = client

    @property
    def name(self) -> str:
        return "livefeed"

    def fetch_batch(self, date_str: str, pages: int) -> FeedBatch:
        """Fetch and parse pages 1..pages.

        Args:
            date_str: Feed date (DDMMYYYY)
            pages: Number of pages to fetch

        Returns:
            FeedBatch with raw records (audit copy) and parsed events

        Raises:
            KeysExhaustedError: When every API key has been rejected
        """
        batch = FeedBatch(date_str=date_str)
        cursor = KeyCursor()

        for page in range(1, pages + 1):
            result = self._client.fetch_page(page, date_str, cursor)
            if result.is_fatal:
                raise KeysExhaustedError(self._client.key_count, page=page)

            cursor = result.cursor
            batch.raw_records.extend(result.records)
            batch.pages_fetched += 1

        batch.events = parse_feed_records(batch.raw_records)
        logger.info(
            "[FEED] %s: %d record(s) over %d page(s), %d usable",
            date_str,
            len(batch.raw_records),
            batch.pages_fetched,
            len(batch.events),
        )
        return batch

    def close(self) -> None:
        self._client.close()
