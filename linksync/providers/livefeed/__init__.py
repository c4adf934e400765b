"""RapidAPI live streaming feed provider."""

from linksync.providers.livefeed.client import (
    FetchResult,
    FetchStatus,
    KeyCursor,
    LiveFeedClient,
)
from linksync.providers.livefeed.models import RawMatch, RawServer, parse_feed_records
from linksync.providers.livefeed.provider import LiveFeedProvider

__all__ = [
    "FetchResult",
    "FetchStatus",
    "KeyCursor",
    "LiveFeedClient",
    "LiveFeedProvider",
    "RawMatch",
    "RawServer",
    "parse_feed_records",
]
