"""Feed providers.

create_feed_provider() is the single place the feed is wired from Config.
"""

from linksync.config import Config
from linksync.providers.livefeed import LiveFeedClient, LiveFeedProvider


def create_feed_provider() -> LiveFeedProvider:
    """Build the feed provider from configuration."""
    client = LiveFeedClient(
        api_keys=Config.FEED_KEYS,
        base_url=Config.FEED_BASE_URL,
        host=Config.FEED_HOST,
        timeout=Config.HTTP_TIMEOUT,
    )
    return LiveFeedProvider(client)


__all__ = ["LiveFeedClient", "LiveFeedProvider", "create_feed_provider"]
