"""Feed deduplication.

The feed is paginated and the same fixture can show up on more than one
page, sometimes with a longer endpoint list the second time. Records are
folded by normalized team pair, keeping the richest one.
"""

import logging
from collections.abc import Iterable

from linksync.consumers.matching.normalizer import team_pair_key
from linksync.core.types import FeedEvent

logger = logging.getLogger(__name__)


def dedupe_feed_events(events: Iterable[FeedEvent]) -> list[FeedEvent]:
    """Collapse feed records sharing a team pair into one.

    The record with more endpoints wins; on a tie the first one seen stays.
    Output keeps first-occurrence order of each key (a fold, not a sort).

    Args:
        events: Raw feed events across all pages, in feed order

    Returns:
        One event per distinct "home_vs_away" key
    """
    unique: dict[str, FeedEvent] = {}
    collapsed = 0

    for event in events:
        key = team_pair_key(event.home_team, event.away_team)
        kept = unique.get(key)
        if kept is None:
            unique[key] = event
            continue

        collapsed += 1
        if len(event.endpoints) > len(kept.endpoints):
            # dict assignment keeps the key's original position
            unique[key] = event

    if collapsed:
        logger.debug("[DEDUPE] Collapsed %d repeated feed record(s)", collapsed)

    return list(unique.values())
