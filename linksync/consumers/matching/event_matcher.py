"""Feed-to-catalog event matching.

Greedy first-fit: catalog entries are scanned in enumeration order and the
first one passing all three checks wins. There is no scoring and no
search for a better candidate further down the catalog, so when two
near-duplicate entries both qualify, catalog order decides.

Checks, in order:
1. Sport: catalog sport_type equals feed sport_category (case-insensitive)
2. Teams: team1/home and team2/away each correspond, where two normalized
   names correspond if either contains the other. Sides are never swapped.
3. Time: start times are less than 24 hours apart
"""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from linksync.consumers.matching.normalizer import normalize_team_name
from linksync.core.types import DEFAULT_SPORT_CATEGORY, CatalogEvent, FeedEvent
from linksync.utilities.constants import MATCH_WINDOW_MS, NEAR_MISS_MIN_SCORE
from linksync.utilities.fuzzy_match import score_names

logger = logging.getLogger(__name__)


def names_correspond(a: str, b: str) -> bool:
    """Bidirectional substring test on normalized names.

    An empty key is a substring of anything, which is why the feed parser
    drops records with a blank team name before they get here.
    """
    return a in b or b in a


def sport_matches(feed_event: FeedEvent, catalog_event: CatalogEvent) -> bool:
    feed_sport = (feed_event.sport_category or DEFAULT_SPORT_CATEGORY).lower()
    return (catalog_event.sport_type or "").lower() == feed_sport


def within_window(feed_event: FeedEvent, catalog_event: CatalogEvent) -> bool:
    catalog_ms = catalog_event.start_time_ms
    if catalog_ms is None:
        return False
    return abs(feed_event.start_time_ms - catalog_ms) < MATCH_WINDOW_MS


def match_catalog_event(
    feed_event: FeedEvent,
    catalog: Iterable[CatalogEvent],
) -> CatalogEvent | None:
    """Find the catalog entry corresponding to a feed event.

    Args:
        feed_event: Deduplicated feed record
        catalog: Catalog snapshot in enumeration order

    Returns:
        First entry passing sport, team and time checks, or None
    """
    home = normalize_team_name(feed_event.home_team)
    away = normalize_team_name(feed_event.away_team)

    for entry in catalog:
        if not sport_matches(feed_event, entry):
            continue

        if not names_correspond(normalize_team_name(entry.team1_name), home):
            continue
        if not names_correspond(normalize_team_name(entry.team2_name), away):
            continue

        if not within_window(feed_event, entry):
            logger.debug(
                "[MATCH] Teams match %s but start time is outside window: %s",
                entry.key,
                feed_event.label,
            )
            continue

        logger.debug("[MATCH] %s -> %s (%s)", feed_event.label, entry.key, entry.label)
        return entry

    return None


# =============================================================================
# NEAR-MISS DIAGNOSTICS
# =============================================================================


@dataclass
class NearMiss:
    """Closest catalog entry for a feed event that matched nothing."""

    catalog_key: str
    catalog_label: str
    score: float

    def describe(self) -> str:
        return f"closest {self.catalog_key} '{self.catalog_label}' ({self.score:.0f}%)"


def closest_candidate(
    feed_event: FeedEvent,
    catalog: Sequence[CatalogEvent],
    min_score: float = NEAR_MISS_MIN_SCORE,
) -> NearMiss | None:
    """Find the best fuzzy-scored same-sport catalog entry.

    Only used to explain a failed match in logs. It never changes which
    entry (if any) receives links.

    Args:
        feed_event: Feed record that matched nothing
        catalog: Catalog snapshot
        min_score: Candidates scoring below this are not reported

    Returns:
        NearMiss for the best candidate, or None
    """
    best: NearMiss | None = None

    for entry in catalog:
        if not sport_matches(feed_event, entry):
            continue
        result = score_names(feed_event.label, entry.label)
        if result.score < min_score:
            continue
        if best is None or result.score > best.score:
            best = NearMiss(catalog_key=entry.key, catalog_label=entry.label, score=result.score)

    return best
