"""Feed-to-catalog matching.

Provides team name normalization, endpoint classification, feed
deduplication, event matching and per-event result tracking.

Main entry points:
    from linksync.consumers.matching import dedupe_feed_events, match_catalog_event

    for event in dedupe_feed_events(batch.events):
        entry = match_catalog_event(event, catalog)
"""

from linksync.consumers.matching.classifier import (
    classify_endpoint,
    parse_priority,
    rank_endpoints,
)
from linksync.consumers.matching.dedupe import dedupe_feed_events
from linksync.consumers.matching.event_matcher import (
    NearMiss,
    closest_candidate,
    match_catalog_event,
)
from linksync.consumers.matching.normalizer import normalize_team_name, team_pair_key
from linksync.consumers.matching.result import (
    EventOutcome,
    OutcomeCategory,
    SkipReason,
    SyncResult,
)

__all__ = [
    # Normalizer
    "normalize_team_name",
    "team_pair_key",
    # Classifier
    "classify_endpoint",
    "parse_priority",
    "rank_endpoints",
    # Deduplication
    "dedupe_feed_events",
    # Matcher
    "match_catalog_event",
    "closest_candidate",
    "NearMiss",
    # Results
    "EventOutcome",
    "OutcomeCategory",
    "SkipReason",
    "SyncResult",
]
