"""Endpoint classification and ranking.

Each feed endpoint is tagged with the provider it belongs to by testing
its URL (or, for FMP, its referer header) against known signatures. The
tagged endpoints are then ordered by the deployment's provider priority:

    priority FMP, SOCO, OK9
    endpoints [ok9-a, soco-a, junk, soco-b]  ->  [soco-a, soco-b, ok9-a]

Endpoints matching no signature are dropped and never become links.
"""

import logging
from collections.abc import Iterable, Sequence

from linksync.core.types import ClassifiedEndpoint, FeedEndpoint, ProviderBucket
from linksync.utilities.constants import (
    DEFAULT_LINK_PRIORITY,
    PROVIDER_LOGOS,
    PROVIDER_SIGNATURES,
)

logger = logging.getLogger(__name__)


def classify_endpoint(endpoint: FeedEndpoint) -> ProviderBucket | None:
    """Tag an endpoint with its provider bucket.

    Signatures are tested in declared order; the first match wins.

    Args:
        endpoint: Raw feed endpoint

    Returns:
        ProviderBucket, or None if no signature matches
    """
    url = endpoint.url or ""
    referer = endpoint.referer or ""

    for bucket, field_name, signature in PROVIDER_SIGNATURES:
        haystack = referer if field_name == "referer" else url
        if signature in haystack:
            return bucket

    return None


def parse_priority(tags: Iterable[str]) -> list[ProviderBucket]:
    """Convert configured provider tags into buckets.

    Unknown and repeated tags are ignored with a warning.

    Args:
        tags: Provider tags like ["FMP", "SOCO", "OK9"] (case-insensitive)

    Returns:
        Buckets in descending priority
    """
    priority: list[ProviderBucket] = []
    for tag in tags:
        try:
            bucket = ProviderBucket(tag.strip().upper())
        except ValueError:
            logger.warning("[CLASSIFY] Unknown provider '%s' in link priority - ignored", tag)
            continue
        if bucket in priority:
            logger.warning("[CLASSIFY] Provider '%s' listed twice in link priority", tag)
            continue
        priority.append(bucket)
    return priority


def rank_endpoints(
    endpoints: Iterable[FeedEndpoint],
    priority: Sequence[ProviderBucket] = DEFAULT_LINK_PRIORITY,
) -> list[ClassifiedEndpoint]:
    """Classify endpoints and order them by provider priority.

    Feed order is kept within a bucket. Buckets are concatenated in
    priority order; a bucket absent from the priority is not ranked.

    Args:
        endpoints: Endpoints of one feed event, in feed order
        priority: Provider buckets, highest priority first

    Returns:
        Classified endpoints, best first (empty if none classify)
    """
    buckets: dict[ProviderBucket, list[ClassifiedEndpoint]] = {b: [] for b in priority}
    dropped = 0

    for endpoint in endpoints:
        bucket = classify_endpoint(endpoint)
        if bucket is None or bucket not in buckets:
            dropped += 1
            continue
        buckets[bucket].append(
            ClassifiedEndpoint(endpoint=endpoint, bucket=bucket, logo=PROVIDER_LOGOS[bucket])
        )

    ranked = [item for bucket in priority for item in buckets[bucket]]

    if dropped:
        logger.debug("[CLASSIFY] Dropped %d unclassified endpoint(s), kept %d", dropped, len(ranked))

    return ranked
