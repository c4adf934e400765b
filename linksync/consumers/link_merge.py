"""Link merge policy.

Rewrites a catalog event's link list from freshly ranked endpoints:

    existing: [Promo(manual), Old(api), Backup(manual)]
    ranked:   [soco, ok9, fmp2]
    result:   [Promo, Backup, SPORTIFy TV=soco, SPORTIFy TV+ HD=ok9, <branded>=fmp2]

Manual links (origin "manual", or no origin at all) are kept verbatim and
in order at the head. Every api link from the previous run is dropped and
the api tail is rebuilt from scratch, so the result never depends on what
an earlier pass wrote.
"""

import logging
from collections.abc import Sequence

from linksync.consumers.naming import BrandedNameGenerator
from linksync.core.types import DIRECT_LINK_KIND, ClassifiedEndpoint, Link, LinkOrigin
from linksync.utilities.constants import PRIMARY_LINK_NAME, SECONDARY_LINK_NAME

logger = logging.getLogger(__name__)

# Fixed names for the top-ranked slots, in rank order
FIXED_SLOT_NAMES: tuple[str, ...] = (PRIMARY_LINK_NAME, SECONDARY_LINK_NAME)


def manual_links(existing: Sequence[Link]) -> list[Link]:
    """Manual subsequence of a link list, original order, same objects."""
    return [link for link in existing if link.is_manual]


def build_api_links(
    ranked: Sequence[ClassifiedEndpoint],
    sport_category: str | None,
    name_generator: BrandedNameGenerator,
) -> list[Link]:
    """Turn ranked endpoints into engine-owned links.

    Rank 0 and 1 get the fixed primary/secondary names; every further rank
    gets a generated branded name.
    """
    links: list[Link] = []
    for rank, item in enumerate(ranked):
        if rank < len(FIXED_SLOT_NAMES):
            name = FIXED_SLOT_NAMES[rank]
        else:
            name = name_generator.next_name(sport_category)
        links.append(
            Link(
                name=name,
                url=item.url,
                kind=DIRECT_LINK_KIND,
                logo=item.logo,
                origin=LinkOrigin.API,
            )
        )
    return links


def merge_links(
    existing: Sequence[Link],
    ranked: Sequence[ClassifiedEndpoint],
    sport_category: str | None,
    name_generator: BrandedNameGenerator | None = None,
) -> list[Link]:
    """Compute the replacement link list for a matched catalog event.

    Args:
        existing: Current link list of the catalog event
        ranked: Classified endpoints, best first (see rank_endpoints)
        sport_category: Feed sport category (drives branded names)
        name_generator: Source of names for rank >= 2

    Returns:
        Manual head followed by the rebuilt api tail
    """
    head = manual_links(existing)
    tail = build_api_links(ranked, sport_category, name_generator or BrandedNameGenerator())

    dropped = len(existing) - len(head)
    if dropped:
        logger.debug("[MERGE] Replacing %d api link(s) with %d", dropped, len(tail))

    return head + tail
