"""Core data types for linksync.

All data structures are dataclasses with attribute access.
Feed-side types are frozen (read-only for the pass); catalog links carry
any extra stored fields through untouched.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from enum import Enum
from typing import Any

DEFAULT_SPORT_CATEGORY = "Football"
DIRECT_LINK_KIND = "Direct"

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


class LinkOrigin(Enum):
    """Who owns a catalog link."""

    MANUAL = "manual"  # Curated by hand, never touched by the engine
    API = "api"  # Written by the engine, replaced every pass


class ProviderBucket(Enum):
    """Provider tag assigned to a feed endpoint from its URL/referer signature."""

    FMP = "FMP"
    SOCO = "SOCO"
    OK9 = "OK9"


# =============================================================================
# FEED SIDE
# =============================================================================


@dataclass(frozen=True)
class FeedEndpoint:
    """A single raw viewing URL reported by the feed."""

    url: str
    referer: str | None = None


@dataclass(frozen=True)
class FeedEvent:
    """A live event record from the feed.

    start_time is epoch seconds as reported by the feed.
    """

    home_team: str
    away_team: str
    start_time: int
    sport_category: str = DEFAULT_SPORT_CATEGORY
    endpoints: tuple[FeedEndpoint, ...] = ()

    @property
    def start_time_ms(self) -> int:
        return self.start_time * 1000

    @property
    def label(self) -> str:
        return f"{self.home_team} vs {self.away_team}"


@dataclass(frozen=True)
class ClassifiedEndpoint:
    """A feed endpoint that matched a known provider signature."""

    endpoint: FeedEndpoint
    bucket: ProviderBucket
    logo: str

    @property
    def url(self) -> str:
        return self.endpoint.url


# =============================================================================
# CATALOG SIDE
# =============================================================================


@dataclass
class Link:
    """A display-ready viewing entry stored on a catalog event.

    raw is the exact stored object for links read from the catalog. Manual
    links are written back from it, so fields this engine does not model
    survive a round trip unchanged.
    """

    name: str
    url: str
    kind: str = DIRECT_LINK_KIND
    logo: str = ""
    origin: LinkOrigin = LinkOrigin.MANUAL
    raw: dict[str, Any] | None = field(default=None, compare=False, repr=False)

    @property
    def is_manual(self) -> bool:
        return self.origin == LinkOrigin.MANUAL


@dataclass
class CatalogEvent:
    """A scheduled event in the catalog, keyed by an opaque store key.

    start_time is timezone-aware, or None when the stored timestamp could
    not be parsed; such entries never match a feed event.
    """

    key: str
    team1_name: str
    team2_name: str
    sport_type: str
    start_time: datetime | None
    links: list[Link] = field(default_factory=list)

    @property
    def start_time_ms(self) -> int | None:
        if self.start_time is None:
            return None
        return (self.start_time - _EPOCH) // timedelta(milliseconds=1)

    @property
    def label(self) -> str:
        return f"{self.team1_name} vs {self.team2_name}"
