"""Wire models for the live streaming feed.

Raw page payload:
    {"matches": [{"home_team_name": "...", "away_team_name": "...",
                  "sport_category": "Football", "match_time": 1760720400,
                  "servers": [{"url": "...", "headers": {"referer": "..."}}]}]}

Records are validated leniently (unknown fields allowed, numeric strings
coerced) and converted into core FeedEvents.
"""

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from linksync.consumers.matching.normalizer import normalize_team_name
from linksync.core.types import DEFAULT_SPORT_CATEGORY, FeedEndpoint, FeedEvent

logger = logging.getLogger(__name__)


class RawServer(BaseModel):
    """One server (endpoint) entry of a feed match."""

    model_config = ConfigDict(extra="allow")

    url: str | None = None
    headers: dict[str, Any] | None = None

    @property
    def referer(self) -> str | None:
        if not self.headers:
            return None
        # Header names arrive in whatever case the provider used
        for name, value in self.headers.items():
            if name.lower() == "referer" and value:
                return str(value)
        return None

    def to_endpoint(self) -> FeedEndpoint:
        return FeedEndpoint(url=self.url or "", referer=self.referer)


class RawMatch(BaseModel):
    """One match record from a feed page."""

    model_config = ConfigDict(extra="allow")

    home_team_name: str | None = None
    away_team_name: str | None = None
    sport_category: str | None = None
    match_time: int | None = None
    servers: list[RawServer | None] | None = None

    @field_validator("match_time", mode="before")
    @classmethod
    def _coerce_match_time(cls, value: Any) -> Any:
        # Some pages send epoch seconds as "1760720400" or 1760720400.0
        if isinstance(value, str | float) and not isinstance(value, bool):
            try:
                return int(float(value))
            except (ValueError, OverflowError):
                return value
        return value

    def to_feed_event(self) -> FeedEvent | None:
        """Convert to a FeedEvent, or None if the record can't be matched.

        A team name that normalizes to "" ("", "F.C.", "---") would be a
        substring of every catalog name, so such records are rejected too.
        """
        if self.match_time is None:
            return None
        if not normalize_team_name(self.home_team_name) or not normalize_team_name(
            self.away_team_name
        ):
            return None

        endpoints = tuple(s.to_endpoint() for s in self.servers or [] if s is not None)
        return FeedEvent(
            home_team=self.home_team_name,
            away_team=self.away_team_name,
            start_time=self.match_time,
            sport_category=self.sport_category or DEFAULT_SPORT_CATEGORY,
            endpoints=endpoints,
        )


def parse_feed_records(records: list[dict[str, Any]]) -> list[FeedEvent]:
    """Parse raw feed records into FeedEvents, in feed order.

    Records that fail validation or lack team names / start time are
    skipped with a warning. They still exist in the audit copy.
    """
    events: list[FeedEvent] = []
    skipped = 0

    for record in records:
        try:
            raw = RawMatch.model_validate(record)
        except ValidationError as e:
            skipped += 1
            logger.warning("[FEED] Invalid match record skipped: %s", e.errors()[:1])
            continue

        event = raw.to_feed_event()
        if event is None:
            skipped += 1
            logger.debug(
                "[FEED] Incomplete record skipped: %s vs %s",
                raw.home_team_name,
                raw.away_team_name,
            )
            continue
        events.append(event)

    if skipped:
        logger.info("[FEED] Parsed %d record(s), skipped %d", len(events), skipped)

    return events
