"""Timezone and timestamp helpers.

Feed dates and catalog timestamps go through these functions so the
whole pass agrees on one clock.
"""

import logging
from datetime import UTC, date, datetime, timedelta
from zoneinfo import ZoneInfo

from linksync.config import get_feed_timezone

logger = logging.getLogger(__name__)

# Feed API expects day-month-year with no separators
FEED_DATE_FORMAT = "%d%m%Y"

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def now_feed() -> datetime:
    """Get current time in the feed timezone."""
    return datetime.now(get_feed_timezone())


def feed_date_str(target: date | datetime | None = None, tz: ZoneInfo | None = None) -> str:
    """Format the calendar date the feed is queried for.

    Args:
        target: Date (used as-is) or datetime (converted to tz first).
            Defaults to now.
        tz: Zone for datetime conversion. Defaults to the feed timezone.

    Returns:
        Date string like "17102026"
    """
    zone = tz or get_feed_timezone()
    if target is None:
        target = datetime.now(zone)
    if isinstance(target, datetime):
        if target.tzinfo is None:
            target = target.replace(tzinfo=UTC)
        target = target.astimezone(zone).date()
    return target.strftime(FEED_DATE_FORMAT)


def parse_catalog_time(value: object) -> datetime | None:
    """Parse a stored catalog timestamp into an aware UTC datetime.

    Accepts epoch milliseconds (int/float or numeric string) and ISO-8601
    strings. Naive ISO strings are taken as UTC.

    Returns:
        Aware datetime, or None if the value can't be interpreted
    """
    if value is None or isinstance(value, bool):
        return None

    try:
        if isinstance(value, int | float):
            return _EPOCH + timedelta(milliseconds=value)

        if isinstance(value, str):
            text = value.strip()
            if not text:
                return None
            if text.lstrip("-").isdigit():
                return _EPOCH + timedelta(milliseconds=int(text))
            if text.endswith("Z"):
                text = text[:-1] + "+00:00"
            parsed = datetime.fromisoformat(text)
            if parsed.tzinfo is None:
                parsed = parsed.replace(tzinfo=UTC)
            return parsed.astimezone(UTC)
    except (ValueError, OverflowError, OSError):
        logger.debug("[TZ] Unparseable catalog time: %r", value)

    return None
