"""Catalog store over the Firebase Realtime Database.

Stored shape under the catalog path (default "matches"):

    {"<key>": {"team1Name": "Real Madrid", "team2Name": "Barcelona",
               "sportType": "Football", "matchTime": "2026-10-17T19:00:00Z",
               "streamLinks": [{"name": "Promo", "link": "https://...",
                                "type": "Direct", "logo": "...",
                                "origin": "manual"}]}}

streamLinks may also be a legacy object keyed by index, and may contain
null holes left by deletions; both are normalized on read. Links with no
"origin" are manual.
"""

import logging
from collections.abc import Sequence
from typing import Any

from linksync.catalog.client import FirebaseClient
from linksync.core.errors import CatalogStoreError
from linksync.core.types import DIRECT_LINK_KIND, CatalogEvent, Link, LinkOrigin
from linksync.utilities.tz import parse_catalog_time

logger = logging.getLogger(__name__)

LINKS_FIELD = "streamLinks"


# =============================================================================
# WIRE CONVERSION
# =============================================================================


def link_from_wire(data: dict[str, Any]) -> Link:
    """Convert a stored link object into a Link."""
    origin_value = data.get("origin")
    try:
        origin = LinkOrigin(origin_value) if origin_value else LinkOrigin.MANUAL
    except ValueError:
        logger.debug("[CATALOG] Unknown link origin %r treated as manual", origin_value)
        origin = LinkOrigin.MANUAL

    return Link(
        name=data.get("name") or "",
        url=data.get("link") or "",
        kind=data.get("type") or DIRECT_LINK_KIND,
        logo=data.get("logo") or "",
        origin=origin,
        raw=dict(data),
    )


def link_to_wire(link: Link) -> dict[str, Any]:
    """Convert a Link into its stored object.

    Manual links read from the store are written back exactly as read,
    including a missing "origin" and any fields not modelled on Link.
    """
    if link.is_manual and link.raw is not None:
        return dict(link.raw)

    return {
        "name": link.name,
        "link": link.url,
        "type": link.kind,
        "logo": link.logo,
        "origin": link.origin.value,
    }


def links_from_wire(raw: Any) -> list[Link]:
    """Normalize a stored streamLinks value into Links.

    Accepts a list or an index-keyed object; drops null and non-object
    entries.
    """
    if raw is None:
        return []
    if isinstance(raw, dict):
        items = list(raw.values())
    elif isinstance(raw, list):
        items = raw
    else:
        logger.warning("[CATALOG] Unexpected streamLinks type %s ignored", type(raw).__name__)
        return []
    return [link_from_wire(item) for item in items if isinstance(item, dict)]


def catalog_event_from_wire(key: str, data: dict[str, Any]) -> CatalogEvent:
    """Convert a stored match object into a CatalogEvent."""
    return CatalogEvent(
        key=key,
        team1_name=data.get("team1Name") or "",
        team2_name=data.get("team2Name") or "",
        sport_type=data.get("sportType") or "",
        start_time=parse_catalog_time(data.get("matchTime")),
        links=links_from_wire(data.get(LINKS_FIELD)),
    )


# =============================================================================
# STORE
# =============================================================================


class FirebaseCatalogStore:
    """CatalogStore backed by a Realtime Database path."""

    def __init__(self, client: FirebaseClient, catalog_path: str = "matches"):
        self._client = client
        self._catalog_path = catalog_path.strip("/")

    def read_catalog(self) -> list[CatalogEvent]:
        """Read every catalog event, in stored key order.

        Raises:
            CatalogStoreError: If the read fails or the path is not an object
        """
        raw = self._client.get(self._catalog_path)
        if raw is None:
            logger.info("[CATALOG] '%s' is empty", self._catalog_path)
            return []
        if isinstance(raw, list):
            # RTDB returns objects with sequential integer keys as arrays
            raw = {str(i): value for i, value in enumerate(raw)}
        if not isinstance(raw, dict):
            raise CatalogStoreError(
                f"Catalog path '{self._catalog_path}' holds {type(raw).__name__}, expected object"
            )

        events = [
            catalog_event_from_wire(str(key), value)
            for key, value in raw.items()
            if isinstance(value, dict)
        ]

        unparsed = sum(1 for e in events if e.start_time is None)
        if unparsed:
            logger.warning("[CATALOG] %d event(s) have an unreadable matchTime", unparsed)

        logger.info("[CATALOG] Loaded %d event(s) from '%s'", len(events), self._catalog_path)
        return events

    def write_links(self, key: str, links: Sequence[Link]) -> None:
        """Replace streamLinks of one catalog event.

        Raises:
            CatalogStoreError: If the write fails
        """
        path = f"{self._catalog_path}/{key}/{LINKS_FIELD}"
        self._client.put(path, [link_to_wire(link) for link in links])
        logger.debug("[CATALOG] Wrote %d link(s) to %s", len(links), path)

    def close(self) -> None:
        self._client.close()
