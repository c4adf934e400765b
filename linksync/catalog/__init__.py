"""Catalog store - scheduled events in the Firebase Realtime Database.

create_catalog_store() is the single place the store is wired from Config.
"""

from linksync.catalog.client import FirebaseClient
from linksync.catalog.store import (
    FirebaseCatalogStore,
    catalog_event_from_wire,
    link_from_wire,
    link_to_wire,
    links_from_wire,
)
from linksync.config import Config


def create_catalog_store() -> FirebaseCatalogStore:
    """Build the catalog store from configuration."""
    client = FirebaseClient(
        database_url=Config.FIREBASE_DATABASE_URL,
        auth_token=Config.FIREBASE_AUTH_TOKEN,
        timeout=Config.HTTP_TIMEOUT,
    )
    return FirebaseCatalogStore(client, catalog_path=Config.CATALOG_PATH)


__all__ = [
    "FirebaseCatalogStore",
    "FirebaseClient",
    "catalog_event_from_wire",
    "create_catalog_store",
    "link_from_wire",
    "link_to_wire",
    "links_from_wire",
]
