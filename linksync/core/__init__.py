"""Core types, interfaces and errors."""

from linksync.core.errors import (
    AuditError,
    CatalogStoreError,
    ConfigError,
    KeysExhaustedError,
    LinkSyncError,
)
from linksync.core.interfaces import AuditSink, CatalogStore, FeedBatch, FeedSource
from linksync.core.types import (
    DEFAULT_SPORT_CATEGORY,
    DIRECT_LINK_KIND,
    CatalogEvent,
    ClassifiedEndpoint,
    FeedEndpoint,
    FeedEvent,
    Link,
    LinkOrigin,
    ProviderBucket,
)

__all__ = [
    # Types
    "CatalogEvent",
    "ClassifiedEndpoint",
    "DEFAULT_SPORT_CATEGORY",
    "DIRECT_LINK_KIND",
    "FeedEndpoint",
    "FeedEvent",
    "Link",
    "LinkOrigin",
    "ProviderBucket",
    # Interfaces
    "AuditSink",
    "CatalogStore",
    "FeedBatch",
    "FeedSource",
    # Errors
    "AuditError",
    "CatalogStoreError",
    "ConfigError",
    "KeysExhaustedError",
    "LinkSyncError",
]
