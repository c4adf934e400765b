"""Exception hierarchy for linksync.

Only pass-level failures are exceptions. Per-event outcomes (no catalog
match, nothing classifiable) are recorded in the pass result instead.
"""


class LinkSyncError(Exception):
    """Base class for errors that abort a sync pass."""


class ConfigError(LinkSyncError):
    """Required configuration is missing or invalid."""


class KeysExhaustedError(LinkSyncError):
    """Every feed API key has been rejected; the pass cannot continue."""

    def __init__(self, key_count: int, page: int | None = None):
        self.key_count = key_count
        self.page = page
        where = f" (page {page})" if page is not None else ""
        super().__init__(f"All {key_count} feed API keys exhausted{where}")


class CatalogStoreError(LinkSyncError):
    """The catalog store could not be read or written."""


class AuditError(LinkSyncError):
    """The raw feed copy could not be persisted."""
