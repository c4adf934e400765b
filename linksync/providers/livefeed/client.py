"""Live streaming feed HTTP client.

Handles raw HTTP requests to the RapidAPI feed with API key rotation.
No data transformation - just fetch and return match records.

Key rotation:
- Keys are tried in configured order, starting at the caller's KeyCursor
- HTTP 401/429 means the current key is spent: advance and retry
- Any other failure is non-fatal: the page is treated as empty
- Running past the last key is fatal (FetchStatus.FATAL)

The cursor is a plain value passed in and handed back in the FetchResult,
so a spent key stays skipped for the rest of the pass without any
module-level state.
"""

import logging
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import httpx

logger = logging.getLogger(__name__)

FEED_MATCHES_PATH = "/matches"

# Status codes that mean "this key is rate-limited or revoked"
ROTATE_STATUS_CODES = frozenset({401, 429})


@dataclass(frozen=True)
class KeyCursor:
    """Position in the ordered API key list."""

    index: int = 0

    def advance(self) -> "KeyCursor":
        return KeyCursor(self.index + 1)


class FetchStatus(Enum):
    """Tagged outcome of fetching one feed page."""

    SUCCESS = "success"  # Page fetched (may legitimately hold zero records)
    EMPTY = "empty"  # Non-fatal provider/transport error, treated as no records
    FATAL = "fatal"  # No usable key left


@dataclass
class FetchResult:
    """Result of fetching one feed page."""

    status: FetchStatus
    cursor: KeyCursor
    records: list[dict[str, Any]] = field(default_factory=list)
    detail: str | None = None

    @property
    def is_fatal(self) -> bool:
        return self.status == FetchStatus.FATAL


class LiveFeedClient:
    """Low-level feed API client."""

    def __init__(
        self,
        api_keys: list[str],
        base_url: str,
        host: str,
        timeout: float = 15.0,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize client.

        Args:
            api_keys: RapidAPI keys in rotation order
            base_url: Feed base URL (no trailing path)
            host: Value for the x-rapidapi-host header
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests use MockTransport)
        """
        self._api_keys = list(api_keys)
        self._base_url = base_url.rstrip("/")
        self._host = host
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.Client | None = None
        self._lock = threading.Lock()

    @property
    def key_count(self) -> int:
        return len(self._api_keys)

    def _get_client(self) -> httpx.Client:
        if self._client is None:
            with self._lock:
                if self._client is None:
                    self._client = httpx.Client(
                        timeout=self._timeout,
                        transport=self._transport,
                    )
        return self._client

    def close(self) -> None:
        """Close the underlying HTTP client."""
        with self._lock:
            if self._client is not None:
                self._client.close()
                self._client = None

    def fetch_page(self, page: int, date_str: str, cursor: KeyCursor) -> FetchResult:
        """Fetch one page of matches for a feed date.

        Tries at most one request per remaining key.

        Args:
            page: 1-based page number
            date_str: Feed date (DDMMYYYY)
            cursor: Key to start with

        Returns:
            FetchResult carrying the cursor to use for the next call
        """
        url = f"{self._base_url}{FEED_MATCHES_PATH}"
        params = {"page": page, "date": date_str}

        while cursor.index < len(self._api_keys):
            headers = {
                "x-rapidapi-key": self._api_keys[cursor.index],
                "x-rapidapi-host": self._host,
            }

            try:
                response = self._get_client().get(url, params=params, headers=headers)
            except httpx.RequestError as e:
                logger.warning("[FEED] Request failed for page %d: %s", page, e)
                return FetchResult(FetchStatus.EMPTY, cursor, detail=str(e))

            if response.status_code in ROTATE_STATUS_CODES:
                logger.warning(
                    "[FEED] Key %d rejected (HTTP %d) - switching",
                    cursor.index,
                    response.status_code,
                )
                cursor = cursor.advance()
                continue

            if response.is_error:
                logger.warning("[FEED] HTTP %d for page %d", response.status_code, page)
                return FetchResult(
                    FetchStatus.EMPTY, cursor, detail=f"HTTP {response.status_code}"
                )

            try:
                data = response.json()
            except ValueError as e:
                logger.warning("[FEED] Invalid JSON for page %d: %s", page, e)
                return FetchResult(FetchStatus.EMPTY, cursor, detail="invalid json")

            matches = data.get("matches") if isinstance(data, dict) else None
            records = [m for m in matches or [] if isinstance(m, dict)]
            logger.debug("[FEED] Page %d: %d record(s) with key %d", page, len(records), cursor.index)
            return FetchResult(FetchStatus.SUCCESS, cursor, records=records)

        logger.error("[FEED] All %d API keys exhausted", len(self._api_keys))
        return FetchResult(FetchStatus.FATAL, cursor, detail="all keys exhausted")
