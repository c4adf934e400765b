"""Firebase Realtime Database REST client.

Thin JSON-over-HTTP wrapper: GET and PUT on database paths.
Every failure is raised as CatalogStoreError; the catalog is the pass's
only shared resource, so a failed read or write aborts the pass.

REST conventions:
    GET  {database_url}/{path}.json[?auth=TOKEN]
    PUT  {database_url}/{path}.json[?auth=TOKEN]   body = JSON value
"""

import logging
import threading
from typing import Any

import httpx

from linksync.core.errors import CatalogStoreError

logger = logging.getLogger(__name__)


class FirebaseClient:
    """Low-level Realtime Database REST client."""

    def __init__(
        self,
        database_url: str,
        auth_token: str | None = None,
        timeout: float = 15.0,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize client.

        Args:
            database_url: e.g. https://my-project-default-rtdb.firebaseio.com
            auth_token: Database secret or ID token, sent as ?auth=
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests use MockTransport)
        """
        self._database_url = database_url.rstrip("/")
        self._auth_token = auth_token
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.Client | None = None
        self._lock = threading.Lock()

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

    def _url(self, path: str) -> str:
        return f"{self._database_url}/{path.strip('/')}.json"

    def _params(self) -> dict[str, str]:
        return {"auth": self._auth_token} if self._auth_token else {}

    def get(self, path: str) -> Any:
        """Read the JSON value at a path (None if the path is empty)."""
        try:
            response = self._get_client().get(self._url(path), params=self._params())
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            raise CatalogStoreError(
                f"Catalog read failed for '{path}': HTTP {e.response.status_code}"
            ) from e
        except httpx.RequestError as e:
            raise CatalogStoreError(f"Catalog read failed for '{path}': {e}") from e
        except ValueError as e:
            raise CatalogStoreError(f"Catalog read for '{path}' returned invalid JSON") from e

    def put(self, path: str, value: Any) -> None:
        """Replace the JSON value at a path."""
        try:
            response = self._get_client().put(self._url(path), params=self._params(), json=value)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise CatalogStoreError(
                f"Catalog write failed for '{path}': HTTP {e.response.status_code}"
            ) from e
        except httpx.RequestError as e:
            raise CatalogStoreError(f"Catalog write failed for '{path}': {e}") from e
