"""Async client for the remote board-game catalog.

Wraps :class:`httpx.AsyncClient` with:

* **A fixed source** — the catalog lives at :data:`CATALOG_URL`; it is not a
  runtime setting.
* **Shape validation** — the body must be a JSON array of objects each
  carrying a string ``name``; anything else raises
  :class:`~bgimport.core.exceptions.CatalogParseError`.
* **Structured error mapping** — network failures and non-2xx statuses raise
  :class:`~bgimport.core.exceptions.CatalogFetchError`.

There is no retry: one call to :meth:`CatalogClient.fetch_names` is exactly
one outbound request, and any failure is returned to the caller.

Typical usage::

    from bgimport.catalog.client import CatalogClient

    async with CatalogClient() as catalog:
        names = await catalog.fetch_names()
"""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Final

import httpx
from pydantic import TypeAdapter, ValidationError

from bgimport.core.exceptions import CatalogFetchError, CatalogParseError
from bgimport.core.models import CatalogEntry

__all__ = ["CATALOG_URL", "CatalogClient"]

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

#: Where the list of board games to import is published.
CATALOG_URL: Final[str] = "https://a-mackay.github.io/bgs/bgs.json"

_CONNECT_TIMEOUT: Final[float] = 10.0
_READ_TIMEOUT: Final[float] = 20.0

_ENTRIES: Final[TypeAdapter[list[CatalogEntry]]] = TypeAdapter(list[CatalogEntry])


class CatalogClient:
    """Fetches board-game names from the remote catalog.

    Use as an ``async with`` context manager to guarantee the connection pool
    is closed on exit.  The client can also be opened once and shared for the
    lifetime of a process, as the HTTP application does.

    Args:
        url: Catalog URL.  Defaults to :data:`CATALOG_URL`; overridden only in
            tests.
        transport: Optional :mod:`httpx` transport, e.g.
            :class:`httpx.MockTransport` in tests.
    """

    def __init__(
        self,
        url: str = CATALOG_URL,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._url = url
        self._transport = transport
        self._timeout = httpx.Timeout(_READ_TIMEOUT, connect=_CONNECT_TIMEOUT)
        self._http: httpx.AsyncClient | None = None

    @property
    def url(self) -> str:
        return self._url

    # ------------------------------------------------------------------
    # Context manager
    # ------------------------------------------------------------------

    async def __aenter__(self) -> CatalogClient:
        self._ensure_client()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP client.  Safe to call more than once."""
        if self._http is not None and not self._http.is_closed:
            await self._http.aclose()
            logger.debug("CatalogClient HTTP session closed.")
        self._http = None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def fetch_names(self) -> list[str]:
        """Download the catalog and return its names in catalog order.

        Returns:
            The ``name`` of every catalog entry, duplicates included.

        Raises:
            CatalogFetchError: On transport failure or a non-2xx response.
            CatalogParseError: If the body is not a JSON array of objects
                with a string ``name``.
        """
        client = self._ensure_client()

        logger.debug("HTTP GET %s", self._url)
        try:
            response = await client.get(self._url)
        except httpx.HTTPError as exc:
            raise CatalogFetchError(self._url, f"{type(exc).__name__}: {exc}") from exc

        logger.debug(
            "HTTP GET %s → %d (%d bytes)",
            self._url,
            response.status_code,
            len(response.content),
        )

        if not response.is_success:
            raise CatalogFetchError(
                self._url,
                f"HTTP {response.status_code}: {response.text[:200]}",
            )

        try:
            entries = _ENTRIES.validate_json(response.content)
        except ValidationError as exc:
            raise CatalogParseError(
                self._url,
                f"Unexpected catalog shape ({exc.error_count()} error(s)): "
                f"{exc.errors()[0]['msg']}",
            ) from exc

        names = [entry.name for entry in entries]
        logger.info("Fetched %d name(s) from catalog", len(names))
        return names

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._http is None or self._http.is_closed:
            self._http = httpx.AsyncClient(
                timeout=self._timeout,
                follow_redirects=True,
                headers={"Accept": "application/json"},
                transport=self._transport,
            )
            logger.debug("CatalogClient session opened (url=%s).", self._url)
        return self._http
