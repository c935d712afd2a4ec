"""bgimport exception taxonomy.

Every custom exception inherits from :class:`BgImportError`.  Exceptions are
organised by architectural layer so callers can catch at the right granularity:

    Layer hierarchy
    ---------------
    BgImportError
    ├── ConfigError
    ├── StorageError
    │   └── BgAlreadyExistsError
    └── CatalogError
        ├── CatalogFetchError
        └── CatalogParseError

The HTTP layer maps every :class:`BgImportError` to a ``500`` response whose
body is ``str(exc)``, so messages should be readable on their own.

Usage:

    from bgimport.core.exceptions import CatalogFetchError

    raise CatalogFetchError(url, "Connection refused") from exc
"""

from __future__ import annotations

__all__ = [
    "BgImportError",
    # Config
    "ConfigError",
    # Storage
    "StorageError",
    "BgAlreadyExistsError",
    # Catalog
    "CatalogError",
    "CatalogFetchError",
    "CatalogParseError",
]

# ---------------------------------------------------------------------------
# Base
# ---------------------------------------------------------------------------


class BgImportError(Exception):
    """Root exception for all bgimport errors.

    Catch this to handle any application-level error uniformly.  Prefer
    catching layer-specific subclasses wherever possible.
    """


# ---------------------------------------------------------------------------
# Config layer
# ---------------------------------------------------------------------------


class ConfigError(BgImportError):
    """Raised when the application configuration is invalid or incomplete."""


# ---------------------------------------------------------------------------
# Storage layer
# ---------------------------------------------------------------------------


class StorageError(BgImportError):
    """Raised when a database operation fails.

    Covers connection failures, malformed queries, and write errors.  The
    original driver exception is always chained as ``__cause__``.
    """


class BgAlreadyExistsError(StorageError):
    """Raised when inserting a name that the ``UNIQUE`` constraint rejects.

    This is an *expected* condition when two imports race on the same name;
    the reconciler catches it and counts the name as already present.

    Args:
        name: The board-game name that already exists.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Board game already exists in DB: {name!r}")


# ---------------------------------------------------------------------------
# Catalog layer
# ---------------------------------------------------------------------------


class CatalogError(BgImportError):
    """Base class for errors talking to the remote catalog.

    Args:
        url: The catalog URL that was being fetched.
        message: Human-readable error description.
    """

    def __init__(self, url: str, message: str) -> None:
        self.url = url
        super().__init__(f"[{url}] {message}")


class CatalogFetchError(CatalogError):
    """Raised when the catalog cannot be downloaded.

    Covers network errors, timeouts, and non-2xx HTTP status codes.
    """


class CatalogParseError(CatalogError):
    """Raised when the catalog body is not the expected shape.

    The catalog must be a JSON array of objects, each carrying a string
    ``name`` field.
    """
