"""FastAPI dependency providers.

Route handlers never reach for module-level state; they receive the shared
connection and catalog client through these providers, which read the
objects the application lifespan stored on ``app.state``.  Tests replace them
with ``app.dependency_overrides``.
"""

from __future__ import annotations

from fastapi import Request

from bgimport.catalog.client import CatalogClient
from bgimport.storage.repository import BgRepository


def get_repository(request: Request) -> BgRepository:
    """Return a repository over the process-wide SQLite connection."""
    return BgRepository(request.app.state.db)


def get_catalog(request: Request) -> CatalogClient:
    """Return the process-wide catalog client."""
    return request.app.state.catalog
