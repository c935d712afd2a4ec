"""FastAPI application factory.

:func:`create_app` wires the routes, the error mapping, and a lifespan that
owns the two long-lived resources:

* the ``aiosqlite`` connection from :func:`~bgimport.storage.database.open_db`;
* a :class:`~bgimport.catalog.client.CatalogClient`.

Both are created at startup, stored on ``app.state`` and closed at shutdown.
Handlers reach them only through :mod:`bgimport.api.dependencies`.

Typical usage::

    import uvicorn
    from bgimport.api.app import create_app
    from bgimport.core.settings import Settings

    settings = Settings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

import bgimport
from bgimport.api.routes import router
from bgimport.catalog.client import CatalogClient
from bgimport.core.exceptions import BgImportError
from bgimport.core.settings import Settings
from bgimport.storage.database import open_db

__all__ = ["create_app"]

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    *,
    catalog: CatalogClient | None = None,
) -> FastAPI:
    """Build the HTTP application.

    Args:
        settings: Loaded settings; a fresh :class:`Settings` is read from the
            environment when omitted.
        catalog: Catalog client to use instead of a default one.  The
            lifespan closes it on shutdown either way.

    Returns:
        A configured :class:`fastapi.FastAPI` instance.
    """
    settings = settings or Settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        app.state.db = await open_db(settings.database_path_resolved)
        app.state.catalog = catalog or CatalogClient()
        logger.info("bgimport %s ready", bgimport.__version__)
        try:
            yield
        finally:
            await app.state.catalog.close()
            await app.state.db.close()
            logger.info("bgimport shut down")

    app = FastAPI(
        title="bgimport",
        version=bgimport.__version__,
        lifespan=lifespan,
    )
    app.include_router(router)

    @app.exception_handler(BgImportError)
    async def bgimport_error_handler(request: Request, exc: BgImportError) -> PlainTextResponse:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        return PlainTextResponse(str(exc), status_code=500)

    return app
