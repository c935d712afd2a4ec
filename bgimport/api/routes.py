"""HTTP routes: ``/version``, ``/bgs`` and ``/import``.

Errors are not handled here.  Any :class:`~bgimport.core.exceptions.BgImportError`
raised by the storage or catalog layer propagates to the handler installed by
:func:`~bgimport.api.app.create_app`, which turns it into a ``500`` with the
error text as body.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

import bgimport
from bgimport.api.dependencies import get_catalog, get_repository
from bgimport.catalog.client import CatalogClient
from bgimport.core.models import BgsResponse
from bgimport.importer import import_bgs
from bgimport.storage.repository import BgRepository

__all__ = ["router"]

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/version", response_class=PlainTextResponse)
async def version() -> str:
    """Installed package version, or ``unknown``."""
    return bgimport.__version__


@router.get("/bgs", response_model=BgsResponse)
async def list_bgs(repo: BgRepository = Depends(get_repository)) -> BgsResponse:
    """Every stored board game, ordered by id."""
    return BgsResponse(bgs=await repo.list_all())


@router.get("/import", response_class=PlainTextResponse)
async def run_import(
    repo: BgRepository = Depends(get_repository),
    catalog: CatalogClient = Depends(get_catalog),
) -> str:
    """Import the remote catalog and report how many games were added."""
    number_added = await import_bgs(catalog, repo)
    logger.info("Added %d bgs", number_added)
    return f"Added {number_added} bgs"
