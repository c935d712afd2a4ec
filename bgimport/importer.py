"""Import run: fetch → dedup → store.

:func:`reconcile` brings the local ``bgs`` table up to date with the remote
catalog:

1. **Fetch** — :meth:`~bgimport.catalog.client.CatalogClient.fetch_names`
   returns every catalog name.  If it raises, the run stops before touching
   the store.
2. **Dedup** — for each name, in catalog order,
   :meth:`~bgimport.storage.repository.BgRepository.find_by_name` decides
   whether the name is already stored; stored names are skipped.
3. **Store** — absent names are inserted and counted.  A
   :class:`~bgimport.core.exceptions.BgAlreadyExistsError` means a concurrent
   run inserted the same name in between; it is counted as skipped.

Any other error aborts the run and propagates.  Rows inserted before the
failure stay committed; nothing is rolled back.

Typical usage::

    async with CatalogClient() as catalog:
        added = await import_bgs(catalog, BgRepository(conn))
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass

from bgimport.catalog.client import CatalogClient
from bgimport.core.exceptions import BgAlreadyExistsError
from bgimport.core.logging_config import IMPORT_ID_CTX
from bgimport.storage.repository import BgRepository

__all__ = ["ImportStats", "reconcile", "import_bgs"]

logger = logging.getLogger(__name__)


@dataclass
class ImportStats:
    """Counters for one import run.

    Attributes:
        fetched: Names returned by the catalog.
        added: Names inserted by this run.
        skipped: Names that were already stored (including names lost to a
            concurrent run and repeats within the catalog itself).
    """

    fetched: int = 0
    added: int = 0
    skipped: int = 0


async def reconcile(catalog: CatalogClient, repo: BgRepository) -> ImportStats:
    """Import every catalog name that is not stored yet.

    Args:
        catalog: Open catalog client.
        repo: Repository over the shared connection.

    Returns:
        An :class:`ImportStats` for the run.

    Raises:
        CatalogError: The catalog could not be fetched or parsed; the store
            is unchanged.
        StorageError: A lookup or insert failed; earlier inserts of this run
            remain committed.
    """
    token = IMPORT_ID_CTX.set(uuid.uuid4().hex[:8])
    try:
        stats = ImportStats()

        names = await catalog.fetch_names()
        stats.fetched = len(names)

        for name in names:
            if await repo.find_by_name(name) is not None:
                stats.skipped += 1
                logger.debug("DEDUP  %r — already stored, skipping", name)
                continue

            try:
                await repo.insert(name)
            except BgAlreadyExistsError:
                stats.skipped += 1
                logger.debug("DEDUP  %r — insert race, treated as stored", name)
                continue

            stats.added += 1

        logger.info(
            "Import done: fetched=%d added=%d skipped=%d",
            stats.fetched,
            stats.added,
            stats.skipped,
        )
        return stats
    finally:
        IMPORT_ID_CTX.reset(token)


async def import_bgs(catalog: CatalogClient, repo: BgRepository) -> int:
    """Run :func:`reconcile` and return the number of board games added."""
    stats = await reconcile(catalog, repo)
    return stats.added
