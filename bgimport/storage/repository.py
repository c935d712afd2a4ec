"""Board-game repository over the ``bgs`` SQLite table.

Provides :class:`BgRepository`, the single data-access object for stored
board games.  It owns no connection lifecycle; the caller supplies an open
:class:`aiosqlite.Connection` (see :func:`~bgimport.storage.database.open_db`).

Every driver failure is re-raised as
:class:`~bgimport.core.exceptions.StorageError`, so callers above this layer
never see :mod:`sqlite3` exceptions.  The connection is expected in autocommit
mode (as :func:`~bgimport.storage.database.open_db` returns it), so every write
is committed by the statement that makes it and no transaction spans calls.

Typical usage::

    conn = await open_db()
    repo = BgRepository(conn)

    if await repo.find_by_name("Catan") is None:
        bg = await repo.insert("Catan")
"""

from __future__ import annotations

import logging

import aiosqlite

from bgimport.core.exceptions import BgAlreadyExistsError, StorageError
from bgimport.core.models import Bg

__all__ = ["BgRepository"]

logger = logging.getLogger(__name__)


class BgRepository:
    """Data-access object for the ``bgs`` table.

    Args:
        conn: Open :class:`aiosqlite.Connection` with the schema applied.
            A single connection may be shared by concurrent request handlers;
            :mod:`aiosqlite` serialises the calls on its worker thread.
    """

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    # ------------------------------------------------------------------
    # Read helpers
    # ------------------------------------------------------------------

    async def find_by_name(self, name: str) -> Bg | None:
        """Return the board game called *name*, or ``None`` if absent.

        Matching is exact and case-sensitive.

        Raises:
            StorageError: On query failure.
        """
        try:
            cursor = await self._conn.execute(
                "SELECT id, name FROM bgs WHERE name = ? LIMIT 1",
                (name,),
            )
            row = await cursor.fetchone()
        except aiosqlite.Error as exc:
            raise StorageError(f"Lookup of {name!r} failed: {exc}") from exc

        if row is None:
            return None
        return Bg(id=row[0], name=row[1])

    async def list_all(self) -> list[Bg]:
        """Return every stored board game ordered by id.

        Raises:
            StorageError: On query failure.
        """
        try:
            cursor = await self._conn.execute("SELECT id, name FROM bgs ORDER BY id")
            rows = await cursor.fetchall()
        except aiosqlite.Error as exc:
            raise StorageError(f"Listing board games failed: {exc}") from exc
        return [Bg(id=row[0], name=row[1]) for row in rows]

    async def count(self) -> int:
        """Return the number of stored board games.

        Raises:
            StorageError: On query failure.
        """
        try:
            cursor = await self._conn.execute("SELECT COUNT(*) FROM bgs")
            row = await cursor.fetchone()
        except aiosqlite.Error as exc:
            raise StorageError(f"Counting board games failed: {exc}") from exc
        return int(row[0]) if row else 0

    # ------------------------------------------------------------------
    # Write helpers
    # ------------------------------------------------------------------

    async def insert(self, name: str) -> Bg:
        """Insert a new board game and return it with its assigned id.

        The write is a single ``INSERT ... ON CONFLICT DO NOTHING`` statement
        executed and fetched in one call on the connection's worker thread.
        On an autocommit connection it commits by itself, and a conflict
        leaves nothing to roll back.

        Args:
            name: Display name to store.

        Returns:
            The persisted :class:`~bgimport.core.models.Bg`.

        Raises:
            BgAlreadyExistsError: If *name* is already stored.
            StorageError: On any other write failure.
        """
        try:
            rows = await self._conn.execute_fetchall(
                "INSERT INTO bgs (name) VALUES (?) ON CONFLICT(name) DO NOTHING RETURNING id",
                (name,),
            )
        except aiosqlite.Error as exc:
            raise StorageError(f"Insert of {name!r} failed: {exc}") from exc

        row = next(iter(rows), None)
        if row is None:
            raise BgAlreadyExistsError(name)

        bg_id = int(row[0])
        logger.debug("Inserted bg %d %r", bg_id, name)
        return Bg(id=bg_id, name=name)
