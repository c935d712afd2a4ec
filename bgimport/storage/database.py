"""SQLite database initialisation for bgimport.

This module is responsible for:

* Opening (or creating) the SQLite file.
* Configuring PRAGMA settings (WAL journal mode).
* Bootstrapping the ``bgs`` table via ``CREATE TABLE IF NOT EXISTS``, safe to
  call on every startup because the statement is idempotent.

The HTTP application calls :func:`open_db` once in its lifespan and shares the
returned connection with every request through
:class:`~bgimport.storage.repository.BgRepository`.  The connection must be
closed explicitly (``await conn.close()``).

Typical usage::

    from bgimport.storage.database import open_db

    async def main() -> None:
        conn = await open_db(Path("db.sqlite"))
        # ... pass conn to BgRepository ...
        await conn.close()
"""

from __future__ import annotations

import logging
from pathlib import Path

import aiosqlite

from bgimport.core.exceptions import StorageError

__all__ = [
    "DEFAULT_DB_PATH",
    "open_db",
    "create_schema",
]

logger = logging.getLogger(__name__)

#: Fallback database path when no explicit path is passed to :func:`open_db`.
DEFAULT_DB_PATH: Path = Path("db.sqlite")

#: ``bgs`` holds one row per imported board game.
#:
#: id    Assigned by SQLite; AUTOINCREMENT keeps ids from being reused.
#: name  Display name.  UNIQUE makes a concurrent double insert fail
#:       instead of silently duplicating the row.
_DDL_BGS = """\
CREATE TABLE IF NOT EXISTS bgs (
    id    INTEGER  PRIMARY KEY AUTOINCREMENT,
    name  TEXT     NOT NULL UNIQUE
)"""


async def open_db(path: Path | str | None = None) -> aiosqlite.Connection:
    """Open (or create) the SQLite database and bootstrap the schema.

    Args:
        path: Filesystem path for the SQLite file.  Defaults to
            :data:`DEFAULT_DB_PATH`.  Parent directories are created.

    Returns:
        An open :class:`aiosqlite.Connection` in autocommit mode with
        ``row_factory`` set to :class:`aiosqlite.Row`.  Every statement is
        its own transaction, so concurrent requests sharing the connection
        never commit or roll back each other's writes.  The caller is
        responsible for closing it.

    Raises:
        StorageError: If the file cannot be opened or the schema cannot be
            created.
    """
    db_path = Path(path or DEFAULT_DB_PATH)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    logger.debug("Opening SQLite database at %s", db_path)

    try:
        conn: aiosqlite.Connection = await aiosqlite.connect(db_path, isolation_level=None)
    except aiosqlite.Error as exc:
        raise StorageError(f"Cannot open database at {db_path}: {exc}") from exc

    conn.row_factory = aiosqlite.Row

    try:
        await _configure_pragmas(conn)
        await create_schema(conn)
    except BaseException:
        await conn.close()
        raise

    logger.info("SQLite database ready at %s", db_path)
    return conn


async def create_schema(conn: aiosqlite.Connection) -> None:
    """Create the ``bgs`` table if it does not already exist.

    Idempotent; existing rows are untouched.

    Raises:
        StorageError: If the DDL statement fails.
    """
    try:
        await conn.execute(_DDL_BGS)
        await conn.commit()
    except aiosqlite.Error as exc:
        raise StorageError(f"Schema bootstrap failed: {exc}") from exc
    logger.debug("Schema bootstrap complete (bgs table verified)")


async def _configure_pragmas(conn: aiosqlite.Connection) -> None:
    """Switch the journal to WAL so ``/bgs`` reads do not block on an import."""
    try:
        cursor = await conn.execute("PRAGMA journal_mode=WAL")
        row = await cursor.fetchone()
    except aiosqlite.Error as exc:
        raise StorageError(f"Cannot configure database: {exc}") from exc

    mode = row[0] if row else "unknown"
    if mode != "wal":
        logger.warning(
            "Requested WAL journal mode but SQLite reported: %r. "
            "This is expected for in-memory databases (':memory:').",
            mode,
        )
    else:
        logger.debug("SQLite journal_mode set to WAL")
