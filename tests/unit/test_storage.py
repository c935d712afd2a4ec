"""Unit tests for :mod:`bgimport.storage`.

Covers :func:`~bgimport.storage.database.open_db` bootstrapping and every
:class:`~bgimport.storage.repository.BgRepository` operation, including the
mapping of driver failures to :class:`~bgimport.core.exceptions.StorageError`.
"""

from __future__ import annotations

from pathlib import Path

import aiosqlite
import pytest

from bgimport.core.exceptions import BgAlreadyExistsError, StorageError
from bgimport.core.models import Bg
from bgimport.storage.database import create_schema, open_db
from bgimport.storage.repository import BgRepository


class TestOpenDb:
    async def test_creates_file_and_parent_dirs(self, tmp_path: Path) -> None:
        db_path = tmp_path / "nested" / "db.sqlite"
        conn = await open_db(db_path)
        try:
            assert db_path.exists()
            cursor = await conn.execute(
                "SELECT name FROM sqlite_master WHERE type = 'table' AND name = 'bgs'"
            )
            assert await cursor.fetchone() is not None
        finally:
            await conn.close()

    async def test_uses_wal_journal(self, tmp_path: Path) -> None:
        conn = await open_db(tmp_path / "db.sqlite")
        try:
            cursor = await conn.execute("PRAGMA journal_mode")
            row = await cursor.fetchone()
            assert row[0] == "wal"
        finally:
            await conn.close()

    async def test_reopen_keeps_rows(self, tmp_path: Path) -> None:
        db_path = tmp_path / "db.sqlite"
        conn = await open_db(db_path)
        await BgRepository(conn).insert("Catan")
        await conn.close()

        conn = await open_db(db_path)
        try:
            assert await BgRepository(conn).list_all() == [Bg(id=1, name="Catan")]
        finally:
            await conn.close()

    async def test_insert_visible_to_other_connection_without_commit(
        self, tmp_path: Path
    ) -> None:
        db_path = tmp_path / "db.sqlite"
        conn = await open_db(db_path)
        other = await aiosqlite.connect(db_path)
        try:
            await BgRepository(conn).insert("Catan")
            cursor = await other.execute("SELECT name FROM bgs")
            assert [row[0] for row in await cursor.fetchall()] == ["Catan"]
        finally:
            await other.close()
            await conn.close()

    async def test_schema_bootstrap_is_idempotent(self, conn: aiosqlite.Connection) -> None:
        await create_schema(conn)
        await create_schema(conn)

    async def test_unopenable_path_raises_storage_error(self, tmp_path: Path) -> None:
        # A directory cannot be opened as a database file.
        directory = tmp_path / "is_a_dir"
        directory.mkdir()
        with pytest.raises(StorageError):
            await open_db(directory)


class TestBgRepository:
    async def test_find_by_name_unknown_returns_none(self, repo: BgRepository) -> None:
        assert await repo.find_by_name("Catan") is None

    async def test_insert_assigns_increasing_ids(self, repo: BgRepository) -> None:
        first = await repo.insert("Catan")
        second = await repo.insert("Chess")
        assert first == Bg(id=1, name="Catan")
        assert second == Bg(id=2, name="Chess")

    async def test_insert_then_find(self, repo: BgRepository) -> None:
        inserted = await repo.insert("Catan")
        assert await repo.find_by_name("Catan") == inserted

    async def test_find_is_case_sensitive(self, repo: BgRepository) -> None:
        await repo.insert("Catan")
        assert await repo.find_by_name("catan") is None

    async def test_insert_duplicate_raises_already_exists(self, repo: BgRepository) -> None:
        await repo.insert("Catan")
        with pytest.raises(BgAlreadyExistsError) as exc_info:
            await repo.insert("Catan")
        assert exc_info.value.name == "Catan"
        assert await repo.count() == 1

    async def test_connection_usable_after_duplicate(self, repo: BgRepository) -> None:
        await repo.insert("Catan")
        with pytest.raises(BgAlreadyExistsError):
            await repo.insert("Catan")
        await repo.insert("Chess")
        assert [bg.name for bg in await repo.list_all()] == ["Catan", "Chess"]

    async def test_empty_name_round_trips(self, repo: BgRepository) -> None:
        inserted = await repo.insert("")
        assert inserted == Bg(id=1, name="")
        assert await repo.find_by_name("") == inserted
        assert await repo.list_all() == [inserted]

    async def test_list_all_empty(self, repo: BgRepository) -> None:
        assert await repo.list_all() == []

    async def test_list_all_ordered_by_id(self, repo: BgRepository) -> None:
        for name in ("Go", "Azul", "Chess"):
            await repo.insert(name)
        assert [bg.id for bg in await repo.list_all()] == [1, 2, 3]
        assert [bg.name for bg in await repo.list_all()] == ["Go", "Azul", "Chess"]

    async def test_count(self, repo: BgRepository) -> None:
        assert await repo.count() == 0
        await repo.insert("Catan")
        assert await repo.count() == 1

    async def test_missing_table_raises_storage_error(self) -> None:
        conn = await aiosqlite.connect(":memory:")
        try:
            repo = BgRepository(conn)
            with pytest.raises(StorageError, match="Lookup"):
                await repo.find_by_name("Catan")
            with pytest.raises(StorageError, match="Insert"):
                await repo.insert("Catan")
        finally:
            await conn.close()
