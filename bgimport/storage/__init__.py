"""SQLite-backed storage for imported board games."""

from bgimport.storage.database import DEFAULT_DB_PATH, create_schema, open_db
from bgimport.storage.repository import BgRepository

__all__ = [
    "DEFAULT_DB_PATH",
    "open_db",
    "create_schema",
    "BgRepository",
]
