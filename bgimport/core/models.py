"""bgimport domain models.

:class:`Bg` is the persisted record; :class:`CatalogEntry` is one element of
the remote catalog payload; :class:`BgsResponse` is the body of ``GET /bgs``.

Typical usage::

    from bgimport.core.models import Bg, BgsResponse

    bgs = [Bg(id=1, name="Catan"), Bg(id=2, name="Chess")]
    payload = BgsResponse(bgs=bgs).model_dump()
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

__all__ = [
    "Bg",
    "CatalogEntry",
    "BgsResponse",
]


class Bg(BaseModel):
    """A stored board game.

    The model is **frozen** so instances can be shared between request
    handlers without accidental mutation.

    Attributes:
        id: Row id assigned by SQLite on insertion.
        name: Display name, unique across the table.  The empty string is a
            valid name; the catalog is stored as published.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    name: str


class CatalogEntry(BaseModel):
    """One object from the remote catalog array.

    Only ``name`` is read; any other keys the catalog carries are ignored.
    """

    model_config = ConfigDict(extra="ignore")

    name: str


class BgsResponse(BaseModel):
    """Response body for ``GET /bgs``."""

    bgs: list[Bg]
