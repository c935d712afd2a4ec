"""Remote board-game catalog client."""

from bgimport.catalog.client import CATALOG_URL, CatalogClient

__all__ = ["CATALOG_URL", "CatalogClient"]
