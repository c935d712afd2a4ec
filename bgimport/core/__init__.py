"""Core domain models, settings, logging configuration, and exceptions."""

from bgimport.core.exceptions import (
    BgAlreadyExistsError,
    BgImportError,
    CatalogError,
    CatalogFetchError,
    CatalogParseError,
    ConfigError,
    StorageError,
)
from bgimport.core.logging_config import JsonFormatter, configure_logging
from bgimport.core.models import Bg, BgsResponse, CatalogEntry
from bgimport.core.settings import Settings

__all__ = [
    # Logging
    "configure_logging",
    "JsonFormatter",
    # Domain models
    "Bg",
    "BgsResponse",
    "CatalogEntry",
    # Settings
    "Settings",
    # Exceptions
    "BgImportError",
    "ConfigError",
    "StorageError",
    "BgAlreadyExistsError",
    "CatalogError",
    "CatalogFetchError",
    "CatalogParseError",
]
