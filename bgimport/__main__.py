"""bgimport process entry-point.

Usage:
    python -m bgimport [--import-once] [--host HOST] [--port PORT] [--db PATH]

By default the HTTP service is served with :mod:`uvicorn`.  ``--import-once``
runs a single import against the database and exits instead, which is handy
for cron jobs and first-time seeding.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from pydantic import ValidationError

from bgimport.core import configure_logging
from bgimport.core.exceptions import BgImportError, ConfigError
from bgimport.core.settings import Settings


def _load_settings(overrides: dict[str, object]) -> Settings:
    try:
        return Settings(**overrides)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc


async def _import_once(settings: Settings) -> int:
    # Lazy imports keep startup fast when only parsing arguments.
    from bgimport.catalog.client import CatalogClient  # noqa: PLC0415
    from bgimport.importer import import_bgs  # noqa: PLC0415
    from bgimport.storage.database import open_db  # noqa: PLC0415
    from bgimport.storage.repository import BgRepository  # noqa: PLC0415

    conn = await open_db(settings.database_path_resolved)
    try:
        async with CatalogClient() as catalog:
            return await import_bgs(catalog, BgRepository(conn))
    finally:
        await conn.close()


def main(argv: list[str] | None = None) -> None:
    """CLI entry-point registered in ``pyproject.toml``."""
    parser = argparse.ArgumentParser(
        prog="bgimport",
        description="Import the board-game catalog and serve it over HTTP.",
    )
    parser.add_argument(
        "--import-once",
        action="store_true",
        help="Run a single import, print the result and exit instead of serving HTTP.",
    )
    parser.add_argument("--host", default=None, help="Override HOST (bind address).")
    parser.add_argument("--port", type=int, default=None, help="Override PORT.")
    parser.add_argument("--db", default=None, metavar="PATH", help="Override DATABASE_PATH.")
    parser.add_argument(
        "--log-level",
        default=None,
        metavar="LEVEL",
        help="Override LOG_LEVEL env var (DEBUG|INFO|WARNING|ERROR).",
    )
    parser.add_argument(
        "--log-format",
        default=None,
        metavar="FORMAT",
        help="Override LOG_FORMAT env var (text|json).",
    )

    args = parser.parse_args(argv)

    overrides = {
        key: value
        for key, value in {
            "host": args.host,
            "port": args.port,
            "database_path": args.db,
            "log_level": args.log_level,
            "log_format": args.log_format,
        }.items()
        if value is not None
    }

    try:
        settings = _load_settings(overrides)
        configure_logging(level=settings.log_level, fmt=settings.log_format)
    except (ConfigError, ValueError) as exc:
        print(f"bgimport: configuration error: {exc}", file=sys.stderr)  # noqa: T201
        sys.exit(1)

    logger = logging.getLogger(__name__)

    if args.import_once:
        try:
            number_added = asyncio.run(_import_once(settings))
        except BgImportError as exc:
            logger.error("Import failed: %s", exc)
            sys.exit(1)
        print(f"Added {number_added} bgs")  # noqa: T201
        return

    import uvicorn  # noqa: PLC0415

    from bgimport.api.app import create_app  # noqa: PLC0415

    logger.info("Listening on %s:%d", settings.host, settings.port)
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
