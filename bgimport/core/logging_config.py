"""bgimport logging configuration.

Call ``configure_logging()`` once at process startup (see ``bgimport.__main__``).
Every other module defines its own logger at module scope:

    import logging
    logger = logging.getLogger(__name__)

Supported environment variables (read at call time when no explicit value is
passed):
    LOG_LEVEL   DEBUG | INFO | WARNING | ERROR   (default: INFO)
    LOG_FORMAT  text | json                      (default: text)
"""

from __future__ import annotations

import json
import logging
import os
import sys
from contextvars import ContextVar
from datetime import UTC, datetime
from typing import Any

__all__ = ["configure_logging", "JsonFormatter", "IMPORT_ID_CTX", "ImportContextFilter"]

#: Identifier of the import run the current task belongs to.  Set by
#: :func:`~bgimport.importer.reconcile` for the duration of one run; ``"-"``
#: everywhere else (startup, ``/bgs`` requests, tests).
IMPORT_ID_CTX: ContextVar[str] = ContextVar("import_id", default="-")

_VALID_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
_VALID_FORMATS = {"text", "json"}

_TEXT_FORMAT = "%(asctime)s %(levelname)-8s [%(import_id)s] %(name)s: %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Library loggers kept at WARNING unless DEBUG is requested.
_NOISY_LOGGERS = ("httpx", "httpcore", "asyncio", "aiosqlite", "uvicorn.access")


class ImportContextFilter(logging.Filter):
    """Attach the current import-run id to every record as ``import_id``.

    Installed on the handler, so it runs after propagation and every record
    reaching the formatter carries the attribute.
    """

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003
        record.import_id = IMPORT_ID_CTX.get("-")
        return True


def configure_logging(
    level: str | None = None,
    fmt: str | None = None,
    *,
    force: bool = False,
) -> None:
    """Configure the root logger for the entire process.

    Args:
        level: Logging level string (DEBUG/INFO/WARNING/ERROR/CRITICAL).
            Falls back to ``$LOG_LEVEL``, then ``"INFO"``.
        fmt: Output format (``"text"`` or ``"json"``).
            Falls back to ``$LOG_FORMAT``, then ``"text"``.
        force: Reconfigure even if the root logger already has handlers.

    Raises:
        ValueError: If *level* or *fmt* contain an unrecognised value.
    """
    resolved_level = (level or os.environ.get("LOG_LEVEL", "INFO")).upper()
    resolved_fmt = (fmt or os.environ.get("LOG_FORMAT", "text")).lower()

    if resolved_level not in _VALID_LEVELS:
        raise ValueError(
            f"Unknown LOG_LEVEL {resolved_level!r}. "
            f"Must be one of: {', '.join(sorted(_VALID_LEVELS))}"
        )
    if resolved_fmt not in _VALID_FORMATS:
        raise ValueError(
            f"Unknown LOG_FORMAT {resolved_fmt!r}. "
            f"Must be one of: {', '.join(sorted(_VALID_FORMATS))}"
        )

    root = logging.getLogger()

    if root.handlers and not force:
        # Someone (pytest, uvicorn) already installed handlers; only adjust the level.
        root.setLevel(resolved_level)
        return

    root.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(resolved_level)
    handler.addFilter(ImportContextFilter())

    if resolved_fmt == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(fmt=_TEXT_FORMAT, datefmt=_DATE_FORMAT))

    root.setLevel(resolved_level)
    root.addHandler(handler)

    noisy_level = logging.DEBUG if resolved_level == "DEBUG" else logging.WARNING
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(noisy_level)


class JsonFormatter(logging.Formatter):
    """One JSON object per record: ``ts``, ``level``, ``logger``, ``message``
    and ``extra`` (which always holds ``import_id``), plus ``exc_info`` when
    the record carries a traceback.
    """

    # Attributes every LogRecord has; anything else came from a filter or ``extra=``.
    _RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message"}

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003
        record.message = record.getMessage()
        created = datetime.fromtimestamp(record.created, tz=UTC)

        payload: dict[str, Any] = {
            "ts": created.strftime("%Y-%m-%dT%H:%M:%S.") + f"{int(record.msecs):03d}Z",
            "level": record.levelname,
            "logger": record.name,
            "message": record.message,
            "extra": {k: v for k, v in vars(record).items() if k not in self._RECORD_ATTRS},
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)
