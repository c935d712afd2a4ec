"""bgimport: imports a remote board-game catalog into SQLite and serves it over HTTP."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("bgimport")
except PackageNotFoundError:
    # Running from a source tree without installed metadata.
    __version__ = "unknown"

__all__ = ["__version__"]
