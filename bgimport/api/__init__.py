"""HTTP façade over the repository and the import run."""

from bgimport.api.app import create_app

__all__ = ["create_app"]
