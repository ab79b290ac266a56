"""HTTP API module."""

from synthdata.api.app import create_app

__all__ = ["create_app"]
