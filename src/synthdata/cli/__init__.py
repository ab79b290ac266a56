"""CLI module."""

from synthdata.cli.main import cli

__all__ = ["cli"]
