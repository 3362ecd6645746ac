"""Command-line interface for mediascribe."""

from mediascribe.cli.main import app

__all__ = ["app"]
