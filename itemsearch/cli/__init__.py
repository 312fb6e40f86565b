"""Command-line interface for itemsearch."""

from .main import cli

__all__ = ["cli"]
