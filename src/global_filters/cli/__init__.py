"""Command line interface."""

from global_filters.cli.main import app, main

__all__ = ["app", "main"]
