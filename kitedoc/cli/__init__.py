"""Command-line interface for kitedoc."""

from kitedoc.cli.main import app, main

__all__ = ["app", "main"]
