"""CLI command modules."""

from . import generate_cmd, inspect_cmd, manifest_cmd

__all__ = ["generate_cmd", "inspect_cmd", "manifest_cmd"]
