"""CLI helper utilities for kitedoc commands."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any

import typer
from rich.console import Console

from kitedoc.core.config import KiteDocConfig, get_default_config
from kitedoc.core.docs import load_provider_definition
from kitedoc.core.exceptions import KiteDocError
from kitedoc.core.ports import Provider
from kitedoc.core.resolver import resolve_provider

console = Console()
err_console = Console(stderr=True)


@contextmanager
def reporting_errors() -> Iterator[None]:
    """Turn kitedoc errors into a red message and exit code 1."""
    try:
        yield
    except KiteDocError as e:
        err_console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from e


def get_config(ctx: typer.Context) -> KiteDocConfig:
    """Configuration loaded by the global callback."""
    obj: dict[str, Any] = ctx.obj or {}
    config = obj.get("config")
    return config if isinstance(config, KiteDocConfig) else get_default_config()


def load_provider(provider: str | None, definition: Path | None) -> Provider:
    """Load the provider named by exactly one of ``--provider`` / ``--definition``.

    Raises
    ------
    typer.BadParameter
        If neither or both options are given
    KiteDocError
        If the provider cannot be resolved or the definition is invalid
    """
    if (provider is None) == (definition is None):
        raise typer.BadParameter("Pass exactly one of --provider or --definition")
    if definition is not None:
        return load_provider_definition(definition)
    return resolve_provider(provider)  # type: ignore[arg-type]


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an ISO-8601 ``--timestamp`` value."""
    if value is None:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError as e:
        raise typer.BadParameter(f"Invalid ISO-8601 timestamp: {value!r}") from e
