"""Centralized logging configuration for kitedoc using Loguru.

Provides consistent logging across the generator with support for:
- Multiple output formats (console, JSON, structured, rich)
- Environment-based defaults
- Idempotent configuration

Examples
--------
Basic usage:

>>> from kitedoc.core.logging import get_logger
>>> logger = get_logger(__name__)
>>> logger.info("Rendering site", resources=12)

Configure logging globally::

    from kitedoc.core.logging import configure_logging
    configure_logging(level="DEBUG", format="json")

Records logged while a provider is being documented carry its
``name@version`` in ``extra["provider"]``::

    with provider_context("aws", "1.2.0"):
        logger.info("Rendering site")
"""

import os
import sys
from collections.abc import Iterator
from contextlib import contextmanager, suppress
from functools import lru_cache
from pathlib import Path
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from loguru import Logger

from loguru import logger
from rich.logging import RichHandler

LogLevel = Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LogFormat = Literal["console", "json", "structured", "rich"]

_CURRENT_CONFIG: dict | None = None
_HANDLER_IDS: list[int] = []

# Records logged outside provider_context() show this placeholder
_NO_PROVIDER = "-"


def configure_logging(
    level: LogLevel = "INFO",
    format: LogFormat = "structured",
    output_file: str | Path | None = None,
    use_color: bool = True,
    include_timestamp: bool = True,
    force_reconfigure: bool = False,
) -> None:
    """Configure global logging for kitedoc.

    This function is idempotent - calling it multiple times with the same
    configuration will not duplicate handlers or change settings.

    Parameters
    ----------
    level : LogLevel, default="INFO"
        Minimum log level to output
    format : LogFormat, default="structured"
        Output format:
        - "console": Simple console output (no colors, basic format)
        - "json": JSON format for log aggregation
        - "structured": Enhanced structured format with colors (Loguru native)
        - "rich": Rich console handler
    output_file : str | Path | None, default=None
        Optional file path to write logs to (in addition to console)
    use_color : bool, default=True
        Use ANSI color codes in structured format (auto-disabled for non-TTY)
    include_timestamp : bool, default=True
        Include timestamp in log output
    force_reconfigure : bool, default=False
        Force reconfiguration even if already configured with same settings

    Examples
    --------
    Development setup::

        configure_logging(level="DEBUG", format="rich")

    Testing setup::

        configure_logging(level="WARNING", format="console")
    """
    global _CURRENT_CONFIG

    current_config = {
        "level": level,
        "format": format,
        "output_file": str(output_file) if output_file else None,
        "use_color": use_color,
        "include_timestamp": include_timestamp,
    }

    if not force_reconfigure and current_config == _CURRENT_CONFIG:
        return

    # Remove only our previously added handlers (not external ones)
    for handler_id in _HANDLER_IDS:
        with suppress(ValueError):
            logger.remove(handler_id)
    _HANDLER_IDS.clear()
    logger.configure(extra={"provider": _NO_PROVIDER})

    if format == "rich":
        rich_handler = RichHandler(
            rich_tracebacks=True,
            markup=False,
            show_time=include_timestamp,
            show_level=True,
            show_path=True,
        )
        handler_id = logger.add(sink=rich_handler, level=level, format="{message}")
        _HANDLER_IDS.append(handler_id)

    elif format == "json":
        handler_id = logger.add(sink=sys.stderr, level=level, serialize=True)
        _HANDLER_IDS.append(handler_id)

    elif format == "structured":
        timestamp_fmt = "<green>{time:YYYY-MM-DD HH:mm:ss}</green> " if include_timestamp else ""
        colorize = use_color and sys.stderr.isatty()
        color_level = "<level>{level: <8}</level>" if colorize else "{level: <8}"
        structured_format = (
            f"{timestamp_fmt}[{color_level}]"
            "<cyan>{name}:{function}:{line}</cyan> | <magenta>{extra[provider]}</magenta> | "
            "<level>{message}</level>"
        )
        handler_id = logger.add(
            sink=sys.stderr,
            level=level,
            format=structured_format,
            colorize=colorize,
        )
        _HANDLER_IDS.append(handler_id)

    else:  # console
        timestamp_fmt = "{time:YYYY-MM-DD HH:mm:ss} " if include_timestamp else ""
        console_format = (
            f"{timestamp_fmt}{{level: <8}} | {{name}} | {{extra[provider]}} | {{message}}"
        )
        handler_id = logger.add(
            sink=sys.stderr,
            level=level,
            format=console_format,
            colorize=False,
        )
        _HANDLER_IDS.append(handler_id)

    if output_file:
        output_path = Path(output_file)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        # File output always uses JSON for easier parsing
        handler_id = logger.add(sink=output_path, level=level, serialize=True)
        _HANDLER_IDS.append(handler_id)

    _CURRENT_CONFIG = current_config


@lru_cache(maxsize=256)
def get_logger(name: str) -> "Logger":
    """Get a logger instance with the given name (cached for performance).

    Parameters
    ----------
    name : str
        Logger name, typically __name__ from the calling module

    Returns
    -------
    loguru.Logger
        Configured logger instance bound with the module name

    Notes
    -----
    If configure_logging() hasn't been called, initializes with defaults
    taken from ``KITEDOC_LOG_LEVEL`` and ``KITEDOC_LOG_FORMAT``.
    """
    _ensure_configured()
    return logger.bind(module=name)


def _ensure_configured() -> None:
    """Ensure logging has at least basic configuration (lazy initialization)."""
    if _CURRENT_CONFIG is None:
        level = os.getenv("KITEDOC_LOG_LEVEL", "INFO").upper()
        format_type = os.getenv("KITEDOC_LOG_FORMAT", "structured").lower()
        configure_logging(level=level, format=format_type)  # type: ignore[arg-type]


@contextmanager
def provider_context(name: str, version: str) -> Iterator[None]:
    """Tag every record logged inside the block with the provider being documented.

    Parameters
    ----------
    name : str
        Provider name
    version : str
        Provider version
    """
    with logger.contextualize(provider=f"{name}@{version}"):
        yield
