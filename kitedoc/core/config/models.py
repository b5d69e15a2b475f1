"""Configuration data models for kitedoc."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from kitedoc.core.exceptions import ValidationError

#: Output formats understood by the generator.
KNOWN_FORMATS: tuple[str, ...] = ("html", "markdown", "kite", "combined-markdown", "combined-kite")

#: Accepted spellings for each format.
FORMAT_ALIASES: dict[str, str] = {
    "html": "html",
    "site": "html",
    "markdown": "markdown",
    "md": "markdown",
    "kite": "kite",
    "schema": "kite",
    "combined-markdown": "combined-markdown",
    "combined-md": "combined-markdown",
    "combined-kite": "combined-kite",
    "combined-schema": "combined-kite",
}


def normalize_formats(formats: list[str] | tuple[str, ...] | str) -> tuple[str, ...]:
    """Normalize a format list (or comma-separated string) to canonical names.

    Parameters
    ----------
    formats : list[str] | tuple[str, ...] | str
        Format names, possibly using aliases such as ``md``

    Returns
    -------
    tuple[str, ...]
        Canonical format names, deduplicated, in first-seen order

    Raises
    ------
    ValidationError
        If a format is not recognized
    """
    items = formats.split(",") if isinstance(formats, str) else list(formats)
    result: list[str] = []
    for item in items:
        name = item.strip().lower()
        if not name:
            continue
        canonical = FORMAT_ALIASES.get(name)
        if canonical is None:
            raise ValidationError(
                "formats", f"unknown format, expected one of {KNOWN_FORMATS}", name
            )
        if canonical not in result:
            result.append(canonical)
    return tuple(result)


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    """Logging configuration for kitedoc.

    Attributes
    ----------
    level : str, default="INFO"
        Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    format : str, default="structured"
        Output format (console, json, structured, rich)
    output_file : str | None, default=None
        Optional file path to write logs to
    use_color : bool, default=True
        Use ANSI color codes (auto-disabled for non-TTY)
    include_timestamp : bool, default=True
        Include timestamp in log output

    Examples
    --------
    TOML configuration:

    ```toml
    [tool.kitedoc.logging]
    level = "DEBUG"
    format = "rich"
    ```

    Environment variable overrides:

    ```bash
    export KITEDOC_LOG_LEVEL=DEBUG
    export KITEDOC_LOG_FORMAT=json
    export KITEDOC_LOG_FILE=/tmp/kitedoc.log
    ```
    """

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["console", "json", "structured", "rich"] = "structured"
    output_file: str | None = None
    use_color: bool = True
    include_timestamp: bool = True


@dataclass(frozen=True, slots=True)
class SiteConfig:
    """Settings for the interactive HTML site.

    Attributes
    ----------
    base_url : str
        Public URL the site is served under (canonical links, sitemap, feed)
    locale : str
        Language tag used for ``<html lang>`` and the RSS feed
    related_limit : int
        Maximum number of related resources listed on a resource page
    reference_limit : int
        Maximum number of same-domain resources wired into the references example
    issues_url : str
        URL used for the "Report an issue" link
    """

    base_url: str = "https://docs.kitelang.cloud"
    locale: str = "en-us"
    related_limit: int = 5
    reference_limit: int = 2
    issues_url: str = "https://github.com/kitecorp/kite-providers/issues/new"

    def __post_init__(self) -> None:
        if self.related_limit < 0:
            raise ValidationError("related_limit", "must not be negative", self.related_limit)
        if self.reference_limit < 0:
            raise ValidationError("reference_limit", "must not be negative", self.reference_limit)


@dataclass(slots=True)
class KiteDocConfig:
    """Complete kitedoc configuration.

    Attributes
    ----------
    output_dir : str
        Directory the generated artifacts are written to
    formats : tuple[str, ...]
        Output formats to generate
    site : SiteConfig
        HTML site settings
    logging : LoggingConfig
        Logging configuration

    Examples
    --------
    TOML configuration in pyproject.toml:

    ```toml
    [tool.kitedoc]
    output_dir = "docs"
    formats = ["html", "markdown", "kite"]

    [tool.kitedoc.site]
    base_url = "https://docs.example.com"
    related_limit = 3

    [tool.kitedoc.logging]
    level = "DEBUG"
    ```
    """

    output_dir: str = "build/docs/provider"
    formats: tuple[str, ...] = ("html", "markdown", "kite")
    site: SiteConfig = field(default_factory=SiteConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
