"""TOML configuration loader for kitedoc."""

from __future__ import annotations

import os
import re
import tomllib
from datetime import UTC, datetime
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal, cast

from kitedoc.core.config.models import KiteDocConfig, LoggingConfig, SiteConfig, normalize_formats
from kitedoc.core.exceptions import ConfigurationError
from kitedoc.core.logging import get_logger

# Constants for boolean environment variable parsing
_TRUTHY_VALUES = frozenset({"true", "1", "yes", "on", "enabled"})
_FALSY_VALUES = frozenset({"false", "0", "no", "off", "disabled"})

_SITE_KEYS = frozenset({"base_url", "locale", "related_limit", "reference_limit", "issues_url"})

logger = get_logger(__name__)


def _parse_bool_env(value: str) -> bool:
    """Parse boolean from environment variable value.

    Parameters
    ----------
    value : str
        Environment variable value

    Returns
    -------
    bool
        Parsed boolean value

    Raises
    ------
    ValueError
        If value is not a recognized boolean string
    """
    normalized = value.lower().strip()
    if normalized in _TRUTHY_VALUES:
        return True
    if normalized in _FALSY_VALUES:
        return False
    expected = sorted(_TRUTHY_VALUES | _FALSY_VALUES)
    raise ValueError(f"Invalid boolean value: {value!r}. Expected one of: {expected}")


@lru_cache(maxsize=32)
def _load_and_parse_cached(path_str: str) -> KiteDocConfig:
    """Cached configuration loader."""
    loader = ConfigLoader()
    return loader._load_and_parse(Path(path_str))


class ConfigLoader:
    """Loads and processes kitedoc configuration from TOML files."""

    ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")

    def load_from_toml(self, path: str | Path | None = None) -> KiteDocConfig:
        """Load configuration from TOML file.

        Parameters
        ----------
        path : str | Path | None
            Path to TOML file. If None, searches for kitedoc.toml or pyproject.toml

        Returns
        -------
        KiteDocConfig
            Parsed configuration with environment variables substituted
        """
        config_path = self._find_config_file(path)
        return _load_and_parse_cached(str(config_path.absolute()))

    def _load_and_parse(self, config_path: Path) -> KiteDocConfig:
        """Load and parse configuration file."""
        logger.info("Loading configuration from {path}", path=config_path)

        try:
            with config_path.open("rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigurationError(str(config_path), f"TOML parsing error: {e}") from e

        if config_path.name == "pyproject.toml":
            kitedoc_data = data.get("tool", {}).get("kitedoc", {})
            if not kitedoc_data:
                logger.warning("No [tool.kitedoc] section found in pyproject.toml, using defaults")
                return get_default_config()
        elif "tool" in data and "kitedoc" in data.get("tool", {}):
            kitedoc_data = data["tool"]["kitedoc"]
        else:
            # Flat format (top-level keys)
            kitedoc_data = data

        kitedoc_data = self._substitute_env_vars(kitedoc_data)
        return self._parse_config(kitedoc_data)

    def _find_config_file(self, path: str | Path | None) -> Path:
        """Find configuration file.

        Parameters
        ----------
        path : str | Path | None
            Explicit path or None to search

        Returns
        -------
        Path
            Path to configuration file

        Raises
        ------
        FileNotFoundError
            If no configuration file is found
        """
        if path:
            config_path = Path(path)
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return config_path

        if env_path := os.getenv("KITEDOC_CONFIG_PATH"):
            config_path = Path(env_path)
            if config_path.exists():
                logger.debug(f"Using config from KITEDOC_CONFIG_PATH: {config_path}")
                return config_path
            logger.warning(f"KITEDOC_CONFIG_PATH set but file not found: {config_path}")

        for search_path in (Path("kitedoc.toml"), Path(".kitedoc.toml")):
            if search_path.exists():
                return search_path

        # pyproject.toml only counts when it carries a [tool.kitedoc] table
        current = Path.cwd()
        while True:
            pyproject = current / "pyproject.toml"
            if pyproject.exists():
                with pyproject.open("rb") as f:
                    data = tomllib.load(f)
                if "kitedoc" in data.get("tool", {}):
                    return pyproject
            if current == current.parent:
                break
            current = current.parent

        raise FileNotFoundError(
            "No configuration file found. Searched for: kitedoc.toml, .kitedoc.toml, pyproject.toml"
        )

    def _substitute_env_vars(self, data: Any) -> Any:
        """Recursively substitute ``${VAR}`` references in configuration."""
        if isinstance(data, str):

            def replacer(match: re.Match[str]) -> str:
                var_name = match.group(1)
                value = os.environ.get(var_name)
                if value is None:
                    logger.debug(
                        f"Environment variable ${{{var_name}}} not found, keeping placeholder"
                    )
                    return match.group(0)
                return value

            return self.ENV_VAR_PATTERN.sub(replacer, data)

        if isinstance(data, dict):
            return {key: self._substitute_env_vars(value) for key, value in data.items()}

        if isinstance(data, list):
            return [self._substitute_env_vars(item) for item in data]

        return data

    def _parse_config(self, data: dict[str, Any]) -> KiteDocConfig:
        """Parse configuration data into KiteDocConfig.

        Raises
        ------
        ConfigurationError
            If a section has the wrong shape or contains unknown keys
        """
        config = KiteDocConfig()

        if "output_dir" in data:
            config.output_dir = str(data["output_dir"])

        if "formats" in data:
            formats = data["formats"]
            if not isinstance(formats, (list, str)):
                raise ConfigurationError("formats", "must be a list or a comma-separated string")
            config.formats = normalize_formats(formats)
            logger.debug("Loaded {count} formats", count=len(config.formats))

        site_data = data.get("site", {})
        if not isinstance(site_data, dict):
            raise ConfigurationError("site", "must be a table")
        unknown = set(site_data) - _SITE_KEYS
        if unknown:
            raise ConfigurationError("site", f"unknown keys: {', '.join(sorted(unknown))}")
        config.site = SiteConfig(**site_data)

        config.logging = self._parse_logging_config(data.get("logging", {}))
        return config

    def _parse_logging_config(self, logging_data: dict[str, Any]) -> LoggingConfig:
        """Parse logging configuration with environment variable overrides.

        Environment variables take precedence over TOML configuration:
        - KITEDOC_LOG_LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        - KITEDOC_LOG_FORMAT: Output format (console, json, structured, rich)
        - KITEDOC_LOG_FILE: Optional file path for log output
        - KITEDOC_LOG_COLOR: Use color output (true/false)
        - KITEDOC_LOG_TIMESTAMP: Include timestamp (true/false)

        Parameters
        ----------
        logging_data : dict[str, Any]
            Logging section from TOML config

        Returns
        -------
        LoggingConfig
            Parsed logging configuration with env overrides applied
        """
        level = logging_data.get("level", "INFO")
        format_type = logging_data.get("format", "structured")
        output_file = logging_data.get("output_file")
        use_color = logging_data.get("use_color", True)
        include_timestamp = logging_data.get("include_timestamp", True)

        if env_level := os.getenv("KITEDOC_LOG_LEVEL"):
            level = env_level.upper()
            logger.debug(f"Overriding log level from env: {level}")

        if env_format := os.getenv("KITEDOC_LOG_FORMAT"):
            format_type = env_format.lower()
            logger.debug(f"Overriding log format from env: {format_type}")

        if env_file := os.getenv("KITEDOC_LOG_FILE"):
            output_file = env_file
            logger.debug(f"Overriding log file from env: {output_file}")

        if env_color := os.getenv("KITEDOC_LOG_COLOR"):
            try:
                use_color = _parse_bool_env(env_color)
            except ValueError as e:
                logger.warning(f"Invalid KITEDOC_LOG_COLOR value: {e}")

        if env_timestamp := os.getenv("KITEDOC_LOG_TIMESTAMP"):
            try:
                include_timestamp = _parse_bool_env(env_timestamp)
            except ValueError as e:
                logger.warning(f"Invalid KITEDOC_LOG_TIMESTAMP value: {e}")

        return LoggingConfig(
            level=cast("Literal['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']", level),
            format=cast("Literal['console', 'json', 'structured', 'rich']", format_type),
            output_file=output_file,
            use_color=use_color,
            include_timestamp=include_timestamp,
        )


def get_default_config() -> KiteDocConfig:
    """Return the built-in default configuration."""
    return KiteDocConfig()


def load_config(path: str | Path | None = None) -> KiteDocConfig:
    """Load configuration from TOML file or return defaults.

    Parameters
    ----------
    path : str | Path | None
        Path to configuration file or None to search

    Returns
    -------
    KiteDocConfig
        Loaded configuration or defaults if no file found

    Raises
    ------
    ConfigurationError
        If an explicit ``path`` does not exist or the file is invalid
    """
    try:
        return ConfigLoader().load_from_toml(path)
    except FileNotFoundError as e:
        if path:
            raise ConfigurationError(str(path), "configuration file not found") from e
        logger.info("No configuration file found, using defaults")
        return get_default_config()


def clear_config_cache() -> None:
    """Clear all configuration caches.

    Useful for testing or when configuration files have been modified.
    """
    _load_and_parse_cached.cache_clear()


def source_date_epoch() -> datetime | None:
    """Return the timestamp pinned by ``SOURCE_DATE_EPOCH``, if any.

    Raises
    ------
    ConfigurationError
        If the variable is set but is not an integer
    """
    raw = os.getenv("SOURCE_DATE_EPOCH")
    if not raw:
        return None
    try:
        seconds = int(raw)
    except ValueError as e:
        raise ConfigurationError(
            "SOURCE_DATE_EPOCH", f"expected integer seconds, got {raw!r}"
        ) from e
    return datetime.fromtimestamp(seconds, tz=UTC)
