"""Configuration management for kitedoc."""

from kitedoc.core.config.loader import (
    ConfigLoader,
    clear_config_cache,
    get_default_config,
    load_config,
    source_date_epoch,
)
from kitedoc.core.config.models import (
    KNOWN_FORMATS,
    KiteDocConfig,
    LoggingConfig,
    SiteConfig,
    normalize_formats,
)

__all__ = [
    "KNOWN_FORMATS",
    "ConfigLoader",
    "KiteDocConfig",
    "LoggingConfig",
    "SiteConfig",
    "clear_config_cache",
    "get_default_config",
    "load_config",
    "normalize_formats",
    "source_date_epoch",
]
