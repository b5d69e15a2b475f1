"""Core of kitedoc: configuration, logging, errors, provider ports and the docs pipeline."""

from kitedoc.core.exceptions import (
    ConfigurationError,
    DuplicateResourceError,
    KiteDocError,
    OutputWriteError,
    ProviderDefinitionError,
    ResolveError,
    ValidationError,
)

__all__ = [
    "ConfigurationError",
    "DuplicateResourceError",
    "KiteDocError",
    "OutputWriteError",
    "ProviderDefinitionError",
    "ResolveError",
    "ValidationError",
]
