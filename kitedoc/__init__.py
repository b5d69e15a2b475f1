"""kitedoc - documentation generator for Kite infrastructure providers.

Turns a provider's resource schemas into an interactive HTML site, a Markdown
reference and re-importable ``.kite`` schema files.
"""

# Version is defined in pyproject.toml and read dynamically
try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("kitedoc")
except PackageNotFoundError:
    __version__ = "0.0.0.dev0"  # Fallback for development installs

from kitedoc.core.docs import (
    DocGenerator,
    PropertyInfo,
    ProviderInfo,
    RenderContext,
    ResourceInfo,
    build_context,
    load_provider_definition,
)
from kitedoc.core.exceptions import KiteDocError
from kitedoc.core.resolver import resolve_provider

__all__ = [
    "DocGenerator",
    "KiteDocError",
    "PropertyInfo",
    "ProviderInfo",
    "RenderContext",
    "ResourceInfo",
    "__version__",
    "build_context",
    "load_provider_definition",
    "resolve_provider",
]
