"""Module path resolver for provider objects.

Providers are located through Python's import system, either as
``package.module.Attr`` or ``package.module:attr``.

Examples
--------
>>> from kitedoc.core.resolver import resolve_provider
>>> provider = resolve_provider("kite_aws.provider:AwsProvider")  # doctest: +SKIP
"""

from __future__ import annotations

import importlib
import inspect
from typing import Any

from kitedoc.core.exceptions import ResolveError
from kitedoc.core.logging import get_logger
from kitedoc.core.ports.provider import Provider

logger = get_logger(__name__)


def _split_target(target: str) -> tuple[str, str]:
    """Split a target into ``(module_path, attribute)``."""
    if ":" in target:
        module_path, _, attr = target.partition(":")
    elif "." in target:
        module_path, attr = target.rsplit(".", 1)
    else:
        raise ResolveError(
            target,
            "Must be a full module path (e.g., 'kite_aws.provider.AwsProvider') "
            "or 'module:attribute'",
        )
    if not module_path or not attr:
        raise ResolveError(target, "Invalid format - expected 'module.path.Attr' or 'module:attr'")
    return module_path, attr


def resolve(target: str) -> Any:
    """Resolve a target string to the Python object it names.

    Parameters
    ----------
    target : str
        ``package.module.Attr`` or ``package.module:attr``; the attribute part
        may be dotted after a colon (``module:Outer.inner``)

    Returns
    -------
    Any
        The resolved object

    Raises
    ------
    ResolveError
        If the module or attribute cannot be found
    """
    module_path, attr_path = _split_target(target)

    try:
        module = importlib.import_module(module_path)
    except ModuleNotFoundError as e:
        raise ResolveError(target, f"Module '{module_path}' not found: {e}") from e
    except ImportError as e:
        raise ResolveError(target, f"Failed to import '{module_path}': {e}") from e

    obj: Any = module
    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as e:
            available = [name for name in dir(obj) if not name.startswith("_")]
            raise ResolveError(
                target,
                f"'{part}' not found in '{module_path}'. Available: {', '.join(available[:10])}",
            ) from e
    return obj


def resolve_provider(target: str) -> Provider:
    """Resolve a target to a provider instance.

    Classes and zero-argument factories are called; anything else must
    already satisfy the :class:`~kitedoc.core.ports.provider.Provider`
    protocol.

    Raises
    ------
    ResolveError
        If the target cannot be imported, instantiated, or is not a provider
    """
    obj = resolve(target)

    if inspect.isclass(obj) or (callable(obj) and not isinstance(obj, Provider)):
        try:
            obj = obj()
        except TypeError as e:
            raise ResolveError(target, f"Cannot instantiate provider without arguments: {e}") from e

    if not isinstance(obj, Provider):
        raise ResolveError(
            target,
            f"'{type(obj).__name__}' is not a provider "
            "(expected 'name', 'version' and 'resource_types' attributes)",
        )

    logger.debug("Resolved provider {target} -> {name}", target=target, name=obj.name)
    return obj
