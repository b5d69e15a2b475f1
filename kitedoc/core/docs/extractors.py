"""Schema extraction: provider handlers to documentation models.

This module turns the schema a provider exposes for each resource type into
:class:`ResourceInfo` / :class:`PropertyInfo` models. Type descriptors are
mapped to semantic tags through an explicit, ordered dispatch table; nothing
here raises for an unrecognized type.
"""

from __future__ import annotations

import collections.abc
import decimal
import inspect
import json
import re
import sys
import types
from collections.abc import Iterable, Mapping
from typing import Any, Union, get_args, get_origin

from kitedoc.core.docs.domains import is_known_domain
from kitedoc.core.docs.models import PropertyInfo, ProviderInfo, ResourceInfo
from kitedoc.core.exceptions import DuplicateResourceError
from kitedoc.core.logging import get_logger

logger = get_logger(__name__)

#: Ordered dispatch table: (tag, descriptor names, runtime classes).
#: Order matters: ``bool`` is an ``int`` and ``str`` is a ``Sequence``.
TYPE_TABLE: tuple[tuple[str, frozenset[str], tuple[type, ...]], ...] = (
    ("string", frozenset({"str", "string", "text", "char", "charsequence"}), (str,)),
    ("boolean", frozenset({"bool", "boolean"}), (bool,)),
    (
        "integer",
        frozenset({"int", "integer", "long", "short", "byte", "bigint", "biginteger"}),
        (int,),
    ),
    (
        "number",
        frozenset({"float", "double", "number", "decimal", "bigdecimal"}),
        (float, decimal.Decimal),
    ),
    ("set", frozenset({"set", "frozenset", "abstractset"}), (collections.abc.Set,)),
    (
        "map",
        frozenset({"dict", "map", "mapping", "hashmap", "object", "mutablemapping"}),
        (collections.abc.Mapping,),
    ),
    (
        "list",
        frozenset({"list", "tuple", "sequence", "array", "arraylist", "mutablesequence"}),
        (list, tuple, collections.abc.Sequence),
    ),
)

_NULL_NAMES = frozenset({"none", "null", "nonetype"})
_OPTIONAL_RE = re.compile(r"^(?:typing\.)?Optional\[(?P<inner>.*)\]$")


def _split_union(text: str) -> list[str]:
    """Split ``a | b[c | d]`` on top-level ``|`` only."""
    parts: list[str] = []
    depth = 0
    current = ""
    for char in text:
        if char in "[(":
            depth += 1
        elif char in "])":
            depth -= 1
        if char == "|" and depth == 0:
            parts.append(current.strip())
            current = ""
        else:
            current += char
    parts.append(current.strip())
    return [p for p in parts if p]


def _parse_text_descriptor(text: str) -> tuple[str | None, bool]:
    """Return ``(base name, nullable)`` for a textual type descriptor."""
    text = text.strip()
    nullable = False
    if text.endswith("?"):
        nullable = True
        text = text[:-1].strip()
    if match := _OPTIONAL_RE.match(text):
        nullable = True
        text = match.group("inner").strip()

    parts = _split_union(text)
    non_null = [p for p in parts if p.lower() not in _NULL_NAMES]
    if len(non_null) != len(parts):
        nullable = True
    if not non_null:
        return None, nullable

    base = non_null[0].split("[", 1)[0].split("<", 1)[0].strip()
    # typing.List -> List, builtins.str -> str
    base = base.rsplit(".", 1)[-1]
    return (base or None), nullable


def _unwrap(descriptor: Any) -> tuple[Any, bool]:
    """Strip ``None`` from unions; return ``(inner descriptor, nullable)``."""
    if isinstance(descriptor, str):
        return descriptor, _parse_text_descriptor(descriptor)[1]
    if descriptor is None or descriptor is type(None):
        return None, True

    origin = get_origin(descriptor)
    if origin is Union or origin is types.UnionType:
        args = get_args(descriptor)
        non_null = [arg for arg in args if arg is not type(None)]
        nullable = len(non_null) != len(args)
        if not non_null:
            return None, True
        inner, inner_nullable = _unwrap(non_null[0])
        return inner, nullable or inner_nullable
    return descriptor, False


def is_nullable(descriptor: Any) -> bool:
    """Whether a type descriptor admits ``None`` (``Optional``, ``X | None``, ``X?``)."""
    if descriptor is None:
        return False
    return _unwrap(descriptor)[1]


def _tag_for_name(name: str) -> str | None:
    lowered = name.lower()
    for tag, names, _ in TYPE_TABLE:
        if lowered in names:
            return tag
    return None


def _tag_for_class(cls: type) -> str | None:
    for tag, _, classes in TYPE_TABLE:
        try:
            if issubclass(cls, classes):
                return tag
        except TypeError:
            return None
    return None


def _lookup(descriptor: Any) -> tuple[str | None, str | None]:
    """Map a descriptor to ``(tag, fallback name)``; either may be None."""
    inner, _ = _unwrap(descriptor)
    if inner is None:
        return None, None

    if isinstance(inner, str):
        base, _ = _parse_text_descriptor(inner)
        if base is None:
            return None, None
        return _tag_for_name(base), base.lower()

    origin = get_origin(inner)
    target = origin if origin is not None else inner
    if isinstance(target, type):
        return _tag_for_class(target), target.__name__.lower()
    name = getattr(target, "__name__", None) or getattr(target, "_name", None)
    if name:
        return _tag_for_name(name), str(name).lower()
    return None, None


def map_type(type_hint: Any, type_class: Any = None) -> str:
    """Map a declared type to its semantic tag.

    Precedence: the mapped ``type_class``; the mapped or lower-cased
    ``type_hint``; the lower-cased ``type_class`` name; ``any``.

    Parameters
    ----------
    type_hint : Any
        Declared type descriptor (string, type, generic alias or None)
    type_class : Any
        Runtime type of the value, or None

    Returns
    -------
    str
        One of string, integer, number, boolean, list, map, set, any, or a
        free-form fallback tag

    Examples
    --------
    >>> map_type(None, int)
    'integer'
    >>> map_type("list[str] | None")
    'list'
    >>> map_type("Subnet")
    'subnet'
    >>> map_type(None)
    'any'
    """
    class_tag, class_name = _lookup(type_class) if type_class is not None else (None, None)
    if class_tag:
        return class_tag

    hint_tag, hint_name = _lookup(type_hint) if type_hint is not None else (None, None)
    if hint_tag:
        return hint_tag
    if hint_name:
        logger.debug(
            "No mapping for type hint {hint!r}, using '{name}'", hint=type_hint, name=hint_name
        )
        return hint_name
    if class_name:
        logger.debug("No mapping for {cls!r}, using '{name}'", cls=type_class, name=class_name)
        return class_name
    return "any"


def _default_text(value: Any) -> str | None:
    """Store a default value as raw text; empty values are absent."""
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple, dict)):
        return json.dumps(value)
    text = str(value)
    return text or None


def _valid_values(values: Iterable[Any] | None) -> tuple[str, ...] | None:
    if not values:
        return None
    result = tuple(_default_text(v) or "" for v in values)
    return result or None


class SchemaExtractor:
    """Extract documentation models from provider objects.

    All methods are static and pure: the same input always yields equal
    models.
    """

    @staticmethod
    def extract_property(prop: Any) -> PropertyInfo | None:
        """Extract one property; returns None for hidden properties.

        Parameters
        ----------
        prop : PropertySchema
            Property declaration from a resource schema

        Returns
        -------
        PropertyInfo | None
            The property model, or None when the property is hidden
        """
        name = getattr(prop, "name", "")
        if getattr(prop, "hidden", False):
            logger.debug("Skipping hidden property {name}", name=name)
            return None

        type_hint = getattr(prop, "type", None)
        type_class = getattr(prop, "type_class", None)
        declared = type_class if type_class is not None else type_hint
        message = getattr(prop, "deprecation_message", None) or None

        return PropertyInfo(
            name=name,
            type=map_type(type_hint, type_class),
            description=getattr(prop, "description", None) or None,
            required=not is_nullable(declared),
            cloud_managed=bool(getattr(prop, "cloud", False)),
            importable=bool(getattr(prop, "importable", False)),
            deprecated=bool(message),
            deprecation_message=message,
            default_value=_default_text(getattr(prop, "default_value", None)),
            valid_values=_valid_values(getattr(prop, "valid_values", None)),
        )

    @staticmethod
    def extract_domain(handler: Any) -> str | None:
        """Derive the domain from the handler's grouping path.

        ``handler.grouping_path`` is used when present, otherwise the package
        of the handler's class. Only the last path segment is considered, and
        only if it is a known domain.
        """
        path = getattr(handler, "grouping_path", None)
        if not path:
            cls = handler if inspect.isclass(handler) else type(handler)
            module_name = getattr(cls, "__module__", "") or ""
            module = sys.modules.get(module_name)
            package = getattr(module, "__package__", None) if module is not None else None
            if package is None:
                package = module_name.rsplit(".", 1)[0] if "." in module_name else ""
            path = package

        last = re.split(r"[./\\]", str(path).strip("./\\"))[-1].lower()
        return last if is_known_domain(last) else None

    @staticmethod
    def extract_resource(name: str, handler: Any) -> ResourceInfo:
        """Extract one resource type.

        Parameters
        ----------
        name : str
            Resource type identifier
        handler : ResourceTypeHandler
            Handler exposing ``schema``

        Returns
        -------
        ResourceInfo
            Resource model with hidden properties removed
        """
        schema = getattr(handler, "schema", None)
        declared = getattr(schema, "properties", None) or ()
        properties = []
        for prop in declared:
            info = SchemaExtractor.extract_property(prop)
            if info is not None:
                properties.append(info)

        return ResourceInfo(
            name=name,
            domain=SchemaExtractor.extract_domain(handler),
            description=getattr(schema, "description", None) or None,
            properties=tuple(properties),
        )

    @staticmethod
    def extract_provider(provider: Any) -> tuple[ProviderInfo, list[ResourceInfo]]:
        """Extract provider identity and all resources.

        Raises
        ------
        DuplicateResourceError
            If two handlers are registered under the same resource name
        """
        info = ProviderInfo(
            name=provider.name,
            version=provider.version,
            logo_url=getattr(provider, "logo_url", None),
        )
        logger.info(
            "Extracting resources from provider {name} {version}",
            name=info.name,
            version=info.version,
        )

        registrations = provider.resource_types
        pairs = registrations.items() if isinstance(registrations, Mapping) else registrations

        resources: list[ResourceInfo] = []
        seen: set[str] = set()
        for name, handler in pairs:
            if name in seen:
                raise DuplicateResourceError(name)
            seen.add(name)
            resources.append(SchemaExtractor.extract_resource(name, handler))

        logger.info("Extracted {count} resources", count=len(resources))
        return info, resources
