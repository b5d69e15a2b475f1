"""Protocols describing the provider objects documentation is generated from.

A provider exposes a name, a version and its resource type handlers. Each
handler exposes a ``schema`` whose properties describe one resource
attribute each. Only attribute access is required, so dataclasses, plain
classes and generated objects all qualify.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class PropertySchema(Protocol):
    """One attribute declaration of a resource schema.

    Attributes
    ----------
    name : str
        Property name as written in ``.kite`` files
    type : Any
        Declared type descriptor: a Python type, a generic alias, or a string
        such as ``"int | None"`` or ``"list[str]"``
    type_class : Any
        Runtime type of the value, when known (takes precedence over ``type``)
    """

    name: str
    type: Any
    type_class: Any
    description: str | None
    hidden: bool
    cloud: bool
    importable: bool
    deprecation_message: str | None
    default_value: Any
    valid_values: Sequence[Any] | None


@runtime_checkable
class ResourceSchema(Protocol):
    """Schema of one resource type."""

    description: str | None
    properties: Sequence[PropertySchema]


@runtime_checkable
class ResourceTypeHandler(Protocol):
    """Handler managing one resource type.

    Handlers may also define ``grouping_path`` (for example
    ``"kite_aws.networking"``); otherwise the package of the handler class
    is used to derive the resource domain.
    """

    schema: ResourceSchema


@runtime_checkable
class Provider(Protocol):
    """An infrastructure provider.

    ``resource_types`` is either a mapping of resource name to handler, or an
    iterable of ``(name, handler)`` pairs when registrations must be checked
    for duplicate names.
    """

    name: str
    version: str
    resource_types: Mapping[str, ResourceTypeHandler] | Iterable[tuple[str, ResourceTypeHandler]]
