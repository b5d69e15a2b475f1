"""Static providers described by a YAML or JSON definition file.

A definition file lets documentation be generated without importing the
provider package::

    name: aws
    version: 1.4.0
    resources:
      Vpc:
        domain: networking
        description: Virtual private cloud
        properties:
          - name: cidrBlock
            type: str
          - name: id
            type: str
            cloud: true
            importable: true

``resources`` may also be a list of entries carrying a ``name`` key; list
entries are checked for duplicate names during extraction. Property types
are written as Python-style descriptors (``str``, ``int | None``,
``list[str]``).
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from kitedoc.core.exceptions import ProviderDefinitionError
from kitedoc.core.logging import get_logger

logger = get_logger(__name__)

JSON_SUFFIXES = frozenset({".json"})
YAML_SUFFIXES = frozenset({".yaml", ".yml"})


class PropertyDefinition(BaseModel):
    """One property entry of a definition file.

    Satisfies :class:`~kitedoc.core.ports.provider.PropertySchema`.
    ``default`` and ``deprecated`` are accepted as short spellings of
    ``default_value`` and ``deprecation_message``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    name: str
    type: str | None = None
    type_class: str | None = None
    description: str | None = None
    hidden: bool = False
    cloud: bool = False
    importable: bool = False
    deprecation_message: str | None = Field(default=None, alias="deprecated")
    default_value: Any = Field(default=None, alias="default")
    valid_values: tuple[Any, ...] | None = None


class ResourceDefinition(BaseModel):
    """One resource entry of a definition file."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str | None = None
    domain: str | None = None
    description: str | None = None
    properties: tuple[PropertyDefinition, ...] = ()


class ProviderDefinition(BaseModel):
    """Top-level structure of a definition file."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    version: str
    logo_url: str | None = None
    resources: dict[str, ResourceDefinition] | list[ResourceDefinition] = Field(
        default_factory=dict
    )

    @field_validator("version", mode="before")
    @classmethod
    def _version_as_text(cls, value: Any) -> Any:
        # YAML reads ``version: 1.0`` as a float
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


@dataclass(frozen=True, slots=True)
class StaticResourceSchema:
    description: str | None
    properties: tuple[PropertyDefinition, ...]


@dataclass(frozen=True, slots=True)
class StaticResourceHandler:
    """Resource type handler backed by a definition entry.

    ``grouping_path`` carries the declared domain so the extractor classifies
    it like any handler package path.
    """

    schema: StaticResourceSchema
    grouping_path: str | None = None


@dataclass(frozen=True, slots=True)
class StaticProvider:
    """Provider assembled from a definition file.

    ``resource_types`` is kept as ordered ``(name, handler)`` pairs.
    """

    name: str
    version: str
    resource_types: tuple[tuple[str, StaticResourceHandler], ...]
    logo_url: str | None = None


def build_provider(definition: ProviderDefinition, source: str = "<definition>") -> StaticProvider:
    """Turn a validated definition into a provider object.

    Raises
    ------
    ProviderDefinitionError
        If a list entry has no ``name``
    """
    if isinstance(definition.resources, dict):
        entries = list(definition.resources.items())
    else:
        entries = []
        for index, resource in enumerate(definition.resources):
            if not resource.name:
                raise ProviderDefinitionError(source, f"resources[{index}] has no 'name'")
            entries.append((resource.name, resource))

    pairs = tuple(
        (
            name,
            StaticResourceHandler(
                schema=StaticResourceSchema(
                    description=resource.description, properties=resource.properties
                ),
                grouping_path=resource.domain,
            ),
        )
        for name, resource in entries
    )
    return StaticProvider(
        name=definition.name,
        version=definition.version,
        resource_types=pairs,
        logo_url=definition.logo_url,
    )


def parse_definition(data: Any, source: str = "<definition>") -> StaticProvider:
    """Validate already-parsed definition data.

    Raises
    ------
    ProviderDefinitionError
        If the data is not a mapping or fails validation
    """
    if not isinstance(data, dict):
        raise ProviderDefinitionError(source, "top level must be a mapping")
    try:
        definition = ProviderDefinition.model_validate(data)
    except PydanticValidationError as e:
        errors = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise ProviderDefinitionError(source, errors) from e
    return build_provider(definition, source)


def load_provider_definition(path: str | Path) -> StaticProvider:
    """Load a provider from a YAML or JSON definition file.

    Parameters
    ----------
    path : str | Path
        ``.yaml``/``.yml`` or ``.json`` file; other suffixes are read as YAML

    Returns
    -------
    StaticProvider
        Provider ready for :class:`~kitedoc.core.docs.extractors.SchemaExtractor`

    Raises
    ------
    ProviderDefinitionError
        If the file cannot be read, parsed or validated
    """
    file_path = Path(path)
    source = str(file_path)
    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ProviderDefinitionError(source, f"cannot read file: {e.strerror or e}") from e

    try:
        if file_path.suffix.lower() in JSON_SUFFIXES:
            data = json.loads(content)
        else:
            data = yaml.safe_load(content)
    except json.JSONDecodeError as e:
        raise ProviderDefinitionError(source, f"JSON syntax error: {e}") from e
    except yaml.YAMLError as e:
        raise ProviderDefinitionError(source, f"YAML syntax error: {e}") from e

    provider = parse_definition(data, source)
    logger.debug(
        "Loaded provider definition {path} ({count} resources)",
        path=source,
        count=len(provider.resource_types),
    )
    return provider


__all__ = [
    "PropertyDefinition",
    "ProviderDefinition",
    "ResourceDefinition",
    "StaticProvider",
    "StaticResourceHandler",
    "StaticResourceSchema",
    "build_provider",
    "load_provider_definition",
    "parse_definition",
]
