"""Machine-readable snapshot of a provider version.

The manifest records every resource and property fact the renderers show, so
that an external process can diff two versions (added/removed resources,
changed properties) without re-running the generator.
"""

from __future__ import annotations

import json
from typing import Any

from kitedoc.core.docs.document import Document, text_document
from kitedoc.core.docs.domains import DomainGrouping
from kitedoc.core.docs.models import PropertyInfo, ProviderInfo, RenderContext

MANIFEST_FILENAME = "manifest.json"


def _property_entry(prop: PropertyInfo) -> dict[str, Any]:
    entry: dict[str, Any] = {
        "type": prop.type,
        "required": prop.required,
        "cloudManaged": prop.cloud_managed,
        "importable": prop.importable,
        "deprecated": prop.deprecated,
    }
    if prop.default_value:
        entry["default"] = prop.default_value
    if prop.valid_values:
        entry["validValues"] = list(prop.valid_values)
    if prop.deprecation_message:
        entry["deprecationMessage"] = prop.deprecation_message
    return entry


def build_manifest(
    provider: ProviderInfo, grouping: DomainGrouping, context: RenderContext
) -> dict[str, Any]:
    """Project the model into a JSON-compatible mapping.

    Resources appear in classifier order and properties in declaration
    order, so two manifests of the same model serialize identically.

    Parameters
    ----------
    provider : ProviderInfo
        Provider identity
    grouping : DomainGrouping
        Classified resources
    context : RenderContext
        Supplies the ``generatedAt`` timestamp

    Returns
    -------
    dict[str, Any]
        ``provider``, ``version``, ``generatedAt`` and ``resources``
    """
    resources: dict[str, Any] = {}
    for resource in grouping.resources:
        entry: dict[str, Any] = {"domain": resource.domain_tag}
        if resource.description:
            entry["description"] = resource.description
        entry["properties"] = {prop.name: _property_entry(prop) for prop in resource.properties}
        resources[resource.name] = entry

    return {
        "provider": provider.slug,
        "version": provider.version,
        "generatedAt": context.iso_datetime,
        "resources": resources,
    }


def render_manifest(
    provider: ProviderInfo, grouping: DomainGrouping, context: RenderContext
) -> str:
    """Serialized manifest (two-space indented JSON with a trailing newline)."""
    data = build_manifest(provider, grouping, context)
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def manifest_document(
    provider: ProviderInfo,
    grouping: DomainGrouping,
    context: RenderContext,
    path: str = MANIFEST_FILENAME,
) -> Document:
    return text_document(path, render_manifest(provider, grouping, context), name="manifest")


__all__ = ["MANIFEST_FILENAME", "build_manifest", "manifest_document", "render_manifest"]
