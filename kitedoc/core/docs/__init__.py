"""Documentation generation for Kite providers.

Extracts a canonical model from a provider's resource schemas, classifies
resources into domains, and renders the HTML site, the Markdown reference and
``.kite`` schema files from that one model.
"""

from kitedoc.core.docs.document import Document, DocumentTree, Section, serialize, write_tree
from kitedoc.core.docs.domains import DomainGroup, DomainGrouping, classify
from kitedoc.core.docs.extractors import SchemaExtractor, map_type
from kitedoc.core.docs.generator import DocGenerator, GenerationResult, build_context
from kitedoc.core.docs.layout import OutputLayout
from kitedoc.core.docs.manifest import build_manifest, render_manifest
from kitedoc.core.docs.models import PropertyInfo, ProviderInfo, RenderContext, ResourceInfo
from kitedoc.core.docs.sources import load_provider_definition

__all__ = [
    "DocGenerator",
    "Document",
    "DocumentTree",
    "DomainGroup",
    "DomainGrouping",
    "GenerationResult",
    "OutputLayout",
    "PropertyInfo",
    "ProviderInfo",
    "RenderContext",
    "ResourceInfo",
    "SchemaExtractor",
    "Section",
    "build_context",
    "build_manifest",
    "classify",
    "load_provider_definition",
    "map_type",
    "render_manifest",
    "serialize",
    "write_tree",
]
