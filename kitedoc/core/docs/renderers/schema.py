"""Kite schema source renderer.

Writes one ``{domain}/{Resource}.kite`` file per resource, or a single
combined file with per-domain banners.
"""

from __future__ import annotations

from kitedoc.core.docs.document import Document, DocumentTree, Section
from kitedoc.core.docs.domains import DomainGrouping
from kitedoc.core.docs.examples import schema_listing
from kitedoc.core.docs.highlighting import render_plain
from kitedoc.core.docs.models import ProviderInfo, ResourceInfo
from kitedoc.core.logging import get_logger

logger = get_logger(__name__)

SCHEMA_EXTENSION = ".kite"
BANNER = "// " + "=" * 60


def schema_source(resource: ResourceInfo) -> str:
    """Plain ``.kite`` source of one resource schema."""
    return render_plain(schema_listing(resource))


class SchemaRenderer:
    """Render re-importable ``.kite`` schema files."""

    def __init__(self, provider: ProviderInfo, grouping: DomainGrouping) -> None:
        self.provider = provider
        self.grouping = grouping

    def render(self) -> DocumentTree:
        """One file per resource, grouped into per-domain directories."""
        documents = [
            Document(
                path=f"{group.domain}/{resource.name}{SCHEMA_EXTENSION}",
                sections=(Section(name=f"schema:{resource.name}", text=schema_source(resource)),),
            )
            for group in self.grouping
            for resource in group.resources
        ]
        logger.debug("Rendered {count} schema files", count=len(documents))
        return DocumentTree.of(documents)

    def render_combined(self, path: str = f"schemas{SCHEMA_EXTENSION}") -> DocumentTree:
        """All schemas in one file, in classifier order."""
        sections = [
            Section(
                name="header",
                text=(
                    f"// {self.provider.display_name} Provider Schemas\n"
                    f"// Version: {self.provider.version}\n\n"
                ),
            )
        ]
        for group in self.grouping:
            banner = f"{BANNER}\n// {group.icon} {group.title}\n{BANNER}\n\n"
            sections.append(
                Section(
                    name=f"domain:{group.domain}",
                    text=banner,
                    children=tuple(
                        Section(name=f"schema:{r.name}", text=schema_source(r) + "\n")
                        for r in group.resources
                    ),
                )
            )
        return DocumentTree.of([Document(path=path, sections=tuple(sections))])
