"""Markdown reference renderer.

Produces ``README.md`` (per-domain index tables), one ``{Resource}.md`` page
per resource, and optionally a combined ``REFERENCE.md``.
"""

from __future__ import annotations

from collections.abc import Sequence

from kitedoc.core.docs.document import Document, DocumentTree, Section
from kitedoc.core.docs.domains import DomainGrouping
from kitedoc.core.docs.examples import basic_example
from kitedoc.core.docs.formatting import single_line, truncate
from kitedoc.core.docs.highlighting import render_plain
from kitedoc.core.docs.models import PropertyInfo, ProviderInfo, RenderContext, ResourceInfo
from kitedoc.core.logging import get_logger

logger = get_logger(__name__)

NO_VALUE = "—"
INDEX_DESCRIPTION_LIMIT = 60
DEPRECATED_BADGE = "⚠️ deprecated"
IMPORTABLE_BADGE = "📥 importable"
CLOUD_NOTE = "_These properties are set by the cloud provider after resource creation._"


def cell(value: str | None) -> str:
    """Escape a value for use inside a table cell."""
    if not value:
        return ""
    return single_line(value).replace("|", "\\|")


def code(value: str) -> str:
    return f"`{value}`"


def anchor(name: str) -> str:
    return name.lower()


class MarkdownRenderer:
    """Render the Markdown reference for one provider.

    Parameters
    ----------
    provider : ProviderInfo
        Provider identity
    grouping : DomainGrouping
        Classified resources; iteration order is preserved
    context : RenderContext
        Formatting context (generation date)
    """

    def __init__(
        self, provider: ProviderInfo, grouping: DomainGrouping, context: RenderContext
    ) -> None:
        self.provider = provider
        self.grouping = grouping
        self.context = context

    def render(self) -> DocumentTree:
        """Render ``README.md`` and one page per resource."""
        documents = [Document(path="README.md", sections=self._index_sections())]
        for resource in self.grouping.resources:
            sections = self.resource_sections(resource, back_link=True)
            documents.append(Document(path=f"{resource.name}.md", sections=sections))
        logger.debug("Rendered {count} markdown documents", count=len(documents))
        return DocumentTree.of(documents)

    def render_combined(self, path: str = "REFERENCE.md") -> DocumentTree:
        """Render a single reference document with a table of contents."""
        resources = self.grouping.resources
        header = [
            f"# {self.provider.display_name} Provider Reference",
            "",
            f"**Version:** {self.provider.version}",
            "",
            "## Table of Contents",
            "",
            *(f"- [{r.name}](#{anchor(r.name)})" for r in resources),
            "",
            "---",
            "",
        ]
        sections = [Section(name="header", text=_join(header))]
        for resource in resources:
            sections.append(
                Section(
                    name=f"resource:{resource.name}",
                    children=(
                        *self.resource_sections(resource, back_link=False),
                        Section(name="separator", text="\n---\n\n"),
                    ),
                )
            )
        return DocumentTree.of([Document(path=path, sections=tuple(sections))])

    def _index_sections(self) -> tuple[Section, ...]:
        header = [
            f"# {self.provider.display_name} Provider",
            "",
            f"**Version:** {self.provider.version}",
            "",
        ]
        sections = [Section(name="header", text=_join(header))]
        for group in self.grouping:
            lines = [
                f"## {group.icon} {group.title}",
                "",
                "| Resource | Properties | Description |",
                "|----------|------------|-------------|",
            ]
            for resource in group.resources:
                desc = truncate(resource.description, INDEX_DESCRIPTION_LIMIT)
                link = f"[{resource.name}]({resource.name}.md)"
                lines.append(f"| {link} | {len(resource.properties)} | {cell(desc)} |")
            lines.append("")
            sections.append(Section(name=f"domain:{group.domain}", text=_join(lines)))

        footer = ["---", f"*Generated on {self.context.iso_date}*"]
        sections.append(Section(name="footer", text=_join(footer)))
        return tuple(sections)

    def resource_sections(
        self, resource: ResourceInfo, back_link: bool = True
    ) -> tuple[Section, ...]:
        """Sections of one resource page (also embedded in the combined reference)."""
        title = [f"# {resource.name}", ""]
        if resource.description:
            title += [resource.description, ""]

        example = (
            _join(["## Example", "", "```kite"])
            + render_plain(basic_example(resource))
            + _join(["```", ""])
        )
        sections = [
            Section(name="title", text=_join(title)),
            Section(name="example", text=example),
        ]

        if resource.user_properties:
            table = self._user_table(resource.user_properties)
            sections.append(
                Section(name="properties", text=_join(["## Properties", "", *table, ""]))
            )
        if resource.cloud_properties:
            table = self._cloud_table(resource.cloud_properties)
            lines = ["## Cloud Properties", "", CLOUD_NOTE, "", *table, ""]
            sections.append(Section(name="cloud-properties", text=_join(lines)))
        if back_link:
            back = ["", "[← Back to Index](README.md)"]
            sections.append(Section(name="back", text=_join(back)))
        return tuple(sections)

    @staticmethod
    def _description(prop: PropertyInfo, badges: Sequence[str]) -> str:
        desc = prop.description or ""
        if badges:
            desc = f"*{', '.join(badges)}* {desc}".rstrip()
        if prop.deprecation_message:
            desc = f"{desc} ({prop.deprecation_message})"
        return cell(desc)

    def _user_table(self, props: Sequence[PropertyInfo]) -> list[str]:
        lines = [
            "| Name | Type | Default | Valid Values | Required | Description |",
            "|------|------|---------|--------------|----------|-------------|",
        ]
        for prop in props:
            badges = [DEPRECATED_BADGE] if prop.deprecated else []
            default = code(cell(prop.default_value)) if prop.default_value else NO_VALUE
            valid = NO_VALUE
            if prop.valid_values:
                valid = ", ".join(code(cell(v)) for v in prop.valid_values)
            lines.append(
                f"| {code(prop.name)} | {code(prop.type)} | {default} | {valid} | "
                f"{'Yes' if prop.required else 'No'} | {self._description(prop, badges)} |"
            )
        return lines

    def _cloud_table(self, props: Sequence[PropertyInfo]) -> list[str]:
        lines = [
            "| Name | Type | Required | Description |",
            "|------|------|----------|-------------|",
        ]
        for prop in props:
            badges = []
            if prop.importable:
                badges.append(IMPORTABLE_BADGE)
            if prop.deprecated:
                badges.append(DEPRECATED_BADGE)
            desc = self._description(prop, badges)
            extras = []
            if prop.default_value:
                extras.append(f"Default: {code(cell(prop.default_value))}")
            if prop.valid_values:
                values = ", ".join(code(cell(v)) for v in prop.valid_values)
                extras.append(f"Valid values: {values}")
            if extras:
                desc = " ".join([desc, *extras]).strip()
            required = "Yes" if prop.required else "No"
            lines.append(f"| {code(prop.name)} | {code(prop.type)} | {required} | {desc} |")
        return lines


def _join(lines: Sequence[str]) -> str:
    """Join lines, terminating each with a newline."""
    return "".join(f"{line}\n" for line in lines)
