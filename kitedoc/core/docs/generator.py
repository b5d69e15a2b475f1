"""Documentation generator facade.

Ties the pipeline together: provider -> extracted model -> domain grouping ->
renderers -> output layout -> disk. Every selected format is rendered before
anything is written, so path collisions are reported without leaving a
half-written tree behind.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from kitedoc.core.config import KiteDocConfig, normalize_formats, source_date_epoch
from kitedoc.core.docs.document import DocumentTree, write_tree
from kitedoc.core.docs.domains import DomainGrouping, classify
from kitedoc.core.docs.extractors import SchemaExtractor
from kitedoc.core.docs.layout import OutputLayout, load_known_versions
from kitedoc.core.docs.manifest import build_manifest, manifest_document
from kitedoc.core.docs.models import ProviderInfo, RenderContext, ResourceInfo
from kitedoc.core.docs.renderers import MarkdownRenderer, SchemaRenderer, SiteRenderer
from kitedoc.core.logging import get_logger, provider_context

logger = get_logger(__name__)


def build_context(
    config: KiteDocConfig | None = None, timestamp: datetime | None = None
) -> RenderContext:
    """Build the render context for one run.

    The timestamp is, in order: ``timestamp``, ``SOURCE_DATE_EPOCH``, the
    current time. This is the only place the clock is read.
    """
    config = config or KiteDocConfig()
    generated_at = timestamp or source_date_epoch() or datetime.now(UTC)
    return RenderContext.from_site_config(config.site, generated_at)


@dataclass(slots=True)
class GenerationResult:
    """Outcome of :meth:`DocGenerator.generate`."""

    output_dir: Path
    version: str | None
    written: dict[str, list[Path]] = field(default_factory=dict)

    @property
    def files(self) -> list[Path]:
        return [path for paths in self.written.values() for path in paths]


class DocGenerator:
    """Render every output format from one classified model.

    Parameters
    ----------
    provider : ProviderInfo
        Provider identity
    resources : Iterable[ResourceInfo]
        Extracted resources, in any order
    context : RenderContext
        Formatting context shared by all renderers

    Examples
    --------
    >>> generator = DocGenerator.from_provider(my_provider, build_context())  # doctest: +SKIP
    >>> generator.generate("build/docs", formats=("html", "markdown"))  # doctest: +SKIP
    """

    def __init__(
        self, provider: ProviderInfo, resources: Iterable[ResourceInfo], context: RenderContext
    ) -> None:
        self.provider = provider
        self.context = context
        self.grouping: DomainGrouping = classify(resources)

    @classmethod
    def from_provider(cls, provider: Any, context: RenderContext) -> DocGenerator:
        """Extract the model from a provider object and classify it."""
        info, resources = SchemaExtractor.extract_provider(provider)
        return cls(info, resources, context)

    @property
    def resources(self) -> list[ResourceInfo]:
        return self.grouping.resources

    def manifest(self) -> dict[str, Any]:
        return build_manifest(self.provider, self.grouping, self.context)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render_format(self, fmt: str, layout: OutputLayout) -> DocumentTree:
        """Render one format and place it according to ``layout``."""
        if fmt == "html":
            site = SiteRenderer(
                self.provider, self.grouping, self.context, layout.site, layout.versions
            ).render()
            manifest = manifest_document(
                self.provider, self.grouping, self.context, layout.manifest_path
            )
            tree = site.merge(DocumentTree.of([manifest]), layout.versions_tree())
            return layout.place("html", tree)
        if fmt == "markdown":
            markdown = MarkdownRenderer(self.provider, self.grouping, self.context)
            return layout.place("markdown", markdown.render())
        if fmt == "kite":
            return layout.place("kite", SchemaRenderer(self.provider, self.grouping).render())
        if fmt == "combined-markdown":
            markdown = MarkdownRenderer(self.provider, self.grouping, self.context)
            return layout.place("combined", markdown.render_combined())
        if fmt == "combined-kite":
            schemas = SchemaRenderer(self.provider, self.grouping)
            return layout.place("combined", schemas.render_combined())
        # normalize_formats rejects anything else first
        raise ValueError(f"Unsupported format: {fmt}")

    def render(
        self, formats: Sequence[str], layout: OutputLayout | None = None
    ) -> dict[str, DocumentTree]:
        """Render the selected formats without writing anything.

        Raises
        ------
        ValidationError
            If a format is unknown, or two formats produce the same path
        """
        layout = layout or OutputLayout()
        selected = normalize_formats(tuple(formats))
        with provider_context(self.provider.name, self.provider.version):
            trees = {fmt: self.render_format(fmt, layout) for fmt in selected}
        # raises if two formats target the same path
        DocumentTree.of(*trees.values())
        return trees

    # ------------------------------------------------------------------
    # Writing
    # ------------------------------------------------------------------

    def generate(
        self,
        output_dir: str | Path,
        formats: Sequence[str] = ("html", "markdown", "kite"),
        version: str | None = None,
        known_versions: Iterable[str] = (),
    ) -> GenerationResult:
        """Render the selected formats and write them under ``output_dir``.

        Parameters
        ----------
        output_dir : str | Path
            Output root; created on demand, existing files are overwritten
        formats : Sequence[str]
            Formats to generate (``html``, ``markdown``, ``kite``,
            ``combined-markdown``, ``combined-kite``)
        version : str | None
            Publish under ``{version}/`` with shared assets at the root
        known_versions : Iterable[str]
            Extra versions for the version selector; versions already listed
            in ``output_dir/versions.json`` are always kept

        Returns
        -------
        GenerationResult
            Written paths per format

        Raises
        ------
        OutputWriteError
            If an artifact cannot be written
        """
        root = Path(output_dir)
        layout = OutputLayout()
        if version is not None:
            layout = OutputLayout(version, [*load_known_versions(root), *known_versions])

        trees = self.render(formats, layout)
        result = GenerationResult(output_dir=root, version=layout.version)
        with provider_context(self.provider.name, self.provider.version):
            for fmt, tree in trees.items():
                result.written[fmt] = write_tree(tree, root)
                logger.info("Generated {fmt}: {count} files", fmt=fmt, count=len(tree))

            logger.info(
                "Documentation written to {root} ({count} files)",
                root=root,
                count=len(result.files),
            )
        return result


__all__ = ["DocGenerator", "GenerationResult", "build_context"]
