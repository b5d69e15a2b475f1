"""Interactive HTML site renderer.

Renders the index page, one page per resource, the changelog shell, shared
assets and the SEO artifacts. Pages are produced from Jinja2 templates; code
listings come from :mod:`kitedoc.core.docs.examples` and are highlighted
token by token.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any
from urllib.parse import quote, urlencode

from markupsafe import Markup

from kitedoc.core.docs.document import Document, DocumentTree, Section, text_document
from kitedoc.core.docs.domains import DomainGrouping, domain_icon, domain_title
from kitedoc.core.docs.examples import (
    basic_example,
    complete_example,
    import_line,
    references_example,
    schema_listing,
)
from kitedoc.core.docs.highlighting import (
    comment,
    delim,
    ident,
    kw,
    render_html,
    string,
    text,
    typ,
)
from kitedoc.core.docs.models import ProviderInfo, RenderContext, ResourceInfo
from kitedoc.core.docs.renderers.seo import (
    SiteLayout,
    index_json_ld,
    render_feed,
    render_opensearch,
    render_robots,
    render_sitemap,
    resource_description,
    resource_json_ld,
    site_url,
)
from kitedoc.core.docs.templating import STATIC_ASSETS, render_template, static_asset
from kitedoc.core.logging import get_logger

logger = get_logger(__name__)

INDEX_PATH = "index.html"


class SiteRenderer:
    """Render the documentation site for one provider.

    Parameters
    ----------
    provider : ProviderInfo
        Provider identity
    grouping : DomainGrouping
        Classified resources; drives navigation, cards, sitemap and feed order
    context : RenderContext
        Formatting context (timestamp, URLs, limits)
    layout : SiteLayout | None
        Page placement; flat by default
    versions : Sequence[str]
        Versions offered by the version selector, newest first; defaults to
        the provider version only
    """

    def __init__(
        self,
        provider: ProviderInfo,
        grouping: DomainGrouping,
        context: RenderContext,
        layout: SiteLayout | None = None,
        versions: Sequence[str] = (),
    ) -> None:
        self.provider = provider
        self.grouping = grouping
        self.context = context
        self.layout = layout or SiteLayout()
        self.current_version = self.layout.version or provider.version
        self.versions = list(versions) or [self.current_version]

    # ------------------------------------------------------------------
    # Tree assembly
    # ------------------------------------------------------------------

    def render(self) -> DocumentTree:
        """Render every site artifact."""
        return DocumentTree.of(self.render_shared(), self.render_pages())

    def render_shared(self) -> DocumentTree:
        """Artifacts written once at the site root (assets, index, SEO files)."""
        provider, grouping, context = self.provider, self.grouping, self.context
        documents = [
            text_document(name, static_asset(name), name="asset") for name in STATIC_ASSETS
        ]
        documents += [
            self.render_index(),
            text_document("sitemap.xml", render_sitemap(provider, grouping, context, self.layout)),
            text_document("robots.txt", render_robots(provider, context)),
            text_document("feed.xml", render_feed(provider, grouping, context, self.layout)),
            text_document("opensearch.xml", render_opensearch(provider, context)),
        ]
        return DocumentTree.of(documents)

    def render_pages(self) -> DocumentTree:
        """Version-specific pages: one per resource plus the changelog shell."""
        documents = [self.render_resource(resource) for resource in self.grouping.resources]
        documents.append(self.render_changelog())
        logger.debug("Rendered {count} site pages", count=len(documents))
        return DocumentTree.of(documents)

    # ------------------------------------------------------------------
    # Pages
    # ------------------------------------------------------------------

    def render_index(self) -> Document:
        page = INDEX_PATH
        resources = self.grouping.resources
        categories = [
            {
                "href": self._href(self.layout.resource_path(group.resources[0]), page),
                "icon": group.icon,
                "title": group.title,
                "count": len(group),
            }
            for group in self.grouping
        ]
        cards = [
            {
                "href": self._href(self.layout.resource_path(r), page),
                "icon": domain_icon(r.domain_tag),
                "name": r.name,
                "count": len(r.properties),
            }
            for r in resources
        ]
        example_type = resources[0].name if resources else "ResourceType"
        slug, version = self.provider.slug, self.provider.version
        name = self.provider.display_name

        install = (kw("kite"), text(" providers install "), ident(f"{slug}@{version}"))
        import_all = (
            kw("import"),
            text(" "),
            ident("*"),
            text(" "),
            kw("from"),
            text(" "),
            string(f'"{slug}"'),
        )
        define = [
            (
                kw("resource"),
                text(" "),
                typ(example_type),
                text(" "),
                ident("myResource"),
                text(" "),
                delim("{"),
            ),
            (text("    "), comment("// Configure properties here")),
            (delim("}"),),
        ]

        html = render_template(
            "index.html",
            **self._page_variables(
                page,
                title=f"{name} Provider Documentation | Kite",
                description=(
                    f"Complete documentation for {name} provider resources. "
                    f"Learn how to configure and manage {len(resources)} "
                    "infrastructure resources with Kite."
                ),
                json_ld=index_json_ld(self.provider, self.grouping, self.context),
                toc=[
                    ("quick-start", "Quick Start"),
                    ("categories", "Categories"),
                    ("all-resources", "All Resources"),
                ],
            ),
            resource_count=len(resources),
            categories=categories,
            cards=cards,
            install_code=Markup(render_html([install])),
            import_code=Markup(render_html([import_all])),
            define_code=Markup(render_html(define)),
        )
        return self._document(page, html)

    def render_resource(self, resource: ResourceInfo) -> Document:
        page = self.layout.resource_path(resource)
        domain = resource.domain_tag
        related = self.grouping.related(resource, self.context.related_limit)
        referenced = self.grouping.related(resource, self.context.reference_limit)
        prev, nxt = self.grouping.neighbours(resource)

        html = render_template(
            "resource.html",
            **self._page_variables(
                page,
                title=f"{resource.name} | {self.provider.display_name} Provider | Kite",
                description=resource_description(self.provider, resource),
                json_ld=resource_json_ld(
                    self.provider, self.grouping, resource, self.context, self.layout
                ),
                toc=self._resource_toc(resource, related),
                active=resource.name,
            ),
            resource=resource,
            domain_icon=domain_icon(domain),
            domain_title=domain_title(domain),
            import_code=Markup(render_html([import_line(self.provider, resource)])),
            examples={
                "basic": Markup(render_html(basic_example(resource))),
                "references": Markup(render_html(references_example(resource, referenced))),
                "complete": Markup(render_html(complete_example(resource))),
            },
            schema_code=Markup(render_html(schema_listing(resource))),
            user_props=resource.user_properties,
            cloud_props=resource.cloud_properties,
            related=[self._link(r, page) for r in related],
            prev=self._link(prev, page) if prev else None,
            next=self._link(nxt, page) if nxt else None,
            share=self._share_links(resource),
            issue_url=self._issue_url(resource),
        )
        return self._document(page, html)

    def render_changelog(self) -> Document:
        page = self.layout.changelog_path
        pages_href = ""
        if self.layout.pages_dir:
            pages_href = self._href(self.layout.pages_dir, page) + "/"
        name = self.provider.display_name
        html = render_template(
            "changelog.html",
            **self._page_variables(
                page,
                title=f"What's New - {name} Provider | Kite",
                description=f"Changes in version {self.provider.version} of the {name} provider.",
                json_ld=None,
                toc=[("changelog-content", "Changes")],
            ),
            pages_href=pages_href,
        )
        return self._document(page, html)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _document(self, path: str, html: str) -> Document:
        return Document(path=path, sections=(Section(name="html", text=html),))

    @staticmethod
    def _href(target: str, page: str) -> str:
        return SiteLayout.href(target, page)

    def _link(self, resource: ResourceInfo, page: str) -> dict[str, str]:
        href = self._href(self.layout.resource_path(resource), page)
        return {"name": resource.name, "href": href}

    def _page_variables(
        self,
        page: str,
        *,
        title: str,
        description: str,
        json_ld: list[dict[str, Any]] | None,
        toc: list[tuple[str, str]],
        active: str | None = None,
    ) -> dict[str, Any]:
        """Variables shared by every page template (head, navigation, TOC)."""
        return {
            "lang": self.context.locale,
            "provider": self.provider,
            "title": title,
            "description": description,
            "canonical_url": site_url(self.provider, self.context, page),
            "json_ld": json_ld,
            "toc": toc,
            "href": lambda target: self._href(target, page),
            "nav": self._navigation(page, active),
            "versions": self.versions,
            "current_version": self.current_version,
            "changelog_href": self._href(self.layout.changelog_path, page),
            "generated_iso": self.context.iso_datetime,
            "generated_long": self.context.long_date,
        }

    def _navigation(self, page: str, active: str | None) -> list[dict[str, Any]]:
        nav = []
        for group in self.grouping:
            items = [
                {
                    "name": r.name,
                    "href": self._href(self.layout.resource_path(r), page),
                    "active": r.name == active,
                    "desc": (r.description or "").lower(),
                }
                for r in group.resources
            ]
            nav.append(
                {
                    "domain": group.domain,
                    "icon": group.icon,
                    "title": group.title,
                    "expanded": any(item["active"] for item in items),
                    "items": items,
                }
            )
        return nav

    @staticmethod
    def _resource_toc(
        resource: ResourceInfo, related: Sequence[ResourceInfo]
    ) -> list[tuple[str, str]]:
        toc = [("import", "Import"), ("example", "Example"), ("schema", "Schema Definition")]
        if resource.properties:
            toc.append(("properties", "Properties"))
        if related:
            toc.append(("related", "Related Resources"))
        return toc

    def _share_links(self, resource: ResourceInfo) -> dict[str, str]:
        page_url = site_url(self.provider, self.context, self.layout.resource_path(resource))
        title = f"{resource.name} - Kite {self.provider.display_name} Provider"
        tweet = urlencode({"text": title, "url": page_url}, quote_via=quote)
        share = urlencode({"url": page_url}, quote_via=quote)
        return {
            "twitter": f"https://twitter.com/intent/tweet?{tweet}",
            "linkedin": f"https://www.linkedin.com/sharing/share-offsite/?{share}",
        }

    def _issue_url(self, resource: ResourceInfo) -> str:
        page_url = site_url(self.provider, self.context, self.layout.resource_path(resource))
        body = (
            f"**Resource:** {resource.name}\n**Provider:** {self.provider.name}\n"
            f"**Page:** {page_url}\n\n**Issue:**\n"
        )
        query = urlencode({"title": f"Docs: {resource.name} - ", "body": body}, quote_via=quote)
        return f"{self.context.issues_url}?{query}"
