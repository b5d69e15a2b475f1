"""Search-engine and feed artifacts for the HTML site.

Covers page paths and public URLs, JSON-LD structured data, ``sitemap.xml``,
``robots.txt``, the RSS feed and the OpenSearch descriptor.
"""

from __future__ import annotations

import posixpath
from dataclasses import dataclass
from typing import Any

from kitedoc.core.docs.domains import DomainGrouping, domain_title
from kitedoc.core.docs.examples import import_path
from kitedoc.core.docs.models import ProviderInfo, RenderContext, ResourceInfo
from kitedoc.core.docs.templating import render_template

ORGANIZATION = {"@type": "Organization", "name": "Kite", "url": "https://kitelang.cloud"}
CODE_REPOSITORY = "https://github.com/kitelang/kite"


@dataclass(frozen=True, slots=True)
class SiteLayout:
    """Where site pages live, relative to the site root.

    Without a version every page sits at the root. With a version, resource
    pages move to ``{version}/html/`` and the changelog to ``{version}/``;
    shared assets and the index stay at the root.
    """

    version: str | None = None

    @property
    def pages_dir(self) -> str:
        """Directory holding resource pages (empty for the site root)."""
        return f"{self.version}/html" if self.version else ""

    def resource_path(self, resource: ResourceInfo) -> str:
        return posixpath.join(self.pages_dir, f"{resource.name}.html")

    @property
    def changelog_path(self) -> str:
        return f"{self.version}/changelog.html" if self.version else "changelog.html"

    @staticmethod
    def href(target: str, from_page: str) -> str:
        """Relative link from the page at ``from_page`` to ``target``."""
        start = posixpath.dirname(from_page) or "."
        return posixpath.relpath(target, start)


def site_url(provider: ProviderInfo, context: RenderContext, path: str = "") -> str:
    """Public URL of a path inside the provider's site."""
    return f"{context.base_url}/{provider.slug}/{path}"


def resource_description(provider: ProviderInfo, resource: ResourceInfo) -> str:
    if resource.description:
        return resource.description
    return (
        f"Documentation for {resource.name} resource in {provider.display_name} provider. "
        "Learn about properties, examples, and configuration."
    )


def resource_json_ld(
    provider: ProviderInfo,
    grouping: DomainGrouping,
    resource: ResourceInfo,
    context: RenderContext,
    layout: SiteLayout,
) -> list[dict[str, Any]]:
    """TechArticle, BreadcrumbList and FAQPage entries for a resource page."""
    domain = resource.domain_tag
    title = domain_title(domain)
    page_url = site_url(provider, context, layout.resource_path(resource))
    first_in_domain = grouping.group_of(resource).resources[0]
    configurable = len(resource.user_properties)
    description = resource.description or ""

    return [
        {
            "@context": "https://schema.org",
            "@type": "TechArticle",
            "headline": f"{resource.name} Resource Documentation",
            "description": description,
            "author": {"@type": "Organization", "name": "Kite"},
            "publisher": ORGANIZATION,
            "mainEntityOfPage": {"@type": "WebPage", "@id": page_url},
            "about": {
                "@type": "SoftwareSourceCode",
                "name": resource.name,
                "programmingLanguage": "Kite",
                "codeRepository": CODE_REPOSITORY,
            },
            "articleSection": title,
            "dateModified": context.iso_datetime,
            "keywords": [
                "kite",
                provider.slug,
                resource.name.lower(),
                "infrastructure as code",
                "cloud",
            ],
        },
        {
            "@context": "https://schema.org",
            "@type": "BreadcrumbList",
            "itemListElement": [
                {
                    "@type": "ListItem",
                    "position": 1,
                    "name": f"{provider.display_name} Provider",
                    "item": site_url(provider, context),
                },
                {
                    "@type": "ListItem",
                    "position": 2,
                    "name": title,
                    "item": site_url(provider, context, layout.resource_path(first_in_domain)),
                },
                {"@type": "ListItem", "position": 3, "name": resource.name},
            ],
        },
        {
            "@context": "https://schema.org",
            "@type": "FAQPage",
            "mainEntity": [
                _question(
                    f"What is {resource.name} in Kite?",
                    f"{resource.name} is a {domain} resource in the "
                    f"{provider.display_name} provider. "
                    + (description or "Use it to manage your cloud infrastructure."),
                ),
                _question(
                    f"How do I import {resource.name} in Kite?",
                    f'Use: import {resource.name} from "{import_path(provider, resource)}"',
                ),
                _question(
                    f"What properties does {resource.name} have?",
                    f"{resource.name} has {configurable} configurable properties. "
                    "See the Properties section for details.",
                ),
            ],
        },
    ]


def _question(name: str, answer: str) -> dict[str, Any]:
    return {
        "@type": "Question",
        "name": name,
        "acceptedAnswer": {"@type": "Answer", "text": answer},
    }


def index_json_ld(
    provider: ProviderInfo, grouping: DomainGrouping, context: RenderContext
) -> list[dict[str, Any]]:
    """SoftwareApplication and WebSite entries for the index page."""
    count = len(grouping.resources)
    return [
        {
            "@context": "https://schema.org",
            "@type": "SoftwareApplication",
            "name": f"Kite {provider.display_name} Provider",
            "applicationCategory": "DeveloperApplication",
            "applicationSubCategory": "Infrastructure as Code",
            "operatingSystem": "Cross-platform",
            "softwareVersion": provider.version,
            "description": (
                f"Infrastructure as code provider for {provider.display_name}. "
                f"Manage {count} cloud resources with Kite."
            ),
            "author": ORGANIZATION,
            "offers": {"@type": "Offer", "price": "0", "priceCurrency": "USD"},
            "featureList": [
                f"{count} infrastructure resources",
                f"{len(grouping)} resource categories",
                "Declarative configuration",
                "Multi-cloud support",
            ],
        },
        {
            "@context": "https://schema.org",
            "@type": "WebSite",
            "name": f"Kite {provider.display_name} Provider Documentation",
            "url": site_url(provider, context),
            "potentialAction": {
                "@type": "SearchAction",
                "target": site_url(provider, context, "index.html?q={search_term_string}"),
                "query-input": "required name=search_term_string",
            },
        },
    ]


def render_sitemap(
    provider: ProviderInfo, grouping: DomainGrouping, context: RenderContext, layout: SiteLayout
) -> str:
    urls = [(site_url(provider, context, "index.html"), "1.0")]
    urls += [
        (site_url(provider, context, layout.resource_path(r)), "0.8") for r in grouping.resources
    ]
    return render_template("sitemap.xml", urls=urls, lastmod=context.iso_date)


def render_robots(provider: ProviderInfo, context: RenderContext) -> str:
    return render_template(
        "robots.txt",
        provider=provider,
        site_root=site_url(provider, context),
        sitemap_url=site_url(provider, context, "sitemap.xml"),
    )


def render_feed(
    provider: ProviderInfo, grouping: DomainGrouping, context: RenderContext, layout: SiteLayout
) -> str:
    items = [
        {
            "title": resource.name,
            "description": resource.description or f"Documentation for {resource.name} resource.",
            "link": site_url(provider, context, layout.resource_path(resource)),
            "category": domain_title(resource.domain_tag),
        }
        for resource in grouping.resources
    ]
    return render_template(
        "feed.xml",
        provider=provider,
        site_root=site_url(provider, context),
        feed_url=site_url(provider, context, "feed.xml"),
        language=context.locale,
        build_date=context.rfc822_date,
        items=items,
    )


def render_opensearch(provider: ProviderInfo, context: RenderContext) -> str:
    return render_template(
        "opensearch.xml",
        provider=provider,
        search_url=site_url(provider, context, "index.html?q={searchTerms}"),
    )
