"""Domain classification of resources.

Resources are grouped by domain tag and the groups are put in a fixed order.
Every consumer (navigation, index pages, combined references, sitemaps,
manifest) iterates the resulting :class:`DomainGrouping` and never re-sorts.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from kitedoc.core.docs.models import GENERAL_DOMAIN, ResourceInfo, capitalize
from kitedoc.core.logging import get_logger

logger = get_logger(__name__)

#: Rank of each known domain; lower ranks come first.
DOMAIN_RANKS: dict[str, int] = {
    "networking": 1,
    "compute": 2,
    "storage": 3,
    "database": 4,
    "dns": 5,
    "loadbalancing": 6,
    "security": 7,
    "iam": 8,
    "monitoring": 9,
    "container": 10,
    "files": 11,
    "core": 12,
}

KNOWN_DOMAINS = frozenset(DOMAIN_RANKS)

DOMAIN_ICONS: dict[str, str] = {
    "networking": "🌐",
    "compute": "💻",
    "storage": "💾",
    "database": "🗄️",
    "dns": "📍",
    "loadbalancing": "🚦",
    "security": "🔒",
    "iam": "🪪",
    "monitoring": "📊",
    "container": "📦",
    "files": "📁",
    "core": "⚙️",
}
DEFAULT_ICON = "📄"


def is_known_domain(name: str) -> bool:
    return name in KNOWN_DOMAINS


def domain_icon(domain: str) -> str:
    return DOMAIN_ICONS.get(domain, DEFAULT_ICON)


def domain_title(domain: str) -> str:
    """Display title of a domain (``dns`` -> ``Dns``)."""
    return capitalize(domain)


def domain_sort_key(domain: str) -> tuple[int, int, str]:
    """Total order: ranked domains, then unknown tags alphabetically, then ``general``."""
    if domain == GENERAL_DOMAIN:
        return (2, 0, "")
    if domain in DOMAIN_RANKS:
        return (0, DOMAIN_RANKS[domain], domain)
    return (1, 0, domain)


@dataclass(frozen=True, slots=True)
class DomainGroup:
    """Resources of one domain, sorted by name."""

    domain: str
    resources: tuple[ResourceInfo, ...]

    @property
    def title(self) -> str:
        return domain_title(self.domain)

    @property
    def icon(self) -> str:
        return domain_icon(self.domain)

    def __len__(self) -> int:
        return len(self.resources)


@dataclass(frozen=True, slots=True)
class DomainGrouping:
    """Ordered mapping of domain tag to its resources."""

    groups: tuple[DomainGroup, ...]

    def __iter__(self) -> Iterator[DomainGroup]:
        return iter(self.groups)

    def __len__(self) -> int:
        return len(self.groups)

    @property
    def domains(self) -> list[str]:
        return [group.domain for group in self.groups]

    @property
    def resources(self) -> list[ResourceInfo]:
        """All resources, flattened in classifier order."""
        return [resource for group in self.groups for resource in group.resources]

    def group(self, domain: str) -> DomainGroup | None:
        for group in self.groups:
            if group.domain == domain:
                return group
        return None

    def group_of(self, resource: ResourceInfo) -> DomainGroup:
        group = self.group(resource.domain_tag)
        if group is None or resource not in group.resources:
            raise KeyError(resource.name)
        return group

    def neighbours(self, resource: ResourceInfo) -> tuple[ResourceInfo | None, ResourceInfo | None]:
        """Previous and next resource within the same domain."""
        members = self.group_of(resource).resources
        index = members.index(resource)
        prev = members[index - 1] if index > 0 else None
        nxt = members[index + 1] if index < len(members) - 1 else None
        return prev, nxt

    def related(self, resource: ResourceInfo, limit: int) -> list[ResourceInfo]:
        """Up to ``limit`` other resources of the same domain, in group order."""
        others = [r for r in self.group_of(resource).resources if r.name != resource.name]
        return others[: max(limit, 0)]


def classify(resources: Iterable[ResourceInfo]) -> DomainGrouping:
    """Group resources by domain and order groups and members.

    Parameters
    ----------
    resources : Iterable[ResourceInfo]
        Resources in any order

    Returns
    -------
    DomainGrouping
        Groups ordered by :func:`domain_sort_key`, each sorted by resource name
    """
    by_domain: dict[str, list[ResourceInfo]] = {}
    for resource in resources:
        by_domain.setdefault(resource.domain_tag, []).append(resource)

    groups = tuple(
        DomainGroup(domain=domain, resources=tuple(sorted(members, key=lambda r: r.name)))
        for domain, members in sorted(by_domain.items(), key=lambda item: domain_sort_key(item[0]))
    )
    logger.debug(
        "Grouped resources into {count} domains: {domains}",
        count=len(groups),
        domains=", ".join(f"{g.domain}({len(g)})" for g in groups),
    )
    return DomainGrouping(groups=groups)
