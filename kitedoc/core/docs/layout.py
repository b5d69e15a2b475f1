"""Placement of rendered trees in the output directory.

Two layouts are supported:

Flat (no version)::

    html/        index.html, {Resource}.html, assets, SEO files, manifest.json
    markdown/    README.md, {Resource}.md
    kite/        {domain}/{Resource}.kite
    REFERENCE.md schemas.kite

Versioned::

    index.html styles.css scripts.js sitemap.xml robots.txt feed.xml
    opensearch.xml versions.json
    {version}/manifest.json
    {version}/changelog.html
    {version}/html/{Resource}.html
    {version}/markdown/...
    {version}/schemas/...
    {version}/REFERENCE.md {version}/schemas.kite
"""

from __future__ import annotations

import json
import re
from collections.abc import Iterable, Sequence
from pathlib import Path, PurePosixPath
from typing import Any

from kitedoc.core.docs.document import DocumentTree, text_document
from kitedoc.core.docs.renderers.seo import SiteLayout
from kitedoc.core.exceptions import ConfigurationError, ValidationError
from kitedoc.core.logging import get_logger

logger = get_logger(__name__)

VERSIONS_FILENAME = "versions.json"

#: Output directory of each tree kind in the flat layout.
FLAT_DIRECTORIES: dict[str, str] = {
    "html": "html",
    "markdown": "markdown",
    "kite": "kite",
    "combined": "",
}

#: Per-version directory of each tree kind in the versioned layout. The site
#: tree positions its own pages, so it is placed at the root.
VERSIONED_DIRECTORIES: dict[str, str] = {"markdown": "markdown", "kite": "schemas", "combined": ""}

_CHUNK_RE = re.compile(r"\d+|[A-Za-z]+")


def version_sort_key(version: str) -> tuple[tuple[int, int | str], ...]:
    """Natural ordering key: numeric chunks compare as numbers.

    >>> sorted(["1.10.0", "1.2.0", "1.9.1"], key=version_sort_key)
    ['1.2.0', '1.9.1', '1.10.0']
    """
    return tuple(
        (0, int(chunk)) if chunk.isdigit() else (1, chunk.lower())
        for chunk in _CHUNK_RE.findall(version)
    )


def merge_versions(current: str, known: Iterable[str] = ()) -> list[str]:
    """Known versions plus ``current``, deduplicated, newest first."""
    unique = {v.strip() for v in known if v and v.strip()}
    unique.add(current)
    return sorted(unique, key=version_sort_key, reverse=True)


def validate_version(version: str) -> str:
    """Ensure ``version`` can be used as a single directory name."""
    value = version.strip()
    parts = PurePosixPath(value).parts
    if not value or len(parts) != 1 or parts[0] in (".", "..") or "\\" in value:
        raise ValidationError("version", "must be a single path segment", version)
    return value


def render_versions(versions: Sequence[str]) -> str:
    """``versions.json`` content for the version selector."""
    data: dict[str, Any] = {
        "versions": [{"version": v, "path": v} for v in versions],
        "latest": versions[0] if versions else None,
    }
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def load_known_versions(root: str | Path) -> list[str]:
    """Versions listed in an existing ``versions.json`` under ``root``.

    Returns an empty list when the file does not exist yet.

    Raises
    ------
    ConfigurationError
        If the file exists but is not a valid version list
    """
    path = Path(root) / VERSIONS_FILENAME
    if not path.exists():
        return []
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        versions = [str(entry["version"]) for entry in data.get("versions", [])]
    except (OSError, ValueError, TypeError, KeyError, AttributeError) as e:
        raise ConfigurationError(str(path), f"not a valid version list: {e}") from e
    logger.debug(
        "Found {count} previously published versions in {path}", count=len(versions), path=path
    )
    return versions


class OutputLayout:
    """Decide where each rendered tree is written.

    Parameters
    ----------
    version : str | None
        Version to publish under; ``None`` selects the flat layout
    known_versions : Iterable[str]
        Previously published versions offered by the version selector
    """

    def __init__(self, version: str | None = None, known_versions: Iterable[str] = ()) -> None:
        self.version = validate_version(version) if version is not None else None
        self.versions: list[str] = (
            merge_versions(self.version, known_versions) if self.version else []
        )

    @property
    def versioned(self) -> bool:
        return self.version is not None

    @property
    def site(self) -> SiteLayout:
        """Page placement handed to the site renderer."""
        return SiteLayout(version=self.version)

    def directory(self, kind: str) -> str:
        """Directory (relative to the output root) of a tree kind."""
        if not self.versioned:
            return FLAT_DIRECTORIES[kind]
        if kind == "html":
            return ""
        return PurePosixPath(self.version, VERSIONED_DIRECTORIES[kind]).as_posix().rstrip("/")

    @property
    def manifest_path(self) -> str:
        """Path of ``manifest.json`` relative to the site root."""
        return f"{self.version}/manifest.json" if self.versioned else "manifest.json"

    def place(self, kind: str, tree: DocumentTree) -> DocumentTree:
        directory = self.directory(kind)
        if not directory or directory == ".":
            return tree
        return tree.relocate(directory)

    def versions_tree(self) -> DocumentTree:
        """``versions.json`` at the site root (versioned layout only)."""
        if not self.versioned:
            return DocumentTree()
        document = text_document(VERSIONS_FILENAME, render_versions(self.versions), name="versions")
        return DocumentTree.of([document])


__all__ = [
    "OutputLayout",
    "VERSIONS_FILENAME",
    "load_known_versions",
    "merge_versions",
    "render_versions",
    "validate_version",
    "version_sort_key",
]
