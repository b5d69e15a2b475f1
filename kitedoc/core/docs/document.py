"""Intermediate document tree produced by renderers.

Renderers are pure functions returning a :class:`DocumentTree`. Turning the
tree into text (:func:`serialize`) and writing it to disk (:func:`write_tree`)
are separate, final steps.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from pathlib import Path, PurePosixPath

from pydantic import BaseModel, ConfigDict, field_validator

from kitedoc.core.exceptions import OutputWriteError, ValidationError
from kitedoc.core.logging import get_logger

logger = get_logger(__name__)


class Section(BaseModel):
    """A named block of output text.

    ``text`` is emitted before the children, so a section can act as a
    heading followed by nested content.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    text: str = ""
    children: tuple[Section, ...] = ()

    def find(self, name: str) -> Section | None:
        """Return the first section named ``name`` in this subtree (depth-first)."""
        if self.name == name:
            return self
        for child in self.children:
            if (found := child.find(name)) is not None:
                return found
        return None


class Document(BaseModel):
    """One output file: a relative POSIX path and its ordered sections."""

    model_config = ConfigDict(frozen=True)

    path: str
    sections: tuple[Section, ...] = ()

    @field_validator("path")
    @classmethod
    def _relative_path(cls, value: str) -> str:
        pure = PurePosixPath(value)
        if not value or pure.is_absolute() or ".." in pure.parts:
            raise ValidationError(
                "document.path", "must be a relative path inside the output", value
            )
        return pure.as_posix()

    def find(self, name: str) -> Section | None:
        for section in self.sections:
            if (found := section.find(name)) is not None:
                return found
        return None

    def render(self) -> str:
        return serialize(self)


class DocumentTree(BaseModel):
    """An ordered collection of documents with unique paths."""

    model_config = ConfigDict(frozen=True)

    documents: tuple[Document, ...] = ()

    def __iter__(self) -> Iterator[Document]:  # type: ignore[override]
        return iter(self.documents)

    def __len__(self) -> int:
        return len(self.documents)

    @property
    def paths(self) -> list[str]:
        return [doc.path for doc in self.documents]

    def get(self, path: str) -> Document | None:
        for doc in self.documents:
            if doc.path == path:
                return doc
        return None

    def relocate(self, prefix: str) -> DocumentTree:
        """Return a copy with every path placed under ``prefix``."""
        base = PurePosixPath(prefix)
        return DocumentTree(
            documents=tuple(
                Document(path=(base / doc.path).as_posix(), sections=doc.sections)
                for doc in self.documents
            )
        )

    def merge(self, *others: DocumentTree) -> DocumentTree:
        """Concatenate trees; a path may only appear once."""
        return DocumentTree.of(self.documents, *(other.documents for other in others))

    @classmethod
    def of(cls, *groups: Iterable[Document]) -> DocumentTree:
        documents: list[Document] = []
        seen: set[str] = set()
        for group in groups:
            for doc in group:
                if doc.path in seen:
                    raise ValidationError("document.path", "appears more than once", doc.path)
                seen.add(doc.path)
                documents.append(doc)
        return cls(documents=tuple(documents))


def text_document(path: str, text: str, name: str = "body") -> Document:
    """Build a single-section document."""
    return Document(path=path, sections=(Section(name=name, text=text),))


def _walk(section: Section) -> Iterator[str]:
    if section.text:
        yield section.text
    for child in section.children:
        yield from _walk(child)


def serialize(document: Document) -> str:
    """Join section texts depth-first into the final file content."""
    return "".join(text for section in document.sections for text in _walk(section))


def write_tree(tree: DocumentTree, root: str | Path) -> list[Path]:
    """Write every document under ``root``, creating directories on demand.

    Existing files are overwritten wholesale.

    Parameters
    ----------
    tree : DocumentTree
        Documents to write
    root : str | Path
        Output directory

    Returns
    -------
    list[Path]
        Paths of the written files, in tree order

    Raises
    ------
    OutputWriteError
        If a directory or file cannot be written; the ``OSError`` is chained
    """
    root_path = Path(root)
    written: list[Path] = []
    for doc in tree:
        target = root_path / doc.path
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(serialize(doc), encoding="utf-8")
        except OSError as e:
            raise OutputWriteError(str(target), e.strerror or str(e)) from e
        logger.debug("Wrote {path}", path=target)
        written.append(target)
    return written


__all__ = [
    "Document",
    "DocumentTree",
    "Section",
    "serialize",
    "text_document",
    "write_tree",
]
