"""Tests for kitedoc.core.docs.document."""

from __future__ import annotations

import pytest

from kitedoc.core.docs.document import (
    Document,
    DocumentTree,
    Section,
    serialize,
    text_document,
    write_tree,
)
from kitedoc.core.exceptions import OutputWriteError, ValidationError


class TestSection:
    def test_find_depth_first(self) -> None:
        inner = Section(name="target", text="x")
        root = Section(name="root", children=(Section(name="a", children=(inner,)),))
        assert root.find("target") is inner
        assert root.find("missing") is None


class TestDocument:
    def test_serialize_joins_depth_first(self) -> None:
        doc = Document(
            path="a.md",
            sections=(
                Section(
                    name="head",
                    text="1",
                    children=(Section(name="c1", text="2"), Section(name="c2", text="3")),
                ),
                Section(name="tail", text="4"),
            ),
        )
        assert serialize(doc) == "1234"
        assert doc.render() == "1234"

    @pytest.mark.parametrize("path", ["", "/etc/passwd", "../escape.md", "a/../../b.md"])
    def test_path_must_stay_inside_output(self, path: str) -> None:
        with pytest.raises(ValidationError):
            Document(path=path)

    def test_path_normalized(self) -> None:
        assert Document(path="a//b.md").path == "a/b.md"


class TestDocumentTree:
    """Tests for DocumentTree assembly."""

    def test_duplicate_paths_rejected(self) -> None:
        with pytest.raises(ValidationError, match="more than once"):
            DocumentTree.of([text_document("a.md", "1")], [text_document("a.md", "2")])

    def test_relocate(self) -> None:
        tree = DocumentTree.of([text_document("a.md", "1"), text_document("x/b.md", "2")])
        assert tree.relocate("1.0/markdown").paths == ["1.0/markdown/a.md", "1.0/markdown/x/b.md"]

    def test_merge_and_get(self) -> None:
        first = DocumentTree.of([text_document("a", "1")])
        merged = first.merge(DocumentTree.of([text_document("b", "2")]))
        assert len(merged) == 2
        assert merged.get("b") is not None
        assert merged.get("c") is None


class TestWriteTree:
    """Tests for write_tree."""

    def test_creates_directories_and_overwrites(self, tmp_path) -> None:
        target = tmp_path / "out"
        tree = DocumentTree.of([text_document("deep/nested/file.txt", "first")])
        written = write_tree(tree, target)
        assert written == [target / "deep/nested/file.txt"]
        assert written[0].read_text(encoding="utf-8") == "first"

        write_tree(DocumentTree.of([text_document("deep/nested/file.txt", "second")]), target)
        assert written[0].read_text(encoding="utf-8") == "second"

    def test_unicode_written_as_utf8(self, tmp_path) -> None:
        write_tree(DocumentTree.of([text_document("u.md", "🌐 — ✓")]), tmp_path)
        assert (tmp_path / "u.md").read_bytes().decode("utf-8") == "🌐 — ✓"

    def test_write_failure_is_wrapped(self, tmp_path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")
        with pytest.raises(OutputWriteError) as exc_info:
            write_tree(DocumentTree.of([text_document("blocker/file.txt", "x")]), tmp_path)
        assert isinstance(exc_info.value.__cause__, OSError)
