"""Tests for the Markdown reference renderer."""

from __future__ import annotations

import pytest

from kitedoc.core.docs.domains import classify
from kitedoc.core.docs.extractors import SchemaExtractor
from kitedoc.core.docs.renderers import MarkdownRenderer
from kitedoc.core.docs.renderers.markdown import cell
from kitedoc.core.docs.sources import parse_definition

USER_HEADER = "| Name | Type | Default | Valid Values | Required | Description |"
CLOUD_HEADER = "| Name | Type | Required | Description |"


@pytest.fixture
def vpc_bucket_markdown(vpc_bucket_model, vpc_bucket_grouping, context) -> MarkdownRenderer:
    return MarkdownRenderer(vpc_bucket_model[0], vpc_bucket_grouping, context)


@pytest.fixture
def rich_markdown(rich_model, rich_grouping, context) -> MarkdownRenderer:
    return MarkdownRenderer(rich_model[0], rich_grouping, context)


def _rows(page: str, header: str) -> list[str]:
    """Table rows following ``header`` until the first blank line."""
    lines = page.splitlines()
    start = lines.index(header) + 2
    rows = []
    for line in lines[start:]:
        if not line.startswith("|"):
            break
        rows.append(line)
    return rows


class TestCell:
    def test_escapes_pipes_and_newlines(self) -> None:
        assert cell("a|b\nc") == "a\\|b c"
        assert cell(None) == ""


class TestIndex:
    def test_paths(self, vpc_bucket_markdown) -> None:
        assert vpc_bucket_markdown.render().paths == ["README.md", "Vpc.md", "Bucket.md"]

    def test_readme(self, vpc_bucket_markdown) -> None:
        readme = vpc_bucket_markdown.render().get("README.md").render()
        assert readme.startswith("# Aws Provider\n\n**Version:** 1.0.0\n")
        assert readme.index("## 🌐 Networking") < readme.index("## 💾 Storage")
        assert "| [Vpc](Vpc.md) | 2 | Virtual private cloud |" in readme
        assert "| [Bucket](Bucket.md) | 2 |  |" in readme
        assert readme.endswith("---\n*Generated on 2026-01-05*\n")


class TestResourcePage:
    """Tests for Markdown resource pages."""

    def test_example_block(self, vpc_bucket_markdown) -> None:
        page = vpc_bucket_markdown.render().get("Bucket.md").render()
        assert "```kite\nresource Bucket example {\n" in page
        assert "    versioned = false\n}\n```\n" in page
        assert page.endswith("[← Back to Index](README.md)\n")

    def test_user_table(self, vpc_bucket_markdown) -> None:
        page = vpc_bucket_markdown.render().get("Bucket.md").render()
        assert _rows(page, USER_HEADER) == [
            "| `name` | `string` | — | — | Yes |  |",
            "| `versioned` | `boolean` | `false` | — | Yes |  |",
        ]
        assert "## Cloud Properties" not in page

    def test_rich_tables(self, rich_markdown) -> None:
        page = rich_markdown.render().get("Vpc.md").render()
        user_rows = _rows(page, USER_HEADER)
        cloud_rows = _rows(page, CLOUD_HEADER)
        assert len(user_rows) == 5
        assert len(cloud_rows) == 2
        assert (
            "| `tenancy` | `string` | `default` | `default`, `dedicated` | Yes | Instance tenancy |"
            in user_rows
        )
        assert "| `tags` | `map` | — | — | No | Resource tags |" in user_rows
        assert (
            "| `legacyMode` | `string` | — | — | Yes | *⚠️ deprecated* (Use tenancy instead) |"
            in user_rows
        )
        assert cloud_rows[0] == "| `id` | `string` | Yes | *📥 importable* VPC id |"
        assert "internalToken" not in page

    def test_cloud_table_marks_required(self, context) -> None:
        """Nullable cloud properties are distinguishable from required ones."""
        provider = parse_definition(
            {
                "name": "aws",
                "version": "1.0.0",
                "resources": {
                    "Vpc": {
                        "domain": "networking",
                        "properties": [
                            {"name": "id", "type": "str", "cloud": True},
                            {"name": "arn", "type": "str | None", "cloud": True},
                        ],
                    }
                },
            }
        )
        info, resources = SchemaExtractor.extract_provider(provider)
        page = MarkdownRenderer(info, classify(resources), context).render().get("Vpc.md").render()
        assert _rows(page, CLOUD_HEADER) == [
            "| `id` | `string` | Yes |  |",
            "| `arn` | `string` | No |  |",
        ]

    def test_deprecated_property_left_out_of_example(self, rich_markdown) -> None:
        page = rich_markdown.render().get("Vpc.md").render()
        example = page.split("```kite\n", 1)[1].split("```", 1)[0]
        assert "legacyMode" not in example
        assert "cidrBlock" in example


class TestCombined:
    def test_reference(self, vpc_bucket_markdown) -> None:
        tree = vpc_bucket_markdown.render_combined()
        assert tree.paths == ["REFERENCE.md"]
        text = tree.get("REFERENCE.md").render()
        assert "## Table of Contents\n\n- [Vpc](#vpc)\n- [Bucket](#bucket)\n" in text
        assert text.index("# Vpc") < text.index("# Bucket")
        assert "Back to Index" not in text

    def test_same_tables_as_pages(self, rich_markdown) -> None:
        combined = rich_markdown.render_combined().get("REFERENCE.md").render()
        for doc in rich_markdown.render():
            if doc.path == "README.md":
                continue
            for line in doc.render().splitlines():
                if line.startswith("| `"):
                    assert line in combined
