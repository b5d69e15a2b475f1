"""End-to-end tests for kitedoc.core.docs.generator."""

from __future__ import annotations

import json
from datetime import UTC, datetime

import pytest

from kitedoc.core.config import KiteDocConfig, SiteConfig
from kitedoc.core.docs.generator import DocGenerator, build_context
from kitedoc.core.exceptions import ConfigurationError, OutputWriteError, ValidationError

ALL_FORMATS = ("html", "markdown", "kite", "combined-markdown", "combined-kite")


@pytest.fixture
def vpc_bucket_generator(vpc_bucket_provider, context) -> DocGenerator:
    return DocGenerator.from_provider(vpc_bucket_provider, context)


@pytest.fixture
def rich_generator(rich_provider, context) -> DocGenerator:
    return DocGenerator.from_provider(rich_provider, context)


def _snapshot(root) -> dict[str, bytes]:
    files = sorted(p for p in root.rglob("*") if p.is_file())
    return {str(p.relative_to(root)): p.read_bytes() for p in files}


class TestBuildContext:
    """Tests for build_context timestamp resolution."""

    def test_explicit_timestamp_wins(self, monkeypatch) -> None:
        monkeypatch.setenv("SOURCE_DATE_EPOCH", "0")
        stamp = datetime(2025, 6, 1, 9, 0)
        assert build_context(timestamp=stamp).generated_at == stamp

    def test_source_date_epoch(self, monkeypatch) -> None:
        monkeypatch.setenv("SOURCE_DATE_EPOCH", "1767616200")
        assert build_context().generated_at == datetime(2026, 1, 5, 12, 30, tzinfo=UTC)

    def test_clock_fallback_is_utc(self, monkeypatch) -> None:
        """Without a pinned timestamp the current time is taken in UTC."""
        monkeypatch.delenv("SOURCE_DATE_EPOCH", raising=False)
        context = build_context()
        assert context.generated_at.tzinfo is UTC
        assert context.rfc822_date.endswith("+0000")

    def test_invalid_source_date_epoch(self, monkeypatch) -> None:
        monkeypatch.setenv("SOURCE_DATE_EPOCH", "yesterday")
        with pytest.raises(ConfigurationError, match="SOURCE_DATE_EPOCH"):
            build_context()

    def test_site_settings_applied(self) -> None:
        site = SiteConfig(base_url="https://example.test/docs/", related_limit=1)
        config = KiteDocConfig(site=site)
        context = build_context(config, datetime(2026, 1, 1))
        assert context.base_url == "https://example.test/docs"
        assert context.related_limit == 1


class TestFlatGeneration:
    """Tests for generation without a version."""

    def test_layout(self, vpc_bucket_generator, tmp_path) -> None:
        result = vpc_bucket_generator.generate(tmp_path, formats=ALL_FORMATS)
        for path in (
            "html/index.html",
            "html/Vpc.html",
            "html/Bucket.html",
            "html/changelog.html",
            "html/styles.css",
            "html/sitemap.xml",
            "html/manifest.json",
            "markdown/README.md",
            "markdown/Vpc.md",
            "kite/networking/Vpc.kite",
            "kite/storage/Bucket.kite",
            "REFERENCE.md",
            "schemas.kite",
        ):
            assert (tmp_path / path).is_file(), path
        assert not (tmp_path / "versions.json").exists()
        assert result.version is None
        assert set(result.written) == set(ALL_FORMATS)
        assert len(result.files) == len(set(result.files))

    def test_two_resource_provider(self, vpc_bucket_generator, tmp_path) -> None:
        vpc_bucket_generator.generate(tmp_path)

        index = (tmp_path / "html/index.html").read_text(encoding="utf-8")
        assert index.index("Networking") < index.index("Storage")

        vpc = (tmp_path / "html/Vpc.html").read_text(encoding="utf-8")
        user, _, cloud = vpc.partition('id="props-cloud"')
        assert user.count('<tr id="prop-') == 1
        assert cloud.count('<tr id="prop-') == 1

        bucket = (tmp_path / "kite/storage/Bucket.kite").read_text(encoding="utf-8")
        assert bucket.splitlines()[-2].endswith("versioned = false")

    def test_deterministic(self, rich_provider, context, tmp_path) -> None:
        for name in ("a", "b"):
            generator = DocGenerator.from_provider(rich_provider, context)
            generator.generate(tmp_path / name, formats=ALL_FORMATS)
        assert _snapshot(tmp_path / "a") == _snapshot(tmp_path / "b")

    def test_overwrites_existing_files(self, vpc_bucket_generator, tmp_path) -> None:
        stale = tmp_path / "markdown" / "README.md"
        stale.parent.mkdir(parents=True)
        stale.write_text("stale", encoding="utf-8")
        vpc_bucket_generator.generate(tmp_path, formats=["md"])
        assert stale.read_text(encoding="utf-8").startswith("# Aws Provider")

    def test_write_failure(self, vpc_bucket_generator, tmp_path) -> None:
        blocker = tmp_path / "out"
        blocker.write_text("", encoding="utf-8")
        with pytest.raises(OutputWriteError):
            vpc_bucket_generator.generate(blocker, formats=["kite"])


class TestCrossFormatConsistency:
    """Every format documents the same properties."""

    def test_property_counts_agree(self, rich_generator, tmp_path) -> None:
        rich_generator.generate(tmp_path)
        manifest = json.loads((tmp_path / "html/manifest.json").read_text(encoding="utf-8"))

        for group in rich_generator.grouping:
            for resource in group.resources:
                expected = len(resource.properties)
                html = (tmp_path / f"html/{resource.name}.html").read_text(encoding="utf-8")
                markdown = (tmp_path / f"markdown/{resource.name}.md").read_text(encoding="utf-8")
                schema = tmp_path / f"kite/{group.domain}/{resource.name}.kite"
                kite = schema.read_text(encoding="utf-8")
                kite_props = [
                    line
                    for line in kite.splitlines()
                    if line.startswith("    ") and not line.startswith("    @")
                ]

                assert html.count('<tr id="prop-') == expected
                assert sum(line.startswith("| `") for line in markdown.splitlines()) == expected
                assert len(kite_props) == expected
                assert len(manifest["resources"][resource.name]["properties"]) == expected

    def test_hidden_properties_absent_everywhere(self, rich_generator, tmp_path) -> None:
        rich_generator.generate(tmp_path, formats=ALL_FORMATS)
        for path in tmp_path.rglob("*"):
            if path.is_file():
                assert "internalToken" not in path.read_text(encoding="utf-8"), path


class TestVersionedGeneration:
    """Tests for the versioned output layout."""

    def test_layout(self, vpc_bucket_generator, tmp_path) -> None:
        vpc_bucket_generator.generate(tmp_path, formats=ALL_FORMATS, version="1.0.0")
        for path in (
            "index.html",
            "styles.css",
            "scripts.js",
            "sitemap.xml",
            "robots.txt",
            "feed.xml",
            "opensearch.xml",
            "versions.json",
            "1.0.0/manifest.json",
            "1.0.0/changelog.html",
            "1.0.0/html/Vpc.html",
            "1.0.0/markdown/README.md",
            "1.0.0/schemas/networking/Vpc.kite",
            "1.0.0/REFERENCE.md",
            "1.0.0/schemas.kite",
        ):
            assert (tmp_path / path).is_file(), path
        assert not (tmp_path / "html").exists()

    def test_versions_accumulate(self, vpc_bucket_generator, tmp_path) -> None:
        vpc_bucket_generator.generate(tmp_path, formats=["html"], version="1.9.0")
        vpc_bucket_generator.generate(tmp_path, formats=["html"], version="1.10.0")

        versions = json.loads((tmp_path / "versions.json").read_text(encoding="utf-8"))
        assert [v["version"] for v in versions["versions"]] == ["1.10.0", "1.9.0"]
        assert versions["latest"] == "1.10.0"
        assert (tmp_path / "1.9.0/html/Vpc.html").is_file()

        page = (tmp_path / "1.10.0/html/Vpc.html").read_text(encoding="utf-8")
        assert '<option value="1.9.0">v1.9.0</option>' in page

    def test_known_versions_argument(self, vpc_bucket_generator, tmp_path) -> None:
        result = vpc_bucket_generator.generate(
            tmp_path, formats=["html"], version="2.0", known_versions=["1.0"]
        )
        assert result.version == "2.0"
        versions = json.loads((tmp_path / "versions.json").read_text(encoding="utf-8"))
        assert versions["latest"] == "2.0"
        assert len(versions["versions"]) == 2

    def test_invalid_version(self, vpc_bucket_generator, tmp_path) -> None:
        with pytest.raises(ValidationError):
            vpc_bucket_generator.generate(tmp_path, version="../escape")


class TestRender:
    """Tests for rendering without writing."""

    def test_render_does_not_write(self, vpc_bucket_generator, tmp_path) -> None:
        trees = vpc_bucket_generator.render(["md", "schema"])
        assert list(trees) == ["markdown", "kite"]
        assert trees["kite"].paths == ["kite/networking/Vpc.kite", "kite/storage/Bucket.kite"]
        assert list(tmp_path.iterdir()) == []

    def test_unknown_format(self, vpc_bucket_generator) -> None:
        with pytest.raises(ValidationError, match="pdf"):
            vpc_bucket_generator.render(["pdf"])

    def test_manifest(self, vpc_bucket_generator) -> None:
        assert list(vpc_bucket_generator.manifest()["resources"]) == ["Vpc", "Bucket"]
        assert [r.name for r in vpc_bucket_generator.resources] == ["Vpc", "Bucket"]
