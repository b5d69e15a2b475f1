"""Tests for the kitedoc configuration loader.

Covers kitedoc.toml (flat and ``[tool.kitedoc]`` forms), pyproject.toml,
environment variable substitution and ``KITEDOC_LOG_*`` overrides.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

import pytest

from kitedoc.core.config import (
    ConfigLoader,
    KiteDocConfig,
    SiteConfig,
    get_default_config,
    load_config,
    normalize_formats,
    source_date_epoch,
)
from kitedoc.core.config.loader import _parse_bool_env
from kitedoc.core.exceptions import ConfigurationError, ValidationError

if TYPE_CHECKING:
    from pathlib import Path


class TestParseBoolEnv:
    """Tests for _parse_bool_env function."""

    def test_truthy_values(self) -> None:
        """Test parsing truthy values."""
        for value in ["true", "True", "1", "yes", "ON", "enabled"]:
            assert _parse_bool_env(value) is True

    def test_falsy_values(self) -> None:
        """Test parsing falsy values."""
        for value in ["false", "FALSE", "0", "no", "off", "disabled"]:
            assert _parse_bool_env(value) is False

    def test_invalid_value_raises_error(self) -> None:
        """Test that invalid values raise ValueError."""
        with pytest.raises(ValueError, match="maybe"):
            _parse_bool_env("maybe")


class TestEnvSubstitution:
    """Tests for ``${VAR}`` substitution."""

    def test_nested_values(self, monkeypatch) -> None:
        """Test substitution in strings, dicts and lists."""
        monkeypatch.setenv("DOCS_HOST", "docs.example.com")
        data = {"site": {"base_url": "https://${DOCS_HOST}"}, "formats": ["${DOCS_HOST}"], "n": 3}
        result = ConfigLoader()._substitute_env_vars(data)
        assert result == {
            "site": {"base_url": "https://docs.example.com"},
            "formats": ["docs.example.com"],
            "n": 3,
        }

    def test_missing_var_keeps_placeholder(self, monkeypatch) -> None:
        """Test that missing env vars keep placeholder."""
        monkeypatch.delenv("KITEDOC_MISSING", raising=False)
        assert ConfigLoader()._substitute_env_vars("${KITEDOC_MISSING}") == "${KITEDOC_MISSING}"


class TestLoadConfig:
    """Tests for load_config()."""

    def test_flat_file(self, tmp_path: Path) -> None:
        """Test top-level keys in kitedoc.toml."""
        path = tmp_path / "kitedoc.toml"
        path.write_text(
            'output_dir = "site"\n'
            'formats = "html, md"\n'
            "[site]\n"
            'base_url = "https://docs.example.com/"\n'
            "related_limit = 3\n"
            "[logging]\n"
            'level = "DEBUG"\n'
            'format = "console"\n'
        )
        config = load_config(path)
        assert config.output_dir == "site"
        assert config.formats == ("html", "markdown")
        assert config.site.base_url == "https://docs.example.com/"
        assert config.site.related_limit == 3
        assert config.site.reference_limit == 2
        assert config.logging.level == "DEBUG"
        assert config.logging.format == "console"

    def test_pyproject_tool_table(self, tmp_path: Path) -> None:
        """Test [tool.kitedoc] in pyproject.toml."""
        path = tmp_path / "pyproject.toml"
        path.write_text('[project]\nname = "x"\n\n[tool.kitedoc]\nformats = ["kite"]\n')
        assert load_config(path).formats == ("kite",)

    def test_pyproject_without_section_uses_defaults(self, tmp_path: Path) -> None:
        """Test a pyproject.toml without [tool.kitedoc] yields defaults."""
        path = tmp_path / "pyproject.toml"
        path.write_text('[project]\nname = "x"\n')
        assert load_config(path) == get_default_config()

    def test_search_current_directory(self, tmp_path: Path, monkeypatch) -> None:
        """Test kitedoc.toml is found in the working directory."""
        (tmp_path / "kitedoc.toml").write_text('output_dir = "found"\n')
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("KITEDOC_CONFIG_PATH", raising=False)
        assert load_config().output_dir == "found"

    def test_config_path_env(self, tmp_path: Path, monkeypatch) -> None:
        """Test KITEDOC_CONFIG_PATH points at the configuration file."""
        path = tmp_path / "custom.toml"
        path.write_text('output_dir = "from-env"\n')
        monkeypatch.setenv("KITEDOC_CONFIG_PATH", str(path))
        assert load_config().output_dir == "from-env"

    def test_explicit_missing_path(self, tmp_path: Path) -> None:
        """Test an explicit path that does not exist is an error."""
        with pytest.raises(ConfigurationError, match="not found"):
            load_config(tmp_path / "absent.toml")

    def test_invalid_toml(self, tmp_path: Path) -> None:
        """Test TOML syntax errors are reported as ConfigurationError."""
        path = tmp_path / "kitedoc.toml"
        path.write_text("formats = [\n")
        with pytest.raises(ConfigurationError, match="TOML parsing error"):
            load_config(path)

    def test_unknown_site_key(self, tmp_path: Path) -> None:
        """Test unknown [site] keys are rejected."""
        path = tmp_path / "kitedoc.toml"
        path.write_text('[site]\ncolour = "blue"\n')
        with pytest.raises(ConfigurationError, match="colour"):
            load_config(path)

    def test_unknown_format(self, tmp_path: Path) -> None:
        """Test unknown formats fail validation."""
        path = tmp_path / "kitedoc.toml"
        path.write_text('formats = ["pdf"]\n')
        with pytest.raises(ValidationError, match="pdf"):
            load_config(path)

    def test_results_are_cached(self, tmp_path: Path) -> None:
        """Test the same path returns the cached configuration object."""
        path = tmp_path / "kitedoc.toml"
        path.write_text('output_dir = "cached"\n')
        assert load_config(path) is load_config(path)


class TestLoggingOverrides:
    """Tests for KITEDOC_LOG_* environment overrides."""

    def test_env_overrides_file(self, tmp_path: Path, monkeypatch) -> None:
        path = tmp_path / "kitedoc.toml"
        path.write_text('[logging]\nlevel = "INFO"\nuse_color = true\n')
        monkeypatch.setenv("KITEDOC_LOG_LEVEL", "error")
        monkeypatch.setenv("KITEDOC_LOG_FORMAT", "JSON")
        monkeypatch.setenv("KITEDOC_LOG_COLOR", "off")
        config = load_config(path)
        assert config.logging.level == "ERROR"
        assert config.logging.format == "json"
        assert config.logging.use_color is False

    def test_invalid_bool_is_ignored(self, tmp_path: Path, monkeypatch) -> None:
        path = tmp_path / "kitedoc.toml"
        path.write_text("[logging]\ninclude_timestamp = false\n")
        monkeypatch.setenv("KITEDOC_LOG_TIMESTAMP", "sometimes")
        assert load_config(path).logging.include_timestamp is False


class TestModels:
    """Tests for configuration models."""

    def test_defaults(self) -> None:
        config = KiteDocConfig()
        assert config.formats == ("html", "markdown", "kite")
        assert config.site.related_limit == 5

    def test_negative_limits_rejected(self) -> None:
        with pytest.raises(ValidationError):
            SiteConfig(related_limit=-1)

    def test_normalize_formats(self) -> None:
        assert normalize_formats("site, md,markdown,,schema") == ("html", "markdown", "kite")
        expected = ("combined-markdown", "combined-kite")
        assert normalize_formats(["combined-md", "combined-schema"]) == expected


class TestSourceDateEpoch:
    def test_unset(self, monkeypatch) -> None:
        monkeypatch.delenv("SOURCE_DATE_EPOCH", raising=False)
        assert source_date_epoch() is None

    def test_set(self, monkeypatch) -> None:
        monkeypatch.setenv("SOURCE_DATE_EPOCH", "0")
        assert source_date_epoch() == datetime(1970, 1, 1, tzinfo=UTC)
