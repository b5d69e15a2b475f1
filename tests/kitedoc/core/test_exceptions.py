"""Tests for the kitedoc exception hierarchy."""

from __future__ import annotations

import pytest

from kitedoc.core.exceptions import (
    ConfigurationError,
    DuplicateResourceError,
    KiteDocError,
    OutputWriteError,
    ProviderDefinitionError,
    ResolveError,
    ValidationError,
)


class TestHierarchy:
    """Every error can be caught as KiteDocError."""

    @pytest.mark.parametrize(
        "error",
        [
            ConfigurationError("formats", "unknown format"),
            ValidationError("name", "cannot be empty"),
            ResolveError("pkg.Provider", "not found"),
            ProviderDefinitionError("aws.yaml", "bad"),
            DuplicateResourceError("Vpc"),
            OutputWriteError("out/index.html", "Permission denied"),
        ],
    )
    def test_is_kitedoc_error(self, error: KiteDocError) -> None:
        assert isinstance(error, KiteDocError)
        with pytest.raises(KiteDocError):
            raise error


class TestMessages:
    def test_configuration_error(self) -> None:
        error = ConfigurationError("site", "must be a table")
        assert str(error) == "Configuration error in 'site': must be a table"
        assert error.component == "site"
        assert error.reason == "must be a table"

    def test_validation_error_with_value(self) -> None:
        error = ValidationError("version", "cannot be empty", value="")
        assert str(error) == "Validation failed for 'version': cannot be empty (got '')"
        assert error.value == ""

    def test_validation_error_without_value(self) -> None:
        error = ValidationError("name", "cannot be empty")
        assert str(error) == "Validation failed for 'name': cannot be empty"

    def test_duplicate_resource(self) -> None:
        error = DuplicateResourceError("Vpc")
        assert "Vpc" in str(error)
        assert error.name == "Vpc"

    def test_output_write_error(self) -> None:
        error = OutputWriteError("out/a.html", "No space left on device")
        assert str(error) == "Failed to write 'out/a.html': No space left on device"
