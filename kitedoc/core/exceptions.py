"""Core exception hierarchy for kitedoc.

All kitedoc exceptions inherit from KiteDocError so callers (and the CLI)
can handle every generator failure with a single ``except`` clause.
"""

from __future__ import annotations

# ============================================================================
# Base Exception
# ============================================================================


class KiteDocError(Exception):
    """Base exception for all kitedoc errors.

    Catch this to handle all kitedoc errors.
    """

    pass


# ============================================================================
# Configuration & Validation Errors
# ============================================================================


class ConfigurationError(KiteDocError):
    """Raised when configuration is invalid or missing.

    Examples
    --------
    Example usage::

        raise ConfigurationError("formats", "unknown format 'pdf'")
    """

    def __init__(self, component: str, reason: str) -> None:
        """Initialize configuration error.

        Args
        ----
            component: Name of the component with invalid configuration
            reason: Explanation of what's wrong
        """
        super().__init__(f"Configuration error in '{component}': {reason}")
        self.component = component
        self.reason = reason


class ValidationError(KiteDocError):
    """Raised when model input fails validation.

    Examples
    --------
    Example usage::

        raise ValidationError("version", "cannot be empty", value="")
    """

    def __init__(self, field: str, constraint: str, value: object = None) -> None:
        """Initialize validation error.

        Args
        ----
            field: Name of the field that failed validation
            constraint: Description of the validation constraint
            value: The invalid value (optional)
        """
        if value is not None:
            msg = f"Validation failed for '{field}': {constraint} (got {value!r})"
        else:
            msg = f"Validation failed for '{field}': {constraint}"
        super().__init__(msg)
        self.field = field
        self.constraint = constraint
        self.value = value


# ============================================================================
# Provider Input Errors
# ============================================================================


class ResolveError(KiteDocError):
    """Raised when a provider import path cannot be resolved."""

    def __init__(self, target: str, reason: str) -> None:
        """Initialize resolve error.

        Args
        ----
            target: The import path that failed to resolve
            reason: Explanation of what went wrong
        """
        super().__init__(f"Cannot resolve '{target}': {reason}")
        self.target = target
        self.reason = reason


class ProviderDefinitionError(KiteDocError):
    """Raised when a YAML/JSON provider definition file is malformed."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Invalid provider definition '{path}': {reason}")
        self.path = path
        self.reason = reason


class DuplicateResourceError(KiteDocError):
    """Raised when two resource type handlers share the same resource name.

    Examples
    --------
    Example usage::

        raise DuplicateResourceError("Vpc")
    """

    def __init__(self, name: str) -> None:
        super().__init__(f"Resource '{name}' is declared by more than one resource type handler")
        self.name = name


# ============================================================================
# Output Errors
# ============================================================================


class OutputWriteError(KiteDocError):
    """Raised when an artifact cannot be written to the output directory.

    The original ``OSError`` is chained as ``__cause__``.
    """

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Failed to write '{path}': {reason}")
        self.path = path
        self.reason = reason
