"""Port interfaces for provider input."""

from kitedoc.core.ports.provider import (
    PropertySchema,
    Provider,
    ResourceSchema,
    ResourceTypeHandler,
)

__all__ = ["PropertySchema", "Provider", "ResourceSchema", "ResourceTypeHandler"]
