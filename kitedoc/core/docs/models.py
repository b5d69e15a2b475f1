"""Data models for provider documentation.

These Pydantic models are the canonical intermediate representation every
renderer reads from. They are frozen: built once per generation run by the
extractor and never mutated afterwards.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator

from kitedoc.core.config.models import SiteConfig
from kitedoc.core.exceptions import ValidationError

_DEFAULT_SITE = SiteConfig()

#: Domain tag used for resources without a known domain.
GENERAL_DOMAIN = "general"


class ProviderInfo(BaseModel):
    """Identity of the provider being documented.

    Attributes
    ----------
    name : str
        Provider name (e.g., "aws")
    version : str
        Provider version (e.g., "1.4.0")
    logo_url : str | None
        Optional logo shown by renderers that support it
    """

    model_config = ConfigDict(frozen=True)

    name: str
    version: str
    logo_url: str | None = None

    @field_validator("name", "version")
    @classmethod
    def _not_blank(cls, value: str, info: ValidationInfo) -> str:
        if not value or not value.strip():
            raise ValidationError(info.field_name or "value", "cannot be empty", value)
        return value.strip()

    @property
    def display_name(self) -> str:
        """Provider name with the first letter upper-cased."""
        return capitalize(self.name)

    @property
    def slug(self) -> str:
        """Lower-cased provider name used in URLs and import paths."""
        return self.name.lower()


class PropertyInfo(BaseModel):
    """Documentation for one resource property.

    Attributes
    ----------
    name : str
        Property name, unique within its resource
    type : str
        Semantic type tag (string, integer, number, boolean, list, map, set,
        any, or a free-form fallback tag)
    description : str | None
        Property description
    required : bool
        Whether the declared type is non-nullable
    cloud_managed : bool
        Whether the value is supplied by the cloud provider
    importable : bool
        Whether a cloud-managed value can be used to import existing resources
    deprecated : bool
        Whether a deprecation message is present
    deprecation_message : str | None
        Deprecation message
    default_value : str | None
        Default value as raw text
    valid_values : tuple[str, ...] | None
        Allowed literal values, in declaration order
    """

    model_config = ConfigDict(frozen=True)

    name: str
    type: str = "any"
    description: str | None = None
    required: bool = True
    cloud_managed: bool = False
    importable: bool = False
    deprecated: bool = False
    deprecation_message: str | None = None
    default_value: str | None = None
    valid_values: tuple[str, ...] | None = None

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValidationError("property.name", "cannot be empty", value)
        return value


class ResourceInfo(BaseModel):
    """Documentation for one resource type.

    Attributes
    ----------
    name : str
        Resource type name, unique within the provider
    domain : str | None
        Domain tag, or None when the resource is unclassified
    description : str | None
        Resource description
    properties : tuple[PropertyInfo, ...]
        Non-hidden properties in declaration order
    """

    model_config = ConfigDict(frozen=True)

    name: str
    domain: str | None = None
    description: str | None = None
    properties: tuple[PropertyInfo, ...] = ()

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValidationError("resource.name", "cannot be empty", value)
        return value

    @property
    def domain_tag(self) -> str:
        """Domain tag with ``general`` substituted for unclassified resources."""
        return self.domain or GENERAL_DOMAIN

    @property
    def user_properties(self) -> tuple[PropertyInfo, ...]:
        """Properties configured by the user (not cloud-managed)."""
        return tuple(p for p in self.properties if not p.cloud_managed)

    @property
    def cloud_properties(self) -> tuple[PropertyInfo, ...]:
        """Read-only properties populated by the cloud provider."""
        return tuple(p for p in self.properties if p.cloud_managed)


class RenderContext(BaseModel):
    """Explicit formatting context passed to every render call.

    Renderers never read the clock or global settings; everything that can
    vary between runs lives here.

    Attributes
    ----------
    generated_at : datetime
        Timestamp stamped into generated artifacts
    base_url : str
        Public URL of the documentation site
    locale : str
        Language tag for HTML and RSS output
    related_limit : int
        Maximum number of related resources per page
    reference_limit : int
        Maximum number of referenced resources in the references example
    issues_url : str
        URL of the issue tracker's "new issue" page
    """

    model_config = ConfigDict(frozen=True)

    generated_at: datetime
    base_url: str = _DEFAULT_SITE.base_url
    locale: str = _DEFAULT_SITE.locale
    related_limit: int = _DEFAULT_SITE.related_limit
    reference_limit: int = _DEFAULT_SITE.reference_limit
    issues_url: str = _DEFAULT_SITE.issues_url

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @classmethod
    def from_site_config(cls, site: SiteConfig, generated_at: datetime) -> RenderContext:
        """Build a context from the ``[site]`` configuration section."""
        return cls(
            generated_at=generated_at,
            base_url=site.base_url,
            locale=site.locale,
            related_limit=site.related_limit,
            reference_limit=site.reference_limit,
            issues_url=site.issues_url,
        )

    @property
    def iso_date(self) -> str:
        return self.generated_at.strftime("%Y-%m-%d")

    @property
    def iso_datetime(self) -> str:
        return self.generated_at.strftime("%Y-%m-%dT%H:%M:%S")

    @property
    def long_date(self) -> str:
        """Date such as ``January 5, 2026`` (independent of the process locale)."""
        month = _MONTHS[self.generated_at.month - 1]
        return f"{month} {self.generated_at.day}, {self.generated_at.year}"

    @property
    def rfc822_date(self) -> str:
        """Date in the RFC 822 form RSS readers expect."""
        day = _WEEKDAYS[self.generated_at.weekday()]
        month = _MONTHS[self.generated_at.month - 1][:3]
        offset = self.generated_at.strftime("%z") or "+0000"
        return (
            f"{day}, {self.generated_at.day:02d} {month} {self.generated_at.year} "
            f"{self.generated_at.strftime('%H:%M:%S')} {offset}"
        )


_MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def capitalize(text: str) -> str:
    """Upper-case the first character only (``loadbalancing`` -> ``Loadbalancing``)."""
    return text[:1].upper() + text[1:]
