"""Shared fixtures for the kitedoc test suite.

Providers are built from definition mappings through
``kitedoc.core.docs.sources`` so every fixture goes through the same
extraction path as real input:

- vpc_bucket_provider: two resources (networking ``Vpc``, storage ``Bucket``)
- rich_provider: several domains, hidden / deprecated / importable
  properties, defaults and valid values
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

import pytest

from kitedoc.core.config import clear_config_cache
from kitedoc.core.docs.domains import DomainGrouping, classify
from kitedoc.core.docs.extractors import SchemaExtractor
from kitedoc.core.docs.models import ProviderInfo, RenderContext, ResourceInfo
from kitedoc.core.docs.sources import StaticProvider, parse_definition

GENERATED_AT = datetime(2026, 1, 5, 12, 30, 0)


def vpc_bucket_definition() -> dict[str, Any]:
    return {
        "name": "aws",
        "version": "1.0.0",
        "resources": {
            "Vpc": {
                "domain": "networking",
                "description": "Virtual private cloud",
                "properties": [
                    {"name": "cidrBlock", "type": "str", "description": "CIDR block"},
                    {"name": "id", "type": "str", "cloud": True},
                ],
            },
            "Bucket": {
                "domain": "storage",
                "properties": [
                    {"name": "name", "type": "str"},
                    {"name": "versioned", "type": "bool", "default": False},
                ],
            },
        },
    }


def rich_definition() -> dict[str, Any]:
    return {
        "name": "aws",
        "version": "2.1.0",
        "resources": {
            "Vpc": {
                "domain": "networking",
                "description": "Virtual private cloud",
                "properties": [
                    {"name": "cidrBlock", "type": "str", "description": "IPv4 CIDR block"},
                    {"name": "enableDnsSupport", "type": "bool", "default": True},
                    {
                        "name": "tenancy",
                        "type": "str",
                        "default": "default",
                        "valid_values": ["default", "dedicated"],
                        "description": "Instance tenancy",
                    },
                    {
                        "name": "tags",
                        "type": "dict[str, str] | None",
                        "description": "Resource tags",
                    },
                    {"name": "legacyMode", "type": "str", "deprecated": "Use tenancy instead"},
                    {"name": "internalToken", "type": "str", "hidden": True},
                    {
                        "name": "id",
                        "type": "str",
                        "cloud": True,
                        "importable": True,
                        "description": "VPC id",
                    },
                    {"name": "arn", "type": "str", "cloud": True},
                ],
            },
            "Subnet": {
                "domain": "networking",
                "description": "Subnet inside a VPC",
                "properties": [
                    {"name": "vpcId", "type": "str"},
                    {"name": "cidrBlock", "type": "str"},
                    {"name": "availabilityZone", "type": "str | None"},
                    {"name": "id", "type": "str", "cloud": True},
                ],
            },
            "SecurityGroup": {
                "domain": "networking",
                "properties": [{"name": "groupName", "type": "str"}],
            },
            "Bucket": {
                "domain": "storage",
                "description": "Object storage bucket",
                "properties": [
                    {"name": "name", "type": "str"},
                    {"name": "versioned", "type": "bool", "default": False},
                    {"name": "sizeGb", "type": "int", "default": 10},
                    {"name": "ratio", "type": "float | None"},
                ],
            },
            "Instance": {
                "domain": "compute",
                "properties": [
                    {
                        "name": "instanceType",
                        "type": "str",
                        "valid_values": ["t2.micro", "t3.micro"],
                    },
                    {"name": "count", "type": "int", "default": 1},
                ],
            },
            "Widget": {
                "description": "Resource without a domain",
                "properties": [{"name": "label", "type": "str"}],
            },
        },
    }


@pytest.fixture(autouse=True)
def _clear_config_cache():
    """Configuration is cached per path; start every test clean."""
    clear_config_cache()
    yield
    clear_config_cache()


@pytest.fixture
def context() -> RenderContext:
    """Fixed render context (Monday 2026-01-05 12:30:00)."""
    return RenderContext(generated_at=GENERATED_AT)


@pytest.fixture
def vpc_bucket_provider() -> StaticProvider:
    return parse_definition(vpc_bucket_definition())


@pytest.fixture
def rich_provider() -> StaticProvider:
    return parse_definition(rich_definition())


@pytest.fixture
def vpc_bucket_model(vpc_bucket_provider) -> tuple[ProviderInfo, list[ResourceInfo]]:
    return SchemaExtractor.extract_provider(vpc_bucket_provider)


@pytest.fixture
def rich_model(rich_provider) -> tuple[ProviderInfo, list[ResourceInfo]]:
    return SchemaExtractor.extract_provider(rich_provider)


@pytest.fixture
def vpc_bucket_grouping(vpc_bucket_model) -> DomainGrouping:
    return classify(vpc_bucket_model[1])


@pytest.fixture
def rich_grouping(rich_model) -> DomainGrouping:
    return classify(rich_model[1])


@pytest.fixture
def vpc_bucket_definition_data() -> dict[str, Any]:
    return vpc_bucket_definition()


@pytest.fixture
def rich_definition_data() -> dict[str, Any]:
    return rich_definition()
