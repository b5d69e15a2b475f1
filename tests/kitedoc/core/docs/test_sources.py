"""Tests for kitedoc.core.docs.sources (YAML/JSON provider definitions)."""

from __future__ import annotations

import json

import pytest
import yaml

from kitedoc.core.docs.extractors import SchemaExtractor
from kitedoc.core.docs.sources import load_provider_definition, parse_definition
from kitedoc.core.exceptions import DuplicateResourceError, ProviderDefinitionError
from kitedoc.core.ports import Provider


class TestParseDefinition:
    """Tests for parse_definition."""

    def test_mapping_form(self, vpc_bucket_definition_data) -> None:
        provider = parse_definition(vpc_bucket_definition_data)
        assert provider.name == "aws"
        assert [name for name, _ in provider.resource_types] == ["Vpc", "Bucket"]
        assert isinstance(provider, Provider)

    def test_domain_becomes_grouping_path(self, vpc_bucket_definition_data) -> None:
        provider = parse_definition(vpc_bucket_definition_data)
        handler = dict(provider.resource_types)["Vpc"]
        assert handler.grouping_path == "networking"
        assert SchemaExtractor.extract_domain(handler) == "networking"

    def test_short_spellings(self) -> None:
        provider = parse_definition(
            {
                "name": "aws",
                "version": "1",
                "resources": {
                    "A": {
                        "properties": [
                            {"name": "x", "type": "str", "default": "a", "deprecated": "gone"}
                        ]
                    }
                },
            }
        )
        prop = dict(provider.resource_types)["A"].schema.properties[0]
        assert prop.default_value == "a"
        assert prop.deprecation_message == "gone"

    def test_numeric_version_is_text(self) -> None:
        provider = parse_definition({"name": "aws", "version": 1.5})
        assert provider.version == "1.5"
        assert provider.resource_types == ()

    def test_list_form_keeps_duplicates_for_extraction(self) -> None:
        provider = parse_definition(
            {
                "name": "aws",
                "version": "1",
                "resources": [{"name": "Vpc"}, {"name": "Vpc", "domain": "networking"}],
            }
        )
        assert len(provider.resource_types) == 2
        with pytest.raises(DuplicateResourceError, match="Vpc"):
            SchemaExtractor.extract_provider(provider)

    def test_list_entry_without_name(self) -> None:
        with pytest.raises(ProviderDefinitionError, match=r"resources\[0\]"):
            parse_definition({"name": "aws", "version": "1", "resources": [{"domain": "dns"}]})

    def test_unknown_keys_rejected(self) -> None:
        with pytest.raises(ProviderDefinitionError, match="colour"):
            parse_definition({"name": "aws", "version": "1", "colour": "blue"})

    def test_missing_required_field(self) -> None:
        with pytest.raises(ProviderDefinitionError, match="version"):
            parse_definition({"name": "aws"})

    def test_top_level_must_be_mapping(self) -> None:
        with pytest.raises(ProviderDefinitionError, match="mapping"):
            parse_definition(["not", "a", "mapping"], "defs.yaml")


class TestLoadProviderDefinition:
    """Tests for loading YAML and JSON definition files."""

    def test_yaml(self, tmp_path, rich_definition_data) -> None:
        path = tmp_path / "provider.yaml"
        path.write_text(yaml.safe_dump(rich_definition_data, sort_keys=False), encoding="utf-8")
        provider = load_provider_definition(path)
        assert provider.version == "2.1.0"
        assert [name for name, _ in provider.resource_types][:2] == ["Vpc", "Subnet"]

    def test_json(self, tmp_path, vpc_bucket_definition_data) -> None:
        path = tmp_path / "provider.json"
        path.write_text(json.dumps(vpc_bucket_definition_data), encoding="utf-8")
        info, resources = SchemaExtractor.extract_provider(load_provider_definition(path))
        assert info.name == "aws"
        assert [r.name for r in resources] == ["Vpc", "Bucket"]

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(ProviderDefinitionError, match="cannot read file") as exc_info:
            load_provider_definition(tmp_path / "absent.yaml")
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_yaml_syntax_error(self, tmp_path) -> None:
        path = tmp_path / "broken.yml"
        path.write_text("name: [unclosed\n", encoding="utf-8")
        with pytest.raises(ProviderDefinitionError, match="YAML syntax error"):
            load_provider_definition(path)

    def test_json_syntax_error(self, tmp_path) -> None:
        path = tmp_path / "broken.json"
        path.write_text("{", encoding="utf-8")
        with pytest.raises(ProviderDefinitionError, match="JSON syntax error"):
            load_provider_definition(path)
