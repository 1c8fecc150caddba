"""Tests for the ready-made serializers."""

from typing import Dict, List

import pytest
from pydantic import BaseModel

from confdir.domain.exceptions import FormatError
from confdir.infrastructure.serializers import JsonSerializer, PydanticSerializer, YamlSerializer


class Endpoint(BaseModel):
    host: str
    port: int = 80


class TestJsonSerializer:
    """Test JSON serializer."""

    def test_compact_encoding_by_default(self):
        serializer = JsonSerializer(dict)
        assert serializer.encode({"a": 1, "b": [1, 2]}) == b'{"a":1,"b":[1,2]}'

    def test_indented_encoding(self):
        serializer = JsonSerializer(dict, indent=2)
        assert serializer.encode({"a": 1}) == b'{\n  "a": 1\n}'

    def test_round_trip_keeps_unicode(self):
        serializer = JsonSerializer(dict)
        value = {"name": "配置", "values": [1.5, None, True]}
        assert serializer.decode(serializer.encode(value)) == value

    def test_default_and_metadata(self):
        serializer = JsonSerializer(lambda: {"enabled": True}, value_type=dict)
        assert serializer.default_value == {"enabled": True}
        assert serializer.file_extension == "json"
        assert serializer.value_type is dict

    def test_malformed_content_raises_format_error(self):
        with pytest.raises(FormatError):
            JsonSerializer(dict).decode(b"{not json")

    def test_unencodable_value_raises_format_error(self):
        with pytest.raises(FormatError):
            JsonSerializer(dict).encode({"a": object()})


class TestYamlSerializer:
    """Test YAML serializer."""

    def test_round_trip_preserves_key_order(self):
        serializer = YamlSerializer(dict)
        value = {"zeta": 1, "alpha": {"nested": ["x", "y"]}}
        encoded = serializer.encode(value)
        assert encoded.decode().startswith("zeta: 1")
        assert serializer.decode(encoded) == value

    def test_extension_is_yml(self):
        assert YamlSerializer(dict).file_extension == "yml"

    def test_empty_document_decodes_to_none(self):
        assert YamlSerializer(dict).decode(b"") is None

    def test_malformed_content_raises_format_error(self):
        with pytest.raises(FormatError):
            YamlSerializer(dict).decode(b"key: [unclosed")


class TestPydanticSerializer:
    """Test pydantic-validated serializer."""

    def test_list_of_models_compact_json(self):
        serializer = PydanticSerializer(List[Endpoint], list)
        value = [Endpoint(host="a"), Endpoint(host="b", port=8080)]
        encoded = serializer.encode(value)
        assert encoded == b'[{"host":"a","port":80},{"host":"b","port":8080}]'
        assert serializer.decode(encoded) == value

    def test_validation_failure_raises_format_error(self):
        serializer = PydanticSerializer(List[Endpoint], list)
        with pytest.raises(FormatError) as exc_info:
            serializer.decode(b'[{"host":"a","port":"not-a-number"}]')
        assert exc_info.value.details

    def test_yaml_format(self):
        serializer = PydanticSerializer(Dict[str, Endpoint], dict, fmt="yaml")
        value = {"primary": Endpoint(host="db", port=5432)}
        assert serializer.file_extension == "yml"
        assert serializer.decode(serializer.encode(value)) == value

    def test_custom_extension(self):
        serializer = PydanticSerializer(Endpoint, lambda: Endpoint(host="x"), file_extension="conf")
        assert serializer.file_extension == "conf"
        assert serializer.value_type is Endpoint

    def test_unsupported_format_rejected(self):
        with pytest.raises(ValueError, match="Unsupported format"):
            PydanticSerializer(Endpoint, dict, fmt="toml")
