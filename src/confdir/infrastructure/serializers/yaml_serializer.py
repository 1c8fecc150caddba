"""YAML serializer for plain Python values."""

from typing import Any, Callable

import yaml

from confdir.domain.exceptions import FormatError
from confdir.domain.ports import ConfigSerializer


class YamlSerializer(ConfigSerializer[Any]):
    """Serializer storing YAML documents through PyYAML's safe loader and dumper."""

    def __init__(
        self,
        default_factory: Callable[[], Any],
        value_type: Any = object,
        file_extension: str = "yml",
    ):
        super().__init__()
        self._default_factory = default_factory
        self.value_type = value_type
        self.file_extension = file_extension

    def create_default(self) -> Any:
        return self._default_factory()

    def encode(self, value: Any) -> bytes:
        try:
            text = yaml.safe_dump(value, allow_unicode=True, sort_keys=False, default_flow_style=False)
        except yaml.YAMLError as e:
            raise FormatError(f"Failed to serialize value to YAML: {e}") from e
        return text.encode("utf-8")

    def decode(self, data: bytes) -> Any:
        # An empty document decodes to None
        try:
            return yaml.safe_load(data.decode("utf-8"))
        except (UnicodeDecodeError, yaml.YAMLError) as e:
            raise FormatError(f"Failed to parse YAML: {e}") from e
