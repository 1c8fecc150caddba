"""JSON serializer for plain Python values."""

import json
from typing import Any, Callable, Optional

from confdir.domain.exceptions import FormatError
from confdir.domain.ports import ConfigSerializer


class JsonSerializer(ConfigSerializer[Any]):
    """
    Serializer storing JSON-compatible values (dicts, lists, scalars).

    Args:
        default_factory: Callable producing the default value
        value_type: Declared type of decoded values
        indent: JSON indentation, None for compact output
        file_extension: File suffix, ``json`` by default
    """

    def __init__(
        self,
        default_factory: Callable[[], Any],
        value_type: Any = object,
        indent: Optional[int] = None,
        file_extension: str = "json",
    ):
        super().__init__()
        self._default_factory = default_factory
        self.value_type = value_type
        self.indent = indent
        self.file_extension = file_extension

    def create_default(self) -> Any:
        return self._default_factory()

    def encode(self, value: Any) -> bytes:
        separators = (",", ":") if self.indent is None else (",", ": ")
        try:
            text = json.dumps(value, indent=self.indent, separators=separators, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise FormatError(f"Failed to serialize value to JSON: {e}") from e
        return text.encode("utf-8")

    def decode(self, data: bytes) -> Any:
        try:
            return json.loads(data.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise FormatError(f"Failed to parse JSON: {e}") from e
