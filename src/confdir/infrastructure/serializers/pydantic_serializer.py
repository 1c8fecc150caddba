"""Serializer validating typed values with pydantic."""

from typing import Any, Callable, Generic, TypeVar

import yaml
from pydantic import TypeAdapter, ValidationError

from confdir.domain.exceptions import FormatError
from confdir.domain.ports import ConfigSerializer

T = TypeVar("T")

FORMAT_EXTENSIONS = {"json": "json", "yaml": "yml"}


class PydanticSerializer(ConfigSerializer[T], Generic[T]):
    """
    Serializer for any type pydantic can validate: models, lists of models,
    typed dicts and plain annotated values.

    Example:
        class Item(BaseModel):
            id: int
            name: str

        ItemsSerializer = PydanticSerializer(
            List[Item], lambda: [Item(id=0, name="aaa"), Item(id=1, name="bbb")]
        )

    Args:
        value_type: Type to validate decoded content against
        default_factory: Callable producing the default value
        fmt: ``json`` or ``yaml``
        file_extension: Overrides the extension derived from ``fmt``
    """

    def __init__(
        self,
        value_type: Any,
        default_factory: Callable[[], T],
        fmt: str = "json",
        file_extension: str = "",
    ):
        super().__init__()
        if fmt not in FORMAT_EXTENSIONS:
            raise ValueError(f"Unsupported format: {fmt}")
        self.value_type = value_type
        self.fmt = fmt
        self.file_extension = file_extension or FORMAT_EXTENSIONS[fmt]
        self._default_factory = default_factory
        self._adapter = TypeAdapter(value_type)

    def create_default(self) -> T:
        return self._default_factory()

    def encode(self, value: T) -> bytes:
        try:
            if self.fmt == "json":
                return self._adapter.dump_json(value)
            plain = self._adapter.dump_python(value, mode="json")
            return yaml.safe_dump(plain, allow_unicode=True, sort_keys=False).encode("utf-8")
        except (ValueError, yaml.YAMLError) as e:
            raise FormatError(f"Failed to serialize {self._type_name()}: {e}") from e

    def decode(self, data: bytes) -> T:
        try:
            if self.fmt == "json":
                return self._adapter.validate_json(data)
            return self._adapter.validate_python(yaml.safe_load(data.decode("utf-8")))
        except ValidationError as e:
            raise FormatError(f"Invalid {self._type_name()} content: {e}", details=e.errors()) from e
        except (UnicodeDecodeError, yaml.YAMLError) as e:
            raise FormatError(f"Failed to parse {self._type_name()} content: {e}") from e

    def _type_name(self) -> str:
        return getattr(self.value_type, "__name__", None) or repr(self.value_type)
