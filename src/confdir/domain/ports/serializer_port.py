"""Serializer port - contract between config handles and concrete file formats."""

import threading
from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

T = TypeVar("T")

_UNSET = object()


class ConfigSerializer(ABC, Generic[T]):
    """
    Encode/decode strategy for one configuration value type.

    Implementations are usually module-level singletons, one per config type:

        class SettingsSerializer(ConfigSerializer[Settings]):
            file_extension = "json"
            value_type = Settings

            def create_default(self) -> Settings: ...
            def encode(self, value: Settings) -> bytes: ...
            def decode(self, data: bytes) -> Settings: ...

    Attributes:
        file_extension: Suffix of the backing file without the dot, e.g. ``json``, ``yml``
        value_type: Type of decoded values, used for checked access in the registry.
            Left at ``object`` it matches any other undeclared serializer, so only
            the file format tells two such configs apart.
    """

    file_extension: str = ""
    value_type: Any = object

    def __init__(self) -> None:
        self._default: Any = _UNSET
        self._default_lock = threading.Lock()

    @property
    def default_value(self) -> T:
        """Default value, produced once on first access and reused afterwards."""
        if self._default is _UNSET:
            with self._default_lock:
                if self._default is _UNSET:
                    self._default = self.create_default()
        return self._default

    @abstractmethod
    def create_default(self) -> T:
        """Produce the value used to seed a newly created file."""
        pass

    @abstractmethod
    def encode(self, value: T) -> bytes:
        """Encode a value into the file's byte content."""
        pass

    @abstractmethod
    def decode(self, data: bytes) -> T:
        """
        Decode the file's byte content.

        Raises:
            FormatError: If the content is malformed
        """
        pass
