"""Domain layer - error taxonomy and the serializer contract."""

from .exceptions import (
    ConfigDirError,
    ConfigIOError,
    ConfigPermissionError,
    ConfigurationError,
    FormatError,
    InvalidPathError,
    NotLoadedError,
    RegistryClosedError,
    TypeMismatchError,
)
from .ports import ConfigSerializer

__all__ = [
    "ConfigDirError",
    "ConfigIOError",
    "ConfigPermissionError",
    "ConfigurationError",
    "ConfigSerializer",
    "FormatError",
    "InvalidPathError",
    "NotLoadedError",
    "RegistryClosedError",
    "TypeMismatchError",
]
