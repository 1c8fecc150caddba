"""confdir - a directory of named, typed, periodically refreshed configuration files.

Key Components:
    - domain: error taxonomy and the serializer contract
    - application: ConfigHandle and ConfigRegistry
    - infrastructure: file persistence, serializers, background refresh, logging
    - config: settings schemas and loading for the library itself

Usage:
    >>> registry = ConfigRegistry("config", refresh_interval=30.0)
    >>> handle = registry.load("data", PydanticSerializer(List[Item], default_items))
    >>> handle.cache
"""

from ._version import __version__
from .application import ConfigHandle, ConfigRegistry
from .config import LoggingConfig, RegistryConfig, load_registry_config
from .domain import (
    ConfigDirError,
    ConfigIOError,
    ConfigPermissionError,
    ConfigSerializer,
    ConfigurationError,
    FormatError,
    InvalidPathError,
    NotLoadedError,
    RegistryClosedError,
    TypeMismatchError,
)
from .infrastructure.logging import get_logger, setup_logging
from .infrastructure.serializers import JsonSerializer, PydanticSerializer, YamlSerializer

__all__ = [
    "__version__",
    "ConfigDirError",
    "ConfigHandle",
    "ConfigIOError",
    "ConfigPermissionError",
    "ConfigRegistry",
    "ConfigSerializer",
    "ConfigurationError",
    "FormatError",
    "InvalidPathError",
    "JsonSerializer",
    "LoggingConfig",
    "NotLoadedError",
    "PydanticSerializer",
    "RegistryClosedError",
    "RegistryConfig",
    "TypeMismatchError",
    "YamlSerializer",
    "get_logger",
    "load_registry_config",
    "setup_logging",
]
