"""Library settings: schemas and loading."""

from .loader import RegistryConfigLoader, load_registry_config
from .schemas import LogDestination, LoggingConfig, LogLevel, RegistryConfig

__all__ = [
    "LogDestination",
    "LogLevel",
    "LoggingConfig",
    "RegistryConfig",
    "RegistryConfigLoader",
    "load_registry_config",
]
