"""Configuration schemas package."""

from .logging_schema import LogDestination, LoggingConfig, LogLevel
from .registry_schema import RegistryConfig

__all__ = [
    "LogDestination",
    "LogLevel",
    "LoggingConfig",
    "RegistryConfig",
]
