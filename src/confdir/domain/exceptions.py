# src/confdir/domain/exceptions.py
from pathlib import Path
from typing import Any, Optional, Union

PathLike = Union[str, Path]


class ConfigDirError(Exception):
    """Base exception for all configuration directory errors."""
    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.details = details


class ConfigurationError(ConfigDirError):
    """Raised when the library settings themselves are invalid."""
    pass


class InvalidPathError(ConfigDirError):
    """Raised when a configured path exists but is the wrong kind (file vs directory)."""
    def __init__(self, path: PathLike, expected: str):
        super().__init__(f"`{path}` is not a {expected}")
        self.path = Path(path)
        self.expected = expected


class ConfigPermissionError(ConfigDirError):
    """Raised when the process lacks read and write permission on a path."""
    def __init__(self, path: PathLike):
        super().__init__(f"No read and write permissions for `{path}`")
        self.path = Path(path)


class ConfigIOError(ConfigDirError):
    """Raised when reading or writing a configuration file fails."""
    def __init__(self, path: PathLike, operation: str, details: Optional[Any] = None):
        super().__init__(f"Failed to {operation} `{path}`", details)
        self.path = Path(path)
        self.operation = operation


class FormatError(ConfigDirError):
    """Raised when configuration content cannot be decoded or encoded."""
    def __init__(self, message: str, path: Optional[PathLike] = None, details: Optional[Any] = None):
        super().__init__(message, details)
        self.path = Path(path) if path is not None else None


class TypeMismatchError(ConfigDirError):
    """Raised when a name is requested with a type other than its registered one."""
    def __init__(self, name: str, expected: Any, actual: Any):
        super().__init__(
            f'config["{name}"] type mismatch: {_type_name(actual)} to {_type_name(expected)}'
        )
        self.name = name
        self.expected = expected
        self.actual = actual


class NotLoadedError(ConfigDirError):
    """Raised when a config is requested before it was loaded."""
    def __init__(self, name: str, base_dir: Optional[PathLike] = None):
        location = f"{base_dir}/{name}" if base_dir is not None else name
        super().__init__(f"{location} not loaded")
        self.name = name


class RegistryClosedError(ConfigDirError):
    """Raised when a closed registry is used."""
    pass


def _type_name(value_type: Any) -> str:
    return getattr(value_type, "__name__", None) or repr(value_type)
