"""File persistence components."""

from .directory import ensure_config_directory, has_read_write_access
from .file_manager import FileManager

__all__ = ["FileManager", "ensure_config_directory", "has_read_write_access"]
