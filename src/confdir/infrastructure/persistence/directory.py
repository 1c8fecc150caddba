"""Configuration directory bootstrap."""

import os
from pathlib import Path
from typing import Union

from confdir.domain.exceptions import ConfigIOError, ConfigPermissionError, InvalidPathError
from confdir.infrastructure.logging.logger import get_logger

logger = get_logger(__name__)


def has_read_write_access(path: Union[str, Path]) -> bool:
    """Check whether the process can read and write the given path."""
    return os.access(path, os.R_OK | os.W_OK)


def ensure_config_directory(base_dir: Union[str, Path]) -> Path:
    """
    Make sure a configuration directory exists and is usable.

    A missing directory is created (parents included); an existing non-directory
    or a directory without read and write permission is rejected.

    Args:
        base_dir: Directory path

    Returns:
        Absolute path of the ready directory

    Raises:
        InvalidPathError: If the path exists and is not a directory
        ConfigPermissionError: If read or write permission is missing
        ConfigIOError: If the directory cannot be created
    """
    path = Path(base_dir).absolute()

    if not path.exists():
        logger.warning(f"`{base_dir}` does not exist, creating")
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"Failed to create `{base_dir}`: {e}")
            raise ConfigIOError(path, "create directory", str(e)) from e

    if not path.is_dir():
        logger.error(f"`{base_dir}` is a file, expects a directory")
        raise InvalidPathError(path, "directory")

    if not has_read_write_access(path):
        logger.error(f"No read and write permissions for the `{base_dir}` directory")
        raise ConfigPermissionError(path)

    return path
