"""File management for whole-file configuration storage."""

import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from confdir.domain.exceptions import ConfigIOError, InvalidPathError
from confdir.infrastructure.logging.logger import get_logger


class FileManager:
    """
    Byte-level file operations for one configuration file.

    Reads return the whole content, writes replace the whole content through a
    temporary file in the same directory followed by a rename, so readers see
    either the previous or the new content and never a partial write.
    """

    def __init__(self, file_path: Union[str, Path]):
        """
        Initialize file manager.

        Args:
            file_path: Path to the configuration file
        """
        self.file_path = Path(file_path).absolute()
        self.logger = get_logger(__name__)

    def read_bytes(self) -> bytes:
        """
        Read the whole file.

        Raises:
            ConfigIOError: If the file is missing or unreadable
        """
        try:
            with open(self.file_path, "rb") as f:
                content = f.read()
        except OSError as e:
            self.logger.error(f"Failed to read file {self.file_path}: {e}")
            raise ConfigIOError(self.file_path, "read", str(e)) from e

        self.logger.debug(f"Read {len(content)} bytes from {self.file_path}")
        return content

    def write_bytes(self, content: bytes) -> None:
        """
        Replace the file's content atomically.

        Raises:
            ConfigIOError: If the write fails; the previous content is left in place
        """
        try:
            self._atomic_write(content)
        except OSError as e:
            self.logger.error(f"Failed to write file {self.file_path}: {e}")
            raise ConfigIOError(self.file_path, "write", str(e)) from e

        self.logger.debug(f"Wrote {len(content)} bytes to {self.file_path}")

    def _atomic_write(self, content: bytes) -> None:
        temp_path: Optional[Path] = None
        try:
            with tempfile.NamedTemporaryFile(
                mode="wb",
                dir=self.file_path.parent,
                delete=False,
                prefix=f".{self.file_path.name}.tmp",
            ) as temp_file:
                temp_path = Path(temp_file.name)
                temp_file.write(content)
                temp_file.flush()
                os.fsync(temp_file.fileno())

            temp_path.replace(self.file_path)
        except Exception:
            if temp_path is not None and temp_path.exists():
                temp_path.unlink()
            raise

    def create(self, content: bytes) -> bool:
        """
        Create the file with the given content unless it already exists.

        Returns:
            True if the file was created, False if it already existed

        Raises:
            InvalidPathError: If the path is a directory
            ConfigIOError: If creation fails
        """
        if self.file_path.is_dir():
            raise InvalidPathError(self.file_path, "file")
        if self.file_path.exists():
            return False

        self.logger.warning(f"`{self.file_path}` does not exist, creating")
        self.write_bytes(content)
        return True

    def file_exists(self) -> bool:
        """Check if file exists."""
        return self.file_path.exists()

    def is_directory(self) -> bool:
        return self.file_path.is_dir()
