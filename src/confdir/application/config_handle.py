"""Config handle - one named configuration file and its cached value."""
from __future__ import annotations

import asyncio
import functools
import threading
from concurrent.futures import Executor
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Generic, Optional, TypeVar, Union

from confdir.domain.exceptions import ConfigDirError, FormatError
from confdir.domain.ports import ConfigSerializer
from confdir.infrastructure.logging.logger import get_logger
from confdir.infrastructure.persistence import FileManager

T = TypeVar("T")

Checker = Callable[[Optional[T]], Optional[T]]


class ConfigHandle(Generic[T]):
    """
    A loaded configuration file.

    Holds the file's name, location and serializer together with the value last
    read from or written to disk. Handles are created by ConfigRegistry.load and
    the cache is refreshed periodically by the registry.

    Every disk operation holds the handle's lock, so a background refresh never
    interleaves with a caller's write or with the read-check-write of validate().
    Reading ``cache`` never takes the lock and never blocks.

    Args:
        name: Config name, the file name without extension
        file_path: Location of the backing file
        serializer: Serializer for this config's value type
        executor: Executor used by the async methods, the loop default if None
    """

    def __init__(
        self,
        name: str,
        file_path: Union[str, Path],
        serializer: ConfigSerializer[T],
        executor: Optional[Executor] = None,
    ):
        self.name = name
        self._serializer = serializer
        self._file = FileManager(file_path)
        self._executor = executor
        self._lock = threading.RLock()
        self._cache: T
        self.last_loaded_at: Optional[datetime] = None
        self.logger = get_logger(__name__)

        self.read_now()

    @property
    def file_path(self) -> Path:
        return self._file.file_path

    @property
    def serializer(self) -> ConfigSerializer[T]:
        return self._serializer

    @property
    def value_type(self) -> Any:
        return self._serializer.value_type

    @property
    def cache(self) -> T:
        """Last value read from or written to disk; refreshed by the registry."""
        return self._cache

    def bind_executor(self, executor: Optional[Executor]) -> None:
        """Switch the executor used by the async methods, None for the loop default."""
        self._executor = executor

    def matches_type(self, value_type: Any) -> bool:
        """Check whether values of this handle can be used as ``value_type``."""
        actual = self.value_type
        if value_type is None or value_type == actual:
            return True
        if isinstance(value_type, type) and isinstance(actual, type):
            return issubclass(actual, value_type)
        return False

    def read_now(self) -> T:
        """
        Read the file and replace the cache with its decoded content.

        Returns:
            The freshly read value

        Raises:
            ConfigIOError: If the file cannot be read
            FormatError: If the content cannot be decoded
        """
        with self._lock:
            self.logger.debug(f"Load data from `{self.file_path}`")
            data = self._file.read_bytes()
            value = self._decode(data)
            self._cache = value
            self.last_loaded_at = datetime.now()
            return value

    def write_now(self, value: T) -> T:
        """
        Write a new value to the file, then replace the cache with it.

        The cache is left untouched if encoding or writing fails.

        Returns:
            The written value

        Raises:
            FormatError: If the value cannot be encoded
            ConfigIOError: If the file cannot be written
        """
        with self._lock:
            self.logger.debug(f"Save data to `{self.file_path}`")
            data = self._encode(value)
            self._file.write_bytes(data)
            self._cache = value
            self.last_loaded_at = datetime.now()
            return value

    def update_now(self, value: Optional[T] = None) -> T:
        """Write ``value`` when given, otherwise re-read the file."""
        if value is None:
            return self.read_now()
        return self.write_now(value)

    def validate(self, checker: Checker) -> Optional[T]:
        """
        Check the current file content and repair it when needed.

        The file is read first; a read or decode failure is passed to ``checker``
        as None. If ``checker`` returns None the config is accepted as is,
        otherwise the returned value is written back.

        Returns:
            The corrected value that was written, or None if accepted

        Raises:
            ConfigIOError: If writing the corrected value fails
        """
        with self._lock:
            try:
                current = self.read_now()
            except ConfigDirError as e:
                self.logger.warning(f"Config `{self.name}` unreadable during validation: {e}")
                current = None

            corrected = checker(current)
            if corrected is None:
                return None

            self.logger.info(f"Config `{self.name}` corrected by validation, saving")
            return self.write_now(corrected)

    async def read_async(self) -> T:
        """Async version of read_now, run on the I/O executor."""
        return await self._run(self.read_now)

    async def write_async(self, value: T) -> T:
        """Async version of write_now, run on the I/O executor."""
        return await self._run(self.write_now, value)

    async def update_async(self, value: Optional[T] = None) -> T:
        """Async version of update_now, run on the I/O executor."""
        return await self._run(self.update_now, value)

    async def current_async(self) -> T:
        """Re-read the file and return its value without blocking the loop."""
        return await self.read_async()

    async def validate_async(self, checker: Checker) -> Optional[T]:
        """Async version of validate; ``checker`` runs on the I/O executor too."""
        return await self._run(self.validate, checker)

    async def _run(self, func: Callable[..., Any], *args: Any) -> Any:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._executor, functools.partial(func, *args))

    def _decode(self, data: bytes) -> T:
        try:
            return self._serializer.decode(data)
        except FormatError as e:
            if e.path is None:
                e.path = self.file_path
            raise
        except Exception as e:
            raise FormatError(f"Failed to decode `{self.file_path}`: {e}", self.file_path) from e

    def _encode(self, value: T) -> bytes:
        try:
            return self._serializer.encode(value)
        except FormatError:
            raise
        except Exception as e:
            raise FormatError(f"Failed to encode config `{self.name}`: {e}", self.file_path) from e

    def __repr__(self) -> str:
        return f"ConfigHandle(name='{self.name}', file='{self.file_path}')"
