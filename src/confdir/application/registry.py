"""Config registry - a directory of named configuration files."""
from __future__ import annotations

import asyncio
import functools
import threading
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, TypeVar, Union

from confdir.application.config_handle import ConfigHandle
from confdir.config.schemas import RegistryConfig
from confdir.domain.exceptions import (
    ConfigPermissionError,
    InvalidPathError,
    NotLoadedError,
    RegistryClosedError,
    TypeMismatchError,
)
from confdir.domain.ports import ConfigSerializer
from confdir.infrastructure.logging.logger import get_logger
from confdir.infrastructure.persistence import FileManager, ensure_config_directory, has_read_write_access
from confdir.infrastructure.scheduler import RefreshScheduler

T = TypeVar("T")

DEFAULT_REFRESH_INTERVAL = 60.0


class ConfigRegistry:
    """
    Registry of configuration files living in one directory.

    Configs are loaded with load() / load_async() and looked up again with get().
    One registry can hold configs of any value type, each name keeping the type
    it was first loaded with.

    Example:
        registry = ConfigRegistry("config", 30.0,
                                  initializer=lambda r: r.load("settings", SettingsSerializer))
        settings = registry.get("settings", Settings).cache

    Construction bootstraps the directory: a missing directory is created, a
    path that is not a directory or lacks read and write permission raises and
    no registry is built. When ``refresh_interval`` is positive a background
    task re-reads every loaded config on that period until close().

    Args:
        base_dir: Directory holding the config files, created if absent
        refresh_interval: Seconds between refreshes, zero or negative disables them
        max_workers: Size of the thread pool used by async operations
        initializer: Called with the new registry once it is ready, e.g. to pre-load configs
    """

    def __init__(
        self,
        base_dir: Union[str, Path],
        refresh_interval: float = DEFAULT_REFRESH_INTERVAL,
        *,
        max_workers: Optional[int] = None,
        initializer: Optional[Callable[["ConfigRegistry"], Any]] = None,
    ):
        self.logger = get_logger(__name__)
        self.base_dir = ensure_config_directory(base_dir)
        self.refresh_interval = refresh_interval

        self._handles: Dict[str, ConfigHandle[Any]] = {}
        self._registry_lock = threading.RLock()
        self._closed = False
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="confdir-io")

        self._scheduler: Optional[RefreshScheduler] = None
        if refresh_interval > 0:
            self._scheduler = RefreshScheduler(
                self.refresh_all, refresh_interval, name=f"confdir-refresh[{self.base_dir.name}]"
            )
            self._scheduler.start()

        self.logger.debug(
            f"Config registry initialized at {self.base_dir} (refresh_interval={refresh_interval})"
        )

        if initializer is not None:
            try:
                initializer(self)
            except Exception:
                self.close()
                raise

    @classmethod
    def from_settings(
        cls,
        settings: RegistryConfig,
        initializer: Optional[Callable[["ConfigRegistry"], Any]] = None,
    ) -> "ConfigRegistry":
        """Create a registry from validated library settings."""
        return cls(
            settings.base_dir,
            settings.refresh_interval,
            max_workers=settings.max_workers,
            initializer=initializer,
        )

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def refresh_running(self) -> bool:
        return self._scheduler is not None and self._scheduler.running

    def file_path_for(self, name: str, serializer: ConfigSerializer[Any]) -> Path:
        """Path of the file backing ``name`` for the given serializer."""
        return self.base_dir / f"{name}.{serializer.file_extension}"

    def load(self, name: str, serializer: ConfigSerializer[T]) -> ConfigHandle[T]:
        """
        Load a config file, or return it if it was already loaded.

        A missing file is created with the serializer's default value.

        Args:
            name: Config name, the file name without extension
            serializer: Serializer for the config's value type

        Returns:
            The config handle

        Raises:
            TypeMismatchError: If ``name`` was loaded with a different value type
                or file format
            InvalidPathError: If the file path is a directory
            ConfigPermissionError: If the directory lost read or write permission
            ConfigIOError: If the file cannot be created or read
            FormatError: If the file content cannot be decoded
        """
        self._ensure_open()
        with self._registry_lock:
            existing = self._handles.get(name)
            if existing is not None:
                if existing.serializer.file_extension != serializer.file_extension:
                    raise TypeMismatchError(name, type(serializer), type(existing.serializer))
                if not existing.matches_type(serializer.value_type):
                    raise TypeMismatchError(name, serializer.value_type, existing.value_type)
                return existing

            handle = self._create_handle(name, serializer)
            self._handles[name] = handle
            self.logger.info(f"Loaded config `{name}` from {handle.file_path}")
            return handle

    async def load_async(self, name: str, serializer: ConfigSerializer[T]) -> ConfigHandle[T]:
        """Async version of load, run on the registry's I/O executor."""
        self._ensure_open()
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._executor, functools.partial(self.load, name, serializer))

    def _create_handle(self, name: str, serializer: ConfigSerializer[T]) -> ConfigHandle[T]:
        file_path = self.file_path_for(name, serializer)
        file_manager = FileManager(file_path)

        if file_manager.is_directory():
            self.logger.error(f"`{file_path}` is a directory, expects a file")
            raise InvalidPathError(file_path, "file")
        if not has_read_write_access(self.base_dir):
            self.logger.error(f"No read and write permissions for the `{self.base_dir}` directory")
            raise ConfigPermissionError(self.base_dir)

        if not file_manager.file_exists():
            file_manager.create(serializer.encode(serializer.default_value))

        return ConfigHandle(name, file_path, serializer, executor=self._executor)

    def get(self, name: str, value_type: Any = None) -> ConfigHandle[Any]:
        """
        Get an already loaded config.

        Args:
            name: Config name
            value_type: Expected value type; checked against the loaded one when given

        Raises:
            NotLoadedError: If ``name`` was never loaded
            TypeMismatchError: If ``value_type`` does not match the loaded type
        """
        with self._registry_lock:
            handle = self._handles.get(name)
        if handle is None:
            raise NotLoadedError(name, self.base_dir)
        if not handle.matches_type(value_type):
            raise TypeMismatchError(name, value_type, handle.value_type)
        return handle

    def __getitem__(self, name: str) -> ConfigHandle[Any]:
        return self.get(name)

    def __contains__(self, name: object) -> bool:
        with self._registry_lock:
            return name in self._handles

    def __len__(self) -> int:
        with self._registry_lock:
            return len(self._handles)

    def names(self) -> List[str]:
        """Names of all loaded configs."""
        with self._registry_lock:
            return list(self._handles)

    def refresh_all(self) -> Dict[str, Exception]:
        """
        Re-read every loaded config from disk.

        A config that fails to refresh keeps its previous cache and does not stop
        the others.

        Returns:
            Failures keyed by config name, empty when everything refreshed
        """
        with self._registry_lock:
            handles = list(self._handles.values())

        failures: Dict[str, Exception] = {}
        for handle in handles:
            try:
                handle.read_now()
            except Exception as e:
                self.logger.error(f"Failed to refresh config `{handle.name}`: {e}")
                failures[handle.name] = e

        self.logger.debug(f"Refreshed {len(handles) - len(failures)}/{len(handles)} configs")
        return failures

    def close(self) -> None:
        """Stop the refresh task and the I/O executor. Safe to call twice."""
        with self._registry_lock:
            if self._closed:
                return
            self._closed = True
            handles = list(self._handles.values())

        if self._scheduler is not None:
            self._scheduler.stop()
        for handle in handles:
            handle.bind_executor(None)
        self._executor.shutdown(wait=True)
        self.logger.debug(f"Config registry at {self.base_dir} closed")

    def _ensure_open(self) -> None:
        if self._closed:
            raise RegistryClosedError(f"Config registry at {self.base_dir} is closed")

    def __enter__(self) -> "ConfigRegistry":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    async def __aenter__(self) -> "ConfigRegistry":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self.close)

    def __repr__(self) -> str:
        return f"ConfigRegistry(base_dir='{self.base_dir}', configs={self.names()})"
