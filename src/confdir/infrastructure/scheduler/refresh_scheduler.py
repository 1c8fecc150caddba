"""Recurring background task driving cache refreshes."""
from __future__ import annotations

import threading
from typing import Callable, Optional

from confdir.infrastructure.logging.logger import get_logger

logger = get_logger(__name__)


class RefreshScheduler:
    """
    Run a callback every ``interval`` seconds on a daemon thread.

    The first run happens one full interval after start. The stop event doubles
    as cancellation token: stop() wakes the sleeping thread immediately, a tick
    already in progress is allowed to finish.
    """

    def __init__(self, callback: Callable[[], object], interval: float, name: str = "confdir-refresh"):
        if interval <= 0:
            raise ValueError(f"Refresh interval must be positive, got {interval}")
        self._callback = callback
        self._interval = interval
        self._name = name
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start the refresh thread."""
        with self._lock:
            if self._thread is not None:
                logger.warning(f"{self._name} already started")
                return
            self._thread = threading.Thread(target=self._run, name=self._name, daemon=True)
            self._thread.start()
        logger.debug(f"{self._name} started (interval={self._interval}s)")

    def stop(self, timeout: Optional[float] = 5.0) -> None:
        """Cancel the refresh thread and wait for it to exit."""
        self._stop_event.set()
        with self._lock:
            thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=timeout)
        logger.debug(f"{self._name} stopped")

    def _run(self) -> None:
        while not self._stop_event.wait(self._interval):
            try:
                self._callback()
            except Exception as e:
                logger.error(f"{self._name} tick failed: {e}", exc_info=True)
