"""Background scheduling."""

from .refresh_scheduler import RefreshScheduler

__all__ = ["RefreshScheduler"]
