"""Application layer - config handles and the registry that owns them."""

from .config_handle import ConfigHandle
from .registry import ConfigRegistry

__all__ = ["ConfigHandle", "ConfigRegistry"]
