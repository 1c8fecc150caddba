"""Domain ports."""

from .serializer_port import ConfigSerializer

__all__ = ["ConfigSerializer"]
