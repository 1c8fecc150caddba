"""Ready-made serializers for common file formats."""

from .json_serializer import JsonSerializer
from .pydantic_serializer import PydanticSerializer
from .yaml_serializer import YamlSerializer

__all__ = ["JsonSerializer", "PydanticSerializer", "YamlSerializer"]
