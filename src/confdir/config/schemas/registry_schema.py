"""Registry configuration schema."""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .logging_schema import LoggingConfig


class RegistryConfig(BaseModel):
    """Settings for a ConfigRegistry."""
    model_config = ConfigDict(extra="forbid")

    base_dir: str = Field("config", min_length=1, description="Directory holding the managed files")
    refresh_interval: float = Field(
        60.0, description="Seconds between cache refreshes, zero or negative disables refresh"
    )
    max_workers: Optional[int] = Field(None, ge=1, description="Size of the I/O thread pool")
    logging: LoggingConfig = Field(default_factory=LoggingConfig, description="Logging configuration")

    @property
    def refresh_enabled(self) -> bool:
        return self.refresh_interval > 0
