"""Logging configuration schema."""
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LogLevel(str, Enum):
    """Log level enumeration."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogDestination(str, Enum):
    """Log destination enumeration."""
    FILE = "file"
    STDOUT = "stdout"
    BOTH = "both"


class LoggingConfig(BaseModel):
    """Logging configuration for host processes embedding the library."""
    model_config = ConfigDict(extra="forbid")

    level: LogLevel = Field(LogLevel.INFO, description="Root log level")
    destination: LogDestination = Field(LogDestination.STDOUT, description="Where log records go")
    file_path: Optional[str] = Field(None, description="Log file path, required for file destinations")
    max_size_mb: int = Field(10, ge=1, description="Rotate the log file after this size")
    backup_count: int = Field(5, ge=0, description="Number of rotated log files to keep")

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, value):
        if isinstance(value, str):
            return value.upper()
        return value

    def writes_to_file(self) -> bool:
        return self.destination in (LogDestination.FILE, LogDestination.BOTH)

    def writes_to_stdout(self) -> bool:
        return self.destination in (LogDestination.STDOUT, LogDestination.BOTH)
