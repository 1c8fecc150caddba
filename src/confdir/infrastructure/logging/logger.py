"""Logging helpers shared by the library and its host processes."""
from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from typing import TYPE_CHECKING, Any, Dict, Optional, Union

import structlog

if TYPE_CHECKING:
    from confdir.config.schemas import LoggingConfig

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s [%(caller_info)s] - %(message)s"


def get_logger(name: str) -> logging.Logger:
    """
    Get a standard library logger.

    The library only emits records; handlers are the host's business, see setup_logging.
    """
    return logging.getLogger(name)


class DetailedFormatter(logging.Formatter):
    """Formatter adding module, function and line of the caller."""

    def format(self, record):
        record.caller_info = f"{record.module}.{record.funcName}:{record.lineno}"
        return super().format(record)


def setup_logging(
    config: Optional[Union["LoggingConfig", Dict[str, Any]]] = None,
    logger_name: str = "confdir",
) -> structlog.stdlib.BoundLogger:
    """
    Set up logging for a host process using stdlib handlers and structlog.

    Args:
        config: LoggingConfig or a dict accepted by it. Defaults to INFO on stdout.
        logger_name: Name of the returned structlog logger

    Returns:
        Configured structlog logger instance.
    """
    from confdir.config.schemas import LoggingConfig

    if config is None:
        config = LoggingConfig()
    elif isinstance(config, dict):
        config = LoggingConfig(**config)

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, config.level.value))

    handlers = []
    if config.writes_to_file():
        if not config.file_path:
            raise ValueError("file_path is required when logging to a file")
        log_file = os.path.expandvars(config.file_path)
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=config.max_size_mb * 1024 * 1024,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(DetailedFormatter(LOG_FORMAT))
        handlers.append(file_handler)

    if config.writes_to_stdout():
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(DetailedFormatter(LOG_FORMAT))
        handlers.append(console_handler)

    # Replace whatever handlers a previous call installed
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root_logger.addHandler(handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.render_to_log_kwargs,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger(logger_name)
    logger.debug(
        "Logging configured",
        log_level=config.level.value,
        log_destination=config.destination.value,
        log_file=config.file_path,
    )
    return logger
