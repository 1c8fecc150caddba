"""Registry settings loading from YAML files and environment variables."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml
from pydantic import ValidationError

from confdir.config.schemas import RegistryConfig
from confdir.config.utils.env_expansion import expand_config_env_vars
from confdir.domain.exceptions import ConfigurationError
from confdir.infrastructure.logging.logger import get_logger

logger = get_logger(__name__)

ENV_PREFIX = "CONFDIR_"

# Environment variable suffix -> (section, key); section None means top level
ENV_OVERRIDES = {
    "BASE_DIR": (None, "base_dir"),
    "REFRESH_INTERVAL": (None, "refresh_interval"),
    "MAX_WORKERS": (None, "max_workers"),
    "LOG_LEVEL": ("logging", "level"),
    "LOG_DESTINATION": ("logging", "destination"),
    "LOG_FILE": ("logging", "file_path"),
}


class RegistryConfigLoader:
    """Load RegistryConfig from an optional YAML file plus environment overrides."""

    def __init__(self, env: Optional[Mapping[str, str]] = None):
        self._env = os.environ if env is None else env

    def load_from_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """
        Read raw settings from a YAML file.

        Raises:
            ConfigurationError: If the file is missing, unreadable or not a mapping
        """
        path = Path(config_path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                raw_config = yaml.safe_load(f)
        except FileNotFoundError as e:
            raise ConfigurationError(f"Config file not found: {path}") from e
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Failed to parse config file {path}: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Failed to read config file {path}: {e}") from e

        if raw_config is None:
            return {}
        if not isinstance(raw_config, dict):
            raise ConfigurationError(f"Config file {path} must contain a mapping")

        logger.debug(f"Loaded registry settings from {path}")
        return raw_config

    def apply_environment_overrides(self, config_data: Dict[str, Any]) -> Dict[str, Any]:
        """Apply CONFDIR_* environment variables on top of raw settings."""
        result = dict(config_data)
        for suffix, (section, key) in ENV_OVERRIDES.items():
            value = self._env.get(f"{ENV_PREFIX}{suffix}")
            if value is None or value == "":
                continue
            if section is None:
                result[key] = value
            else:
                nested = dict(result.get(section) or {})
                nested[key] = value
                result[section] = nested
            logger.debug(f"Applied environment override {ENV_PREFIX}{suffix}")
        return result

    def load(self, config_path: Optional[Union[str, Path]] = None) -> RegistryConfig:
        """
        Load and validate registry settings.

        Raises:
            ConfigurationError: If reading or validation fails
        """
        config_data = self.load_from_file(config_path) if config_path else {}
        config_data = expand_config_env_vars(config_data)
        config_data = self.apply_environment_overrides(config_data)

        try:
            return RegistryConfig(**config_data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid registry configuration: {e}", e.errors()) from e


def load_registry_config(
    config_path: Optional[Union[str, Path]] = None,
    env: Optional[Mapping[str, str]] = None,
) -> RegistryConfig:
    """Convenience function to load registry settings."""
    return RegistryConfigLoader(env).load(config_path)
