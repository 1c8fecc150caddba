"""Environment variable expansion for configuration values."""

import os
from typing import Any, Dict


def expand_env_vars(value: Any) -> Any:
    """
    Expand ``$VAR`` and ``${VAR}`` references in strings, recursing into dicts and lists.

    Unknown variables are left untouched, non-string leaves are returned unchanged.

    Args:
        value: String, dict, list or any other value

    Returns:
        Value with environment variables expanded
    """
    if isinstance(value, str):
        return os.path.expandvars(value)
    if isinstance(value, dict):
        return {key: expand_env_vars(item) for key, item in value.items()}
    if isinstance(value, list):
        return [expand_env_vars(item) for item in value]
    return value


def expand_config_env_vars(config: Dict[str, Any]) -> Dict[str, Any]:
    """Expand environment variables in every string of a raw configuration mapping."""
    return expand_env_vars(config)
