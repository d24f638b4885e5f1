"""
Configuration loader with YAML and environment variable support.

Priority (highest to lowest):
1. Environment variables: CBX_SAFE_SHELL_LOGGING__LEVEL=debug
2. User config: --config-dir path / ~/.cbx-safe-shell/config.yaml
3. Built-in defaults: cbx_safe_shell/config/defaults/settings.yaml
"""

import os
from pathlib import Path
from typing import Any, Optional

import yaml

from cbx_safe_shell.config.models import SafeShellConfig
from cbx_safe_shell.utils.logging import get_logger

logger = get_logger(__name__)

# Default config locations
DEFAULT_CONFIG_DIR = Path.home() / ".cbx-safe-shell"
PACKAGE_DEFAULTS_DIR = Path(__file__).parent / "defaults"

# Environment variable prefix
ENV_PREFIX = "CBX_SAFE_SHELL_"
ENV_DELIMITER = "__"


def _deep_merge(base: dict, override: dict) -> dict:
    """
    Deep merge two dictionaries.

    Values from 'override' take precedence over 'base'.
    Nested dicts are merged recursively.
    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a YAML file, returning empty dict if not found or malformed."""
    if not path.exists():
        return {}
    try:
        with open(path) as f:
            content = yaml.safe_load(f)
            return content if isinstance(content, dict) else {}
    except yaml.YAMLError as e:
        logger.warning(f"Failed to parse {path}: {e}")
        return {}


def _get_env_overrides() -> dict[str, Any]:
    """
    Extract configuration overrides from environment variables.

    CBX_SAFE_SHELL_SHELL__EXECUTABLE=/bin/bash -> {"shell": {"executable": "/bin/bash"}}
    CBX_SAFE_SHELL_LOGGING__LEVEL=debug -> {"logging": {"level": "debug"}}
    """
    overrides: dict[str, Any] = {}

    for key, value in os.environ.items():
        if not key.startswith(ENV_PREFIX):
            continue

        key_path = key[len(ENV_PREFIX) :].lower().split(ENV_DELIMITER)
        if not all(key_path):
            logger.warning(f"Ignoring malformed config variable: {key}")
            continue

        current = overrides
        for part in key_path[:-1]:
            current = current.setdefault(part, {})

        current[key_path[-1]] = value

    return overrides


def load_config(config_dir: Optional[str | Path] = None) -> SafeShellConfig:
    """
    Load configuration from multiple sources.

    Args:
        config_dir: Optional path to configuration directory.
                   If not provided, uses ~/.cbx-safe-shell/

    Returns:
        SafeShellConfig: Validated configuration object

    Raises:
        pydantic.ValidationError: If configuration is invalid
    """
    config_data = _load_yaml_file(PACKAGE_DEFAULTS_DIR / "settings.yaml")

    user_config_dir = Path(config_dir) if config_dir else DEFAULT_CONFIG_DIR
    user_config = _load_yaml_file(user_config_dir / "config.yaml")
    config_data = _deep_merge(config_data, user_config)

    env_overrides = _get_env_overrides()
    config_data = _deep_merge(config_data, env_overrides)

    return SafeShellConfig.model_validate(config_data)
