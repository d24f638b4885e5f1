"""
Configuration system for cbx-safe-shell.

Exports:
    SafeShellConfig: Main configuration container
    load_config: Load configuration from YAML/env
"""

from cbx_safe_shell.config.models import (
    LoggingSettings,
    SafeShellConfig,
    ShellSettings,
)
from cbx_safe_shell.config.loader import load_config

__all__ = [
    "SafeShellConfig",
    "ShellSettings",
    "LoggingSettings",
    "load_config",
]
