"""
Pytest configuration and shared fixtures.
"""

import sys
from pathlib import Path

import pytest


# Add app directory to path
APP_DIR = Path(__file__).parent.parent / "app"
sys.path.insert(0, str(APP_DIR))


@pytest.fixture
def clean_env(monkeypatch):
    """Remove CBX_SAFE_SHELL_ variables so tests see only what they set."""
    import os

    for key in list(os.environ):
        if key.startswith("CBX_SAFE_SHELL_"):
            monkeypatch.delenv(key)
    yield monkeypatch


@pytest.fixture
def empty_config_dir(tmp_path):
    """A config directory with no user config in it."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    return config_dir


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo handler and level changes made by setup_logging()."""
    import logging

    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
