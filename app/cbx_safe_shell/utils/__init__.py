# utils/__init__.py

from .logging import (
    setup_logging,
    get_logger
)

__all__ = [
    "setup_logging",
    "get_logger",
]
