"""Utility modules for speechtotext."""

from .logging import DEFAULT_FORMAT, setup_logging

__all__ = [
    "DEFAULT_FORMAT",
    "setup_logging",
]
