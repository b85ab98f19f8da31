"""
Configuration Module

Session constants, settings and credential loading.
"""

from .settings import (
    DEFAULT_BUFFER_SIZE,
    DEFAULT_ENDPOINT,
    DEFAULT_LANGUAGE,
    DEFAULT_RATE,
    SAMPLE_RATE_HERTZ,
    SCOPE,
    StreamSettings,
    load_credentials,
    parse_duration,
)

__all__ = [
    "DEFAULT_BUFFER_SIZE",
    "DEFAULT_ENDPOINT",
    "DEFAULT_LANGUAGE",
    "DEFAULT_RATE",
    "SAMPLE_RATE_HERTZ",
    "SCOPE",
    "StreamSettings",
    "load_credentials",
    "parse_duration",
]
