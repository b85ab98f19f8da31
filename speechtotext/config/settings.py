"""
Stream Settings

Single source of truth for the recognition session configuration.
The audio format is fixed: 16-bit linear PCM, mono, 16 kHz.

Precedence: command-line value > environment variable > default.
"""

import os
import re
from dataclasses import dataclass, field

from ..errors import ConfigurationError

# ============== Constants ==============
SAMPLE_RATE_HERTZ = 16000
DEFAULT_BUFFER_SIZE = 10240  # bytes per audio-content message
DEFAULT_RATE = "1ms"  # token-bucket refill interval
DEFAULT_LANGUAGE = "en-US"
DEFAULT_ENDPOINT = "speech.googleapis.com:443"
SCOPE = "https://www.googleapis.com/auth/cloud-platform"

# Environment fallbacks
ENV_KEY_FILE = "SPEECH_KEY_FILE"
ENV_LANGUAGE = "SPEECH_LANGUAGE"
ENV_ENDPOINT = "SPEECH_ENDPOINT"

# Seconds per unit, Go duration syntax
_DURATION_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}
_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|ms|s|m|h)")


def parse_duration(value: str) -> float:
    """
    Parse a Go-style duration string into seconds.

    Examples:
        "1ms" -> 0.001
        "1.5s" -> 1.5
        "1m30s" -> 90.0
        "0" -> 0.0

    Raises:
        ConfigurationError: If the string is not a valid duration
    """
    text = value.strip()
    if text in ("0", "+0", "-0"):
        return 0.0

    sign = 1.0
    if text[:1] in ("+", "-"):
        sign = -1.0 if text[0] == "-" else 1.0
        text = text[1:]

    if not text:
        raise ConfigurationError(f"invalid duration {value!r}")

    total = 0.0
    pos = 0
    while pos < len(text):
        match = _DURATION_PART.match(text, pos)
        if not match:
            raise ConfigurationError(f"invalid duration {value!r}")
        total += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
        pos = match.end()

    return sign * total


@dataclass
class StreamSettings:
    """Settings for one streaming recognition run."""

    key_path: str = ""
    buffer_size: int = DEFAULT_BUFFER_SIZE
    rate: float = field(default_factory=lambda: parse_duration(DEFAULT_RATE))  # seconds
    verbose: bool = False
    language_code: str = DEFAULT_LANGUAGE
    single_utterance: bool = False
    endpoint: str = DEFAULT_ENDPOINT
    sample_rate_hertz: int = SAMPLE_RATE_HERTZ

    @classmethod
    def from_args(cls, args) -> "StreamSettings":
        """
        Build settings from parsed command-line arguments.

        Missing values fall back to the SPEECH_* environment variables,
        then to the defaults.
        """
        settings = cls(
            key_path=args.key or os.getenv(ENV_KEY_FILE, ""),
            buffer_size=args.buf_size,
            rate=parse_duration(args.rate),
            verbose=args.verbose,
            language_code=args.language or os.getenv(ENV_LANGUAGE, DEFAULT_LANGUAGE),
            single_utterance=args.single,
            endpoint=args.endpoint or os.getenv(ENV_ENDPOINT, DEFAULT_ENDPOINT),
        )
        settings.validate()
        return settings

    def validate(self) -> None:
        """Raise ConfigurationError for settings the pipeline cannot run with."""
        if not self.key_path:
            raise ConfigurationError(
                f"a service account key file is required (-key or ${ENV_KEY_FILE})"
            )
        if self.buffer_size <= 0:
            raise ConfigurationError(f"buffer size must be positive, got {self.buffer_size}")
        if self.rate < 0:
            raise ConfigurationError(f"rate must not be negative, got {self.rate}s")
        if not self.language_code:
            raise ConfigurationError("language code must not be empty")


def load_credentials(key_path: str):
    """
    Load service account credentials scoped for the speech API.

    Args:
        key_path: Path to a service account JSON key file

    Returns:
        google.oauth2.service_account.Credentials

    Raises:
        ConfigurationError: If the file is missing, unreadable or not a valid key
    """
    from google.oauth2 import service_account

    try:
        return service_account.Credentials.from_service_account_file(key_path, scopes=[SCOPE])
    except (OSError, ValueError) as e:
        raise ConfigurationError(f"cannot load key file {key_path}: {e}") from e
