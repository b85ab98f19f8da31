"""
speechtotext

Streams audio from stdin to a speech recognition service and renders
incremental transcripts in place:
- audio: stdin-fed byte pipe with an end-of-stream signal
- client: rate-limited sender, renderer and stream orchestration
- config: session constants, settings and credential loading
- utils: logging setup

Usage:
    from speechtotext.client import RecognitionSession, stream_transcripts
    from speechtotext.utils import setup_logging

    logger = setup_logging(__name__)
"""

__version__ = "1.0.0"

from .errors import (
    ConfigurationError,
    ServiceConnectionError,
    SpeechToTextError,
    StreamError,
)

__all__ = [
    "ConfigurationError",
    "ServiceConnectionError",
    "SpeechToTextError",
    "StreamError",
    "__version__",
]
