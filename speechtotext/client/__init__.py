"""
Speech Client Module

Streaming pipeline around the speech service.

Usage:
    from speechtotext.client import RecognitionSession, create_client, stream_transcripts

    session = RecognitionSession(settings)
    client = create_client(settings, credentials)
    await stream_transcripts(client, session, sys.stdin.buffer)
"""

from .channel import RequestChannel
from .limiter import RateLimiter
from .renderer import LOW_CONFIDENCE_MARKER, RendererState, TranscriptRenderer, display_width
from .result import LOW_STABILITY_THRESHOLD, TranscriptUpdate
from .sender import AudioSender
from .session import RecognitionSession, create_client
from .stream import recognize_once, stream_transcripts

__all__ = [
    "LOW_CONFIDENCE_MARKER",
    "LOW_STABILITY_THRESHOLD",
    "AudioSender",
    "RateLimiter",
    "RecognitionSession",
    "RendererState",
    "RequestChannel",
    "TranscriptRenderer",
    "TranscriptUpdate",
    "create_client",
    "display_width",
    "recognize_once",
    "stream_transcripts",
]
