"""
Error types for speechtotext.

SpeechToTextError and its direct subclasses are the failures the CLI reports
before exiting non-zero. The pipe and channel signals are internal: they end
the sender loop and never reach the user.
"""


class SpeechToTextError(Exception):
    """Base class for unrecoverable speechtotext failures."""


class ConfigurationError(SpeechToTextError):
    """Missing or unreadable key file, or invalid settings."""


class ServiceConnectionError(SpeechToTextError):
    """The speech client could not be created or the stream could not be opened."""


class StreamError(SpeechToTextError):
    """The inbound stream failed with something other than a clean end."""


class EndOfStream(Exception):
    """
    Raised by AudioPipe reads once the pipe is closed and drained.

    Attributes:
        partial: Bytes that were buffered but did not fill the requested read
    """

    def __init__(self, partial: bytes = b""):
        super().__init__(f"end of stream ({len(partial)} bytes unread)")
        self.partial = partial


class PipeClosedError(Exception):
    """Write on an AudioPipe that has already been closed."""


class ChannelClosedError(Exception):
    """Send or close on a RequestChannel that has already been closed."""
