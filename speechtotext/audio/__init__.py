"""
Audio Module

Turns standard input into a readable byte stream with an end-of-stream signal:
- AudioPipe: bounded async byte pipe
- copy_to_pipe: feeds a pipe from a blocking binary stream
"""

from .pipe import DEFAULT_PIPE_LIMIT, AudioPipe
from .source import COPY_CHUNK_SIZE, copy_to_pipe, stdin_source

__all__ = [
    "COPY_CHUNK_SIZE",
    "DEFAULT_PIPE_LIMIT",
    "AudioPipe",
    "copy_to_pipe",
    "stdin_source",
]
