"""
Transcript Renderer

Consumes inbound responses and keeps a single terminal line up to date by
erasing it and rewriting it in place.

States:
    STREAMING -> DRAINING (end of speech) -> DONE (stream ended)
    STREAMING/DRAINING -> FAILED (stream error)
"""

import logging
import sys
import unicodedata
from collections.abc import AsyncIterable, Awaitable, Callable
from enum import Enum
from typing import TextIO

from google.cloud import speech

from ..errors import StreamError
from .result import TranscriptUpdate

logger = logging.getLogger(__name__)

LOW_CONFIDENCE_MARKER = "?"


def display_width(text: str) -> int:
    """Terminal columns taken by text: wide and fullwidth characters take 2, combining marks 0."""
    width = 0
    for char in text:
        if unicodedata.combining(char):
            continue
        width += 2 if unicodedata.east_asian_width(char) in ("W", "F") else 1
    return width


class RendererState(str, Enum):
    STREAMING = "streaming"
    DRAINING = "draining"
    DONE = "done"
    FAILED = "failed"


class TranscriptRenderer:
    """
    Renders live transcripts on one overwritten line.

    Usage:
        renderer = TranscriptRenderer(on_end_of_speech=stop_audio)
        await renderer.run(responses)
    """

    def __init__(
        self,
        out: TextIO | None = None,
        verbose: bool = False,
        on_end_of_speech: Callable[[], Awaitable[None]] | None = None,
    ):
        """
        Initialize renderer.

        Args:
            out: Text stream to render to (stdout if None)
            verbose: Also print every raw response, one line per update
            on_end_of_speech: Awaited when the service reports end of speech
        """
        self.out = out if out is not None else sys.stdout
        self.verbose = verbose
        self.on_end_of_speech = on_end_of_speech

        self.max_width = 0
        self.state = RendererState.STREAMING
        self.updates = 0

    async def run(self, responses: AsyncIterable[speech.StreamingRecognizeResponse]) -> None:
        """
        Render responses until the stream ends.

        Raises:
            StreamError: If receiving from the stream fails
        """
        try:
            async for response in responses:
                await self.handle(response)
        except Exception as e:
            self.state = RendererState.FAILED
            raise StreamError(f"recognition stream failed: {e}") from e
        finally:
            self.out.write("\n")
            self.out.flush()

        self.state = RendererState.DONE
        logger.debug(f"Stream ended after {self.updates} transcript updates")

    async def handle(self, response: speech.StreamingRecognizeResponse) -> None:
        """Render one response and react to an end-of-speech event."""
        if self.verbose:
            print(response, file=self.out)

        update = TranscriptUpdate.from_response(response)
        if update.has_results:
            self.render(update)

        if update.end_of_speech and self.state == RendererState.STREAMING:
            logger.debug("End of speech detected, closing audio input")
            self.state = RendererState.DRAINING
            if self.on_end_of_speech is not None:
                await self.on_end_of_speech()

    def render(self, update: TranscriptUpdate) -> None:
        """Erase the current line and write the update in its place."""
        self.out.write("\r" + " " * self.max_width + "\r")
        if update.is_low_confidence:
            self.out.write(LOW_CONFIDENCE_MARKER)

        # One extra column for the marker
        self.max_width = max(self.max_width, display_width(update.text) + 1)
        self.out.write(update.text)
        if self.verbose:
            self.out.write("\n")
        self.out.flush()
        self.updates += 1
