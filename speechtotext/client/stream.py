"""
Streaming Pipeline

Wires the audio pipe, the rate-limited sender and the renderer around one
recognition stream:

    stdin -> copy task -> AudioPipe -> AudioSender -> RequestChannel -> service
    service -> responses -> TranscriptRenderer -> stdout

End of speech closes the pipe, which ends the sender, which closes the
channel, which lets the service end the response stream.
"""

import asyncio
import contextlib
import logging
from typing import BinaryIO, TextIO

from google.api_core import exceptions as api_exceptions
from google.cloud import speech

from ..audio import AudioPipe, copy_to_pipe
from ..errors import StreamError
from .channel import RequestChannel
from .limiter import RateLimiter
from .renderer import TranscriptRenderer
from .sender import AudioSender
from .session import RecognitionSession

logger = logging.getLogger(__name__)


async def stream_transcripts(
    client: speech.SpeechAsyncClient,
    session: RecognitionSession,
    source: BinaryIO,
    out: TextIO | None = None,
) -> TranscriptRenderer:
    """
    Stream audio from source and render transcripts until the service ends the stream.

    Args:
        client: Speech client (anything with an async streaming_recognize)
        session: Session holding the settings
        source: Binary audio input
        out: Text stream for transcripts (stdout if None)

    Returns:
        The renderer, for inspecting final state

    Raises:
        ServiceConnectionError: If the stream cannot be opened
        StreamError: If the response stream fails
    """
    settings = session.settings
    pipe = AudioPipe()
    channel = RequestChannel()

    async def end_of_speech() -> None:
        session.mark_end_of_speech()
        await pipe.close(discard=True)

    sender = AudioSender(
        pipe=pipe,
        channel=channel,
        session=session,
        buffer_size=settings.buffer_size,
        limiter=RateLimiter(settings.rate),
    )
    renderer = TranscriptRenderer(
        out=out, verbose=settings.verbose, on_end_of_speech=end_of_speech
    )

    # The sender must be running before the stream opens: opening may wait
    # for the configuration message to reach the service.
    copy_task = asyncio.create_task(copy_to_pipe(source, pipe), name="audio-copy")
    send_task = asyncio.create_task(sender.run(), name="audio-send")

    try:
        responses = await session.open(client, channel)
        await renderer.run(responses)
    finally:
        for task in (send_task, copy_task):
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError, Exception):
                await task

    logger.debug(f"Sent {sender.chunks_sent} audio chunks")
    return renderer


async def recognize_once(
    client: speech.SpeechAsyncClient,
    session: RecognitionSession,
    audio: bytes,
) -> list[str]:
    """
    Recognize a complete recording in one request.

    Args:
        client: Speech client
        session: Session holding the settings
        audio: Whole recording as raw PCM

    Returns:
        Every alternative transcript of every result, in order

    Raises:
        StreamError: If the request fails
    """
    try:
        response = await client.recognize(
            config=session.recognition_config(),
            audio=speech.RecognitionAudio(content=audio),
        )
    except api_exceptions.GoogleAPIError as e:
        raise StreamError(f"recognition failed: {e}") from e

    return [alt.transcript for result in response.results for alt in result.alternatives]
