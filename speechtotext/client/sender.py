"""
Audio Sender

Sends the session configuration, then paced fixed-size audio chunks, over
the outbound request channel. Any read or send failure ends the loop and
closes the channel.
"""

import logging

from google.cloud import speech

from ..audio import AudioPipe
from ..errors import ChannelClosedError, EndOfStream
from .channel import RequestChannel
from .limiter import RateLimiter
from .session import RecognitionSession

logger = logging.getLogger(__name__)


class AudioSender:
    """
    Rate-limited producer for one recognition stream.

    Every audio-content message is exactly buffer_size bytes. A trailing
    chunk shorter than that is dropped when the input ends.
    """

    def __init__(
        self,
        pipe: AudioPipe,
        channel: RequestChannel,
        session: RecognitionSession,
        buffer_size: int,
        limiter: RateLimiter,
    ):
        """
        Initialize the sender.

        Args:
            pipe: Audio source to read chunks from
            channel: Outbound request channel
            session: Session providing the configuration message
            buffer_size: Bytes per audio-content message
            limiter: Paces the audio sends
        """
        self.pipe = pipe
        self.channel = channel
        self.session = session
        self.buffer_size = buffer_size
        self.limiter = limiter
        self.chunks_sent = 0

    async def run(self) -> int:
        """
        Run the send loop until the input ends or a send fails.

        Returns:
            Number of audio-content messages sent
        """
        try:
            await self.channel.send(self.session.config_request())
            while True:
                await self.limiter.wait()
                chunk = await self.pipe.read_exactly(self.buffer_size)
                await self.channel.send(speech.StreamingRecognizeRequest(audio_content=chunk))
                self.chunks_sent += 1
        except EndOfStream as eos:
            if eos.partial:
                logger.debug(f"Dropping trailing partial chunk of {len(eos.partial)} bytes")
            logger.debug(f"Audio input ended after {self.chunks_sent} chunks")
        except Exception as e:
            logger.debug(f"Send loop stopped after {self.chunks_sent} chunks: {e}")
        finally:
            self._close_channel()

        return self.chunks_sent

    def _close_channel(self) -> None:
        try:
            self.channel.close()
        except ChannelClosedError as e:
            logger.warning(f"Issue closing stream: {e}")
