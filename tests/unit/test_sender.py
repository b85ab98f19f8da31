"""
Unit tests for speechtotext.client.sender module.
"""

import logging
from unittest.mock import AsyncMock, MagicMock

import pytest

from speechtotext.audio.pipe import AudioPipe
from speechtotext.client.channel import RequestChannel
from speechtotext.client.limiter import RateLimiter
from speechtotext.client.sender import AudioSender
from speechtotext.client.session import RecognitionSession
from speechtotext.config import StreamSettings


def make_sender(pipe, channel, buffer_size=8, limiter=None):
    session = RecognitionSession(StreamSettings(key_path="key.json", buffer_size=buffer_size))
    return AudioSender(
        pipe=pipe,
        channel=channel,
        session=session,
        buffer_size=buffer_size,
        limiter=limiter or RateLimiter(0),
    )


async def filled_pipe(data: bytes) -> AudioPipe:
    pipe = AudioPipe()
    await pipe.write(data)
    await pipe.close()
    return pipe


async def drain(channel: RequestChannel) -> list:
    return [item async for item in channel]


class TestAudioSender:
    """Tests for AudioSender.run."""

    @pytest.mark.asyncio
    async def test_config_precedes_audio(self):
        """Exactly one configuration message comes first."""
        channel = RequestChannel(maxsize=100)
        sender = make_sender(await filled_pipe(b"a" * 24), channel)

        assert await sender.run() == 3

        requests = await drain(channel)
        assert "streaming_config" in requests[0]
        assert all("audio_content" in r for r in requests[1:])
        assert sum("streaming_config" in r for r in requests) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("buffer_size", [1, 7, 8, 100])
    async def test_audio_messages_are_full_buffers(self, buffer_size):
        """No audio-content message is shorter than the buffer size."""
        channel = RequestChannel(maxsize=1000)
        sender = make_sender(await filled_pipe(b"b" * 250), channel, buffer_size=buffer_size)

        sent = await sender.run()

        audio = [r.audio_content for r in await drain(channel) if "audio_content" in r]
        assert sent == 250 // buffer_size
        assert all(len(chunk) == buffer_size for chunk in audio)

    @pytest.mark.asyncio
    async def test_trailing_partial_chunk_is_dropped(self):
        """Current behavior: input that does not fill a buffer is not sent."""
        channel = RequestChannel(maxsize=100)
        sender = make_sender(await filled_pipe(b"c" * 8 + b"d" * 5), channel)

        assert await sender.run() == 1

        audio = [r.audio_content for r in await drain(channel) if "audio_content" in r]
        assert audio == [b"c" * 8]

    @pytest.mark.asyncio
    async def test_closes_channel_on_end_of_stream(self):
        """The channel is closed once the input ends."""
        channel = RequestChannel(maxsize=100)
        await make_sender(await filled_pipe(b""), channel).run()
        assert channel.closed is True

    @pytest.mark.asyncio
    async def test_waits_on_limiter_before_each_read(self):
        """The limiter is consulted once per read attempt."""
        channel = RequestChannel(maxsize=100)
        limiter = MagicMock(spec=RateLimiter)
        limiter.wait = AsyncMock()

        await make_sender(await filled_pipe(b"e" * 16), channel, limiter=limiter).run()

        # two full chunks plus the read that hit end of stream
        assert limiter.wait.await_count == 3

    @pytest.mark.asyncio
    async def test_send_error_stops_loop_and_closes(self):
        """A failing send ends the loop and still closes the channel."""
        channel = RequestChannel(maxsize=100)
        channel.send = AsyncMock(side_effect=[None, RuntimeError("stream broken")])
        sender = make_sender(await filled_pipe(b"f" * 32), channel)

        assert await sender.run() == 0
        assert channel.closed is True

    @pytest.mark.asyncio
    async def test_close_failure_is_logged(self, caplog):
        """Failing to close the channel is logged, not raised."""
        channel = RequestChannel(maxsize=100)
        channel.close()
        sender = make_sender(await filled_pipe(b"g" * 8), channel)

        with caplog.at_level(logging.WARNING, logger="speechtotext.client.sender"):
            assert await sender.run() == 0

        assert "Issue closing stream" in caplog.text
