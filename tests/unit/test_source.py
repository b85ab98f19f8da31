"""
Unit tests for speechtotext.audio.source module.
"""

import asyncio
import io

import pytest

from speechtotext.audio.pipe import AudioPipe
from speechtotext.audio.source import copy_to_pipe
from speechtotext.errors import EndOfStream


class FailingSource:
    """Binary stream that fails on the first read."""

    def read(self, size=-1):
        raise OSError("stdin went away")


class TestCopyToPipe:
    """Tests for copy_to_pipe function."""

    @pytest.mark.asyncio
    async def test_copies_everything_then_closes(self):
        """All input reaches the pipe, followed by end of stream."""
        pipe = AudioPipe()
        copied = await copy_to_pipe(io.BytesIO(b"z" * 100), pipe)

        assert copied == 100
        assert pipe.closed is True
        assert await pipe.read_exactly(100) == b"z" * 100
        with pytest.raises(EndOfStream):
            await pipe.read_exactly(1)

    @pytest.mark.asyncio
    async def test_backpressure_with_small_pipe(self):
        """Input larger than the pipe limit is copied as the reader drains it."""
        pipe = AudioPipe(limit=16)
        copy_task = asyncio.create_task(copy_to_pipe(io.BytesIO(b"q" * 256), pipe, chunk_size=16))

        received = b""
        for _ in range(16):
            received += await asyncio.wait_for(pipe.read_exactly(16), timeout=5.0)

        assert received == b"q" * 256
        assert await asyncio.wait_for(copy_task, timeout=5.0) == 256

    @pytest.mark.asyncio
    async def test_empty_input(self):
        """Empty input closes the pipe straight away."""
        pipe = AudioPipe()
        assert await copy_to_pipe(io.BytesIO(b""), pipe) == 0
        assert pipe.closed is True

    @pytest.mark.asyncio
    async def test_read_error_propagates(self):
        """A failing input raises and closes the pipe with the error."""
        pipe = AudioPipe()

        with pytest.raises(OSError, match="stdin went away"):
            await copy_to_pipe(FailingSource(), pipe)

        with pytest.raises(OSError, match="stdin went away"):
            await pipe.read_exactly(1)

    @pytest.mark.asyncio
    async def test_stops_quietly_when_pipe_closed(self):
        """Closing the pipe underneath the copy ends it without error."""
        pipe = AudioPipe(limit=4)
        await pipe.close(discard=True)

        assert await asyncio.wait_for(copy_to_pipe(io.BytesIO(b"x" * 64), pipe), timeout=5.0) == 0
