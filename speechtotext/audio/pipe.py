"""
Audio Pipe

Bounded single-producer/single-consumer byte channel between the input copy
task and the sender. Readers ask for an exact number of bytes; closing the
pipe wakes every waiter immediately.
"""

import asyncio
import logging

from ..errors import EndOfStream, PipeClosedError

logger = logging.getLogger(__name__)

DEFAULT_PIPE_LIMIT = 64 * 1024  # bytes buffered before writers wait


class AudioPipe:
    """
    Async byte pipe with an explicit end-of-stream signal.

    Usage:
        pipe = AudioPipe()

        # producer
        await pipe.write(data)
        await pipe.close()

        # consumer
        try:
            chunk = await pipe.read_exactly(10240)
        except EndOfStream as eos:
            leftover = eos.partial
    """

    def __init__(self, limit: int = DEFAULT_PIPE_LIMIT):
        """
        Initialize the pipe.

        Args:
            limit: Buffered byte count at which writers start waiting
        """
        self._buffer = bytearray()
        self._limit = limit
        self._wanted = 0
        self._error: BaseException | None = None
        self._closed = False
        self._cond = asyncio.Condition()

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def buffered(self) -> int:
        """Number of bytes waiting to be read."""
        return len(self._buffer)

    def _full(self) -> bool:
        # A pending read larger than the limit raises the limit for its duration
        return len(self._buffer) >= max(self._limit, self._wanted)

    async def write(self, data: bytes) -> int:
        """
        Append data to the pipe, waiting while the buffer is full.

        Returns:
            Number of bytes written

        Raises:
            PipeClosedError: If the pipe is closed before the data fits
        """
        async with self._cond:
            await self._cond.wait_for(lambda: self._closed or not self._full())
            if self._closed:
                raise PipeClosedError("write on closed pipe")
            self._buffer.extend(data)
            self._cond.notify_all()
        return len(data)

    async def read_exactly(self, n: int) -> bytes:
        """
        Read exactly n bytes.

        Raises:
            EndOfStream: Pipe closed with fewer than n bytes left; carries the leftover
            Exception: The error the pipe was closed with, if one was given
        """
        async with self._cond:
            self._wanted = n
            self._cond.notify_all()
            try:
                await self._cond.wait_for(lambda: self._closed or len(self._buffer) >= n)
            finally:
                self._wanted = 0

            if len(self._buffer) >= n:
                chunk = bytes(self._buffer[:n])
                del self._buffer[:n]
                self._cond.notify_all()
                return chunk

            partial = bytes(self._buffer)
            self._buffer.clear()
            if self._error is not None:
                raise self._error
            raise EndOfStream(partial)

    async def close(self, error: BaseException | None = None, discard: bool = False) -> None:
        """
        Close the pipe. The first close wins; later calls are no-ops.

        Args:
            error: Raised to readers instead of EndOfStream once the pipe runs dry
            discard: Drop buffered bytes so the next read fails immediately
        """
        async with self._cond:
            if self._closed:
                return
            self._closed = True
            self._error = error
            if discard and self._buffer:
                logger.debug(f"Discarding {len(self._buffer)} buffered bytes")
                self._buffer.clear()
            self._cond.notify_all()
