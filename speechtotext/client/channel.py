"""
Request Channel

Outbound message channel handed to the streaming call as its request
iterator. Closing the channel ends the iteration, which half-closes the
stream on the service side.
"""

import asyncio
import contextlib
from typing import Any

from ..errors import ChannelClosedError

_CLOSED = object()


class RequestChannel:
    """
    Async iterator of outbound requests with explicit close.

    Usage:
        channel = RequestChannel()
        responses = await client.streaming_recognize(requests=channel)

        await channel.send(request)
        channel.close()
    """

    def __init__(self, maxsize: int = 1):
        self._queue: asyncio.Queue = asyncio.Queue(maxsize=maxsize)
        self._closed = False
        self.sent = 0

    @property
    def closed(self) -> bool:
        return self._closed

    async def send(self, request: Any) -> None:
        """
        Queue a request, waiting until there is room for it.

        Raises:
            ChannelClosedError: If the channel was already closed
        """
        if self._closed:
            raise ChannelClosedError("send on closed channel")
        await self._queue.put(request)
        self.sent += 1

    def close(self) -> None:
        """
        Signal that no more requests will be sent.

        Never waits: requests already queued are still delivered before the
        iteration ends.

        Raises:
            ChannelClosedError: If the channel was already closed
        """
        if self._closed:
            raise ChannelClosedError("channel already closed")
        self._closed = True
        with contextlib.suppress(asyncio.QueueFull):
            self._queue.put_nowait(_CLOSED)

    def __aiter__(self) -> "RequestChannel":
        return self

    async def __anext__(self) -> Any:
        if self._closed and self._queue.empty():
            raise StopAsyncIteration
        item = await self._queue.get()
        if item is _CLOSED:
            raise StopAsyncIteration
        return item
