"""
Audio Source

Copies raw audio from a blocking binary stream (normally stdin) into an
AudioPipe. Reads run on a daemon thread so a stalled input never blocks the
event loop or interpreter exit.
"""

import asyncio
import logging
import sys
import threading
from concurrent.futures import CancelledError
from typing import BinaryIO

from ..errors import PipeClosedError
from .pipe import AudioPipe

logger = logging.getLogger(__name__)

COPY_CHUNK_SIZE = 32 * 1024


def stdin_source() -> BinaryIO:
    """
    Unbuffered binary standard input.

    A reader thread still blocked at exit must not hold the BufferedReader
    lock, or interpreter shutdown aborts.
    """
    return sys.stdin.buffer.raw


async def copy_to_pipe(
    source: BinaryIO,
    pipe: AudioPipe,
    chunk_size: int = COPY_CHUNK_SIZE,
) -> int:
    """
    Copy everything from source into pipe, then close the pipe.

    Each write waits until the pipe accepts the data, so a slow consumer
    holds back the reader thread. If the pipe is closed by someone else
    (end of speech) the copy stops without error.

    Args:
        source: Binary stream to read from
        pipe: Destination pipe
        chunk_size: Maximum bytes per read

    Returns:
        Total bytes copied into the pipe
    """
    loop = asyncio.get_running_loop()
    done: asyncio.Future[int] = loop.create_future()
    read = getattr(source, "read1", source.read)

    def finish(copied: int, error: BaseException | None) -> None:
        if done.done():
            return
        if error is not None:
            done.set_exception(error)
        else:
            done.set_result(copied)

    def pump() -> None:
        copied = 0
        error = None
        try:
            while True:
                data = read(chunk_size)
                if not data:
                    break
                asyncio.run_coroutine_threadsafe(pipe.write(data), loop).result()
                copied += len(data)
        except PipeClosedError:
            logger.debug("Pipe closed, stopping input copy")
        except (CancelledError, RuntimeError):
            # Event loop shut down or the copy task was cancelled
            return
        except Exception as e:
            error = e

        try:
            loop.call_soon_threadsafe(finish, copied, error)
        except RuntimeError:
            return

    threading.Thread(target=pump, name="audio-copy", daemon=True).start()

    try:
        copied = await done
    except Exception as e:
        logger.error(f"Input read failed: {e}")
        await pipe.close(error=e)
        raise

    await pipe.close()
    logger.debug(f"Input exhausted after {copied} bytes")
    return copied
