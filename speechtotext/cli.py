"""
speechtotext command line

Streams raw 16 kHz LINEAR16 audio from stdin to the speech service and prints
a live-updating transcript.

Usage:
    sox -d -t raw -r 16000 -e signed -b 16 -c 1 - | speechtotext -key key.json
    speechtotext -key key.json -rate 320ms < recording.raw
    speechtotext -key key.json -sync < recording.raw
"""

import argparse
import asyncio
import logging
import sys

from . import __version__
from .audio import stdin_source
from .client import RecognitionSession, create_client, recognize_once, stream_transcripts
from .config import DEFAULT_BUFFER_SIZE, DEFAULT_RATE, StreamSettings, load_credentials
from .errors import SpeechToTextError
from .utils import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Command-line parser. Flags keep their single-dash spelling."""
    parser = argparse.ArgumentParser(
        prog="speechtotext",
        description="Stream audio from stdin to the speech service and print live transcripts",
    )
    parser.add_argument(
        "-key", "--key", default="", help="Path to a service account key file ($SPEECH_KEY_FILE)"
    )
    parser.add_argument(
        "-bufSize",
        "--buf-size",
        dest="buf_size",
        type=int,
        default=DEFAULT_BUFFER_SIZE,
        help=f"Size in bytes of each audio chunk (default: {DEFAULT_BUFFER_SIZE})",
    )
    parser.add_argument(
        "-rate",
        "--rate",
        default=DEFAULT_RATE,
        help=f"Interval between audio chunks, e.g. 1ms, 250ms, 1s (default: {DEFAULT_RATE})",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Show full response details"
    )
    parser.add_argument(
        "-language", "--language", default="", help="Recognition language code (default: en-US)"
    )
    parser.add_argument(
        "-single",
        "--single-utterance",
        dest="single",
        action="store_true",
        help="Stop listening when the service detects the end of speech",
    )
    parser.add_argument(
        "-endpoint", "--endpoint", default="", help="Speech service host:port ($SPEECH_ENDPOINT)"
    )
    parser.add_argument(
        "-sync",
        "--sync",
        action="store_true",
        help="Read all input first and recognize it in a single request",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


async def run(settings: StreamSettings, sync: bool = False) -> None:
    """
    Run one recognition session against the service.

    Raises:
        SpeechToTextError: On any unrecoverable failure
    """
    credentials = load_credentials(settings.key_path)
    client = create_client(settings, credentials)
    session = RecognitionSession(settings)

    if sync:
        audio = await asyncio.to_thread(stdin_source().read)
        for transcript in await recognize_once(client, session, audio):
            print(transcript)
        return

    await stream_transcripts(client, session, stdin_source())


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(level="DEBUG" if args.debug else None)

    try:
        settings = StreamSettings.from_args(args)
        asyncio.run(run(settings, sync=args.sync))
    except SpeechToTextError as e:
        logger.error(e)
        return 1
    except KeyboardInterrupt:
        return 130

    return 0


if __name__ == "__main__":
    sys.exit(main())
