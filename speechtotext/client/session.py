"""
Recognition Session

Holds the configuration of the one conversation with the speech service and
opens the bidirectional stream for it.
"""

import logging
from collections.abc import AsyncIterable

from google.api_core import exceptions as api_exceptions
from google.auth import exceptions as auth_exceptions
from google.cloud import speech

from ..config import StreamSettings
from ..errors import ServiceConnectionError
from .channel import RequestChannel

logger = logging.getLogger(__name__)


class RecognitionSession:
    """
    One streaming recognition conversation.

    Attributes:
        settings: Settings the session was created from
        end_of_speech: Set once the service reports the end of speech
    """

    def __init__(self, settings: StreamSettings):
        self.settings = settings
        self.end_of_speech = False

    def recognition_config(self) -> speech.RecognitionConfig:
        """Audio format and language of the session."""
        return speech.RecognitionConfig(
            encoding=speech.RecognitionConfig.AudioEncoding.LINEAR16,
            sample_rate_hertz=self.settings.sample_rate_hertz,
            language_code=self.settings.language_code,
        )

    def config_request(self) -> speech.StreamingRecognizeRequest:
        """The configuration message that must precede all audio."""
        return speech.StreamingRecognizeRequest(
            streaming_config=speech.StreamingRecognitionConfig(
                config=self.recognition_config(),
                interim_results=True,
                single_utterance=self.settings.single_utterance,
            )
        )

    async def open(
        self, client: speech.SpeechAsyncClient, channel: RequestChannel
    ) -> AsyncIterable[speech.StreamingRecognizeResponse]:
        """
        Open the stream with channel as its request iterator.

        Raises:
            ServiceConnectionError: If the stream cannot be opened
        """
        try:
            return await client.streaming_recognize(requests=channel)
        except api_exceptions.GoogleAPIError as e:
            raise ServiceConnectionError(f"cannot open recognition stream: {e}") from e

    def mark_end_of_speech(self) -> None:
        self.end_of_speech = True


def create_client(settings: StreamSettings, credentials) -> speech.SpeechAsyncClient:
    """
    Create the async speech client for the configured endpoint.

    Raises:
        ServiceConnectionError: If the client cannot be constructed
    """
    logger.debug(f"Connecting to {settings.endpoint}")
    try:
        return speech.SpeechAsyncClient(
            credentials=credentials,
            client_options={"api_endpoint": settings.endpoint},
        )
    except (api_exceptions.GoogleAPIError, auth_exceptions.GoogleAuthError) as e:
        raise ServiceConnectionError(f"cannot connect to {settings.endpoint}: {e}") from e
