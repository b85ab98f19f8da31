"""
Test Fixtures

Response builders and a fake speech client that behaves like the streaming
call: it drains the request iterator on a background task and ends the
response stream once the client half-closes.
"""

import asyncio

import pytest
from google.cloud import speech

END_OF_SPEECH = speech.StreamingRecognizeResponse.SpeechEventType.END_OF_SINGLE_UTTERANCE


def build_response(
    text: str | None = None,
    stability: float = 0.0,
    is_final: bool = False,
    end_of_speech: bool = False,
) -> speech.StreamingRecognizeResponse:
    """Build a StreamingRecognizeResponse; text=None means no results."""
    kwargs = {}
    if text is not None:
        kwargs["results"] = [
            speech.StreamingRecognitionResult(
                alternatives=[speech.SpeechRecognitionAlternative(transcript=text)],
                stability=stability,
                is_final=is_final,
            )
        ]
    if end_of_speech:
        kwargs["speech_event_type"] = END_OF_SPEECH
    return speech.StreamingRecognizeResponse(**kwargs)


class FakeSpeechClient:
    """
    Stand-in for SpeechAsyncClient.

    Args:
        responses: Responses to yield, in order
        respond_after: Audio chunks to receive before the first response
        fail_with: Raised from the response stream after the responses
        open_error: Raised when the stream is opened
    """

    def __init__(self, responses=(), respond_after=0, fail_with=None, open_error=None):
        self.requests = []
        self.responses = list(responses)
        self.respond_after = respond_after
        self.fail_with = fail_with
        self.open_error = open_error
        self.audio_at_response = []
        self._consumer = None

    @property
    def audio_requests(self):
        return [r for r in self.requests if "audio_content" in r]

    @property
    def half_closed(self) -> bool:
        return self._consumer is not None and self._consumer.done()

    async def streaming_recognize(self, requests):
        if self.open_error is not None:
            raise self.open_error
        self._consumer = asyncio.create_task(self._consume(requests))
        return self._respond()

    async def _consume(self, requests):
        async for request in requests:
            self.requests.append(request)

    async def _respond(self):
        while len(self.audio_requests) < self.respond_after and not self._consumer.done():
            await asyncio.sleep(0.001)
        for response in self.responses:
            self.audio_at_response.append(len(self.audio_requests))
            yield response
        if self.fail_with is not None:
            raise self.fail_with
        await self._consumer


@pytest.fixture
def make_response():
    """Factory for StreamingRecognizeResponse messages."""
    return build_response


@pytest.fixture
def fake_client_class():
    """The FakeSpeechClient class."""
    return FakeSpeechClient
