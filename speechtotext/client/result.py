"""
Transcript Update Data Class

Flattens one StreamingRecognizeResponse into the fields the renderer needs.
"""

from dataclasses import dataclass

from google.cloud import speech

# Stability strictly between 0.0 and this value marks a low-confidence interim result
LOW_STABILITY_THRESHOLD = 0.6

END_OF_SPEECH = speech.StreamingRecognizeResponse.SpeechEventType.END_OF_SINGLE_UTTERANCE


@dataclass
class TranscriptUpdate:
    """
    One inbound transcript update.

    Attributes:
        text: Transcript of the first alternative of the first result
        stability: Service estimate (0-1) that an interim result will not change
        is_final: Whether the first result is final
        has_results: Whether the response carried any results
        end_of_speech: Whether the service reported the end of speech
    """

    text: str = ""
    stability: float = 0.0
    is_final: bool = False
    has_results: bool = False
    end_of_speech: bool = False

    @classmethod
    def from_response(cls, response: speech.StreamingRecognizeResponse) -> "TranscriptUpdate":
        """Create an update from a streaming response."""
        end_of_speech = response.speech_event_type == END_OF_SPEECH
        if not response.results:
            return cls(end_of_speech=end_of_speech)

        result = response.results[0]
        text = result.alternatives[0].transcript if result.alternatives else ""
        return cls(
            text=text,
            stability=result.stability,
            is_final=result.is_final,
            has_results=True,
            end_of_speech=end_of_speech,
        )

    @property
    def is_low_confidence(self) -> bool:
        """True if stability is in the open interval (0.0, 0.6)."""
        return 0.0 < self.stability < LOW_STABILITY_THRESHOLD

    def __str__(self) -> str:
        status = "final" if self.is_final else "partial"
        return f"TranscriptUpdate({status}: {self.text[:50]})"
