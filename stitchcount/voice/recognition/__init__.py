"""Voice recognition capabilities."""

from stitchcount.voice.recognition.base import BaseRecognizer, RecognitionListeners

__all__ = [
    "BaseRecognizer",
    "RecognitionListeners",
]
