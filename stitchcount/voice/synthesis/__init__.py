"""Speech synthesis capabilities."""

from stitchcount.voice.synthesis.base import BaseSynthesizer, SpeechOptions

__all__ = [
    "BaseSynthesizer",
    "SpeechOptions",
]
