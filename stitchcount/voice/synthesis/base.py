"""Abstract base class for text-to-speech capabilities."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable


@dataclass
class SpeechOptions:
    """Voice settings passed to the synthesis engine."""

    language: str = "en"
    pitch: float = 1.0
    rate: float = 0.9

    def to_dict(self) -> dict[str, Any]:
        return {
            "language": self.language,
            "pitch": self.pitch,
            "rate": self.rate,
        }

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "SpeechOptions":
        return cls(
            language=config.get("language", "en"),
            pitch=float(config.get("pitch", 1.0)),
            rate=float(config.get("rate", 0.9)),
        )


class BaseSynthesizer(ABC):
    """Abstract base for all speech synthesis engines."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Engine identifier (e.g. 'expo', 'piper')."""

    @abstractmethod
    def speak(
        self,
        text: str,
        options: SpeechOptions,
        *,
        on_done: Callable[[], None] | None = None,
        on_stopped: Callable[[], None] | None = None,
        on_error: Callable[[str], None] | None = None,
    ) -> None:
        """Speak text, calling exactly one of the callbacks when finished."""

    def stop(self) -> None:
        """Interrupt any utterance in progress. Override if supported."""
