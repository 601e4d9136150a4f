"""Abstract base class for speech recognition capabilities."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable


@dataclass
class RecognitionListeners:
    """Callbacks a recognizer invokes as a listening session progresses."""

    on_start: Callable[[], None] | None = None
    on_end: Callable[[], None] | None = None
    on_results: Callable[[list[str]], None] | None = None
    on_error: Callable[[str], None] | None = None


class BaseRecognizer(ABC):
    """Abstract base for all speech-to-text engines.

    Implementations deliver events by calling the ``emit_*`` helpers, which
    forward to whatever listeners are currently registered and do nothing
    once they have been removed.
    """

    def __init__(self) -> None:
        self._listeners: RecognitionListeners | None = None

    @property
    @abstractmethod
    def name(self) -> str:
        """Engine identifier (e.g. 'android', 'whisper')."""

    @abstractmethod
    def is_available(self) -> bool:
        """Whether recognition can run on this device."""

    @abstractmethod
    def start(self, locale: str = "en-US") -> None:
        """Begin listening. May raise if the engine refuses to start."""

    @abstractmethod
    def stop(self) -> None:
        """Stop listening and flush any pending result."""

    def set_listeners(self, listeners: RecognitionListeners) -> None:
        self._listeners = listeners

    def remove_listeners(self) -> None:
        self._listeners = None

    @property
    def has_listeners(self) -> bool:
        return self._listeners is not None

    def emit_start(self) -> None:
        if self._listeners and self._listeners.on_start:
            self._listeners.on_start()

    def emit_end(self) -> None:
        if self._listeners and self._listeners.on_end:
            self._listeners.on_end()

    def emit_results(self, transcripts: list[str]) -> None:
        if self._listeners and self._listeners.on_results:
            self._listeners.on_results(transcripts)

    def emit_error(self, message: str) -> None:
        if self._listeners and self._listeners.on_error:
            self._listeners.on_error(message)
