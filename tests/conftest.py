"""Shared test fixtures for stitchcount tests.

This module provides common fixtures used across all test modules:
- Fake recognition and synthesis capabilities
- A manually advanced scheduler for timer-driven transitions
- Standard counter snapshots

Usage:
    def test_something(controller, recognizer, scheduler):
        controller.start()
        scheduler.advance(5)
        ...
"""

from __future__ import annotations

from collections.abc import Generator
from typing import Callable

import pytest

from stitchcount.voice.models import CounterRef, CounterSnapshot
from stitchcount.voice.recognition.base import BaseRecognizer, RecognitionListeners
from stitchcount.voice.session.controller import VoiceSessionController
from stitchcount.voice.session.scheduler import Scheduler, TimerHandle
from stitchcount.voice.synthesis.base import BaseSynthesizer, SpeechOptions


# ─────────────────────────────────────────────────────────────────────────────
# Fake Capabilities
# ─────────────────────────────────────────────────────────────────────────────


class FakeRecognizer(BaseRecognizer):
    """Recognizer driven entirely by the test."""

    def __init__(self, available: bool = True):
        super().__init__()
        self.available = available
        self.start_error: Exception | None = None
        self.stop_error: Exception | None = None
        self.start_calls: list[str] = []
        self.stop_calls = 0
        self.registered: RecognitionListeners | None = None

    @property
    def name(self) -> str:
        return "fake"

    def set_listeners(self, listeners: RecognitionListeners) -> None:
        # Keep our own reference so tests can replay callbacks after removal
        self.registered = listeners
        super().set_listeners(listeners)

    def is_available(self) -> bool:
        return self.available

    def start(self, locale: str = "en-US") -> None:
        if self.start_error:
            raise self.start_error
        self.start_calls.append(locale)

    def stop(self) -> None:
        self.stop_calls += 1
        if self.stop_error:
            raise self.stop_error


class FakeSynthesizer(BaseSynthesizer):
    """Synthesizer that records utterances and finishes on demand."""

    def __init__(self):
        self.spoken: list[tuple[str, SpeechOptions]] = []
        self._pending: list[dict[str, Callable | None]] = []
        self.stop_calls = 0

    @property
    def name(self) -> str:
        return "fake"

    def speak(self, text, options, *, on_done=None, on_stopped=None, on_error=None) -> None:
        self.spoken.append((text, options))
        self._pending.append({"done": on_done, "stopped": on_stopped, "error": on_error})

    def stop(self) -> None:
        self.stop_calls += 1

    @property
    def texts(self) -> list[str]:
        return [text for text, _ in self.spoken]

    def finish(self, how: str = "done", index: int = -1) -> None:
        """Fire one of the callbacks registered for an utterance."""
        callback = self._pending[index][how]
        if how == "error":
            callback("synthesis failed")
        else:
            callback()


class _ManualHandle(TimerHandle):
    def __init__(self, due: float, callback: Callable[[], None]):
        self.due = due
        self.callback = callback
        self._cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class ManualScheduler(Scheduler):
    """Scheduler whose clock only moves when advance() is called."""

    def __init__(self):
        self.now = 0.0
        self.handles: list[_ManualHandle] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        handle = _ManualHandle(self.now + delay, callback)
        self.handles.append(handle)
        return handle

    @property
    def pending(self) -> list[_ManualHandle]:
        return [h for h in self.handles if not h.cancelled and not h.fired]

    def advance(self, seconds: float) -> None:
        self.now += seconds
        for handle in sorted(self.pending, key=lambda h: h.due):
            if handle.due <= self.now and not handle.cancelled:
                handle.fired = True
                handle.callback()


# ─────────────────────────────────────────────────────────────────────────────
# Session Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def recognizer() -> FakeRecognizer:
    return FakeRecognizer()


@pytest.fixture
def synthesizer() -> FakeSynthesizer:
    return FakeSynthesizer()


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def commands() -> list:
    """Collects every command forwarded to on_command."""
    return []


@pytest.fixture
def controller(
    recognizer, synthesizer, scheduler, commands
) -> Generator[VoiceSessionController, None, None]:
    """Enabled controller wired to the fakes.

    Torn down after the test.
    """
    ctrl = VoiceSessionController(
        recognizer,
        synthesizer,
        on_command=commands.append,
        scheduler=scheduler,
    )
    yield ctrl
    ctrl.teardown()


# ─────────────────────────────────────────────────────────────────────────────
# Counter Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def sample_counters() -> list[CounterRef]:
    """Counters as a typical amigurumi project would have them."""
    return [
        CounterRef(id="1", label="Row Counter"),
        CounterRef(id="2", label="Round"),
        CounterRef(id="3", label="Stitches"),
    ]


@pytest.fixture
def sample_snapshots() -> list[CounterSnapshot]:
    """Counters with current values.

    Returns:
        list of CounterSnapshot, rows first
    """
    return [
        CounterSnapshot(id="rows", label="Row Counter", value=11, target=40),
        CounterSnapshot(id="rounds", label="Round", value=3),
        CounterSnapshot(id="sts", label="Stitch Count", value=0),
    ]
