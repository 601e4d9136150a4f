"""Cancellable one-shot timers for the voice session.

The controller only ever asks for "call this after N seconds" and keeps the
returned handle so it can cancel it. Tests substitute a manual scheduler;
production uses ThreadingScheduler.
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from typing import Callable

logger = logging.getLogger(__name__)


class TimerHandle(ABC):
    """A pending callback that can be cancelled."""

    @abstractmethod
    def cancel(self) -> None:
        """Prevent the callback from running. Safe to call more than once."""

    @property
    @abstractmethod
    def cancelled(self) -> bool:
        """Whether cancel() has been called."""


class Scheduler(ABC):
    """Source of cancellable delayed callbacks."""

    @abstractmethod
    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        """Run callback once after delay seconds."""


class _ThreadTimerHandle(TimerHandle):
    def __init__(self, timer: threading.Timer):
        self._timer = timer
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True
        self._timer.cancel()

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class ThreadingScheduler(Scheduler):
    """Scheduler backed by daemon threading.Timer instances.

    Callbacks run on the timer thread. Exceptions are logged rather than
    allowed to kill the thread silently.
    """

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        def _run() -> None:
            try:
                callback()
            except Exception:
                logger.exception("Scheduled callback failed")

        timer = threading.Timer(delay, _run)
        timer.daemon = True
        timer.start()
        return _ThreadTimerHandle(timer)
