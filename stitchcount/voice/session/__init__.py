"""Voice session lifecycle and timers."""

from stitchcount.voice.session.controller import VoiceSessionController
from stitchcount.voice.session.scheduler import Scheduler, ThreadingScheduler, TimerHandle

__all__ = [
    "Scheduler",
    "ThreadingScheduler",
    "TimerHandle",
    "VoiceSessionController",
]
