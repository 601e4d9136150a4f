"""Voice session lifecycle: listening → processing → speaking → idle.

The controller owns a single VoiceStatus and moves it in response to
recognizer events, synthesizer callbacks, and its own timers. It never
raises into the caller: capability failures are logged and surfaced through
``status``, ``error`` and ``error_kind``.

Transitions:
    idle       → listening   start()
    listening  → processing  recognizer on_end
    processing → idle        recognizer on_results (actionable command)
    processing → speaking    recognizer on_results (unrecognised command)
    any        → error       recognizer on_error; back to idle after 2s
    any        → idle        stop()
    any        → speaking    speak(); back to idle on done/stopped/error

After teardown() every late callback or timer is a silent no-op.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable

from stitchcount.voice import load_voice_config
from stitchcount.voice.models import ParsedCommand, VoiceErrorKind, VoiceStatus
from stitchcount.voice.parser.command_parser import parse_command
from stitchcount.voice.recognition.base import BaseRecognizer, RecognitionListeners
from stitchcount.voice.session.scheduler import Scheduler, ThreadingScheduler, TimerHandle
from stitchcount.voice.synthesis.base import BaseSynthesizer, SpeechOptions

logger = logging.getLogger(__name__)

AUTO_STOP_SECONDS = 5.0
ERROR_RECOVERY_SECONDS = 2.0
DEFAULT_LOCALE = "en-US"

UNRECOGNIZED_SPEECH = "Sorry, I didn't understand that command."
UNRECOGNIZED_ERROR = "Command not recognized"
UNSUPPORTED_ERROR = "Voice recognition not available on this device"
RECOGNITION_FAILED = "Speech recognition failed"
START_FAILED = "Failed to start listening"

CommandCallback = Callable[[ParsedCommand], None]


class VoiceSessionController:
    """Coordinates one recognizer and one synthesizer for counter commands.

    Args:
        recognizer: Speech-to-text capability. Listeners are registered on
            construction and removed by teardown().
        synthesizer: Text-to-speech capability used for feedback.
        on_command: Called with every actionable ParsedCommand.
        enabled: When False, start() and speak() do nothing.
        scheduler: Timer source; defaults to ThreadingScheduler.
        locale: Passed to recognizer.start().
        speech_options: Voice settings for synthesizer.speak().
    """

    def __init__(
        self,
        recognizer: BaseRecognizer,
        synthesizer: BaseSynthesizer,
        on_command: CommandCallback | None = None,
        *,
        enabled: bool = True,
        scheduler: Scheduler | None = None,
        locale: str = DEFAULT_LOCALE,
        speech_options: SpeechOptions | None = None,
        auto_stop_seconds: float = AUTO_STOP_SECONDS,
        error_recovery_seconds: float = ERROR_RECOVERY_SECONDS,
        unrecognized_message: str = UNRECOGNIZED_SPEECH,
    ):
        self._recognizer = recognizer
        self._synthesizer = synthesizer
        self._on_command = on_command
        self._enabled = enabled
        self._scheduler = scheduler or ThreadingScheduler()
        self._locale = locale
        self._speech_options = speech_options or SpeechOptions()
        self._auto_stop_seconds = auto_stop_seconds
        self._error_recovery_seconds = error_recovery_seconds
        self._unrecognized_message = unrecognized_message

        self._lock = threading.RLock()
        self._status = VoiceStatus.IDLE
        self._error: str | None = None
        self._error_kind: VoiceErrorKind | None = None
        self._auto_stop: TimerHandle | None = None
        self._error_recovery: TimerHandle | None = None
        self._utterance = 0
        self._torn_down = False
        self._is_supported = False

        self.refresh_support()
        self._recognizer.set_listeners(RecognitionListeners(
            on_start=self._handle_speech_start,
            on_end=self._handle_speech_end,
            on_results=self._handle_results,
            on_error=self._handle_error,
        ))

    @classmethod
    def from_config(
        cls,
        recognizer: BaseRecognizer,
        synthesizer: BaseSynthesizer,
        on_command: CommandCallback | None = None,
        *,
        config: dict[str, Any] | None = None,
        scheduler: Scheduler | None = None,
    ) -> VoiceSessionController:
        """Build a controller from args/voice.yaml (or an explicit dict)."""
        config = config or load_voice_config()
        session = config.get("session", {})
        return cls(
            recognizer,
            synthesizer,
            on_command,
            enabled=bool(session.get("enabled", True)),
            scheduler=scheduler,
            locale=config.get("recognition", {}).get("locale", DEFAULT_LOCALE),
            speech_options=SpeechOptions.from_config(config.get("synthesis", {})),
            auto_stop_seconds=float(session.get("auto_stop_seconds", AUTO_STOP_SECONDS)),
            error_recovery_seconds=float(
                session.get("error_recovery_seconds", ERROR_RECOVERY_SECONDS)
            ),
            unrecognized_message=config.get("messages", {}).get(
                "unrecognized", UNRECOGNIZED_SPEECH
            ),
        )

    # =========================================================================
    # Observable state
    # =========================================================================

    @property
    def status(self) -> VoiceStatus:
        return self._status

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def error_kind(self) -> VoiceErrorKind | None:
        return self._error_kind

    @property
    def is_supported(self) -> bool:
        return self._is_supported

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def torn_down(self) -> bool:
        return self._torn_down

    @property
    def message(self) -> str:
        """Hint to show next to the microphone button."""
        if self._is_supported:
            return "Tap and speak your command"
        return UNSUPPORTED_ERROR

    def refresh_support(self) -> bool:
        """Ask the recognizer whether it can run, and cache the answer."""
        try:
            self._is_supported = bool(self._recognizer.is_available())
        except Exception as e:
            logger.warning("Recognizer %s availability check failed: %s",
                           self._recognizer.name, e)
            self._is_supported = False
        return self._is_supported

    # =========================================================================
    # Commands
    # =========================================================================

    def start(self) -> None:
        """Begin a listening session.

        No-op (with an error set) when disabled or unsupported, and a plain
        no-op while a session is already listening or processing.
        """
        with self._lock:
            if self._torn_down:
                return

            if not self._enabled or not self._is_supported:
                self._set_error(UNSUPPORTED_ERROR, VoiceErrorKind.UNSUPPORTED)
                return

            if self._status in (VoiceStatus.LISTENING, VoiceStatus.PROCESSING):
                logger.debug("start() ignored, session already %s", self._status.value)
                return

            self._clear_error()
            self._cancel_error_recovery()
            self._status = VoiceStatus.LISTENING

            try:
                self._recognizer.start(self._locale)
            except Exception as e:
                logger.error("Failed to start voice recognition: %s", e)
                self._set_error(str(e) or START_FAILED, VoiceErrorKind.START_FAILURE)
                self._status = VoiceStatus.ERROR
                return

            # The recognizer may have reported an error or ended while starting
            if self._status != VoiceStatus.LISTENING:
                return

            self._cancel_auto_stop()
            self._auto_stop = self._scheduler.call_later(
                self._auto_stop_seconds, self._auto_stop_fired
            )

    def stop(self) -> None:
        """End the current session and return to idle."""
        with self._lock:
            if self._torn_down:
                return

            self._cancel_auto_stop()
            try:
                self._recognizer.stop()
            except Exception as e:
                logger.error("Failed to stop voice recognition: %s", e)

            if self._status == VoiceStatus.SPEAKING:
                try:
                    self._synthesizer.stop()
                except Exception as e:
                    logger.warning("Failed to stop speech: %s", e)

            self._status = VoiceStatus.IDLE

    def speak(self, text: str) -> None:
        """Speak feedback; status is speaking until the synthesizer finishes."""
        with self._lock:
            if self._torn_down or not self._enabled:
                return

            self._utterance += 1
            utterance = self._utterance
            self._status = VoiceStatus.SPEAKING

            def finished(*_args: Any) -> None:
                self._handle_speech_finished(utterance)

            try:
                self._synthesizer.speak(
                    text,
                    self._speech_options,
                    on_done=finished,
                    on_stopped=finished,
                    on_error=finished,
                )
            except Exception as e:
                logger.warning("Speech synthesis failed: %s", e)
                self._handle_speech_finished(utterance)

    def teardown(self) -> None:
        """Remove listeners and cancel timers. Safe to call repeatedly."""
        with self._lock:
            if self._torn_down:
                return
            self._torn_down = True

            self._cancel_auto_stop()
            self._cancel_error_recovery()

            if self._status in (VoiceStatus.LISTENING, VoiceStatus.PROCESSING):
                try:
                    self._recognizer.stop()
                except Exception as e:
                    logger.debug("Recognizer stop during teardown failed: %s", e)

            try:
                self._recognizer.remove_listeners()
            except Exception as e:
                logger.warning("Failed to remove recognizer listeners: %s", e)

            logger.debug("Voice session torn down in state %s", self._status.value)

    def __enter__(self) -> VoiceSessionController:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.teardown()

    # =========================================================================
    # Recognizer events
    # =========================================================================

    def _handle_speech_start(self) -> None:
        with self._lock:
            if self._torn_down or self._status != VoiceStatus.LISTENING:
                return
            self._clear_error()

    def _handle_speech_end(self) -> None:
        with self._lock:
            if self._torn_down or self._status != VoiceStatus.LISTENING:
                return
            self._cancel_auto_stop()
            self._status = VoiceStatus.PROCESSING

    def _handle_results(self, transcripts: list[str]) -> None:
        with self._lock:
            if self._torn_down:
                return
            if self._status not in (VoiceStatus.LISTENING, VoiceStatus.PROCESSING):
                logger.debug("Ignoring results while %s", self._status.value)
                return
            if not transcripts:
                return

            self._cancel_auto_stop()
            parsed = parse_command(transcripts[0])
            logger.info(
                "Voice command %s (confidence %.2f): %r",
                parsed.action.type.value, parsed.confidence, parsed.original_text,
            )

            if not parsed.is_actionable:
                self._set_error(UNRECOGNIZED_ERROR, VoiceErrorKind.UNRECOGNIZED)
                self.speak(self._unrecognized_message)
                if self._status in (VoiceStatus.LISTENING, VoiceStatus.PROCESSING):
                    self._status = VoiceStatus.IDLE
                return

            self._status = VoiceStatus.IDLE
            on_command = self._on_command

        if on_command is not None:
            try:
                on_command(parsed)
            except Exception:
                logger.exception("on_command handler failed for %r", parsed.original_text)

    def _handle_error(self, message: str) -> None:
        with self._lock:
            if self._torn_down:
                return

            logger.warning("Speech recognition error: %s", message)
            self._cancel_auto_stop()
            self._set_error(message or RECOGNITION_FAILED, VoiceErrorKind.TRANSIENT)
            self._status = VoiceStatus.ERROR

            self._cancel_error_recovery()
            self._error_recovery = self._scheduler.call_later(
                self._error_recovery_seconds, self._recover_from_error
            )

    # =========================================================================
    # Synthesizer and timer callbacks
    # =========================================================================

    def _handle_speech_finished(self, utterance: int) -> None:
        with self._lock:
            if self._torn_down:
                return
            if utterance != self._utterance or self._status != VoiceStatus.SPEAKING:
                return
            self._status = VoiceStatus.IDLE

    def _auto_stop_fired(self) -> None:
        with self._lock:
            if self._torn_down:
                return
            self._auto_stop = None
            logger.debug("Auto-stopping recognition after %.1fs", self._auto_stop_seconds)
            try:
                self._recognizer.stop()
            except Exception as e:
                logger.debug("Auto-stop failed: %s", e)

    def _recover_from_error(self) -> None:
        with self._lock:
            if self._torn_down:
                return
            self._error_recovery = None
            self._clear_error()
            self._status = VoiceStatus.IDLE

    # =========================================================================
    # Helpers (caller holds _lock)
    # =========================================================================

    def _set_error(self, message: str, kind: VoiceErrorKind) -> None:
        self._error = message
        self._error_kind = kind

    def _clear_error(self) -> None:
        self._error = None
        self._error_kind = None

    def _cancel_auto_stop(self) -> None:
        if self._auto_stop is not None:
            self._auto_stop.cancel()
            self._auto_stop = None

    def _cancel_error_recovery(self) -> None:
        if self._error_recovery is not None:
            self._error_recovery.cancel()
            self._error_recovery = None
