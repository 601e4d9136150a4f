"""Voice command data models.

Defines statuses, actions, and result types for the voice command pipeline:
    Transcript → ParsedCommand → (CounterRef) → CommandResult
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union


class VoiceStatus(str, Enum):
    """Lifecycle status of a voice session."""

    IDLE = "idle"
    LISTENING = "listening"
    PROCESSING = "processing"
    SPEAKING = "speaking"
    ERROR = "error"


class ActionType(str, Enum):
    """Counter operation requested by a voice command."""

    INCREMENT = "increment"
    DECREMENT = "decrement"
    SET = "set"
    RESET = "reset"
    READ = "read"
    UNKNOWN = "unknown"


class VoiceErrorKind(str, Enum):
    """Kinds of failure surfaced through the session's error state."""

    UNSUPPORTED = "unsupported"
    TRANSIENT = "transient"
    START_FAILURE = "start_failure"
    UNRECOGNIZED = "unrecognized"


# =============================================================================
# Command actions
# =============================================================================


@dataclass(frozen=True)
class Increment:
    counter_name: str | None = None
    amount: int = 1

    @property
    def type(self) -> ActionType:
        return ActionType.INCREMENT

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "counter_name": self.counter_name,
            "amount": self.amount,
        }


@dataclass(frozen=True)
class Decrement:
    counter_name: str | None = None
    amount: int = 1

    @property
    def type(self) -> ActionType:
        return ActionType.DECREMENT

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "counter_name": self.counter_name,
            "amount": self.amount,
        }


@dataclass(frozen=True)
class Set:
    value: int
    counter_name: str | None = None

    @property
    def type(self) -> ActionType:
        return ActionType.SET

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "counter_name": self.counter_name,
            "value": self.value,
        }


@dataclass(frozen=True)
class Reset:
    counter_name: str | None = None

    @property
    def type(self) -> ActionType:
        return ActionType.RESET

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type.value, "counter_name": self.counter_name}


@dataclass(frozen=True)
class Read:
    counter_name: str | None = None

    @property
    def type(self) -> ActionType:
        return ActionType.READ

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type.value, "counter_name": self.counter_name}


@dataclass(frozen=True)
class Unknown:
    text: str

    @property
    def type(self) -> ActionType:
        return ActionType.UNKNOWN

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type.value, "text": self.text}


CommandAction = Union[Increment, Decrement, Set, Reset, Read, Unknown]


@dataclass(frozen=True)
class ParsedCommand:
    """A transcript parsed into a counter action."""

    action: CommandAction
    confidence: float = 0.0
    original_text: str = ""

    @property
    def is_actionable(self) -> bool:
        return not isinstance(self.action, Unknown)

    def to_dict(self) -> dict[str, Any]:
        return {
            "action": self.action.to_dict(),
            "confidence": self.confidence,
            "original_text": self.original_text,
        }


# =============================================================================
# Counters
# =============================================================================


@dataclass(frozen=True)
class CounterRef:
    """Read-only projection of a counter, supplied by the caller."""

    id: str
    label: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "label": self.label}


@dataclass(frozen=True)
class CounterSnapshot:
    """A counter with its current value, as seen at routing time."""

    id: str
    label: str
    value: int = 0
    target: int | None = None

    @property
    def ref(self) -> CounterRef:
        return CounterRef(id=self.id, label=self.label)


@dataclass
class CommandResult:
    """Result from applying a voice command to a counter snapshot."""

    success: bool
    message: str
    action: ActionType = ActionType.UNKNOWN
    counter_id: str | None = None
    value: int | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "message": self.message,
            "action": self.action.value,
            "counter_id": self.counter_id,
            "value": self.value,
            "error": self.error,
        }
