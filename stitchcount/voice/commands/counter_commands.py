"""Counter voice command handlers.

Each handler computes the new value for one counter and the sentence to
speak back. Nothing is persisted here; the caller writes the value.
"""

from __future__ import annotations

import logging

from stitchcount.voice.models import (
    ActionType,
    CommandResult,
    CounterSnapshot,
    Decrement,
    Increment,
    ParsedCommand,
    Set,
)

logger = logging.getLogger(__name__)


def _progress(counter: CounterSnapshot, value: int) -> str:
    if counter.target is None:
        return f"{counter.label} is now {value}."
    if value >= counter.target:
        return f"{counter.label} is now {value}. Target of {counter.target} reached!"
    return f"{counter.label} is now {value} of {counter.target}."


def handle_increment(command: ParsedCommand, counter: CounterSnapshot) -> CommandResult:
    """Add to a counter."""
    action = command.action
    amount = action.amount if isinstance(action, Increment) else 1
    value = counter.value + amount

    return CommandResult(
        success=True,
        message=_progress(counter, value),
        action=ActionType.INCREMENT,
        counter_id=counter.id,
        value=value,
    )


def handle_decrement(command: ParsedCommand, counter: CounterSnapshot) -> CommandResult:
    """Subtract from a counter, stopping at zero."""
    action = command.action
    amount = action.amount if isinstance(action, Decrement) else 1
    value = max(0, counter.value - amount)

    if counter.value == 0:
        message = f"{counter.label} is already at 0."
    else:
        message = _progress(counter, value)
    if counter.value - amount < 0:
        logger.debug("Decrement of %s floored at zero", counter.id)

    return CommandResult(
        success=True,
        message=message,
        action=ActionType.DECREMENT,
        counter_id=counter.id,
        value=value,
    )


def handle_set(command: ParsedCommand, counter: CounterSnapshot) -> CommandResult:
    """Jump a counter to a spoken value."""
    action = command.action
    # Parsed transcripts never carry a sign; negatives only arrive from a
    # ParsedCommand built directly by the caller.
    if not isinstance(action, Set) or action.value < 0:
        return CommandResult(
            success=False,
            message="Counters can't go below zero.",
            action=ActionType.SET,
            counter_id=counter.id,
            error="invalid_value",
        )

    return CommandResult(
        success=True,
        message=_progress(counter, action.value),
        action=ActionType.SET,
        counter_id=counter.id,
        value=action.value,
    )


def handle_reset(command: ParsedCommand, counter: CounterSnapshot) -> CommandResult:
    """Put a counter back to zero."""
    return CommandResult(
        success=True,
        message=f"{counter.label} reset to 0.",
        action=ActionType.RESET,
        counter_id=counter.id,
        value=0,
    )


def handle_read(command: ParsedCommand, counter: CounterSnapshot) -> CommandResult:
    """Report a counter's value without changing it."""
    if counter.target is not None:
        message = f"{counter.label} is at {counter.value} of {counter.target}."
    else:
        message = f"{counter.label} is at {counter.value}."

    return CommandResult(
        success=True,
        message=message,
        action=ActionType.READ,
        counter_id=counter.id,
        value=counter.value,
    )
