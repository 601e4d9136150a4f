"""Route parsed voice commands to counter handlers.

The router picks the target counter from the caller's snapshot and
dispatches the ParsedCommand to the handler registered for its action.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Callable

from stitchcount.voice.models import (
    ActionType,
    CommandResult,
    CounterSnapshot,
    ParsedCommand,
)
from stitchcount.voice.parser.command_parser import suggest_command
from stitchcount.voice.parser.entity_resolver import resolve_counter

logger = logging.getLogger(__name__)

# Handler type: function(parsed_command, counter) -> CommandResult
HandlerFn = Callable[[ParsedCommand, CounterSnapshot], CommandResult]


class CommandRouter:
    """Routes parsed voice commands to registered handlers."""

    def __init__(self):
        self._handlers: dict[ActionType, HandlerFn] = {}

    def register(self, action: ActionType, handler: HandlerFn) -> None:
        """Register a handler for an action type."""
        self._handlers[action] = handler

    def select_counter(
        self,
        command: ParsedCommand,
        counters: Sequence[CounterSnapshot],
        default_counter_id: str | None = None,
    ) -> CounterSnapshot | None:
        """Pick the counter a command applies to.

        A spoken name must resolve; without one the default counter is used,
        then the first counter in the list.
        """
        if not counters:
            return None

        by_id = {c.id: c for c in counters}
        name = getattr(command.action, "counter_name", None)

        if name:
            ref = resolve_counter([c.ref for c in counters], name)
            return by_id[ref.id] if ref else None

        if default_counter_id and default_counter_id in by_id:
            return by_id[default_counter_id]
        return counters[0]

    def route(
        self,
        command: ParsedCommand,
        counters: Sequence[CounterSnapshot],
        default_counter_id: str | None = None,
    ) -> CommandResult:
        """Resolve the target counter and run the matching handler."""
        action = command.action.type

        if not command.is_actionable:
            return CommandResult(
                success=False,
                message=suggest_command(command.original_text),
                action=ActionType.UNKNOWN,
                error="unrecognized_command",
            )

        if not counters:
            return CommandResult(
                success=False,
                message="There are no counters on this project yet.",
                action=action,
                error="no_counters",
            )

        counter = self.select_counter(command, counters, default_counter_id)
        if counter is None:
            name = getattr(command.action, "counter_name", None)
            return CommandResult(
                success=False,
                message=f"I couldn't find a counter called {name}.",
                action=action,
                error="counter_not_found",
            )

        handler = self._handlers.get(action)
        if not handler:
            return CommandResult(
                success=False,
                message=f"No handler for {action.value}.",
                action=action,
                counter_id=counter.id,
                error="no_handler",
            )

        try:
            result = handler(command, counter)
            result.action = action
        except Exception as e:
            logger.exception(f"Voice command handler failed: {e}")
            result = CommandResult(
                success=False,
                message="Something went wrong. Try again?",
                action=action,
                counter_id=counter.id,
                error=str(e),
            )

        logger.info(
            "Routed %s to counter %s: %s",
            action.value, counter.id, "ok" if result.success else result.error,
        )
        return result


def create_default_router() -> CommandRouter:
    """Create a router with all counter handlers registered."""
    from stitchcount.voice.commands.counter_commands import (
        handle_decrement,
        handle_increment,
        handle_read,
        handle_reset,
        handle_set,
    )

    router = CommandRouter()
    router.register(ActionType.INCREMENT, handle_increment)
    router.register(ActionType.DECREMENT, handle_decrement)
    router.register(ActionType.SET, handle_set)
    router.register(ActionType.RESET, handle_reset)
    router.register(ActionType.READ, handle_read)
    return router
