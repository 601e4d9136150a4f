"""Counter command handlers."""

from stitchcount.voice.commands.counter_commands import (
    handle_decrement,
    handle_increment,
    handle_read,
    handle_reset,
    handle_set,
)

__all__ = [
    "handle_decrement",
    "handle_increment",
    "handle_read",
    "handle_reset",
    "handle_set",
]
