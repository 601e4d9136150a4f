"""Voice command parsing: command detection, counter resolution, routing."""

from stitchcount.voice.parser.command_parser import parse_command
from stitchcount.voice.parser.command_router import CommandRouter, create_default_router
from stitchcount.voice.parser.entity_resolver import resolve_counter

__all__ = [
    "CommandRouter",
    "create_default_router",
    "parse_command",
    "resolve_counter",
]
