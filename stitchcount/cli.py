#!/usr/bin/env python3
"""
stitchcount Command Line Interface

Main entry point for the `stitchcount` command. Useful for checking how a
phrase will be understood without a microphone.

Usage:
    stitchcount parse "add 5 rows"                     # Show the parsed command
    stitchcount resolve row --counter 1="Row Counter"  # Show which counter a name hits
    stitchcount route "add 2" --counter 1="Rows:10"    # Apply a command to counters
    stitchcount commands                               # List example phrases
    stitchcount --version                              # Show version
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from stitchcount import __version__
from stitchcount.logging_config import setup_logging
from stitchcount.voice.models import CounterRef, CounterSnapshot
from stitchcount.voice.parser.command_parser import AVAILABLE_COMMANDS, parse_command
from stitchcount.voice.parser.command_router import create_default_router
from stitchcount.voice.parser.entity_resolver import resolve_counter

logger = logging.getLogger(__name__)


def _parse_counter_arg(raw: str) -> CounterSnapshot:
    """Parse ``ID=LABEL[:VALUE[:TARGET]]``."""
    if "=" not in raw:
        raise argparse.ArgumentTypeError(f"expected ID=LABEL, got {raw!r}")
    counter_id, rest = raw.split("=", 1)
    parts = rest.split(":")
    try:
        value = int(parts[1]) if len(parts) > 1 and parts[1] else 0
        target = int(parts[2]) if len(parts) > 2 and parts[2] else None
    except ValueError:
        raise argparse.ArgumentTypeError(f"counter value must be a number: {raw!r}")
    return CounterSnapshot(id=counter_id, label=parts[0], value=value, target=target)


def cmd_parse(args) -> int:
    """Handle parse subcommand."""
    parsed = parse_command(args.text)
    logger.debug("Parsed %r as %s", args.text, parsed.action.type.value)

    if args.json:
        print(json.dumps(parsed.to_dict(), indent=2))
    else:
        action = parsed.action.to_dict()
        kind = action.pop("type")
        details = ", ".join(f"{k}={v!r}" for k, v in action.items())
        print(f"{kind} ({details}) confidence={parsed.confidence}")
    return 0 if parsed.is_actionable else 1


def cmd_resolve(args) -> int:
    """Handle resolve subcommand."""
    refs = [CounterRef(id=c.id, label=c.label) for c in args.counter]
    found = resolve_counter(refs, args.query)

    if args.json:
        print(json.dumps(found.to_dict() if found else None, indent=2))
    elif found:
        print(f"{found.id}: {found.label}")
    else:
        print("No matching counter.")
    return 0 if found else 1


def cmd_route(args) -> int:
    """Handle route subcommand."""
    parsed = parse_command(args.text)
    result = create_default_router().route(parsed, args.counter, args.default)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(result.message)
    return 0 if result.success else 1


def cmd_commands(args) -> int:
    """Handle commands subcommand."""
    if args.json:
        print(json.dumps(AVAILABLE_COMMANDS, indent=2))
        return 0

    for group, commands in AVAILABLE_COMMANDS.items():
        print(f"{group}:")
        for entry in commands:
            print(f"  {entry['command']:<32} e.g. \"{entry['example']}\"")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stitchcount",
        description="Voice command tools for row and stitch counters",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--log-level", default=None, help="Logging level (default: WARNING)")

    subparsers = parser.add_subparsers(dest="command")

    parse_p = subparsers.add_parser("parse", help="Parse a transcript into a command")
    parse_p.add_argument("text", help="Transcript text")
    parse_p.add_argument("--json", action="store_true", help="Output JSON")
    parse_p.set_defaults(func=cmd_parse)

    resolve_p = subparsers.add_parser("resolve", help="Resolve a spoken counter name")
    resolve_p.add_argument("query", help="Spoken counter name")
    resolve_p.add_argument(
        "--counter", action="append", default=[], type=_parse_counter_arg,
        help="Counter as ID=LABEL (repeatable, order matters)",
    )
    resolve_p.add_argument("--json", action="store_true", help="Output JSON")
    resolve_p.set_defaults(func=cmd_resolve)

    route_p = subparsers.add_parser("route", help="Apply a transcript to counters")
    route_p.add_argument("text", help="Transcript text")
    route_p.add_argument(
        "--counter", action="append", default=[], type=_parse_counter_arg,
        help="Counter as ID=LABEL[:VALUE[:TARGET]] (repeatable)",
    )
    route_p.add_argument("--default", default=None, help="Counter ID used when none is named")
    route_p.add_argument("--json", action="store_true", help="Output JSON")
    route_p.set_defaults(func=cmd_route)

    commands_p = subparsers.add_parser("commands", help="List example phrases")
    commands_p.add_argument("--json", action="store_true", help="Output JSON")
    commands_p.set_defaults(func=cmd_commands)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(level=args.log_level)

    if not getattr(args, "func", None):
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
