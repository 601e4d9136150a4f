"""Command parsing for voice transcripts.

Uses an ordered table of regex patterns to turn a transcript into a counter
action. The first entry in table order that matches wins; categories are
tried Increment, Decrement, Set, Reset, Read. Unmatched input becomes
UNKNOWN with zero confidence.
"""

from __future__ import annotations

import re
from typing import Callable

from stitchcount.voice.models import (
    ActionType,
    CommandAction,
    Decrement,
    Increment,
    ParsedCommand,
    Read,
    Reset,
    Set,
    Unknown,
)

# Fixed per-category confidence
CONFIDENCE: dict[ActionType, float] = {
    ActionType.INCREMENT: 0.9,
    ActionType.DECREMENT: 0.9,
    ActionType.SET: 0.85,
    ActionType.RESET: 0.9,
    ActionType.READ: 0.85,
    ActionType.UNKNOWN: 0.0,
}

Extractor = Callable[[re.Match], CommandAction]


def _name(raw: str | None) -> str | None:
    """Normalise captured counter text; empty captures become None."""
    if raw is None:
        return None
    name = raw.strip(" .,!?")
    return name or None


def _amount(raw: str | None) -> int:
    if not raw:
        return 1
    return max(1, int(raw))


def _increment(match: re.Match) -> CommandAction:
    return Increment(counter_name=_name(match.group("name")), amount=_amount(match.group("amount")))


def _increment_noun(match: re.Match) -> CommandAction:
    return Increment(counter_name=_name(match.group("name")))


def _decrement(match: re.Match) -> CommandAction:
    return Decrement(counter_name=_name(match.group("name")), amount=_amount(match.group("amount")))


def _decrement_noun(match: re.Match) -> CommandAction:
    return Decrement(counter_name=_name(match.group("name")))


def _set(match: re.Match) -> CommandAction:
    return Set(value=int(match.group("value")), counter_name=_name(match.group("name")))


def _reset(match: re.Match) -> CommandAction:
    return Reset(counter_name=_name(match.group("name")))


def _read(match: re.Match) -> CommandAction:
    return Read(counter_name=_name(match.group("name")))


_NOUN = r"(?:row|round|stitch)(?:\s+counter)?"

# Command patterns: (category, pattern, extractor), evaluated top to bottom.
# Order is the contract: "5 more rows" is an increment because the bare
# numeral pattern comes before every decrement and set pattern.
COMMAND_PATTERNS: list[tuple[ActionType, str, Extractor]] = [
    # Increment
    (ActionType.INCREMENT, rf"^(?P<name>{_NOUN})\s+(?:up|add|increment)$", _increment_noun),
    (
        ActionType.INCREMENT,
        r"\b(?:add|increment|increase|plus|up)\b(?:\s+by\b)?(?:\s+(?P<amount>\d+))?"
        r"(?:\s+to\b)?(?:\s+the\b)?\s*(?P<name>.*)$",
        _increment,
    ),
    (ActionType.INCREMENT, r"^(?P<amount>\d+)\b(?:\s+(?:more|additional))?\s*(?P<name>.*)$", _increment),

    # Decrement
    (ActionType.DECREMENT, rf"^(?P<name>{_NOUN})\s+(?:down|back)$", _decrement_noun),
    (
        ActionType.DECREMENT,
        r"\b(?:subtract|decrement|decrease|minus|down|remove)\b(?:\s+by\b)?(?:\s+(?P<amount>\d+))?"
        r"(?:\s+from\b)?(?:\s+the\b)?\s*(?P<name>.*)$",
        _decrement,
    ),
    # Shadowed by the increment numeral pattern; kept so the table reads as a whole.
    (ActionType.DECREMENT, r"^(?P<amount>\d+)\s+(?:less|fewer)\s*(?P<name>.*)$", _decrement),

    # Set (numeral required)
    (
        ActionType.SET,
        r"\b(?:set|make|put)\b(?:\s+the\b)?\s*(?P<name>.*?)\s*\b(?:to|at|equals?)\s+(?P<value>\d+)\b",
        _set,
    ),
    (ActionType.SET, rf"^(?P<name>{_NOUN})\s+(?:is|equals?)\s+(?P<value>\d+)\b", _set),

    # Reset
    (ActionType.RESET, r"(?:reset|clear|zero|start\s*over)\w*(?:\s+the\b)?\s*(?P<name>.*)$", _reset),

    # Read
    (
        ActionType.READ,
        r"^(?:how\s+many|what)\b\s*(?P<name>.*?)\s*\b(?:am\s+i|are\s+we)\s+on\b",
        _read,
    ),
    (
        ActionType.READ,
        r"^(?:what(?:\s+is|['’]s)?|tell\s+me|read|say)\b(?:\s+the\b)?(?:\s+current\b)?\s*"
        r"(?P<name>.*?)(?:\s+(?:value|number|count))?$",
        _read,
    ),
]

# Compiled pattern cache
_compiled_patterns: list[tuple[ActionType, re.Pattern, Extractor]] | None = None


def _get_patterns() -> list[tuple[ActionType, re.Pattern, Extractor]]:
    """Get compiled patterns in table order."""
    global _compiled_patterns
    if _compiled_patterns is None:
        _compiled_patterns = [
            (category, re.compile(p, re.IGNORECASE), extractor)
            for category, p, extractor in COMMAND_PATTERNS
        ]
    return _compiled_patterns


def parse_command(text: str) -> ParsedCommand:
    """Parse a voice transcript into a counter command.

    This is the main entry point for the voice command pipeline. It never
    raises: unrecognised input comes back as an UNKNOWN action.
    """
    original = text or ""
    normalized = original.lower().strip()

    if normalized:
        for category, pattern, extractor in _get_patterns():
            match = pattern.search(normalized)
            if match:
                return ParsedCommand(
                    action=extractor(match),
                    confidence=CONFIDENCE[category],
                    original_text=original,
                )

    return ParsedCommand(
        action=Unknown(text=original),
        confidence=CONFIDENCE[ActionType.UNKNOWN],
        original_text=original,
    )


def suggest_command(text: str) -> str:
    """Suggest what the user might have meant."""
    text_lower = (text or "").lower()

    if any(w in text_lower for w in ("more", "another", "next")):
        return 'Try: "add 1 row" or "5 more rows"'
    if any(w in text_lower for w in ("back", "undo", "less", "fewer", "take")):
        return 'Try: "subtract 1 from the row counter"'
    if any(w in text_lower for w in ("change", "go to", "jump")):
        return 'Try: "set the row counter to 12"'
    if any(w in text_lower for w in ("where", "which", "count")):
        return 'Try: "what row am I on?"'

    return 'Try: "add 1 row", "reset stitch counter" or "what row am I on?"'


# Example phrases for help output
AVAILABLE_COMMANDS: dict[str, list[dict[str, str]]] = {
    "Increment": [
        {"command": "Add [N] [to counter]", "example": "Add 5 rows"},
        {"command": "[N] more [counter]", "example": "2 more rounds"},
        {"command": "[Counter] up", "example": "Row up"},
    ],
    "Decrement": [
        {"command": "Subtract [N] [from counter]", "example": "Subtract 1 from the stitch counter"},
        {"command": "[Counter] down", "example": "Round down"},
    ],
    "Set": [
        {"command": "Set [counter] to [N]", "example": "Set round counter to 12"},
        {"command": "[Counter] is [N]", "example": "Row counter is 40"},
    ],
    "Reset": [
        {"command": "Reset [counter]", "example": "Reset stitch counter"},
        {"command": "Start over", "example": "Start over"},
    ],
    "Read": [
        {"command": "What row am I on?", "example": "How many rounds am I on"},
        {"command": "What is [counter]", "example": "What's the current stitch count"},
    ],
}
