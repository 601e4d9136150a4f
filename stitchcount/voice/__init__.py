"""Voice Commands - Hands-free counter control while knitting or crocheting

Philosophy:
    Both hands are on the needles or the hook. Voice is the only practical
    way to bump a row counter mid-row, so a command has to work on the
    first try and fail quietly when it doesn't.

Components:
    models.py: Data models (VoiceStatus, ActionType, command actions)
    parser/: Command parsing, counter resolution, command routing
    commands/: Counter command handlers (increment, decrement, set, reset, read)
    recognition/: Speech recognition capability interface
    synthesis/: Speech synthesis capability interface
    session/: Listening/processing/speaking lifecycle and timers

Usage:
    from stitchcount.voice.parser.command_parser import parse_command
    from stitchcount.voice.parser.entity_resolver import resolve_counter

    parsed = parse_command("add 5 rows")
    counter = resolve_counter(counters, parsed.action.counter_name)
"""

from __future__ import annotations

import copy
import logging
import os
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

# Path constants
PROJECT_ROOT = Path(__file__).parent.parent.parent
CONFIG_PATH = PROJECT_ROOT / "args" / "voice.yaml"

# Defaults used when args/voice.yaml is missing or partial
DEFAULT_VOICE_CONFIG: dict[str, Any] = {
    "recognition": {
        "locale": "en-US",
    },
    "session": {
        "enabled": True,
        "auto_stop_seconds": 5.0,
        "error_recovery_seconds": 2.0,
    },
    "synthesis": {
        "language": "en",
        "pitch": 1.0,
        "rate": 0.9,
    },
    "messages": {
        "unrecognized": "Sorry, I didn't understand that command.",
    },
}


def _merge(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def get_config_path() -> Path:
    """Config path, honouring STITCHCOUNT_VOICE_CONFIG."""
    override = os.environ.get("STITCHCOUNT_VOICE_CONFIG")
    return Path(override) if override else CONFIG_PATH


def load_voice_config(path: Path | None = None) -> dict[str, Any]:
    """Load voice configuration merged over the defaults."""
    path = path or get_config_path()
    if not path.exists():
        return copy.deepcopy(DEFAULT_VOICE_CONFIG)

    with open(path) as f:
        loaded = yaml.safe_load(f) or {}

    if not isinstance(loaded, dict):
        logger.warning("Ignoring malformed voice config at %s", path)
        return copy.deepcopy(DEFAULT_VOICE_CONFIG)

    return _merge(DEFAULT_VOICE_CONFIG, loaded)


__all__ = [
    "CONFIG_PATH",
    "DEFAULT_VOICE_CONFIG",
    "PROJECT_ROOT",
    "get_config_path",
    "load_voice_config",
]
