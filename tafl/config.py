"""
Rules configuration.

Values come from the dataclass defaults, then TAFL_* environment
variables, then whatever the caller overrides (CLI flags, tests).
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
import os

from .core.board import Side

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean, got {value!r}")


def parse_side(value: str) -> Side:
    """Parse 'attackers' / 'defenders' (or the first letter)."""
    lowered = value.strip().lower()
    for side in Side:
        name = side.name.lower()
        if lowered in (name, name[0], name.rstrip('s')):
            return side
    raise ValueError(f"Unknown side: {value!r}")


@dataclass
class RulesConfig:
    """Configuration for a game."""
    enforce_turns: bool = True  # Only the side to move may move
    first_side: Side = Side.ATTACKERS
    layout_path: Optional[str] = None  # Diagram file; None = standard layout

    @classmethod
    def from_env(cls, **overrides) -> RulesConfig:
        """Build a config from TAFL_ENFORCE_TURNS, TAFL_FIRST_SIDE and TAFL_LAYOUT."""
        config = cls()
        if "TAFL_ENFORCE_TURNS" in os.environ:
            config.enforce_turns = _parse_bool("TAFL_ENFORCE_TURNS", os.environ["TAFL_ENFORCE_TURNS"])
        if "TAFL_FIRST_SIDE" in os.environ:
            config.first_side = parse_side(os.environ["TAFL_FIRST_SIDE"])
        config.layout_path = os.environ.get("TAFL_LAYOUT") or config.layout_path

        for key, value in overrides.items():
            if value is None:
                continue
            if not hasattr(config, key):
                raise TypeError(f"Unknown config option: {key}")
            setattr(config, key, value)
        return config
