"""Core data definitions.

This package contains fundamental duel enums and lookup tables:
- game_enums.py: Action kinds with their display names and suffixes
"""

from .game_enums import ActionKind, ACTION_KIND_NAMES, ACTION_KIND_SUFFIXES, OFFENSIVE_KINDS

__all__ = [
    "ActionKind",
    "ACTION_KIND_NAMES",
    "ACTION_KIND_SUFFIXES",
    "OFFENSIVE_KINDS",
]
