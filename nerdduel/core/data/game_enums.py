"""Centralized duel enums and constants.

This module contains the enums shared by the duel engine and its
collaborators, providing a single source of truth for action kinds.
"""

from enum import Enum, auto


class ActionKind(Enum):
    """Kinds of action a nerd can take on their turn."""
    DAMAGE = auto()
    HEAL = auto()
    WEAKEN = auto()
    STRENGTHEN = auto()


# Convenience mappings for display
ACTION_KIND_NAMES = {
    ActionKind.DAMAGE: "Damage",
    ActionKind.HEAL: "Heal",
    ActionKind.WEAKEN: "Weaken",
    ActionKind.STRENGTHEN: "Strengthen",
}

ACTION_KIND_SUFFIXES = {
    ActionKind.DAMAGE: "d",
    ActionKind.HEAL: "h",
    ActionKind.WEAKEN: "w",
    ActionKind.STRENGTHEN: "s",
}

# Kinds that change the opponent rather than the acting nerd
OFFENSIVE_KINDS = frozenset({ActionKind.DAMAGE, ActionKind.WEAKEN})
