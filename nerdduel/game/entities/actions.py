"""Action catalog entries.

Actions are immutable and shared by every duel that uses the template they
belong to.
"""

from dataclasses import dataclass

from ...core.data import ActionKind, ACTION_KIND_SUFFIXES


ACTIONS_PER_NERD = 4


@dataclass(frozen=True)
class Action:
    """One of the four things a nerd can do on their turn."""

    name: str
    kind: ActionKind
    base_value: int

    @property
    def display_name(self) -> str:
        return display_name(self)


def display_name(action: Action) -> str:
    """Name with kind suffix and base value, e.g. ``"Slap (3d)"``."""
    return f"{action.name} ({action.base_value}{ACTION_KIND_SUFFIXES[action.kind]})"
