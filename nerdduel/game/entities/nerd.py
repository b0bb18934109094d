"""Nerd templates and runtime combatants.

A :class:`NerdTemplate` is the static definition loaded from the registry.
A :class:`Nerd` is the mutable combatant spawned from it for one duel. Stat
changes are always absolute assignments: the resolver computes the full new
value and the apply functions below only store it.
"""

from dataclasses import dataclass
from typing import Optional

from ...core.renderable import NerdSnapshot
from .actions import Action, ACTIONS_PER_NERD


@dataclass(frozen=True)
class NerdTemplate:
    """Static nerd definition shared across duels."""

    name: str
    health: int
    multiplier: int
    actions: tuple[Action, ...]
    sprite: str = ""
    secret: bool = False

    def __post_init__(self):
        if len(self.actions) != ACTIONS_PER_NERD:
            raise ValueError(
                f"Nerd '{self.name}' must have exactly {ACTIONS_PER_NERD} actions, got {len(self.actions)}"
            )


class Nerd:
    """A combatant with live health and multiplier.

    Examples:
        nerd = spawn(template)
        nerd.health          # 200
        nerd.actions[0]      # Action(name="Slap", ...)
        nerd.is_defeated()   # False
    """

    def __init__(self, template: NerdTemplate, name: Optional[str] = None):
        self.template = template
        self.name = name or template.name
        self.health = template.health
        self.multiplier = template.multiplier

    @property
    def actions(self) -> tuple[Action, ...]:
        return self.template.actions

    @property
    def sprite(self) -> str:
        return self.template.sprite

    def set_health(self, value: int) -> None:
        self.health = value

    def set_multiplier(self, value: int) -> None:
        self.multiplier = value

    def is_defeated(self) -> bool:
        return self.health <= 0

    def snapshot(self) -> NerdSnapshot:
        return NerdSnapshot(
            name=self.name,
            health=self.health,
            multiplier=self.multiplier,
            sprite=self.sprite,
        )

    def __repr__(self) -> str:
        return f"Nerd(name={self.name!r}, health={self.health}, multiplier={self.multiplier})"


def spawn(template: NerdTemplate, name: Optional[str] = None) -> Nerd:
    """Create a fresh combatant from a template."""
    return Nerd(template, name=name)


def apply_damage(target: Nerd, new_health: int) -> None:
    target.set_health(new_health)


def apply_heal(actor: Nerd, new_health: int) -> None:
    actor.set_health(new_health)


def apply_weaken(target: Nerd, new_multiplier: int) -> None:
    target.set_multiplier(new_multiplier)


def apply_strengthen(actor: Nerd, new_multiplier: int) -> None:
    actor.set_multiplier(new_multiplier)
