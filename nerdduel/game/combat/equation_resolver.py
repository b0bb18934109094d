"""
Equation generation and effect resolution.

Turns a chosen action into the equation the acting player has to solve and
the exact value that equation evaluates to. The equation text and the result
are built from the same operands, so evaluating the displayed text always
gives the stored answer.
"""
from dataclasses import dataclass

from ...core.data import ActionKind
from ..entities.nerd import Nerd, apply_damage, apply_heal, apply_strengthen, apply_weaken
from ..entities.actions import ACTIONS_PER_NERD


DEFAULT_CRITICAL_FACTOR = 2


@dataclass(frozen=True)
class Resolution:
    """Equation shown to the player and the new stat value it produces."""
    equation_text: str
    result_value: int
    kind: ActionKind

    def __iter__(self):
        # Allows ``equation, answer = resolver.resolve(...)``
        yield self.equation_text
        yield self.result_value


def _operand(value: int) -> str:
    """Render an operand so the equation still reads correctly when negative."""
    return f"({value})" if value < 0 else str(value)


class EquationResolver:
    """Builds equations for actions and applies their results."""

    def __init__(self, critical_factor: int = DEFAULT_CRITICAL_FACTOR):
        if critical_factor < 1:
            raise ValueError(f"Critical factor must be at least 1, got {critical_factor}")
        self.critical_factor = critical_factor

    def factor_for(self, critical: bool) -> int:
        return self.critical_factor if critical else 1

    def resolve(self, actor: Nerd, target: Nerd, action_index: int, critical: bool) -> Resolution:
        """
        Compute the equation and result for one action.

        Args:
            actor: The nerd taking the action
            target: The opposing nerd
            action_index: Slot of the action on the actor, 0..3
            critical: Whether this turn rolled a critical hit

        Returns:
            Resolution with the equation text and the value to assign

        Raises:
            IndexError: If action_index is not a valid slot
        """
        if not 0 <= action_index < ACTIONS_PER_NERD:
            raise IndexError(f"Action index must be in 0..{ACTIONS_PER_NERD - 1}, got {action_index}")

        action = actor.actions[action_index]
        base = action.base_value
        factor = self.factor_for(critical)

        if action.kind == ActionKind.DAMAGE:
            operands = (target.health, base, actor.multiplier, factor)
            result = target.health - base * actor.multiplier * factor
            template = "{} - {} * {} * {}"
        elif action.kind == ActionKind.HEAL:
            operands = (actor.health, base, actor.multiplier, factor)
            result = actor.health + base * actor.multiplier * factor
            template = "{} + {} * {} * {}"
        elif action.kind == ActionKind.WEAKEN:
            # Only the critical factor scales multiplier changes
            operands = (target.multiplier, base, factor)
            result = target.multiplier - base * factor
            template = "{} - {} * {}"
        else:
            operands = (actor.multiplier, base, factor)
            result = actor.multiplier + base * factor
            template = "{} + {} * {}"

        equation = template.format(*(_operand(value) for value in operands))
        return Resolution(equation_text=equation, result_value=result, kind=action.kind)

    @staticmethod
    def apply(actor: Nerd, target: Nerd, resolution: Resolution) -> Nerd:
        """Store a resolution's value on the nerd it affects and return that nerd."""
        if resolution.kind == ActionKind.DAMAGE:
            apply_damage(target, resolution.result_value)
            return target
        if resolution.kind == ActionKind.HEAL:
            apply_heal(actor, resolution.result_value)
            return actor
        if resolution.kind == ActionKind.WEAKEN:
            apply_weaken(target, resolution.result_value)
            return target
        apply_strengthen(actor, resolution.result_value)
        return actor


def resolve(actor: Nerd, target: Nerd, action_index: int, critical: bool) -> Resolution:
    """Resolve with the default critical factor."""
    return EquationResolver().resolve(actor, target, action_index, critical)
