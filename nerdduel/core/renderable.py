"""Read-only render data handed from the engine to renderers.

Renderers never touch live duel objects; they receive a :class:`DuelView`
built fresh for each frame.
"""

from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .engine.duel_state import DuelOutcome, GamePhase, TurnPhase


@dataclass(frozen=True)
class NerdSnapshot:
    """Public stats of one nerd at a point in time."""
    name: str
    health: int
    multiplier: int
    sprite: str = ""

    @property
    def multiplier_display(self) -> str:
        """Multiplier as a factor, e.g. ``x1.2`` for a stored value of 12."""
        return f"x{self.multiplier / 10:.1f}"


@dataclass(frozen=True)
class DuelView:
    """Everything a renderer needs to draw one frame."""
    phase: "GamePhase"
    turn_phase: "TurnPhase"
    current_player: int
    nerds: tuple[NerdSnapshot, ...] = ()
    log: tuple[str, ...] = ()
    menu_options: tuple[str, ...] = ()
    action_options: tuple[str, ...] = ()
    equation_text: Optional[str] = None
    answer_text: str = ""
    answer_rejected: bool = False
    outcome: Optional["DuelOutcome"] = None
    diagnostics: tuple[str, ...] = ()

    @property
    def acting_nerd(self) -> Optional[NerdSnapshot]:
        if len(self.nerds) != 2:
            return None
        return self.nerds[self.current_player]
