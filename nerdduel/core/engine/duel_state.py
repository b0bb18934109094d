"""Duel state management with structured substates.

This module defines the top-level :class:`DuelState` along with the smaller
dataclasses it is made of: the cached :class:`PendingTurn`, the final
:class:`DuelOutcome` and the :class:`MenuState` holding collaborator-facing
bits such as the answer buffer.

Only managers mutate the state. Phases are changed exclusively by the
``PhaseManager``; everything else is changed by the ``DuelManager`` or the
``LogManager``.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, Optional

from ..renderable import NerdSnapshot

if TYPE_CHECKING:
    from ...game.entities.nerd import Nerd


class GamePhase(Enum):
    """High level game phases."""

    INTRO = auto()
    MAIN_MENU = auto()
    IN_GAME = auto()
    GAME_END = auto()


class TurnPhase(Enum):
    """Phases within a turn while the duel is running."""

    CHOOSING = auto()  # Acting nerd picks one of four actions
    MATHING = auto()   # Acting player solves the generated equation


@dataclass(frozen=True)
class PendingTurn:
    """Everything decided when an action was selected.

    The expected answer is computed once together with the equation text and
    is never regenerated before the answer is checked.
    """

    acting_index: int
    action_index: int
    critical: bool
    equation_text: str
    expected_answer: int


@dataclass(frozen=True)
class DuelOutcome:
    """How the duel ended."""

    winner: Optional[str]
    loser: Optional[str]
    draw: bool = False


@dataclass
class MenuState:
    """Holds the answer buffer and menu flags the renderer shows."""

    answer_text: str = ""
    answer_rejected: bool = False
    secret_unlocked: bool = False

    def reject_answer(self, raw_text: str) -> None:
        self.answer_text = raw_text
        self.answer_rejected = True

    def clear_answer(self) -> None:
        self.answer_text = ""
        self.answer_rejected = False


@dataclass
class DuelState:
    """Complete state of one duel."""

    phase: GamePhase = GamePhase.INTRO
    turn_phase: TurnPhase = TurnPhase.CHOOSING
    log_size: int = 5

    nerds: Optional[tuple["Nerd", "Nerd"]] = None
    current_player: int = 0
    turn_number: int = 1

    pending_turn: Optional[PendingTurn] = None
    outcome: Optional[DuelOutcome] = None
    menu: MenuState = field(default_factory=MenuState)
    log: deque[str] = field(init=False)

    def __post_init__(self) -> None:
        if self.log_size < 1:
            raise ValueError(f"log_size must be at least 1, got {self.log_size}")
        # Oldest message is evicted first once the cap is exceeded
        self.log = deque(maxlen=self.log_size)

    # ============== Duel lifecycle ==============

    def start_duel(self, first: "Nerd", second: "Nerd") -> None:
        """Install a fresh pair of nerds and reset turn bookkeeping."""
        self.nerds = (first, second)
        self.current_player = 0
        self.turn_number = 1
        self.pending_turn = None
        self.outcome = None
        self.menu.clear_answer()
        self.log.clear()

    def require_nerds(self) -> tuple["Nerd", "Nerd"]:
        if self.nerds is None:
            raise RuntimeError("No duel in progress. Confirm a duel start first.")
        return self.nerds

    @property
    def opponent_index(self) -> int:
        return 1 - self.current_player

    def acting_nerd(self) -> "Nerd":
        return self.require_nerds()[self.current_player]

    def opposing_nerd(self) -> "Nerd":
        return self.require_nerds()[self.opponent_index]

    def advance_turn(self) -> None:
        """Hand the turn to the other nerd and drop the finished turn."""
        self.current_player = self.opponent_index
        self.turn_number += 1
        self.clear_pending_turn()

    def clear_pending_turn(self) -> None:
        self.pending_turn = None
        self.menu.clear_answer()

    def push_log(self, message: str) -> None:
        self.log.append(message)

    # ============== Query surface ==============

    @property
    def in_game(self) -> bool:
        return self.phase == GamePhase.IN_GAME

    @property
    def is_over(self) -> bool:
        return self.phase == GamePhase.GAME_END

    @property
    def equation_text(self) -> Optional[str]:
        """Equation to show while the acting player is solving, else ``None``."""
        if self.in_game and self.turn_phase == TurnPhase.MATHING and self.pending_turn:
            return self.pending_turn.equation_text
        return None

    def nerd_snapshots(self) -> tuple[NerdSnapshot, ...]:
        if self.nerds is None:
            return ()
        return tuple(nerd.snapshot() for nerd in self.nerds)
