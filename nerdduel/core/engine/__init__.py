"""Core duel engine components.

This package contains the fundamental engine state:
- duel_state.py: Phases, the cached pending turn and the duel state container
- rng.py: Injectable critical hit roll sources
"""

from .duel_state import DuelOutcome, DuelState, GamePhase, MenuState, PendingTurn, TurnPhase
from .rng import CriticalRoller, RandomCriticalRoller, ScriptedCriticalRoller

__all__ = [
    "DuelOutcome",
    "DuelState",
    "GamePhase",
    "MenuState",
    "PendingTurn",
    "TurnPhase",
    "CriticalRoller",
    "RandomCriticalRoller",
    "ScriptedCriticalRoller",
]
