"""Manager systems for duel logic coordination.

This package contains the manager classes that coordinate the duel through
the event-driven architecture.
"""

from .duel_manager import DuelManager, parse_answer
from .log_manager import LogCategory, LogEntry, LogLevel, LogManager
from .phase_manager import PhaseManager

__all__ = [
    "DuelManager",
    "parse_answer",
    "LogCategory",
    "LogEntry",
    "LogLevel",
    "LogManager",
    "PhaseManager",
]
