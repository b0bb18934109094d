"""Event system for publisher-subscriber communication.

This package contains the event-driven plumbing of the duel:
- event_manager.py: Publisher-subscriber event routing and coordination
- events.py: Event definitions for inter-manager communication
"""

from .event_manager import EventManager, EventPriority, QueuedEvent
from .events import (
    GameEvent,
    EventType,
    IntroFinished,
    DuelStarted,
    DuelEnded,
    GamePhaseChanged,
    TurnPhaseChanged,
    ActionSelected,
    ActionCanceled,
    AnswerRejected,
    TurnResolved,
    SecretUnlocked,
    LogMessage,
    ManagerInitialized,
)

__all__ = [
    "EventManager",
    "EventPriority",
    "QueuedEvent",
    "GameEvent",
    "EventType",
    "IntroFinished",
    "DuelStarted",
    "DuelEnded",
    "GamePhaseChanged",
    "TurnPhaseChanged",
    "ActionSelected",
    "ActionCanceled",
    "AnswerRejected",
    "TurnResolved",
    "SecretUnlocked",
    "LogMessage",
    "ManagerInitialized",
]
