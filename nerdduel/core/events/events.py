"""Duel events and payloads.

This module defines every event the duel managers publish on the event bus.

Event Design Principles:
- Events are immutable dataclasses with minimal payloads
- All events include the duel turn number
- Events describe "what happened" using stable identifiers (names, indices)
"""

from dataclasses import dataclass, field
from typing import Optional
from abc import ABC
from enum import Enum, auto


class EventType(Enum):
    """Types of duel events that managers can subscribe to."""
    # Phase flow events
    INTRO_FINISHED = auto()
    DUEL_STARTED = auto()
    DUEL_ENDED = auto()
    GAME_PHASE_CHANGED = auto()
    TURN_PHASE_CHANGED = auto()

    # Turn events
    ACTION_SELECTED = auto()
    ACTION_CANCELED = auto()
    ANSWER_REJECTED = auto()
    TURN_RESOLVED = auto()

    # Menu events
    SECRET_UNLOCKED = auto()

    # Logging events
    LOG_MESSAGE = auto()

    # System events
    MANAGER_INITIALIZED = auto()


@dataclass(frozen=True)
class GameEvent(ABC):
    """Base class for all duel events."""
    turn: int
    event_type: EventType = field(init=False)


@dataclass(frozen=True)
class IntroFinished(GameEvent):
    """Event emitted when the intro screen is done."""
    skipped: bool

    def __post_init__(self):
        # Set event_type since dataclass frozen=True prevents normal assignment
        object.__setattr__(self, 'event_type', EventType.INTRO_FINISHED)


@dataclass(frozen=True)
class DuelStarted(GameEvent):
    """Event emitted when both nerds have been spawned."""
    first_name: str
    second_name: str

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.DUEL_STARTED)


@dataclass(frozen=True)
class DuelEnded(GameEvent):
    """Event emitted when a nerd (or both) has been defeated."""
    winner_name: Optional[str]
    loser_name: Optional[str]
    draw: bool = False

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.DUEL_ENDED)


@dataclass(frozen=True)
class GamePhaseChanged(GameEvent):
    """Event emitted when the top level phase changes."""
    old_phase: str
    new_phase: str

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.GAME_PHASE_CHANGED)


@dataclass(frozen=True)
class TurnPhaseChanged(GameEvent):
    """Event emitted when a turn moves between choosing and mathing."""
    old_phase: str
    new_phase: str
    acting_index: int

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.TURN_PHASE_CHANGED)


@dataclass(frozen=True)
class ActionSelected(GameEvent):
    """Event emitted when the acting nerd picks an action and the equation is ready."""
    acting_index: int
    action_index: int
    critical: bool

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.ACTION_SELECTED)


@dataclass(frozen=True)
class ActionCanceled(GameEvent):
    """Event emitted when the player backs out of the equation."""
    acting_index: int
    action_index: int

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.ACTION_CANCELED)


@dataclass(frozen=True)
class AnswerRejected(GameEvent):
    """Event emitted when submitted text is not a number."""
    raw_text: str

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.ANSWER_REJECTED)


@dataclass(frozen=True)
class TurnResolved(GameEvent):
    """Event emitted when a numeric answer has been checked."""
    acting_index: int
    action_index: int
    correct: bool
    submitted: int
    expected: int

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.TURN_RESOLVED)


@dataclass(frozen=True)
class SecretUnlocked(GameEvent):
    """Event emitted when the secret nerd becomes selectable."""
    nerd_names: tuple[str, ...]

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.SECRET_UNLOCKED)


@dataclass(frozen=True)
class LogMessage(GameEvent):
    """Event carrying a categorized log line."""
    message: str
    category: str = "SYSTEM"
    level: str = "INFO"
    source: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.LOG_MESSAGE)


@dataclass(frozen=True)
class ManagerInitialized(GameEvent):
    """Event emitted when a manager is initialized."""
    manager_name: str

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.MANAGER_INITIALIZED)
