"""
Log management system for duel messages and debugging.

This module keeps a categorized history of everything the managers report
and mirrors duel narration into the bounded log the renderer shows.
"""
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from typing import Optional, TYPE_CHECKING

from ...core.events import EventType, LogMessage

if TYPE_CHECKING:
    from ...core.events import EventManager
    from ...core.engine import DuelState


class LogCategory(Enum):
    """Categories for log messages."""
    SYSTEM = auto()   # Initialization, phase changes
    DUEL = auto()     # Narration shown to the players
    INPUT = auto()    # Input handling messages
    DEBUG = auto()    # Debug messages


CATEGORY_TAGS = {
    LogCategory.SYSTEM: "SYS",
    LogCategory.DUEL: "DUL",
    LogCategory.INPUT: "INP",
    LogCategory.DEBUG: "DBG",
}


class LogLevel(Enum):
    """Log levels for filtering."""
    DEBUG = 0
    INFO = 1


@dataclass
class LogEntry:
    """A single log line with metadata."""
    text: str
    category: LogCategory
    timestamp: datetime = field(default_factory=datetime.now)

    def format(self, include_timestamp: bool = False, include_category: bool = True) -> str:
        parts = []
        if include_timestamp:
            parts.append(f"[{self.timestamp.strftime('%H:%M:%S')}]")
        if include_category:
            parts.append(f"[{CATEGORY_TAGS.get(self.category, '???')}]")
        parts.append(self.text)
        return " ".join(parts)


class LogManager:
    """Manages duel logging with categorization and filtering."""

    def __init__(
        self,
        event_manager: "EventManager",
        duel_state: "DuelState",
        max_messages: int = 1000,
        default_level: LogLevel = LogLevel.INFO
    ):
        """Initialize the log manager.

        Args:
            event_manager: Event manager for event-driven logging
            duel_state: Duel state whose bounded log receives duel narration
            max_messages: Maximum number of entries kept in the history
            default_level: Default log level for filtering
        """
        self.messages: deque[LogEntry] = deque(maxlen=max_messages)
        self.log_level = default_level
        self.event_manager = event_manager
        self.state = duel_state

        self.category_levels = {
            LogCategory.DEBUG: LogLevel.DEBUG,
            LogCategory.INPUT: LogLevel.DEBUG,
            # SYSTEM and DUEL default to INFO
        }

        self._setup_event_subscriptions()

    def _setup_event_subscriptions(self) -> None:
        self.event_manager.subscribe(
            EventType.LOG_MESSAGE,
            self._handle_log_message_event,
            subscriber_name="LogManager.log_message"
        )

    def _handle_log_message_event(self, event) -> None:
        if isinstance(event, LogMessage):
            try:
                category = LogCategory[event.category.upper()]
            except (KeyError, AttributeError):
                category = LogCategory.SYSTEM
            self.log(event.message, category)

    def log(self, text: str, category: LogCategory = LogCategory.SYSTEM) -> None:
        """Add a message to the history.

        Duel narration is also pushed onto the state's bounded log, where the
        oldest line drops off once the cap is reached.
        """
        self.messages.append(LogEntry(text=text, category=category))
        if category == LogCategory.DUEL:
            self.state.push_log(text)

    def debug(self, text: str) -> None:
        self.log(text, LogCategory.DEBUG)

    def get_messages(self, count: Optional[int] = None) -> list[LogEntry]:
        """Get recent messages visible at the current log level.

        Args:
            count: Maximum number of messages to return (None for all)

        Returns:
            List of recent messages, oldest first
        """
        filtered = [
            msg for msg in self.messages
            if self.category_levels.get(msg.category, LogLevel.INFO).value >= self.log_level.value
        ]

        if count is not None and count < len(filtered):
            return filtered[-count:]
        return filtered

    def set_log_level(self, level: LogLevel) -> None:
        self.log_level = level

    def is_debug_enabled(self) -> bool:
        return self.log_level == LogLevel.DEBUG
