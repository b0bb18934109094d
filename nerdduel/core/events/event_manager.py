"""
Event management system for decoupled manager communication.

This module provides the central event bus the duel managers talk through,
following the publisher-subscriber pattern so the duel manager never has to
know about the phase manager or the log manager directly.
"""

import itertools
import threading
from collections import defaultdict, deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .events import GameEvent, EventType


class EventPriority(Enum):
    """Event processing priorities (lower value is processed first)."""
    CRITICAL = 0
    HIGH = 1
    NORMAL = 2
    LOW = 3


_sequence = itertools.count()


@dataclass
class QueuedEvent:
    """An event in the processing queue with metadata."""
    event: "GameEvent"
    priority: EventPriority = EventPriority.NORMAL
    source: Optional[str] = None  # For debugging
    sequence: int = field(default_factory=lambda: next(_sequence))

    def __lt__(self, other: "QueuedEvent") -> bool:
        """Compare events for priority queue ordering."""
        if self.priority.value != other.priority.value:
            return self.priority.value < other.priority.value
        # Same priority keeps publication order
        return self.sequence < other.sequence


EventSubscriber = Callable[["GameEvent"], None]


class EventManager:
    """Central event bus for duel system communication."""

    def __init__(self, enable_debug_logging: bool = False):
        """Initialize the event manager.

        Args:
            enable_debug_logging: Whether to report bus activity through the debug callback
        """
        self.enable_debug_logging = enable_debug_logging

        self._subscribers: dict["EventType", list[EventSubscriber]] = defaultdict(list)
        self._event_queue: deque[QueuedEvent] = deque()

        self._lock = threading.RLock()

        self._debug_callback: Optional[Callable[[str], None]] = None

    def set_debug_callback(self, callback: Optional[Callable[[str], None]]) -> None:
        """Set a callback function for debug logging."""
        self._debug_callback = callback

    def _debug_log(self, message: str) -> None:
        if self.enable_debug_logging and self._debug_callback:
            self._debug_callback(f"[EVENT] {message}")

    def _report_subscriber_error(self, subscriber: EventSubscriber, error: Exception) -> None:
        # Subscriber failures are always reported, debug logging or not
        if self._debug_callback:
            name = getattr(subscriber, '__name__', 'anonymous')
            self._debug_callback(f"[EVENT] Error in subscriber {name}: {error}")

    def subscribe(
        self,
        event_type: "EventType",
        subscriber: EventSubscriber,
        subscriber_name: Optional[str] = None
    ) -> None:
        """Subscribe to events of a specific type.

        Args:
            event_type: The type of events to subscribe to
            subscriber: Callback function to handle events
            subscriber_name: Optional name for debugging
        """
        with self._lock:
            self._subscribers[event_type].append(subscriber)

            subscriber_display = subscriber_name or getattr(subscriber, '__name__', 'anonymous')
            self._debug_log(f"Subscribed {subscriber_display} to {event_type.name} events")

    def publish(
        self,
        event: "GameEvent",
        priority: EventPriority = EventPriority.NORMAL,
        source: Optional[str] = None
    ) -> None:
        """Queue an event; it is delivered on the next ``process_events`` call."""
        with self._lock:
            queued_event = QueuedEvent(event=event, priority=priority, source=source or "unknown")
            self._event_queue.append(queued_event)

            self._debug_log(
                f"Published {event.__class__.__name__} (priority: {priority.name}, source: {queued_event.source})"
            )

    def publish_immediate(self, event: "GameEvent", source: Optional[str] = None) -> None:
        """Publish and deliver an event right away.

        Phase-driving events go through here so the state is consistent as
        soon as the publishing manager continues.
        """
        self._process_event(
            QueuedEvent(event=event, priority=EventPriority.CRITICAL, source=source or "immediate")
        )

    def process_events(self, max_events: Optional[int] = None) -> int:
        """Deliver queued events in priority order.

        Args:
            max_events: Maximum number of events to process (None for all)

        Returns:
            Number of events processed
        """
        processed_count = 0

        with self._lock:
            sorted_events = sorted(self._event_queue)
            self._event_queue.clear()

        for queued_event in sorted_events:
            if max_events is not None and processed_count >= max_events:
                with self._lock:
                    self._event_queue.extendleft(reversed(sorted_events[processed_count:]))
                break

            self._process_event(queued_event)
            processed_count += 1

        # Subscribers may have published follow-up events
        if max_events is None and self.has_queued_events():
            processed_count += self.process_events()

        return processed_count

    def _process_event(self, queued_event: QueuedEvent) -> None:
        event = queued_event.event

        self._debug_log(
            f"Processing {event.__class__.__name__} from {queued_event.source} (turn: {event.turn})"
        )

        subscribers = list(self._subscribers.get(event.event_type, []))
        for subscriber in subscribers:
            try:
                subscriber(event)
            except Exception as e:
                self._report_subscriber_error(subscriber, e)

    def has_queued_events(self) -> bool:
        with self._lock:
            return len(self._event_queue) > 0

    def shutdown(self) -> None:
        """Shutdown the event manager and clear all data."""
        with self._lock:
            self._subscribers.clear()
            self._event_queue.clear()
