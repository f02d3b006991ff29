"""
Event bus for battle reporting.

Engine components publish events while they derive stats and resolve
battles; managers such as the LogManager subscribe to them. Publishing only
queues an event, delivery happens in process_events, so a battle runs to
completion before any subscriber sees it.
"""

import itertools
import threading
from collections import defaultdict
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional, TYPE_CHECKING

from .events import DebugMessage

if TYPE_CHECKING:
    from .events import GameEvent, EventType


class EventPriority(Enum):
    """Delivery priorities, higher values are delivered first."""
    LOW = 0
    NORMAL = 1
    HIGH = 2


_sequence = itertools.count()


@dataclass
class QueuedEvent:
    """An event waiting for delivery."""
    event: "GameEvent"
    priority: EventPriority = EventPriority.NORMAL
    source: str = "unknown"
    sequence: int = field(default_factory=lambda: next(_sequence))

    def __lt__(self, other: "QueuedEvent") -> bool:
        if self.priority != other.priority:
            return self.priority.value > other.priority.value
        return self.sequence < other.sequence


EventSubscriber = Callable[["GameEvent"], None]


class EventManager:
    """Central event bus for engine communication."""

    SOURCE = "EventManager"

    def __init__(self):
        self._subscribers: dict["EventType", list[EventSubscriber]] = defaultdict(list)
        self._universal_subscribers: list[EventSubscriber] = []
        self._event_queue: list[QueuedEvent] = []

        # Battles may publish from several threads
        self._lock = threading.RLock()

    def subscribe(
        self,
        event_type: "EventType",
        subscriber: EventSubscriber,
        subscriber_name: Optional[str] = None
    ) -> None:
        """Subscribe to events of a specific type.

        Args:
            event_type: The type of events to receive
            subscriber: Callback invoked with each event
            subscriber_name: Name used when reporting subscriber failures
        """
        with self._lock:
            self._subscribers[event_type].append(_named(subscriber, subscriber_name))

    def subscribe_all(
        self,
        subscriber: EventSubscriber,
        subscriber_name: Optional[str] = None
    ) -> None:
        """Subscribe to every event type."""
        with self._lock:
            self._universal_subscribers.append(_named(subscriber, subscriber_name))

    def publish(
        self,
        event: "GameEvent",
        priority: EventPriority = EventPriority.NORMAL,
        source: Optional[str] = None
    ) -> None:
        """Queue an event for the next process_events call."""
        with self._lock:
            self._event_queue.append(
                QueuedEvent(event=event, priority=priority, source=source or "unknown")
            )

    def has_queued_events(self) -> bool:
        """Check if there are events waiting to be delivered."""
        with self._lock:
            return bool(self._event_queue)

    def process_events(self) -> int:
        """Deliver every queued event, highest priority first.

        Events published by subscribers during delivery stay queued for the
        next call.

        Returns:
            Number of events delivered
        """
        with self._lock:
            pending = sorted(self._event_queue)
            self._event_queue.clear()

        for queued_event in pending:
            self._deliver(queued_event)
        return len(pending)

    def _deliver(self, queued_event: QueuedEvent) -> None:
        event = queued_event.event
        with self._lock:
            subscribers = list(self._subscribers.get(event.event_type, []))
            subscribers.extend(self._universal_subscribers)

        for subscriber in subscribers:
            try:
                subscriber(event)
            except Exception as e:
                # A failure report that fails again is not reported twice
                if queued_event.source != self.SOURCE:
                    self._report_failure(subscriber, event, e)

    def _report_failure(self, subscriber: EventSubscriber, event: "GameEvent", error: Exception) -> None:
        name = getattr(subscriber, "subscriber_name", "anonymous")
        self.publish(
            DebugMessage(
                turn=event.turn,
                message=f"Subscriber {name} failed on {event.event_type.name}: {error}",
                source=self.SOURCE,
                context={"subscriber": name, "event_type": event.event_type.name},
            ),
            source=self.SOURCE
        )


class _NamedSubscriber:
    """Callback wrapper that remembers a display name."""

    def __init__(self, callback: EventSubscriber, name: str):
        self.callback = callback
        self.subscriber_name = name

    def __call__(self, event: "GameEvent") -> None:
        self.callback(event)


def _named(subscriber: EventSubscriber, name: Optional[str]) -> _NamedSubscriber:
    return _NamedSubscriber(subscriber, name or getattr(subscriber, "__qualname__", "anonymous"))
