"""
Event bus shared by every layer of a match.

Board, combat, turn and AI code publish events here instead of calling the
presentation layer. Events wait in a priority heap until ``process_events``
delivers them; MatchState drains the bus after each command to build the
narration, and the LogManager listens for diagnostics.
"""

import heapq
import threading
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .events import GameEvent, EventType


class EventPriority(Enum):
    """Delivery priority. Lower values are delivered first."""
    CRITICAL = 0
    HIGH = 1
    NORMAL = 2
    LOW = 3


@dataclass(order=True)
class QueuedEvent:
    """A published event waiting for delivery.

    Ordering uses only ``priority_value`` and ``sequence``, so two events of
    the same priority leave the heap in publish order.
    """
    priority_value: int
    sequence: int
    event: "GameEvent" = field(compare=False)
    source: str = field(default="unknown", compare=False)
    published_at: datetime = field(default_factory=datetime.now, compare=False)

    @property
    def priority(self) -> EventPriority:
        return EventPriority(self.priority_value)


EventSubscriber = Callable[["GameEvent"], None]


@dataclass
class _Subscription:
    callback: EventSubscriber
    name: str


def _subscriber_name(callback: EventSubscriber, name: Optional[str]) -> str:
    return name or getattr(callback, "__qualname__", None) or getattr(callback, "__name__", "anonymous")


class EventManager:
    """Queue-and-deliver event bus.

    Type subscribers of an event are called before universal subscribers,
    each group in subscription order. A subscriber that raises does not stop
    delivery; the failure is recorded and shows up in
    ``get_subscriber_errors``.

    Examples:
        bus = EventManager()
        bus.subscribe(EventType.UNIT_MOVED, on_move)
        bus.publish(UnitMoved(...), source="TurnController")
        bus.process_events()   # on_move is called here
    """

    def __init__(self, enable_debug_logging: bool = False):
        self.enable_debug_logging = enable_debug_logging
        self._debug_callback: Optional[Callable[[str], None]] = None

        self._by_type: dict["EventType", list[_Subscription]] = defaultdict(list)
        self._universal: list[_Subscription] = []
        self._heap: list[QueuedEvent] = []
        self._next_sequence = 0

        self._published = 0
        self._delivered = 0
        self._errors: list[str] = []

        self._lock = threading.RLock()

    # ============== Debug tracing ==============

    def set_debug_callback(self, callback: Optional[Callable[[str], None]]) -> None:
        """Route bus tracing lines to callback (only with enable_debug_logging)."""
        self._debug_callback = callback

    def _trace(self, message: str) -> None:
        if self.enable_debug_logging and self._debug_callback is not None:
            self._debug_callback(f"[EVENT] {message}")

    # ============== Subscriptions ==============

    def subscribe(
        self,
        event_type: "EventType",
        subscriber: EventSubscriber,
        subscriber_name: Optional[str] = None
    ) -> None:
        """Deliver events of one type to subscriber."""
        subscription = _Subscription(subscriber, _subscriber_name(subscriber, subscriber_name))
        with self._lock:
            self._by_type[event_type].append(subscription)
        self._trace(f"{subscription.name} subscribed to {event_type.name}")

    def subscribe_all(self, subscriber: EventSubscriber, subscriber_name: Optional[str] = None) -> None:
        """Deliver every event to subscriber, after the type subscribers."""
        subscription = _Subscription(subscriber, _subscriber_name(subscriber, subscriber_name))
        with self._lock:
            self._universal.append(subscription)
        self._trace(f"{subscription.name} subscribed to all events")

    @staticmethod
    def _remove(subscriptions: list[_Subscription], subscriber: EventSubscriber) -> bool:
        for index, subscription in enumerate(subscriptions):
            if subscription.callback == subscriber:
                del subscriptions[index]
                return True
        return False

    def unsubscribe(self, event_type: "EventType", subscriber: EventSubscriber) -> bool:
        """Stop delivering one event type. Returns False if subscriber was not registered."""
        with self._lock:
            removed = self._remove(self._by_type[event_type], subscriber)
        if removed:
            self._trace(f"Unsubscribed from {event_type.name}")
        return removed

    def unsubscribe_all(self, subscriber: EventSubscriber) -> bool:
        """Remove a universal subscriber."""
        with self._lock:
            return self._remove(self._universal, subscriber)

    # ============== Publishing ==============

    def publish(
        self,
        event: "GameEvent",
        priority: EventPriority = EventPriority.NORMAL,
        source: Optional[str] = None
    ) -> None:
        """Queue event for the next process_events call."""
        with self._lock:
            queued = QueuedEvent(priority.value, self._next_sequence, event, source or "unknown")
            self._next_sequence += 1
            heapq.heappush(self._heap, queued)
            self._published += 1
        self._trace(f"Published {type(event).__name__} ({priority.name}) from {queued.source}")

    def publish_immediate(self, event: "GameEvent", source: Optional[str] = None) -> None:
        """Deliver event now, bypassing the queue."""
        with self._lock:
            self._published += 1
        self._deliver(QueuedEvent(EventPriority.CRITICAL.value, -1, event, source or "immediate"))

    def process_events(self, max_events: Optional[int] = None) -> int:
        """Deliver queued events in priority order.

        Events published by subscribers during delivery are delivered in the
        same call, after everything already queued at their priority.

        Args:
            max_events: Stop after this many deliveries; the rest stay queued

        Returns:
            Number of events delivered
        """
        delivered = 0
        while max_events is None or delivered < max_events:
            with self._lock:
                if not self._heap:
                    break
                queued = heapq.heappop(self._heap)
            self._deliver(queued)
            delivered += 1
        return delivered

    def _deliver(self, queued: QueuedEvent) -> None:
        event = queued.event
        with self._lock:
            self._delivered += 1
            recipients = list(self._by_type.get(event.event_type, [])) + list(self._universal)

        self._trace(f"Delivering {type(event).__name__} from {queued.source} to {len(recipients)} subscriber(s)")

        for subscription in recipients:
            try:
                subscription.callback(event)
            except Exception as e:
                error = f"{subscription.name} failed on {type(event).__name__}: {e}"
                with self._lock:
                    self._errors.append(error)
                self._trace(error)

    # ============== Queue state ==============

    def clear_queue(self) -> int:
        """Drop every queued event. Returns how many were dropped."""
        with self._lock:
            count = len(self._heap)
            self._heap.clear()
        self._trace(f"Cleared {count} queued events")
        return count

    def has_queued_events(self) -> bool:
        with self._lock:
            return bool(self._heap)

    def get_subscriber_errors(self) -> list[str]:
        with self._lock:
            return list(self._errors)

    def get_statistics(self) -> dict[str, Any]:
        with self._lock:
            return {
                'events_published': self._published,
                'events_processed': self._delivered,
                'events_queued': len(self._heap),
                'subscribers_count': sum(len(subs) for subs in self._by_type.values()),
                'universal_subscribers_count': len(self._universal),
                'subscriber_errors': len(self._errors),
            }

    def shutdown(self) -> None:
        """Drop all subscribers and queued events."""
        with self._lock:
            self._by_type.clear()
            self._universal.clear()
            self._heap.clear()
        self._trace("Event manager shut down")
