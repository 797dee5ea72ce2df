"""
Diagnostic log for a match.

Game components never call the log directly. They publish LogMessage events
through their ``_emit_log`` helpers, and LogManager turns those events into
categorized entries kept in a bounded buffer. Narration for the player
travels on the same bus but is never stored here.
"""
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Iterable, Optional, TYPE_CHECKING

from ...core.events import EventType, LogMessage

if TYPE_CHECKING:
    from ...core.events import EventManager, GameEvent


class LogCategory(Enum):
    """Subsystem a log entry came from. The value is its display tag."""
    SYSTEM = "SYS"
    BATTLE = "BTL"
    MOVEMENT = "MOV"
    AI = "AI"
    DEBUG = "DBG"
    WARNING = "WRN"
    ERROR = "ERR"

    @classmethod
    def parse(cls, name: str) -> "LogCategory":
        """Category named by a LogMessage, SYSTEM when the name is unknown."""
        return cls.__members__.get(name.upper(), cls.SYSTEM)


class LogLevel(Enum):
    """Severity, ordered from most to least verbose."""
    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3

    @classmethod
    def parse(cls, name: str) -> "LogLevel":
        return cls.__members__.get(name.upper(), cls.INFO)

    def at_least(self, other: "LogLevel") -> bool:
        return self.value >= other.value


@dataclass(frozen=True)
class LogEntry:
    """One stored log line."""
    text: str
    category: LogCategory
    level: LogLevel = LogLevel.INFO
    round_number: int = 0
    source: str = ""
    timestamp: datetime = field(default_factory=datetime.now)

    def format(self, include_round: bool = False, include_timestamp: bool = False) -> str:
        """Render as ``[BTL] text``, optionally prefixed with round and time."""
        prefix = ""
        if include_timestamp:
            prefix += self.timestamp.strftime("%H:%M:%S ")
        if include_round:
            prefix += f"R{self.round_number} "
        return f"{prefix}[{self.category.value}] {self.text}"


class LogManager:
    """Bounded, filterable store of LogMessage events.

    Filtering happens on read: entries below ``log_level`` or in a disabled
    category stay in the buffer and reappear when the filter is relaxed.
    """

    def __init__(
        self,
        event_manager: "EventManager",
        max_messages: int = 1000,
        default_level: LogLevel = LogLevel.INFO
    ):
        self.event_manager = event_manager
        self.messages: deque[LogEntry] = deque(maxlen=max_messages)
        self.log_level = default_level
        self.enabled_categories: set[LogCategory] = set(LogCategory)

        self.event_manager.subscribe(EventType.LOG_MESSAGE, self._on_log_message, subscriber_name="LogManager")

    def _on_log_message(self, event: "GameEvent") -> None:
        if isinstance(event, LogMessage):
            self.messages.append(LogEntry(
                text=event.message,
                category=LogCategory.parse(event.category),
                level=LogLevel.parse(event.level),
                round_number=event.round_number,
                source=event.source,
            ))

    # ============== Direct entries ==============

    def log(self, text: str, category: LogCategory = LogCategory.SYSTEM, level: LogLevel = LogLevel.INFO) -> None:
        """Store an entry without going through the event bus."""
        self.messages.append(LogEntry(text=text, category=category, level=level, source="LogManager"))

    def system(self, text: str) -> None:
        self.log(text, LogCategory.SYSTEM)

    def warning(self, text: str) -> None:
        self.log(text, LogCategory.WARNING, LogLevel.WARNING)

    def error(self, text: str) -> None:
        self.log(text, LogCategory.ERROR, LogLevel.ERROR)

    # ============== Reading ==============

    def _visible(self, entry: LogEntry, categories: Iterable[LogCategory]) -> bool:
        return (entry.category in categories
                and entry.category in self.enabled_categories
                and entry.level.at_least(self.log_level))

    def get_messages(self, count: Optional[int] = None,
                     categories: Optional[set[LogCategory]] = None) -> list[LogEntry]:
        """Visible entries, oldest first.

        Args:
            count: Return only the newest ``count`` entries
            categories: Restrict to these categories (still subject to the enabled set)
        """
        wanted = self.enabled_categories if categories is None else categories
        visible = [entry for entry in self.messages if self._visible(entry, wanted)]
        if count is None:
            return visible
        return visible[-count:] if count > 0 else []

    def formatted_messages(self, count: Optional[int] = None) -> list[str]:
        return [entry.format() for entry in self.get_messages(count)]

    def clear(self) -> None:
        self.messages.clear()

    # ============== Filters ==============

    def enable_category(self, category: LogCategory) -> None:
        self.enabled_categories.add(category)

    def disable_category(self, category: LogCategory) -> None:
        self.enabled_categories.discard(category)

    def set_log_level(self, level: LogLevel) -> None:
        self.log_level = level

    def is_debug_enabled(self) -> bool:
        return self.log_level == LogLevel.DEBUG

    def shutdown(self) -> None:
        """Stop collecting LogMessage events."""
        self.event_manager.unsubscribe(EventType.LOG_MESSAGE, self._on_log_message)
