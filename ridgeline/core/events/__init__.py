"""Event system for publisher-subscriber communication.

This package contains the complete event-driven architecture:
- event_manager.py: Publisher-subscriber event routing and coordination
- events.py: Event definitions for narration and diagnostics
"""

from .event_manager import EventManager, EventPriority, QueuedEvent
from .events import (
    GameEvent,
    EventType,
    MatchStarted,
    MatchEnded,
    PhaseChanged,
    UnitSelected,
    CursorMoved,
    UnitWaited,
    UnitMoved,
    UnitAttacked,
    UnitDefeated,
    LogMessage,
)

__all__ = [
    "EventManager",
    "EventPriority",
    "QueuedEvent",
    "GameEvent",
    "EventType",
    "MatchStarted",
    "MatchEnded",
    "PhaseChanged",
    "UnitSelected",
    "CursorMoved",
    "UnitWaited",
    "UnitMoved",
    "UnitAttacked",
    "UnitDefeated",
    "LogMessage",
]
