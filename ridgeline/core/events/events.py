"""Game events published on the event bus.

Event Design Principles:
- Events are immutable dataclasses carrying rich objects plus the numbers
  that were true at publish time (HP left, damage dealt)
- Every event knows the round it happened in
- Narrated events render themselves to a human-readable sentence through
  ``describe()``; diagnostic events (LogMessage) return None and never reach
  the narration list
"""

from dataclasses import dataclass, field
from typing import Optional, TYPE_CHECKING
from abc import ABC
from enum import Enum, auto

from ..data import MatchOutcome, Vector2, coord_label

if TYPE_CHECKING:
    from ...game.entities.unit import Unit
    from ...game.tile import Tile
    from ..engine.game_state import BattlePhase


class EventType(Enum):
    """Types of game events that managers can subscribe to."""
    # Match flow
    MATCH_STARTED = auto()
    MATCH_ENDED = auto()
    PHASE_CHANGED = auto()

    # Player activation
    UNIT_SELECTED = auto()
    CURSOR_MOVED = auto()
    UNIT_WAITED = auto()

    # Unit Events
    UNIT_MOVED = auto()
    UNIT_ATTACKED = auto()
    UNIT_DEFEATED = auto()

    # Logging Events
    LOG_MESSAGE = auto()


@dataclass(frozen=True)
class GameEvent(ABC):
    """Base class for all game events."""
    round_number: int
    event_type: EventType = field(init=False)

    def describe(self) -> Optional[str]:
        """Narration for the presentation layer, or None if not narrated."""
        return None


@dataclass(frozen=True)
class MatchStarted(GameEvent):
    """Event emitted when a fresh match has been set up."""

    def __post_init__(self):
        # Set event_type since dataclass frozen=True prevents normal assignment
        object.__setattr__(self, 'event_type', EventType.MATCH_STARTED)

    def describe(self) -> Optional[str]:
        return "Game started. Player turn."


@dataclass(frozen=True)
class MatchEnded(GameEvent):
    """Event emitted when one side has been wiped out."""
    outcome: MatchOutcome

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.MATCH_ENDED)

    def describe(self) -> Optional[str]:
        if self.outcome == MatchOutcome.VICTORY:
            return "Victory! All enemies defeated."
        return "Defeat! All your units have fallen."


@dataclass(frozen=True)
class PhaseChanged(GameEvent):
    """Event emitted when control passes between the player and enemy phase."""
    phase: "BattlePhase"

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.PHASE_CHANGED)

    def describe(self) -> Optional[str]:
        return f"{self.phase.label} turn."


@dataclass(frozen=True)
class UnitSelected(GameEvent):
    """Event emitted when a player unit becomes the active unit."""
    unit: "Unit"
    position: Vector2
    hp_current: int

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.UNIT_SELECTED)

    def describe(self) -> Optional[str]:
        return f"Selected {self.unit.display_label} at {coord_label(self.position)}. HP: {self.hp_current}"


@dataclass(frozen=True)
class CursorMoved(GameEvent):
    """Event emitted when the selection cursor moves to a new tile."""
    tile: "Tile"

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.CURSOR_MOVED)

    def describe(self) -> Optional[str]:
        return self.tile.label()


@dataclass(frozen=True)
class UnitWaited(GameEvent):
    """Event emitted when a player unit ends its activation."""
    unit: "Unit"

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.UNIT_WAITED)

    def describe(self) -> Optional[str]:
        return f"{self.unit.display_label} waits."


@dataclass(frozen=True)
class UnitMoved(GameEvent):
    """Event emitted when a unit moves to a new position."""
    unit: "Unit"
    from_position: Vector2
    to_position: Vector2

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.UNIT_MOVED)

    def describe(self) -> Optional[str]:
        text = f"{self.unit.display_label} moved to {coord_label(self.to_position)}."
        if self.unit.is_player:
            text += " You may now attack or wait."
        return text


@dataclass(frozen=True)
class UnitAttacked(GameEvent):
    """Event emitted after an attack has been resolved against a target."""
    attacker: "Unit"
    target: "Unit"
    damage: int
    remaining_hp: int
    range_description: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.UNIT_ATTACKED)

    def describe(self) -> Optional[str]:
        attacker = self.attacker.display_label
        target = self.target.display_label
        hp_left = max(0, self.remaining_hp)
        if self.attacker.is_player:
            text = f"{attacker} attacked {target} for {self.damage} damage. {target} has {hp_left} HP left."
            if self.range_description:
                text += f" (Range: {self.range_description})"
            return text
        return f"{attacker} attacks {target} for {self.damage} damage. {target} has {hp_left} HP left."


@dataclass(frozen=True)
class UnitDefeated(GameEvent):
    """Event emitted when a unit is defeated and removed from the board."""
    unit: "Unit"
    position: Vector2

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.UNIT_DEFEATED)

    def describe(self) -> Optional[str]:
        return f"{self.unit.display_label} defeated!"


@dataclass(frozen=True)
class LogMessage(GameEvent):
    """Event emitted when a log message is created."""
    message: str
    category: str
    level: str
    source: str

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.LOG_MESSAGE)
