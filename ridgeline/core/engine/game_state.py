"""Turn state for the player phase state machine.

This module defines the phases of a round, the activation state of the
player's selected unit and the cursor the player aims with. The dataclasses
hold state only; the rules that move between states live in the turn
controller.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional

from ..data import Vector2


class BattlePhase(Enum):
    """Which side is acting in the current round."""

    PLAYER_PHASE = auto()
    ENEMY_PHASE = auto()

    @property
    def label(self) -> str:
        return "Player" if self == BattlePhase.PLAYER_PHASE else "Enemy"


class TurnPhase(Enum):
    """States of the player phase state machine."""

    IDLE = auto()           # No unit selected
    UNIT_SELECTED = auto()  # Cursor free, move and attack available
    ROUND_ENDED = auto()    # Control handed to the enemy phase


@dataclass
class CursorState:
    """Tracks the selection cursor."""

    position: Vector2 = field(default_factory=lambda: Vector2(0, 0))

    def set_position(self, position: Vector2) -> None:
        self.position = position

    def offset(self, dx: int, dy: int) -> Vector2:
        """Position the cursor would occupy after moving by (dx, dy)."""
        return Vector2(self.position.y + dy, self.position.x + dx)


@dataclass
class TurnState:
    """Transient per-round state of the player phase."""

    phase: BattlePhase = BattlePhase.PLAYER_PHASE
    turn_phase: TurnPhase = TurnPhase.IDLE
    round_number: int = 1
    cursor: CursorState = field(default_factory=CursorState)

    active_unit_index: int = 0
    active_unit_id: Optional[str] = None
    has_moved: bool = False
    has_attacked: bool = False

    def begin_activation(self, index: int, unit_id: str, position: Vector2) -> None:
        """Select a unit: snap the cursor to it and reset its action flags."""
        self.turn_phase = TurnPhase.UNIT_SELECTED
        self.active_unit_index = index
        self.active_unit_id = unit_id
        self.cursor.set_position(position)
        self.has_moved = False
        self.has_attacked = False

    def clear_activation(self) -> None:
        self.active_unit_id = None
        self.has_moved = False
        self.has_attacked = False
