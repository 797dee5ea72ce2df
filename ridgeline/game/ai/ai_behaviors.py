"""AI Behavior Strategy Classes

This module implements the Strategy design pattern for enemy behaviors.
A behavior picks a target and plans the steps toward it; the controller
applies the plan to the board.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, Optional

from ...core.data import Vector2, ENEMY_MIN_STEPS

if TYPE_CHECKING:
    from ..board import Board
    from ..entities.unit import Unit


class AIType(Enum):
    """Available AI behavior types."""
    AGGRESSIVE = auto()
    INACTIVE = auto()


@dataclass
class AIDecision:
    """Represents an AI decision: who to chase and the tiles to walk through."""
    target: Optional["Unit"] = None
    path: list[Vector2] = field(default_factory=list)
    reasoning: str = ""

    @property
    def destination(self) -> Optional[Vector2]:
        return self.path[-1] if self.path else None


class AIBehavior(ABC):
    """Abstract base class for AI behavior strategies."""

    @abstractmethod
    def choose_action(self, unit: "Unit", board: "Board", opponents: list["Unit"]) -> AIDecision:
        """Choose a target and movement path for this unit.

        Args:
            unit: The unit making the decision
            board: The current board
            opponents: The opposing roster in roster order (may include defeated units)

        Returns:
            AIDecision with target and path information
        """
        pass

    @abstractmethod
    def get_behavior_name(self) -> str:
        """Get the name of this AI behavior."""
        pass


class AggressiveAI(AIBehavior):
    """Aggressive AI that chases the nearest opponent and closes to melee range."""

    def nearest_player(self, unit: "Unit", opponents: list["Unit"]) -> Optional["Unit"]:
        """Closest living opponent; ties go to the lower current HP, then roster order."""
        assert unit.position is not None
        nearest = None
        nearest_distance = 0
        for other in opponents:
            if not other.is_alive or other.position is None:
                continue
            distance = unit.position.manhattan_distance_to(other.position)
            if (nearest is None or distance < nearest_distance
                    or (distance == nearest_distance and other.hp_current < nearest.hp_current)):
                nearest = other
                nearest_distance = distance
        return nearest

    def next_step(self, current: Vector2, goal: Vector2, board: "Board") -> Optional[Vector2]:
        """One greedy step from current toward goal, or None when blocked.

        The sign-vector step (diagonal when both axes differ) is taken when
        free. Otherwise the first of horizontal, vertical, opposite
        horizontal and opposite vertical that is free and strictly closer.
        """
        step = (goal - current).sign()
        candidate = current + step
        if step != Vector2(0, 0) and board.is_valid_position(candidate) and not board.is_occupied(candidate):
            return candidate

        distance = current.manhattan_distance_to(goal)
        options = [
            Vector2(0, step.x), Vector2(step.y, 0),
            Vector2(0, -step.x), Vector2(-step.y, 0),
        ]
        for option in options:
            if option == Vector2(0, 0):
                continue
            candidate = current + option
            if (board.is_valid_position(candidate) and not board.is_occupied(candidate)
                    and candidate.manhattan_distance_to(goal) < distance):
                return candidate
        return None

    def plan_path(self, unit: "Unit", goal: Vector2, board: "Board") -> list[Vector2]:
        """Tiles visited on the way to goal, stopping once adjacent."""
        assert unit.position is not None
        current = unit.position
        path: list[Vector2] = []
        for _ in range(max(ENEMY_MIN_STEPS, unit.move_range)):
            if current.manhattan_distance_to(goal) == 1:
                break
            step = self.next_step(current, goal, board)
            if step is None:
                break
            path.append(step)
            current = step
        return path

    def choose_action(self, unit: "Unit", board: "Board", opponents: list["Unit"]) -> AIDecision:
        target = self.nearest_player(unit, opponents)
        if target is None or target.position is None:
            return AIDecision(reasoning="No opponents left on the board")

        path = self.plan_path(unit, target.position, board)
        if path:
            reasoning = f"Closing on {target.display_label} in {len(path)} step(s)"
        else:
            reasoning = f"Holding position against {target.display_label}"
        return AIDecision(target=target, path=path, reasoning=reasoning)

    def get_behavior_name(self) -> str:
        return "Aggressive"


class InactiveAI(AIBehavior):
    """Inactive AI that never moves or picks a target."""

    def choose_action(self, unit: "Unit", board: "Board", opponents: list["Unit"]) -> AIDecision:
        """Always stand still."""
        return AIDecision(reasoning="Inactive AI always waits")

    def get_behavior_name(self) -> str:
        return "Inactive"


def create_ai_behavior(ai_type: AIType) -> AIBehavior:
    """Factory function to create AI behavior instances.

    Args:
        ai_type: Type of AI behavior to create

    Returns:
        AIBehavior instance

    Raises:
        ValueError: If ai_type is not supported
    """
    if ai_type == AIType.AGGRESSIVE:
        return AggressiveAI()
    elif ai_type == AIType.INACTIVE:
        return InactiveAI()
    else:
        raise ValueError(f"Unsupported AI type: {ai_type}")


def parse_ai_type(name: Optional[str]) -> AIType:
    """Map a roster ``ai`` field to an AIType; missing means aggressive."""
    if name is None:
        return AIType.AGGRESSIVE
    try:
        return AIType[name.upper()]
    except KeyError:
        raise ValueError(f"Unknown AI type: {name!r}")
