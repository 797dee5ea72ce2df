"""
Enemy phase controller.

Runs the whole enemy phase in one call. Every enemy alive at phase start
first moves according to its behavior, then each one that ended adjacent to
its chosen target strikes it for a fixed amount of damage. Events are
published per enemy in roster order (move, then attack and defeat) so the
narration reads as one enemy acting at a time.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from ...core.data import Vector2, ENEMY_ATTACK_DAMAGE
from ...core.events import LogMessage, UnitMoved
from .ai_behaviors import AIBehavior, create_ai_behavior, parse_ai_type

if TYPE_CHECKING:
    from ..board import Board
    from ..combat_resolver import CombatResolver, CombatResult
    from ..entities.unit import Unit
    from ...core.events import EventManager


@dataclass
class EnemyActivation:
    """What one enemy did during the phase."""
    enemy: "Unit"
    target: Optional["Unit"] = None
    from_position: Optional[Vector2] = None
    to_position: Optional[Vector2] = None
    attack: Optional["CombatResult"] = None

    @property
    def moved(self) -> bool:
        return self.to_position is not None and self.to_position != self.from_position


class EnemyAIController:
    """Moves and attacks with every living enemy, one phase at a time."""

    def __init__(
        self,
        board: "Board",
        player_units: list["Unit"],
        enemy_units: list["Unit"],
        combat_resolver: "CombatResolver",
        event_manager: "EventManager",
        attack_damage: int = ENEMY_ATTACK_DAMAGE,
    ):
        self.board = board
        self.player_units = player_units
        self.enemy_units = enemy_units
        self.combat_resolver = combat_resolver
        self.event_manager = event_manager
        self.attack_damage = attack_damage
        self._behaviors: dict[str, AIBehavior] = {}

    def _emit_log(self, message: str, round_number: int, level: str = "DEBUG") -> None:
        """Emit a log message event."""
        self.event_manager.publish(
            LogMessage(
                round_number=round_number,
                message=message,
                category="AI",
                level=level,
                source="EnemyAIController"
            ),
            source="EnemyAIController"
        )

    def behavior_for(self, enemy: "Unit") -> AIBehavior:
        """Behavior named by the enemy's roster entry, created once per unit."""
        behavior = self._behaviors.get(enemy.unit_id)
        if behavior is None:
            behavior = create_ai_behavior(parse_ai_type(enemy.ai_behavior))
            self._behaviors[enemy.unit_id] = behavior
        return behavior

    def run_phase(self, round_number: int = 0) -> list[EnemyActivation]:
        """Resolve the full enemy phase.

        Returns:
            One EnemyActivation per enemy that was alive at phase start, in roster order
        """
        acting = [enemy for enemy in self.enemy_units if enemy.is_alive]
        activations = [EnemyActivation(enemy=enemy) for enemy in acting]

        for activation in activations:
            self._move(activation, round_number)

        for activation in activations:
            if activation.moved:
                assert activation.from_position is not None and activation.to_position is not None
                self.event_manager.publish(
                    UnitMoved(
                        round_number=round_number,
                        unit=activation.enemy,
                        from_position=activation.from_position,
                        to_position=activation.to_position,
                    ),
                    source="EnemyAIController"
                )
            self._attack(activation, round_number)

        return activations

    def _move(self, activation: EnemyActivation, round_number: int) -> None:
        enemy = activation.enemy
        if not enemy.is_alive or enemy.position is None:
            return

        behavior = self.behavior_for(enemy)
        decision = behavior.choose_action(enemy, self.board, self.player_units)
        activation.target = decision.target
        activation.from_position = enemy.position
        self._emit_log(f"{enemy.display_label} ({behavior.get_behavior_name()}): {decision.reasoning}", round_number)

        destination = decision.destination
        if destination is not None and self.board.move_unit(enemy, destination):
            activation.to_position = destination

    def _attack(self, activation: EnemyActivation, round_number: int) -> None:
        enemy = activation.enemy
        target = activation.target
        if target is None or not enemy.is_alive or enemy.position is None:
            return
        if not target.is_alive or target.position is None:
            self._emit_log(f"{enemy.display_label}: target {target.display_label} already defeated", round_number)
            return
        if enemy.position.manhattan_distance_to(target.position) != 1:
            return

        activation.attack = self.combat_resolver.apply_damage(enemy, target, self.attack_damage, round_number)
