"""
Combat resolution system for targeting, executing attacks and applying damage.

This module enumerates what a unit can hit from a tile and applies the
resulting damage, removing defeated units from the board and reporting
everything on the event bus.
"""
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from ..core.data import Vector2, VectorArray, ATTACK_DATA
from ..core.events import LogMessage, UnitAttacked, UnitDefeated
from .battle_calculator import BattleCalculator

if TYPE_CHECKING:
    from .board import Board
    from .entities.unit import Unit
    from ..core.events import EventManager


@dataclass
class CombatResult:
    """Result of a combat action."""
    attacker: "Unit"
    target: "Unit"
    damage: int
    remaining_hp: int
    defeated: bool = False
    defeated_position: Optional[Vector2] = None


class CombatResolver:
    """Handles attack targeting and damage application."""

    def __init__(self, board: "Board", event_manager: "EventManager"):
        self.board = board
        self.event_manager = event_manager

    def _emit_log(self, message: str, round_number: int = 0, category: str = "BATTLE", level: str = "INFO") -> None:
        """Emit a log message event."""
        self.event_manager.publish(
            LogMessage(
                round_number=round_number,
                message=message,
                category=category,
                level=level,
                source="CombatResolver"
            ),
            source="CombatResolver"
        )

    # ============== Targeting ==============

    def attack_area(self, unit: "Unit", anchor: Optional[Vector2] = None) -> VectorArray:
        """On-board tiles the unit's attack pattern covers from anchor (default: its position)."""
        origin = anchor if anchor is not None else unit.position
        if origin is None:
            return VectorArray()
        offsets = ATTACK_DATA[unit.attack_type].offsets
        return offsets.translate(origin).filter_by_bounds(0, self.board.height - 1, 0, self.board.width - 1)

    def attack_targets(self, unit: "Unit", anchor: Optional[Vector2] = None) -> list["Unit"]:
        """
        Living opposing units the unit could hit from anchor.

        Args:
            unit: The attacking unit
            anchor: Tile to attack from; defaults to the unit's current tile

        Returns:
            Targets in pattern order. Each tile holds at most one unit so
            the list has no duplicates.
        """
        candidates = self.board.get_units_in_positions(self.attack_area(unit, anchor))
        return [
            other for other in candidates
            if other.team == unit.team.opponent and other.is_alive
        ]

    def target_at(self, unit: "Unit", position: Vector2) -> Optional["Unit"]:
        """The valid target standing on position, if any."""
        for target in self.attack_targets(unit):
            if target.position == position:
                return target
        return None

    # ============== Damage ==============

    def damage(self, attacker: "Unit", defender: "Unit") -> int:
        """Deterministic damage from the attacker's tile to the defender's tile."""
        return BattleCalculator.calculate_damage(attacker, defender, self.board)

    def execute_attack(self, attacker: "Unit", target: "Unit", round_number: int = 0) -> CombatResult:
        """
        Resolve a player-style attack using the damage formula.

        Args:
            attacker: The unit performing the attack
            target: The target unit

        Returns:
            CombatResult with details of the attack resolution
        """
        damage = self.damage(attacker, target)
        self._emit_log(
            f"{attacker.display_label} ({attacker.attack_type.name.lower()}) -> "
            f"{target.display_label}: base {BattleCalculator.base_damage(attacker.attack_type)}, final {damage}",
            round_number,
            level="DEBUG",
        )
        return self.apply_damage(attacker, target, damage, round_number)

    def apply_damage(self, attacker: "Unit", target: "Unit", damage: int, round_number: int = 0) -> CombatResult:
        """Apply a fixed amount of damage and remove the target if it is defeated."""
        remaining = target.take_damage(damage)
        result = CombatResult(attacker=attacker, target=target, damage=damage, remaining_hp=remaining)

        self.event_manager.publish(
            UnitAttacked(
                round_number=round_number,
                attacker=attacker,
                target=target,
                damage=damage,
                remaining_hp=remaining,
                range_description=attacker.range_description if attacker.is_player else None,
            ),
            source="CombatResolver"
        )
        self._emit_log(f"{attacker.display_label} -> {target.display_label} ({damage} damage)", round_number)

        if not target.is_alive:
            result.defeated = True
            result.defeated_position = self.board.remove_unit(target)
            self.event_manager.publish(
                UnitDefeated(
                    round_number=round_number,
                    unit=target,
                    position=result.defeated_position or Vector2(-1, -1),
                ),
                source="CombatResolver"
            )
            self._emit_log(f"{target.display_label}: Defeated", round_number)

        return result
