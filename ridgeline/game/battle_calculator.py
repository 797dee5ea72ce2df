"""
Battle calculation system for damage computation and forecasting.

This module holds the damage formula on its own so that the UI can show
predictions without touching game state, and so combat resolution and
forecasts can never disagree.
"""
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..core.data import AttackType, ATTACK_DATA, ELEVATION_DAMAGE_STEP, MIN_DAMAGE

if TYPE_CHECKING:
    from .board import Board
    from .entities.unit import Unit


@dataclass(frozen=True)
class BattleForecast:
    """Predicted outcome of one attack."""
    attacker_name: str
    defender_name: str
    damage: int
    elevation_modifier: int
    remaining_hp: int
    would_defeat: bool


class BattleCalculator:
    """Calculates attack damage and forecasts."""

    @staticmethod
    def base_damage(attack_type: AttackType) -> int:
        return ATTACK_DATA[attack_type].base_damage

    @staticmethod
    def elevation_modifier(attacker_elevation: int, defender_elevation: int) -> int:
        """Bonus (or penalty) from standing above (or below) the defender."""
        return (attacker_elevation - defender_elevation) * ELEVATION_DAMAGE_STEP

    @staticmethod
    def calculate_damage(attacker: "Unit", defender: "Unit", board: "Board") -> int:
        """
        Damage the attacker would deal to the defender from their current tiles.

        Base damage by attack type plus the elevation modifier, never below 1.

        Raises:
            ValueError: If either unit is not on the board
        """
        attacker_elevation, defender_elevation = BattleCalculator._elevations(attacker, defender, board)
        damage = BattleCalculator.base_damage(attacker.attack_type)
        damage += BattleCalculator.elevation_modifier(attacker_elevation, defender_elevation)
        return max(MIN_DAMAGE, damage)

    @staticmethod
    def forecast(attacker: "Unit", defender: "Unit", board: "Board") -> BattleForecast:
        """Predict an attack without applying it."""
        attacker_elevation, defender_elevation = BattleCalculator._elevations(attacker, defender, board)
        damage = BattleCalculator.calculate_damage(attacker, defender, board)
        remaining = max(0, defender.hp_current - damage)
        return BattleForecast(
            attacker_name=attacker.display_label,
            defender_name=defender.display_label,
            damage=damage,
            elevation_modifier=BattleCalculator.elevation_modifier(attacker_elevation, defender_elevation),
            remaining_hp=remaining,
            would_defeat=remaining <= 0,
        )

    @staticmethod
    def _elevations(attacker: "Unit", defender: "Unit", board: "Board") -> tuple[int, int]:
        if attacker.position is None or defender.position is None:
            raise ValueError("Both units must be on the board to compute damage")
        attacker_elevation = board.get_elevation(attacker.position)
        defender_elevation = board.get_elevation(defender.position)
        if attacker_elevation is None or defender_elevation is None:
            raise ValueError("Both units must stand on valid tiles to compute damage")
        return attacker_elevation, defender_elevation
