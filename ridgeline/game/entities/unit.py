"""Unit: a combatant's identity, stats and position.

Units are passive state. Position is assigned by the Board and hit points
are reduced by combat resolution; the unit itself only answers questions
about what it is.
"""

from dataclasses import dataclass, field
from typing import Optional

from ...core.data import (
    AttackType,
    Team,
    UnitClass,
    Vector2,
    ATTACK_DATA,
    UNIT_CLASS_DATA,
)


@dataclass(eq=False)
class Unit:
    """A single combatant.

    Identity compares by object, not by field values, so two goblins with
    the same stats are still distinct units.

    Examples:
        unit.is_alive          # hp_current > 0
        unit.attack_type       # AttackType.RANGED for an Archer
        unit.display_label     # "Archer", or the enemy's own name
    """
    unit_id: str
    name: str
    unit_class: UnitClass
    team: Team
    hp_max: int
    move_range: int
    attack_range: int
    hp_current: int = field(default=-1)
    position: Optional[Vector2] = None
    has_acted: bool = False
    ai_behavior: Optional[str] = None

    def __post_init__(self):
        if self.hp_max <= 0:
            raise ValueError(f"{self.name}: hp_max must be positive, got {self.hp_max}")
        if self.move_range < 0 or self.attack_range < 0:
            raise ValueError(f"{self.name}: ranges must not be negative")
        if self.hp_current < 0:
            self.hp_current = self.hp_max

    # ============== Derived queries ==============

    @property
    def is_alive(self) -> bool:
        return self.hp_current > 0

    @property
    def is_player(self) -> bool:
        return self.team == Team.PLAYER

    @property
    def attack_type(self) -> AttackType:
        """Attack pattern the unit uses; every enemy kind fights in melee."""
        if not self.is_player:
            return AttackType.MELEE
        return UNIT_CLASS_DATA[self.unit_class].attack_type

    @property
    def range_description(self) -> str:
        return ATTACK_DATA[self.attack_type].range_description

    @property
    def display_label(self) -> str:
        """Class name for the player's squad, the unit's own name for enemies."""
        if self.is_player:
            return UNIT_CLASS_DATA[self.unit_class].name
        return self.name

    # ============== State changes (called by Board and CombatResolver) ==============

    def take_damage(self, damage: int) -> int:
        """Reduce hit points, never below zero, and return the hit points left."""
        self.hp_current = max(0, self.hp_current - damage)
        return self.hp_current

    def __repr__(self) -> str:
        return (f"Unit({self.unit_id!r}, {self.display_label}, hp={self.hp_current}/{self.hp_max}, "
                f"position={self.position})")
