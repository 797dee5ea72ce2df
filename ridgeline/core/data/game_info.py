"""Static game data and lookup tables.

Unit class and attack type information lives here so combat, AI and
narration all read the same numbers.
"""

from dataclasses import dataclass
from typing import Dict

from .data_structures import Vector2, VectorArray
from .game_enums import AttackType, UnitClass, ATTACK_TYPE_NAMES, UNIT_CLASS_NAMES


# Elevation levels a tile may carry and the odds used at board generation.
# A tile rolls for HIGH_GROUND first; only on a miss does it roll for a hill.
MAX_ELEVATION = 2
HIGH_GROUND_CHANCE = 0.1
HILL_CHANCE = 0.2

# Damage added per elevation level the attacker stands above the defender.
ELEVATION_DAMAGE_STEP = 5
MIN_DAMAGE = 1

# Enemy phase uses a flat hit instead of the attack-type formula.
ENEMY_ATTACK_DAMAGE = 12
ENEMY_MIN_STEPS = 2

# Straight-line reach of ranged attacks and half-width of the magic box.
RANGED_REACH = 3
MAGIC_RADIUS = 2


def _line_offsets(reach: int) -> VectorArray:
    offsets = []
    for distance in range(1, reach + 1):
        offsets.extend([
            Vector2(0, distance), Vector2(0, -distance),
            Vector2(distance, 0), Vector2(-distance, 0),
        ])
    return VectorArray(offsets)


@dataclass(frozen=True)
class AttackInfo:
    """Static information about an attack type."""
    name: str
    base_damage: int
    range_description: str
    offsets: VectorArray


@dataclass(frozen=True)
class UnitClassInfo:
    """Static information about a unit class."""
    name: str
    attack_type: AttackType


ATTACK_DATA: Dict[AttackType, AttackInfo] = {
    AttackType.MELEE: AttackInfo(
        ATTACK_TYPE_NAMES[AttackType.MELEE], 25,
        "adjacent (1 tile)",
        _line_offsets(1),
    ),
    AttackType.RANGED: AttackInfo(
        ATTACK_TYPE_NAMES[AttackType.RANGED], 18,
        f"up to {RANGED_REACH} tiles (straight lines)",
        _line_offsets(RANGED_REACH),
    ),
    AttackType.MAGIC: AttackInfo(
        ATTACK_TYPE_NAMES[AttackType.MAGIC], 15,
        f"any enemy within {MAGIC_RADIUS} tiles",
        VectorArray.from_ranges((-MAGIC_RADIUS, MAGIC_RADIUS), (-MAGIC_RADIUS, MAGIC_RADIUS)),
    ),
}

UNIT_CLASS_DATA: Dict[UnitClass, UnitClassInfo] = {
    UnitClass.WARRIOR: UnitClassInfo(UNIT_CLASS_NAMES[UnitClass.WARRIOR], AttackType.MELEE),
    UnitClass.ARCHER: UnitClassInfo(UNIT_CLASS_NAMES[UnitClass.ARCHER], AttackType.RANGED),
    UnitClass.MAGE: UnitClassInfo(UNIT_CLASS_NAMES[UnitClass.MAGE], AttackType.MAGIC),
    UnitClass.GOBLIN: UnitClassInfo(UNIT_CLASS_NAMES[UnitClass.GOBLIN], AttackType.MELEE),
    UnitClass.ORC: UnitClassInfo(UNIT_CLASS_NAMES[UnitClass.ORC], AttackType.MELEE),
    UnitClass.TROLL: UnitClassInfo(UNIT_CLASS_NAMES[UnitClass.TROLL], AttackType.MELEE),
    UnitClass.IMP: UnitClassInfo(UNIT_CLASS_NAMES[UnitClass.IMP], AttackType.MELEE),
}
