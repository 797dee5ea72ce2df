"""Core data structures and definitions.

This package contains fundamental data types and game definitions:
- data_structures.py: Vector2 and VectorArray for spatial operations
- game_enums.py: Centralized enums for teams, unit classes, attack types
- game_info.py: Static game data and lookup tables
"""

from .data_structures import Vector2, VectorArray, coord_label
from .game_enums import (
    Team,
    UnitClass,
    AttackType,
    MatchOutcome,
    UNIT_CLASS_NAMES,
    ATTACK_TYPE_NAMES,
)
from .game_info import (
    AttackInfo,
    UnitClassInfo,
    ATTACK_DATA,
    UNIT_CLASS_DATA,
    ELEVATION_DAMAGE_STEP,
    MIN_DAMAGE,
    ENEMY_ATTACK_DAMAGE,
    ENEMY_MIN_STEPS,
    MAX_ELEVATION,
    HIGH_GROUND_CHANCE,
    HILL_CHANCE,
)

__all__ = [
    "Vector2",
    "VectorArray",
    "coord_label",
    "Team",
    "UnitClass",
    "AttackType",
    "MatchOutcome",
    "UNIT_CLASS_NAMES",
    "ATTACK_TYPE_NAMES",
    "AttackInfo",
    "UnitClassInfo",
    "ATTACK_DATA",
    "UNIT_CLASS_DATA",
    "ELEVATION_DAMAGE_STEP",
    "MIN_DAMAGE",
    "ENEMY_ATTACK_DAMAGE",
    "ENEMY_MIN_STEPS",
    "MAX_ELEVATION",
    "HIGH_GROUND_CHANCE",
    "HILL_CHANCE",
]
