"""Centralized game enums and constants.

This module contains all core game enums that are used across multiple modules,
eliminating duplication and providing a single source of truth.
"""

from enum import Enum, auto


class Team(Enum):
    """Team affiliations for units."""
    PLAYER = 0
    ENEMY = 1

    @property
    def opponent(self) -> "Team":
        return Team.ENEMY if self == Team.PLAYER else Team.PLAYER


class UnitClass(Enum):
    """Unit classes: three player archetypes and the named enemy kinds."""
    WARRIOR = auto()
    ARCHER = auto()
    MAGE = auto()
    GOBLIN = auto()
    ORC = auto()
    TROLL = auto()
    IMP = auto()


class AttackType(Enum):
    """Fundamental attack types for combat."""
    MELEE = auto()
    RANGED = auto()
    MAGIC = auto()


class MatchOutcome(Enum):
    """Result of a match as seen by the player."""
    IN_PROGRESS = auto()
    VICTORY = auto()
    DEFEAT = auto()


# Convenience mappings for display
UNIT_CLASS_NAMES = {
    UnitClass.WARRIOR: "Warrior",
    UnitClass.ARCHER: "Archer",
    UnitClass.MAGE: "Mage",
    UnitClass.GOBLIN: "Goblin",
    UnitClass.ORC: "Orc",
    UnitClass.TROLL: "Troll",
    UnitClass.IMP: "Imp",
}

ATTACK_TYPE_NAMES = {
    AttackType.MELEE: "melee",
    AttackType.RANGED: "ranged",
    AttackType.MAGIC: "magic",
}
