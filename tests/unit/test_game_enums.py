"""
Unit tests for game enumerations and static tables.

Tests the enums shared across the engine and the class and attack lookup
tables built from them.
"""
import pytest

from ridgeline.core.data import (
    ATTACK_DATA,
    ATTACK_TYPE_NAMES,
    UNIT_CLASS_DATA,
    UNIT_CLASS_NAMES,
    AttackType,
    MatchOutcome,
    Team,
    UnitClass,
)


class TestTeam:
    """Test the Team enumeration."""

    def test_team_values(self):
        assert Team.PLAYER.value == 0
        assert Team.ENEMY.value == 1

    def test_opponent(self):
        assert Team.PLAYER.opponent == Team.ENEMY
        assert Team.ENEMY.opponent == Team.PLAYER


class TestTables:
    """Test that every enum member has table entries."""

    def test_every_class_has_data(self):
        assert set(UNIT_CLASS_DATA) == set(UnitClass)
        assert set(UNIT_CLASS_NAMES) == set(UnitClass)

    def test_every_attack_type_has_data(self):
        assert set(ATTACK_DATA) == set(AttackType)
        assert set(ATTACK_TYPE_NAMES) == set(AttackType)

    @pytest.mark.parametrize("unit_class,attack_type", [
        (UnitClass.WARRIOR, AttackType.MELEE),
        (UnitClass.ARCHER, AttackType.RANGED),
        (UnitClass.MAGE, AttackType.MAGIC),
        (UnitClass.GOBLIN, AttackType.MELEE),
        (UnitClass.ORC, AttackType.MELEE),
        (UnitClass.TROLL, AttackType.MELEE),
        (UnitClass.IMP, AttackType.MELEE),
    ])
    def test_class_attack_types(self, unit_class, attack_type):
        assert UNIT_CLASS_DATA[unit_class].attack_type == attack_type

    @pytest.mark.parametrize("attack_type,base_damage", [
        (AttackType.MELEE, 25),
        (AttackType.RANGED, 18),
        (AttackType.MAGIC, 15),
    ])
    def test_base_damage(self, attack_type, base_damage):
        assert ATTACK_DATA[attack_type].base_damage == base_damage

    def test_match_outcomes(self):
        assert [outcome.name for outcome in MatchOutcome] == ["IN_PROGRESS", "VICTORY", "DEFEAT"]
