"""
Unit tests for the read-only GameView facade and its narration helpers.
"""
import dataclasses

import pytest

from ridgeline.core.data import AttackType, MatchOutcome, Team, Vector2
from ridgeline.core.engine import BattlePhase


class TestQueries:
    """Test board and roster snapshots."""

    def test_dimensions(self, match):
        assert match.view.get_map_dimensions() == (10, 10)
        assert match.view.is_valid_position(Vector2(9, 9))
        assert not match.view.is_valid_position(Vector2(10, 0))

    def test_tile_view(self, match):
        tile = match.view.tile(Vector2(0, 0))
        assert tile.coordinate == "A1"
        assert tile.elevation == 0
        assert tile.occupant.display_label == "Warrior"
        assert tile.occupant.team == Team.PLAYER
        assert match.view.tile(Vector2(-1, 0)) is None
        assert match.view.tile(Vector2(5, 5)).occupant is None

    def test_views_are_read_only(self, match):
        view = match.view.get_unit_at(Vector2(0, 0))
        with pytest.raises(dataclasses.FrozenInstanceError):
            view.hp_current = 1

    def test_rosters(self, match):
        players = match.view.player_units()
        enemies = match.view.enemy_units()
        assert [unit.display_label for unit in players] == ["Warrior", "Archer", "Mage"]
        assert [unit.display_label for unit in enemies] == ["Goblin", "Orc", "Troll", "Imp"]
        assert [unit.attack_type for unit in players] == [AttackType.MELEE, AttackType.RANGED, AttackType.MAGIC]
        assert match.view.count_units(Team.ENEMY) == 4

    def test_defeated_units_stay_in_roster(self, match):
        imp = match.enemy_units[3]
        imp.take_damage(imp.hp_max)
        match.board.remove_unit(imp)

        assert match.view.count_units(Team.ENEMY) == 3
        assert match.view.count_units(Team.ENEMY, alive=False) == 4
        assert match.view.enemy_units()[3].position is None

    def test_turn_queries(self, match):
        assert match.view.phase == BattlePhase.PLAYER_PHASE
        assert match.view.cursor == Vector2(0, 0)
        assert match.view.active_unit.display_label == "Warrior"
        assert match.view.outcome == MatchOutcome.IN_PROGRESS
        assert match.view.round_number == 1


class TestNarrationHelpers:
    """Test status report, unit details and enemy status texts."""

    def test_unit_details(self, match):
        mage = match.view.player_units()[2]
        assert match.view.unit_details(mage) == "Mage. HP: 60/60. Move: 2, Attack: 2 (magic)"

    def test_status_unoccupied(self, match):
        assert match.view.status_report(Vector2(5, 5)) == "Status for F6: Ground Level, Unoccupied"

    def test_status_off_board(self, match):
        assert match.view.status_report(Vector2(12, 0)) == "M1 is outside the board."

    def test_status_flat_no_enemies(self, match):
        assert match.view.status_report() == (
            "Status for A1: Ground Level, Occupied by Warrior (HP: 100). "
            "No reachable elevated tiles. No enemies are reachable for attack this turn."
        )

    def test_status_lists_elevated_tiles(self, match):
        match.board.set_elevation(Vector2(0, 1), 1)
        match.board.set_elevation(Vector2(0, 2), 2)
        match.board.set_elevation(Vector2(0, 9), 2)

        assert match.view.status_report() == (
            "Status for A1: Ground Level, Occupied by Warrior (HP: 100). "
            "Reachable elevated tiles (2): elevation 1: A2. elevation 2: A3. "
            "No enemies are reachable for attack this turn."
        )

    def test_status_lists_attackable_enemies(self, match):
        match.board.place_unit(match.enemy_units[0], Vector2(0, 5))

        assert match.view.status_report().endswith(" You can move and attack: Goblin at A6.")

    def test_enemy_status(self, match):
        goblin = match.view.enemy_units()[0]
        assert match.view.enemy_status(goblin) == "Goblin at J10. HP: 50"
