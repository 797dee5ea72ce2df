"""
Integration tests for whole-match flows: victory, defeat, restart and
multi-round play through the public MatchState commands.
"""
import numpy as np
import pytest

from ridgeline.core.data import MatchOutcome, Vector2
from ridgeline.core.engine import BattlePhase, RejectionKind
from ridgeline.game.match_state import MatchConfig, MatchState


DUEL_ROSTER = """
players:
  - {id: warrior, name: Warrior, class: WARRIOR, hp: 100, move_range: 4, attack_range: 1, position: {x: 0, y: 0}}
enemies:
  - {id: goblin, name: Goblin, class: GOBLIN, hp: 20, move_range: 2, attack_range: 1, position: {x: 2, y: 0}}
"""


def _defeat(match, units):
    for unit in units:
        unit.take_damage(unit.hp_max)
        match.board.remove_unit(unit)


def _assert_board_consistent(match):
    assert set(np.unique(match.board.elevation).tolist()).issubset({0, 1, 2})
    occupied = match.board.occupancy[match.board.occupancy >= 0].tolist()
    assert len(occupied) == len(set(occupied))
    for unit in match.player_units + match.enemy_units:
        if unit.is_alive:
            assert unit.position is not None
            assert match.board.get_unit_at(unit.position) is unit
        else:
            assert unit.position is None


class TestVictoryFlow:
    """Test winning through player commands."""

    def test_duel_won_by_move_and_attack(self, tmp_path):
        roster = tmp_path / "duel.yaml"
        roster.write_text(DUEL_ROSTER)
        match = MatchState(MatchConfig(seed=0, roster_path=str(roster)))
        match.board.flatten()

        match.move_cursor(1, 0)
        assert match.attempt_move().messages == ["Warrior moved to A2. You may now attack or wait."]
        match.move_cursor(1, 0)
        result = match.attempt_attack()

        assert result.messages == [
            "Warrior attacked Goblin for 25 damage. Goblin has 0 HP left. (Range: adjacent (1 tile))",
            "Goblin defeated!",
            "Victory! All enemies defeated.",
        ]
        assert match.outcome == MatchOutcome.VICTORY
        assert match.wait().rejection == RejectionKind.MATCH_OVER

    def test_last_enemy_falls_to_attack(self, match):
        _defeat(match, match.enemy_units[:3])
        imp = match.enemy_units[3]
        match.board.place_unit(imp, Vector2(0, 1))
        imp.hp_current = 10

        match.move_cursor(1, 0)
        result = match.attempt_attack()

        assert result.messages[-2:] == ["Imp defeated!", "Victory! All enemies defeated."]
        assert match.view.outcome == MatchOutcome.VICTORY


class TestDefeatFlow:
    """Test losing during the enemy phase."""

    def test_last_unit_falls_in_enemy_phase(self, match):
        _defeat(match, match.player_units[1:])
        warrior = match.player_units[0]
        warrior.hp_current = 12
        match.board.place_unit(match.enemy_units[0], Vector2(0, 1))

        result = match.end_turn()

        assert result.messages[0] == "Enemy turn."
        attack_index = result.messages.index("Goblin attacks Warrior for 12 damage. Warrior has 0 HP left.")
        assert result.messages[attack_index + 1] == "Warrior defeated!"
        assert result.messages[-1] == "Defeat! All your units have fallen."
        assert "Player turn." not in result.messages
        assert match.outcome == MatchOutcome.DEFEAT
        assert match.phase == BattlePhase.ENEMY_PHASE
        assert match.select_unit(0).rejection == RejectionKind.MATCH_OVER

    def test_restart_after_defeat(self, match):
        _defeat(match, match.player_units)
        match.check_victory()

        result = match.restart()

        assert result.success
        assert match.outcome == MatchOutcome.IN_PROGRESS
        assert [unit.hp_current for unit in match.player_units] == [100, 80, 60]
        assert [unit.position for unit in match.player_units] == [Vector2(0, 0), Vector2(1, 0), Vector2(2, 0)]
        assert match.phase == BattlePhase.PLAYER_PHASE
        assert match.wait().success


class TestMultiRound:
    """Test board consistency across many rounds of play."""

    @pytest.mark.parametrize("seed", [1, 2, 3])
    def test_passive_squad(self, seed):
        match = MatchState(MatchConfig(seed=seed))
        previous_hp = [unit.hp_current for unit in match.player_units]

        for _ in range(25):
            result = match.end_turn()
            assert result.success
            _assert_board_consistent(match)

            current_hp = [unit.hp_current for unit in match.player_units]
            assert all(now <= before for now, before in zip(current_hp, previous_hp))
            previous_hp = current_hp

            if match.is_over:
                break
            assert match.phase == BattlePhase.PLAYER_PHASE

        assert match.outcome != MatchOutcome.VICTORY
        assert sum(previous_hp) < 240

    def test_rounds_advance(self, match):
        for expected_round in (2, 3, 4):
            match.end_turn()
            assert match.round_number == expected_round
