"""
Unit tests for turn state and command results.

Tests the TurnState and CursorState dataclasses and the CommandResult /
CommandRejected pair the match uses to report command outcomes.
"""
import pytest

from ridgeline.core.data import Vector2
from ridgeline.core.engine import (
    BattlePhase,
    CommandRejected,
    CommandResult,
    CursorState,
    RejectionKind,
    TurnPhase,
    TurnState,
)
from ridgeline.core.events import MatchStarted, PhaseChanged


class TestTurnState:
    """Test the TurnState dataclass."""

    def test_initialization_default(self):
        """Test TurnState starts idle in round 1 of the player phase."""
        state = TurnState()

        assert state.phase == BattlePhase.PLAYER_PHASE
        assert state.turn_phase == TurnPhase.IDLE
        assert state.round_number == 1
        assert state.cursor.position == Vector2(0, 0)
        assert state.active_unit_id is None

    def test_begin_activation(self):
        """Test selecting a unit resets its action flags and snaps the cursor."""
        state = TurnState()
        state.has_moved = True
        state.has_attacked = True

        state.begin_activation(2, "mage", Vector2(2, 0))

        assert state.turn_phase == TurnPhase.UNIT_SELECTED
        assert state.active_unit_index == 2
        assert state.active_unit_id == "mage"
        assert state.cursor.position == Vector2(2, 0)
        assert not state.has_moved
        assert not state.has_attacked

    def test_clear_activation(self):
        state = TurnState()
        state.begin_activation(0, "warrior", Vector2(0, 0))
        state.has_moved = True

        state.clear_activation()

        assert state.active_unit_id is None
        assert not state.has_moved

    def test_phase_labels(self):
        assert BattlePhase.PLAYER_PHASE.label == "Player"
        assert BattlePhase.ENEMY_PHASE.label == "Enemy"


class TestCursorState:
    """Test cursor offsets."""

    @pytest.mark.parametrize("dx,dy,expected", [
        (1, 0, Vector2(3, 4)),
        (0, 1, Vector2(4, 3)),
        (-1, -1, Vector2(2, 2)),
    ])
    def test_offset(self, dx, dy, expected):
        cursor = CursorState(Vector2(3, 3))
        assert cursor.offset(dx, dy) == expected
        assert cursor.position == Vector2(3, 3)


class TestCommandResult:
    """Test building and merging command results."""

    def test_ok_collects_narration(self):
        events = [MatchStarted(round_number=1), PhaseChanged(round_number=1, phase=BattlePhase.ENEMY_PHASE)]
        result = CommandResult.ok(events)

        assert result.success
        assert result.rejection is None
        assert result.messages == ["Game started. Player turn.", "Enemy turn."]
        assert result.events == events

    def test_rejected_uses_default_message(self):
        result = CommandResult.rejected(CommandRejected(RejectionKind.TILE_OCCUPIED))

        assert not result.success
        assert result.rejection == RejectionKind.TILE_OCCUPIED
        assert result.messages == ["Tile occupied."]
        assert result.events == []

    def test_rejected_custom_message(self):
        error = CommandRejected(RejectionKind.NO_VALID_TARGET, "Nothing there.")
        assert str(error) == "Nothing there."
        assert CommandResult.rejected(error).messages == ["Nothing there."]

    def test_every_kind_has_a_message(self):
        for kind in RejectionKind:
            assert CommandRejected(kind).message

    def test_merge(self):
        first = CommandResult.ok([PhaseChanged(round_number=1, phase=BattlePhase.ENEMY_PHASE)])
        second = CommandResult.rejected(CommandRejected(RejectionKind.MATCH_OVER))

        merged = first.merge(second)

        assert not merged.success
        assert merged.rejection == RejectionKind.MATCH_OVER
        assert merged.messages == ["Enemy turn.", "The match is over. Start a new game to continue."]
