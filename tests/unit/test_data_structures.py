"""
Unit tests for Vector2, VectorArray and coordinate labels.
"""
import numpy as np
import pytest

from ridgeline.core.data import Vector2, VectorArray, coord_label, ATTACK_DATA, AttackType


class TestVector2:
    """Test the Vector2 position type."""

    def test_row_first_ordering(self):
        vector = Vector2(2, 3)
        assert vector.y == 2
        assert vector.x == 3
        assert tuple(vector) == (2, 3)
        assert Vector2.from_xy(3, 2) == vector

    def test_arithmetic(self):
        assert Vector2(1, 2) + Vector2(3, 4) == Vector2(4, 6)
        assert Vector2(5, 5) - Vector2(2, 7) == Vector2(3, -2)
        assert Vector2(1, -2) * 3 == Vector2(3, -6)

    def test_hashable(self):
        positions = {Vector2(1, 1), Vector2(1, 1), Vector2(2, 1)}
        assert len(positions) == 2

    @pytest.mark.parametrize("a,b,expected", [
        (Vector2(0, 0), Vector2(0, 0), 0),
        (Vector2(0, 0), Vector2(3, 4), 7),
        (Vector2(5, 1), Vector2(2, 3), 5),
    ])
    def test_manhattan_distance(self, a, b, expected):
        assert a.manhattan_distance_to(b) == expected
        assert b.manhattan_distance_to(a) == expected

    @pytest.mark.parametrize("vector,expected", [
        (Vector2(5, -3), Vector2(1, -1)),
        (Vector2(0, 7), Vector2(0, 1)),
        (Vector2(0, 0), Vector2(0, 0)),
    ])
    def test_sign(self, vector, expected):
        assert vector.sign() == expected


class TestVectorArray:
    """Test batch position operations."""

    def test_empty(self):
        assert len(VectorArray()) == 0
        assert len(VectorArray([])) == 0

    def test_rejects_bad_shape(self):
        with pytest.raises(ValueError):
            VectorArray(np.zeros((3, 3), dtype=np.int16))

    def test_translate_and_filter(self):
        offsets = VectorArray([Vector2(-1, 0), Vector2(1, 0), Vector2(0, -1), Vector2(0, 1)])
        translated = offsets.translate(Vector2(0, 0))
        on_board = translated.filter_by_bounds(0, 9, 0, 9)

        assert set(on_board.to_vector_list()) == {Vector2(1, 0), Vector2(0, 1)}

    def test_contains(self):
        array = VectorArray([Vector2(1, 2), Vector2(3, 4)])
        assert array.contains(Vector2(3, 4))
        assert not array.contains(Vector2(4, 3))

    def test_from_ranges_builds_box(self):
        box = VectorArray.from_ranges((-2, 2), (-2, 2))
        assert len(box) == 25
        assert box.contains(Vector2(2, 2))
        assert box.contains(Vector2(-2, 2))


class TestAttackPatterns:
    """Test the static attack pattern offsets."""

    def test_melee_is_four_neighbours(self):
        offsets = set(ATTACK_DATA[AttackType.MELEE].offsets)
        assert offsets == {Vector2(1, 0), Vector2(-1, 0), Vector2(0, 1), Vector2(0, -1)}

    def test_ranged_is_straight_lines(self):
        offsets = set(ATTACK_DATA[AttackType.RANGED].offsets)
        assert len(offsets) == 12
        assert Vector2(3, 0) in offsets
        assert Vector2(0, -3) in offsets
        assert Vector2(1, 1) not in offsets

    def test_magic_covers_corners(self):
        offsets = set(ATTACK_DATA[AttackType.MAGIC].offsets)
        assert Vector2(2, 2) in offsets
        assert Vector2(3, 0) not in offsets


class TestCoordLabel:
    """Test human-readable coordinates."""

    @pytest.mark.parametrize("position,label", [
        (Vector2(0, 0), "A1"),
        (Vector2(1, 2), "B3"),
        (Vector2(9, 9), "J10"),
        (Vector2(8, 9), "I10"),
    ])
    def test_labels(self, position, label):
        assert coord_label(position) == label
