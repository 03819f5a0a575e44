"""
Backgammon Engine - Dice Tests
"""

import pytest

from backgammon.engine.dice import (
    DicePool,
    RandomDiceSource,
    dice_to_string,
    expand_roll,
    is_doubles,
)
from backgammon.engine.errors import IllegalMove


class TestRandomDiceSource:
    """Tests for the default dice source."""

    def test_two_faces_in_range(self):
        source = RandomDiceSource()
        for _ in range(100):
            first, second = source()
            assert 1 <= first <= 6
            assert 1 <= second <= 6

    def test_seed_is_reproducible(self):
        a, b = RandomDiceSource(seed=7), RandomDiceSource(seed=7)
        assert [a() for _ in range(20)] == [b() for _ in range(20)]


class TestExpandRoll:
    """Doubles give four moves."""

    def test_plain_roll(self):
        assert expand_roll((6, 5)) == [6, 5]

    @pytest.mark.parametrize("face", range(1, 7))
    def test_doubles(self, face):
        assert expand_roll((face, face)) == [face] * 4

    def test_is_doubles(self):
        assert is_doubles((3, 3))
        assert not is_doubles((3, 4))

    @pytest.mark.parametrize("roll", [(0, 3), (7, 1), (3,)])
    def test_invalid_roll(self, roll):
        with pytest.raises(ValueError):
            expand_roll(roll)

    def test_dice_to_string(self):
        assert dice_to_string([6, 5]) == "[6, 5]"
        assert dice_to_string(()) == "[]"


class TestDicePool:
    """Consumption and restoration."""

    def test_consume_shrinks_by_one(self):
        pool = DicePool([6, 5])
        pool.consume(6)
        assert pool.values == (5,)

    def test_consume_one_of_doubles(self):
        pool = DicePool([4, 4, 4, 4])
        pool.consume(4)
        assert pool.values == (4, 4, 4)

    def test_consume_missing_raises(self):
        pool = DicePool([6, 5])
        with pytest.raises(IllegalMove):
            pool.consume(3)
        assert pool.values == (6, 5)

    def test_restore_in_place(self):
        pool = DicePool([6, 5])
        position = pool.consume(6)
        pool.restore(6, position)
        assert pool.values == (6, 5)

    def test_restore_without_position_appends(self):
        pool = DicePool([5])
        pool.restore(6)
        assert pool.values == (5, 6)

    def test_restore_rejects_bad_value(self):
        with pytest.raises(ValueError):
            DicePool().restore(9)

    def test_membership_and_distinct(self):
        pool = DicePool([2, 2, 2, 2])
        assert 2 in pool
        assert 3 not in pool
        assert pool.distinct() == (2,)
        assert len(pool) == 4

    def test_set_values_and_clear(self):
        pool = DicePool()
        assert pool.is_empty()
        pool.set_values([1, 3])
        assert pool.values == (1, 3)
        pool.clear()
        assert pool.is_empty()

    def test_too_many_values_rejected(self):
        with pytest.raises(ValueError):
            DicePool([1, 1, 1, 1, 1])
