"""
Backgammon Engine - Dice

Rolling, doubles expansion, and the per-turn pool of unconsumed die values.
The pool is a list, not a set: doubles put four equal values in it.
"""

import random
from typing import Callable

from backgammon.engine.base import DIE_FACES
from backgammon.engine.errors import IllegalMove
from backgammon.engine.validators import validate_dice_values, validate_die_value

# A dice source returns the two faces of a fresh roll
DiceSource = Callable[[], tuple[int, int]]


class RandomDiceSource:
    """Default dice source backed by a private random.Random instance."""

    def __init__(self, seed: int | None = None) -> None:
        self._rng = random.Random(seed)

    def __call__(self) -> tuple[int, int]:
        return (self._rng.randint(1, DIE_FACES), self._rng.randint(1, DIE_FACES))


def is_doubles(dice: tuple[int, int]) -> bool:
    """True if both dice show the same face."""
    return dice[0] == dice[1]


def expand_roll(dice: tuple[int, int]) -> list[int]:
    """
    Turn a two-dice roll into the values a player may use.

    Examples:
        >>> expand_roll((3, 5))
        [3, 5]
        >>> expand_roll((4, 4))
        [4, 4, 4, 4]
    """
    first, second = validate_dice_values(dice, min_count=2, max_count=2)
    if first == second:
        return [first] * 4
    return [first, second]


def dice_to_string(values: list[int] | tuple[int, ...]) -> str:
    """Readable form of a dice pool, e.g. '[6, 5]'."""
    return "[" + ", ".join(str(v) for v in values) + "]"


class DicePool:
    """
    The active player's remaining die values for the current turn.

    Shrinks by exactly one value per executed move and grows by the same
    value when that move is undone.
    """

    def __init__(self, values: list[int] | tuple[int, ...] = ()) -> None:
        self._values: list[int] = list(validate_dice_values(values))

    @property
    def values(self) -> tuple[int, ...]:
        return tuple(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, value: object) -> bool:
        return value in self._values

    def __repr__(self) -> str:
        return f"DicePool({self._values})"

    def is_empty(self) -> bool:
        return not self._values

    def distinct(self) -> tuple[int, ...]:
        """Unique values in first-seen order."""
        return tuple(dict.fromkeys(self._values))

    def set_values(self, values: list[int] | tuple[int, ...]) -> None:
        """Replace the pool with a fresh roll."""
        self._values = list(validate_dice_values(values))

    def consume(self, value: int) -> int:
        """
        Remove one occurrence of value.

        Returns:
            Position the value occupied, so an undo can put it back in place

        Raises:
            IllegalMove: If the value is not in the pool
        """
        if value not in self._values:
            raise IllegalMove(f"Die value {value} is not available in {dice_to_string(self._values)}.")
        position = self._values.index(value)
        del self._values[position]
        return position

    def restore(self, value: int, position: int | None = None) -> None:
        """Put a consumed value back (undo), at its old position when known."""
        validate_die_value(value)
        if position is None or position > len(self._values):
            self._values.append(value)
        else:
            self._values.insert(position, value)

    def clear(self) -> None:
        self._values.clear()
