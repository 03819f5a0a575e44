"""
Backgammon Engine - Input Validation Utilities

Provides validation functions for engine inputs. All validators
either return validated data or raise descriptive ValueError exceptions.
"""

from typing import Sequence

from backgammon.engine.base import (
    BOARD_SIZE,
    CHECKERS_PER_PLAYER,
    DIE_FACES,
    ENTRY_POINT_INDEX,
    NUM_PLAYERS,
    StartingStack,
)


def validate_player_id(player_id: int) -> int:
    """
    Validate a player id.

    Args:
        player_id: Player id to validate

    Returns:
        Validated player id

    Raises:
        ValueError: If the id is not 0 or 1
    """
    if not isinstance(player_id, int) or isinstance(player_id, bool):
        raise ValueError(f"Player id must be an integer, got {type(player_id).__name__}.")

    if not (0 <= player_id < NUM_PLAYERS):
        raise ValueError(f"Player id must be between 0 and {NUM_PLAYERS - 1}, got {player_id}.")

    return player_id


def validate_die_value(value: int) -> int:
    """
    Validate a single die face.

    Raises:
        ValueError: If the value is not 1-6
    """
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValueError(f"Die value must be an integer, got {type(value).__name__}.")

    if not (1 <= value <= DIE_FACES):
        raise ValueError(f"Die value must be between 1 and {DIE_FACES}, got {value}.")

    return value


def validate_dice_values(
    values: Sequence[int],
    min_count: int = 0,
    max_count: int = 4
) -> tuple[int, ...]:
    """
    Validate and normalize a dice pool.

    Args:
        values: Sequence of dice values to validate
        min_count: Minimum number of dice required
        max_count: Maximum number of dice allowed

    Returns:
        Validated values as a tuple

    Raises:
        ValueError: If validation fails
    """
    values_tuple = tuple(values)
    count = len(values_tuple)

    if count < min_count:
        raise ValueError(f"At least {min_count} dice required, got {count}.")

    if count > max_count:
        raise ValueError(f"At most {max_count} dice allowed, got {count}.")

    for i, value in enumerate(values_tuple):
        try:
            validate_die_value(value)
        except ValueError as exc:
            raise ValueError(f"Die at index {i}: {exc}") from exc

    return values_tuple


def validate_point_index(index: int, allow_entry: bool = False) -> int:
    """
    Validate a point index.

    Args:
        index: Point index to validate
        allow_entry: Whether ENTRY_POINT_INDEX is accepted

    Returns:
        Validated index

    Raises:
        ValueError: If index is out of range
    """
    if not isinstance(index, int) or isinstance(index, bool):
        raise ValueError(f"Point index must be an integer, got {type(index).__name__}.")

    if allow_entry and index == ENTRY_POINT_INDEX:
        return index

    if not (0 <= index < BOARD_SIZE):
        raise ValueError(f"Point index must be between 0 and {BOARD_SIZE - 1}, got {index}.")

    return index


def validate_starting_layout(layout: Sequence[StartingStack]) -> tuple[StartingStack, ...]:
    """
    Validate a starting distribution.

    Each player must receive exactly CHECKERS_PER_PLAYER checkers and no
    point may be claimed by both players.

    Raises:
        ValueError: If the layout is malformed
    """
    totals = [0] * NUM_PLAYERS
    owners: dict[int, int] = {}

    for stack in layout:
        validate_point_index(stack.point_index)
        validate_player_id(stack.player_id)
        if stack.count <= 0:
            raise ValueError(f"Stack on point {stack.point_index} must hold at least one checker.")

        claimed_by = owners.setdefault(stack.point_index, stack.player_id)
        if claimed_by != stack.player_id:
            raise ValueError(f"Point {stack.point_index} is assigned to both players.")

        totals[stack.player_id] += stack.count

    for player_id, total in enumerate(totals):
        if total != CHECKERS_PER_PLAYER:
            raise ValueError(
                f"Player {player_id} starts with {total} checkers, expected {CHECKERS_PER_PLAYER}."
            )

    return tuple(layout)
