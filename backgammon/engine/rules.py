"""
Backgammon Engine - Move Validator

Pure functions answering "where can this checker go with this die?".
The same rule set gates MoveCoinCommand execution, drives highlighting,
and decides whether a turn is over, so the three can never disagree.

Rules:
    - Player 0 moves toward decreasing indices, player 1 toward increasing.
    - Entering from the bar: player 0 lands on BOARD_SIZE - die,
      player 1 on die - 1.
    - While a player has checkers on their bar, every move must start there.
    - A target is open if it is empty, owned by the mover, or a lone
      opposing checker (which is captured).
"""

from typing import Iterable

from backgammon.engine.base import (
    BOARD_SIZE,
    ENTRY_POINT_INDEX,
    PLAYER_0,
    MoveOption,
    opponent_of,
)
from backgammon.engine.board import Board
from backgammon.engine.errors import IllegalMove


def move_direction(player_id: int) -> int:
    """-1 for player 0, +1 for player 1."""
    return -1 if player_id == PLAYER_0 else 1


def target_index(source: int, die: int, player_id: int) -> int:
    """
    Compute the landing index for a die, without checking legality.

    The result may fall outside the board; callers check bounds.
    """
    if source == ENTRY_POINT_INDEX:
        return BOARD_SIZE - die if player_id == PLAYER_0 else die - 1
    return source + move_direction(player_id) * die


def is_on_board(index: int) -> bool:
    return 0 <= index < BOARD_SIZE


def can_land(board: Board, target: int, player_id: int) -> bool:
    """True if player_id may place a checker on target."""
    if not is_on_board(target):
        return False

    point = board.point_at(target)
    if point.is_empty() or point.is_owned_by(player_id):
        return True
    return point.can_be_captured() and point.is_owned_by(opponent_of(player_id))


def is_capture(board: Board, target: int, player_id: int) -> bool:
    """True if landing on target hits a lone opposing checker."""
    if not is_on_board(target):
        return False
    point = board.point_at(target)
    return point.can_be_captured() and point.is_owned_by(opponent_of(player_id))


def source_blocked_reason(board: Board, source: int, player_id: int) -> str | None:
    """Why source cannot be moved from, or None if it can."""
    at_entry = board.has_checkers_at_entry(player_id)

    if source == ENTRY_POINT_INDEX:
        if not at_entry:
            return f"Player {player_id} has no checkers on the bar."
        return None

    if at_entry:
        return f"Player {player_id} must enter checkers from the bar first."
    if not is_on_board(source):
        return f"Source point {source} is off the board."

    point = board.point_at(source)
    if point.is_empty():
        return f"Source point {source} is empty."
    if not point.is_owned_by(player_id):
        return f"Source point {source} is not owned by player {player_id}."
    return None


def legal_targets(
    board: Board,
    source: int,
    player_id: int,
    dice: Iterable[int]
) -> list[MoveOption]:
    """
    Legal single-die moves from source.

    Each distinct die value is considered once. An empty list is returned
    when the source cannot move at all (e.g. the player still has checkers
    on the bar and source is a regular point).
    """
    if source_blocked_reason(board, source, player_id) is not None:
        return []

    options = []
    for die in dict.fromkeys(dice):
        target = target_index(source, die, player_id)
        if can_land(board, target, player_id):
            options.append(
                MoveOption(
                    source=source,
                    target=target,
                    die=die,
                    is_capture=is_capture(board, target, player_id),
                )
            )
    return options


def check_move(
    board: Board,
    source: int,
    target: int,
    player_id: int,
    die: int
) -> MoveOption:
    """
    Validate one concrete move.

    Returns:
        The MoveOption describing it

    Raises:
        IllegalMove: With a human-readable reason if the move is not legal
    """
    reason = source_blocked_reason(board, source, player_id)
    if reason is not None:
        raise IllegalMove(reason)

    expected = target_index(source, die, player_id)
    if target != expected:
        raise IllegalMove(
            f"Die {die} from {source} lands on {expected}, not {target}."
        )

    if not is_on_board(target):
        raise IllegalMove(f"Target point {target} is off the board.")

    if not can_land(board, target, player_id):
        raise IllegalMove(f"Target point {target} is blocked for player {player_id}.")

    return MoveOption(
        source=source,
        target=target,
        die=die,
        is_capture=is_capture(board, target, player_id),
    )


def movable_sources(board: Board, player_id: int) -> list[int]:
    """Points player_id may currently move from (only the bar while occupied)."""
    if board.has_checkers_at_entry(player_id):
        return [ENTRY_POINT_INDEX]
    return [point.index for point in board.points_owned_by(player_id)]


def available_moves(
    board: Board,
    player_id: int,
    dice: Iterable[int]
) -> list[MoveOption]:
    """Every legal single-die move for player_id with the given dice."""
    distinct = tuple(dict.fromkeys(dice))
    moves = []
    for source in movable_sources(board, player_id):
        moves.extend(legal_targets(board, source, player_id, distinct))
    return moves


def has_legal_move(board: Board, player_id: int, dice: Iterable[int]) -> bool:
    return bool(available_moves(board, player_id, dice))


def should_end_turn(board: Board, player_id: int, dice: Iterable[int]) -> bool:
    """True if no dice remain or none of them can be played."""
    dice = tuple(dice)
    if not dice:
        return True
    return not has_legal_move(board, player_id, dice)
