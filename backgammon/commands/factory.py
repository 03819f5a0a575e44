"""
Backgammon Engine - Command Factory

Shorthand constructors for the commands a presentation layer issues most.
"""

from typing import Iterable

from backgammon.commands.base import (
    CompositeCommand,
    HidePossibleMovesCommand,
    MoveCoinCommand,
    ShowPossibleMovesCommand,
)
from backgammon.engine.base import ENTRY_POINT_INDEX
from backgammon.engine.rules import target_index


def move(source: int, target: int, player_id: int, die: int) -> MoveCoinCommand:
    return MoveCoinCommand(source, target, player_id, die)


def enter_from_bar(player_id: int, die: int) -> MoveCoinCommand:
    """Move a checker from player_id's bar onto the board."""
    target = target_index(ENTRY_POINT_INDEX, die, player_id)
    return MoveCoinCommand(ENTRY_POINT_INDEX, target, player_id, die)


def multi_move(
    player_id: int,
    steps: Iterable[tuple[int, int, int]],
    label: str | None = None
) -> CompositeCommand:
    """
    Several moves executed as one transaction.

    Args:
        player_id: Moving player
        steps: (source, target, die) triples, applied in order
        label: Description for the history; generated when omitted

    Examples:
        >>> multi_move(0, [(23, 17, 6), (17, 12, 5)]).description
        'Multi-move for player 0 (2 moves)'
    """
    moves = [MoveCoinCommand(source, target, player_id, die) for source, target, die in steps]
    if label is None:
        label = f"Multi-move for player {player_id} ({len(moves)} moves)"
    return CompositeCommand(label, moves)


def show_possible_moves(
    source: int,
    player_id: int,
    dice: Iterable[int]
) -> ShowPossibleMovesCommand:
    return ShowPossibleMovesCommand(source, player_id, tuple(dice))


def hide_possible_moves() -> HidePossibleMovesCommand:
    return HidePossibleMovesCommand()
