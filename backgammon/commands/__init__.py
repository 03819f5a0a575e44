"""
Backgammon Engine Commands.

Command variants, the dispatch functions that run them, and the history
manager providing undo, redo and turn reset.
"""

from backgammon.commands.base import (
    CheckTurnEndCommand,
    Command,
    CommandResult,
    CommandStatus,
    CompositeCommand,
    GameSetupCommand,
    HidePossibleMovesCommand,
    HighlightAvailableCoinsCommand,
    MoveCoinCommand,
    RollDiceCommand,
    ShowPossibleMovesCommand,
)
from backgammon.commands.dispatch import can_execute, can_undo, execute, undo
from backgammon.commands.factory import (
    enter_from_bar,
    hide_possible_moves,
    move,
    multi_move,
    show_possible_moves,
)
from backgammon.commands.history import CommandHistory, HistoryEntry

__all__ = [
    # Variants
    "Command",
    "CommandResult",
    "CommandStatus",
    "GameSetupCommand",
    "RollDiceCommand",
    "MoveCoinCommand",
    "CheckTurnEndCommand",
    "ShowPossibleMovesCommand",
    "HighlightAvailableCoinsCommand",
    "HidePossibleMovesCommand",
    "CompositeCommand",
    # Dispatch
    "can_execute",
    "execute",
    "can_undo",
    "undo",
    # Factory
    "move",
    "enter_from_bar",
    "multi_move",
    "show_possible_moves",
    "hide_possible_moves",
    # History
    "CommandHistory",
    "HistoryEntry",
]
