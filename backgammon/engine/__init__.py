"""
Backgammon Game Engine.

Pure Python rules and turn flow with zero UI dependencies.
Handles the board, dice and move validation. The turn state machine lives
in backgammon.engine.turn, which builds on backgammon.commands.
"""

from backgammon.engine.base import (
    BOARD_SIZE,
    CHECKERS_PER_PLAYER,
    ENTRY_POINT_INDEX,
    PLAYER_0,
    PLAYER_1,
    STARTING_LAYOUT,
    Checker,
    CheckerState,
    GamePhase,
    MoveOption,
    StartingStack,
)
from backgammon.engine.board import Board
from backgammon.engine.context import GameContext
from backgammon.engine.dice import DicePool, RandomDiceSource
from backgammon.engine.errors import (
    BoardConfigurationError,
    EmptyHistory,
    EmptyPoint,
    EngineError,
    IllegalMove,
    OwnershipConflict,
    UndoMismatch,
)
from backgammon.engine.point import Point

__all__ = [
    # Constants
    "BOARD_SIZE",
    "CHECKERS_PER_PLAYER",
    "ENTRY_POINT_INDEX",
    "PLAYER_0",
    "PLAYER_1",
    "STARTING_LAYOUT",
    # Data Classes
    "Checker",
    "MoveOption",
    "StartingStack",
    # Enums
    "CheckerState",
    "GamePhase",
    # Model
    "Point",
    "Board",
    "DicePool",
    "RandomDiceSource",
    "GameContext",
    # Errors
    "EngineError",
    "IllegalMove",
    "OwnershipConflict",
    "EmptyPoint",
    "UndoMismatch",
    "EmptyHistory",
    "BoardConfigurationError",
]
