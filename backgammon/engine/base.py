"""
Backgammon Engine - Base Definitions

Board constants, enums, and the small data structures shared by the
engine, the command layer, and the event channel.

Index convention:
    Regular points are 0-23. Player 0 moves toward decreasing indices
    (24 -> 0), player 1 toward increasing indices (-1 -> 23). Each player
    also owns an entry point (the bar) where captured checkers wait; it is
    addressed with ENTRY_POINT_INDEX.
"""

import itertools
from dataclasses import dataclass, field
from enum import Enum, auto


# Board geometry
BOARD_SIZE = 24
NUM_PLAYERS = 2
DIE_FACES = 6
CHECKERS_PER_PLAYER = 15

# Conceptual index of a player's entry point (bar)
ENTRY_POINT_INDEX = -1

PLAYER_0 = 0
PLAYER_1 = 1


@dataclass(frozen=True)
class StartingStack:
    """
    One entry of the fixed starting distribution.

    Attributes:
        point_index: Board point receiving the checkers
        count: Number of checkers placed
        player_id: Owner of the checkers
    """
    point_index: int
    count: int
    player_id: int


# Canonical 2/5/3/5 layout for each side
STARTING_LAYOUT: tuple[StartingStack, ...] = (
    # Player 0
    StartingStack(point_index=23, count=2, player_id=PLAYER_0),
    StartingStack(point_index=12, count=5, player_id=PLAYER_0),
    StartingStack(point_index=7, count=3, player_id=PLAYER_0),
    StartingStack(point_index=5, count=5, player_id=PLAYER_0),
    # Player 1
    StartingStack(point_index=0, count=2, player_id=PLAYER_1),
    StartingStack(point_index=11, count=5, player_id=PLAYER_1),
    StartingStack(point_index=16, count=3, player_id=PLAYER_1),
    StartingStack(point_index=18, count=5, player_id=PLAYER_1),
)


class CheckerState(Enum):
    """Where a checker currently lives."""
    IN_PLAY = auto()
    AT_ENTRY = auto()
    REMOVED = auto()


class GamePhase(Enum):
    """Phases of the turn state machine."""
    IDLE = "idle"
    SETUP = "setup"
    ROLL_DICE = "roll_dice"
    PLAYER_MOVE = "player_move"
    TURN_OVER = "turn_over"


def opponent_of(player_id: int) -> int:
    """Return the other player's id."""
    return (player_id + 1) % NUM_PLAYERS


_checker_ids = itertools.count(1)


@dataclass(eq=False)
class Checker:
    """
    A single checker (coin).

    Identity matters: undo verifies that the very same instance sits on top
    of a point, so equality is object identity rather than field equality.

    Attributes:
        owner: Player id, never changes after creation
        current_point: Index of the point holding the checker
        previous_point: Index of the point it was on before the last placement
        state: IN_PLAY, AT_ENTRY or REMOVED
        moved_this_turn: Set when the checker is moved during the active turn
        checker_id: Stable numeric id (for snapshots and logs)
    """
    owner: int
    current_point: int | None = None
    previous_point: int | None = None
    state: CheckerState = CheckerState.REMOVED
    moved_this_turn: bool = False
    checker_id: int = field(default_factory=lambda: next(_checker_ids))

    def place(self, point_index: int, state: CheckerState) -> None:
        """Record a placement on a point."""
        self.previous_point = self.current_point
        self.current_point = point_index
        self.state = state

    def __repr__(self) -> str:
        return (
            f"Checker(id={self.checker_id}, owner={self.owner}, "
            f"point={self.current_point}, state={self.state.name})"
        )


@dataclass(frozen=True)
class MoveOption:
    """
    A legal single-die move.

    Attributes:
        source: Source point index (ENTRY_POINT_INDEX for the bar)
        target: Target point index
        die: Die value consumed by the move
        is_capture: Whether the move hits a lone opposing checker
    """
    source: int
    target: int
    die: int
    is_capture: bool = False
