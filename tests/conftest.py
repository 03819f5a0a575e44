"""
Backgammon Engine - Test Configuration and Fixtures

Common fixtures and test data for all test modules.
"""

import pytest

from backgammon.commands.history import CommandHistory
from backgammon.config.settings import Settings
from backgammon.engine.base import PLAYER_0, PLAYER_1, StartingStack
from backgammon.engine.board import Board
from backgammon.engine.context import GameContext
from backgammon.engine.dice import DicePool
from backgammon.events.bus import EventBus


class ScriptedDice:
    """Dice source returning pre-set rolls in order, for deterministic tests."""

    def __init__(self, *rolls: tuple[int, int]) -> None:
        self._rolls = list(rolls)
        self.calls = 0

    def push(self, *rolls: tuple[int, int]) -> None:
        self._rolls.extend(rolls)

    def __call__(self) -> tuple[int, int]:
        if not self._rolls:
            raise AssertionError("ScriptedDice ran out of rolls")
        self.calls += 1
        return self._rolls.pop(0)


# =============================================================================
# LAYOUTS
# =============================================================================

# Standard layout with one player-1 checker moved from 16 to 17 (a blot on 17)
BLOT_ON_17_LAYOUT = (
    StartingStack(point_index=23, count=2, player_id=PLAYER_0),
    StartingStack(point_index=12, count=5, player_id=PLAYER_0),
    StartingStack(point_index=7, count=3, player_id=PLAYER_0),
    StartingStack(point_index=5, count=5, player_id=PLAYER_0),
    StartingStack(point_index=0, count=2, player_id=PLAYER_1),
    StartingStack(point_index=11, count=5, player_id=PLAYER_1),
    StartingStack(point_index=16, count=2, player_id=PLAYER_1),
    StartingStack(point_index=17, count=1, player_id=PLAYER_1),
    StartingStack(point_index=18, count=5, player_id=PLAYER_1),
)


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def scripted_dice() -> ScriptedDice:
    return ScriptedDice()


@pytest.fixture
def bus() -> EventBus:
    return EventBus()


@pytest.fixture
def board() -> Board:
    """Board with the standard starting position."""
    board = Board()
    board.setup()
    return board


@pytest.fixture
def empty_board() -> Board:
    return Board()


@pytest.fixture
def ctx(board: Board, bus: EventBus, scripted_dice: ScriptedDice) -> GameContext:
    """Context on the standard position, player 0 to move, no dice yet."""
    return GameContext(board=board, dice=DicePool(), bus=bus, dice_source=scripted_dice)


@pytest.fixture
def blot_ctx(ctx: GameContext) -> GameContext:
    """Player 0 to move with [6, 5] and a player-1 blot on point 17."""
    ctx.board.setup(BLOT_ON_17_LAYOUT)
    ctx.dice.set_values([6, 5])
    return ctx


@pytest.fixture
def history(ctx: GameContext) -> CommandHistory:
    return CommandHistory(ctx, capacity=50)


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from the environment and any .env file."""
    return Settings(_env_file=None, turn_transition_delay=0.0)
