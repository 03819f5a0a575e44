"""
Backgammon Engine - Game Context

The single object owning all mutable state of one game: board, dice pool,
event bus, dice source and whose turn it is. It is created once and handed
to the commands and controllers that need it; nothing is module-global.
"""

from dataclasses import dataclass, field

from backgammon.engine.base import NUM_PLAYERS, PLAYER_0
from backgammon.engine.board import Board
from backgammon.engine.dice import DicePool, DiceSource, RandomDiceSource
from backgammon.engine.validators import validate_player_id
from backgammon.events.bus import EventBus


@dataclass
class GameContext:
    """
    Shared engine state for one game.

    Attributes:
        board: Points and entry points
        dice: Remaining die values for the current turn
        bus: Event channel to the presentation layer
        dice_source: Produces two faces per roll
        current_player: Player whose turn it is
    """
    board: Board = field(default_factory=Board)
    dice: DicePool = field(default_factory=DicePool)
    bus: EventBus = field(default_factory=EventBus)
    dice_source: DiceSource = field(default_factory=RandomDiceSource)
    current_player: int = PLAYER_0

    def is_turn_of(self, player_id: int) -> bool:
        return self.current_player == player_id

    def set_current_player(self, player_id: int) -> None:
        self.current_player = validate_player_id(player_id)

    def advance_player(self) -> int:
        """Hand the turn to the next player and return their id."""
        self.current_player = (self.current_player + 1) % NUM_PLAYERS
        return self.current_player
