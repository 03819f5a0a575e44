"""
Backgammon Engine - Turn Controller

Drives the game through its phases:

    IDLE -> SETUP -> ROLL_DICE -> PLAYER_MOVE -> TURN_OVER -> ROLL_DICE -> ...

Setup runs once per game. Each ROLL_DICE issues a RollDiceCommand and
immediately checks for a legal move; with none, the turn ends without
waiting for input. TURN_OVER clears the dice, hands the turn to the other
player and schedules the next roll on a deferred-action queue that the
owner drains with step() or run_pending().
"""

from __future__ import annotations

import heapq
import itertools
import logging
import time
from dataclasses import dataclass, field
from typing import Callable

from backgammon.commands.base import (
    CheckTurnEndCommand,
    CommandResult,
    GameSetupCommand,
    HighlightAvailableCoinsCommand,
    MoveCoinCommand,
    RollDiceCommand,
    ShowPossibleMovesCommand,
)
from backgammon.commands.history import CommandHistory
from backgammon.config.settings import Settings, get_settings
from backgammon.engine import rules
from backgammon.engine.base import PLAYER_0, GamePhase
from backgammon.engine.context import GameContext
from backgammon.engine.dice import RandomDiceSource, dice_to_string
from backgammon.events.events import (
    CleanIndicators,
    CoinClicked,
    EventPayload,
    GameEvent,
    PieceMoveRequested,
    SwitchTurn,
    TurnStarted,
)
from backgammon.state.models import GameSnapshot

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


@dataclass(order=True)
class ScheduledAction:
    """An action waiting on the deferred queue until its due time."""
    due: float
    seq: int
    action: Callable[[], None] = field(compare=False)
    label: str = field(default="", compare=False)


class TurnController:
    """
    Turn state machine for one game.

    Listens for inbound events on the context's bus once attach() is called;
    the same operations are also available as plain methods.

    Args:
        ctx: Game to drive. When omitted, a fresh context is built whose dice
            are seeded from settings.dice_seed. A context passed in keeps its
            own dice_source and the seed setting is not applied to it.
        settings: Defaults to get_settings()
        history: Defaults to a CommandHistory sized by settings.history_capacity
        clock: Time source for the deferred queue
    """

    def __init__(
        self,
        ctx: GameContext | None = None,
        settings: Settings | None = None,
        history: CommandHistory | None = None,
        clock: Clock = time.monotonic,
    ) -> None:
        settings = settings or get_settings()
        if ctx is None:
            ctx = GameContext(dice_source=RandomDiceSource(settings.dice_seed))

        self.ctx = ctx
        self.history = history or CommandHistory(ctx, settings.history_capacity)
        self.auto_end_turn = settings.auto_end_turn
        self.transition_delay = settings.turn_transition_delay
        self.phase = GamePhase.IDLE
        self._clock = clock
        self._queue: list[ScheduledAction] = []
        self._seq = itertools.count()
        self._handlers: dict[GameEvent, Callable[[EventPayload], None]] = {
            GameEvent.GAME_SETUP: lambda payload: self.start_game(),
            GameEvent.COIN_CLICKED: self._on_coin_clicked,
            GameEvent.PIECE_MOVE_REQUESTED: self._on_piece_move_requested,
            GameEvent.DONE_PRESSED: lambda payload: self.end_turn(),
            GameEvent.UNDO_REQUESTED: lambda payload: self.undo_move(),
            GameEvent.REDO_REQUESTED: lambda payload: self.redo_move(),
            GameEvent.RESET_TURN_REQUESTED: lambda payload: self.reset_turn(),
        }

    # -- event wiring --------------------------------------------------------

    def attach(self) -> None:
        """Subscribe to inbound events on the context's bus."""
        for event, handler in self._handlers.items():
            self.ctx.bus.subscribe(event, handler)

    def detach(self) -> None:
        for event, handler in self._handlers.items():
            self.ctx.bus.unsubscribe(event, handler)

    @property
    def current_player(self) -> int:
        return self.ctx.current_player

    # -- deferred queue ------------------------------------------------------

    def schedule(self, delay: float, action: Callable[[], None], label: str = "") -> ScheduledAction:
        """Queue action to run once delay seconds have passed."""
        item = ScheduledAction(self._clock() + max(delay, 0.0), next(self._seq), action, label)
        heapq.heappush(self._queue, item)
        logger.debug("Scheduled %s in %.2fs", label or "action", delay)
        return item

    @property
    def pending_actions(self) -> list[str]:
        return [item.label for item in sorted(self._queue)]

    def step(self, now: float | None = None) -> int:
        """
        Run every queued action that is due.

        Args:
            now: Time to compare against; defaults to the controller's clock

        Returns:
            Number of actions run
        """
        if now is None:
            now = self._clock()
        due = []
        while self._queue and self._queue[0].due <= now:
            due.append(heapq.heappop(self._queue))
        # Actions scheduled by these wait for the next call
        for item in due:
            item.action()
        return len(due)

    def run_pending(self) -> int:
        """
        Run the actions queued at the time of the call, in due order,
        ignoring due times. Anything they schedule stays queued.
        """
        batch = sorted(self._queue)
        self._queue.clear()
        for item in batch:
            item.action()
        return len(batch)

    # -- phases --------------------------------------------------------------

    def start_game(self, first_player: int = PLAYER_0) -> CommandResult:
        """Set up a fresh board and roll for first_player."""
        self._queue.clear()
        self.history.clear()
        self.phase = GamePhase.SETUP
        self.ctx.set_current_player(first_player)

        result = self.history.execute(GameSetupCommand(), record=False)
        if not result:
            logger.error("Game setup failed: %s", result.reason)
            self.phase = GamePhase.IDLE
            return result

        logger.info("New game started, player %d to move", first_player)
        self._enter_roll_dice()
        return result

    def _enter_roll_dice(self) -> None:
        self.phase = GamePhase.ROLL_DICE
        player_id = self.ctx.current_player

        result = self.history.execute(RollDiceCommand(player_id))
        if not result:
            logger.error("Dice roll failed for player %d: %s", player_id, result.reason)
            return

        self.history.mark_turn_start()
        for checker in self.ctx.board.iter_checkers():
            checker.moved_this_turn = False
        self.ctx.bus.publish(TurnStarted(player_id=player_id))

        dice = self.ctx.dice.values
        if not rules.has_legal_move(self.ctx.board, player_id, dice):
            logger.info(
                "Player %d has no legal move with %s; skipping turn",
                player_id, dice_to_string(dice),
            )
            self._check_turn_end(manual=False)
            return

        self.phase = GamePhase.PLAYER_MOVE
        self._highlight()

    def _enter_turn_over(self) -> None:
        self.phase = GamePhase.TURN_OVER
        finished = self.ctx.current_player
        self.ctx.dice.clear()
        self.ctx.bus.publish(CleanIndicators())

        next_player = self.ctx.advance_player()
        self.ctx.bus.publish(SwitchTurn(player_id=next_player))
        logger.info("Turn over for player %d; player %d is next", finished, next_player)
        self.schedule(self.transition_delay, self._enter_roll_dice, label="roll_dice")

    # -- player actions ------------------------------------------------------

    def show_possible_moves(self, source: int, player_id: int | None = None) -> CommandResult:
        """Surface the legal targets from source for the active player."""
        if player_id is None:
            player_id = self.ctx.current_player
        if self.phase != GamePhase.PLAYER_MOVE or not self.ctx.is_turn_of(player_id):
            return CommandResult.fail(f"Player {player_id} cannot select checkers now.")
        return self.history.execute(
            ShowPossibleMovesCommand(source, player_id, self.ctx.dice.values)
        )

    def request_move(self, source: int, target: int, player_id: int, die: int) -> CommandResult:
        """Move a checker for player_id if the phase and the rules allow it."""
        if self.phase != GamePhase.PLAYER_MOVE:
            return CommandResult.fail(f"Moves are not accepted during {self.phase.value}.")

        result = self.history.execute(MoveCoinCommand(source, target, player_id, die))
        if result:
            self._after_board_change()
        return result

    def end_turn(self) -> CommandResult:
        """Manual turn end; refused while a legal move remains."""
        if self.phase != GamePhase.PLAYER_MOVE:
            return CommandResult.fail(f"No turn to end during {self.phase.value}.")
        return self._check_turn_end(manual=True)

    def undo_move(self) -> CommandResult:
        """Take back the latest move of the current turn."""
        if self.phase != GamePhase.PLAYER_MOVE:
            return CommandResult.fail(f"Nothing to undo during {self.phase.value}.")
        result = self.history.undo_last_move()
        if result:
            self._highlight()
        return result

    def redo_move(self) -> CommandResult:
        if self.phase != GamePhase.PLAYER_MOVE:
            return CommandResult.fail(f"Nothing to redo during {self.phase.value}.")
        result = self.history.redo_last()
        if result:
            self._after_board_change()
        return result

    def reset_turn(self) -> bool:
        """Undo every move of the current turn."""
        if self.phase != GamePhase.PLAYER_MOVE:
            return False
        reset = self.history.reset_current_turn()
        if reset:
            self._highlight()
        return reset

    def snapshot(self) -> GameSnapshot:
        return GameSnapshot.from_context(self.ctx, self.phase)

    # -- helpers -------------------------------------------------------------

    def _on_coin_clicked(self, payload: CoinClicked) -> None:
        self.show_possible_moves(payload.point_index, payload.owner_id)

    def _on_piece_move_requested(self, payload: PieceMoveRequested) -> None:
        self.request_move(
            payload.source_index, payload.target_index, payload.player_id, payload.die
        )

    def _check_turn_end(self, manual: bool) -> CommandResult:
        command = CheckTurnEndCommand(self.ctx.current_player, self.ctx.dice.values, manual)
        result = self.history.execute(command, record=False)
        if result and command.turn_ended:
            self._enter_turn_over()
        return result

    def _after_board_change(self) -> None:
        if self.auto_end_turn:
            self._check_turn_end(manual=False)
        if self.phase == GamePhase.PLAYER_MOVE:
            self._highlight()

    def _highlight(self) -> None:
        dice = self.ctx.dice.values
        if not dice:
            self.ctx.bus.publish(CleanIndicators())
            return
        self.history.execute(HighlightAvailableCoinsCommand(self.ctx.current_player, dice))
