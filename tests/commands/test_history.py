"""
Backgammon Engine - Command History Tests

Bounded undo, redo, undo-last-move and turn reset.
"""

from unittest.mock import MagicMock

import pytest

from backgammon.commands import dispatch
from backgammon.commands.base import (
    CommandStatus,
    HighlightAvailableCoinsCommand,
    MoveCoinCommand,
    RollDiceCommand,
    ShowPossibleMovesCommand,
)
from backgammon.commands.history import CommandHistory
from backgammon.engine.base import PLAYER_0
from backgammon.events.events import CommandExecuted, CommandUndone, GameEvent
from backgammon.state.models import GameSnapshot


@pytest.fixture
def rolled(ctx, history, scripted_dice):
    """Player 0 has rolled [6, 5] and the turn start is marked."""
    scripted_dice.push((6, 5))
    history.execute(RollDiceCommand(PLAYER_0))
    history.mark_turn_start()
    return history


class TestExecute:
    """Recording executed commands."""

    def test_success_is_recorded(self, ctx, history):
        ctx.dice.set_values([6, 5])
        cmd = MoveCoinCommand(12, 6, PLAYER_0, 6)
        assert history.execute(cmd)
        assert history.commands == (cmd,)
        assert history.can_undo()

    def test_failure_is_not_recorded(self, ctx, history):
        ctx.dice.set_values([6, 5])
        assert not history.execute(MoveCoinCommand(23, 18, PLAYER_0, 5))
        assert len(history) == 0

    def test_unrecorded_execution(self, ctx, history):
        ctx.dice.set_values([6, 5])
        assert history.execute(MoveCoinCommand(12, 6, PLAYER_0, 6), record=False)
        assert len(history) == 0

    def test_publishes_executed(self, ctx, history):
        listener = MagicMock()
        ctx.bus.subscribe(GameEvent.COMMAND_EXECUTED, listener)
        ctx.dice.set_values([6, 5])
        cmd = MoveCoinCommand(12, 6, PLAYER_0, 6)
        history.execute(cmd)
        listener.assert_called_once_with(
            CommandExecuted(description=cmd.description, is_game_state=True)
        )

    def test_exception_is_contained(self, ctx, history, monkeypatch):
        def boom(ctx, cmd):
            raise RuntimeError("boom")

        monkeypatch.setattr(dispatch, "execute", boom)
        result = history.execute(MoveCoinCommand(12, 6, PLAYER_0, 6))
        assert not result
        assert "boom" in result.reason
        assert len(history) == 0

    def test_invalid_capacity(self, ctx):
        with pytest.raises(ValueError):
            CommandHistory(ctx, capacity=0)


class TestCapacity:
    """Oldest entries are evicted past capacity."""

    def test_eviction(self, ctx):
        history = CommandHistory(ctx, capacity=3)
        ctx.dice.set_values([6, 5])
        commands = [ShowPossibleMovesCommand(12, PLAYER_0, (6, 5)) for _ in range(5)]
        for cmd in commands:
            history.execute(cmd)
        assert history.commands == tuple(commands[2:])

    def test_turn_start_follows_eviction(self, ctx):
        history = CommandHistory(ctx, capacity=3)
        for _ in range(2):
            history.execute(ShowPossibleMovesCommand(12, PLAYER_0, (6,)))
        history.mark_turn_start()
        assert history.turn_start_depth == 2

        history.execute(ShowPossibleMovesCommand(12, PLAYER_0, (6,)))
        history.execute(ShowPossibleMovesCommand(12, PLAYER_0, (6,)))
        assert history.turn_start_depth == 1

    def test_presentation_evicted_before_moves(self, ctx, scripted_dice):
        history = CommandHistory(ctx, capacity=3)
        scripted_dice.push((6, 5))
        history.execute(RollDiceCommand(PLAYER_0))
        history.mark_turn_start()
        before = GameSnapshot.from_context(ctx)
        move = MoveCoinCommand(23, 17, PLAYER_0, 6)
        history.execute(move)

        for _ in range(10):
            history.execute(ShowPossibleMovesCommand(12, PLAYER_0, ctx.dice.values))

        assert len(history) == 3
        assert history.commands[1] is move
        assert history.reset_current_turn()
        assert GameSnapshot.from_context(ctx) == before

    def test_previous_turn_evicted_before_current_moves(self, ctx, scripted_dice):
        history = CommandHistory(ctx, capacity=2)
        scripted_dice.push((6, 5))
        history.execute(RollDiceCommand(PLAYER_0))
        history.mark_turn_start()
        before = GameSnapshot.from_context(ctx)
        first = MoveCoinCommand(12, 6, PLAYER_0, 6)
        second = MoveCoinCommand(12, 7, PLAYER_0, 5)
        history.execute(first)
        history.execute(second)

        assert history.commands == (first, second)
        assert history.turn_start_depth == 0
        assert history.reset_current_turn()
        assert GameSnapshot.from_context(ctx) == before


class TestUndoLast:
    """Single-step undo."""

    def test_undo_restores_state(self, ctx, rolled):
        before = GameSnapshot.from_context(ctx)
        cmd = MoveCoinCommand(12, 6, PLAYER_0, 6)
        rolled.execute(cmd)

        assert rolled.undo_last()
        assert cmd.status == CommandStatus.UNDONE
        assert GameSnapshot.from_context(ctx) == before

    def test_empty_history(self, history):
        result = history.undo_last()
        assert not result
        assert "No commands to undo" in result.reason

    def test_failed_undo_stays_on_stack(self, rolled):
        # The roll cannot be undone
        roll = rolled.commands[-1]
        assert not rolled.undo_last()
        assert rolled.commands[-1] is roll
        assert not rolled.can_undo()

    def test_publishes_undone(self, ctx, rolled):
        listener = MagicMock()
        ctx.bus.subscribe(GameEvent.COMMAND_UNDONE, listener)
        cmd = MoveCoinCommand(12, 6, PLAYER_0, 6)
        rolled.execute(cmd)
        rolled.undo_last()
        listener.assert_called_once_with(
            CommandUndone(description=cmd.description, is_game_state=True)
        )


class TestRedo:
    """Redo re-executes the last undone command."""

    def test_redo(self, ctx, rolled):
        cmd = MoveCoinCommand(12, 6, PLAYER_0, 6)
        rolled.execute(cmd)
        after = GameSnapshot.from_context(ctx)
        rolled.undo_last()

        assert rolled.can_redo()
        assert rolled.redo_last()
        assert GameSnapshot.from_context(ctx) == after
        assert rolled.commands[-1] is cmd

    def test_nothing_to_redo(self, history):
        result = history.redo_last()
        assert not result
        assert "No commands to redo" in result.reason

    def test_new_move_clears_redo(self, rolled):
        rolled.execute(MoveCoinCommand(12, 6, PLAYER_0, 6))
        rolled.undo_last()
        rolled.execute(MoveCoinCommand(12, 7, PLAYER_0, 5))
        assert not rolled.can_redo()

    def test_presentation_keeps_redo(self, ctx, rolled):
        rolled.execute(MoveCoinCommand(12, 6, PLAYER_0, 6))
        rolled.undo_last()
        rolled.execute(HighlightAvailableCoinsCommand(PLAYER_0, ctx.dice.values))
        assert rolled.can_redo()

    def test_failed_redo_stays_available(self, ctx, rolled):
        rolled.execute(MoveCoinCommand(12, 6, PLAYER_0, 6))
        rolled.undo_last()
        ctx.dice.clear()
        assert not rolled.redo_last()
        assert rolled.can_redo()


class TestUndoLastMove:
    """Undo the latest move, skipping indicator commands."""

    def test_skips_presentation(self, ctx, rolled):
        before = GameSnapshot.from_context(ctx)
        move = MoveCoinCommand(12, 6, PLAYER_0, 6)
        rolled.execute(move)
        rolled.execute(HighlightAvailableCoinsCommand(PLAYER_0, ctx.dice.values))

        assert rolled.undo_last_move()
        assert move.status == CommandStatus.UNDONE
        assert len(rolled) == rolled.turn_start_depth
        assert GameSnapshot.from_context(ctx) == before

    def test_stops_at_turn_start(self, rolled):
        result = rolled.undo_last_move()
        assert not result
        assert "No moves to undo" in result.reason


class TestResetCurrentTurn:
    """Bulk undo of the current turn."""

    def test_reset(self, ctx, rolled):
        before = GameSnapshot.from_context(ctx)
        rolled.execute(MoveCoinCommand(12, 6, PLAYER_0, 6))
        rolled.execute(ShowPossibleMovesCommand(6, PLAYER_0, ctx.dice.values))
        rolled.execute(MoveCoinCommand(6, 1, PLAYER_0, 5))
        assert rolled.moves_in_current_turn() == 2
        assert rolled.can_reset_current_turn()

        assert rolled.reset_current_turn()

        assert GameSnapshot.from_context(ctx) == before
        assert len(rolled) == rolled.turn_start_depth
        assert rolled.moves_in_current_turn() == 0
        assert not rolled.can_reset_current_turn()

    def test_second_reset_is_noop(self, ctx, rolled):
        rolled.execute(MoveCoinCommand(12, 6, PLAYER_0, 6))
        assert rolled.reset_current_turn()
        after_first = GameSnapshot.from_context(ctx)

        assert rolled.reset_current_turn() is False
        assert GameSnapshot.from_context(ctx) == after_first

    def test_leaves_previous_turn_alone(self, ctx, rolled):
        roll = rolled.commands[0]
        rolled.execute(MoveCoinCommand(12, 6, PLAYER_0, 6))
        rolled.reset_current_turn()
        assert rolled.commands == (roll,)
        assert ctx.dice.values == (6, 5)

    def test_failed_undo_is_kept(self, ctx, rolled):
        first = MoveCoinCommand(12, 6, PLAYER_0, 6)
        second = MoveCoinCommand(12, 7, PLAYER_0, 5)
        rolled.execute(first)
        rolled.execute(second)
        # Another checker on top of 7 makes the second move impossible to undo
        ctx.board.place_checkers(7, PLAYER_0)

        assert rolled.reset_current_turn()

        assert first.status == CommandStatus.UNDONE
        assert second.status == CommandStatus.EXECUTED
        assert rolled.commands[-1] is second
        assert rolled.moves_in_current_turn() == 1

    def test_only_presentation_commands(self, ctx, rolled):
        rolled.execute(ShowPossibleMovesCommand(12, PLAYER_0, ctx.dice.values))
        assert rolled.reset_current_turn() is False
        assert len(rolled) == rolled.turn_start_depth


class TestQueries:
    def test_command_history_entries(self, rolled):
        entries = rolled.command_history()
        assert [e.description for e in entries] == ["Roll dice for player 0"]
        assert entries[0].is_game_state
        assert "Roll dice for player 0" in str(entries[0])

    def test_clear(self, rolled):
        rolled.clear()
        assert len(rolled) == 0
        assert rolled.turn_start_depth == 0
        assert not rolled.can_redo()
