"""Tests for backgammon/state/models.py — pydantic state mirrors."""

import pytest
from pydantic import ValidationError

from backgammon.engine.base import BOARD_SIZE, ENTRY_POINT_INDEX, PLAYER_0, PLAYER_1, CheckerState, GamePhase
from backgammon.engine.context import GameContext
from backgammon.state.models import CheckerModel, GameSnapshot, PointModel


class TestGameSnapshot:
    def test_captures_board(self, ctx):
        snapshot = GameSnapshot.from_context(ctx, GamePhase.PLAYER_MOVE)
        assert len(snapshot.points) == BOARD_SIZE
        assert snapshot.point(23).owner == PLAYER_0
        assert snapshot.point(23).count == 2
        assert snapshot.entry_point(PLAYER_1).count == 0
        assert snapshot.phase == GamePhase.PLAYER_MOVE
        assert snapshot.checker_counts() == {PLAYER_0: 15, PLAYER_1: 15}

    def test_entry_points_included(self, ctx):
        ctx.board.place_checkers(ENTRY_POINT_INDEX, PLAYER_1)
        snapshot = GameSnapshot.from_context(ctx)
        bar = snapshot.entry_point(PLAYER_1)
        assert bar.index == ENTRY_POINT_INDEX
        assert bar.checkers[0].state == CheckerState.AT_ENTRY

    def test_equal_for_same_state(self, ctx):
        assert GameSnapshot.from_context(ctx) == GameSnapshot.from_context(ctx)

    def test_dice_difference(self, ctx):
        before = GameSnapshot.from_context(ctx)
        ctx.dice.set_values([6, 5])
        assert GameSnapshot.from_context(ctx) != before

    def test_checker_identity_matters(self):
        # Same layout built twice yields different checker ids
        first, second = GameContext(), GameContext()
        first.board.setup()
        second.board.setup()
        assert GameSnapshot.from_context(first) != GameSnapshot.from_context(second)

    def test_frozen(self, ctx):
        snapshot = GameSnapshot.from_context(ctx)
        with pytest.raises(ValidationError):
            snapshot.current_player = 1

    def test_serializes(self, ctx):
        data = GameSnapshot.from_context(ctx).model_dump(mode="json")
        assert data["current_player"] == 0
        assert data["phase"] == "idle"
        assert len(data["entry_points"]) == 2


class TestModelValidation:
    def test_checker_owner_range(self):
        with pytest.raises(ValidationError):
            CheckerModel(checker_id=1, owner=2, state=CheckerState.IN_PLAY)

    def test_point_defaults(self):
        point = PointModel(index=4)
        assert point.owner is None
        assert point.count == 0
