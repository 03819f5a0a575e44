"""
Backgammon Engine - State Models

Pydantic models that mirror the engine's in-memory state. Two snapshots
compare equal exactly when board, bars, dice, current player and phase
match, checker identity included.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from backgammon.engine.base import NUM_PLAYERS, Checker, CheckerState, GamePhase
from backgammon.engine.context import GameContext
from backgammon.engine.point import Point


class CheckerModel(BaseModel):
    """Mirrors a Checker."""

    checker_id: int
    owner: int = Field(ge=0, lt=NUM_PLAYERS)
    current_point: int | None = None
    previous_point: int | None = None
    state: CheckerState
    moved_this_turn: bool = False

    model_config = {"frozen": True}

    @classmethod
    def from_checker(cls, checker: Checker) -> CheckerModel:
        return cls(
            checker_id=checker.checker_id,
            owner=checker.owner,
            current_point=checker.current_point,
            previous_point=checker.previous_point,
            state=checker.state,
            moved_this_turn=checker.moved_this_turn,
        )


class PointModel(BaseModel):
    """Mirrors a Point; checkers are listed bottom-to-top."""

    index: int
    owner: int | None = None
    checkers: list[CheckerModel] = Field(default_factory=list)

    model_config = {"frozen": True}

    @classmethod
    def from_point(cls, point: Point) -> PointModel:
        return cls(
            index=point.index,
            owner=point.owner,
            checkers=[CheckerModel.from_checker(c) for c in point.checkers],
        )

    @property
    def count(self) -> int:
        return len(self.checkers)


class GameSnapshot(BaseModel):
    """Full engine state at one moment."""

    points: list[PointModel]
    entry_points: list[PointModel]
    dice: list[int] = Field(default_factory=list)
    current_player: int = Field(ge=0, lt=NUM_PLAYERS)
    phase: GamePhase = GamePhase.IDLE

    model_config = {"frozen": True}

    @classmethod
    def from_context(cls, ctx: GameContext, phase: GamePhase = GamePhase.IDLE) -> GameSnapshot:
        board = ctx.board
        return cls(
            points=[PointModel.from_point(p) for p in board.points],
            entry_points=[
                PointModel.from_point(board.entry_point_for(player_id))
                for player_id in range(NUM_PLAYERS)
            ],
            dice=list(ctx.dice.values),
            current_player=ctx.current_player,
            phase=phase,
        )

    def point(self, index: int) -> PointModel:
        return self.points[index]

    def entry_point(self, player_id: int) -> PointModel:
        return self.entry_points[player_id]

    def checker_counts(self) -> dict[int, int]:
        """Checkers per player, bars included."""
        counts = {player_id: 0 for player_id in range(NUM_PLAYERS)}
        for point in self.points + self.entry_points:
            for checker in point.checkers:
                counts[checker.owner] += 1
        return counts
