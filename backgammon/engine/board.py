"""
Backgammon Engine - Board

Owns the 24 regular points plus one entry point (bar) per player, and knows
how to lay out the starting position.

Board layout (indices):
    12 13 14 15 16 17    18 19 20 21 22 23
    +------------------+------------------+
    |                  |                  |
    |                  |                  |
    +------------------+------------------+
    11 10  9  8  7  6     5  4  3  2  1  0

    Player 0 starts with 2 on 23, 5 on 12, 3 on 7, 5 on 5 and moves toward 0.
    Player 1 starts with 2 on 0, 5 on 11, 3 on 16, 5 on 18 and moves toward 23.
"""

import logging
from typing import Iterator, Sequence

from backgammon.engine.base import (
    BOARD_SIZE,
    CHECKERS_PER_PLAYER,
    ENTRY_POINT_INDEX,
    NUM_PLAYERS,
    PLAYER_0,
    STARTING_LAYOUT,
    Checker,
    StartingStack,
)
from backgammon.engine.errors import BoardConfigurationError
from backgammon.engine.point import Point
from backgammon.engine.validators import (
    validate_player_id,
    validate_point_index,
    validate_starting_layout,
)

logger = logging.getLogger(__name__)

# Pip distance of a checker waiting on the bar
BAR_PIP_DISTANCE = BOARD_SIZE + 1


class Board:
    """24 points plus two entry points."""

    def __init__(self, points: Sequence[Point] | None = None) -> None:
        """
        Args:
            points: Pre-built regular points (mainly for tests). Must be exactly
                BOARD_SIZE points indexed 0..BOARD_SIZE-1.

        Raises:
            BoardConfigurationError: If the supplied points are malformed
        """
        if points is None:
            points = [Point(i) for i in range(BOARD_SIZE)]

        if len(points) != BOARD_SIZE:
            raise BoardConfigurationError(
                f"Board requires exactly {BOARD_SIZE} points, got {len(points)}."
            )
        for expected, point in enumerate(points):
            if point.index != expected:
                raise BoardConfigurationError(
                    f"Point at position {expected} has index {point.index}."
                )

        self._points: tuple[Point, ...] = tuple(points)
        self._entry_points: tuple[Point, ...] = tuple(
            Point(ENTRY_POINT_INDEX, reserved_for=player_id)
            for player_id in range(NUM_PLAYERS)
        )

    # -- access --------------------------------------------------------------

    @property
    def points(self) -> tuple[Point, ...]:
        return self._points

    def point_at(self, index: int) -> Point:
        """
        Return the regular point at index.

        Raises:
            ValueError: If index is outside [0, BOARD_SIZE)
        """
        validate_point_index(index)
        return self._points[index]

    def entry_point_for(self, player_id: int) -> Point:
        validate_player_id(player_id)
        return self._entry_points[player_id]

    def resolve(self, index: int, player_id: int) -> Point:
        """Map an index to a point; ENTRY_POINT_INDEX means player_id's bar."""
        if index == ENTRY_POINT_INDEX:
            return self.entry_point_for(player_id)
        return self.point_at(index)

    # -- setup ---------------------------------------------------------------

    def clear(self) -> None:
        """Remove all checkers from every point, bars included."""
        for point in self._points + self._entry_points:
            point.clear()

    def setup(
        self,
        layout: Sequence[StartingStack] = STARTING_LAYOUT,
        strict: bool = True
    ) -> None:
        """
        Clear the board and place a starting distribution.

        Args:
            layout: Stacks to place
            strict: Require a full 15-checker-per-side layout. Partial layouts
                are useful for composing positions in tests.

        Raises:
            BoardConfigurationError: If the layout is invalid
        """
        if strict:
            try:
                layout = validate_starting_layout(layout)
            except ValueError as exc:
                raise BoardConfigurationError(str(exc)) from exc

        self.clear()
        for stack in layout:
            self.place_checkers(stack.point_index, stack.player_id, stack.count)

        logger.info("Board set up with %d starting stacks", len(layout))

    def place_checkers(self, index: int, player_id: int, count: int = 1) -> list[Checker]:
        """
        Create count new checkers for player_id on a point or the bar.

        Raises:
            OwnershipConflict: If the point belongs to the other player
        """
        validate_player_id(player_id)
        point = self.resolve(index, player_id)
        placed = []
        for _ in range(count):
            checker = Checker(owner=player_id)
            point.add_checker(checker)
            placed.append(checker)
        return placed

    # -- queries -------------------------------------------------------------

    def points_owned_by(self, player_id: int) -> list[Point]:
        return [p for p in self._points if p.is_owned_by(player_id)]

    def iter_checkers(self) -> Iterator[Checker]:
        """Every checker on the board and on both bars."""
        for point in self._points + self._entry_points:
            yield from point.checkers

    def has_checkers_at_entry(self, player_id: int) -> bool:
        return not self.entry_point_for(player_id).is_empty()

    def checker_count(self, player_id: int) -> int:
        """Checkers of player_id on the board and on their bar."""
        on_board = sum(len(p) for p in self.points_owned_by(player_id))
        return on_board + len(self.entry_point_for(player_id))

    def pip_count(self, player_id: int) -> int:
        """
        Total distance player_id's checkers must travel to leave the board.

        Player 0 bears off past index 0, player 1 past index 23. Checkers on
        the bar count the full BAR_PIP_DISTANCE.
        """
        total = len(self.entry_point_for(player_id)) * BAR_PIP_DISTANCE
        for point in self.points_owned_by(player_id):
            if player_id == PLAYER_0:
                distance = point.index + 1
            else:
                distance = BOARD_SIZE - point.index
            total += distance * len(point)
        return total

    def ownership_invariant_holds(self) -> bool:
        """Every point holds checkers of a single owner that record their point."""
        for point in self._points + self._entry_points:
            owners = {c.owner for c in point.checkers}
            if len(owners) > 1:
                return False
            if any(c.current_point != point.index for c in point.checkers):
                return False
        return True

    def is_consistent(self) -> bool:
        """Ownership invariant plus CHECKERS_PER_PLAYER checkers per side."""
        if not self.ownership_invariant_holds():
            return False

        return all(
            self.checker_count(player_id) == CHECKERS_PER_PLAYER
            for player_id in range(NUM_PLAYERS)
        )

    def __str__(self) -> str:
        lines = ["Point | Owner | Count", "------+-------+------"]
        for player_id, bar in enumerate(self._entry_points):
            lines.append(f"BAR{player_id}  |  {player_id:>3}  |  {len(bar):2d}")
        for point in self._points:
            owner = "-" if point.owner is None else str(point.owner)
            lines.append(f"{point.index:4d}  |  {owner:>3}  |  {len(point):2d}")
        return "\n".join(lines)
