"""
Backgammon Engine - Point

A point is an ordered stack of checkers with at most one owner. The owner
is derived from the stack: a point is unowned exactly when it is empty.
"""

import logging

from backgammon.engine.base import ENTRY_POINT_INDEX, Checker, CheckerState
from backgammon.engine.errors import EmptyPoint, OwnershipConflict

logger = logging.getLogger(__name__)


class Point:
    """
    One board position holding a stack of checkers.

    The stack is private; callers go through the accessor methods. The top
    of the stack is the most recently placed checker.
    """

    def __init__(self, index: int, reserved_for: int | None = None) -> None:
        """
        Args:
            index: Board index (0-23), or ENTRY_POINT_INDEX for a bar
            reserved_for: For entry points, the only player allowed on it
        """
        self._index = index
        self._reserved_for = reserved_for
        self._checkers: list[Checker] = []

    @property
    def index(self) -> int:
        return self._index

    @property
    def is_entry(self) -> bool:
        """True for a player's entry point (bar)."""
        return self._index == ENTRY_POINT_INDEX

    @property
    def owner(self) -> int | None:
        """Owning player id, or None when the point is empty."""
        if not self._checkers:
            return None
        return self._checkers[0].owner

    @property
    def checkers(self) -> tuple[Checker, ...]:
        """Bottom-to-top view of the stack."""
        return tuple(self._checkers)

    def __len__(self) -> int:
        return len(self._checkers)

    def __repr__(self) -> str:
        return f"Point(index={self._index}, owner={self.owner}, count={len(self._checkers)})"

    # -- queries -------------------------------------------------------------

    def is_empty(self) -> bool:
        return not self._checkers

    def is_owned_by(self, player_id: int) -> bool:
        return bool(self._checkers) and self.owner == player_id

    def can_be_captured(self) -> bool:
        """True iff exactly one checker (a blot) occupies the point."""
        return len(self._checkers) == 1

    def peek_top(self) -> Checker | None:
        return self._checkers[-1] if self._checkers else None

    # -- mutation ------------------------------------------------------------

    def add_checker(self, checker: Checker) -> None:
        """
        Push a checker onto the stack.

        Raises:
            OwnershipConflict: If the point holds the other player's checkers,
                or is an entry point reserved for the other player
        """
        if self._reserved_for is not None and checker.owner != self._reserved_for:
            raise OwnershipConflict(
                f"Entry point of player {self._reserved_for} cannot hold "
                f"a checker of player {checker.owner}."
            )

        owner = self.owner
        if owner is not None and owner != checker.owner:
            raise OwnershipConflict(
                f"Point {self._index} is owned by player {owner}; "
                f"cannot add a checker of player {checker.owner}."
            )

        state = CheckerState.AT_ENTRY if self.is_entry else CheckerState.IN_PLAY
        checker.place(self._index, state)
        self._checkers.append(checker)

    def remove_top(self) -> Checker:
        """
        Pop and return the top checker.

        Raises:
            EmptyPoint: If the point holds no checkers
        """
        if not self._checkers:
            raise EmptyPoint(f"Point {self._index} has no checkers.")
        checker = self._checkers.pop()
        checker.state = CheckerState.REMOVED
        return checker

    def remove_checker(self, checker: Checker) -> None:
        """
        Remove a specific checker instance wherever it sits in the stack.

        Raises:
            EmptyPoint: If the checker is not on this point
        """
        for position, candidate in enumerate(self._checkers):
            if candidate is checker:
                del self._checkers[position]
                checker.state = CheckerState.REMOVED
                return
        raise EmptyPoint(f"{checker!r} is not on point {self._index}.")

    def clear(self) -> list[Checker]:
        """Remove every checker and return them bottom-to-top."""
        removed = self._checkers
        self._checkers = []
        for checker in removed:
            checker.state = CheckerState.REMOVED
        if removed:
            logger.debug("Cleared %d checkers from point %d", len(removed), self._index)
        return removed
