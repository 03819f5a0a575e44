"""
Backgammon Engine - Command History

Bounded undo stack plus a redo stack, with turn-scoped bulk undo.

The history never leaves a command half-counted: a command is on the undo
stack exactly when it is currently executed, and a failed undo puts it back
where it was.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from backgammon.commands import dispatch
from backgammon.commands.base import Command, CommandResult
from backgammon.engine.context import GameContext
from backgammon.engine.errors import EmptyHistory
from backgammon.events.events import CommandExecuted, CommandUndone

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 50


@dataclass(frozen=True)
class HistoryEntry:
    """Timestamped description of a command on the undo stack."""
    description: str
    created_at: datetime
    is_game_state: bool

    def __str__(self) -> str:
        return f"[{self.created_at:%H:%M:%S}] {self.description}"


class CommandHistory:
    """
    Runs commands against a GameContext and remembers them for undo.

    Attributes:
        capacity: Maximum number of commands kept on the undo stack
    """

    def __init__(self, ctx: GameContext, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError(f"History capacity must be at least 1, got {capacity}.")
        self._ctx = ctx
        self.capacity = capacity
        self._undo: list[Command] = []
        self._redo: list[Command] = []
        self._turn_start = 0

    # -- execution -----------------------------------------------------------

    def execute(self, command: Command, record: bool = True) -> CommandResult:
        """
        Execute command and, on success, push it onto the undo stack.

        Args:
            command: Command to run
            record: False for commands that should run without being kept
                (e.g. turn-end checks)

        Returns:
            Result of the execution; exceptions are logged and reported as failure
        """
        try:
            result = dispatch.execute(self._ctx, command)
        except Exception as exc:
            logger.exception("Error executing command %s", command.description)
            return CommandResult.fail(f"Error executing {command.description}: {exc}")

        if not result:
            logger.warning("Cannot execute command %s: %s", command.description, result.reason)
            return result

        if record:
            self._push(command)
            # Indicator refreshes must not invalidate redo
            if command.is_game_state:
                self._redo.clear()
        logger.info("Executed: %s", command.description)
        self._ctx.bus.publish(
            CommandExecuted(description=command.description, is_game_state=command.is_game_state)
        )
        return result

    def _push(self, command: Command) -> None:
        self._undo.append(command)
        while len(self._undo) > self.capacity:
            position = self._eviction_index()
            if position is None:
                logger.warning(
                    "History over capacity (%d/%d): only current-turn moves remain",
                    len(self._undo), self.capacity,
                )
                break
            evicted = self._undo.pop(position)
            if position < self._turn_start:
                self._turn_start -= 1
            logger.debug("Evicted from history: %s", evicted.description)

    def _eviction_index(self) -> int | None:
        """
        Oldest presentation-only entry, else the oldest entry from before the
        current turn. Moves of the current turn are never evicted, so
        reset_current_turn() can always reach them.
        """
        for i, command in enumerate(self._undo):
            if not command.is_game_state:
                return i
        if self._turn_start > 0:
            return 0
        return None

    # -- undo / redo ---------------------------------------------------------

    def undo_last(self) -> CommandResult:
        """Undo the most recent command. On failure it stays on the stack."""
        if not self._undo:
            logger.info("No commands to undo")
            return CommandResult.fail(str(EmptyHistory("No commands to undo.")))

        command = self._undo.pop()
        result = self._undo_one(command)
        if not result:
            self._undo.append(command)
            return result

        self._redo.append(command)
        self._turn_start = min(self._turn_start, len(self._undo))
        return result

    def undo_last_move(self) -> CommandResult:
        """
        Undo the latest game-state command of the current turn.

        Presentation-only commands stacked above it are discarded without
        being undone.
        """
        position = None
        for i in range(len(self._undo) - 1, self._turn_start - 1, -1):
            if self._undo[i].is_game_state:
                position = i
                break
        if position is None:
            logger.info("No moves to undo in current turn")
            return CommandResult.fail(str(EmptyHistory("No moves to undo in current turn.")))

        command = self._undo[position]
        result = self._undo_one(command)
        if not result:
            return result

        discarded = len(self._undo) - position - 1
        del self._undo[position:]
        self._redo.append(command)
        if discarded:
            logger.debug("Discarded %d presentation commands above undone move", discarded)
        return result

    def redo_last(self) -> CommandResult:
        """Re-execute the most recently undone command."""
        if not self._redo:
            logger.info("No commands to redo")
            return CommandResult.fail(str(EmptyHistory("No commands to redo.")))

        command = self._redo.pop()
        try:
            result = dispatch.execute(self._ctx, command)
        except Exception as exc:
            logger.exception("Error redoing command %s", command.description)
            result = CommandResult.fail(f"Error redoing {command.description}: {exc}")

        if not result:
            logger.warning("Cannot redo command %s: %s", command.description, result.reason)
            self._redo.append(command)
            return result

        self._push(command)
        logger.info("Redone: %s", command.description)
        self._ctx.bus.publish(
            CommandExecuted(description=command.description, is_game_state=command.is_game_state)
        )
        return result

    def _undo_one(self, command: Command) -> CommandResult:
        try:
            result = dispatch.undo(self._ctx, command)
        except Exception as exc:
            logger.exception("Error undoing command %s", command.description)
            return CommandResult.fail(f"Error undoing {command.description}: {exc}")

        if not result:
            logger.error("Failed to undo command %s: %s", command.description, result.reason)
            return result

        logger.info("Undone: %s", command.description)
        self._ctx.bus.publish(
            CommandUndone(description=command.description, is_game_state=command.is_game_state)
        )
        return result

    # -- turn scope ----------------------------------------------------------

    def mark_turn_start(self) -> None:
        """Remember the stack depth at which the current turn begins."""
        self._turn_start = len(self._undo)
        logger.info("Turn started. History size: %d", self._turn_start)

    @property
    def turn_start_depth(self) -> int:
        return self._turn_start

    def reset_current_turn(self) -> bool:
        """
        Undo every game-state command executed since mark_turn_start().

        Commands are undone newest first. Presentation commands in that span
        are dropped without being undone. Commands whose undo fails are kept
        on the stack in their original order.

        Returns:
            True if at least one command was undone
        """
        span = self._undo[self._turn_start:]
        if not span:
            logger.info("No commands to undo in current turn")
            return False

        del self._undo[self._turn_start:]
        kept: list[Command] = []
        undone = 0
        for command in reversed(span):
            if not command.is_game_state:
                continue
            if self._undo_one(command):
                undone += 1
            else:
                kept.append(command)

        self._undo.extend(reversed(kept))
        self._redo.clear()

        if kept:
            logger.warning("Failed to undo %d commands in current turn", len(kept))
        logger.info("Reset current turn: undone %d game state commands", undone)
        return undone > 0

    def moves_in_current_turn(self) -> int:
        """Game-state commands executed since the turn started."""
        return sum(1 for c in self._undo[self._turn_start:] if c.is_game_state)

    def can_reset_current_turn(self) -> bool:
        return self.moves_in_current_turn() > 0

    # -- queries -------------------------------------------------------------

    def can_undo(self) -> bool:
        return bool(self._undo) and dispatch.can_undo(self._undo[-1])

    def can_redo(self) -> bool:
        return bool(self._redo)

    def __len__(self) -> int:
        return len(self._undo)

    @property
    def commands(self) -> tuple[Command, ...]:
        """Undo stack, oldest first."""
        return tuple(self._undo)

    def command_history(self) -> list[HistoryEntry]:
        """Timestamped entries for every command on the undo stack, oldest first."""
        return [
            HistoryEntry(
                description=c.description,
                created_at=c.created_at,
                is_game_state=c.is_game_state,
            )
            for c in self._undo
        ]

    def clear(self) -> None:
        self._undo.clear()
        self._redo.clear()
        self._turn_start = 0
        logger.info("Command history cleared")
