"""
Backgammon Engine - Command Variants

A closed set of command dataclasses. Each variant carries its parameters
plus the bookkeeping it needs to undo itself; behavior lives in
backgammon.commands.dispatch, keyed by variant type.

Lifecycle of every command instance:
    CREATED -> EXECUTED -> UNDONE -> EXECUTED (redo) -> ...
A command that never executed successfully refuses undo.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import ClassVar

from backgammon.engine.base import STARTING_LAYOUT, Checker, StartingStack


class CommandStatus(Enum):
    CREATED = "created"
    EXECUTED = "executed"
    UNDONE = "undone"


@dataclass(frozen=True)
class CommandResult:
    """
    Outcome of executing or undoing a command.

    Attributes:
        success: Whether the operation took effect
        reason: Human-readable explanation (empty on plain success)
    """
    success: bool
    reason: str = ""

    def __bool__(self) -> bool:
        return self.success

    @classmethod
    def ok(cls, reason: str = "") -> "CommandResult":
        return cls(success=True, reason=reason)

    @classmethod
    def fail(cls, reason: str) -> "CommandResult":
        return cls(success=False, reason=reason)


@dataclass(eq=False)
class Command:
    """Common fields of all commands."""

    # True = mutates board or dice; False = presentation or turn bookkeeping only
    IS_GAME_STATE: ClassVar[bool] = True

    created_at: datetime = field(default_factory=datetime.now, init=False)
    status: CommandStatus = field(default=CommandStatus.CREATED, init=False)

    @property
    def is_game_state(self) -> bool:
        return self.IS_GAME_STATE

    @property
    def description(self) -> str:
        return type(self).__name__

    def __str__(self) -> str:
        return self.description


@dataclass(eq=False)
class GameSetupCommand(Command):
    """Place the starting distribution on a cleared board."""

    layout: tuple[StartingStack, ...] = STARTING_LAYOUT
    strict: bool = True

    @property
    def description(self) -> str:
        return "Initialize game setup"


@dataclass(eq=False)
class RollDiceCommand(Command):
    """Roll two dice for player_id and fill the dice pool."""

    player_id: int
    rolled: tuple[int, ...] = field(default=(), init=False)

    @property
    def description(self) -> str:
        return f"Roll dice for player {self.player_id}"


@dataclass(eq=False)
class MoveCoinCommand(Command):
    """Move the top checker of source to target, consuming die."""

    source: int
    target: int
    player_id: int
    die: int

    # Undo bookkeeping, filled on execute
    moved_checker: Checker | None = field(default=None, init=False, repr=False)
    captured_checker: Checker | None = field(default=None, init=False, repr=False)
    die_position: int | None = field(default=None, init=False, repr=False)
    mover_previous_point: int | None = field(default=None, init=False, repr=False)
    mover_was_moved: bool = field(default=False, init=False, repr=False)
    captured_previous_point: int | None = field(default=None, init=False, repr=False)

    @property
    def was_capture(self) -> bool:
        return self.captured_checker is not None

    @property
    def description(self) -> str:
        return (
            f"Move coin from point {self.source} to point {self.target} "
            f"(player {self.player_id}, die {self.die})"
        )


@dataclass(eq=False)
class CheckTurnEndCommand(Command):
    """
    Decide whether player_id's turn is over.

    Manual mode (a "done" request) fails while a legal move remains.
    Automatic mode always succeeds and only reports via turn_ended.
    """

    IS_GAME_STATE: ClassVar[bool] = False

    player_id: int
    remaining_dice: tuple[int, ...]
    manual: bool = True
    turn_ended: bool = field(default=False, init=False)

    @property
    def description(self) -> str:
        mode = "manual" if self.manual else "auto"
        return f"Check turn end for player {self.player_id} ({mode})"


@dataclass(eq=False)
class ShowPossibleMovesCommand(Command):
    """Surface the legal targets from one source point."""

    IS_GAME_STATE: ClassVar[bool] = False

    source: int
    player_id: int
    dice: tuple[int, ...]
    targets: tuple[int, ...] = field(default=(), init=False)

    @property
    def description(self) -> str:
        return f"Show possible moves from point {self.source} for player {self.player_id}"


@dataclass(eq=False)
class HighlightAvailableCoinsCommand(Command):
    """Surface every point player_id can move from with the given dice."""

    IS_GAME_STATE: ClassVar[bool] = False

    player_id: int
    dice: tuple[int, ...]
    highlighted: tuple[int, ...] = field(default=(), init=False)

    @property
    def description(self) -> str:
        return f"Highlight available coins for player {self.player_id}"


@dataclass(eq=False)
class HidePossibleMovesCommand(Command):
    """Clear all move indicators."""

    IS_GAME_STATE: ClassVar[bool] = False

    @property
    def description(self) -> str:
        return "Hide all possible move indicators"


@dataclass(eq=False)
class CompositeCommand(Command):
    """Run several commands as one transaction."""

    label: str = "Composite command"
    children: list[Command] = field(default_factory=list)
    executed: list[Command] = field(default_factory=list, init=False, repr=False)

    def add(self, *commands: Command) -> None:
        self.children.extend(c for c in commands if c is not None)

    @property
    def is_game_state(self) -> bool:
        return any(child.is_game_state for child in self.children)

    @property
    def description(self) -> str:
        return self.label

    def child_descriptions(self) -> list[str]:
        return [child.description for child in self.children]

