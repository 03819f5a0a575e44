"""
Backgammon Engine - Event Definitions

Event types and typed payloads exchanged between the engine and a
presentation layer. Inbound events carry user intent into the engine;
outbound events announce state changes.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import ClassVar


class GameEvent(Enum):
    """Events that can occur during a game."""

    # Inbound (presentation -> engine)
    GAME_SETUP = auto()
    COIN_CLICKED = auto()
    PIECE_MOVE_REQUESTED = auto()
    DONE_PRESSED = auto()
    UNDO_REQUESTED = auto()
    REDO_REQUESTED = auto()
    RESET_TURN_REQUESTED = auto()

    # Outbound (engine -> presentation)
    TURN_STARTED = auto()
    DICE_ROLLED = auto()
    COIN_MOVED = auto()
    DICE_VALUE_RESTORED = auto()
    TURN_OVER = auto()
    SWITCH_TURN = auto()
    CLEAN_INDICATORS = auto()
    POSSIBLE_MOVES_SHOWN = auto()
    COINS_HIGHLIGHTED = auto()
    COMMAND_EXECUTED = auto()
    COMMAND_UNDONE = auto()


INBOUND_EVENTS = frozenset({
    GameEvent.GAME_SETUP,
    GameEvent.COIN_CLICKED,
    GameEvent.PIECE_MOVE_REQUESTED,
    GameEvent.DONE_PRESSED,
    GameEvent.UNDO_REQUESTED,
    GameEvent.REDO_REQUESTED,
    GameEvent.RESET_TURN_REQUESTED,
})


@dataclass(frozen=True)
class EventPayload:
    """Base class for event payloads. Each subclass pins its GameEvent."""

    event: ClassVar[GameEvent]


# === Inbound ===

@dataclass(frozen=True)
class GameSetupRequested(EventPayload):
    event: ClassVar[GameEvent] = GameEvent.GAME_SETUP


@dataclass(frozen=True)
class CoinClicked(EventPayload):
    event: ClassVar[GameEvent] = GameEvent.COIN_CLICKED

    owner_id: int
    point_index: int


@dataclass(frozen=True)
class PieceMoveRequested(EventPayload):
    event: ClassVar[GameEvent] = GameEvent.PIECE_MOVE_REQUESTED

    source_index: int
    target_index: int
    player_id: int
    die: int


@dataclass(frozen=True)
class DonePressed(EventPayload):
    event: ClassVar[GameEvent] = GameEvent.DONE_PRESSED


@dataclass(frozen=True)
class UndoRequested(EventPayload):
    event: ClassVar[GameEvent] = GameEvent.UNDO_REQUESTED


@dataclass(frozen=True)
class RedoRequested(EventPayload):
    event: ClassVar[GameEvent] = GameEvent.REDO_REQUESTED


@dataclass(frozen=True)
class ResetTurnRequested(EventPayload):
    event: ClassVar[GameEvent] = GameEvent.RESET_TURN_REQUESTED


# === Outbound ===

@dataclass(frozen=True)
class TurnStarted(EventPayload):
    event: ClassVar[GameEvent] = GameEvent.TURN_STARTED

    player_id: int


@dataclass(frozen=True)
class DiceRolled(EventPayload):
    event: ClassVar[GameEvent] = GameEvent.DICE_ROLLED

    values: tuple[int, ...]
    player_id: int


@dataclass(frozen=True)
class CoinMoved(EventPayload):
    event: ClassVar[GameEvent] = GameEvent.COIN_MOVED

    die: int
    source_index: int
    target_index: int
    player_id: int
    captured: bool = False


@dataclass(frozen=True)
class DiceValueRestored(EventPayload):
    event: ClassVar[GameEvent] = GameEvent.DICE_VALUE_RESTORED

    value: int
    player_id: int


@dataclass(frozen=True)
class TurnOver(EventPayload):
    event: ClassVar[GameEvent] = GameEvent.TURN_OVER

    player_id: int | None = None


@dataclass(frozen=True)
class SwitchTurn(EventPayload):
    event: ClassVar[GameEvent] = GameEvent.SWITCH_TURN

    player_id: int


@dataclass(frozen=True)
class CleanIndicators(EventPayload):
    event: ClassVar[GameEvent] = GameEvent.CLEAN_INDICATORS


@dataclass(frozen=True)
class PossibleMovesShown(EventPayload):
    event: ClassVar[GameEvent] = GameEvent.POSSIBLE_MOVES_SHOWN

    source_index: int
    player_id: int
    target_indices: tuple[int, ...]


@dataclass(frozen=True)
class CoinsHighlighted(EventPayload):
    event: ClassVar[GameEvent] = GameEvent.COINS_HIGHLIGHTED

    player_id: int
    point_indices: tuple[int, ...]


@dataclass(frozen=True)
class CommandExecuted(EventPayload):
    event: ClassVar[GameEvent] = GameEvent.COMMAND_EXECUTED

    description: str
    is_game_state: bool


@dataclass(frozen=True)
class CommandUndone(EventPayload):
    event: ClassVar[GameEvent] = GameEvent.COMMAND_UNDONE

    description: str
    is_game_state: bool


def is_inbound(payload: EventPayload) -> bool:
    """True for events a presentation layer sends into the engine."""
    return payload.event in INBOUND_EVENTS
