"""
Backgammon Engine Event Channel.

Typed event payloads and the synchronous bus that carries them between
the engine and a presentation layer.
"""

from backgammon.events.bus import EventBus
from backgammon.events.events import (
    CleanIndicators,
    CoinClicked,
    CoinMoved,
    CoinsHighlighted,
    CommandExecuted,
    CommandUndone,
    DiceRolled,
    DiceValueRestored,
    DonePressed,
    EventPayload,
    GameEvent,
    GameSetupRequested,
    PieceMoveRequested,
    PossibleMovesShown,
    RedoRequested,
    ResetTurnRequested,
    SwitchTurn,
    TurnOver,
    TurnStarted,
    UndoRequested,
)

__all__ = [
    "EventBus",
    "EventPayload",
    "GameEvent",
    # Inbound
    "GameSetupRequested",
    "CoinClicked",
    "PieceMoveRequested",
    "DonePressed",
    "UndoRequested",
    "RedoRequested",
    "ResetTurnRequested",
    # Outbound
    "TurnStarted",
    "DiceRolled",
    "CoinMoved",
    "DiceValueRestored",
    "TurnOver",
    "SwitchTurn",
    "CleanIndicators",
    "PossibleMovesShown",
    "CoinsHighlighted",
    "CommandExecuted",
    "CommandUndone",
]
