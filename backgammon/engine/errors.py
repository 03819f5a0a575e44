"""
Backgammon Engine - Error Taxonomy

Rule violations are recovered inside the command/history layer and turned
into boolean results with a reason. Only BoardConfigurationError is meant
to escape, at construction time.
"""


class EngineError(Exception):
    """Base class for all engine errors."""


class IllegalMove(EngineError):
    """Requested move fails validation (wrong turn, bad source, blocked target)."""


class OwnershipConflict(EngineError):
    """A checker was stacked on a point owned by the other player."""


class EmptyPoint(EngineError):
    """A checker was requested from a point with no checkers."""


class UndoMismatch(EngineError):
    """The board no longer matches what a command recorded at execution time."""


class EmptyHistory(EngineError):
    """Undo, redo or reset was requested with nothing eligible."""


class BoardConfigurationError(EngineError):
    """The board or starting layout is malformed. Fatal."""
