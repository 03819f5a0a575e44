"""
Backgammon Engine State Models.

Pydantic mirrors of the engine state, for comparison and hand-off to a
presentation layer.
"""

from backgammon.state.models import CheckerModel, GameSnapshot, PointModel

__all__ = ["CheckerModel", "GameSnapshot", "PointModel"]
