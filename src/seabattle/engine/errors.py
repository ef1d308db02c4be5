"""Exceptions raised by the SeaBattle engine."""

from __future__ import annotations


class BattleshipError(Exception):
    pass


class CoordinateError(BattleshipError, ValueError):
    """Malformed coordinate text or a point outside the board."""


class MatchError(BattleshipError, RuntimeError):
    pass


class MatchPhaseError(MatchError):
    """Operation not allowed in the current phase of the match."""


class OutOfTurnError(MatchError):
    """A player acted while it was the other player's turn."""
