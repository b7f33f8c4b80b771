"""Error taxonomy for rejected placements and shots."""

from __future__ import annotations


class BattleshipError(Exception):
    """Base class for caller-input problems raised by the engine.

    ``cause`` holds the lower-level error a failure was wrapped around, so
    callers can inspect the chain without relying on ``__cause__``.
    """

    def __init__(self, message: str, cause: BattleshipError | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause


class InvalidCoordinate(BattleshipError):
    """A coordinate or span endpoint does not fit on the board."""


class InvalidPlacement(BattleshipError):
    """A ship cannot be placed."""


class InvalidShot(BattleshipError):
    """An attack cannot be recorded."""
