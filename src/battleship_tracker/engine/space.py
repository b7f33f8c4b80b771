"""Grid cell model."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Coordinate:
    """Immutable board coordinate, indexed ``[x][y]``."""

    x: int
    y: int


@dataclass
class Space:
    """A single board cell tracking occupancy and whether it has been shot."""

    x: int
    y: int
    contains_ship: bool = False
    fired_upon: bool = False

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(self.x, self.y)
