"""Ship domain model for the Battleship tracker."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable

from battleship_tracker.telemetry import get_logger

from .errors import InvalidPlacement
from .space import Coordinate, Space

logger = get_logger(__name__)

SpaceLookup = Callable[[Coordinate], Space]


class Orientation(Enum):
    """Direction a ship hangs from its starting space."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


@dataclass(frozen=True)
class ShipPlacement:
    """Request describing where and how to lay down a new ship.

    Horizontal ships extend to the right of the starting space, vertical
    ships extend downwards.
    """

    starting_x: int
    starting_y: int
    length: int
    orientation: Orientation

    def __post_init__(self) -> None:
        if not isinstance(self.orientation, Orientation):
            message = f"Invalid orientation supplied {self.orientation}"
            logger.error(message)
            raise InvalidPlacement(message)

    def coordinates(self) -> list[Coordinate]:
        """Return the target cells in ascending order."""
        if self.orientation is Orientation.HORIZONTAL:
            return [
                Coordinate(self.starting_x + offset, self.starting_y)
                for offset in range(self.length)
            ]
        return [
            Coordinate(self.starting_x, self.starting_y + offset) for offset in range(self.length)
        ]


@dataclass(frozen=True)
class Ship:
    """A vessel on the board, stored as the coordinates it occupies.

    Space state is owned by the board; ``space_lookup`` resolves a coordinate to
    the current state of the board's Space each time it is called.
    """

    coordinates: frozenset[Coordinate] = frozenset()
    space_lookup: SpaceLookup | None = field(default=None, compare=False, repr=False)

    def spaces(self) -> list[Space]:
        """Return snapshots of the occupied spaces ordered by coordinate."""
        if self.space_lookup is None:
            return []
        ordered = sorted(self.coordinates, key=lambda coord: (coord.x, coord.y))
        return [self.space_lookup(coord) for coord in ordered]

    def is_destroyed(self) -> bool:
        """Whether every space of the ship has been fired upon."""
        if not self.coordinates or self.space_lookup is None:
            return False
        return all(self.space_lookup(coord).fired_upon for coord in self.coordinates)

    def __len__(self) -> int:
        return len(self.coordinates)
