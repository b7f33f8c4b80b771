"""Single board state machine: ship placement followed by attacks."""

from __future__ import annotations

from dataclasses import replace
from typing import NoReturn

from battleship_tracker.telemetry import get_logger, get_meter, get_tracer

from .errors import InvalidCoordinate, InvalidPlacement, InvalidShot
from .ship import Orientation, Ship, ShipPlacement
from .space import Coordinate, Space
from .validation import validate_board_value

DEFAULT_BOARD_SIZE = 10

logger = get_logger(__name__)
tracer = get_tracer("battleship_tracker.engine.board")
meter = get_meter("battleship_tracker.engine.board")

PLACEMENT_COUNTER = meter.create_counter(
    "battleship_tracker_ship_placements",
    unit="1",
    description="Number of attempted ship placements",
)

SHOT_COUNTER = meter.create_counter(
    "battleship_tracker_shots",
    unit="1",
    description="Shots fired at a board",
)


class Board:
    """Square grid of spaces plus the ships placed on it.

    Ships may be placed until the first valid shot lands; from then on the
    board only accepts attacks.
    """

    def __init__(self, size: int = DEFAULT_BOARD_SIZE) -> None:
        if size < 1:
            raise ValueError(f"Board size must be positive, got {size}")
        self.size = size
        self._spaces: list[list[Space]] = [
            [Space(x, y) for y in range(size)] for x in range(size)
        ]
        self._ships: list[Ship] = []
        self._game_begun = False

    @property
    def game_begun(self) -> bool:
        return self._game_begun

    def read_ship_list(self) -> tuple[Ship, ...]:
        """Return the placed ships in placement order."""
        return tuple(self._ships)

    def read_board_spaces(self) -> tuple[tuple[Space, ...], ...]:
        """Return a copy of the grid, indexed ``[x][y]``."""
        return tuple(tuple(replace(space) for space in column) for column in self._spaces)

    def space_at(self, x: int, y: int) -> Space:
        """Return a copy of a single space."""
        validate_board_value(x, self.size, inclusive=False)
        validate_board_value(y, self.size, inclusive=False)
        return replace(self._spaces[x][y])

    def is_game_over(self) -> bool:
        """True once at least one ship is placed and every ship is destroyed."""
        return bool(self._ships) and all(ship.is_destroyed() for ship in self._ships)

    def place_ship(self, placement: ShipPlacement) -> Ship:
        """Hang a new ship from its starting space and return it.

        Placement is all-or-nothing: every check runs before any space is marked.
        """
        with tracer.start_as_current_span("board.place_ship") as span:
            span.set_attribute("placement.x", placement.starting_x)
            span.set_attribute("placement.y", placement.starting_y)
            span.set_attribute("placement.length", placement.length)
            span.set_attribute("placement.orientation", placement.orientation.name)
            try:
                ship = self._place_ship(placement)
            except InvalidPlacement as exc:
                span.record_exception(exc)
                span.set_attribute("error", True)
                PLACEMENT_COUNTER.add(1, attributes={"result": "failed"})
                raise
            PLACEMENT_COUNTER.add(1, attributes={"result": "success"})
            logger.info(
                "ship_placed",
                extra={
                    "x": placement.starting_x,
                    "y": placement.starting_y,
                    "length": placement.length,
                    "orientation": placement.orientation.name,
                },
            )
            return ship

    def _place_ship(self, placement: ShipPlacement) -> Ship:
        if self._game_begun:
            self._reject_placement("Cannot place a ship after a shot has been fired.")
        self._validate_placement(placement)

        cells = placement.coordinates()
        for coord in cells:
            if self._spaces[coord.x][coord.y].contains_ship:
                self._reject_placement(
                    "Attempted to place a ship on top of another - ship already exists at "
                    f"space {coord.x}, {coord.y}"
                )

        for coord in cells:
            self._spaces[coord.x][coord.y].contains_ship = True
        ship = Ship(coordinates=frozenset(cells), space_lookup=self._lookup)
        self._ships.append(ship)
        return ship

    def _validate_placement(self, placement: ShipPlacement) -> None:
        x = placement.starting_x
        y = placement.starting_y
        length = placement.length
        orientation = placement.orientation

        if length <= 0 or length > self.size:
            self._reject_placement(f"Invalid ship length: {length}")

        try:
            validate_board_value(x, self.size, inclusive=False)
            validate_board_value(y, self.size, inclusive=False)
            if orientation is Orientation.HORIZONTAL:
                validate_board_value(x + length, self.size)
            elif orientation is Orientation.VERTICAL:
                validate_board_value(y + length, self.size)
        except InvalidCoordinate as exc:
            name = getattr(orientation, "name", orientation)
            message = (
                f"Invalid ship placement attempted with values - X: {x} Y: {y} "
                f"Length: {length} Orientation: {name}"
            )
            logger.error(message)
            raise InvalidPlacement(message, cause=exc) from exc

        if orientation not in (Orientation.HORIZONTAL, Orientation.VERTICAL):
            self._reject_placement(f"Invalid orientation supplied {orientation}")

    def attack_position(self, x: int, y: int) -> bool:
        """Fire at ``(x, y)`` and return whether a ship was hit."""
        with tracer.start_as_current_span("board.attack_position") as span:
            span.set_attribute("shot.x", x)
            span.set_attribute("shot.y", y)
            try:
                hit = self._attack_position(x, y)
            except InvalidShot as exc:
                span.record_exception(exc)
                span.set_attribute("error", True)
                SHOT_COUNTER.add(1, attributes={"outcome": "rejected"})
                raise
            outcome = "hit" if hit else "miss"
            span.set_attribute("shot.outcome", outcome)
            SHOT_COUNTER.add(1, attributes={"outcome": outcome})
            logger.info("shot_" + outcome, extra={"x": x, "y": y})
            return hit

    def _attack_position(self, x: int, y: int) -> bool:
        if not self._ships:
            message = "Cannot fire a shot before any ships are placed."
            logger.error(message)
            raise InvalidShot(message)

        try:
            validate_board_value(x, self.size, inclusive=False)
            validate_board_value(y, self.size, inclusive=False)
        except InvalidCoordinate as exc:
            message = f"Invalid shot attempted at co-ordinates {x}, {y}"
            logger.error(message)
            raise InvalidShot(message, cause=exc) from exc

        target = self._spaces[x][y]
        if target.fired_upon:
            message = f"Attempted to shoot a space already fired on at co-ordinates {x}, {y}"
            logger.warning(message)
            raise InvalidShot(message)

        target.fired_upon = True
        if not self._game_begun:
            self._game_begun = True
            logger.debug("game_begun", extra={"x": x, "y": y})
        return target.contains_ship

    def _lookup(self, coord: Coordinate) -> Space:
        return replace(self._spaces[coord.x][coord.y])

    @staticmethod
    def _reject_placement(message: str) -> NoReturn:
        logger.error(message)
        raise InvalidPlacement(message)
