"""Game tracker facade owning the current board."""

from __future__ import annotations

from battleship_tracker.telemetry import get_logger, get_tracer, record_game_metric

from .board import DEFAULT_BOARD_SIZE, Board
from .render import render_board
from .ship import Orientation, Ship, ShipPlacement

logger = get_logger(__name__)
tracer = get_tracer("battleship_tracker.engine.tracker")


class GameTracker:
    """Translates primitive requests into board operations.

    Errors raised by the board propagate unchanged; starting a new game is the
    only way to reset state.
    """

    def __init__(self) -> None:
        self._board = Board(DEFAULT_BOARD_SIZE)

    @property
    def board(self) -> Board:
        return self._board

    def start_new_game(self) -> None:
        """Discard the current board and start from an empty one."""
        with tracer.start_as_current_span("tracker.start_new_game") as span:
            span.set_attribute("board.size", DEFAULT_BOARD_SIZE)
            logger.info("Starting new game!")
            self._board = Board(DEFAULT_BOARD_SIZE)
            record_game_metric("battleship_tracker_games_started", 1, {"size": DEFAULT_BOARD_SIZE})

    def place_ship(self, x: int, y: int, length: int, orientation: Orientation) -> Ship:
        logger.info(
            "Placing ship at co-ordinates %s,%s with length %s and orientation %s",
            x,
            y,
            length,
            getattr(orientation, "name", orientation),
        )
        placement = ShipPlacement(
            starting_x=x, starting_y=y, length=length, orientation=orientation
        )
        return self._board.place_ship(placement)

    def attack_position(self, x: int, y: int) -> bool:
        """Fire at a position and report whether it was a hit."""
        logger.info("Attacking position %s,%s", x, y)
        return self._board.attack_position(x, y)

    def is_game_over(self) -> bool:
        return self._board.is_game_over()

    def render(self, owns_board: bool = True) -> str:
        return render_board(self._board, owns_board)
