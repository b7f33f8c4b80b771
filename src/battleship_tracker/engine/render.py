"""Text rendering of a board for diagnostics."""

from __future__ import annotations

from battleship_tracker.telemetry import get_logger

from .board import Board
from .space import Space

logger = get_logger(__name__)

HIT_SYMBOL = "x"
SHIP_SYMBOL = "o"
WATER_SYMBOL = "-"


def _symbol(space: Space, owns_board: bool) -> str:
    if space.contains_ship:
        if space.fired_upon:
            return HIT_SYMBOL
        if owns_board:
            return SHIP_SYMBOL
    return WATER_SYMBOL


def render_board(board: Board, owns_board: bool = True) -> str:
    """Render the board one row per line, rows by ``y`` and columns by ``x``.

    Ships that have not been hit are only revealed when ``owns_board`` is set.
    """
    spaces = board.read_board_spaces()
    rows = []
    for y in range(board.size):
        rows.append("".join(_symbol(spaces[x][y], owns_board) for x in range(board.size)) + "\n")
    rendered = "".join(rows)
    logger.debug("board_rendered\n%s", rendered)
    return rendered
