"""Bounds checks shared by the placement and attack paths."""

from __future__ import annotations

from battleship_tracker.telemetry import get_logger

from .errors import InvalidCoordinate

logger = get_logger(__name__)


def validate_board_value(value: int, size: int, *, inclusive: bool = True) -> None:
    """Raise ``InvalidCoordinate`` when ``value`` does not fit on a board of ``size``.

    ``inclusive`` accepts ``value == size``, which is a legal end point for a
    span such as ``start + length``. Cell indices are checked with
    ``inclusive=False``.
    """
    upper = size if inclusive else size - 1
    if value < 0 or value > upper:
        message = f"Value {value} does not fit on the board"
        logger.error(
            "coordinate_out_of_bounds",
            extra={"value": value, "size": size, "inclusive": inclusive},
        )
        raise InvalidCoordinate(message)
