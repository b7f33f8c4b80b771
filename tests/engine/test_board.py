"""Tests for the Board placement and attack mechanics."""

import pytest

from battleship_tracker.engine.board import Board
from battleship_tracker.engine.errors import InvalidCoordinate, InvalidPlacement, InvalidShot
from battleship_tracker.engine.ship import Orientation, ShipPlacement
from battleship_tracker.engine.space import Coordinate


def _place_default_ship(board: Board):
    return board.place_ship(ShipPlacement(3, 4, 5, Orientation.HORIZONTAL))


def test_add_horizontal_ship() -> None:
    board = Board(10)
    ship = _place_default_ship(board)
    spaces = board.read_board_spaces()

    assert board.read_ship_list() == (ship,)
    assert len(ship) == 5
    expected = {Coordinate(x, 4) for x in range(3, 8)}
    assert ship.coordinates == expected
    for x in range(10):
        for y in range(10):
            assert spaces[x][y].contains_ship is (Coordinate(x, y) in expected)
            assert spaces[x][y].fired_upon is False
    assert ship.spaces() == [spaces[c.x][c.y] for c in sorted(expected, key=lambda c: c.x)]


def test_add_vertical_ship() -> None:
    board = Board(10)
    ship = board.place_ship(ShipPlacement(6, 5, 3, Orientation.VERTICAL))
    spaces = board.read_board_spaces()

    assert ship.coordinates == {Coordinate(6, 5), Coordinate(6, 6), Coordinate(6, 7)}
    occupied = [(x, y) for x in range(10) for y in range(10) if spaces[x][y].contains_ship]
    assert occupied == [(6, 5), (6, 6), (6, 7)]


def test_ship_may_end_on_board_edge() -> None:
    board = Board(10)
    ship = board.place_ship(ShipPlacement(5, 9, 5, Orientation.HORIZONTAL))
    assert Coordinate(9, 9) in ship.coordinates


@pytest.mark.parametrize("length", [0, -1, 11])
def test_invalid_length_rejected_before_coordinates(length: int) -> None:
    board = Board(10)
    with pytest.raises(InvalidPlacement) as excinfo:
        board.place_ship(ShipPlacement(-5, 50, length, Orientation.HORIZONTAL))
    assert str(excinfo.value) == f"Invalid ship length: {length}"
    assert excinfo.value.cause is None


@pytest.mark.parametrize(
    ("x", "y", "length", "orientation", "bad_value"),
    [
        (-3, 5, 3, Orientation.HORIZONTAL, -3),
        (3, -5, 3, Orientation.VERTICAL, -5),
        (8, 0, 3, Orientation.HORIZONTAL, 11),
        (0, 9, 2, Orientation.VERTICAL, 11),
        (10, 0, 1, Orientation.VERTICAL, 10),
    ],
)
def test_out_of_bounds_placement_wraps_coordinate_error(
    x: int, y: int, length: int, orientation: Orientation, bad_value: int
) -> None:
    board = Board(10)
    with pytest.raises(InvalidPlacement) as excinfo:
        board.place_ship(ShipPlacement(x, y, length, orientation))

    assert str(excinfo.value) == (
        f"Invalid ship placement attempted with values - X: {x} Y: {y} "
        f"Length: {length} Orientation: {orientation.name}"
    )
    cause = excinfo.value.cause
    assert isinstance(cause, InvalidCoordinate)
    assert excinfo.value.__cause__ is cause
    assert str(cause) == f"Value {bad_value} does not fit on the board"
    assert board.read_ship_list() == ()


def test_overlapping_ship_rejected_without_partial_state() -> None:
    board = Board(10)
    first = _place_default_ship(board)

    with pytest.raises(InvalidPlacement) as excinfo:
        board.place_ship(ShipPlacement(5, 2, 4, Orientation.VERTICAL))
    assert str(excinfo.value) == (
        "Attempted to place a ship on top of another - ship already exists at space 5, 4"
    )

    spaces = board.read_board_spaces()
    assert board.read_ship_list() == (first,)
    assert not spaces[5][2].contains_ship
    assert not spaces[5][3].contains_ship
    assert not spaces[5][5].contains_ship


def test_overlap_reports_first_conflict_in_scan_order() -> None:
    board = Board(10)
    _place_default_ship(board)
    with pytest.raises(InvalidPlacement, match="already exists at space 3, 4"):
        board.place_ship(ShipPlacement(0, 4, 6, Orientation.HORIZONTAL))


def test_cannot_place_after_first_shot() -> None:
    board = Board()
    _place_default_ship(board)
    board.attack_position(0, 0)

    with pytest.raises(InvalidPlacement) as excinfo:
        board.place_ship(ShipPlacement(0, 9, 2, Orientation.HORIZONTAL))
    assert str(excinfo.value) == "Cannot place a ship after a shot has been fired."
    assert len(board.read_ship_list()) == 1


def test_placement_still_allowed_after_rejected_shot() -> None:
    board = Board()
    _place_default_ship(board)
    with pytest.raises(InvalidShot):
        board.attack_position(-1, 0)
    assert board.game_begun is False
    board.place_ship(ShipPlacement(0, 0, 2, Orientation.VERTICAL))


def test_hit_and_miss() -> None:
    board = Board()
    _place_default_ship(board)

    assert board.attack_position(3, 4) is True
    assert board.attack_position(0, 0) is False

    spaces = board.read_board_spaces()
    assert spaces[3][4].fired_upon
    assert spaces[0][0].fired_upon
    assert not spaces[4][4].fired_upon
    assert board.game_begun


def test_shot_before_ships_placed() -> None:
    board = Board()
    for x, y in [(0, 0), (-1, 99)]:
        with pytest.raises(InvalidShot) as excinfo:
            board.attack_position(x, y)
        assert str(excinfo.value) == "Cannot fire a shot before any ships are placed."


@pytest.mark.parametrize(("x", "y", "bad_value"), [(-1, 0, -1), (0, 11, 11), (10, 3, 10)])
def test_out_of_bounds_shot(x: int, y: int, bad_value: int) -> None:
    board = Board()
    _place_default_ship(board)
    with pytest.raises(InvalidShot) as excinfo:
        board.attack_position(x, y)
    assert str(excinfo.value) == f"Invalid shot attempted at co-ordinates {x}, {y}"
    assert isinstance(excinfo.value.cause, InvalidCoordinate)
    assert str(excinfo.value.cause) == f"Value {bad_value} does not fit on the board"


def test_duplicate_shot_rejected_and_state_unchanged() -> None:
    board = Board()
    _place_default_ship(board)
    assert board.attack_position(3, 4) is True
    before = board.read_board_spaces()

    with pytest.raises(InvalidShot) as excinfo:
        board.attack_position(3, 4)
    assert str(excinfo.value) == (
        "Attempted to shoot a space already fired on at co-ordinates 3, 4"
    )
    assert board.read_board_spaces() == before


def test_game_over_lifecycle() -> None:
    board = Board()
    assert board.is_game_over() is False

    ship = board.place_ship(ShipPlacement(6, 5, 3, Orientation.VERTICAL))
    assert board.attack_position(6, 5)
    assert board.attack_position(6, 6)
    assert not ship.is_destroyed()
    assert board.is_game_over() is False

    assert board.attack_position(6, 7)
    assert ship.is_destroyed()
    assert board.is_game_over() is True


def test_game_over_requires_every_ship() -> None:
    board = Board()
    first = board.place_ship(ShipPlacement(0, 0, 2, Orientation.HORIZONTAL))
    board.place_ship(ShipPlacement(0, 5, 2, Orientation.VERTICAL))
    board.attack_position(0, 0)
    board.attack_position(1, 0)
    assert first.is_destroyed()
    assert board.is_game_over() is False


def test_read_accessors_do_not_expose_board_state() -> None:
    board = Board()
    ship = _place_default_ship(board)

    spaces = board.read_board_spaces()
    spaces[0][0].contains_ship = True
    spaces[3][4].fired_upon = True
    ship.spaces()[0].fired_upon = True

    fresh = board.read_board_spaces()
    assert not fresh[0][0].contains_ship
    assert not fresh[3][4].fired_upon
    assert isinstance(board.read_ship_list(), tuple)
    with pytest.raises(TypeError):
        board.read_board_spaces()[0][0] = None  # type: ignore[index]


def test_space_at_returns_copy() -> None:
    board = Board(5)
    space = board.space_at(2, 3)
    assert (space.x, space.y) == (2, 3)
    space.fired_upon = True
    assert board.space_at(2, 3).fired_upon is False
    with pytest.raises(InvalidCoordinate):
        board.space_at(5, 0)


def test_custom_board_size() -> None:
    board = Board(3)
    spaces = board.read_board_spaces()
    assert len(spaces) == 3
    assert all(len(column) == 3 for column in spaces)
    with pytest.raises(InvalidPlacement, match="Invalid ship length: 4"):
        board.place_ship(ShipPlacement(0, 0, 4, Orientation.HORIZONTAL))


def test_board_size_must_be_positive() -> None:
    with pytest.raises(ValueError):
        Board(0)
