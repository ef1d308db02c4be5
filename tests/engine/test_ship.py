"""Tests for Ship domain logic."""

import pytest
from seabattle.engine.ship import Point, Ship, ShipType, is_straight_line, span, span_length


def test_fleet_order_and_lengths() -> None:
    assert [(ship_type.display_name, ship_type.length) for ship_type in ShipType] == [
        ("Aircraft Carrier", 5),
        ("Battleship", 4),
        ("Submarine", 3),
        ("Cruiser", 3),
        ("Destroyer", 2),
    ]


def test_ship_between_orders_cells_from_top_left() -> None:
    ship = Ship.between(ShipType.DESTROYER, Point(3, 7), Point(3, 6))
    assert ship.cells == (Point(3, 6), Point(3, 7))
    assert ship.occupies(Point(3, 7))
    assert not ship.occupies(Point(4, 7))


def test_ship_rejects_wrong_number_of_cells() -> None:
    with pytest.raises(ValueError):
        Ship(ShipType.CRUISER, (Point(0, 0), Point(0, 1)))


def test_span_geometry() -> None:
    assert is_straight_line(Point(1, 1), Point(1, 9))
    assert is_straight_line(Point(0, 4), Point(7, 4))
    assert not is_straight_line(Point(0, 0), Point(1, 1))
    assert span_length(Point(5, 2), Point(1, 2)) == 5
    assert span_length(Point(5, 5), Point(5, 5)) == 1
    assert span(Point(2, 4), Point(0, 4)) == (Point(0, 4), Point(1, 4), Point(2, 4))


def test_point_label() -> None:
    assert Point(0, 0).label == "A1"
    assert Point(9, 9).label == "J10"
