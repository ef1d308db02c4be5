"""Tests for coordinate parsing."""

import pytest
from seabattle.engine.errors import CoordinateError
from seabattle.engine.ship import Point
from seabattle.notation import parse_endpoints, parse_point


@pytest.mark.parametrize(
    ("text", "expected"),
    [("A1", Point(0, 0)), ("j10", Point(9, 9)), (" c7 ", Point(2, 6))],
)
def test_parse_point(text: str, expected: Point) -> None:
    assert parse_point(text) == expected


@pytest.mark.parametrize("text", ["", "A", "K1", "A0", "A11", "AB", "1A", "A-1"])
def test_parse_point_rejects_malformed_input(text: str) -> None:
    with pytest.raises(CoordinateError):
        parse_point(text)


def test_parse_endpoints() -> None:
    assert parse_endpoints("F3 F7") == (Point(5, 2), Point(5, 6))


@pytest.mark.parametrize("text", ["F3", "F3 F7 F9", "F3 Z7"])
def test_parse_endpoints_rejects_malformed_input(text: str) -> None:
    with pytest.raises(CoordinateError):
        parse_endpoints(text)
