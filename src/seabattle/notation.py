"""Parsing of board coordinates typed by a player (``A1`` .. ``J10``)."""

from __future__ import annotations

from seabattle.engine.errors import CoordinateError
from seabattle.engine.ship import BOARD_SIZE, ROW_LABELS, Point


def parse_point(text: str) -> Point:
    """Convert a row letter followed by a column number into a Point."""
    cleaned = text.strip().upper()
    if len(cleaned) < 2:
        raise CoordinateError("Use a row letter followed by a column number, e.g. A5.")
    letter, digits = cleaned[0], cleaned[1:]
    if letter not in ROW_LABELS:
        raise CoordinateError(f"Row must be between {ROW_LABELS[0]} and {ROW_LABELS[-1]}.")
    if not digits.isdecimal():
        raise CoordinateError(f"Column must be a number between 1 and {BOARD_SIZE}.")
    col = int(digits) - 1
    if not 0 <= col < BOARD_SIZE:
        raise CoordinateError(f"Column must be a number between 1 and {BOARD_SIZE}.")
    return Point(ROW_LABELS.index(letter), col)


def parse_endpoints(text: str) -> tuple[Point, Point]:
    """Parse the two ends of a ship, e.g. ``F3 F7``."""
    parts = text.split()
    if len(parts) != 2:
        raise CoordinateError("Enter two coordinates separated by a space, e.g. F3 F7.")
    return parse_point(parts[0]), parse_point(parts[1])
