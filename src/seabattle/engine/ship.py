"""Ship domain model for the SeaBattle engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

BOARD_SIZE = 10
ROW_LABELS = "ABCDEFGHIJ"


@dataclass(frozen=True, order=True)
class Point:
    """Immutable board coordinate."""

    row: int
    col: int

    @property
    def label(self) -> str:
        """Return the coordinate in board notation, e.g. ``A1``."""
        return f"{ROW_LABELS[self.row]}{self.col + 1}"


class ShipType(Enum):
    """All ship classes of the fleet, in placement order."""

    AIRCRAFT_CARRIER = ("Aircraft Carrier", 5)
    BATTLESHIP = ("Battleship", 4)
    SUBMARINE = ("Submarine", 3)
    CRUISER = ("Cruiser", 3)
    DESTROYER = ("Destroyer", 2)

    def __init__(self, display_name: str, length: int) -> None:
        self.display_name = display_name
        self.length = length


def is_straight_line(end_a: Point, end_b: Point) -> bool:
    """Return True if both endpoints share a row or a column."""
    return end_a.row == end_b.row or end_a.col == end_b.col


def span_length(end_a: Point, end_b: Point) -> int:
    """Number of cells between two endpoints of a straight line, inclusive."""
    return max(abs(end_a.row - end_b.row), abs(end_a.col - end_b.col)) + 1


def span(end_a: Point, end_b: Point) -> tuple[Point, ...]:
    """Return every cell of the bounding box of two endpoints, top-left first."""
    top, bottom = sorted((end_a.row, end_b.row))
    left, right = sorted((end_a.col, end_b.col))
    return tuple(
        Point(row, col) for row in range(top, bottom + 1) for col in range(left, right + 1)
    )


@dataclass(frozen=True)
class Ship:
    """A single placed ship.

    A ship only knows the cells it occupies. Whether it is sunk depends on the
    state of those cells and is answered by the board that owns it.
    """

    ship_type: ShipType
    cells: tuple[Point, ...]

    def __post_init__(self) -> None:
        if len(self.cells) != self.ship_type.length:
            raise ValueError(
                f"{self.ship_type.display_name} needs {self.ship_type.length} cells, "
                f"got {len(self.cells)}."
            )

    @classmethod
    def between(cls, ship_type: ShipType, end_a: Point, end_b: Point) -> Ship:
        """Build a ship spanning two endpoints."""
        return cls(ship_type, span(end_a, end_b))

    @property
    def length(self) -> int:
        return self.ship_type.length

    @property
    def name(self) -> str:
        return self.ship_type.display_name

    def occupies(self, point: Point) -> bool:
        """Return True if the ship covers the given cell."""
        return point in self.cells
