"""Shared fixtures: a legal fleet layout and matches built from it."""

from __future__ import annotations

import pytest
from seabattle.engine.game import Match, MatchPhase, Player
from seabattle.engine.ship import Point, ShipType

# One ship per even row, each starting in column 0; odd rows stay empty water.
LAYOUT = [
    (ShipType.AIRCRAFT_CARRIER, Point(0, 0), Point(0, 4)),
    (ShipType.BATTLESHIP, Point(2, 0), Point(2, 3)),
    (ShipType.SUBMARINE, Point(4, 0), Point(4, 2)),
    (ShipType.CRUISER, Point(6, 0), Point(6, 2)),
    (ShipType.DESTROYER, Point(8, 0), Point(8, 1)),
]


@pytest.fixture
def layout() -> list[tuple[ShipType, Point, Point]]:
    return list(LAYOUT)


@pytest.fixture
def ship_cells() -> list[Point]:
    return [
        Point(start.row, col)
        for _, start, end in LAYOUT
        for col in range(start.col, end.col + 1)
    ]


@pytest.fixture
def water_cells() -> list[Point]:
    return [Point(row, col) for row in (1, 3, 5, 7, 9) for col in range(10)]


def place_layout(match: Match) -> None:
    for player in Player:
        for _, start, end in LAYOUT:
            assert match.place_ship(player, start, end)


@pytest.fixture
def ready_match() -> Match:
    match = Match()
    place_layout(match)
    assert match.phase is MatchPhase.SHOOTING
    return match
