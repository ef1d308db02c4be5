"""Single-player board: ship placement and shot resolution."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from seabattle.telemetry import get_meter, get_tracer

from .errors import CoordinateError
from .ship import BOARD_SIZE, Point, Ship, ShipType, is_straight_line, span, span_length

logger = logging.getLogger(__name__)
tracer = get_tracer("seabattle.engine.board")
meter = get_meter("seabattle.engine.board")

PLACEMENT_COUNTER = meter.create_counter(
    "seabattle_engine_ship_placements",
    unit="1",
    description="Number of attempted ship placements",
)

SHOT_COUNTER = meter.create_counter(
    "seabattle_engine_shots",
    unit="1",
    description="Shots received by a board",
)


class CellState(Enum):
    """State of a single board cell."""

    EMPTY = "empty"
    SHIP = "ship"
    HIT = "hit"
    MISS = "miss"

    @property
    def symbol(self) -> str:
        """Character used when the cell is printed."""
        return _SYMBOLS[self]


_SYMBOLS = {
    CellState.EMPTY: "~",
    CellState.SHIP: "O",
    CellState.HIT: "X",
    CellState.MISS: "M",
}

# Every cell state has exactly one successor when it is shot at.
_SHOT_TRANSITIONS = {
    CellState.EMPTY: CellState.MISS,
    CellState.SHIP: CellState.HIT,
    CellState.HIT: CellState.HIT,
    CellState.MISS: CellState.MISS,
}


class ShotResult(Enum):
    """Outcome reported to the player who fired."""

    HIT = "hit"
    MISS = "miss"
    SANK = "sank"


class PlacementRejection(Enum):
    """Reasons a ship placement can be refused."""

    NOT_A_LINE = "not a line"
    WRONG_LENGTH = "wrong length"
    TOO_CLOSE = "too close to another ship"
    ALREADY_PLACED = "ship already placed"


@dataclass(frozen=True)
class PlacementResult:
    """Outcome of ``Board.place_ship``; truthy when the ship was placed."""

    ok: bool
    reason: PlacementRejection | None = None
    ship: Ship | None = None

    @classmethod
    def accepted(cls, ship: Ship) -> PlacementResult:
        return cls(ok=True, ship=ship)

    @classmethod
    def rejected(cls, reason: PlacementRejection) -> PlacementResult:
        return cls(ok=False, reason=reason)

    def __bool__(self) -> bool:
        return self.ok


def _empty_grid() -> list[list[CellState]]:
    return [[CellState.EMPTY] * BOARD_SIZE for _ in range(BOARD_SIZE)]


@dataclass
class Board:
    """A player's 10×10 grid and the ships placed on it.

    The grid is the single source of truth: ships only record which cells they
    cover, and a ship is sunk when all of those cells are ``HIT``. Shot
    resolution finds the owning ship through a point-to-index lookup.
    """

    owner: str = "unknown"
    ships: list[Ship] = field(default_factory=list)
    shots_received: int = 0
    _cells: list[list[CellState]] = field(default_factory=_empty_grid, repr=False)
    _ship_index: dict[Point, int] = field(default_factory=dict, repr=False)

    @property
    def size(self) -> int:
        return BOARD_SIZE

    def is_valid_coordinate(self, point: Point) -> bool:
        """Check whether a coordinate lies inside the board boundaries."""
        return 0 <= point.row < BOARD_SIZE and 0 <= point.col < BOARD_SIZE

    def validate_placement(
        self, ship_type: ShipType, end_a: Point, end_b: Point
    ) -> PlacementRejection | None:
        """Return the first rule a placement breaks, or None if it is legal."""
        self._require_on_board(end_a)
        self._require_on_board(end_b)
        if any(ship.ship_type is ship_type for ship in self.ships):
            return PlacementRejection.ALREADY_PLACED
        if not is_straight_line(end_a, end_b):
            return PlacementRejection.NOT_A_LINE
        if span_length(end_a, end_b) != ship_type.length:
            return PlacementRejection.WRONG_LENGTH
        if any(self._state(point) is CellState.SHIP for point in self._buffer_zone(end_a, end_b)):
            return PlacementRejection.TOO_CLOSE
        return None

    def place_ship(self, ship_type: ShipType, end_a: Point, end_b: Point) -> PlacementResult:
        """Place a ship between two endpoints if every placement rule holds."""
        with tracer.start_as_current_span("board.place_ship") as span_:
            span_.set_attribute("ship.type", ship_type.name)
            span_.set_attribute("ship.length", ship_type.length)
            span_.set_attribute("ship.start", end_a.label if self.is_valid_coordinate(end_a) else "-")
            span_.set_attribute("ship.end", end_b.label if self.is_valid_coordinate(end_b) else "-")
            span_.set_attribute("board.owner", self.owner)

            reason = self.validate_placement(ship_type, end_a, end_b)
            if reason is not None:
                span_.set_attribute("placement.rejected", reason.value)
                PLACEMENT_COUNTER.add(
                    1, attributes={"result": "rejected", "reason": reason.name, "owner": self.owner}
                )
                logger.warning(
                    "ship_placement_rejected",
                    extra={
                        "owner": self.owner,
                        "ship_type": ship_type.name,
                        "start": end_a.label,
                        "end": end_b.label,
                        "reason": reason.value,
                    },
                )
                return PlacementResult.rejected(reason)

            ship = Ship(ship_type, span(end_a, end_b))
            index = len(self.ships)
            self.ships.append(ship)
            for point in ship.cells:
                self._cells[point.row][point.col] = CellState.SHIP
                self._ship_index[point] = index

            PLACEMENT_COUNTER.add(1, attributes={"result": "success", "owner": self.owner})
            logger.info(
                "ship_placed",
                extra={
                    "owner": self.owner,
                    "ship_type": ship_type.name,
                    "start": end_a.label,
                    "end": end_b.label,
                },
            )
            return PlacementResult.accepted(ship)

    def receive_shot(self, point: Point) -> ShotResult:
        """Resolve a shot fired at this board and return its outcome.

        Shooting a cell twice is not an error: a miss stays a miss, and a hit
        is reported again (as ``SANK`` if its ship is gone).
        """
        with tracer.start_as_current_span("board.receive_shot") as span_:
            span_.set_attribute("board.owner", self.owner)
            self._require_on_board(point)
            span_.set_attribute("shot.cell", point.label)

            before = self._state(point)
            after = _SHOT_TRANSITIONS[before]
            self._cells[point.row][point.col] = after
            self.shots_received += 1

            if after is CellState.MISS:
                result = ShotResult.MISS
            elif self.is_sunk(self.ships[self._ship_index[point]]):
                result = ShotResult.SANK
            else:
                result = ShotResult.HIT

            span_.set_attribute("shot.outcome", result.value)
            span_.set_attribute("shot.repeat", before is after)
            SHOT_COUNTER.add(1, attributes={"outcome": result.value, "owner": self.owner})
            logger.info(
                "shot_resolved",
                extra={
                    "owner": self.owner,
                    "cell": point.label,
                    "outcome": result.value,
                    "repeat": before is after,
                },
            )
            return result

    def cell_state_at(self, point: Point, viewer_is_owner: bool = True) -> CellState:
        """Project a cell for a viewer.

        The owner sees the board as it is. Anyone else sees only shot
        outcomes: an unshot ship segment is shown as water.
        """
        self._require_on_board(point)
        state = self._state(point)
        if not viewer_is_owner and state is CellState.SHIP:
            return CellState.EMPTY
        return state

    def view(self, viewer_is_owner: bool = True) -> tuple[tuple[CellState, ...], ...]:
        """Return the whole grid as seen by the owner or by the opponent."""
        return tuple(
            tuple(self.cell_state_at(Point(row, col), viewer_is_owner) for col in range(BOARD_SIZE))
            for row in range(BOARD_SIZE)
        )

    def ship_at(self, point: Point) -> Ship | None:
        index = self._ship_index.get(point)
        return None if index is None else self.ships[index]

    def is_sunk(self, ship: Ship) -> bool:
        """A ship is sunk once every cell it covers has been hit."""
        return all(self._state(point) is CellState.HIT for point in ship.cells)

    def sunk_ships(self) -> list[Ship]:
        return [ship for ship in self.ships if self.is_sunk(ship)]

    def has_surviving_ships(self) -> bool:
        """Return True while at least one ship cell has not been hit."""
        return any(
            self._state(point) is CellState.SHIP for ship in self.ships for point in ship.cells
        )

    @property
    def is_defeated(self) -> bool:
        return bool(self.ships) and not self.has_surviving_ships()

    def _state(self, point: Point) -> CellState:
        return self._cells[point.row][point.col]

    def _require_on_board(self, point: Point) -> None:
        if not self.is_valid_coordinate(point):
            logger.error(
                "coordinate_out_of_bounds",
                extra={"row": point.row, "col": point.col, "owner": self.owner},
            )
            raise CoordinateError(f"({point.row}, {point.col}) is outside the board.")

    def _buffer_zone(self, end_a: Point, end_b: Point) -> tuple[Point, ...]:
        """Bounding box of a span grown by one cell on every side, clipped to the board."""
        last = BOARD_SIZE - 1
        corner_a = Point(max(min(end_a.row, end_b.row) - 1, 0), max(min(end_a.col, end_b.col) - 1, 0))
        corner_b = Point(
            min(max(end_a.row, end_b.row) + 1, last), min(max(end_a.col, end_b.col) + 1, last)
        )
        return span(corner_a, corner_b)
