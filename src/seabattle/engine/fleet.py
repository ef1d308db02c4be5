"""Fleet lifecycle tracking derived from a board."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .board import Board, CellState
from .ship import ShipType

FLEET_ORDER: tuple[ShipType, ...] = tuple(ShipType)


class BoardPhase(Enum):
    """Where a board is in its life, from empty water to a lost fleet."""

    EMPTY = "empty"
    PLACING = "placing"
    READY = "ready"
    DAMAGED = "damaged"
    DEFEATED = "defeated"


@dataclass(frozen=True)
class FleetStatus:
    """Snapshot of a fleet's progress through placement and battle."""

    placed: tuple[ShipType, ...]
    pending: tuple[ShipType, ...]
    afloat: tuple[ShipType, ...]
    sunk: tuple[ShipType, ...]

    @property
    def complete(self) -> bool:
        return not self.pending


def next_ship_type(board: Board) -> ShipType | None:
    """Return the next ship type to place, or None once the fleet is complete."""
    placed = {ship.ship_type for ship in board.ships}
    for ship_type in FLEET_ORDER:
        if ship_type not in placed:
            return ship_type
    return None


def is_fleet_complete(board: Board) -> bool:
    return next_ship_type(board) is None


def board_phase(board: Board) -> BoardPhase:
    if not board.ships:
        return BoardPhase.EMPTY
    if not is_fleet_complete(board):
        return BoardPhase.PLACING
    if not board.has_surviving_ships():
        return BoardPhase.DEFEATED
    damaged = any(
        board.cell_state_at(point) is CellState.HIT for ship in board.ships for point in ship.cells
    )
    return BoardPhase.DAMAGED if damaged else BoardPhase.READY


def fleet_status(board: Board) -> FleetStatus:
    placed = tuple(ship.ship_type for ship in board.ships)
    sunk = tuple(ship.ship_type for ship in board.sunk_ships())
    return FleetStatus(
        placed=placed,
        pending=tuple(ship_type for ship_type in FLEET_ORDER if ship_type not in placed),
        afloat=tuple(ship_type for ship_type in placed if ship_type not in sunk),
        sunk=sunk,
    )
