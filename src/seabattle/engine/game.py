"""Two-player hot-seat match controller."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from seabattle.telemetry import get_meter, get_tracer

from .board import Board, CellState, PlacementResult, ShotResult
from .errors import MatchPhaseError, OutOfTurnError
from .fleet import FleetStatus, fleet_status, is_fleet_complete, next_ship_type
from .ship import Point, ShipType

logger = logging.getLogger(__name__)
tracer = get_tracer("seabattle.engine.game")
meter = get_meter("seabattle.engine.game")

MOVE_COUNTER = meter.create_counter(
    "seabattle_engine_moves",
    unit="1",
    description="Number of shots fired in a Match",
)


class MatchPhase(Enum):
    """High-level lifecycle of a match."""

    PLACEMENT = "placement"
    SHOOTING = "shooting"
    FINISHED = "finished"


class Player(Enum):
    """The two seats of a hot-seat match."""

    PLAYER1 = "player1"
    PLAYER2 = "player2"

    @property
    def number(self) -> int:
        return 1 if self is Player.PLAYER1 else 2

    def opponent(self) -> Player:
        """Return the opposing player."""
        return Player.PLAYER2 if self is Player.PLAYER1 else Player.PLAYER1


@dataclass(frozen=True)
class BoardView:
    """A board as its owner sees it."""

    cells: tuple[tuple[CellState, ...], ...]
    fleet: FleetStatus


@dataclass(frozen=True)
class MatchState:
    """Immutable snapshot of the current match."""

    phase: MatchPhase
    current_player: Player
    winner: Player | None
    boards: dict[Player, BoardView]


class Match:
    """Drives two boards through placement and then alternating shots.

    Player 1 places the whole fleet, then player 2. Once both fleets are
    complete player 1 fires first and the turn passes after every shot until
    one fleet is destroyed.
    """

    def __init__(self) -> None:
        self.boards: dict[Player, Board] = {
            Player.PLAYER1: Board(owner=Player.PLAYER1.value),
            Player.PLAYER2: Board(owner=Player.PLAYER2.value),
        }
        self.phase: MatchPhase = MatchPhase.PLACEMENT
        self.current_player: Player = Player.PLAYER1
        self.winner: Player | None = None

    def next_ship_type(self, player: Player) -> ShipType | None:
        """Return the ship the player has to place next."""
        return next_ship_type(self.boards[player])

    def place_ship(self, player: Player, end_a: Point, end_b: Point) -> PlacementResult:
        """Place the player's next ship; a rejection leaves the same ship pending."""
        with tracer.start_as_current_span("match.place_ship") as span:
            span.set_attribute("player", player.value)
            self._require(player, MatchPhase.PLACEMENT)

            board = self.boards[player]
            ship_type = next_ship_type(board)
            if ship_type is None:
                raise MatchPhaseError(f"{player.value} has already placed the whole fleet.")
            span.set_attribute("ship.type", ship_type.name)

            result = board.place_ship(ship_type, end_a, end_b)
            if result and is_fleet_complete(board):
                self._fleet_complete(player)
            return result

    def fire(self, player: Player, point: Point) -> ShotResult:
        """Fire at the opponent's board, enforcing turn order and the win condition."""
        with tracer.start_as_current_span("match.fire") as span:
            span.set_attribute("player", player.value)
            span.set_attribute("row", point.row)
            span.set_attribute("col", point.col)
            self._require(player, MatchPhase.SHOOTING)

            target_board = self.boards[player.opponent()]
            result = target_board.receive_shot(point)

            if not target_board.has_surviving_ships():
                self.winner = player
                self.phase = MatchPhase.FINISHED
                span.set_attribute("match.winner", player.value)
                logger.info(
                    "match_won",
                    extra={"winner": player.value, "shots": target_board.shots_received},
                )
            else:
                self.current_player = player.opponent()
                span.set_attribute("next_player", self.current_player.value)

            MOVE_COUNTER.add(1, attributes={"result": result.value, "player": player.value})
            return result

    def opponent_board(self, player: Player) -> Board:
        return self.boards[player.opponent()]

    def view(self, viewer: Player, owner: Player) -> tuple[tuple[CellState, ...], ...]:
        """Return ``owner``'s board as ``viewer`` is allowed to see it."""
        return self.boards[owner].view(viewer_is_owner=viewer is owner)

    def get_state(self) -> MatchState:
        """Return an immutable view of the current match."""
        board_views = {
            player: BoardView(cells=board.view(), fleet=fleet_status(board))
            for player, board in self.boards.items()
        }
        return MatchState(
            phase=self.phase,
            current_player=self.current_player,
            winner=self.winner,
            boards=board_views,
        )

    def _fleet_complete(self, player: Player) -> None:
        if player is Player.PLAYER1:
            self.current_player = Player.PLAYER2
        else:
            self.phase = MatchPhase.SHOOTING
            self.current_player = Player.PLAYER1
        logger.info(
            "fleet_complete",
            extra={
                "player": player.value,
                "phase": self.phase.value,
                "current_player": self.current_player.value,
            },
        )

    def _require(self, player: Player, phase: MatchPhase) -> None:
        if self.phase is not phase:
            logger.error(
                "action_rejected_wrong_phase",
                extra={"player": player.value, "phase": self.phase.value, "expected": phase.value},
            )
            raise MatchPhaseError(f"Match is in the {self.phase.value} phase, not {phase.value}.")
        if player is not self.current_player:
            logger.error(
                "action_rejected_wrong_player",
                extra={"player": player.value, "current": self.current_player.value},
            )
            raise OutOfTurnError("It is not this player's turn.")
