"""Hot-seat console driver: two players share one terminal."""

from __future__ import annotations

import argparse
import logging
from typing import Callable, Sequence

from seabattle.engine.board import CellState, ShotResult
from seabattle.engine.errors import CoordinateError
from seabattle.engine.game import Match, MatchPhase, Player
from seabattle.engine.instrumented_game import InstrumentedMatch
from seabattle.engine.ship import BOARD_SIZE, ROW_LABELS
from seabattle.notation import parse_endpoints, parse_point
from seabattle.telemetry import TelemetryConfig, configure_console_logging, init_telemetry

logger = logging.getLogger(__name__)

Reader = Callable[[str], str]
Writer = Callable[[str], None]

SEPARATOR = "-" * 21

_SHOT_MESSAGES = {
    ShotResult.HIT: "You hit a ship!",
    ShotResult.MISS: "You missed!",
    ShotResult.SANK: "You sank a ship!",
}


def format_board(cells: Sequence[Sequence[CellState]]) -> str:
    """Render a projected grid with row letters and column numbers."""
    header = "  " + " ".join(str(col + 1) for col in range(BOARD_SIZE))
    rows = [header]
    for row, states in enumerate(cells):
        rows.append(f"{ROW_LABELS[row]} " + " ".join(state.symbol for state in states))
    return "\n".join(rows)


def pass_turn(read: Reader, write: Writer) -> None:
    write("Press Enter and pass the move to another player")
    write("...")
    read("")


def place_fleet(match: Match, player: Player, read: Reader, write: Writer) -> None:
    """Prompt one player until every ship of the fleet is on the board."""
    write(f"Player {player.number}, place your ships on the game field")
    write(format_board(match.view(player, player)))
    while True:
        ship_type = match.next_ship_type(player)
        if ship_type is None:
            return
        raw = read(f"Enter the coordinates of the {ship_type.display_name} ({ship_type.length} cells):")
        try:
            end_a, end_b = parse_endpoints(raw)
        except CoordinateError as exc:
            logger.debug("placement_input_rejected", extra={"player": player.value, "error": str(exc)})
            write(f"Error! You entered the wrong coordinates! Try again: {exc}")
            continue
        result = match.place_ship(player, end_a, end_b)
        if not result:
            write(f"Error! Wrong ship location ({result.reason.value})! Try again:")
            continue
        write(format_board(match.view(player, player)))


def take_turn(match: Match, player: Player, read: Reader, write: Writer) -> ShotResult:
    """Show both boards to the shooter and resolve one shot."""
    opponent = player.opponent()
    write(format_board(match.view(player, opponent)))
    write(SEPARATOR)
    write(format_board(match.view(player, player)))
    prompt = f"Player {player.number}, it's your turn:"
    while True:
        try:
            point = parse_point(read(prompt))
        except CoordinateError as exc:
            write(f"Error! You entered the wrong coordinates! Try again: {exc}")
            continue
        result = match.fire(player, point)
        write(_SHOT_MESSAGES[result])
        return result


def play_match(match: Match | None = None, read: Reader = input, write: Writer = print) -> Player:
    """Run a complete match and return the winner."""
    match = match or Match()
    for player in Player:
        place_fleet(match, player, read, write)
        pass_turn(read, write)

    while True:
        take_turn(match, match.current_player, read, write)
        if match.phase is MatchPhase.FINISHED:
            break
        pass_turn(read, write)

    winner = match.winner
    write(f"Player {winner.number}, You sank the last ship. You won. Congratulations!")
    return winner


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Play two-player Battleship on one terminal.")
    parser.add_argument(
        "--telemetry",
        action="store_true",
        help="Export traces, metrics and logs as configured by SEABATTLE_*/OTEL_* variables.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level for messages written to stderr (default: ERROR).",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    overrides = {"log_level": args.log_level} if args.log_level else {}
    config = TelemetryConfig.from_env(**overrides)
    configure_console_logging(config.log_level)

    if args.telemetry:
        init_telemetry(config)
        match: Match = InstrumentedMatch()
    else:
        match = Match()

    try:
        play_match(match)
    except (EOFError, KeyboardInterrupt):
        raise SystemExit("\nGoodbye!")


if __name__ == "__main__":
    main()
