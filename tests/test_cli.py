"""Tests for the hot-seat console driver."""

from __future__ import annotations

import pytest
from seabattle import cli
from seabattle.engine.game import Match, Player
from seabattle.engine.instrumented_game import InstrumentedMatch


def _placements(layout) -> list[str]:
    return [f"{start.label} {end.label}" for _, start, end in layout]


def _scripted(answers: list[str]):
    remaining = iter(answers)
    prompts: list[str] = []

    def read(prompt: str) -> str:
        prompts.append(prompt)
        return next(remaining)

    return read, prompts


def test_format_board_hides_ships_from_opponent(ready_match) -> None:
    ready_match.fire(Player.PLAYER1, ready_match.boards[Player.PLAYER2].ships[0].cells[0])

    own = cli.format_board(ready_match.view(Player.PLAYER2, Player.PLAYER2))
    fogged = cli.format_board(ready_match.view(Player.PLAYER1, Player.PLAYER2))

    assert own.splitlines()[0] == "  1 2 3 4 5 6 7 8 9 10"
    assert own.splitlines()[1] == "A X O O O O ~ ~ ~ ~ ~"
    assert fogged.splitlines()[1] == "A X ~ ~ ~ ~ ~ ~ ~ ~ ~"
    assert "O" not in fogged


def test_play_match_full_game(layout, ship_cells, water_cells) -> None:
    answers = ["A1 B2", "A1", "A1 A5"] + _placements(layout)[1:] + [""]
    answers += _placements(layout) + [""]
    for index, target in enumerate(ship_cells):
        answers.append(target.label)
        if index < len(ship_cells) - 1:
            answers += ["", "Z9", water_cells[index].label, ""]

    read, prompts = _scripted(answers)
    output: list[str] = []
    winner = cli.play_match(Match(), read=read, write=output.append)

    assert winner is Player.PLAYER1
    assert output[-1] == "Player 1, You sank the last ship. You won. Congratulations!"
    assert output.count("You sank a ship!") == 5
    assert "Error! Wrong ship location (not a line)! Try again:" in output
    assert any(line.startswith("Error! You entered the wrong coordinates!") for line in output)
    assert prompts[0] == "Enter the coordinates of the Aircraft Carrier (5 cells):"
    assert "Player 2, it's your turn:" in prompts
    assert "Press Enter and pass the move to another player" in output
    assert cli.SEPARATOR in output


def test_main_picks_match_type(monkeypatch: pytest.MonkeyPatch) -> None:
    played: list[Match] = []
    telemetry_calls: list[object] = []
    monkeypatch.delenv("SEABATTLE_LOG_LEVEL", raising=False)
    monkeypatch.setattr(cli, "play_match", lambda match: played.append(match))
    monkeypatch.setattr(cli, "configure_console_logging", lambda level: None)
    monkeypatch.setattr(cli, "init_telemetry", lambda config: telemetry_calls.append(config))

    cli.main([])
    cli.main(["--telemetry", "--log-level", "DEBUG"])

    assert type(played[0]) is Match
    assert isinstance(played[1], InstrumentedMatch)
    assert telemetry_calls[0].log_level == "DEBUG"


def test_main_exits_cleanly_on_eof(monkeypatch: pytest.MonkeyPatch) -> None:
    def closed_stdin(match):
        raise EOFError

    monkeypatch.setattr(cli, "play_match", closed_stdin)
    monkeypatch.setattr(cli, "configure_console_logging", lambda level: None)

    with pytest.raises(SystemExit):
        cli.main([])
