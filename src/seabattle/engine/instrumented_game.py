"""Match subclass that reports to OpenTelemetry."""

from __future__ import annotations

import time

from seabattle.engine.board import PlacementResult, ShotResult
from seabattle.engine.errors import BattleshipError
from seabattle.engine.game import Match, MatchPhase, Player
from seabattle.engine.ship import Point
from seabattle.telemetry import get_logger, get_tracer, record_match_metric


class InstrumentedMatch(Match):
    """Wraps Match with tracing, metrics, and logging."""

    def __init__(self) -> None:
        super().__init__()
        self._logger = get_logger("seabattle.engine")
        self._tracer = get_tracer("seabattle.engine")
        self._match_span_cm = None
        self._match_span = None
        self._match_start_time: float | None = None
        self._match_id_counter = 0

    def place_ship(self, player: Player, end_a: Point, end_b: Point) -> PlacementResult:
        if self._match_span is None and self.phase is MatchPhase.PLACEMENT:
            self._start_match_span()
        with self._tracer.start_as_current_span("seabattle.engine.place_ship") as span:
            span.set_attribute("match.id", self._match_id_counter)
            span.set_attribute("player", player.name)
            try:
                result = super().place_ship(player, end_a, end_b)
            except BattleshipError as exc:
                self._reject(span, exc, player, "place_ship")
                raise

            outcome = "placed" if result else result.reason.name.lower()
            span.set_attribute("placement", outcome)
            record_match_metric(
                "seabattle_match_placements_total", 1, {"player": player.name, "outcome": outcome}
            )
            if self.phase is MatchPhase.SHOOTING and player is Player.PLAYER2 and result:
                self._logger.info("Both fleets placed, shooting phase begins")
            return result

    def fire(self, player: Player, point: Point) -> ShotResult:
        with self._tracer.start_as_current_span("seabattle.engine.fire") as span:
            span.set_attribute("match.id", self._match_id_counter)
            span.set_attribute("player", player.name)
            span.set_attribute("coord.row", point.row)
            span.set_attribute("coord.col", point.col)

            try:
                result = super().fire(player, point)
            except BattleshipError as exc:
                self._reject(span, exc, player, "fire")
                raise

            span.set_attribute("shot_outcome", result.name)
            record_match_metric("seabattle_shots_total", 1, {"player": player.name})
            record_match_metric(
                "seabattle_shots_by_result_total",
                1,
                {"player": player.name, "result": result.value},
            )
            self._logger.info(
                "fire player=%s coord=(%d,%d) outcome=%s",
                player.name,
                point.row,
                point.col,
                result.name,
            )

            if self.phase is MatchPhase.FINISHED and self.winner:
                span.set_attribute("winner", self.winner.name)
                self._finish_match()
            return result

    def _reject(self, span, exc: BattleshipError, player: Player, action: str) -> None:
        record_match_metric(
            "seabattle_match_invalid_actions_total",
            1,
            {"player": player.name, "action": action, "reason": type(exc).__name__},
        )
        span.record_exception(exc)
        span.set_attribute("error", True)
        self._logger.error("Invalid %s from %s: %s", action, player.name, exc)

    def _start_match_span(self) -> None:
        self._close_match_span()
        self._match_start_time = time.perf_counter()
        self._match_id_counter += 1
        self._match_span_cm = self._tracer.start_as_current_span("seabattle.engine.match")
        self._match_span = self._match_span_cm.__enter__()
        self._match_span.set_attribute("match.id", self._match_id_counter)

    def _finish_match(self) -> None:
        duration = (time.perf_counter() - self._match_start_time) if self._match_start_time else 0.0
        total_shots = sum(board.shots_received for board in self.boards.values())
        winner = self.winner.name if self.winner else "unknown"

        record_match_metric("seabattle_match_completed_total", 1, {"winner": winner})
        record_match_metric("seabattle_match_duration_seconds", duration, {"winner": winner})

        with self._tracer.start_as_current_span("seabattle.engine.match_complete") as span:
            span.set_attribute("match.id", self._match_id_counter)
            span.set_attribute("winner", winner)
            span.set_attribute("shots", total_shots)
            span.set_attribute("duration_ms", duration * 1000)

        if self._match_span is not None:
            self._match_span.set_attribute("winner", winner)
            self._match_span.set_attribute("shots", total_shots)

        self._logger.info(
            "Match finished. Winner=%s shots=%d duration_s=%.3f", winner, total_shots, duration
        )
        self._close_match_span()

    def _close_match_span(self) -> None:
        if self._match_span_cm is not None:
            self._match_span_cm.__exit__(None, None, None)
            self._match_span_cm = None
            self._match_span = None
