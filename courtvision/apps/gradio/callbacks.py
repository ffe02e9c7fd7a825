"""
Gradio UI callbacks for the shoot session screens
"""

import logging
from typing import Optional, Tuple

from ...analytics import SessionController, SessionSummary, StartResult, format_stats
from ...core import (
    CourtCalibration, CalibrationCircle, CalibrationRectangle, CalibrationLine,
    ShotResult, DistanceClass, InsightsProvider
)
from ..factory import create_session_controller, create_insights_provider

DISTANCE_CHOICES = [d.display_name for d in DistanceClass]
_DISTANCE_BY_LABEL = {d.display_name: d for d in DistanceClass}


class ShootSessionCallbacks:
    """Handle Gradio UI callbacks against one session controller"""

    def __init__(self,
                 controller: Optional[SessionController] = None,
                 insights_provider: Optional[InsightsProvider] = None):
        self.controller = controller or create_session_controller()
        self.insights_provider = insights_provider or create_insights_provider()
        self.logger = logging.getLogger(__name__)

    def start_session(self, rim_x: float, rim_y: float, rim_radius: float,
                      backboard_x: float, backboard_y: float,
                      backboard_width: float, backboard_height: float,
                      line_y: float) -> Tuple[str, str, str]:
        """Start callback. Returns (status, stats, events)."""
        calibration = CourtCalibration(
            rim=CalibrationCircle(center=(rim_x, rim_y), radius=rim_radius),
            backboard=CalibrationRectangle(
                origin=(backboard_x, backboard_y),
                size=(backboard_width, backboard_height)
            ),
            reference_line=CalibrationLine(start=(0.2, line_y), end=(0.8, line_y))
        )

        if self.controller.start_session(calibration) is StartResult.INVALID_CALIBRATION:
            status = "❌ Calibration invalid: enlarge the rim or backboard overlay"
        else:
            status = "🏀 Session running"
        return (status,) + self._live_view()

    def register_shot(self, result_label: str, distance_label: str) -> Tuple[str, str, str]:
        """Manual make/miss button callback"""
        result = ShotResult.MAKE if result_label.lower() == "make" else ShotResult.MISS
        distance = _DISTANCE_BY_LABEL.get(distance_label, DistanceClass.UNKNOWN)

        if self.controller.register_manual_shot(result, distance):
            status = f"Recorded {result_label.lower()} ({distance.display_name})"
        else:
            status = "⚠️ Start a session before recording shots"
        return (status,) + self._live_view()

    def refresh(self) -> Tuple[str, str, str]:
        """Pull pending detections into the view"""
        self.controller.drain_inbox()
        status = "🏀 Session running" if self.controller.is_active else "Idle"
        return (status,) + self._live_view()

    def end_session(self) -> Tuple[str, str, str, str, str]:
        """End callback. Returns (status, stats, events, history, insights)."""
        record = self.controller.end_session()

        if record is None:
            return ("No shots recorded; nothing archived.",) + self._live_view() + \
                (self.history_markdown(), "")

        summary = SessionSummary.from_record(record, self.insights_provider)
        summary.load_insights()
        feedback = summary.error_message or summary.insights

        return (
            "✅ Session saved",
            summary.stats_text(),
            "\n".join(summary.event_lines()),
            self.history_markdown(),
            feedback
        )

    def history_markdown(self) -> str:
        records = self.controller.history.records()
        if not records:
            return "No past sessions yet."

        lines = ["| Date | Attempts | Makes | FG% |", "|---|---|---|---|"]
        for record in records:
            lines.append(
                f"| {record.date:%b %d, %H:%M} | {record.stats.total_attempts} | "
                f"{record.stats.total_makes} | {record.stats.field_goal_percentage * 100:.0f}% |"
            )
        return "\n".join(lines)

    def _live_view(self) -> Tuple[str, str]:
        summary = SessionSummary(self.controller.stats, self.controller.events, self.insights_provider)
        return summary.stats_text(), "\n".join(summary.event_lines())
