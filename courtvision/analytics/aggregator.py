"""
Shooting statistics aggregation
"""

from typing import Iterable, Dict, Any

from ..core import SessionStats, ShotEvent
from ..core.constants import RECORD_ID_PREFIX_LENGTH


def record_shot(stats: SessionStats, event: ShotEvent) -> SessionStats:
    """Fold a single shot into the running stats (in place)"""
    return stats.record(event)


def aggregate_events(events: Iterable[ShotEvent]) -> SessionStats:
    """Replay a sequence of shots into fresh stats"""
    stats = SessionStats()
    for event in events:
        record_shot(stats, event)
    return stats


def _percentage(makes: int, attempts: int) -> float:
    return makes / attempts if attempts > 0 else 0.0


def summarize_stats(stats: SessionStats) -> Dict[str, Any]:
    """
    Expand the counters into a flat summary

    Percentages are fractions in [0, 1]. "other" covers two point and
    unclassified shots.
    """
    other_attempts = stats.total_attempts - stats.three_point_attempts - stats.free_throw_attempts
    other_makes = stats.total_makes - stats.three_point_makes - stats.free_throw_makes

    return {
        'total_attempts': stats.total_attempts,
        'total_makes': stats.total_makes,
        'three_point_attempts': stats.three_point_attempts,
        'three_point_makes': stats.three_point_makes,
        'free_throw_attempts': stats.free_throw_attempts,
        'free_throw_makes': stats.free_throw_makes,
        'other_attempts': other_attempts,
        'other_makes': other_makes,
        'field_goal_percentage': stats.field_goal_percentage,
        'three_point_percentage': _percentage(stats.three_point_makes, stats.three_point_attempts),
        'free_throw_percentage': _percentage(stats.free_throw_makes, stats.free_throw_attempts)
    }


def short_record_id(stats: SessionStats) -> str:
    return str(stats.id)[:RECORD_ID_PREFIX_LENGTH] + "…"


def format_stats(stats: SessionStats) -> str:
    """Human-readable summary card text"""
    fg = stats.field_goal_percentage * 100
    lines = [
        f"Attempts: {stats.total_attempts}",
        f"Makes: {stats.total_makes}",
        f"FG%: {fg:.0f}%",
        f"3PT: {stats.three_point_makes}/{stats.three_point_attempts}",
        f"FT: {stats.free_throw_makes}/{stats.free_throw_attempts}",
        f"Record ID: {short_record_id(stats)}"
    ]
    return "\n".join(lines)
