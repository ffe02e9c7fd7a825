"""
Command-line interface implementation
"""

import time
from dataclasses import replace

import click

from ...analytics import SessionSummary, StartResult, format_stats
from ...config import get_settings
from ...core import (
    CourtCalibration, CalibrationCircle, CalibrationRectangle,
    ShotResult, DistanceClass
)
from ...io import HistoryStore, JsonSerializer
from ...networking import MockInsightsService
from ...utils import setup_logging
from ..factory import create_session_controller


def calibration_options(func):
    """Shared rim/backboard geometry options"""
    options = [
        click.option('--rim-x', default=0.5, show_default=True, help='Rim center x (normalized)'),
        click.option('--rim-y', default=0.3, show_default=True, help='Rim center y (normalized)'),
        click.option('--rim-radius', default=0.08, show_default=True, help='Rim radius (normalized)'),
        click.option('--backboard-x', default=0.35, show_default=True, help='Backboard origin x'),
        click.option('--backboard-y', default=0.18, show_default=True, help='Backboard origin y'),
        click.option('--backboard-width', default=0.3, show_default=True, help='Backboard width'),
        click.option('--backboard-height', default=0.08, show_default=True, help='Backboard height'),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def build_calibration(rim_x, rim_y, rim_radius, backboard_x, backboard_y,
                      backboard_width, backboard_height) -> CourtCalibration:
    return CourtCalibration(
        rim=CalibrationCircle(center=(rim_x, rim_y), radius=rim_radius),
        backboard=CalibrationRectangle(
            origin=(backboard_x, backboard_y),
            size=(backboard_width, backboard_height)
        )
    )


def parse_shot(ctx, param, values):
    """Turn RESULT[:CLASS] strings into (ShotResult, DistanceClass) pairs"""
    shots = []
    for value in values:
        result_text, _, class_text = value.partition(':')
        try:
            result = ShotResult(result_text.strip().lower())
            distance = DistanceClass(class_text.strip()) if class_text else DistanceClass.UNKNOWN
        except ValueError:
            raise click.BadParameter(
                f"'{value}' is not RESULT[:CLASS] "
                f"(RESULT make/miss, CLASS {'/'.join(d.value for d in DistanceClass)})"
            )
        shots.append((result, distance))
    return shots


@click.group()
@click.option('--log-level', default=None, help='Logging level')
def cli(log_level):
    """Court Vision shot tracking CLI"""
    setup_logging(level=log_level or get_settings().log_level)


@cli.command('check-calibration')
@calibration_options
def check_calibration(**geometry):
    """Check whether a calibration can start a session"""
    calibration = build_calibration(**geometry)

    if calibration.is_valid():
        click.echo("Calibration valid")
    else:
        click.echo("Calibration invalid: rim radius must exceed 0.01, "
                   "backboard width 0.05 and height 0.02")
        raise SystemExit(1)


@cli.command()
@calibration_options
@click.option('--duration', default=10.0, show_default=True, help='Session length in seconds')
@click.option('--interval', default=None, type=float, help='Seconds between mock shots (0 disables)')
@click.option('--seed', default=None, type=int, help='Random seed for mock shots')
@click.option('--shot', 'shots', multiple=True, callback=parse_shot,
              help='Manual shot RESULT[:CLASS], e.g. make:threePoint (repeatable)')
@click.option('--history-file', default=None, type=click.Path(), help='Append the record to this file')
@click.option('--json', 'as_json', is_flag=True, help='Print the record as JSON')
def simulate(duration, interval, seed, shots, history_file, as_json, **geometry):
    """Run a shoot session against the mock detection pipeline"""
    settings = replace(get_settings())
    if interval is not None:
        settings.mock_shot_interval = interval
        settings.enable_mock_shot_generation = interval > 0
    if seed is not None:
        settings.mock_seed = seed

    controller = create_session_controller(settings)
    calibration = build_calibration(**geometry)

    if controller.start_session(calibration) is StartResult.INVALID_CALIBRATION:
        raise click.ClickException("Calibration invalid; session not started")

    for result, distance in shots:
        controller.register_manual_shot(result, distance)

    click.echo(f"Session running for {duration:.1f}s...")
    deadline = time.monotonic() + duration
    while time.monotonic() < deadline:
        controller.drain_inbox(timeout=min(settings.dispatch_interval, max(deadline - time.monotonic(), 0.0)))

    record = controller.end_session()
    if record is None:
        click.echo("No shots recorded; nothing archived.")
        return

    if as_json:
        click.echo(JsonSerializer.dumps(record.to_dict()))
    else:
        click.echo("\n=== Session Summary ===")
        click.echo(format_stats(record.stats))
        click.echo("\nShot Events:")
        for line in SessionSummary.from_record(record, MockInsightsService(latency=0)).event_lines():
            click.echo(f"  {line}")

    path = history_file or settings.history_path
    if path:
        HistoryStore(path, max_records=settings.history_limit or None).append(record)
        click.echo(f"\nSession saved to: {path}")


@cli.command()
@click.argument('history_file', type=click.Path(exists=True))
@click.option('--limit', default=10, show_default=True, help='Number of sessions to show')
def history(history_file, limit):
    """Show past sessions, most recent first"""
    records = HistoryStore(history_file).load().records()

    if not records:
        click.echo("No past sessions yet.")
        return

    click.echo("=== Past Sessions ===")
    for record in records[:limit]:
        click.echo(
            f"{record.date:%Y-%m-%d %H:%M}  "
            f"Attempts: {record.stats.total_attempts} | Makes: {record.stats.total_makes} | "
            f"FG%: {record.stats.field_goal_percentage * 100:.0f}%"
        )


@cli.command()
@click.argument('history_file', type=click.Path(exists=True))
@click.option('--latency', default=0.0, show_default=True, help='Simulated service latency')
def insights(history_file, latency):
    """Show AI feedback for the most recent session"""
    record = HistoryStore(history_file).load().latest()
    if record is None:
        raise click.ClickException("No past sessions yet.")

    summary = SessionSummary.from_record(record, MockInsightsService(latency=latency))
    summary.load_insights()
    if summary.error_message:
        raise click.ClickException(summary.error_message)
    click.echo(summary.insights)


def main():
    cli()


if __name__ == '__main__':
    main()
