"""CLI command to drive a schedule in wall-clock time."""

from datetime import datetime, timezone
import logging
import time

import click

from ..model.config import build_schedule, load_config
from ..runtime import Clock, ScheduleLoop

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@click.command()
@click.option(
    "--config",
    required=True,
    type=click.Path(exists=True),
    help="Schedule configuration file",
)
@click.option(
    "--speed",
    default=1.0,
    type=float,
    help="Time acceleration factor (default: 1.0 = real-time)",
)
@click.option(
    "--start-time",
    type=str,
    help="Initial clock time (ISO format, default: current time)",
)
def main(config, speed, start_time):
    """Run the configured switch schedule until interrupted.

    Examples:
        # Follow the schedule in real time
        dailyschedule-run --config examples/schedule.yaml

        # Replay a week in about 17 minutes
        dailyschedule-run --config examples/schedule.yaml --speed 600 --start-time 2025-03-24T00:00:00Z
    """
    start_dt = None
    if start_time:
        try:
            start_dt = datetime.fromisoformat(start_time.replace("Z", "+00:00"))
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint="--start-time")
        if start_dt.tzinfo is None:
            start_dt = start_dt.replace(tzinfo=timezone.utc)

    cfg = load_config(config)
    schedule, switches = build_schedule(cfg)
    clock = Clock(start_time=start_dt, speed=speed)
    loop = ScheduleLoop(schedule, clock)

    click.echo(f"Running {len(schedule.events)} events on {len(switches)} switches ({cfg.location.timezone}, {speed}x)")
    click.echo("Press Ctrl+C to stop...")

    loop.start()
    try:
        while loop.is_running():
            time.sleep(1.0)
    except KeyboardInterrupt:
        click.echo("\nShutting down...")
    finally:
        loop.stop()
        click.echo("Stopped")


if __name__ == "__main__":
    main()
