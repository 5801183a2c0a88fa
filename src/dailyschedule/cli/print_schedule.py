from datetime import datetime, timezone
import sys
from zoneinfo import ZoneInfo
import logging

import click
from pydantic import ValidationError

from ..core.timebase import Timebase
from ..errors import TimezoneLookupError
from ..io.transitions import write_transitions
from ..model.config import build_schedule, load_config


@click.command()
@click.option("--config", required=True, type=click.Path(exists=True))
@click.option("--start", type=click.DateTime(formats=["%Y-%m-%d"]), help="First day (default: today, UTC)")
@click.option("--days", default=7, show_default=True, type=click.IntRange(min=1))
@click.option("--output", type=click.Path(dir_okay=False), help="Also write transitions as JSON lines")
@click.option("--verbose", is_flag=True, help="Log every scheduled and fired event")
def main(config, start, days, output, verbose):
  """Precompute a schedule and print every switch transition."""
  logging.basicConfig(
    level=logging.DEBUG if verbose else logging.WARNING,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
  )
  try:
    cfg = load_config(config)
    schedule, switches = build_schedule(cfg)
  except (ValidationError, TimezoneLookupError) as e:
    click.echo(f"ERROR: {e}", err=True)
    sys.exit(1)
  tz = ZoneInfo(cfg.location.timezone)
  first = start.date() if start else datetime.now(timezone.utc).date()
  for midnight in Timebase(first, days).midnights():
    schedule.update_schedule(midnight)

  transitions = []

  def echo(t):
    transitions.append(t)
    action = f"{t.state.value}:"
    click.echo(f"{t.switch} {action:5}{t.timestamp.astimezone(tz).isoformat()} {t.event}")

  for handler in switches.values():
    handler.on_change = echo

  next_event = schedule.peek_event()
  while next_event is not None:
    next_event = schedule.kick_event(next_event)

  if output:
    n = write_transitions(transitions, output)
    click.echo(f"Wrote {n} transitions to {output}")


if __name__ == "__main__":
  main()
