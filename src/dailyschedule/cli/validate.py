import sys

import click
from pydantic import ValidationError

from ..errors import TimezoneLookupError
from ..model.config import build_schedule, load_config


@click.command()
@click.option("--config", required=True, type=click.Path(exists=True))
def main(config):
  try:
    cfg = load_config(config)
    schedule, _ = build_schedule(cfg)
  except (ValidationError, TimezoneLookupError) as e:
    click.echo(f"ERROR: {e}", err=True)
    sys.exit(1)
  click.echo(f"Timezone: {cfg.location.timezone}")
  for event in schedule.events:
    click.echo(f"  {event.handler.name}: {event.daily_event} [{event.daily_event.filter.value}] -> {event.context.value}")
  click.echo(f"Validation OK ({len(schedule.events)} events)")


if __name__ == "__main__":
  main()
