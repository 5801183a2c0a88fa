from datetime import timedelta
from pathlib import Path
from typing import Dict, List, Literal, Optional, Tuple

import yaml
from pydantic import BaseModel, model_validator

from ..core.daylight import Daylight
from ..core.rng import RNG
from ..handlers.switch import SwitchCommand, SwitchHandler
from ..schedule import DailyEvent, DynamicEvent, Filter, FixedEvent, FuzzyEvent, Schedule, parse_moment


class LocationConfig(BaseModel):
  timezone: str = "UTC"
  latitude: Optional[float] = None
  longitude: Optional[float] = None


class EventConfig(BaseModel):
  kind: Literal["fixed", "fuzzy", "sunrise", "sunset"]
  command: SwitchCommand
  filter: Filter = Filter.ALWAYS
  at: Optional[str] = None
  start: Optional[str] = None
  end: Optional[str] = None
  utc: bool = False
  offset_minutes: float = 0.0
  jitter_minutes: float = 0.0

  @model_validator(mode="after")
  def check_fields(self):
    if self.kind == "fixed" and not self.at:
      raise ValueError("fixed events need 'at'")
    if self.kind == "fuzzy" and not (self.start and self.end):
      raise ValueError("fuzzy events need 'start' and 'end'")
    if self.jitter_minutes < 0:
      raise ValueError("jitter_minutes must not be negative")
    # Fail on bad times while validating, not while building
    for text in (self.at, self.start, self.end):
      if text:
        parse_moment(text)
    return self


class SwitchConfig(BaseModel):
  name: str
  events: List[EventConfig]


class ScheduleConfig(BaseModel):
  seed: Optional[int] = None
  location: LocationConfig = LocationConfig()
  switches: List[SwitchConfig]

  @model_validator(mode="after")
  def check_location(self):
    uses_sun = any(e.kind in ("sunrise", "sunset") for s in self.switches for e in s.events)
    if uses_sun and (self.location.latitude is None or self.location.longitude is None):
      raise ValueError("sunrise/sunset events need location latitude and longitude")
    names = [s.name for s in self.switches]
    if len(set(names)) != len(names):
      raise ValueError("switch names must be unique")
    return self


def load_config(path: str) -> ScheduleConfig:
  data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
  return ScheduleConfig(**data)


def _sun_func(base, offset: timedelta):
  def func(reference):
    moment = base(reference)
    return type(moment)(moment.offset + offset)
  return func


def build_event(ecfg: EventConfig, daylight: Optional[Daylight]) -> DailyEvent:
  if ecfg.kind == "fixed":
    return FixedEvent(ecfg.filter, parse_moment(ecfg.at, utc=ecfg.utc))
  if ecfg.kind == "fuzzy":
    return FuzzyEvent(ecfg.filter, parse_moment(ecfg.start, utc=ecfg.utc), parse_moment(ecfg.end, utc=ecfg.utc))
  base = daylight.sunrise_moment if ecfg.kind == "sunrise" else daylight.sunset_moment
  return DynamicEvent(
    ecfg.filter,
    _sun_func(base, timedelta(minutes=ecfg.offset_minutes)),
    timedelta(minutes=ecfg.jitter_minutes),
  )


def build_schedule(cfg: ScheduleConfig, rng=None, on_change=None) -> Tuple[Schedule, Dict[str, SwitchHandler]]:
  """
  Create the schedule and one SwitchHandler per switch; events are registered in file order.
  """
  if rng is None:
    rng = RNG(cfg.seed)
  schedule = Schedule.for_timezone(cfg.location.timezone, rng=rng)
  loc = cfg.location
  daylight = Daylight(loc.latitude, loc.longitude) if loc.latitude is not None and loc.longitude is not None else None
  switches = {}
  for scfg in cfg.switches:
    handler = SwitchHandler(scfg.name, on_change=on_change)
    switches[scfg.name] = handler
    for ecfg in scfg.events:
      schedule.add_event(build_event(ecfg, daylight), handler, ecfg.command)
  return schedule, switches
