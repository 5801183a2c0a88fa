from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from conftest import drain
from dailyschedule.errors import TimezoneLookupError
from dailyschedule.handlers import SwitchCommand, SwitchState
from dailyschedule.model.config import ScheduleConfig, build_schedule, load_config
from dailyschedule.schedule import DynamicEvent, Filter, FixedEvent, FuzzyEvent

CONFIG = """
seed: 3
location:
  timezone: Europe/Amsterdam
  latitude: 52.22
  longitude: 5.97
switches:
  - name: hall
    events:
      - {kind: fuzzy, filter: weekdays, start: "06:20", end: "06:40", command: on_weak}
      - {kind: sunrise, filter: weekdays, jitter_minutes: 2, command: "off"}
  - name: porch
    events:
      - {kind: sunset, offset_minutes: -15, command: "on"}
      - {kind: fixed, at: "23:00", command: off_weak}
"""


def write(tmp_path, text):
  path = tmp_path / "schedule.yaml"
  path.write_text(text, encoding="utf-8")
  return str(path)


def test_load_and_build(tmp_path):
  cfg = load_config(write(tmp_path, CONFIG))
  assert cfg.seed == 3
  assert cfg.switches[0].events[0].filter == Filter.WEEKDAYS
  assert cfg.switches[0].events[1].command == SwitchCommand.OFF

  schedule, switches = build_schedule(cfg)
  assert list(switches) == ["hall", "porch"]
  kinds = [type(e.daily_event) for e in schedule.events]
  assert kinds == [FuzzyEvent, DynamicEvent, DynamicEvent, FixedEvent]
  assert [e.handler.name for e in schedule.events] == ["hall", "hall", "porch", "porch"]


def test_built_schedule_runs(tmp_path):
  cfg = load_config(write(tmp_path, CONFIG))
  schedule, switches = build_schedule(cfg)
  monday = datetime(2025, 6, 2, tzinfo=timezone.utc)
  for day in range(7):
    schedule.update_schedule(monday + timedelta(days=day))

  drain(schedule)

  porch = switches["porch"].transitions
  assert [t.state for t in porch] == [SwitchState.ON, SwitchState.OFF] * 7
  # Amsterdam sunset in June is around 19:55 UTC
  for t in porch[::2]:
    assert 19 <= t.timestamp.hour <= 20
  for t in porch[1::2]:
    assert (t.timestamp.hour, t.timestamp.minute) == (21, 0)

  # June sunrise comes before the weak on, which then only lifts the hall switch out of deep off
  assert switches["hall"].transitions == []
  assert switches["hall"].state == SwitchState.OFF


def test_sun_events_need_location(tmp_path):
  text = """
switches:
  - name: s
    events:
      - {kind: sunset, command: "on"}
"""
  with pytest.raises(ValidationError):
    load_config(write(tmp_path, text))


@pytest.mark.parametrize("event", [
  '{kind: fixed, command: "on"}',
  '{kind: fuzzy, start: "06:00", command: "on"}',
  '{kind: fixed, at: "26:00", command: "on"}',
  '{kind: fixed, at: "06:00", command: maybe}',
  '{kind: fixed, at: "06:00", command: "on", filter: sundays}',
])
def test_invalid_events(tmp_path, event):
  text = f"""
switches:
  - name: s
    events:
      - {event}
"""
  with pytest.raises(ValidationError):
    load_config(write(tmp_path, text))


def test_duplicate_switch_names():
  with pytest.raises(ValidationError):
    ScheduleConfig(switches=[{"name": "a", "events": []}, {"name": "a", "events": []}])


def test_unknown_timezone():
  cfg = ScheduleConfig(location={"timezone": "Nowhere/Atlantis"}, switches=[])
  with pytest.raises(TimezoneLookupError):
    build_schedule(cfg)
