from datetime import datetime, timezone

import pytest

from dailyschedule.handlers import Handler

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)  # a Thursday


class RecordingHandler(Handler):
  def __init__(self):
    self.hints = []
    self.timestamps = []
    self.contexts = []
    self.events = []

  def on_hint(self, timestamp, context):
    self.hints.append(timestamp)

  def on_fire(self, timestamp, event, context):
    assert timestamp in self.hints
    self.timestamps.append(timestamp)
    self.contexts.append(context)
    self.events.append(event)


class FixedDraw:
  """Uniform source always returning the same draw, clamped below high."""

  def __init__(self, value):
    self.value = value

  def integers(self, high):
    return min(self.value, high - 1)


def drain(schedule):
  next_event = schedule.peek_event()
  while next_event is not None:
    next_event = schedule.kick_event(next_event)


@pytest.fixture
def handler():
  return RecordingHandler()
