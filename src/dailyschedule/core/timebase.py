from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone


def utc_midnight(ts: datetime) -> datetime:
  ts = ts.astimezone(timezone.utc)
  return datetime(ts.year, ts.month, ts.day, tzinfo=timezone.utc)


@dataclass
class Timebase:
  start: date
  days: int

  def midnights(self):
    d = datetime(self.start.year, self.start.month, self.start.day, tzinfo=timezone.utc)
    for _ in range(self.days):
      yield d
      d += timedelta(days=1)
