from dataclasses import dataclass
from datetime import date, datetime, timezone
import logging

from astral import Observer
from astral.sun import noon, sunrise, sunset

from ..schedule.moment import Moment, UtcMoment
from .timebase import utc_midnight

logger = logging.getLogger(__name__)


@dataclass
class Daylight:
  latitude: float
  longitude: float

  def __post_init__(self):
    self.observer = Observer(latitude=self.latitude, longitude=self.longitude)

  def sunrise_sunset(self, d: date) -> tuple[datetime, datetime]:
    return (
      sunrise(self.observer, date=d, tzinfo=timezone.utc),
      sunset(self.observer, date=d, tzinfo=timezone.utc),
    )

  def sunrise_moment(self, reference: datetime) -> Moment:
    return self._moment(sunrise, reference)

  def sunset_moment(self, reference: datetime) -> Moment:
    return self._moment(sunset, reference)

  def _moment(self, func, reference: datetime) -> Moment:
    midnight = utc_midnight(reference)
    d = midnight.date()
    try:
      ts = func(self.observer, date=d, tzinfo=timezone.utc)
    except ValueError as e:
      # Polar day or night: no sunrise/sunset that day
      logger.warning(f"No {func.__name__} on {d} at {self.latitude:.2f}: {e}; using solar noon")
      ts = noon(self.observer, date=d, tzinfo=timezone.utc)
    # Relative to the reference day, which may differ from the UTC day of ts
    return UtcMoment(ts - midnight)
