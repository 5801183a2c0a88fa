"""Moments in a day, anchored either to local or to UTC midnight."""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from .timezone import TimezoneWindow


class Moment(ABC):
    """A point in a day, expressed as an offset from midnight."""

    offset: timedelta

    @staticmethod
    def at(h: int, m: int = 0, s: int = 0) -> "LocalMoment":
        """Create a moment relative to local midnight.

        Args:
            h: Hour (0-23)
            m: Minute (0-59)
            s: Second (0-59)

        Returns:
            LocalMoment for the given wall-clock time
        """
        if not 0 <= h < 24 or not 0 <= m < 60 or not 0 <= s < 60:
            raise ValueError(f"Invalid time of day {h:02}:{m:02}:{s:02}")
        return LocalMoment(timedelta(hours=h, minutes=m, seconds=s))

    @staticmethod
    def from_timestamp(ts: datetime) -> "UtcMoment":
        """Create a UTC moment from an absolute timestamp.

        The offset is taken relative to the UTC midnight of the day the
        timestamp falls on, e.g. a computed sunrise.
        """
        ts = ts.astimezone(timezone.utc)
        midnight = datetime(ts.year, ts.month, ts.day, tzinfo=timezone.utc)
        return UtcMoment(ts - midnight)

    @abstractmethod
    def resolve(self, reference: datetime, window: TimezoneWindow) -> datetime:
        """Convert to an absolute UTC timestamp for the given reference midnight."""

    def __str__(self) -> str:
        total = int(self.offset.total_seconds())
        sign = "-" if total < 0 else ""
        hours, rest = divmod(abs(total), 3600)
        return f"{sign}{hours:02}:{rest // 60:02}:{rest % 60:02}"


@dataclass(frozen=True)
class LocalMoment(Moment):
    offset: timedelta

    def resolve(self, reference: datetime, window: TimezoneWindow) -> datetime:
        return window.local_to_utc(reference + self.offset)


@dataclass(frozen=True)
class UtcMoment(Moment):
    offset: timedelta

    def resolve(self, reference: datetime, window: TimezoneWindow) -> datetime:
        return reference + self.offset

    def __str__(self) -> str:
        return f"{Moment.__str__(self)} (UTC)"


def parse_moment(text: str, utc: bool = False) -> Moment:
    """Parse ``HH:MM`` or ``HH:MM:SS`` into a moment."""
    try:
        parts = [int(p) for p in text.strip().split(":")]
    except ValueError:
        raise ValueError(f"Invalid time format {text!r}, expected HH:MM or HH:MM:SS") from None
    if len(parts) not in (2, 3):
        raise ValueError(f"Invalid time format {text!r}, expected HH:MM or HH:MM:SS")

    moment = Moment.at(*parts)
    if utc:
        return UtcMoment(moment.offset)
    return moment
