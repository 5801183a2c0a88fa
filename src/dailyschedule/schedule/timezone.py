"""Timezone offset sources and the cached offset window used by a schedule.

A window describes the UTC offset in effect for the days being planned and,
when the zone observes daylight saving time, the next pending transition.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional, Protocol, Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
import logging

from ..errors import TimezoneLookupError, UnresolvedTimezoneError

logger = logging.getLogger(__name__)


class TimezoneSource(Protocol):
    """Provides UTC offsets and transitions for one civil timezone."""

    def offset_at(self, instant: datetime) -> timedelta:
        ...

    def next_transition_after(self, instant: datetime) -> Optional[Tuple[datetime, timedelta]]:
        ...


class ZoneInfoSource:
    """Timezone source backed by the IANA database via ``zoneinfo``."""

    def __init__(self, name: str, horizon: timedelta = timedelta(days=400)):
        """Initialize the source.

        Args:
            name: IANA zone name (e.g. 'Europe/Amsterdam')
            horizon: How far ahead to look for the next transition
        """
        try:
            self._zone = ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise TimezoneLookupError(f"Unknown timezone {name!r}") from e
        self.name = name
        self.horizon = horizon

    def offset_at(self, instant: datetime) -> timedelta:
        offset = instant.astimezone(self._zone).utcoffset()
        if offset is None:
            raise TimezoneLookupError(f"No UTC offset for {instant.isoformat()} in {self.name}")
        return offset

    def next_transition_after(self, instant: datetime) -> Optional[Tuple[datetime, timedelta]]:
        """Find the first offset change strictly after ``instant``.

        Steps a day at a time up to the horizon, then bisects to the second.

        Returns:
            (transition instant, offset from then on), or None if the offset
            stays the same within the horizon
        """
        current = self.offset_at(instant)
        step = timedelta(days=1)
        low = instant
        probe = instant + step
        end = instant + self.horizon
        while probe <= end:
            if self.offset_at(probe) != current:
                return self._bisect(low, probe, current)
            low = probe
            probe += step
        return None

    def _bisect(self, low: datetime, high: datetime, current: timedelta) -> Tuple[datetime, timedelta]:
        # offset(low) == current, offset(high) != current
        lo = int(low.timestamp())
        hi = int(high.timestamp())
        while hi - lo > 1:
            mid = (lo + hi) // 2
            if self.offset_at(datetime.fromtimestamp(mid, timezone.utc)) == current:
                lo = mid
            else:
                hi = mid
        transition = datetime.fromtimestamp(hi, timezone.utc)
        return transition, self.offset_at(transition)

    def __repr__(self) -> str:
        return f"ZoneInfoSource({self.name!r})"


class FixedOffsetSource:
    """Timezone source with a constant offset and no transitions."""

    def __init__(self, offset: timedelta = timedelta(0)):
        self.offset = offset

    def offset_at(self, instant: datetime) -> timedelta:
        return self.offset

    def next_transition_after(self, instant: datetime) -> Optional[Tuple[datetime, timedelta]]:
        return None


class TimezoneWindow:
    """Base for the cached offset knowledge of a schedule."""

    def local_to_utc(self, local_sum: datetime) -> datetime:
        """Convert ``reference midnight + local offset`` to a UTC timestamp."""
        raise UnresolvedTimezoneError("Timezone window must be refreshed before resolving local moments")

    def offset_at(self, instant: datetime) -> timedelta:
        """UTC offset in effect at an absolute instant."""
        raise UnresolvedTimezoneError("Timezone window must be refreshed before evaluating offsets")

    def needs_refresh(self, reference: datetime) -> bool:
        return True


@dataclass(frozen=True)
class UnresolvedWindow(TimezoneWindow):
    pass


@dataclass(frozen=True)
class StableWindow(TimezoneWindow):
    offset: timedelta

    def local_to_utc(self, local_sum: datetime) -> datetime:
        return local_sum - self.offset

    def offset_at(self, instant: datetime) -> timedelta:
        return self.offset

    def needs_refresh(self, reference: datetime) -> bool:
        return False


@dataclass(frozen=True)
class PendingTransitionWindow(TimezoneWindow):
    transition: datetime
    offset_before: timedelta
    offset_after: timedelta

    def local_to_utc(self, local_sum: datetime) -> datetime:
        # Classify with the provisional UTC value, not the raw local time
        provisional = local_sum - self.offset_before
        if provisional < self.transition:
            return provisional
        return local_sum - self.offset_after

    def offset_at(self, instant: datetime) -> timedelta:
        if instant < self.transition:
            return self.offset_before
        return self.offset_after

    def needs_refresh(self, reference: datetime) -> bool:
        return self.transition <= reference


UNRESOLVED = UnresolvedWindow()


def refresh_window(source: TimezoneSource, reference: datetime) -> TimezoneWindow:
    """Build a new window for ``reference`` by querying the timezone source."""
    current = source.offset_at(reference)
    upcoming = source.next_transition_after(reference)
    if upcoming is None:
        window = StableWindow(current)
    else:
        transition, after = upcoming
        window = PendingTransitionWindow(transition, current, after)
    logger.info(f"Timezone window for {reference.isoformat()}: {window}")
    return window
