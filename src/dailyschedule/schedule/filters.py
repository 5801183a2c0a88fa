"""Weekday filters applied to resolved event timestamps."""
from datetime import datetime
from enum import Enum

from .timezone import TimezoneWindow


class Filter(Enum):
    ALWAYS = "always"
    WEEKDAYS = "weekdays"
    WEEKEND = "weekend"

    def permits(self, candidate: datetime, window: TimezoneWindow) -> bool:
        """Check whether ``candidate`` falls on a permitted local weekday.

        The weekday is derived from the resolved UTC timestamp shifted by the
        offset in effect at that instant, so a randomized event drifting past
        local midnight is judged by the day it actually lands on.
        """
        if self is Filter.ALWAYS:
            return True

        local = candidate + window.offset_at(candidate)
        weekend = local.weekday() >= 5  # Saturday, Sunday
        if self is Filter.WEEKEND:
            return weekend
        return not weekend
