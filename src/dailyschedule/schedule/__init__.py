"""Daily event computation and schedule execution."""

from .moment import Moment, LocalMoment, UtcMoment, parse_moment
from .filters import Filter
from .timezone import (
    TimezoneSource,
    ZoneInfoSource,
    FixedOffsetSource,
    TimezoneWindow,
    UnresolvedWindow,
    StableWindow,
    PendingTransitionWindow,
)
from .events import DailyEvent, FixedEvent, FuzzyEvent, DynamicEvent, ScheduledEvent
from .engine import Schedule

__all__ = [
    "Moment",
    "LocalMoment",
    "UtcMoment",
    "parse_moment",
    "Filter",
    "TimezoneSource",
    "ZoneInfoSource",
    "FixedOffsetSource",
    "TimezoneWindow",
    "UnresolvedWindow",
    "StableWindow",
    "PendingTransitionWindow",
    "DailyEvent",
    "FixedEvent",
    "FuzzyEvent",
    "DynamicEvent",
    "ScheduledEvent",
    "Schedule",
]
