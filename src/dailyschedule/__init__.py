"""Daily schedule calculation for home automation.

Computes when abstract daily events (fixed, randomized or computed moments
such as sunrise) fire on each calendar day, taking daylight saving time
transitions into account, and fires them in order as time advances. The
engine never reads the system clock; callers supply reference days and
the current time.
"""

from .errors import DailyScheduleError, ReferenceOrderError, TimezoneLookupError, UnresolvedTimezoneError
from .handlers import Handler, SwitchCommand, SwitchHandler
from .schedule import (
    DailyEvent,
    DynamicEvent,
    Filter,
    FixedEvent,
    FuzzyEvent,
    Moment,
    Schedule,
    ZoneInfoSource,
)

__all__ = [
    "DailyScheduleError",
    "ReferenceOrderError",
    "TimezoneLookupError",
    "UnresolvedTimezoneError",
    "Handler",
    "SwitchCommand",
    "SwitchHandler",
    "DailyEvent",
    "DynamicEvent",
    "Filter",
    "FixedEvent",
    "FuzzyEvent",
    "Moment",
    "Schedule",
    "ZoneInfoSource",
]
