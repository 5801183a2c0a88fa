"""Exceptions raised by the daily schedule engine."""


class DailyScheduleError(Exception):
    """Base class for all schedule errors."""


class TimezoneLookupError(DailyScheduleError):
    """The timezone source could not provide offset data."""


class UnresolvedTimezoneError(DailyScheduleError):
    """A local moment was resolved before the timezone window was loaded."""


class ReferenceOrderError(DailyScheduleError):
    """update_schedule was called with a reference day earlier than a processed one."""
