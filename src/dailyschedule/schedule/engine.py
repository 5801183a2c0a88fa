"""Schedule orchestration: plans daily events and fires them in order."""
from bisect import insort
from datetime import datetime
from typing import Any, Dict, List, Optional
import logging

from ..core.rng import RNG
from ..errors import ReferenceOrderError
from ..handlers.base import Handler
from .events import DailyEvent, ScheduledEvent, UniformSource
from .timezone import UNRESOLVED, TimezoneSource, TimezoneWindow, ZoneInfoSource, refresh_window

logger = logging.getLogger(__name__)


class Schedule:
    """Calculates and executes scheduled events every day.

    The schedule never reads the system clock. Callers plan each day with
    update_schedule() and consume due events with kick_event().
    """

    def __init__(self, timezone_source: TimezoneSource, rng: Optional[UniformSource] = None):
        """Initialize an empty schedule.

        Args:
            timezone_source: Provides offsets and transitions for local moments
            rng: Uniform source for fuzzy and dynamic events (default: unseeded RNG)
        """
        self._events: List[ScheduledEvent] = []
        self._source = timezone_source
        self._window: TimezoneWindow = UNRESOLVED
        self._rng = rng if rng is not None else RNG()
        self._pending: Dict[datetime, List[ScheduledEvent]] = {}
        self._keys: List[datetime] = []
        self._last_reference: Optional[datetime] = None

    @classmethod
    def for_timezone(cls, name: str, rng: Optional[UniformSource] = None) -> "Schedule":
        """Create a schedule for an IANA timezone.

        Raises:
            TimezoneLookupError: If the zone is unknown
        """
        return cls(ZoneInfoSource(name), rng=rng)

    @property
    def window(self) -> TimezoneWindow:
        return self._window

    @property
    def events(self) -> List[ScheduledEvent]:
        return list(self._events)

    def add_event(self, daily_event: DailyEvent, handler: Handler, context: Any) -> ScheduledEvent:
        """Register an abstract daily event with its handler and context."""
        event = ScheduledEvent(daily_event, handler, context)
        self._events.append(event)
        logger.debug(f"Registered {daily_event} with context {context!r}")
        return event

    def update_schedule(self, reference: datetime) -> None:
        """Plan all registered events for the day starting at ``reference``.

        Call once per day with consecutive UTC midnights. Calling again for
        an already planned day has no effect. If a handler's ``on_hint``
        raises, nothing is inserted and the day stays unplanned.

        Args:
            reference: UTC midnight of the day to plan

        Raises:
            ReferenceOrderError: If ``reference`` precedes an already planned day
            TimezoneLookupError: If the timezone window cannot be refreshed
        """
        if self._last_reference is not None:
            if reference < self._last_reference:
                raise ReferenceOrderError(
                    f"Reference {reference.isoformat()} precedes planned day {self._last_reference.isoformat()}"
                )
            if reference == self._last_reference:
                logger.warning(f"Day {reference.isoformat()} already planned, ignoring")
                return

        if self._window.needs_refresh(reference):
            self._window = refresh_window(self._source, reference)

        planned = []
        for event in self._events:
            timestamp = event.compute(reference, self._window, self._rng)
            if timestamp is None:
                logger.debug(f"{event.daily_event} filtered out for {reference.date()}")
                continue
            planned.append((timestamp, event))

        # A failing hint leaves the day unplanned
        for timestamp, event in planned:
            event.handler.on_hint(timestamp, event.context)

        for timestamp, event in planned:
            self._insert(timestamp, event)
        self._last_reference = reference

    def _insert(self, timestamp: datetime, event: ScheduledEvent) -> None:
        bucket = self._pending.get(timestamp)
        if bucket is None:
            self._pending[timestamp] = [event]
            insort(self._keys, timestamp)
        else:
            bucket.append(event)
        logger.debug(f"Scheduled {event.daily_event} at {timestamp.isoformat()}")

    def kick_event(self, now: datetime) -> Optional[datetime]:
        """Fire every pending event due at or before ``now``.

        Events fire in timestamp order; events sharing a timestamp fire in
        registration order. Each entry is removed before its handler runs,
        so an exception from ``on_fire`` consumes only that entry and leaves
        the rest pending.

        Returns:
            The next pending timestamp, or None if nothing is pending
        """
        while self._keys and self._keys[0] <= now:
            timestamp = self._keys[0]
            bucket = self._pending[timestamp]
            event = bucket.pop(0)
            if not bucket:
                del self._pending[timestamp]
                del self._keys[0]

            logger.debug(f"Firing {event.daily_event} at {timestamp.isoformat()} ({event.context!r})")
            event.handler.on_fire(timestamp, event.daily_event, event.context)

        return self.peek_event()

    def peek_event(self) -> Optional[datetime]:
        """Get the next pending timestamp without firing anything."""
        return self._keys[0] if self._keys else None

    def __len__(self) -> int:
        """Number of pending occurrences."""
        return sum(len(bucket) for bucket in self._pending.values())
