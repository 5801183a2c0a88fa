"""Abstract daily events and their bindings to handlers."""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Any, Callable, Optional, Protocol

from .filters import Filter
from .moment import Moment
from .timezone import TimezoneWindow

if TYPE_CHECKING:
    from ..handlers.base import Handler


class UniformSource(Protocol):
    def integers(self, high: int) -> int:
        ...


class DailyEvent(ABC):
    """Strategy deriving one concrete timestamp per calendar day."""

    filter: Filter

    @abstractmethod
    def candidate(self, reference: datetime, window: TimezoneWindow, rng: UniformSource) -> datetime:
        """Timestamp for the day starting at ``reference``, before filtering."""

    def compute(
        self,
        reference: datetime,
        window: TimezoneWindow,
        rng: UniformSource,
    ) -> Optional[datetime]:
        """Compute the timestamp to schedule for a reference day.

        Args:
            reference: UTC midnight of the day to plan
            window: Timezone window covering that day
            rng: Uniform integer source for randomized events

        Returns:
            The timestamp, or None if the filter rejects that day
        """
        ts = self.candidate(reference, window, rng)
        if self.filter.permits(ts, window):
            return ts
        return None


@dataclass(frozen=True)
class FixedEvent(DailyEvent):
    filter: Filter
    moment: Moment

    def candidate(self, reference, window, rng):
        return self.moment.resolve(reference, window)

    def __str__(self) -> str:
        return f"Fixed {self.moment}"


@dataclass(frozen=True)
class FuzzyEvent(DailyEvent):
    """Random moment between two moments; their order does not matter."""

    filter: Filter
    first: Moment
    second: Moment

    def candidate(self, reference, window, rng):
        t1 = self.first.resolve(reference, window)
        t2 = self.second.resolve(reference, window)
        start, end = min(t1, t2), max(t1, t2)
        span = int((end - start).total_seconds())
        if span > 0:
            return start + timedelta(seconds=rng.integers(span))
        return start

    def __str__(self) -> str:
        return f"Fuzzy {self.first} ~ {self.second}"


@dataclass(frozen=True)
class DynamicEvent(DailyEvent):
    """Moment computed per day by a function, plus a jitter centered on it.

    ``func`` receives the reference midnight and must always return a
    Moment; there is no error channel for it.
    """

    filter: Filter
    func: Callable[[datetime], Moment]
    jitter: timedelta = timedelta(0)

    def candidate(self, reference, window, rng):
        base = self.func(reference).resolve(reference, window)
        jitter = int(self.jitter.total_seconds())
        if jitter > 0:
            return base + timedelta(seconds=jitter // 2 - rng.integers(jitter))
        return base

    def __str__(self) -> str:
        return f"Dynamic ~{int(self.jitter.total_seconds())}s"


@dataclass(frozen=True, eq=False)
class ScheduledEvent:
    """A daily event bound to the handler and context it fires with."""

    daily_event: DailyEvent
    handler: "Handler"
    context: Any

    def compute(self, reference, window, rng) -> Optional[datetime]:
        return self.daily_event.compute(reference, window, rng)
