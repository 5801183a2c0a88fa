"""Loop driving a schedule against a clock.

Plans each UTC day ahead of time and fires due events as the clock
advances.
"""
from datetime import datetime, timedelta
from threading import Event, Thread
from typing import Optional
import logging

from ..core.timebase import utc_midnight
from ..schedule.engine import Schedule
from .clock import Clock

logger = logging.getLogger(__name__)

DAY = timedelta(days=1)


class ScheduleLoop:
    """Owns a schedule and feeds it reference days and the current time."""

    def __init__(
        self,
        schedule: Schedule,
        clock: Clock,
        lookahead: timedelta = DAY,
        max_wait: float = 1.0,
    ):
        """Initialize schedule loop.

        Args:
            schedule: Schedule to drive; the loop must be its only user
            clock: Clock supplying the current time
            lookahead: How far ahead days are planned
            max_wait: Longest wall-clock wait between checks, in seconds
        """
        self.schedule = schedule
        self.clock = clock
        self.lookahead = lookahead
        self.max_wait = max_wait
        self._next_reference: Optional[datetime] = None
        self._running = False
        self._stop_event = Event()
        self._thread: Optional[Thread] = None

    def run_pending(self) -> Optional[datetime]:
        """Plan upcoming days and fire everything due now.

        Events of the first planned day that are already in the past fire
        on the first call.

        Returns:
            Next pending timestamp, or None
        """
        now = self.clock.now()
        self._plan_until(now + self.lookahead)
        return self.schedule.kick_event(now)

    def _plan_until(self, horizon: datetime) -> None:
        if self._next_reference is None:
            self._next_reference = utc_midnight(self.clock.now())

        while self._next_reference <= horizon:
            logger.debug(f"Planning day {self._next_reference.date()}")
            self.schedule.update_schedule(self._next_reference)
            self._next_reference += DAY

    def start(self) -> None:
        """Start the loop in a background thread."""
        if self._running:
            logger.warning("Schedule loop already running")
            return

        self._running = True
        self._stop_event.clear()
        self._thread = Thread(target=self._run_loop, daemon=True)
        self._thread.start()
        logger.info("Schedule loop started")

    def stop(self, timeout: float = 5.0) -> None:
        """Stop the loop.

        Args:
            timeout: Maximum time to wait for clean shutdown
        """
        if not self._running:
            return

        logger.info("Stopping schedule loop")
        self._running = False
        self._stop_event.set()

        if self._thread:
            self._thread.join(timeout=timeout)
            self._thread = None

        logger.info("Schedule loop stopped")

    def is_running(self) -> bool:
        return self._running

    def _run_loop(self) -> None:
        while self._running and not self._stop_event.is_set():
            try:
                next_event = self.run_pending()
            except Exception as e:
                # Entries not yet fired and unplanned days are retried on the next pass
                logger.error(f"Error running schedule: {e}")
                self._stop_event.wait(self.max_wait)
                continue

            wait = self.max_wait
            if next_event is not None:
                wall = self.clock.wall_time_until(next_event)
                if wall is not None:
                    wait = min(wall, self.max_wait)
                else:
                    wait = 0 if not self.clock.is_paused() else self.max_wait
            self._stop_event.wait(wait)
