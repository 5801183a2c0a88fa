"""Clock supplying "now" to a schedule loop.

Runs at real time or accelerated, and can be paused and stepped manually
so a schedule can be replayed deterministically.
"""
from datetime import datetime, timedelta, timezone
from threading import RLock
from typing import Optional
import time


class Clock:
    """Virtual UTC clock with time acceleration."""

    def __init__(
        self,
        start_time: Optional[datetime] = None,
        speed: float = 1.0,
        paused: bool = False,
    ):
        """Initialize clock.

        Args:
            start_time: Initial time (default: current UTC time)
            speed: Time acceleration factor (1.0 = real-time)
            paused: Whether to start paused
        """
        if speed <= 0:
            raise ValueError("Speed must be positive")

        self._lock = RLock()
        self._start_time = (start_time or datetime.now(timezone.utc)).astimezone(timezone.utc)
        self._wall_start = time.monotonic()
        self._speed = speed
        self._paused = paused

    def now(self) -> datetime:
        with self._lock:
            if self._paused:
                return self._start_time

            wall_elapsed = time.monotonic() - self._wall_start
            return self._start_time + timedelta(seconds=wall_elapsed * self._speed)

    def set_time(self, new_time: datetime) -> None:
        with self._lock:
            self._start_time = new_time.astimezone(timezone.utc)
            self._wall_start = time.monotonic()

    def advance(self, delta: timedelta) -> None:
        with self._lock:
            self.set_time(self.now() + delta)

    def pause(self) -> None:
        with self._lock:
            if not self._paused:
                self._start_time = self.now()
                self._paused = True

    def resume(self) -> None:
        with self._lock:
            if self._paused:
                self._wall_start = time.monotonic()
                self._paused = False

    def is_paused(self) -> bool:
        with self._lock:
            return self._paused

    @property
    def speed(self) -> float:
        return self._speed

    def wall_time_until(self, target: datetime) -> Optional[float]:
        """Real seconds until ``target``, or None if it already passed.

        While paused the clock never reaches a future target, so the result
        is None as well.
        """
        with self._lock:
            if self._paused:
                return None
            remaining = (target - self.now()).total_seconds()
        if remaining <= 0:
            return None
        return remaining / self._speed

    def __repr__(self) -> str:
        status = "paused" if self._paused else f"{self._speed}x"
        return f"Clock({self.now().isoformat()}, {status})"
