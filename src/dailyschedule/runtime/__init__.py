"""Runtime components driving a schedule in wall-clock time."""

from .clock import Clock
from .loop import ScheduleLoop

__all__ = [
    "Clock",
    "ScheduleLoop",
]
