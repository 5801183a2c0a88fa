"""Base handler for scheduled events."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any


class Handler(ABC):
    """Receives the callbacks of the events registered with it.

    One handler may be shared by several scheduled events; the context
    passed with each callback tells them apart. Handlers must not call back
    into the schedule from within a callback.
    """

    def on_hint(self, timestamp: datetime, context: Any) -> None:
        """Announce an upcoming occurrence.

        Called once per planned occurrence when the day is scheduled,
        before it is due.

        Args:
            timestamp: When the occurrence will fire (UTC)
            context: Context the event was registered with
        """
        pass

    @abstractmethod
    def on_fire(self, timestamp: datetime, event: Any, context: Any) -> None:
        """Perform the action of a due occurrence.

        Args:
            timestamp: Scheduled timestamp of the occurrence (UTC)
            event: The daily event that produced it
            context: Context the event was registered with
        """
        pass
