"""Switch handler tracking on/off depth across scheduled commands."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Callable, List, Optional
import logging

from .base import Handler

logger = logging.getLogger(__name__)


class SwitchCommand(Enum):
    """Context values understood by SwitchHandler."""
    ON = "on"
    ON_WEAK = "on_weak"
    OFF = "off"
    OFF_WEAK = "off_weak"


class SwitchDepth(Enum):
    DEEP_OFF = "deep_off"
    OFF = "off"
    ON = "on"


class SwitchState(Enum):
    OFF = "off"
    ON = "on"


# (command, depth) -> next depth
_TRANSITIONS = {
    SwitchCommand.ON: {
        SwitchDepth.DEEP_OFF: SwitchDepth.ON,
        SwitchDepth.OFF: SwitchDepth.ON,
        SwitchDepth.ON: SwitchDepth.ON,
    },
    SwitchCommand.ON_WEAK: {
        SwitchDepth.DEEP_OFF: SwitchDepth.OFF,
        SwitchDepth.OFF: SwitchDepth.ON,
        SwitchDepth.ON: SwitchDepth.ON,
    },
    SwitchCommand.OFF: {
        SwitchDepth.DEEP_OFF: SwitchDepth.DEEP_OFF,
        SwitchDepth.OFF: SwitchDepth.DEEP_OFF,
        SwitchDepth.ON: SwitchDepth.OFF,
    },
    SwitchCommand.OFF_WEAK: {
        SwitchDepth.DEEP_OFF: SwitchDepth.DEEP_OFF,
        SwitchDepth.OFF: SwitchDepth.OFF,
        SwitchDepth.ON: SwitchDepth.OFF,
    },
}


@dataclass
class SwitchTransition:
    """A change of the switch output."""
    switch: str
    timestamp: datetime
    state: SwitchState
    event: str

    def to_dict(self) -> dict:
        return {
            "switch": self.switch,
            "ts": self.timestamp.isoformat(),
            "state": self.state.value,
            "event": self.event,
        }


class SwitchHandler(Handler):
    """Handler for a switch driven by strong and weak on/off commands.

    A weak command only moves the switch one depth step, so for example a
    weak "on" after a strong "off" leaves the switch off.
    """

    def __init__(
        self,
        name: str,
        on_change: Optional[Callable[[SwitchTransition], None]] = None,
        depth: SwitchDepth = SwitchDepth.OFF,
    ):
        """Initialize switch handler.

        Args:
            name: Switch name used in logs and transitions
            on_change: Optional callback for output changes
            depth: Initial depth state
        """
        self.name = name
        self.on_change = on_change
        self.depth = depth
        self.state = self._output(depth)
        self.hints: List[datetime] = []
        self.transitions: List[SwitchTransition] = []

    @staticmethod
    def _output(depth: SwitchDepth) -> SwitchState:
        return SwitchState.ON if depth is SwitchDepth.ON else SwitchState.OFF

    def on_hint(self, timestamp: datetime, context: Any) -> None:
        self.hints.append(timestamp)

    def on_fire(self, timestamp: datetime, event: Any, context: Any) -> None:
        command = SwitchCommand(context)
        self.depth = _TRANSITIONS[command][self.depth]
        new_state = self._output(self.depth)
        if new_state == self.state:
            logger.debug(f"Switch {self.name}: {command.value} keeps {new_state.value} ({self.depth.value})")
            return

        self.state = new_state
        transition = SwitchTransition(self.name, timestamp, new_state, str(event))
        self.transitions.append(transition)
        logger.info(f"Switch {self.name} {new_state.value} at {timestamp.isoformat()} ({event})")
        if self.on_change:
            self.on_change(transition)
