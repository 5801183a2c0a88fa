"""Handlers receiving the callbacks of scheduled events."""

from .base import Handler
from .switch import SwitchCommand, SwitchDepth, SwitchHandler, SwitchState, SwitchTransition

__all__ = [
    "Handler",
    "SwitchCommand",
    "SwitchDepth",
    "SwitchHandler",
    "SwitchState",
    "SwitchTransition",
]
