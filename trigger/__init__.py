"""Trigger-Primitive für Tasten und Maustasten.

Usage:
    from trigger import HoldTrigger, InvalidConfiguration

    trigger = HoldTrigger("f19", 1.0, frame_clock=clock)
    trigger.on_activated(lambda payload: print("bestätigt"))
"""

from .base import InputPayload, Trigger, TriggerSignals
from .exceptions import InvalidConfiguration
from .hold import HoldState, HoldTrigger
from .signal import Signal, Subscription

__all__ = [
    "HoldState",
    "HoldTrigger",
    "InputPayload",
    "InvalidConfiguration",
    "Signal",
    "Subscription",
    "Trigger",
    "TriggerSignals",
]
