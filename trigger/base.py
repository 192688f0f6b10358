"""Gemeinsame Bausteine für Trigger.

Trigger und Eingabequellen haben dieselbe Form: zwei Ereignisse
(activated/deactivated) plus `destroy()`. `TriggerSignals` kapselt die
beiden Signale, damit Klassen sie per Komposition statt Vererbung erhalten.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Protocol

from .signal import Signal, Subscription


@dataclass(frozen=True)
class InputPayload:
    """Payload eines Eingabe-Ereignisses.

    Attributes:
        input_name: Kanonischer Name des Eingangs (z.B. "f19", "mouse_left").
        value: Optionaler Messwert (z.B. Achsenwert), sonst None.
    """

    input_name: str
    value: float | None = None


PayloadCallback = Callable[[InputPayload], None]


class TriggerSignals:
    """Besitzt die activated/deactivated-Signale eines Triggers."""

    __slots__ = ("activated", "deactivated")

    def __init__(self, owner: str = ""):
        prefix = f"{owner}." if owner else ""
        self.activated = Signal(f"{prefix}activated")
        self.deactivated = Signal(f"{prefix}deactivated")

    def on_activated(self, callback: PayloadCallback) -> Subscription:
        return self.activated.connect(callback)

    def on_deactivated(self, callback: PayloadCallback) -> Subscription:
        return self.deactivated.connect(callback)

    def close(self) -> None:
        """Trennt alle Listener beider Signale."""
        self.activated.disconnect_all()
        self.deactivated.disconnect_all()


class Trigger(Protocol):
    """Was Konsumenten von einem Trigger erwarten dürfen."""

    def on_activated(self, callback: PayloadCallback) -> Subscription: ...

    def on_deactivated(self, callback: PayloadCallback) -> Subscription: ...

    def destroy(self) -> None: ...


__all__ = ["InputPayload", "PayloadCallback", "Trigger", "TriggerSignals"]
