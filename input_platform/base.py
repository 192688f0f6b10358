"""Schnittstellen der externen Kollaborateure.

- InputSourceProtocol: liefert activated/deactivated für genau einen Eingang
- FrameClockProtocol: liefert Ticks pro Frame und die aktuelle Zeit

`InputSource` ist die manuelle Basis-Implementierung: Ereignisse werden per
`activate()`/`deactivate()` ausgelöst (Skripte, Tests, Simulation).
Plattform-Quellen (pynput) erben davon und rufen dieselben Methoden auf.
"""

from __future__ import annotations

import logging
from typing import Callable, Protocol

from trigger.base import InputPayload, PayloadCallback, TriggerSignals
from trigger.signal import Subscription

logger = logging.getLogger("holdtrigger.platform")

TickCallback = Callable[[], None]
Dispatch = Callable[[Callable[[], None]], None]


class InputSourceProtocol(Protocol):
    def on_activated(self, callback: PayloadCallback) -> Subscription: ...

    def on_deactivated(self, callback: PayloadCallback) -> Subscription: ...

    def start(self) -> None: ...

    def destroy(self) -> None: ...


class FrameClockProtocol(Protocol):
    def now(self) -> float:
        """Monotone Zeit in Sekunden."""
        ...

    def on_tick(self, callback: TickCallback) -> Subscription: ...

    def call_soon(self, fn: Callable[[], None]) -> None:
        """Führt `fn` vor dem nächsten Tick auf dem Clock-Thread aus."""
        ...


def _call_directly(fn: Callable[[], None]) -> None:
    fn()


class InputSource:
    """Eingabequelle für einen einzelnen, benannten Eingang.

    Leitet Ereignisse ungefiltert weiter: doppelte activate()-Aufrufe werden
    nicht zusammengefasst. Das Entprellen ist Sache des Konsumenten.
    """

    def __init__(self, input_name: str, dispatch: Dispatch | None = None):
        self.input_name = input_name
        self._dispatch = dispatch or _call_directly
        self._signals = TriggerSignals(f"input:{input_name}")
        self._destroyed = False

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    def on_activated(self, callback: PayloadCallback) -> Subscription:
        return self._signals.on_activated(callback)

    def on_deactivated(self, callback: PayloadCallback) -> Subscription:
        return self._signals.on_deactivated(callback)

    def activate(self, value: float | None = None) -> None:
        if self._destroyed:
            return
        self._signals.activated.fire(InputPayload(self.input_name, value))

    def deactivate(self, value: float | None = None) -> None:
        if self._destroyed:
            return
        self._signals.deactivated.fire(InputPayload(self.input_name, value))

    def start(self) -> None:
        """Startet das Lauschen (manuelle Quelle: nichts zu tun)."""

    def destroy(self) -> None:
        if self._destroyed:
            return
        self._destroyed = True
        self._signals.close()

    def _post(self, fn: Callable[[], None]) -> None:
        """Übergibt ein Ereignis an den Dispatcher (z.B. Clock-Thread)."""
        self._dispatch(fn)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.input_name!r}>"


__all__ = [
    "Dispatch",
    "FrameClockProtocol",
    "InputSource",
    "InputSourceProtocol",
    "TickCallback",
]
