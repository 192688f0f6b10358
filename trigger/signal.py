"""Signal/Subscription-Primitive für Trigger und Eingabequellen.

Jede Verbindung ist ein Handle mit genau einer Freigabe. `cancel()` darf
beliebig oft aufgerufen werden, die Freigabe läuft trotzdem nur einmal.

Usage:
    signal = Signal("activated")

    with signal.connect(on_activated):
        signal.fire(payload)
"""

from __future__ import annotations

import itertools
import logging
from typing import Any, Callable

logger = logging.getLogger("holdtrigger.signal")

Listener = Callable[..., Any]


class Subscription:
    """Handle für eine einzelne Verbindung (Listener, Timer, Eingabe)."""

    __slots__ = ("_release",)

    def __init__(self, release: Callable[[], None] | None):
        self._release = release

    @property
    def active(self) -> bool:
        return self._release is not None

    def cancel(self) -> None:
        """Gibt die Verbindung frei. Weitere Aufrufe sind No-Ops."""
        release, self._release = self._release, None
        if release is not None:
            release()

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cancel()

    def __repr__(self) -> str:
        return f"<Subscription active={self.active}>"


class Signal:
    """Geordnete Listener-Liste mit synchroner Auslieferung.

    Ein Listener, der während `fire()` getrennt wird, wird danach nicht mehr
    aufgerufen. Fehler in Listenern werden geloggt und nicht an den Sender
    weitergereicht.
    """

    def __init__(self, name: str = ""):
        self.name = name
        self._listeners: dict[int, Listener] = {}
        self._ids = itertools.count()

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def connect(self, callback: Listener) -> Subscription:
        key = next(self._ids)
        self._listeners[key] = callback
        return Subscription(lambda: self._listeners.pop(key, None))

    def fire(self, *args: Any) -> None:
        for key in list(self._listeners):
            callback = self._listeners.get(key)
            if callback is None:
                continue
            try:
                callback(*args)
            except Exception:
                logger.exception(f"Listener für '{self.name}' fehlgeschlagen")

    def disconnect_all(self) -> None:
        self._listeners.clear()

    def __repr__(self) -> str:
        return f"<Signal {self.name!r} listeners={self.listener_count}>"


__all__ = ["Listener", "Signal", "Subscription"]
