"""Hold-to-Confirm Trigger.

Feuert `activated` erst, wenn der Eingang mindestens `hold_duration` Sekunden
ununterbrochen gedrückt bleibt. Loslassen vorher bricht still ab, Loslassen
danach feuert `deactivated`.

State-Flow:
    idle → [press] → timing → [tick, elapsed >= duration] → active → [release] → idle
                       └──── [release] → idle (kein Event)

Die Wartezeit wird über Frame-Clock-Ticks gepollt: Die Latenz ist damit durch
eine Frame-Periode begrenzt, ein Hold kürzer als ein Frame aktiviert nie.
"""

from __future__ import annotations

import logging
import math
from contextlib import ExitStack
from enum import Enum
from typing import TYPE_CHECKING, Callable

from config import DEFAULT_HOLD_DURATION
from utils.hotkey import parse_input_selector
from utils.timing import format_duration

from .base import InputPayload, PayloadCallback, TriggerSignals
from .exceptions import InvalidConfiguration
from .signal import Subscription

if TYPE_CHECKING:
    from input_platform.base import FrameClockProtocol, InputSourceProtocol

logger = logging.getLogger("holdtrigger.trigger")

InputSourceFactory = Callable[[str], "InputSourceProtocol"]


class HoldState(Enum):
    IDLE = "idle"
    TIMING = "timing"  # Eingang gedrückt, Dauer läuft
    ACTIVE = "active"  # Dauer erreicht, activated gefeuert


def _resolve_hold_duration(hold_duration: float | None) -> float:
    if hold_duration is None:
        return DEFAULT_HOLD_DURATION
    try:
        duration = float(hold_duration)
    except (TypeError, ValueError):
        duration = math.nan
    if not math.isfinite(duration) or duration <= 0:
        logger.warning(
            f"Ungültige hold_duration={hold_duration!r}, "
            f"nutze Default {DEFAULT_HOLD_DURATION}s"
        )
        return DEFAULT_HOLD_DURATION
    return duration


class HoldTrigger:
    """Gated einen Eingang hinter einer Mindest-Haltedauer.

    Usage:
        clock = ThreadedFrameClock(fps=60)
        trigger = HoldTrigger("f19", 1.0, frame_clock=clock)
        trigger.on_activated(lambda payload: confirm())
        ...
        trigger.destroy()

    Der Besitzer ist für `destroy()` verantwortlich, es gibt keine
    automatische Finalisierung.
    """

    def __init__(
        self,
        input_selector,
        hold_duration: float | None = None,
        *,
        frame_clock: "FrameClockProtocol",
        input_source_factory: InputSourceFactory | None = None,
    ):
        try:
            self._input_name = parse_input_selector(input_selector)
        except ValueError as e:
            raise InvalidConfiguration(str(e)) from e

        self._hold_duration = _resolve_hold_duration(hold_duration)
        self._clock = frame_clock
        self._signals = TriggerSignals(f"hold:{self._input_name}")

        self._state = HoldState.IDLE
        self._timer: Subscription | None = None
        self._start_time = 0.0
        self._activation_payload: InputPayload | None = None

        if input_source_factory is None:
            input_source_factory = self._default_input_source_factory

        with ExitStack() as stack:
            source = input_source_factory(self._input_name)
            stack.callback(source.destroy)
            # Abos zuerst, damit beim Start kein Ereignis verloren geht
            stack.enter_context(source.on_activated(self._on_input_activated))
            stack.enter_context(source.on_deactivated(self._on_input_deactivated))
            source.start()
            self._resources: ExitStack | None = stack.pop_all()

        logger.debug(
            f"HoldTrigger bereit: input={self._input_name}, "
            f"duration={format_duration(self._hold_duration * 1000)}"
        )

    def _default_input_source_factory(self, input_name: str) -> "InputSourceProtocol":
        from input_platform import get_input_source

        return get_input_source(input_name, dispatch=self._clock.call_soon)

    # =========================================================================
    # Öffentliche API
    # =========================================================================

    @property
    def state(self) -> HoldState:
        return self._state

    @property
    def hold_duration(self) -> float:
        return self._hold_duration

    @property
    def input_name(self) -> str:
        return self._input_name

    @property
    def is_active(self) -> bool:
        return self._state is HoldState.ACTIVE

    @property
    def destroyed(self) -> bool:
        return self._resources is None

    def on_activated(self, callback: PayloadCallback) -> Subscription:
        """Feuert einmal pro abgeschlossenem Hold."""
        return self._signals.on_activated(callback)

    def on_deactivated(self, callback: PayloadCallback) -> Subscription:
        """Feuert beim Loslassen nach abgeschlossenem Hold, nie davor."""
        return self._signals.on_deactivated(callback)

    def destroy(self) -> None:
        """Gibt Timer, Eingabe-Abos und Eingabequelle frei (idempotent).

        Feuert keine Events, auch nicht wenn gerade ein Hold läuft.
        """
        resources, self._resources = self._resources, None
        if resources is None:
            return
        try:
            self._release_timer()
        finally:
            self._state = HoldState.IDLE
            self._activation_payload = None
            try:
                resources.close()
            finally:
                self._signals.close()
        logger.debug(f"HoldTrigger '{self._input_name}' zerstört")

    # =========================================================================
    # Übergänge
    # =========================================================================

    def _on_input_activated(self, payload: InputPayload) -> None:
        if self._state is not HoldState.IDLE:
            # Doppeltes Press vom Upstream: laufenden Hold nicht neu starten
            logger.debug(f"Press ignoriert (state={self._state.value})")
            return

        self._release_timer()
        self._activation_payload = payload
        self._start_time = self._clock.now()
        self._state = HoldState.TIMING
        self._timer = self._clock.on_tick(self._on_tick)
        logger.debug(f"Hold gestartet: {self._input_name}")

    def _on_input_deactivated(self, payload: InputPayload) -> None:
        if self._state is HoldState.TIMING:
            self._release_timer()
            self._activation_payload = None
            self._state = HoldState.IDLE
            elapsed_ms = (self._clock.now() - self._start_time) * 1000
            logger.debug(f"Hold abgebrochen nach {format_duration(elapsed_ms)}")
        elif self._state is HoldState.ACTIVE:
            self._state = HoldState.IDLE
            logger.debug(f"Hold beendet: {self._input_name}")
            self._signals.deactivated.fire(payload)

    def _on_tick(self) -> None:
        if self._state is not HoldState.TIMING:
            return
        elapsed = self._clock.now() - self._start_time
        if elapsed < self._hold_duration:
            return

        self._release_timer()
        payload, self._activation_payload = self._activation_payload, None
        self._state = HoldState.ACTIVE
        logger.debug(f"Hold abgeschlossen nach {format_duration(elapsed * 1000)}")
        self._signals.activated.fire(payload)

    def _release_timer(self) -> None:
        timer, self._timer = self._timer, None
        if timer is not None:
            timer.cancel()

    def __repr__(self) -> str:
        return (
            f"<HoldTrigger input={self._input_name!r} "
            f"duration={self._hold_duration} state={self._state.value}>"
        )


__all__ = ["HoldState", "HoldTrigger", "InputSourceFactory"]
