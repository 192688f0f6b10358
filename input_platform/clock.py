"""Frame-Clocks: Tick-Quellen für zeitgesteuerte Trigger.

ManualFrameClock: deterministisch, Zeit wird explizit vorgespult (Tests,
Simulation). ThreadedFrameClock: Echtzeit-Loop mit fester Framerate.

Beide führen per `call_soon()` eingereichte Callbacks VOR dem nächsten Tick
aus. So laufen Eingabe-Ereignisse und Ticks auf demselben Thread und werden
nie verschränkt verarbeitet.
"""

from __future__ import annotations

import logging
import queue
import threading
import time
from typing import Callable

from config import DEFAULT_FRAME_RATE, MAX_FRAME_RATE
from trigger.signal import Signal, Subscription

from .base import TickCallback

logger = logging.getLogger("holdtrigger.platform.clock")


class ManualFrameClock:
    """Frame-Clock ohne echte Zeit.

    Usage:
        clock = ManualFrameClock(frame_period=1 / 64)
        clock.step(64)        # 64 Ticks, Zeit +1.0s
        clock.advance(0.5)    # Zeit +0.5s, ein Tick
    """

    def __init__(self, start: float = 0.0, frame_period: float = 1 / DEFAULT_FRAME_RATE):
        if frame_period <= 0:
            raise ValueError(f"frame_period muss positiv sein: {frame_period}")
        self._now = float(start)
        self.frame_period = frame_period
        self.frame_count = 0
        self._ticks = Signal("clock.tick")
        self._pending: list[Callable[[], None]] = []

    @property
    def subscriber_count(self) -> int:
        return self._ticks.listener_count

    def now(self) -> float:
        return self._now

    def on_tick(self, callback: TickCallback) -> Subscription:
        return self._ticks.connect(callback)

    def call_soon(self, fn: Callable[[], None]) -> None:
        self._pending.append(fn)

    def drain(self) -> None:
        """Führt alle wartenden call_soon-Callbacks aus."""
        while self._pending:
            fn = self._pending.pop(0)
            fn()

    def tick(self) -> None:
        """Ein Frame ohne Zeitfortschritt."""
        self.drain()
        self.frame_count += 1
        self._ticks.fire()

    def step(self, frames: int = 1) -> None:
        for _ in range(frames):
            self._now += self.frame_period
            self.tick()

    def advance(self, seconds: float) -> None:
        """Springt `seconds` vor und liefert genau einen Tick."""
        self._now += seconds
        self.tick()

    def run_for(self, seconds: float) -> None:
        """Tickt mit frame_period, bis mindestens `seconds` vergangen sind."""
        deadline = self._now + seconds
        while self._now < deadline:
            self.step()


class ThreadedFrameClock:
    """Echtzeit-Frame-Clock (time.monotonic) mit fester Framerate.

    Pro Frame: call_soon-Queue leeren, dann Tick. Verspätete Frames werden
    verworfen statt nachgeholt.

    Usage:
        clock = ThreadedFrameClock(fps=60)
        clock.run()           # blockiert bis stop()
        # oder
        clock.start()         # Daemon-Thread
        clock.stop(); clock.join()
    """

    def __init__(self, fps: int = DEFAULT_FRAME_RATE):
        if not 1 <= fps <= MAX_FRAME_RATE:
            raise ValueError(f"fps muss zwischen 1 und {MAX_FRAME_RATE} liegen: {fps}")
        self.fps = fps
        self.frame_period = 1.0 / fps
        self._ticks = Signal("clock.tick")
        self._calls: queue.Queue[Callable[[], None]] = queue.Queue()
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    def now(self) -> float:
        return time.monotonic()

    def on_tick(self, callback: TickCallback) -> Subscription:
        return self._ticks.connect(callback)

    def call_soon(self, fn: Callable[[], None]) -> None:
        """Thread-safe: darf von Listener-Threads (pynput) aufgerufen werden."""
        self._calls.put(fn)

    @property
    def running(self) -> bool:
        return not self._stop_event.is_set() and (
            self._thread is None or self._thread.is_alive()
        )

    def _drain(self) -> None:
        while True:
            try:
                fn = self._calls.get_nowait()
            except queue.Empty:
                return
            try:
                fn()
            except Exception:
                logger.exception("call_soon-Callback fehlgeschlagen")

    def run(self) -> None:
        """Frame-Loop auf dem aktuellen Thread (blockiert bis stop())."""
        logger.debug(f"Frame-Clock läuft mit {self.fps} fps")
        next_frame = self.now()
        while not self._stop_event.is_set():
            self._drain()
            self._ticks.fire()

            next_frame += self.frame_period
            delay = next_frame - self.now()
            if delay > 0:
                self._stop_event.wait(delay)
            else:
                next_frame = self.now()
        logger.debug("Frame-Clock gestoppt")

    def start(self) -> None:
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self.run, name="FrameClock", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._stop_event.set()

    def join(self, timeout: float | None = None) -> None:
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)


__all__ = ["ManualFrameClock", "ThreadedFrameClock"]
