"""Maustasten-Eingabequelle via pynput."""

from __future__ import annotations

import logging

from .base import Dispatch, InputSource

logger = logging.getLogger("holdtrigger.platform.mouse")


class MouseButtonInputSource(InputSource):
    """Eingabequelle für eine Maustaste ("mouse_left", "mouse_right", "mouse_middle")."""

    def __init__(self, button_name: str, dispatch: Dispatch | None = None):
        super().__init__(button_name, dispatch)
        self._button = button_name.removeprefix("mouse_")
        self._held = False
        self._listener = None

    def _on_click(self, x, y, button, pressed) -> None:
        if getattr(button, "name", None) != self._button:
            return
        if pressed and not self._held:
            self._held = True
            self._post(self.activate)
        elif not pressed and self._held:
            self._held = False
            self._post(self.deactivate)

    def start(self) -> None:
        if self._listener is not None or self.destroyed:
            return
        try:
            from pynput import mouse  # type: ignore[import-not-found]
        except ImportError as e:
            raise ImportError(f"Maus-Eingabe benötigt pynput: {e}") from e

        listener = mouse.Listener(on_click=self._on_click)
        listener.daemon = True
        listener.start()
        self._listener = listener
        logger.info(f"Maus-Listener für '{self.input_name}' gestartet")

    def destroy(self) -> None:
        listener, self._listener = self._listener, None
        if listener is not None:
            listener.stop()
        self._held = False
        super().destroy()


__all__ = ["MouseButtonInputSource"]
