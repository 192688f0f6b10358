"""Tastatur-Eingabequelle via pynput.

Lauscht systemweit auf genau eine Taste. Auto-Repeat (wiederholte
on_press-Events während die Taste gehalten wird) wird zu einem einzigen
activate() zusammengefasst.

macOS: benötigt Eingabemonitoring/Bedienungshilfen-Berechtigung.
"""

from __future__ import annotations

import logging
import sys

from utils.hotkey import KEY_CODE_MAP, MODIFIER_MAP

from .base import Dispatch, InputSource

logger = logging.getLogger("holdtrigger.platform.keyboard")

# Kanonischer Selektor-Name → pynput Key-Name
PYNPUT_KEY_NAMES = {
    "enter": "enter",
    "esc": "esc",
    "backspace": "backspace",
    "forwarddelete": "delete",
    "capslock": "caps_lock",
    "pageup": "page_up",
    "pagedown": "page_down",
    "fn": "fn",
}


def _key_name(key) -> str | None:
    """Name eines pynput-Keys (Key-Enum) oder Zeichen eines KeyCode."""
    name = getattr(key, "name", None)
    if name:
        return str(name).lower()
    char = getattr(key, "char", None)
    if char:
        return str(char).lower()
    return None


class KeyInputSource(InputSource):
    """Eingabequelle für eine einzelne Taste (pynput keyboard.Listener).

    Die pynput-Callbacks laufen im Listener-Thread; Ereignisse werden über
    `dispatch` (z.B. `ThreadedFrameClock.call_soon`) an den Clock-Thread
    übergeben.
    """

    def __init__(self, key_name: str, dispatch: Dispatch | None = None):
        super().__init__(key_name, dispatch)
        self._pynput_name = PYNPUT_KEY_NAMES.get(key_name, key_name)
        self._virtual_key = KEY_CODE_MAP.get(key_name)
        self._held = False
        self._listener = None

    def matches(self, key) -> bool:
        name = _key_name(key)
        if name is not None:
            if name == self._pynput_name:
                return True
            # ctrl_l, shift_r, cmd_l, alt_gr...
            if self.input_name in MODIFIER_MAP and name.startswith(f"{self._pynput_name}_"):
                return True
        # macOS: pynput-vk entspricht dem Carbon Virtual Key Code
        if sys.platform == "darwin" and self._virtual_key is not None:
            return getattr(key, "vk", None) == self._virtual_key
        return False

    def _on_press(self, key) -> None:
        if self._held or not self.matches(key):
            return
        self._held = True
        logger.debug(f"Taste gedrückt: {self.input_name}")
        self._post(self.activate)

    def _on_release(self, key) -> None:
        if not self._held or not self.matches(key):
            return
        self._held = False
        logger.debug(f"Taste losgelassen: {self.input_name}")
        self._post(self.deactivate)

    def start(self) -> None:
        """Startet den pynput-Listener (nicht blockierend)."""
        if self._listener is not None or self.destroyed:
            return
        try:
            from pynput import keyboard  # type: ignore[import-not-found]
        except ImportError as e:
            raise ImportError(f"Tastatur-Eingabe benötigt pynput: {e}") from e

        listener = keyboard.Listener(on_press=self._on_press, on_release=self._on_release)
        listener.daemon = True
        listener.start()
        self._listener = listener
        logger.info(f"Tastatur-Listener für '{self.input_name}' gestartet")

    def destroy(self) -> None:
        listener, self._listener = self._listener, None
        if listener is not None:
            listener.stop()
        self._held = False
        super().destroy()


__all__ = ["KeyInputSource", "PYNPUT_KEY_NAMES"]
