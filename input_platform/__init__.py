"""Plattform-Abstraktion für Eingaben und Frame-Clocks.

Dieses Modul stellt Factories bereit und lädt die Implementierungen erst
beim Aufruf (pynput wird nur für echte Eingabequellen gebraucht).

Usage:
    from input_platform import get_frame_clock, get_input_source

    clock = get_frame_clock()
    source = get_input_source("f19", dispatch=clock.call_soon)
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .base import Dispatch, InputSource
    from .clock import ThreadedFrameClock


def get_input_source(input_name: str, *, dispatch: "Dispatch | None" = None) -> "InputSource":
    """Factory für die passende Eingabequelle.

    Args:
        input_name: Kanonischer Eingangsname (siehe utils.hotkey.parse_input_selector)
        dispatch: Übergibt Ereignisse an den Clock-Thread (default: direkt)

    Returns:
        MouseButtonInputSource für "mouse_*", sonst KeyInputSource
    """
    from utils.hotkey import MOUSE_BUTTONS

    if input_name in MOUSE_BUTTONS:
        from .mouse import MouseButtonInputSource

        return MouseButtonInputSource(input_name, dispatch)

    from .keyboard import KeyInputSource

    return KeyInputSource(input_name, dispatch)


def get_frame_clock(fps: int | None = None) -> "ThreadedFrameClock":
    """Factory für die Echtzeit-Frame-Clock.

    Framerate: Argument > HOLDTRIGGER_FPS > DEFAULT_FRAME_RATE.
    """
    from config import DEFAULT_FRAME_RATE
    from utils.env import get_env_int

    from .clock import ThreadedFrameClock

    if fps is None:
        fps = get_env_int("HOLDTRIGGER_FPS") or DEFAULT_FRAME_RATE
    return ThreadedFrameClock(fps=fps)


__all__ = ["get_frame_clock", "get_input_source"]
