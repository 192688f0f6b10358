"""Tests für input_platform – Eingabequellen und Factories.

pynput-Listener werden nicht gestartet: die Callbacks (_on_press/_on_release/
_on_click) werden direkt mit Key-Attrappen aufgerufen.
"""

import sys
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from input_platform import get_frame_clock, get_input_source
from input_platform.base import InputSource
from input_platform.keyboard import KeyInputSource
from input_platform.mouse import MouseButtonInputSource
from trigger import InputPayload


def _key(name=None, char=None, vk=None):
    """pynput-ähnlicher Key: Key-Enum hat .name, KeyCode hat .char/.vk."""
    return SimpleNamespace(name=name, char=char, vk=vk)


def _record(source):
    events = []
    source.on_activated(lambda payload: events.append(("activated", payload)))
    source.on_deactivated(lambda payload: events.append(("deactivated", payload)))
    return events


# =============================================================================
# Tests: InputSource (manuell)
# =============================================================================


class TestInputSource:
    """Tests für die manuelle InputSource."""

    def test_activate_deactivate_payload(self):
        """activate()/deactivate() feuern mit InputPayload."""
        source = InputSource("f19")
        events = _record(source)

        source.activate(0.5)
        source.deactivate()

        assert events == [
            ("activated", InputPayload("f19", 0.5)),
            ("deactivated", InputPayload("f19", None)),
        ]

    def test_no_dedupe(self):
        """Doppelte activate()-Aufrufe werden ungefiltert weitergereicht."""
        source = InputSource("f19")
        events = _record(source)

        source.activate()
        source.activate()

        assert len(events) == 2

    def test_destroy_idempotent_and_silences(self):
        """Nach destroy() feuern keine Events mehr; zweites destroy() ist No-Op."""
        source = InputSource("f19")
        events = _record(source)

        source.destroy()
        source.destroy()
        source.activate()

        assert events == []
        assert source.destroyed is True


# =============================================================================
# Tests: KeyInputSource
# =============================================================================


class TestKeyInputSource:
    """Tests für KeyInputSource – Key-Matching und Auto-Repeat."""

    def test_matches_function_key_by_name(self):
        """Key.f19 wird über den Namen erkannt."""
        source = KeyInputSource("f19")
        assert source.matches(_key(name="f19"))
        assert not source.matches(_key(name="f18"))

    def test_matches_character(self):
        """KeyCode mit Zeichen wird erkannt (case-insensitive)."""
        source = KeyInputSource("a")
        assert source.matches(_key(char="A"))
        assert not source.matches(_key(char="b"))

    @pytest.mark.parametrize(
        "selector,pynput_name",
        [("enter", "enter"), ("capslock", "caps_lock"), ("pageup", "page_up"), ("esc", "esc")],
    )
    def test_alias_names(self, selector, pynput_name):
        """Selektor-Namen werden auf pynput-Namen abgebildet."""
        assert KeyInputSource(selector).matches(_key(name=pynput_name))

    def test_modifier_matches_left_and_right(self):
        """ctrl erkennt ctrl, ctrl_l und ctrl_r."""
        source = KeyInputSource("ctrl")
        assert source.matches(_key(name="ctrl"))
        assert source.matches(_key(name="ctrl_l"))
        assert source.matches(_key(name="ctrl_r"))
        assert not source.matches(_key(name="cmd_l"))

    def test_non_modifier_does_not_prefix_match(self):
        """f1 darf nicht auf f1_irgendwas matchen."""
        assert not KeyInputSource("f1").matches(_key(name="f1_x"))

    def test_virtual_key_on_macos(self, monkeypatch):
        """macOS: Virtual Key Code wird als Fallback verglichen."""
        monkeypatch.setattr(sys, "platform", "darwin")
        source = KeyInputSource("l")
        assert source.matches(_key(vk=37))
        assert not source.matches(_key(vk=38))

    def test_virtual_key_ignored_elsewhere(self, monkeypatch):
        """Außerhalb von macOS wird der vk nicht verglichen."""
        monkeypatch.setattr(sys, "platform", "linux")
        assert not KeyInputSource("l").matches(_key(vk=37))

    def test_auto_repeat_collapsed(self):
        """Wiederholte on_press-Events erzeugen nur ein activated."""
        source = KeyInputSource("space")
        events = _record(source)

        for _ in range(5):
            source._on_press(_key(name="space"))
        source._on_release(_key(name="space"))

        assert [e for e, _ in events] == ["activated", "deactivated"]

    def test_release_without_press_ignored(self):
        """Release ohne Press erzeugt kein deactivated."""
        source = KeyInputSource("space")
        events = _record(source)
        source._on_release(_key(name="space"))
        assert events == []

    def test_other_keys_ignored(self):
        """Andere Tasten lösen nichts aus."""
        source = KeyInputSource("space")
        events = _record(source)
        source._on_press(_key(name="tab"))
        source._on_release(_key(name="tab"))
        assert events == []

    def test_dispatch_defers_events(self):
        """Ereignisse werden über dispatch übergeben statt direkt gefeuert."""
        queued = []
        source = KeyInputSource("f19", dispatch=queued.append)
        events = _record(source)

        source._on_press(_key(name="f19"))
        assert events == []
        assert len(queued) == 1

        queued.pop()()
        assert [e for e, _ in events] == ["activated"]

    def test_destroy_stops_listener(self):
        """destroy() stoppt den pynput-Listener genau einmal."""
        source = KeyInputSource("f19")
        listener = MagicMock()
        source._listener = listener

        source.destroy()
        source.destroy()

        listener.stop.assert_called_once()

    def test_start_after_destroy_noop(self):
        """start() nach destroy() startet keinen Listener."""
        source = KeyInputSource("f19")
        source.destroy()
        source.start()
        assert source._listener is None


# =============================================================================
# Tests: MouseButtonInputSource
# =============================================================================


class TestMouseButtonInputSource:
    """Tests für MouseButtonInputSource."""

    def test_click_press_release(self):
        """Press/Release der passenden Maustaste erzeugen activated/deactivated."""
        source = MouseButtonInputSource("mouse_left")
        events = _record(source)
        left = SimpleNamespace(name="left")

        source._on_click(10, 20, left, True)
        source._on_click(10, 20, left, True)
        source._on_click(10, 20, left, False)

        assert events == [
            ("activated", InputPayload("mouse_left")),
            ("deactivated", InputPayload("mouse_left")),
        ]

    def test_other_button_ignored(self):
        """Andere Maustasten werden ignoriert."""
        source = MouseButtonInputSource("mouse_right")
        events = _record(source)
        source._on_click(0, 0, SimpleNamespace(name="left"), True)
        assert events == []


# =============================================================================
# Tests: Factories
# =============================================================================


class TestFactories:
    """Tests für get_input_source() und get_frame_clock()."""

    def test_keyboard_source(self):
        """Tastennamen liefern KeyInputSource."""
        source = get_input_source("f19")
        assert isinstance(source, KeyInputSource)
        assert source.input_name == "f19"

    def test_mouse_source(self):
        """mouse_* liefert MouseButtonInputSource."""
        assert isinstance(get_input_source("mouse_middle"), MouseButtonInputSource)

    def test_dispatch_passed_through(self):
        """dispatch wird an die Quelle weitergereicht."""
        queued = []
        source = get_input_source("f19", dispatch=queued.append)
        source._on_press(_key(name="f19"))
        assert len(queued) == 1

    def test_frame_clock_default_fps(self, clean_env):
        """Ohne Angabe: 60 fps."""
        assert get_frame_clock().fps == 60

    def test_frame_clock_env_fps(self, clean_env, monkeypatch):
        """HOLDTRIGGER_FPS setzt die Framerate."""
        monkeypatch.setenv("HOLDTRIGGER_FPS", "30")
        assert get_frame_clock().fps == 30

    def test_frame_clock_invalid_env_falls_back(self, clean_env, monkeypatch):
        """Ungültiger HOLDTRIGGER_FPS wird ignoriert."""
        monkeypatch.setenv("HOLDTRIGGER_FPS", "schnell")
        assert get_frame_clock().fps == 60

    def test_frame_clock_argument_beats_env(self, clean_env, monkeypatch):
        """Argument schlägt ENV."""
        monkeypatch.setenv("HOLDTRIGGER_FPS", "30")
        assert get_frame_clock(120).fps == 120
