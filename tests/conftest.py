"""
Gemeinsame Test-Fixtures für holdtrigger.

Diese Fixtures isolieren Tests von externen Abhängigkeiten:
- Echtzeit (ManualFrameClock statt ThreadedFrameClock)
- pynput/Display (InputSource statt Tastatur-Listener)
- Umgebungsvariablen (HOLDTRIGGER_*)
"""

import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Projekt-Root zum Python-Path hinzufügen
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from input_platform.base import InputSource  # noqa: E402
from input_platform.clock import ManualFrameClock  # noqa: E402
from trigger import HoldTrigger  # noqa: E402

# Exakt darstellbare Frame-Periode: vermeidet Float-Drift beim Aufsummieren
FRAME = 1 / 64


class SpyFrameClock(ManualFrameClock):
    """ManualFrameClock, die jedes Timer-Abo als Spy (MagicMock wraps=) zurückgibt."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.timers: list[MagicMock] = []

    def on_tick(self, callback):
        sub = MagicMock(wraps=super().on_tick(callback))
        self.timers.append(sub)
        return sub


class SpyInputSource(InputSource):
    """InputSource, die start()/destroy() mitzählt."""

    def __init__(self, input_name: str, dispatch=None):
        super().__init__(input_name, dispatch)
        self.started = 0
        self.destroy_calls = 0

    def start(self) -> None:
        self.started += 1

    def destroy(self) -> None:
        self.destroy_calls += 1
        super().destroy()


# =============================================================================
# Clock & Input Fixtures
# =============================================================================


@pytest.fixture
def clock():
    """Deterministische Frame-Clock mit 1/64s Frames."""
    return SpyFrameClock(frame_period=FRAME)


@pytest.fixture
def sources():
    """Liste aller von make_trigger erzeugten Eingabequellen."""
    return []


@pytest.fixture
def make_trigger(clock, sources):
    """
    Factory für HoldTrigger mit manueller Eingabequelle.

    Usage:
        trigger, source = make_trigger("f19", 1.0)
        source.activate()
    """
    created: list[HoldTrigger] = []

    def factory(name: str) -> SpyInputSource:
        source = SpyInputSource(name)
        sources.append(source)
        return source

    def _create(selector="f19", hold_duration=None):
        trigger = HoldTrigger(
            selector,
            hold_duration,
            frame_clock=clock,
            input_source_factory=factory,
        )
        created.append(trigger)
        return trigger, sources[-1]

    yield _create

    for trigger in created:
        trigger.destroy()


@pytest.fixture
def recorder():
    """
    Sammelt Trigger-Events als (event, payload)-Tupel.

    Usage:
        events = recorder(trigger)
        assert [e for e, _ in events] == ["activated"]
    """

    def _attach(trigger):
        events = []
        trigger.on_activated(lambda payload: events.append(("activated", payload)))
        trigger.on_deactivated(lambda payload: events.append(("deactivated", payload)))
        return events

    return _attach


# =============================================================================
# Environment & Isolation Fixtures
# =============================================================================


@pytest.fixture
def clean_env(monkeypatch):
    """Entfernt alle HOLDTRIGGER_* Umgebungsvariablen für saubere Tests."""
    import os

    for key in list(os.environ.keys()):
        if key.startswith("HOLDTRIGGER_"):
            monkeypatch.delenv(key, raising=False)

    yield

    # load_environment() schreibt direkt in os.environ
    for key in list(os.environ.keys()):
        if key.startswith("HOLDTRIGGER_"):
            os.environ.pop(key, None)


@pytest.fixture
def user_config_dir(tmp_path, monkeypatch):
    """Leitet USER_CONFIG_DIR auf ein temporäres Verzeichnis um."""
    import config

    monkeypatch.setattr(config, "USER_CONFIG_DIR", tmp_path / "user")
    (tmp_path / "user").mkdir()
    return tmp_path / "user"
