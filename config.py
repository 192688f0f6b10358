"""Zentrale Konfiguration für holdtrigger.

Gemeinsame Konstanten für Trigger, Frame-Clock und Logging.
Vermeidet Duplikation zwischen Modulen.
"""

from pathlib import Path

# =============================================================================
# Trigger-Konfiguration
# =============================================================================

DEFAULT_HOLD_DURATION = 1.0  # Sekunden; gilt auch bei fehlendem/ungültigem Wert
DEFAULT_INPUT = "f19"

# =============================================================================
# Frame-Clock
# =============================================================================

# Tick-Frequenz begrenzt die Aktivierungs-Latenz auf eine Frame-Periode
DEFAULT_FRAME_RATE = 60
MAX_FRAME_RATE = 1000

# =============================================================================
# Lokale Pfade
# =============================================================================

# User-Verzeichnis für Konfiguration (.env) und Logs
USER_CONFIG_DIR = Path.home() / ".holdtrigger"

LOG_DIR = USER_CONFIG_DIR / "logs"
LOG_FILE = LOG_DIR / "holdtrigger.log"


__all__ = [
    # Trigger
    "DEFAULT_HOLD_DURATION",
    "DEFAULT_INPUT",
    # Frame-Clock
    "DEFAULT_FRAME_RATE",
    "MAX_FRAME_RATE",
    # Paths
    "USER_CONFIG_DIR",
    "LOG_DIR",
    "LOG_FILE",
]
