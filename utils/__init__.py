"""Utility-Module für holdtrigger.

Gemeinsame Hilfsfunktionen für Logging, Zeitformatierung und Eingangs-Selektoren.

Usage:
    from utils import setup_logging, parse_input_selector

    setup_logging(debug=True)
    name = parse_input_selector("F19")
"""

# NOTE:
# Keep this package-level re-export module intentionally small.
# `trigger.hold` imports `utils.hotkey`; avoid importing modules here that
# import `trigger` or `input_platform`, otherwise imports become circular.

from .hotkey import parse_input_selector
from .logging import setup_logging, log, error, get_session_id
from .timing import format_duration

__all__ = [
    "setup_logging",
    "log",
    "error",
    "get_session_id",
    "format_duration",
    "parse_input_selector",
]
