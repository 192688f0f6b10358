"""Shared CLI type definitions for holdtrigger.

Enums used by hold_daemon.py.
"""

from enum import Enum


class OutputFormat(str, Enum):
    """Ausgabeformat für Trigger-Events auf stdout."""

    text = "text"
    json = "json"
