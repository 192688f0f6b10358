"""Logging-Setup für holdtrigger.

Konfiguriert Datei-Logging mit Rotation und optionalem stderr-Output.
"""

import logging
import sys
import uuid
from logging.handlers import RotatingFileHandler
from pathlib import Path

# Logger-Singleton (Module loggen unter "holdtrigger.*")
logger = logging.getLogger("holdtrigger")

# Session-ID für Korrelation (wird beim ersten setup_logging() generiert)
_session_id: str = ""

_FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _generate_session_id() -> str:
    """Erzeugt kurze, lesbare Session-ID (8 Zeichen)."""
    return uuid.uuid4().hex[:8]


def get_session_id() -> str:
    """Gibt die aktuelle Session-ID zurück."""
    global _session_id
    if not _session_id:
        _session_id = _generate_session_id()
    return _session_id


def _rotating_handler(path: Path) -> RotatingFileHandler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(path, maxBytes=1_000_000, backupCount=3, encoding="utf-8")
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(_FILE_FORMAT, "%H:%M:%S"))
    return handler


def setup_logging(debug: bool = False) -> None:
    """Konfiguriert Logging: Datei mit Rotation + optional stderr.

    Args:
        debug: Wenn True, wird auch auf stderr geloggt
    """
    # Lazy import: config bleibt frei von Logging-Abhängigkeiten
    from config import LOG_FILE

    get_session_id()

    # Verhindere doppelte Handler bei mehrfachem Aufruf
    if logger.handlers:
        logger.setLevel(logging.DEBUG if debug else logging.INFO)
        return

    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    handler_added = False

    # Datei-Handler mit Rotation (max 1MB, 3 Backups)
    try:
        logger.addHandler(_rotating_handler(LOG_FILE))
        handler_added = True
    except OSError:
        # Fallback: /tmp, wenn Home-Verzeichnis nicht beschreibbar (z.B. Sandbox)
        try:
            logger.addHandler(_rotating_handler(Path("/tmp/holdtrigger.log")))
            handler_added = True
        except OSError:
            pass

    if not handler_added:
        # Minimaler Fallback, Logging darf den Start nicht blockieren
        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setLevel(logging.DEBUG if debug else logging.INFO)
        stderr_handler.setFormatter(logging.Formatter(_FILE_FORMAT, "%H:%M:%S"))
        logger.addHandler(stderr_handler)

    # Stderr-Handler (nur im Debug-Modus)
    if debug:
        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setLevel(logging.DEBUG)
        stderr_handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
        logger.addHandler(stderr_handler)


def log(message: str) -> None:
    """Status-Meldung auf stderr.

    Warum stderr? Hält stdout sauber für Event-Ausgabe (z.B. `hold_daemon.py | jq`).
    """
    print(message, file=sys.stderr)


def error(message: str) -> None:
    """Fehlermeldung auf stderr."""
    print(f"Fehler: {message}", file=sys.stderr)
