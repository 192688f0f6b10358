"""Exceptions für Trigger-Konfiguration."""


class InvalidConfiguration(ValueError):
    """Trigger kann mit der angegebenen Konfiguration nicht erzeugt werden.

    Typischer Fall: der Selektor beschreibt eine Tastenkombination statt
    einer einzelnen Taste (z.B. "ctrl+a").
    """


__all__ = ["InvalidConfiguration"]
