"""
Eingangs-Selektoren: Tastennamen, Key-Codes und Maustasten.

Ein Hold-Trigger überwacht genau EINEN Eingang. Tastenkombinationen
("cmd+shift+r") werden hier abgelehnt.
"""

from __future__ import annotations

# =============================================================================
# Key-Maps
# =============================================================================

# Key-Code Mapping: String → Carbon Virtual Key Code (macOS)
# Basierend auf quickmachotkey.constants
KEY_CODE_MAP = {
    # Funktionstasten
    "f1": 122,
    "f2": 120,
    "f3": 99,
    "f4": 118,
    "f5": 96,
    "f6": 97,
    "f7": 98,
    "f8": 100,
    "f9": 101,
    "f10": 109,
    "f11": 103,
    "f12": 111,
    "f13": 105,
    "f14": 107,
    "f15": 113,
    "f16": 106,
    "f17": 64,
    "f18": 79,
    "f19": 80,
    "f20": 90,
    # Fn / Globe key (macOS)
    "fn": 63,  # kVK_Function
    # Buchstaben
    "a": 0,
    "b": 11,
    "c": 8,
    "d": 2,
    "e": 14,
    "f": 3,
    "g": 5,
    "h": 4,
    "i": 34,
    "j": 38,
    "k": 40,
    "l": 37,
    "m": 46,
    "n": 45,
    "o": 31,
    "p": 35,
    "q": 12,
    "r": 15,
    "s": 1,
    "t": 17,
    "u": 32,
    "v": 9,
    "w": 13,
    "x": 7,
    "y": 16,
    "z": 6,
    # Zahlen
    "0": 29,
    "1": 18,
    "2": 19,
    "3": 20,
    "4": 21,
    "5": 23,
    "6": 22,
    "7": 26,
    "8": 28,
    "9": 25,
    # Satzzeichen / Symbole (ANSI)
    ".": 47,
    ",": 43,
    "/": 44,
    "\\": 42,
    ";": 41,
    "'": 39,
    "`": 50,
    "-": 27,
    "=": 24,
    "[": 33,
    "]": 30,
    # Sondertasten
    "space": 49,
    "enter": 36,
    "tab": 48,
    "esc": 53,
    "backspace": 51,
    "forwarddelete": 117,
    # Pfeiltasten
    "up": 126,
    "down": 125,
    "left": 123,
    "right": 124,
    # Navigation
    "home": 115,
    "end": 119,
    "pageup": 116,
    "pagedown": 121,
    "capslock": 57,
}

# Modifier als eigenständige Eingänge (einzeln gehalten, nicht als Kombination)
# Werte: Carbon Modifier Mask
MODIFIER_MAP = {
    "cmd": 256,
    "shift": 512,
    "alt": 2048,
    "ctrl": 4096,
}

MOUSE_BUTTONS = ("mouse_left", "mouse_right", "mouse_middle")

# Alias → kanonischer Name
KEY_ALIASES = {
    "return": "enter",
    "escape": "esc",
    "delete": "backspace",
    "caps_lock": "capslock",
    "page_up": "pageup",
    "page_down": "pagedown",
    "command": "cmd",
    "win": "cmd",
    "control": "ctrl",
    "option": "alt",
    "lmb": "mouse_left",
    "rmb": "mouse_right",
    "mmb": "mouse_middle",
}

_CODE_TO_NAME = {code: name for name, code in KEY_CODE_MAP.items()}


def _is_known(name: str) -> bool:
    return name in KEY_CODE_MAP or name in MODIFIER_MAP or name in MOUSE_BUTTONS


def _parse_name(selector: str) -> str:
    normalized = selector.strip().lower()
    if not normalized:
        raise ValueError("Eingang ist leer")

    parts = [p.strip() for p in normalized.split("+")]
    if len(parts) > 1 and all(parts):
        raise ValueError(
            f"Tastenkombination '{selector.strip()}' ist kein einzelner Eingang"
        )
    # "+" allein ist keine Taste in KEY_CODE_MAP, fällt unten als unbekannt raus

    name = KEY_ALIASES.get(normalized, normalized)
    if not _is_known(name):
        raise ValueError(f"Unbekannte Taste: {normalized}")
    return name


def parse_input_selector(selector) -> str:
    """
    Löst einen Selektor in den kanonischen Namen eines einzelnen Eingangs auf.

    Args:
        selector: Tastenname ("f19", "Space", "mouse_left"), Virtual Key Code
            (int) oder Sequenz mit genau einem Element

    Returns:
        Kanonischer Eingangsname (Aliase aufgelöst, lowercase)

    Raises:
        ValueError: Bei Kombinationen, leeren/unbekannten Eingängen oder
            nicht unterstützten Typen
    """
    if isinstance(selector, str):
        return _parse_name(selector)

    if isinstance(selector, bool):
        raise ValueError(f"Ungültiger Eingang: {selector!r}")

    if isinstance(selector, int):
        if selector not in _CODE_TO_NAME:
            raise ValueError(f"Unbekannter Key-Code: {selector}")
        return _CODE_TO_NAME[selector]

    if isinstance(selector, (list, tuple, set, frozenset)):
        if len(selector) != 1:
            raise ValueError(
                f"Selektor muss genau einen Eingang enthalten, nicht {len(selector)}"
            )
        (single,) = selector
        if isinstance(single, (list, tuple, set, frozenset)):
            raise ValueError(f"Verschachtelter Selektor nicht erlaubt: {selector!r}")
        return parse_input_selector(single)

    raise ValueError(f"Nicht unterstützter Selektor-Typ: {type(selector).__name__}")


__all__ = [
    "KEY_ALIASES",
    "KEY_CODE_MAP",
    "MODIFIER_MAP",
    "MOUSE_BUTTONS",
    "parse_input_selector",
]
