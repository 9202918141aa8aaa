"""
Hotkey predicates.

is_key_hotkey("mod+b") returns a function telling whether a KeyEvent is that
chord. "mod" is the platform's command modifier: meta on Apple platforms,
ctrl elsewhere. Modifiers must match exactly, so "mod+b" does not fire for
"mod+shift+b".
"""

from __future__ import annotations
from typing import Callable

from ..config import get_settings
from .events import KeyEvent


MODIFIER_ALIASES = {
    "shift": "shift",
    "ctrl": "ctrl",
    "control": "ctrl",
    "meta": "meta",
    "cmd": "meta",
    "command": "meta",
    "alt": "alt",
    "option": "alt",
}

KEY_ALIASES = {
    "space": " ",
    "esc": "escape",
    "return": "enter",
}

BOLD_HOTKEY = "mod+b"
ITALIC_HOTKEY = "mod+i"
UNDERLINED_HOTKEY = "mod+u"
CODE_HOTKEY = "mod+`"


HotkeyPredicate = Callable[[KeyEvent], bool]


def parse_hotkey(hotkey: str, is_mac: bool | None = None) -> tuple[frozenset[str], str]:
    """Split a chord like "mod+shift+b" into (modifiers, key)."""
    if is_mac is None:
        is_mac = get_settings().mac_hotkeys
    parts = hotkey.split("+")
    # "mod++" means the plus key itself
    if hotkey.endswith("++"):
        parts = parts[:-2] + ["+"]
    *modifier_names, key = parts
    if not key:
        raise ValueError(f"Hotkey {hotkey!r} names no key")

    modifiers = set()
    for name in modifier_names:
        name = name.lower()
        if name == "mod":
            modifiers.add("meta" if is_mac else "ctrl")
        elif name in MODIFIER_ALIASES:
            modifiers.add(MODIFIER_ALIASES[name])
        else:
            raise ValueError(f"Unknown modifier {name!r} in hotkey {hotkey!r}")
    key = key.lower()
    return frozenset(modifiers), KEY_ALIASES.get(key, key)


def is_key_hotkey(hotkey: str, is_mac: bool | None = None) -> HotkeyPredicate:
    modifiers, key = parse_hotkey(hotkey, is_mac)

    def predicate(event: KeyEvent) -> bool:
        if event.key.lower() != key:
            return False
        pressed = {name for name in ("shift", "ctrl", "meta", "alt") if getattr(event, name)}
        return pressed == modifiers

    return predicate
