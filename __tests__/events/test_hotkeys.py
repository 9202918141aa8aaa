"""Tests for hotkey parsing and matching."""
import pytest

from richview.events import KeyEvent, is_key_hotkey, parse_hotkey


class TestParseHotkey:

    def test_mod_is_ctrl_off_mac(self):
        assert parse_hotkey("mod+shift+z", is_mac=False) == (frozenset({"ctrl", "shift"}), "z")

    def test_mod_is_meta_on_mac(self):
        assert parse_hotkey("mod+b", is_mac=True) == (frozenset({"meta"}), "b")

    def test_aliases(self):
        assert parse_hotkey("cmd+option+space", is_mac=False) == (frozenset({"meta", "alt"}), " ")

    def test_plus_key(self):
        assert parse_hotkey("mod++", is_mac=False) == (frozenset({"ctrl"}), "+")

    def test_unknown_modifier(self):
        with pytest.raises(ValueError):
            parse_hotkey("hyper+b", is_mac=False)


class TestIsKeyHotkey:

    def test_matches_exact_chord(self):
        is_bold = is_key_hotkey("mod+b", is_mac=False)
        assert is_bold(KeyEvent(key="b", ctrl=True))
        assert is_bold(KeyEvent(key="B", ctrl=True))
        assert not is_bold(KeyEvent(key="b"))
        assert not is_bold(KeyEvent(key="b", meta=True))
        assert not is_bold(KeyEvent(key="b", ctrl=True, shift=True))
        assert not is_bold(KeyEvent(key="i", ctrl=True))

    def test_mac(self):
        is_italic = is_key_hotkey("mod+i", is_mac=True)
        assert is_italic(KeyEvent(key="i", meta=True))
        assert not is_italic(KeyEvent(key="i", ctrl=True))

    def test_backtick(self):
        is_code = is_key_hotkey("mod+`", is_mac=False)
        assert is_code(KeyEvent(key="`", ctrl=True))
