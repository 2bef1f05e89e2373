# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import datetime
from types import SimpleNamespace

import pytest

pytest.importorskip("tkinter")

from keycast.hwtypes import RawKeyEvent  # noqa: E402
from keycast.tkinter_overlay import TkKeyState, map_keysym  # noqa: E402


def tk_event(keysym: str, pressed: bool = True, keycode: int = 38):
    return SimpleNamespace(
        keysym=keysym,
        keycode=keycode,
        type=SimpleNamespace(name="KeyPress" if pressed else "KeyRelease"),
    )


@pytest.mark.parametrize(
    "keysym,expected",
    (
        ("a", "KeyA"),
        ("Q", "KeyQ"),
        ("7", "Digit7"),
        ("exclam", "Digit1"),
        ("space", "Space"),
        ("Return", "Enter"),
        ("Prior", "PageUp"),
        ("Left", "ArrowLeft"),
        ("Control_R", "ControlRight"),
        ("Super_L", "MetaLeft"),
        ("Option_L", "AltLeft"),
        ("Caps_Lock", "CapsLock"),
        ("F12", "F12"),
        ("F24", "F24"),
        ("KP_4", "Numpad4"),
        ("KP_Add", "NumpadAdd"),
        ("F25", None),
        ("XF86AudioPlay", None),
    ),
)
def test_map_keysym(keysym: str, expected):
    assert map_keysym(tk_event(keysym)) == expected


def test_zero_keycode_is_ignored():
    assert map_keysym(tk_event("a", keycode=0)) is None


def test_key_state():
    state = TkKeyState()
    stamp = datetime.timedelta(seconds=2)
    assert state.map_event(tk_event("a"), stamp) == [RawKeyEvent.pressed("KeyA", stamp)]
    assert state.map_event(tk_event("a"), stamp) == [RawKeyEvent.repeated("KeyA", stamp)]
    assert state.map_event(tk_event("a", pressed=False), stamp) == [RawKeyEvent.released("KeyA", stamp)]
    assert state.map_event(tk_event("a")) == [RawKeyEvent.pressed("KeyA")]
    assert state.map_event(tk_event("XF86AudioPlay")) == []


def test_caps_lock_taps():
    state = TkKeyState()
    expected = [RawKeyEvent.pressed("CapsLock"), RawKeyEvent.released("CapsLock")]
    assert state.map_event(tk_event("Caps_Lock")) == expected
    assert state.map_event(tk_event("Caps_Lock", pressed=False)) == expected
