# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import datetime
import enum
import typing

import msgspec

MODIFIER_CODES = {
    "ControlLeft": "ctrl",
    "ControlRight": "ctrl",
    "ShiftLeft": "shift",
    "ShiftRight": "shift",
    "AltLeft": "alt",
    "AltRight": "alt",
    "MetaLeft": "meta",
    "MetaRight": "meta",
}

# the order modifiers are spelled out in a combo
MODIFIER_ORDER = ("ctrl", "shift", "alt", "meta")


class KeyPress(enum.IntEnum):
    RELEASED = 0
    PRESSED = 1
    REPEATED = 2


class RawKeyEvent(msgspec.Struct, frozen=True):
    code: str
    press: KeyPress
    timestamp: datetime.timedelta = datetime.timedelta()

    @classmethod
    def pressed(cls, code: str, timestamp: datetime.timedelta = datetime.timedelta()):
        return cls(code=code, press=KeyPress.PRESSED, timestamp=timestamp)

    @classmethod
    def released(cls, code: str, timestamp: datetime.timedelta = datetime.timedelta()):
        return cls(code=code, press=KeyPress.RELEASED, timestamp=timestamp)

    @classmethod
    def repeated(cls, code: str, timestamp: datetime.timedelta = datetime.timedelta()):
        return cls(code=code, press=KeyPress.REPEATED, timestamp=timestamp)


class KeyEvent(msgspec.Struct, frozen=True):
    """A key-down as seen by the display, with the modifier state captured at dispatch time."""

    code: str
    ctrl: bool = False
    alt: bool = False
    shift: bool = False
    meta: bool = False
    repeat: bool = False
    timestamp: datetime.timedelta = datetime.timedelta()
    type: str = "keydown"

    @property
    def modifier(self) -> typing.Optional[str]:
        "The modifier this key itself is, if any."
        return MODIFIER_CODES.get(self.code)

    @property
    def is_modifier(self) -> bool:
        return self.code in MODIFIER_CODES

    def flag(self, modifier: str) -> bool:
        return getattr(self, modifier)

    def same_modifiers(self, other: KeyEvent) -> bool:
        return all(self.flag(m) == other.flag(m) for m in MODIFIER_ORDER)
