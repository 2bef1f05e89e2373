# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import enum
import platform
import types
import typing

COMMON_GLYPHS = {
    "Escape": "⎋",
    "Minus": "-",
    "Equal": "=",
    "Backspace": "⌫",
    "Tab": "⇄",
    "BracketLeft": "[",
    "BracketRight": "]",
    "Enter": "⏎",
    "ControlLeft": "^",
    "ControlRight": "^",
    "Semicolon": ";",
    "Quote": "'",
    "Backquote": "`",
    "ShiftLeft": "⇧",
    "ShiftRight": "⇧",
    "Backslash": "\\",
    "Comma": ",",
    "Period": ".",
    "Slash": "/",
    "NumpadMultiply": "*",
    "AltLeft": "Alt",
    "AltRight": "Alt",
    "CapsLock": "⇪",
    "NumpadSubtract": "-",
    "NumpadAdd": "+",
    "NumpadDecimal": ".",
    "IntlBackslash": "|",
    "NumpadEqual": "=",
    "NumpadComma": ",",
    "NumpadEnter": "⏎",
    "NumpadDivide": "/",
    "ArrowUp": "↑",
    "ArrowLeft": "←",
    "ArrowRight": "→",
    "ArrowDown": "↓",
    "MetaLeft": "Meta",
    "MetaRight": "Meta",
}

# strip these, in this order, from codes with no glyph of their own
FALLBACK_PREFIXES = ("Key", "Digit", "Numpad")

# first physical key of each modifier; its glyph spells the modifier in a combo prefix
MODIFIER_GLYPH_CODES = {
    "ctrl": "ControlLeft",
    "shift": "ShiftLeft",
    "alt": "AltLeft",
    "meta": "MetaLeft",
}


@enum.unique
class OSFamily(enum.Enum):
    WINDOWS = "windows"
    MACOS = "macos"
    LINUX = "linux"
    GENERIC = "generic"


def _overrides(alt: str, meta: str):
    return {"AltLeft": alt, "AltRight": alt, "MetaLeft": meta, "MetaRight": meta}


GLYPH_TABLES: dict[OSFamily, typing.Mapping[str, str]] = {
    OSFamily.WINDOWS: types.MappingProxyType(COMMON_GLYPHS | _overrides(alt="⎇", meta="⊞")),
    OSFamily.MACOS: types.MappingProxyType(COMMON_GLYPHS | _overrides(alt="⌥", meta="⌘")),
    OSFamily.LINUX: types.MappingProxyType(COMMON_GLYPHS | _overrides(alt="⎇", meta="❖")),
    OSFamily.GENERIC: types.MappingProxyType(dict(COMMON_GLYPHS)),
}


def detect_os_family(platform_identifier: str) -> OSFamily:
    ident = platform_identifier.lower()
    if "windows" in ident:
        return OSFamily.WINDOWS
    if "mac" in ident:
        return OSFamily.MACOS
    if "linux" in ident and "android" not in ident:
        return OSFamily.LINUX
    return OSFamily.GENERIC


def resolve(code: str, os_family: OSFamily, upper_letter: bool = True) -> str:
    """Turn a physical key code into the text shown for it.

    Never fails: a code with no glyph and no known prefix is shown as-is. With upper_letter off,
    single letters recovered from a ``Key`` code are shown in lower case.
    """
    table = GLYPH_TABLES[os_family]
    if code in table:
        return table[code]
    for prefix in FALLBACK_PREFIXES:
        if code.startswith(prefix):
            token = code.removeprefix(prefix)
            if prefix == "Key" and not upper_letter and len(token) == 1:
                token = token.lower()
            return token
    return code


class PlatformGlyphTable:
    "Glyph lookups for one OS family, detected once when the table is built."

    os_family: OSFamily

    def __init__(self, platform_identifier: typing.Optional[str] = None, *, upper_letter: bool = True):
        if platform_identifier is None:
            platform_identifier = platform.platform()
        self.os_family = detect_os_family(platform_identifier)
        self.upper_letter = upper_letter

    @classmethod
    def for_family(cls, os_family: OSFamily, *, upper_letter: bool = True):
        # the family names classify as themselves
        return cls(os_family.value, upper_letter=upper_letter)

    def resolve(self, code: str) -> str:
        return resolve(code, self.os_family, upper_letter=self.upper_letter)

    def modifier_glyph(self, modifier: str) -> str:
        return self.resolve(MODIFIER_GLYPH_CODES[modifier])
