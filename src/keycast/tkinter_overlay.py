# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import collections
import collections.abc
import contextlib
import datetime
import logging
import re
import tkinter
import tkinter.ttk
import typing

import _tkinter
import trio
import trio_util

from .hwtypes import KeyPress, RawKeyEvent
from .rendering import RenderedBadge

logger = logging.getLogger(__name__)

FADED_FOREGROUND = "#999999"
CURRENT_FOREGROUND = "#333333"
BADGE_BACKGROUND = "#f7f7f7"
BADGE_FONT = ("Helvetica", 24, "bold")
ANNOTATION_FONT = ("Helvetica", 10)

MISC_KEYS = {
    "space": "Space",
    "BackSpace": "Backspace",
    "Return": "Enter",
    "Tab": "Tab",
    "ISO_Left_Tab": "Tab",
    "Escape": "Escape",
    "Delete": "Delete",
    "Insert": "Insert",
    "Home": "Home",
    "End": "End",
    "Prior": "PageUp",
    "Next": "PageDown",
    "minus": "Minus",
    "underscore": "Minus",
    "equal": "Equal",
    "plus": "Equal",
    "quoteleft": "Backquote",
    "grave": "Backquote",
    "asciitilde": "Backquote",
    "exclam": "Digit1",
    "at": "Digit2",
    "numbersign": "Digit3",
    "dollar": "Digit4",
    "percent": "Digit5",
    "asciicircum": "Digit6",
    "ampersand": "Digit7",
    "asterisk": "Digit8",
    "parenleft": "Digit9",
    "parenright": "Digit0",
    "bracketleft": "BracketLeft",
    "bracketright": "BracketRight",
    "braceleft": "BracketLeft",
    "braceright": "BracketRight",
    "backslash": "Backslash",
    "bar": "Backslash",
    "semicolon": "Semicolon",
    "colon": "Semicolon",
    "apostrophe": "Quote",
    "quoteright": "Quote",
    "quotedbl": "Quote",
    "comma": "Comma",
    "less": "Comma",
    "period": "Period",
    "greater": "Period",
    "slash": "Slash",
    "question": "Slash",
    "Left": "ArrowLeft",
    "Right": "ArrowRight",
    "Up": "ArrowUp",
    "Down": "ArrowDown",
    "KP_Add": "NumpadAdd",
    "KP_Subtract": "NumpadSubtract",
    "KP_Multiply": "NumpadMultiply",
    "KP_Divide": "NumpadDivide",
    "KP_Decimal": "NumpadDecimal",
    "KP_Enter": "NumpadEnter",
    "KP_Equal": "NumpadEqual",
}

MODIFIER_KEYS = {
    "Control_L": "ControlLeft",
    "Control_R": "ControlRight",
    "Shift_L": "ShiftLeft",
    "Shift_R": "ShiftRight",
    "Alt_L": "AltLeft",
    "Alt_R": "AltRight",
    "Option_L": "AltLeft",
    "Option_R": "AltRight",
    "Meta_L": "MetaLeft",
    "Meta_R": "MetaRight",
    "Super_L": "MetaLeft",
    "Super_R": "MetaRight",
}

FUNCTION_KEY = re.compile(r"^F([1-9]|1[0-9]|2[0-4])$")
KEYPAD_DIGIT = re.compile(r"^KP_([0-9])$")


class TkKeyState:
    """Turns Tk key events into raw key events.

    Tk doesn't say whether a KeyPress is an auto-repeat, so a press of a key that is already down counts as one.
    """

    def __init__(self):
        self.down = set()

    def map_event(self, event, timestamp: datetime.timedelta = datetime.timedelta()) -> list[RawKeyEvent]:
        code = map_keysym(event)
        if code is None:
            return []
        is_press = event.type.name == "KeyPress"

        if code == "CapsLock":
            # Capslock produces only a KeyPress when enabled, and only a KeyRelease when disabled.
            return [RawKeyEvent.pressed(code, timestamp), RawKeyEvent.released(code, timestamp)]

        if not is_press:
            self.down.discard(code)
            return [RawKeyEvent.released(code, timestamp)]
        if code in self.down:
            return [RawKeyEvent.repeated(code, timestamp)]
        self.down.add(code)
        return [RawKeyEvent.pressed(code, timestamp)]


def map_keysym(event) -> typing.Optional[str]:
    # somehow this happens when switching windows sometimes?
    if event.keycode == 0:
        return None
    keysym = event.keysym
    if re.match("^[a-zA-Z]$", keysym):
        return f"Key{keysym.upper()}"
    if re.match("^[0-9]$", keysym):
        return f"Digit{keysym}"
    if keysym in MISC_KEYS:
        return MISC_KEYS[keysym]
    if keysym in MODIFIER_KEYS:
        return MODIFIER_KEYS[keysym]
    if keysym == "Caps_Lock":
        return "CapsLock"
    if FUNCTION_KEY.match(keysym):
        return keysym
    if match := KEYPAD_DIGIT.match(keysym):
        return f"Numpad{match.group(1)}"
    logger.debug("Unhandled key event %r", event)
    return None


class TkOverlay(contextlib.AbstractContextManager):
    """A small always-on-top window that draws the badges and collects key events typed into it."""

    def __init__(self, on_toggle: typing.Optional[collections.abc.Callable[[], bool]] = None):
        self.root = None
        self.container = None
        self.on_toggle = on_toggle
        self.key_state = TkKeyState()
        self.keyqueue = collections.deque(maxlen=50)
        self.showing = trio_util.AsyncBool(value=False)
        self.closed = trio.Event()

    def key_handler(self, event):
        mapped = self.key_state.map_event(event, datetime.timedelta(seconds=trio.current_time()))
        self.keyqueue.extend(mapped)

    def toggle_handler(self):
        if self.on_toggle is not None:
            self.showing.value = self.on_toggle()

    def __enter__(self):
        self.root = tkinter.Tk()
        self.root.title("keycast")
        self.root.attributes("-topmost", True)
        self.root.protocol("WM_DELETE_WINDOW", self.closed.set)
        self.root.bind("<KeyPress>", self.key_handler)
        self.root.bind("<KeyRelease>", self.key_handler)
        self.container = tkinter.Frame(self.root, padx=10, pady=10)
        self.container.pack()
        self.showing_variable = tkinter.IntVar(value=int(self.showing.value))
        self.toggle_checkbox = tkinter.ttk.Checkbutton(
            self.root,
            text="Show keys",
            command=self.toggle_handler,
            variable=self.showing_variable,
            takefocus=False,
        )
        self.toggle_checkbox.pack(side="left")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.root.destroy()
        self.root = None
        self.container = None

    def render(self, badges: list[RenderedBadge]) -> None:
        if self.container is None:
            return
        for child in self.container.winfo_children():
            child.destroy()
        for index, badge in enumerate(badges):
            foreground = CURRENT_FOREGROUND if index == len(badges) - 1 else FADED_FOREGROUND
            frame = tkinter.Frame(self.container, background=BADGE_BACKGROUND, borderwidth=2, relief="raised")
            frame.pack(side="left", padx=8)
            tkinter.Label(frame, text=badge.text, font=BADGE_FONT, foreground=foreground, background=BADGE_BACKGROUND).pack(
                side="left", padx=16, pady=8
            )
            if badge.annotation is not None:
                tkinter.Label(
                    frame, text=badge.annotation, font=ANNOTATION_FONT, foreground=foreground, background=BADGE_BACKGROUND
                ).pack(side="top", anchor="ne")

    def sync_showing(self, showing: bool):
        self.showing.value = showing
        if self.root is not None:
            self.showing_variable.set(int(showing))

    async def run(self, *, task_status=trio.TASK_STATUS_IGNORED):
        with self:
            task_status.started()
            while not self.closed.is_set():
                # do all pending things right away, but let other tasks run too
                while self.root.tk.dooneevent(_tkinter.DONT_WAIT):
                    await trio.sleep(0)

                # sleep just a little bit
                await trio.sleep(1 / 60)

    async def keystream(self) -> collections.abc.AsyncIterator[RawKeyEvent]:
        while not self.closed.is_set():
            try:
                yield self.keyqueue.popleft()
                await trio.sleep(0)
            except IndexError:
                # No key events, sleep a bit longer.
                await trio.sleep(1 / 60)
