# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import abc
from contextlib import aclosing, asynccontextmanager
from typing import Any, AsyncIterable, cast

import trio

from .hwtypes import MODIFIER_CODES, KeyEvent, KeyPress, RawKeyEvent


class Section(abc.ABC):
    @abc.abstractmethod
    async def pump(self, source: trio.MemoryReceiveChannel[Any], sink: trio.MemorySendChannel[Any]): ...


# stage 1: track modifier keydown/up and snapshot the modifier flags onto each event
class ModifierTracking(Section):
    def __init__(self):
        self.momentary_state = {code: False for code in MODIFIER_CODES}

    def _flag(self, modifier: str):
        return any(down for code, down in self.momentary_state.items() if MODIFIER_CODES[code] == modifier)

    def _make_event(self, event: RawKeyEvent):
        return KeyEvent(
            code=event.code,
            ctrl=self._flag("ctrl"),
            alt=self._flag("alt"),
            shift=self._flag("shift"),
            meta=self._flag("meta"),
            repeat=event.press is KeyPress.REPEATED,
            timestamp=event.timestamp,
            type="keyup" if event.press is KeyPress.RELEASED else "keydown",
        )

    async def pump(self, source: trio.MemoryReceiveChannel[RawKeyEvent], sink: trio.MemorySendChannel[KeyEvent]):
        async with aclosing(source), aclosing(sink):
            async for event in source:
                if event.code in self.momentary_state:
                    self.momentary_state[event.code] = event.press is not KeyPress.RELEASED
                await sink.send(self._make_event(event))


# stage 1.5: drop key-ups
class OnlyPresses(Section):
    async def pump(self, source: trio.MemoryReceiveChannel[KeyEvent], sink: trio.MemorySendChannel[KeyEvent]):
        async with aclosing(source), aclosing(sink):
            async for event in source:
                if event.type == "keydown":
                    await sink.send(event)


@asynccontextmanager
async def pump_all(first_source: AsyncIterable[Any], *sections: Section):
    async with trio.open_nursery() as nursery:
        section_input = first_source
        for section in sections:
            section_send_channel, section_receive_channel = trio.open_memory_channel(0)
            nursery.start_soon(section.pump, section_input, section_send_channel)
            section_input = section_receive_channel
        yield section_input
        nursery.cancel_scope.cancel()


@asynccontextmanager
async def make_keystream(raw_event_source: AsyncIterable[RawKeyEvent]):
    sections = [
        ModifierTracking(),
        OnlyPresses(),
    ]

    async with pump_all(raw_event_source, *sections) as keystream:
        yield cast(trio.MemoryReceiveChannel[KeyEvent], keystream)
