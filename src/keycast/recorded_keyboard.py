# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import collections.abc
import datetime
import pathlib
import typing

import msgspec
import trio

from .commontypes import ConfigurationError
from .hwtypes import RawKeyEvent


class RecordedEvent(msgspec.Struct, array_like=True):
    offset: float
    event: RawKeyEvent


Recording = list[RecordedEvent]


class Recorder:
    def __init__(self, wrapped: collections.abc.AsyncIterable[RawKeyEvent]):
        self.wrapped = wrapped
        self.zero_time = None
        self.events: Recording = []

    def save_events(self, path: pathlib.Path):
        path.write_bytes(msgspec.json.encode(self.events))

    async def keystream(self) -> collections.abc.AsyncIterator[RawKeyEvent]:
        event: RawKeyEvent
        async for event in self.wrapped:
            now = trio.current_time()
            if self.zero_time is None:
                self.zero_time = now
            self.events.append(RecordedEvent(offset=now - self.zero_time, event=event))
            yield event


class Replayer:
    def __init__(self, events: Recording, speed: float = 1.0):
        self.events = events
        self.speed = speed

    @classmethod
    def load(cls, path: pathlib.Path, speed: float = 1.0):
        try:
            events = msgspec.json.decode(path.read_bytes(), type=Recording)
        except msgspec.DecodeError as exc:
            raise ConfigurationError(f"{path} is not a key recording: {exc}") from exc
        return cls(events, speed=speed)

    @classmethod
    def from_codes(cls, codes: typing.Iterable[str], interval: float = 0.1):
        "A recording that taps each key once, one after another."
        events = []
        offset = 0.0
        for code in codes:
            stamp = datetime.timedelta(seconds=offset)
            events.append(RecordedEvent(offset=offset, event=RawKeyEvent.pressed(code, stamp)))
            events.append(RecordedEvent(offset=offset, event=RawKeyEvent.released(code, stamp)))
            offset += interval
        return cls(events)

    async def keystream(self) -> collections.abc.AsyncIterator[RawKeyEvent]:
        start = trio.current_time()
        for recorded in self.events:
            await trio.sleep_until(start + recorded.offset / self.speed)
            yield recorded.event
