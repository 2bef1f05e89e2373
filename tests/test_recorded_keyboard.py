# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import datetime

import pytest
import trio
import trio.testing

from keycast.commontypes import ConfigurationError
from keycast.hwtypes import KeyPress, RawKeyEvent
from keycast.recorded_keyboard import Recorder, RecordedEvent, Replayer
from keycast.scripts import replay, replay_parser, replay_settings
from keycast.settings import Settings


async def slow_source():
    yield RawKeyEvent.pressed("ShiftLeft")
    await trio.sleep(0.5)
    yield RawKeyEvent.pressed("KeyA")
    yield RawKeyEvent.released("KeyA")
    await trio.sleep(1)
    yield RawKeyEvent.released("ShiftLeft")


async def test_record_and_replay(tmp_path, autojump_clock: trio.testing.MockClock):
    recorder = Recorder(slow_source())
    recorded = [event async for event in recorder.keystream()]
    assert [e.offset for e in recorder.events] == pytest.approx([0, 0.5, 0.5, 1.5])

    path = tmp_path / "keys.json"
    recorder.save_events(path)
    replayer = Replayer.load(path, speed=2.0)
    assert replayer.events == recorder.events

    started = trio.current_time()
    replayed = [event async for event in replayer.keystream()]
    assert replayed == recorded
    assert trio.current_time() - started == pytest.approx(0.75)


@pytest.mark.parametrize("contents", ("", "{}", '[[0.0, {"code": "KeyA"}]]', '[["soon", {"code": "KeyA", "press": 1}]]'))
def test_load_rejects_bad_recordings(tmp_path, contents: str):
    path = tmp_path / "keys.json"
    path.write_text(contents)
    with pytest.raises(ConfigurationError):
        Replayer.load(path)


def test_from_codes():
    replayer = Replayer.from_codes(["KeyA", "KeyB"], interval=0.25)
    assert replayer.events == [
        RecordedEvent(offset=0.0, event=RawKeyEvent.pressed("KeyA")),
        RecordedEvent(offset=0.0, event=RawKeyEvent.released("KeyA")),
        RecordedEvent(offset=0.25, event=RawKeyEvent.pressed("KeyB", datetime.timedelta(seconds=0.25))),
        RecordedEvent(offset=0.25, event=RawKeyEvent.released("KeyB", datetime.timedelta(seconds=0.25))),
    ]
    assert replayer.events[2].event.press is KeyPress.PRESSED


async def test_replay_prints_each_snapshot(autojump_clock: trio.testing.MockClock):
    lines = []
    settings = Settings.for_test().replacing(max_keys=3)
    started = trio.current_time()
    await replay(Replayer.from_codes(["KeyA", "KeyB", "KeyC", "KeyD"]), settings, lines.append)
    assert lines == [
        "",
        "[A]",
        "[A]  [B]",
        "[A]  [B]  [C]",
        "[B]  [C]  [D]",
        "",
    ]
    # the last key went down at 0.3s and the display went idle five seconds later
    assert trio.current_time() - started == pytest.approx(5.3)


async def test_replay_chords(autojump_clock: trio.testing.MockClock):
    lines = []
    events = [
        RecordedEvent(offset=0.0, event=RawKeyEvent.pressed("ControlLeft")),
        RecordedEvent(offset=0.1, event=RawKeyEvent.pressed("KeyC")),
        RecordedEvent(offset=0.2, event=RawKeyEvent.released("KeyC")),
        RecordedEvent(offset=0.3, event=RawKeyEvent.released("ControlLeft")),
        RecordedEvent(offset=0.4, event=RawKeyEvent.pressed("KeyX")),
    ]
    await replay(Replayer(events), Settings.for_test(), lines.append)
    assert lines[1:] == ["[^]", "[^ + C]", "[^ + C]  [X]", ""]


def test_replay_settings_never_remember(tmp_path):
    path = tmp_path / "settings.json"
    stored = Settings.load_or_create(path)
    stored.set_option("default_on", False)
    stored.save()

    args = replay_parser.parse_args(["keys.json", "--settings", str(path), "--max-keys", "2"])
    settings = replay_settings(args)
    assert settings.max_keys == 2
    assert settings.default_on
    assert not settings.remember

    args = replay_parser.parse_args(["keys.json", "--idle-delay-ms", "0"])
    with pytest.raises(ConfigurationError):
        replay_settings(args)
