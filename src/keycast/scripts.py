# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import argparse
import collections.abc
import pathlib

import trio

from .app import configure_logging, run_overlay
from .commontypes import ConfigurationError
from .display import KeyDisplay
from .keystreams import make_keystream
from .recorded_keyboard import Recorder, Replayer
from .rendering import PrintSink
from .settings import Settings


async def replay(replayer: Replayer, settings: Settings, print_fn: collections.abc.Callable[[str], None] = print):
    display = KeyDisplay(settings, PrintSink(print_fn))
    async with make_keystream(replayer.keystream()) as keystream:
        await display.run(keystream)


replay_parser = argparse.ArgumentParser(prog="keycast-replay")
replay_parser.add_argument("recording", type=pathlib.Path)
replay_parser.add_argument("--settings", type=pathlib.Path)
replay_parser.add_argument("--max-keys", type=int)
replay_parser.add_argument("--idle-delay-ms", type=int)
replay_parser.add_argument("--speed", type=float, default=1.0)
replay_parser.add_argument("--verbose", "-v", action="store_true")


def replay_settings(args: argparse.Namespace) -> Settings:
    settings = Settings.load(args.settings) if args.settings is not None else Settings()
    overrides = {}
    if args.max_keys is not None:
        overrides["max_keys"] = args.max_keys
    if args.idle_delay_ms is not None:
        overrides["idle_delay_ms"] = args.idle_delay_ms
    # replays never write back to the settings file
    overrides["remember"] = False
    overrides["default_on"] = True
    return settings.replacing(**overrides)


def replay_cli():
    args = replay_parser.parse_args()
    configure_logging(args.verbose)
    try:
        settings = replay_settings(args)
        replayer = Replayer.load(args.recording, speed=args.speed)
    except ConfigurationError as exc:
        replay_parser.error(str(exc))
    trio.run(replay, replayer, settings)


record_parser = argparse.ArgumentParser(prog="keycast-record")
record_parser.add_argument("settings", type=pathlib.Path)
record_parser.add_argument("output", type=pathlib.Path)
record_parser.add_argument("--verbose", "-v", action="store_true")


def record_cli():
    args = record_parser.parse_args()
    configure_logging(args.verbose)
    try:
        settings = Settings.load_or_create(args.settings)
    except ConfigurationError as exc:
        record_parser.error(str(exc))
    recorder = trio.run(run_overlay, settings, Recorder)
    recorder.save_events(args.output)
