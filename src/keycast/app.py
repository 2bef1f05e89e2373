# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import argparse
import logging
import pathlib
import sys
import typing

import trio

from .commontypes import ConfigurationError
from .display import KeyDisplay
from .keystreams import make_keystream
from .settings import Settings

if typing.TYPE_CHECKING:
    from .recorded_keyboard import Recorder

logger = logging.getLogger(__name__)


async def run_overlay(settings: Settings, recorder_factory: typing.Optional[typing.Callable[..., Recorder]] = None):
    # tkinter is only needed when there is a window to show
    from .tkinter_overlay import TkOverlay

    overlay = TkOverlay()
    display = KeyDisplay(settings, overlay)
    overlay.on_toggle = display.toggle
    raw_source = overlay.keystream()
    recorder = None
    if recorder_factory is not None:
        recorder = recorder_factory(raw_source)
        raw_source = recorder.keystream()

    async with trio.open_nursery() as nursery:
        await nursery.start(overlay.run)
        async with make_keystream(raw_source) as keystream:
            await nursery.start(display.run, keystream)
            overlay.sync_showing(display.enabled.value)
            await overlay.closed.wait()
            display.turn_off()
            nursery.cancel_scope.cancel()
    logger.debug("goodbye")
    return recorder


def configure_logging(verbose: bool):
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO)


parser = argparse.ArgumentParser(prog="keycast")
parser.add_argument("settings", type=pathlib.Path)
parser.add_argument("--verbose", "-v", action="store_true")


def main(argv=sys.argv):
    """
    Args:
        argv (list): List of arguments

    Returns:
        int: A return code

    Shows the keystroke overlay until its window is closed.
    """
    parsed = parser.parse_args(argv[1:])
    configure_logging(parsed.verbose)
    try:
        settings = Settings.load_or_create(parsed.settings)
    except ConfigurationError as exc:
        parser.error(str(exc))
    trio.run(run_overlay, settings)
    return 0
