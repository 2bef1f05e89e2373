# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import logging
import typing
from typing import AsyncIterable, Optional

import trio
import trio_util

from .aggregator import Classification, ComboAggregator
from .glyphs import PlatformGlyphTable
from .history import BadgeHistory
from .idle import IdleClearTimer
from .rendering import RenderedBadge, RenderSink, render_badges

if typing.TYPE_CHECKING:
    from .hwtypes import KeyEvent
    from .settings import Settings

logger = logging.getLogger(__name__)


class KeyDisplay:
    """The overlay element: one badge history, the aggregator feeding it, and its idle timer.

    Key-downs are only accepted while the display is on. Every change is pushed to the render sink as a full,
    ordered snapshot, so anything evicted or cleared simply stops being drawn.
    """

    enabled: trio_util.AsyncBool
    visible: trio_util.AsyncValue[tuple[RenderedBadge, ...]]

    def __init__(self, settings: Settings, sink: RenderSink, platform_identifier: Optional[str] = None):
        self.settings = settings
        self.sink = sink
        self.glyphs = PlatformGlyphTable(platform_identifier, upper_letter=settings.upper_letter)
        self.history = BadgeHistory(settings.max_keys)
        self.timer = IdleClearTimer(self._idle_clear)
        self.aggregator = ComboAggregator(self.history, self.glyphs, settings, self.timer)
        self.enabled = trio_util.AsyncBool(False)
        self.visible = trio_util.AsyncValue(tuple())
        self._nursery = None

    async def run(self, key_events: AsyncIterable[KeyEvent], *, task_status=trio.TASK_STATUS_IGNORED):
        async with trio.open_nursery() as nursery:
            self._nursery = nursery
            self.timer.nursery = nursery
            if self.settings.default_on:
                self.turn_on()
            task_status.started()
            async for event in key_events:
                self.handle_key_down(event)
                await trio.lowlevel.checkpoint()
        self.timer.nursery = None
        self._nursery = None
        logger.debug("key source exhausted")

    def handle_key_down(self, event: KeyEvent) -> Optional[Classification]:
        if not self.enabled.value:
            return None
        result = self.aggregator.on_key_down(event)
        self._publish()
        return result

    def turn_on(self):
        self.timer.cancel()
        self.history.clear()
        self.enabled.value = True
        logger.info("key display on")
        self._publish()

    def turn_off(self):
        self.timer.cancel()
        self.history.clear()
        self.enabled.value = False
        logger.info("key display off")
        self._publish()

    def toggle(self) -> bool:
        if self.enabled.value:
            self.turn_off()
        else:
            self.turn_on()
        if self.settings.remember:
            self.settings.default_on = self.enabled.value
            try:
                self.settings.save()
            except OSError:
                logger.warning("Unable to remember the display state", exc_info=True)
        return self.enabled.value

    def set_option(self, name: str, value: typing.Any):
        """Change a display option while running.

        Invalid values raise ConfigurationError and the previous value stays in effect.
        """
        self.settings.set_option(name, value)
        self.aggregator.update_settings(self.settings)
        self._publish()

    def _idle_clear(self):
        self.history.clear()
        self._publish()

    def _publish(self):
        snapshot = render_badges(self.history, self.settings.show_repeat_count)
        self.visible.value = tuple(snapshot)
        self.sink.render(snapshot)
