# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import collections.abc
import logging
import typing

import trio

from .commontypes import NotInContextError

logger = logging.getLogger(__name__)


class IdleClearTimer:
    """A single debounced timer. Rescheduling always replaces the pending fire; it never queues another."""

    _scope: typing.Optional[trio.CancelScope]

    def __init__(self, on_fire: collections.abc.Callable[[], None], nursery: typing.Optional[trio.Nursery] = None):
        self.on_fire = on_fire
        self.nursery = nursery
        self._scope = None

    @property
    def pending(self) -> bool:
        return self._scope is not None

    def check_running(self):
        if self.nursery is None:
            raise NotInContextError()

    def reset(self, delay_ms: int):
        self.check_running()
        self.cancel()
        scope = trio.CancelScope()
        self._scope = scope
        self.nursery.start_soon(self._fire_after, scope, delay_ms / 1000)

    def cancel(self):
        if self._scope is not None:
            self._scope.cancel()
            self._scope = None

    async def _fire_after(self, scope: trio.CancelScope, delay: float):
        with scope:
            await trio.sleep(delay)
            if self._scope is not scope:
                return
            self._scope = None
            logger.debug("idle for %ss, clearing", delay)
            self.on_fire()
