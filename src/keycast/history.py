# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import collections
import collections.abc
import logging
import typing

import attr

from .commontypes import ConfigurationError
from .hwtypes import KeyEvent

logger = logging.getLogger(__name__)


@attr.define(kw_only=True, eq=False)
class Badge:
    display_text: str
    last_event: KeyEvent
    repeat_count: int = 1
    chase_annotation: typing.Optional[int] = None

    def bump_chase(self):
        # a badge with no annotation counts as one occurrence
        self.chase_annotation = (self.chase_annotation or 1) + 1

    def spend_chase(self):
        if self.chase_annotation is None:
            return
        remaining = self.chase_annotation - 1
        self.chase_annotation = remaining if remaining > 1 else None


class BadgeHistory(collections.abc.Sized, collections.abc.Iterable):
    """The badges currently on screen, oldest first.

    Badges are only ever appended, changed in place, evicted from the front, or popped from the back.
    """

    max_length: int
    _badges: collections.deque[Badge]

    def __init__(self, max_length: int):
        self._badges = collections.deque()
        self.change_max_length(max_length)

    def __len__(self):
        return len(self._badges)

    def __iter__(self):
        return iter(tuple(self._badges))

    def __getitem__(self, index: int) -> Badge:
        return self._badges[index]

    @property
    def last(self) -> typing.Optional[Badge]:
        if not self._badges:
            return None
        return self._badges[-1]

    @property
    def second_last(self) -> typing.Optional[Badge]:
        if len(self._badges) <= 1:
            return None
        return self._badges[-2]

    def change_max_length(self, max_length: int):
        if not isinstance(max_length, int) or isinstance(max_length, bool) or max_length <= 0:
            raise ConfigurationError(f"max_keys must be a positive integer, not {max_length!r}")
        self.max_length = max_length
        self.evict_oldest_if_overflow(max_length)

    def append(self, badge: Badge):
        self._badges.append(badge)
        self.evict_oldest_if_overflow(self.max_length)

    def mutate_last(self, fn: collections.abc.Callable[[Badge], None]):
        if not self._badges:
            return
        fn(self._badges[-1])

    def pop_last(self) -> typing.Optional[Badge]:
        if not self._badges:
            return None
        return self._badges.pop()

    def evict_oldest_if_overflow(self, max_keys: int):
        while len(self._badges) > max_keys:
            evicted = self._badges.popleft()
            logger.debug("evicting %r", evicted.display_text)

    def clear(self):
        self._badges.clear()
