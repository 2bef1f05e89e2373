# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import enum
import logging
import typing

from .history import Badge, BadgeHistory
from .hwtypes import MODIFIER_ORDER, KeyEvent

if typing.TYPE_CHECKING:
    from .glyphs import PlatformGlyphTable
    from .idle import IdleClearTimer
    from .settings import Settings

logger = logging.getLogger(__name__)

CONNECTOR = " + "


class Classification(enum.Enum):
    NEW_COMBO = enum.auto()
    REPEAT = enum.auto()
    CHORD = enum.auto()
    CHASE_SPENT = enum.auto()
    CHASE_COLLAPSED = enum.auto()


def same_modifier_context(last: KeyEvent, current: KeyEvent) -> bool:
    "Compare modifier flags, ignoring the flag of the modifier being pressed right now."
    own = current.modifier
    return all(last.flag(m) == current.flag(m) for m in MODIFIER_ORDER if m != own)


def is_repeat(last: KeyEvent, current: KeyEvent) -> bool:
    return last.code == current.code and last.same_modifiers(current)


class ComboAggregator:
    """Folds key-downs into the badge history.

    Each event is matched against the newest badge (and sometimes the one before it):
    a held key bumps the newest badge's repeat count; a modifier pressed while still chording extends the newest
    badge's text; two identical chords in a row collapse into one badge with a chase count; anything else starts
    a new badge.
    """

    def __init__(
        self,
        history: BadgeHistory,
        glyphs: PlatformGlyphTable,
        settings: Settings,
        timer: typing.Optional[IdleClearTimer] = None,
    ):
        self.history = history
        self.glyphs = glyphs
        self.settings = settings
        self.timer = timer

    def update_settings(self, settings: Settings):
        self.settings = settings
        self.glyphs.upper_letter = settings.upper_letter
        self.history.change_max_length(settings.max_keys)

    def modifier_prefix(self, event: KeyEvent) -> str:
        if not self.settings.merge_modifier_keys:
            return ""
        own = event.modifier
        return "".join(self.glyphs.modifier_glyph(m) + CONNECTOR for m in MODIFIER_ORDER if event.flag(m) and m != own)

    def on_key_down(self, event: KeyEvent) -> Classification:
        # refuse before touching the history, not halfway through
        if self.timer is not None:
            self.timer.check_running()
        key_token = self.glyphs.resolve(event.code or "")
        candidate = self.modifier_prefix(event) + key_token
        result = self._classify(event, key_token, candidate)
        logger.debug("%s -> %s", event.code, result.name)

        self.history.evict_oldest_if_overflow(self.settings.max_keys)
        if self.timer is not None:
            self.timer.reset(self.settings.idle_delay_ms)
        return result

    def _new_combo(self, event: KeyEvent, candidate: str):
        self.history.append(Badge(display_text=candidate, last_event=event))
        return Classification.NEW_COMBO

    def _classify(self, event: KeyEvent, key_token: str, candidate: str) -> Classification:
        last = self.history.last
        if last is None:
            return self._new_combo(event, candidate)

        if is_repeat(last.last_event, event):
            if not self.settings.merge_repeat_keys:
                return self._new_combo(event, candidate)
            last.repeat_count += 1
            last.last_event = event
            return Classification.REPEAT

        if not (self.settings.merge_modifier_keys and same_modifier_context(last.last_event, event)):
            return self._new_combo(event, candidate)

        # a finished combo can't be extended after the fact
        if not last.last_event.is_modifier:
            return self._new_combo(event, candidate)

        if last.chase_annotation is not None:
            last.spend_chase()
            self._new_combo(event, candidate)
            return Classification.CHASE_SPENT

        merged_text = last.display_text + CONNECTOR + key_token
        second_last = self.history.second_last
        if second_last is not None and second_last.display_text == merged_text:
            second_last.bump_chase()
            second_last.last_event = event
            self.history.pop_last()
            return Classification.CHASE_COLLAPSED

        def extend(badge: Badge):
            badge.display_text = merged_text
            badge.last_event = event

        self.history.mutate_last(extend)
        return Classification.CHORD
