# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import collections.abc
import typing

import msgspec

if typing.TYPE_CHECKING:
    from .history import Badge


class RenderedBadge(msgspec.Struct, frozen=True):
    text: str
    repeat_label: typing.Optional[str] = None
    chase_label: typing.Optional[str] = None

    @property
    def annotation(self) -> typing.Optional[str]:
        if self.repeat_label is not None and self.chase_label is not None:
            return f"{self.repeat_label} {self.chase_label}"
        return self.repeat_label or self.chase_label


class RenderSink(typing.Protocol):
    def render(self, badges: list[RenderedBadge]) -> None: ...


def render_badge(badge: Badge, show_repeat_count: bool) -> RenderedBadge:
    repeat_label = None
    if show_repeat_count and badge.repeat_count > 1:
        repeat_label = f"× {badge.repeat_count}"
    chase_label = None if badge.chase_annotation is None else str(badge.chase_annotation)
    return RenderedBadge(text=badge.display_text, repeat_label=repeat_label, chase_label=chase_label)


def render_badges(badges: collections.abc.Iterable[Badge], show_repeat_count: bool) -> list[RenderedBadge]:
    return [render_badge(badge, show_repeat_count) for badge in badges]


def format_line(badges: collections.abc.Sequence[RenderedBadge]) -> str:
    parts = []
    for badge in badges:
        part = f"[{badge.text}]"
        if badge.chase_label is not None:
            part += f"^{badge.chase_label}"
        if badge.repeat_label is not None:
            part += f" {badge.repeat_label}"
        parts.append(part)
    return "  ".join(parts)


class ListSink:
    "Keeps every snapshot it is given. Handy for tests and for printing replays."

    def __init__(self):
        self.snapshots: list[list[RenderedBadge]] = []

    def render(self, badges: list[RenderedBadge]) -> None:
        self.snapshots.append(badges)

    @property
    def current(self) -> list[RenderedBadge]:
        if not self.snapshots:
            return []
        return self.snapshots[-1]


class PrintSink:
    def __init__(self, print_fn: collections.abc.Callable[[str], None] = print):
        self.print_fn = print_fn

    def render(self, badges: list[RenderedBadge]) -> None:
        self.print_fn(format_line(badges))
