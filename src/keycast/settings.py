# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import dataclasses
import json
import pathlib
import typing

import cattrs

from .commontypes import ConfigurationError

DEFAULT_MAX_KEYS = 5
DEFAULT_IDLE_DELAY_MS = 5_000

POSITIVE_OPTIONS = frozenset({"max_keys", "idle_delay_ms"})
FLAG_OPTIONS = frozenset(
    {
        "merge_repeat_keys",
        "merge_modifier_keys",
        "show_repeat_count",
        "upper_letter",
        "default_on",
        "remember",
    }
)


def check_option(name: str, value: typing.Any):
    if name in POSITIVE_OPTIONS:
        if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
            raise ConfigurationError(f"{name} must be a positive integer, not {value!r}")
    elif name in FLAG_OPTIONS:
        if not isinstance(value, bool):
            raise ConfigurationError(f"{name} must be true or false, not {value!r}")
    else:
        raise ConfigurationError(f"Unknown option {name}")


settings_converter = cattrs.Converter()
settings_converter.register_unstructure_hook(pathlib.Path, str)
settings_converter.register_structure_hook(pathlib.Path, lambda v, _: pathlib.Path(v))


def structure_exact(val: typing.Any, type_: type):
    # int("3") and bool("false") would both succeed, so nothing is converted
    if type(val) is not type_:
        raise ConfigurationError(f"Expected {type_.__name__}, not {val!r}")
    return val


settings_converter.register_structure_hook(int, structure_exact)
settings_converter.register_structure_hook(bool, structure_exact)


@dataclasses.dataclass(kw_only=True)
class Settings:
    _path: typing.Optional[pathlib.Path] = None
    max_keys: int = DEFAULT_MAX_KEYS
    idle_delay_ms: int = DEFAULT_IDLE_DELAY_MS
    merge_repeat_keys: bool = True
    merge_modifier_keys: bool = True
    show_repeat_count: bool = False
    upper_letter: bool = True
    default_on: bool = True
    remember: bool = True

    def __post_init__(self):
        for name in POSITIVE_OPTIONS | FLAG_OPTIONS:
            check_option(name, getattr(self, name))

    def set_option(self, name: str, value: typing.Any):
        """Change one option. An invalid value raises ConfigurationError and leaves the current value alone."""
        check_option(name, value)
        setattr(self, name, value)

    def replacing(self, **changes):
        "Return a validated copy with some options changed."
        for name, value in changes.items():
            check_option(name, value)
        return dataclasses.replace(self, **changes)

    def save(self, dest: typing.Optional[pathlib.Path] = None):
        if dest is None:
            dest = self._path
        if dest is None:
            raise ConfigurationError("These settings have no file to save to")
        raw = settings_converter.unstructure(self)
        del raw["_path"]
        with dest.open("w", encoding="utf-8") as out:
            json.dump(raw, out, indent=2)

    @classmethod
    def load(cls, src: pathlib.Path):
        try:
            with src.open(encoding="utf-8") as infile:
                raw = json.load(infile)
        except json.JSONDecodeError as exc:
            raise ConfigurationError(f"{src} is not valid JSON") from exc
        if not isinstance(raw, dict):
            raise ConfigurationError(f"{src} must contain a JSON object")
        raw["_path"] = str(src)
        try:
            return settings_converter.structure(raw, cls)
        except ConfigurationError:
            raise
        except (cattrs.BaseValidationError, ValueError, TypeError) as exc:
            raise ConfigurationError(f"Invalid settings in {src}") from exc

    @classmethod
    def load_or_create(cls, src: pathlib.Path):
        if src.exists():
            return cls.load(src)
        settings = cls(_path=src)
        settings.save()
        return settings

    @classmethod
    def for_test(cls):
        return settings_converter.structure(
            {
                "_path": "test.settings.json",
                "max_keys": DEFAULT_MAX_KEYS,
                "idle_delay_ms": DEFAULT_IDLE_DELAY_MS,
                "merge_repeat_keys": True,
                "merge_modifier_keys": True,
                "show_repeat_count": False,
                "upper_letter": True,
                "default_on": True,
                "remember": False,
            },
            cls,
        )


settings_converter.register_structure_hook(Settings, cattrs.gen.make_dict_structure_fn(Settings, settings_converter))
