# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import json

import pytest

from keycast.commontypes import ConfigurationError
from keycast.settings import Settings


def test_defaults():
    settings = Settings()
    assert settings.max_keys == 5
    assert settings.idle_delay_ms == 5000
    assert settings.merge_repeat_keys
    assert settings.merge_modifier_keys
    assert not settings.show_repeat_count
    assert settings.upper_letter


def test_save_and_load(tmp_path):
    path = tmp_path / "settings.json"
    settings = Settings.load_or_create(path)
    settings.set_option("max_keys", 3)
    settings.set_option("show_repeat_count", True)
    settings.save()

    raw = json.loads(path.read_text())
    assert "_path" not in raw
    assert raw["max_keys"] == 3

    loaded = Settings.load(path)
    assert loaded == settings
    assert loaded._path == path


def test_load_ignores_missing_options(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"idle_delay_ms": 1500}))
    settings = Settings.load(path)
    assert settings.idle_delay_ms == 1500
    assert settings.max_keys == 5


@pytest.mark.parametrize(
    "contents",
    (
        '{"max_keys": 0}',
        '{"idle_delay_ms": -1}',
        '{"max_keys": "lots"}',
        '{"max_keys": 2.9}',
        '{"max_keys": "3"}',
        '{"merge_repeat_keys": "false"}',
        '{"idle_delay_ms": true}',
        "[1, 2, 3]",
        "not json",
    ),
)
def test_load_rejects_bad_files(tmp_path, contents: str):
    path = tmp_path / "settings.json"
    path.write_text(contents)
    with pytest.raises(ConfigurationError):
        Settings.load(path)


@pytest.mark.parametrize(
    "name,value",
    (
        ("max_keys", 0),
        ("max_keys", -3),
        ("max_keys", True),
        ("idle_delay_ms", 0),
        ("idle_delay_ms", 1.5),
        ("show_repeat_count", "yes"),
        ("no_such_option", 1),
    ),
)
def test_set_option_rejects_and_keeps_previous(name: str, value):
    settings = Settings.for_test()
    before = Settings.for_test()
    with pytest.raises(ConfigurationError):
        settings.set_option(name, value)
    assert settings == before


def test_replacing_validates():
    settings = Settings.for_test()
    assert settings.replacing(max_keys=2).max_keys == 2
    assert settings.max_keys == 5
    with pytest.raises(ConfigurationError):
        settings.replacing(max_keys=0)


def test_save_needs_a_path():
    with pytest.raises(ConfigurationError):
        Settings().save()
