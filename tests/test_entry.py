from __future__ import annotations

import pytest

from propman.entry import PropertyEntry, PropertyLine, check_path
from propman.errors import InvalidModeError, PropertyFormatError, TypeMismatchError
from propman.values import ValueKind


class Settings:
    Retries = 1

    def __init__(self):
        self.timeout = 0


def test_apply_to_instance():
    obj = Settings()
    PropertyEntry("timeout", ValueKind.INT, 30, is_field=True).apply_to_instance(obj)
    assert obj.timeout == 30


def test_static_entry_rejects_instance():
    entry = PropertyEntry("Settings.Retries", ValueKind.INT, 10, is_field=True, is_static=True)
    with pytest.raises(InvalidModeError):
        entry.apply_to_instance(Settings())


def test_non_static_entry_rejects_type():
    with pytest.raises(InvalidModeError):
        PropertyEntry("timeout", ValueKind.INT, 1, is_field=True).apply_to_type(Settings)


def test_apply_to_type(monkeypatch):
    monkeypatch.setattr(Settings, "Retries", 1)
    entry = PropertyEntry("Settings.Retries", ValueKind.INT, 10, is_field=True, is_static=True)
    entry.apply_to_type(Settings)
    assert Settings.Retries == 10


def test_apply_to_type_needs_a_class():
    entry = PropertyEntry("Retries", ValueKind.INT, 1, is_field=True, is_static=True)
    with pytest.raises(TypeError):
        entry.apply_to_type(Settings())


def test_apply_to_instance_needs_a_context():
    with pytest.raises(ValueError):
        PropertyEntry("timeout", ValueKind.INT, 1).apply_to_instance(None)


def test_value_must_match_kind():
    with pytest.raises(TypeMismatchError):
        PropertyEntry("timeout", ValueKind.INT, "30")


@pytest.mark.parametrize("path", ["", "a..b", "a.1b", "a-b", ".a"])
def test_malformed_paths(path):
    with pytest.raises(PropertyFormatError):
        check_path(path)


def test_segments():
    assert PropertyEntry("a.b.c").segments == ("a", "b", "c")


def test_property_line_tracks_modification():
    line = PropertyLine("timeout", ValueKind.INT, 30, source="timeout=30")
    line.mark_clean()
    assert not line.is_modified()
    line.value = 31
    assert line.is_modified()


def test_passthrough_line():
    line = PropertyLine.passthrough("# comment")
    assert line.is_passthrough
    assert line.source == "# comment"
    assert not PropertyEntry("a").is_passthrough
