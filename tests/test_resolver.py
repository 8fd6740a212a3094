from __future__ import annotations

from dataclasses import dataclass

import pytest

from propman.errors import InaccessibleMemberError, MissingElementError
from propman.resolver import apply_path, resolve_static_root


class Inner:
    def __init__(self):
        self.c = 0


class Middle:
    def __init__(self):
        self._inner = Inner()

    @property
    def inner(self):
        return self._inner


class Root:
    def __init__(self):
        self.b = Middle()
        self._level = 0

    @property
    def level(self):
        return self._level

    @level.setter
    def level(self, value):
        self._level = value

    @property
    def readonly(self):
        return 1


class Config:
    Threshold = 1

    class Network:
        timeout = 30

    class Sibling:
        flag = False


class Context:
    Limit = 3

    class Options:
        verbose = False


@dataclass(frozen=True)
class Frozen:
    x: int = 0


def apply(path, value, target, *, is_field=False):
    apply_path(
        path, value, is_field=is_field, is_static=False, context_type=type(target), target=target
    )


def apply_static(path, value, context, *, is_field=True):
    apply_path(path, value, is_field=is_field, is_static=True, context_type=context)


def test_nested_field_is_set_in_place():
    root = Root()
    inner = root.b.inner
    apply("b.inner.c", 5, root, is_field=True)
    assert inner.c == 5


def test_property_setter_is_used():
    root = Root()
    apply("level", 9, root)
    assert root._level == 9


def test_missing_intermediate_names_full_path():
    with pytest.raises(MissingElementError) as info:
        apply("b.nope.c", 5, Root(), is_field=True)
    assert info.value.path == "b.nope.c"
    assert "b.nope.c" in str(info.value)


def test_none_intermediate_is_missing():
    root = Root()
    root.b = None
    with pytest.raises(MissingElementError):
        apply("b.inner.c", 1, root, is_field=True)


def test_field_flag_must_match_member_kind():
    root = Root()
    with pytest.raises(InaccessibleMemberError):
        apply("level", 1, root, is_field=True)
    with pytest.raises(InaccessibleMemberError):
        apply("b", 1, root)


def test_missing_final_member():
    with pytest.raises(InaccessibleMemberError) as info:
        apply("b.inner.d", 1, Root(), is_field=True)
    assert info.value.path == "b.inner.d"


def test_property_without_setter():
    with pytest.raises(InaccessibleMemberError):
        apply("readonly", 2, Root())


def test_frozen_dataclass_field():
    with pytest.raises(InaccessibleMemberError):
        apply("x", 2, Frozen(), is_field=True)


def test_static_root_resolved_in_module(monkeypatch):
    monkeypatch.setattr(Config, "Threshold", 1)
    apply_static("Config.Threshold", 10, Context)
    assert Config.Threshold == 10


def test_static_single_segment_targets_context(monkeypatch):
    monkeypatch.setattr(Context, "Limit", 3)
    apply_static("Limit", 5, Context)
    assert Context.Limit == 5


def test_static_root_falls_back_to_context_member(monkeypatch):
    monkeypatch.setattr(Context.Options, "verbose", False)
    apply_static("Options.verbose", True, Context)
    assert Context.Options.verbose is True


def test_static_root_searches_enclosing_classes(monkeypatch):
    monkeypatch.setattr(Config.Sibling, "flag", False)
    assert resolve_static_root(Config.Network, "Sibling") is Config.Sibling
    apply_static("Sibling.flag", True, Config.Network)
    assert Config.Sibling.flag is True


def test_static_instance_property_is_not_visible():
    with pytest.raises(InaccessibleMemberError):
        apply_static("Root.level", 1, Context, is_field=False)


def test_static_missing_root_and_member():
    with pytest.raises(MissingElementError):
        apply_static("Nowhere.value", 1, Context)


def test_unresolvable_static_root_is_none():
    assert resolve_static_root(Context, "Nowhere") is None
    assert resolve_static_root(Context, "Limit") is None
