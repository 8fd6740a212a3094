from __future__ import annotations

import pytest

from propman.errors import TypeMismatchError
from propman.values import (
    ESCAPED_NEWLINE,
    LINE_TERMINATOR,
    ValueKind,
    display_value,
    format_value,
    kind_for_type,
    kind_of,
    parse_value,
)


@pytest.mark.parametrize(
    "raw, kind, value",
    [
        ("42", ValueKind.INT, 42),
        ("-7", ValueKind.INT, -7),
        ("+3", ValueKind.INT, 3),
        ("42.0", ValueKind.FLOAT, 42.0),
        ("3.14", ValueKind.FLOAT, 3.14),
        ("1e3", ValueKind.FLOAT, 1000.0),
        (".5", ValueKind.FLOAT, 0.5),
        ("true", ValueKind.BOOL, True),
        ("FALSE", ValueKind.BOOL, False),
        ("hello", ValueKind.STRING, "hello"),
        ("1_000", ValueKind.STRING, "1_000"),
        ("", ValueKind.STRING, ""),
    ],
)
def test_parse_value_inference_order(raw, kind, value):
    assert parse_value(raw) == (kind, value)


def test_integer_literal_is_never_float():
    kind, value = parse_value("1")
    assert kind is ValueKind.INT
    assert type(value) is int


def test_large_integers_stay_integers():
    assert parse_value("12345678901234567890") == (ValueKind.INT, 12345678901234567890)


def test_special_floats():
    kind, value = parse_value("Infinity")
    assert kind is ValueKind.FLOAT and value == float("inf")
    assert parse_value("-Infinity") == (ValueKind.FLOAT, float("-inf"))
    kind, value = parse_value("NaN")
    assert kind is ValueKind.FLOAT and value != value


@pytest.mark.parametrize("raw", ["inf", "nan", "infinity", "NAN"])
def test_other_special_spellings_stay_strings(raw):
    assert parse_value(raw) == (ValueKind.STRING, raw)


def test_special_floats_round_trip():
    assert format_value(ValueKind.FLOAT, float("inf")) == "Infinity"
    assert format_value(ValueKind.FLOAT, float("-inf")) == "-Infinity"
    assert format_value(ValueKind.FLOAT, float("nan")) == "NaN"


def test_escaped_newline_becomes_line_terminator():
    kind, value = parse_value(f"first{ESCAPED_NEWLINE}second")
    assert kind is ValueKind.STRING
    assert value == f"first{LINE_TERMINATOR}second"


def test_real_newline_becomes_line_terminator():
    _, value = parse_value("first\nsecond")
    assert value == f"first{LINE_TERMINATOR}second"


@pytest.mark.parametrize("raw", ["42", "-1", "3.14", "42.0", "true", "false", "plain text"])
def test_round_trip(raw):
    assert format_value(*parse_value(raw)) == raw


def test_format_string_escapes_line_breaks():
    text = f"a{LINE_TERMINATOR}b"
    assert format_value(ValueKind.STRING, text) == "a\\nb"
    assert display_value(ValueKind.STRING, text) == text


def test_format_bool_is_lowercase():
    assert format_value(ValueKind.BOOL, True) == "true"


def test_format_rejects_wrong_kind():
    with pytest.raises(TypeMismatchError):
        format_value(ValueKind.INT, True)
    with pytest.raises(TypeMismatchError):
        format_value(ValueKind.FLOAT, 1)


def test_kind_of_uses_exact_type():
    assert kind_of(True) is ValueKind.BOOL
    assert kind_of(1) is ValueKind.INT
    assert kind_of(1.0) is ValueKind.FLOAT
    assert kind_of("x") is ValueKind.STRING
    with pytest.raises(TypeMismatchError):
        kind_of([1, 2])


def test_kind_for_type():
    assert kind_for_type(int) is ValueKind.INT
    assert kind_for_type(ValueKind.BOOL) is ValueKind.BOOL
    with pytest.raises(TypeMismatchError):
        kind_for_type(list)
