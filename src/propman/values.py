"""Value kinds and the text grammar shared by every provider.

A raw value is inferred by trying, in order, an integer, a floating point
number and a boolean; anything else is kept as a string.  Formatting is the
inverse and never depends on the current locale, so a value written by
:func:`format_value` reads back as the same kind through :func:`parse_value`.

Strings may span several lines in memory but always occupy a single physical
line in storage: line breaks are stored as the two characters ``\\n``.
"""

from __future__ import annotations

import math
import os
import re
from enum import Enum
from typing import Any, Protocol

from .errors import TypeMismatchError

# Line break used for strings in memory.
LINE_TERMINATOR = os.linesep
ESCAPED_NEWLINE = "\\n"

Scalar = int | float | bool | str


class ValueKind(Enum):
    """The four kinds of value an entry can hold."""

    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    STRING = "string"

    def __str__(self) -> str:
        return self.value


####################
##### ADAPTERS #####
####################

class ValueAdapter(Protocol):
    """Adapter for a single value kind.

    ``parse`` raises :class:`ValueError` when *raw* is not a literal of the
    kind, which is what drives kind inference.
    """

    def parse(self, raw: str) -> Scalar:
        """Parse *raw* text into a Python value."""

    def serialize(self, value: Any) -> str:
        """Serialise *value* into text for storage."""

    def validate(self, value: Any) -> None:
        """Raise :class:`TypeError` if *value* does not belong to the kind."""


class IntegerAdapter:
    """Adapter for integer values."""

    _RX = re.compile(r"[+-]?[0-9]+")

    def parse(self, raw: str) -> int:
        if not self._RX.fullmatch(raw):
            raise ValueError(f"invalid integer: {raw!r}")
        return int(raw)

    def serialize(self, value: Any) -> str:
        self.validate(value)
        return str(value)

    def validate(self, value: Any) -> None:
        if type(value) is not int:
            raise TypeError("expected int")


class FloatAdapter:
    """Adapter for floating point values.

    Non-finite values are spelled ``NaN``, ``Infinity`` and ``-Infinity``;
    other spellings such as ``inf`` stay strings.
    """

    _RX = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
    _SPECIAL = {"NaN": math.nan, "Infinity": math.inf, "+Infinity": math.inf, "-Infinity": -math.inf}

    def parse(self, raw: str) -> float:
        if raw in self._SPECIAL:
            return self._SPECIAL[raw]
        if not self._RX.fullmatch(raw):
            raise ValueError(f"invalid float: {raw!r}")
        return float(raw)

    def serialize(self, value: Any) -> str:
        self.validate(value)
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        # repr gives the shortest text that reads back as the same float
        return repr(value)

    def validate(self, value: Any) -> None:
        if type(value) is not float:
            raise TypeError("expected float")


class BooleanAdapter:
    """Adapter for boolean values."""

    def parse(self, raw: str) -> bool:
        lowered = raw.lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
        raise ValueError(f"invalid boolean: {raw!r}")

    def serialize(self, value: Any) -> str:
        self.validate(value)
        return "true" if value else "false"

    def validate(self, value: Any) -> None:
        if type(value) is not bool:
            raise TypeError("expected bool")


class StringAdapter:
    """Adapter for plain string values."""

    def parse(self, raw: str) -> str:
        text = raw.replace("\r\n", "\n").replace(ESCAPED_NEWLINE, "\n")
        return text.replace("\n", LINE_TERMINATOR)

    def serialize(self, value: Any) -> str:
        self.validate(value)
        return value.replace(LINE_TERMINATOR, "\n").replace("\n", ESCAPED_NEWLINE)

    def validate(self, value: Any) -> None:
        if type(value) is not str:
            raise TypeError("expected str")


ADAPTERS: dict[ValueKind, ValueAdapter] = {
    ValueKind.INT: IntegerAdapter(),
    ValueKind.FLOAT: FloatAdapter(),
    ValueKind.BOOL: BooleanAdapter(),
    ValueKind.STRING: StringAdapter(),
}

# Order in which raw text is tried; STRING never fails and comes last.
INFERENCE_ORDER = (ValueKind.INT, ValueKind.FLOAT, ValueKind.BOOL, ValueKind.STRING)

_KIND_BY_TYPE: dict[type, ValueKind] = {
    int: ValueKind.INT,
    float: ValueKind.FLOAT,
    bool: ValueKind.BOOL,
    str: ValueKind.STRING,
}


def parse_value(raw: str) -> tuple[ValueKind, Scalar]:
    """Infer the kind of *raw* and return it together with the parsed value."""
    for kind in INFERENCE_ORDER[:-1]:
        try:
            return kind, ADAPTERS[kind].parse(raw)
        except ValueError:
            continue
    return ValueKind.STRING, ADAPTERS[ValueKind.STRING].parse(raw)


def format_value(kind: ValueKind, value: Any) -> str:
    """Return the storage text for *value* of *kind*."""
    try:
        return ADAPTERS[kind].serialize(value)
    except TypeError as exc:
        raise TypeMismatchError(
            f"Value {value!r} does not match declared kind {kind}"
        ) from exc


def display_value(kind: ValueKind, value: Any) -> str:
    """Like :func:`format_value`, but strings are returned unescaped."""
    if kind is ValueKind.STRING:
        return value
    return format_value(kind, value)


def kind_of(value: Any) -> ValueKind:
    """Return the kind of *value*, matching on its exact type."""
    kind = _KIND_BY_TYPE.get(type(value))
    if kind is None:
        raise TypeMismatchError(
            f"Unsupported value type {type(value).__name__}; "
            "expected int, float, bool or str"
        )
    return kind


def kind_for_type(tp: type | ValueKind) -> ValueKind:
    """Map ``int``, ``float``, ``bool`` or ``str`` (or a kind) to a kind."""
    if isinstance(tp, ValueKind):
        return tp
    kind = _KIND_BY_TYPE.get(tp)
    if kind is None:
        raise TypeMismatchError(f"Unsupported value type {tp!r}")
    return kind


def check_kind(kind: ValueKind, value: Any) -> None:
    """Raise :class:`TypeMismatchError` unless *value* belongs to *kind*."""
    try:
        ADAPTERS[kind].validate(value)
    except TypeError as exc:
        raise TypeMismatchError(
            f"Value {value!r} does not match declared kind {kind}"
        ) from exc
