"""Grammar of the line-oriented property format.

One physical line holds one binding::

    [static] [field] <dotted.path> = <raw value>

The modifiers may appear in any order around the path.  Lines that are blank
or start with the comment marker carry no binding.
"""

from __future__ import annotations

from typing import TypeVar

from ..entry import PropertyEntry
from ..errors import PropertyFormatError
from ..values import format_value, parse_value

DEFAULT_COMMENT_SIGN = "#"
STATIC_TOKEN = "static"
FIELD_TOKEN = "field"
_MODIFIERS = {STATIC_TOKEN, FIELD_TOKEN}

E = TypeVar("E", bound=PropertyEntry)


def is_comment_or_blank(trimmed: str, comment_sign: str = DEFAULT_COMMENT_SIGN) -> bool:
    return not trimmed or trimmed.startswith(comment_sign)


def _where(lineno: int | None) -> str:
    return f"line {lineno}: " if lineno is not None else ""


def split_key_clause(clause: str, *, lineno: int | None = None) -> tuple[str, bool, bool]:
    """Return ``(path, is_static, is_field)`` for the text left of ``=``.

    The path is the one token that is not a modifier, or else the last token.
    Path syntax is checked when the entry is applied, not here.
    """
    tokens = clause.split()
    if not tokens:
        raise PropertyFormatError(f"{_where(lineno)}missing property path")
    if len(tokens) == 1:
        # a lone token is always the path, even if it spells a modifier
        return tokens[0], False, False
    names = [tok for tok in tokens if tok not in _MODIFIERS]
    path = names[0] if len(names) == 1 else tokens[-1]
    return path, STATIC_TOKEN in tokens, FIELD_TOKEN in tokens


def parse_binding(
    text: str, *, lineno: int | None = None, entry_cls: type[E] = PropertyEntry, **extra
) -> E:
    """Parse one trimmed ``key = value`` line into an entry of *entry_cls*."""
    clause, sep, raw = text.partition("=")
    if not sep:
        raise PropertyFormatError(f"{_where(lineno)}expected '<path> = <value>', got {text!r}")
    path, is_static, is_field = split_key_clause(clause, lineno=lineno)
    kind, value = parse_value(raw.strip())
    return entry_cls(
        path=path,
        kind=kind,
        value=value,
        is_static=is_static,
        is_field=is_field,
        **extra,
    )


def format_binding(entry: PropertyEntry) -> str:
    """Render *entry* as a single line."""
    if not entry.path or any(ch.isspace() or ch == "=" for ch in entry.path):
        raise PropertyFormatError(f"Property path {entry.path!r} cannot be written as a line")
    tokens = []
    if entry.is_static:
        tokens.append(STATIC_TOKEN)
    if entry.is_field:
        tokens.append(FIELD_TOKEN)
    tokens.append(entry.path)
    return f"{' '.join(tokens)} = {format_value(entry.kind, entry.value)}"
