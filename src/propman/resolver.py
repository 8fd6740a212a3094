"""Walk a dotted path through a live object graph and write its last member.

Every segment but the last is read: a property if one exists, otherwise a
field.  The last segment is written and must match the kind the entry asks
for.  Intermediate reads never modify anything, so ``a.b.c`` sets ``c`` on
whatever object ``a.b`` currently evaluates to.

Static paths start from a class.  Their first segment may name another class
living next to the context class (in its module, or inside the classes
enclosing it).  When no such class exists the segment is read as a static
member of the context class instead.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

from .errors import InaccessibleMemberError, MissingElementError
from .members import try_get_field, try_get_property

logger = logging.getLogger(__name__)


def _namespaces(context_type: type) -> list[Any]:
    """Return the enclosing classes of *context_type*, innermost first, then its module."""
    module = sys.modules.get(context_type.__module__)
    if module is None:
        return []
    chain: list[Any] = [module]
    node: Any = module
    for part in context_type.__qualname__.split(".")[:-1]:
        if part == "<locals>":
            break
        node = vars(node).get(part)
        if not isinstance(node, type):
            break
        chain.append(node)
    return list(reversed(chain))


def resolve_static_root(context_type: type, name: str) -> type | None:
    """Return the class called *name* declared next to *context_type*, if any."""
    for namespace in _namespaces(context_type):
        candidate = vars(namespace).get(name)
        if isinstance(candidate, type):
            return candidate
    return None


def _read(path: str, name: str, owner: type, target: Any) -> tuple[Any, type]:
    if target is None:
        accessor = try_get_property(owner, name, static=True) or try_get_field(
            owner, name, static=True
        )
    else:
        accessor = (
            try_get_property(owner, name, static=False)
            or try_get_property(owner, name, static=True)
            or try_get_field(owner, name, static=False, target=target)
            or try_get_field(owner, name, static=True)
        )
    if accessor is None:
        raise MissingElementError(path)
    try:
        result = accessor.read(target)
    except AttributeError as exc:
        raise MissingElementError(
            path, f"Element {path} could not be read at {name!r}: {exc}"
        ) from exc
    if result is None:
        raise MissingElementError(path, f"Element {path} evaluates to None at {name!r}")
    if isinstance(result, type):
        return None, result
    return result, type(result)


def _write(
    path: str,
    name: str,
    value: Any,
    *,
    is_field: bool,
    static: bool,
    owner: type,
    target: Any,
) -> None:
    if is_field:
        accessor = try_get_field(owner, name, static=static, target=target)
    else:
        accessor = try_get_property(owner, name, static=static)
    if accessor is None:
        raise InaccessibleMemberError(path)
    try:
        accessor.write(None if static else target, value)
    except (AttributeError, TypeError) as exc:
        raise InaccessibleMemberError(
            path, f"Entry {path} cannot be written: {exc}"
        ) from exc


def apply_path(
    path: str,
    value: Any,
    *,
    is_field: bool,
    is_static: bool,
    context_type: type,
    target: Any = None,
) -> None:
    """Write *value* to the member *path* names, starting at *target*.

    ``target`` is ``None`` when starting from the class itself.  Raises
    :class:`MissingElementError` if an intermediate segment cannot be read
    and :class:`InaccessibleMemberError` if the last one cannot be written.
    """
    segments = path.split(".")
    owner = context_type
    last = len(segments) - 1
    for index, segment in enumerate(segments):
        if index == last:
            _write(
                path,
                segment,
                value,
                is_field=is_field,
                # a hop that yielded a class leaves no instance to write to
                static=is_static or target is None,
                owner=owner,
                target=target,
            )
            return
        if index == 0 and is_static:
            resolved = resolve_static_root(owner, segment)
            if resolved is not None:
                owner, target = resolved, None
                continue
            logger.debug(
                "%s: no class %r next to %s; reading it as a static member",
                path,
                segment,
                owner.__qualname__,
            )
        target, owner = _read(path, segment, owner, target)
