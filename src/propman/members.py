"""Runtime member lookup by name.

Two kinds of member can terminate a path:

* a *property*: a data descriptor such as :class:`property`, found on the
  class for instance properties or on the metaclass for static ones;
* a *field*: plain data, either an entry of the instance ``__dict__``, a
  ``__slots__`` member, or a non-descriptor class attribute (a static field).

Private names are matched as written and, for ``__name`` spellings, in their
name-mangled ``_Class__name`` form as well.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MemberDescriptorType
from typing import Any


def _mangled(klass: type, name: str) -> str | None:
    if name.startswith("__") and not name.endswith("__"):
        return f"_{klass.__name__.lstrip('_')}{name}"
    return None


def _candidates(klass: type, name: str) -> tuple[str, ...]:
    mangled = _mangled(klass, name)
    return (name,) if mangled is None else (name, mangled)


def _lookup(cls: type, name: str) -> tuple[type, str, Any] | None:
    """Return ``(owner, stored_name, attribute)`` for the first match in the MRO."""
    for klass in cls.__mro__:
        namespace = vars(klass)
        for candidate in _candidates(klass, name):
            if candidate in namespace:
                return klass, candidate, namespace[candidate]
    return None


def _is_accessor(attr: Any) -> bool:
    kind = type(attr)
    if isinstance(attr, MemberDescriptorType):
        return False
    return hasattr(kind, "__get__") and (
        hasattr(kind, "__set__") or hasattr(kind, "__delete__")
    )


def _is_plain(name: str, attr: Any) -> bool:
    if name.startswith("__") and name.endswith("__"):
        return False
    return not hasattr(type(attr), "__get__")


@dataclass(frozen=True)
class PropertyAccessor:
    """A data descriptor resolved by name.

    ``receiver`` is set for static properties: the class the descriptor is
    read from and written to, independent of any target object.
    """

    name: str
    owner: type
    descriptor: Any
    receiver: type | None = None

    @property
    def is_static(self) -> bool:
        return self.receiver is not None

    def read(self, target: Any) -> Any:
        obj = self.receiver if self.is_static else target
        return self.descriptor.__get__(obj, type(obj))

    def write(self, target: Any, value: Any) -> None:
        obj = self.receiver if self.is_static else target
        self.descriptor.__set__(obj, value)


@dataclass(frozen=True)
class FieldAccessor:
    """Plain data resolved by name.

    Static fields live on ``owner``; instance fields live on the target, in
    its ``__dict__`` or in the ``slot`` member declared by ``owner``.
    """

    name: str
    owner: type | None = None
    slot: Any = None
    static: bool = False

    def read(self, target: Any) -> Any:
        if self.static:
            return vars(self.owner)[self.name]
        if self.slot is not None:
            return self.slot.__get__(target, type(target))
        return vars(target)[self.name]

    def write(self, target: Any, value: Any) -> None:
        setattr(self.owner if self.static else target, self.name, value)


def try_get_property(owner: type, name: str, *, static: bool) -> PropertyAccessor | None:
    """Find a property called *name* on *owner*.

    Instance properties are looked up on ``owner`` itself, static properties
    on its metaclass.
    """
    if static:
        found = _lookup(type(owner), name)
        if found is not None and _is_accessor(found[2]):
            return PropertyAccessor(found[1], found[0], found[2], receiver=owner)
        return None
    found = _lookup(owner, name)
    if found is not None and _is_accessor(found[2]):
        return PropertyAccessor(found[1], found[0], found[2])
    return None


def try_get_field(
    owner: type, name: str, *, static: bool, target: Any = None
) -> FieldAccessor | None:
    """Find a field called *name*.

    Static fields are plain class attributes of *owner* or its bases.
    Instance fields must already exist on *target* or be declared as slots.
    """
    if static:
        found = _lookup(owner, name)
        if found is not None and _is_plain(name, found[2]):
            return FieldAccessor(found[1], owner=found[0], static=True)
        return None

    namespace = getattr(target, "__dict__", None)
    if isinstance(namespace, dict):
        for klass in owner.__mro__:
            for candidate in _candidates(klass, name):
                if candidate in namespace:
                    return FieldAccessor(candidate)
    found = _lookup(owner, name)
    if found is not None and isinstance(found[2], MemberDescriptorType):
        return FieldAccessor(found[1], owner=found[0], slot=found[2])
    return None


__all__ = [
    "FieldAccessor",
    "PropertyAccessor",
    "try_get_field",
    "try_get_property",
]
