from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any

from .entry import PropertyEntry
from .errors import (
    DuplicateKeyError,
    NotEditableError,
    TypeMismatchError,
    UnknownKeyError,
)
from .providers.base import BaseProvider, EditableProvider
from .values import Scalar, ValueKind, display_value, kind_for_type, kind_of

logger = logging.getLogger(__name__)


def _find(entries: list[PropertyEntry], key: str) -> PropertyEntry | None:
    matches = [e for e in entries if not e.is_passthrough and e.path == key]
    if len(matches) > 1:
        raise DuplicateKeyError(f"Key {key} is defined {len(matches)} times")
    return matches[0] if matches else None


def _require(entries: list[PropertyEntry], key: str) -> PropertyEntry:
    entry = _find(entries, key)
    if entry is None:
        raise UnknownKeyError(f"Key {key} was not found in provider")
    return entry


def _checked(entry: PropertyEntry, tp: type | ValueKind) -> Scalar:
    kind = kind_for_type(tp)
    if entry.kind is not kind:
        raise TypeMismatchError(
            f"Type of property under key {entry.path} is not the same as declared. "
            f"Property type: {entry.kind}; declared type: {kind}"
        )
    return entry.value


class PropertyManager:
    """Apply configuration entries from a provider to objects and classes.

    The manager keeps the entries it loaded until :meth:`reload`.  Values can
    be changed with :meth:`set_value` and written back with :meth:`save` when
    the provider is an :class:`EditableProvider`.
    """

    def __init__(self, provider: BaseProvider) -> None:
        if provider is None:
            raise ValueError("Provider cannot be empty")
        self._provider = provider
        self._entries: list[PropertyEntry] = list(provider.load())

    @property
    def provider(self) -> BaseProvider:
        return self._provider

    @property
    def editable(self) -> bool:
        """True if changes can be saved to the provider."""
        return isinstance(self._provider, EditableProvider)

    @property
    def entries(self) -> list[PropertyEntry]:
        """Copy of the current entry list."""
        return list(self._entries)

    def __getitem__(self, key: str) -> str:
        """Return the value under *key* as text, or *key* itself if undefined."""
        entry = _find(self._entries, key)
        if entry is None:
            return key
        return display_value(entry.kind, entry.value)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.contains_key(key)

    def contains_key(self, key: str) -> bool:
        return any(not e.is_passthrough and e.path == key for e in self._entries)

    def keys(self) -> list[str]:
        return [e.path for e in self._entries if not e.is_passthrough]

    def get_entry(self, key: str) -> PropertyEntry:
        """Return a copy of the entry under *key*."""
        return replace(_require(self._entries, key))

    def get_value(self, key: str, tp: type | ValueKind) -> Scalar:
        """Return the value under *key*, which must be of kind *tp*.

        *tp* is ``int``, ``float``, ``bool``, ``str`` or a :class:`ValueKind`.
        """
        return _checked(_require(self._entries, key), tp)

    def set_value(self, key: str, value: Scalar) -> None:
        """Replace the value under *key*; the kind must stay the same."""
        if not self.editable:
            raise NotEditableError(
                "Manager is not editable. To save changes use an EditableProvider."
            )
        entry = _require(self._entries, key)
        _checked(entry, kind_of(value))
        entry.value = value
        logger.debug("set %s = %r", key, value)

    def apply_to_instance(self, context: Any) -> None:
        """Apply every entry to the object *context*.

        Entries are applied in order; a failure leaves earlier ones applied.
        """
        for entry in self._entries:
            if not entry.is_passthrough:
                entry.apply_to_instance(context)
        logger.debug("applied %d entries to %s instance", len(self.keys()), type(context).__name__)

    def apply_to_type(self, context: type) -> None:
        """Apply every entry to the class *context*; all entries must be static."""
        for entry in self._entries:
            if not entry.is_passthrough:
                entry.apply_to_type(context)
        logger.debug("applied %d entries to class %s", len(self.keys()), context.__name__)

    def reload(self, provider: BaseProvider | None = None) -> None:
        """Read the entries again, optionally from a different *provider*."""
        if provider is not None:
            self._provider = provider
        self._entries = list(self._provider.load())
        logger.debug("reloaded %d entries", len(self._entries))

    def save(self) -> None:
        if not self.editable:
            raise NotEditableError(
                "Manager is not editable. To save changes use an EditableProvider."
            )
        self._provider.save(list(self._entries))
        logger.debug("saved %d entries", len(self._entries))

    # ----- helpers that do not keep a manager around -----

    @staticmethod
    def apply_provider(provider: BaseProvider, context: Any) -> None:
        """Apply the entries of *provider* to *context*.

        Classes are treated as static contexts, anything else as an instance.
        """
        for entry in provider.load():
            if entry.is_passthrough:
                continue
            if isinstance(context, type):
                entry.apply_to_type(context)
            else:
                entry.apply_to_instance(context)

    @staticmethod
    def value_from(provider: BaseProvider, key: str, tp: type | ValueKind) -> Scalar:
        """Read one typed value from *provider*."""
        return _checked(_require(provider.load(), key), tp)
