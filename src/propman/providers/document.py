"""Providers backed by a collection of property documents.

A document store keeps one document per property::

    {id, property_name, property_value, is_static, is_field}

Uniqueness of ``property_name`` is maintained by :meth:`save`, not by the
store.  Concrete stores only implement :class:`DocumentCollection`.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ..entry import PropertyEntry
from ..errors import (
    PersistenceError,
    PropertyFormatError,
    StoreInconsistencyError,
    TypeMismatchError,
)
from ..values import kind_of
from .base import BaseProvider, EditableProvider

logger = logging.getLogger(__name__)

DEFAULT_COLLECTION = "configuration"


@dataclass
class PropertyDocument:
    property_name: str
    property_value: Any
    is_static: bool = False
    is_field: bool = False
    id: int | None = None


class DocumentCollection(ABC):
    """A named collection of property documents.

    Used as a context manager: entering acquires the store, leaving releases
    it whether or not the block raised.
    """

    def __init__(self, path: Path, name: str) -> None:
        if not name.isidentifier():
            raise ValueError(f"invalid collection name: {name!r}")
        self.path = Path(path)
        self.name = name

    def __enter__(self) -> DocumentCollection:
        self.open()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @abstractmethod
    def open(self) -> None:
        pass

    @abstractmethod
    def close(self) -> None:
        pass

    @abstractmethod
    def all(self) -> list[PropertyDocument]:
        """Return every document in store order."""

    @abstractmethod
    def find(self, property_name: str) -> list[PropertyDocument]:
        """Return the documents whose name is *property_name*."""

    @abstractmethod
    def update(self, doc: PropertyDocument) -> int:
        """Write *doc* over the stored document with its id; return rows changed."""

    @abstractmethod
    def insert(self, doc: PropertyDocument) -> int | None:
        """Store *doc* as a new document and return its id."""


def entry_from_document(doc: PropertyDocument) -> PropertyEntry:
    if not isinstance(doc.property_name, str) or not doc.property_name:
        raise PropertyFormatError(f"document {doc.id}: missing property name")
    try:
        kind = kind_of(doc.property_value)
    except TypeMismatchError as exc:
        raise PropertyFormatError(f"document {doc.id}: {exc}") from exc
    return PropertyEntry(
        path=doc.property_name,
        kind=kind,
        value=doc.property_value,
        is_static=bool(doc.is_static),
        is_field=bool(doc.is_field),
    )


class DocumentPropertyProvider(BaseProvider):
    """Read entries from a document collection."""

    collection_cls: type[DocumentCollection]
    options = ("collection",)

    def __init__(self, path: Path | str, *, collection: str = DEFAULT_COLLECTION) -> None:
        self.path = Path(path)
        self.collection = collection

    def _open(self) -> DocumentCollection:
        return self.collection_cls(self.path, self.collection)

    def load(self) -> list[PropertyEntry]:
        with self._open() as col:
            docs = col.all()
        entries = [entry_from_document(doc) for doc in docs]
        logger.debug(
            "loaded %d entries from %s[%s]", len(entries), self.path, self.collection
        )
        return entries


class DocumentEditablePropertyProvider(DocumentPropertyProvider, EditableProvider):
    """Document collection that can be written back."""

    def save(self, entries: Sequence[PropertyEntry]) -> None:
        with self._open() as col:
            for entry in entries:
                if entry.is_passthrough:
                    continue
                found = col.find(entry.path)
                if len(found) == 1:
                    doc = found[0]
                    doc.property_value = entry.value
                    doc.is_static = entry.is_static
                    doc.is_field = entry.is_field
                    if col.update(doc) != 1:
                        raise PersistenceError(
                            f"Update of document with id {doc.id} failed"
                        )
                    logger.debug("updated %s (id %s)", entry.path, doc.id)
                elif not found:
                    doc = PropertyDocument(
                        property_name=entry.path,
                        property_value=entry.value,
                        is_static=entry.is_static,
                        is_field=entry.is_field,
                    )
                    if col.insert(doc) is None:
                        raise PersistenceError(
                            f"Error while inserting document with property name [{entry.path}]"
                        )
                    logger.debug("inserted %s (id %s)", entry.path, doc.id)
                else:
                    raise StoreInconsistencyError(
                        f"Unable to find a distinct document with property name "
                        f"[{entry.path}]: {len(found)} matches"
                    )
