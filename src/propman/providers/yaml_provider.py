from __future__ import annotations

import logging
from dataclasses import asdict

from ..errors import PropertyFormatError, StoreUnavailableError
from . import register_provider
from .document import (
    DocumentCollection,
    DocumentEditablePropertyProvider,
    DocumentPropertyProvider,
    PropertyDocument,
)

logger = logging.getLogger(__name__)

_FIELDS = ("id", "property_name", "property_value", "is_static", "is_field")


def _require_yaml():
    try:
        import yaml  # type: ignore
    except ModuleNotFoundError as exc:
        raise StoreUnavailableError("PyYAML is required for the YAML provider") from exc
    return yaml


class YamlCollection(DocumentCollection):
    """Property documents kept in a YAML file.

    The file maps collection names to lists of documents.  It is read when
    the collection is opened and rewritten on close if anything changed.
    """

    def __init__(self, path, name):
        super().__init__(path, name)
        self._yaml = _require_yaml()
        self._data: dict = {}
        self._docs: list[dict] = []
        self._dirty = False

    def open(self) -> None:
        yaml = self._yaml
        self._dirty = False
        if not self.path.exists():
            self._data, self._docs = {}, []
            return
        try:
            raw = self.path.read_text(encoding="utf-8")
        except OSError as exc:
            raise StoreUnavailableError(f"Cannot read {self.path}: {exc}") from exc
        try:
            data = yaml.safe_load(raw) or {}
        except yaml.YAMLError as exc:
            raise PropertyFormatError(str(exc)) from exc
        if not isinstance(data, dict):
            raise PropertyFormatError(f"Root of {self.path} must be a mapping")
        docs = data.setdefault(self.name, [])
        if not isinstance(docs, list) or not all(isinstance(d, dict) for d in docs):
            raise PropertyFormatError(
                f"Collection {self.name!r} in {self.path} must be a list of mappings"
            )
        # hand-written documents may lack ids; number them after the highest one
        next_id = max((d["id"] for d in docs if type(d.get("id")) is int), default=0) + 1
        for doc in docs:
            if doc.get("id") is None:
                doc["id"] = next_id
                next_id += 1
        self._data, self._docs = data, docs

    def close(self) -> None:
        if not self._dirty:
            return
        yaml = self._yaml
        self._data[self.name] = self._docs
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tmp.open("w", encoding="utf-8") as fh:
                yaml.safe_dump(self._data, fh, sort_keys=False, allow_unicode=True)
            tmp.replace(self.path)
        except OSError as exc:
            raise StoreUnavailableError(f"Cannot write {self.path}: {exc}") from exc
        self._dirty = False
        logger.debug("wrote %d documents to %s[%s]", len(self._docs), self.path, self.name)

    def _document(self, raw: dict) -> PropertyDocument:
        if "property_name" not in raw:
            raise PropertyFormatError(f"document {raw.get('id')}: missing property_name")
        return PropertyDocument(
            id=raw.get("id"),
            property_name=raw["property_name"],
            property_value=raw.get("property_value"),
            is_static=bool(raw.get("is_static", False)),
            is_field=bool(raw.get("is_field", False)),
        )

    def all(self) -> list[PropertyDocument]:
        return sorted(
            (self._document(raw) for raw in self._docs),
            key=lambda doc: (0, doc.id) if isinstance(doc.id, int) else (1, 0),
        )

    def find(self, property_name: str) -> list[PropertyDocument]:
        return [doc for doc in self.all() if doc.property_name == property_name]

    def update(self, doc: PropertyDocument) -> int:
        changed = 0
        for raw in self._docs:
            if doc.id is not None and raw.get("id") == doc.id:
                raw.update(
                    property_value=doc.property_value,
                    is_static=doc.is_static,
                    is_field=doc.is_field,
                )
                changed += 1
        if changed:
            self._dirty = True
        return changed

    def insert(self, doc: PropertyDocument) -> int | None:
        ids = [raw["id"] for raw in self._docs if type(raw.get("id")) is int]
        doc.id = max(ids, default=0) + 1
        record = asdict(doc)
        self._docs.append({key: record[key] for key in _FIELDS})
        self._dirty = True
        return doc.id


@register_provider
class YamlPropertyProvider(DocumentPropertyProvider):
    """Read entries from a collection stored in a YAML file."""

    suffixes = (".yaml", ".yml")
    collection_cls = YamlCollection


@register_provider
class YamlEditablePropertyProvider(DocumentEditablePropertyProvider):
    """YAML-backed provider that can write entries back."""

    suffixes = (".yaml", ".yml")
    collection_cls = YamlCollection
