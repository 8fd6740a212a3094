from __future__ import annotations

import json
import logging
from typing import Any

from ..errors import PersistenceError, PropertyFormatError, StoreUnavailableError
from . import register_provider
from .document import (
    DocumentCollection,
    DocumentEditablePropertyProvider,
    DocumentPropertyProvider,
    PropertyDocument,
)

logger = logging.getLogger(__name__)

_COLUMNS = "id, property_name, property_value, is_static, is_field"


def _require_duckdb():
    try:
        import duckdb  # type: ignore
    except ModuleNotFoundError as exc:
        raise StoreUnavailableError("duckdb is required for the DuckDB provider") from exc
    return duckdb


class DuckDbCollection(DocumentCollection):
    """Property documents stored as rows of one DuckDB table.

    Values keep their native type by being stored as JSON text.
    """

    def __init__(self, path, name):
        super().__init__(path, name)
        self._duckdb = _require_duckdb()
        self.connection: Any = None

    @property
    def _table(self) -> str:
        return f'"{self.name}"'

    def open(self) -> None:
        duckdb = self._duckdb
        try:
            self.connection = duckdb.connect(str(self.path))
            self.connection.execute(f'CREATE SEQUENCE IF NOT EXISTS "{self.name}_id_seq"')
            self.connection.execute(f"""
                CREATE TABLE IF NOT EXISTS {self._table} (
                    id BIGINT DEFAULT nextval('{self.name}_id_seq'),
                    property_name VARCHAR NOT NULL,
                    property_value VARCHAR,
                    is_static BOOLEAN NOT NULL DEFAULT false,
                    is_field BOOLEAN NOT NULL DEFAULT false
                )
            """)
        except duckdb.Error as exc:
            self.close()
            raise StoreUnavailableError(
                f"Cannot open DuckDB database {self.path}: {exc}"
            ) from exc
        logger.debug("DuckDB connection to %s opened", self.path)

    def close(self) -> None:
        if self.connection is not None:
            self.connection.close()
            self.connection = None
            logger.debug("DuckDB connection to %s closed", self.path)

    def _document(self, row: tuple) -> PropertyDocument:
        doc_id, name, raw, is_static, is_field = row
        try:
            value = json.loads(raw) if raw is not None else None
        except json.JSONDecodeError as exc:
            raise PropertyFormatError(f"document {doc_id}: invalid stored value {raw!r}") from exc
        return PropertyDocument(
            id=doc_id,
            property_name=name,
            property_value=value,
            is_static=is_static,
            is_field=is_field,
        )

    def _select(self, where: str = "", params: list | None = None) -> list[PropertyDocument]:
        try:
            rows = self.connection.execute(
                f"SELECT {_COLUMNS} FROM {self._table} {where} ORDER BY id", params or []
            ).fetchall()
        except self._duckdb.Error as exc:
            raise StoreUnavailableError(f"Cannot query {self.path}: {exc}") from exc
        return [self._document(row) for row in rows]

    def all(self) -> list[PropertyDocument]:
        return self._select()

    def find(self, property_name: str) -> list[PropertyDocument]:
        return self._select("WHERE property_name = ?", [property_name])

    def update(self, doc: PropertyDocument) -> int:
        try:
            rows = self.connection.execute(
                f"""
                UPDATE {self._table}
                SET property_value = ?, is_static = ?, is_field = ?
                WHERE id = ?
                RETURNING id
                """,
                [json.dumps(doc.property_value), doc.is_static, doc.is_field, doc.id],
            ).fetchall()
        except self._duckdb.Error as exc:
            raise PersistenceError(f"Update of document with id {doc.id} failed: {exc}") from exc
        return len(rows)

    def insert(self, doc: PropertyDocument) -> int | None:
        try:
            row = self.connection.execute(
                f"""
                INSERT INTO {self._table} (property_name, property_value, is_static, is_field)
                VALUES (?, ?, ?, ?)
                RETURNING id
                """,
                [doc.property_name, json.dumps(doc.property_value), doc.is_static, doc.is_field],
            ).fetchone()
        except self._duckdb.Error as exc:
            raise PersistenceError(
                f"Error while inserting document with property name [{doc.property_name}]: {exc}"
            ) from exc
        doc.id = row[0] if row else None
        return doc.id


@register_provider
class DuckDbPropertyProvider(DocumentPropertyProvider):
    """Read entries from a table of an embedded DuckDB database."""

    suffixes = (".duckdb", ".db")
    collection_cls = DuckDbCollection


@register_provider
class DuckDbEditablePropertyProvider(DocumentEditablePropertyProvider):
    """DuckDB-backed provider that can write entries back."""

    suffixes = (".duckdb", ".db")
    collection_cls = DuckDbCollection
