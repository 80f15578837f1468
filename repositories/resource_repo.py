"""
repositories/resource_repo.py
-----------------------------
Generic data access for any table described by a TableDescriptor.
Validates caller input, builds one parameterized statement per call,
runs it on the store and maps rows to GenericRecord objects.
"""

import time
from typing import Any, Mapping, Optional

from db.store import Store, StoreResult
from models.resource import GenericRecord, QueryStatement, TableDescriptor
from query.builder import (
    build_count,
    build_delete,
    build_find_one,
    build_insert,
    build_select,
    build_update,
)
from query.errors import AdapterError, ConstraintViolation
from query.filters import translate
from query.paging import normalize_page, normalize_sort
from utils.logger import get_logger, shorten_sql

logger = get_logger(__name__)


class ResourceRepository:
    """
    CRUD operations for one table.

    The repository holds no mutable state: the descriptor is immutable and
    every call builds its own statement, so one instance can be shared
    across threads. Connections are acquired and released by the store,
    once per call.
    """

    def __init__(self, descriptor: TableDescriptor, store: Store):
        self.descriptor = descriptor
        self.store = store
        self.dialect = store.dialect

    # ── Execution ─────────────────────────────────────────

    def _run(self, operation: str, statement: QueryStatement, timeout_ms: Optional[int]) -> StoreResult:
        """Execute a statement, logging its shape and timing but never its parameters."""
        table = self.descriptor.name
        start = time.perf_counter()
        try:
            result = self.store.execute(statement, timeout_ms=timeout_ms)
        except ConstraintViolation as e:
            logger.error(
                f"{operation} on {table} rejected by constraint "
                f"{e.constraint or '<unnamed>'}"
            )
            raise
        except AdapterError as e:
            cause = type(e.__cause__).__name__ if e.__cause__ else "AdapterError"
            logger.error(f"{operation} on {table} failed: {cause}")
            raise
        duration_ms = (time.perf_counter() - start) * 1000
        logger.debug(
            f"Executed {operation} on {table}: {shorten_sql(statement.text)} "
            f"({result.rowcount} rows, {duration_ms:.1f}ms)"
        )
        return result

    def _to_record(self, row: dict) -> GenericRecord:
        return GenericRecord.from_row(self.descriptor, row)

    # ── READ ──────────────────────────────────────────────

    def find(
        self,
        filters: Optional[Mapping[str, Any]] = None,
        sort: Optional[Mapping[str, Any]] = None,
        page: Optional[Mapping[str, Any]] = None,
        timeout_ms: Optional[int] = None,
    ) -> list[GenericRecord]:
        """
        Fetch a page of rows matching a filter map.

        Args:
            filters: Column -> value; `*` in a string value is a wildcard.
            sort: {"field": ..., "direction": "asc"|"desc"}; unknown fields
                fall back to the descriptor's default sort.
            page: {"limit": ..., "offset": ...}; coerced, never rejected.
            timeout_ms: Optional deadline passed through to the store.

        Returns:
            Matching records, possibly empty.

        Raises:
            ValidationError: If a filter key is not a declared column.
            AdapterError: If the store fails.
        """
        clauses, params = translate(self.descriptor, filters, self.dialect)
        sort_spec = normalize_sort(self.descriptor.sortable, sort, self.descriptor.default_sort)
        page_spec = normalize_page(page)
        statement = build_select(self.descriptor, clauses, params, sort_spec, page_spec, self.dialect)
        result = self._run("find", statement, timeout_ms)
        return [self._to_record(row) for row in result.rows]

    def find_one(self, record_id: Any, timeout_ms: Optional[int] = None) -> Optional[GenericRecord]:
        """Fetch one record by primary key, or None if it does not exist."""
        statement = build_find_one(self.descriptor, record_id, self.dialect)
        result = self._run("find_one", statement, timeout_ms)
        return self._to_record(result.rows[0]) if result.rows else None

    def count(self, filters: Optional[Mapping[str, Any]] = None, timeout_ms: Optional[int] = None) -> int:
        """Count rows matching a filter map (same filter rules as find)."""
        clauses, params = translate(self.descriptor, filters, self.dialect)
        statement = build_count(self.descriptor, clauses, params)
        result = self._run("count", statement, timeout_ms)
        if not result.rows:
            raise AdapterError(f"COUNT on {self.descriptor.name} returned no row")
        return int(result.rows[0]["total"])

    # ── WRITE ─────────────────────────────────────────────

    def create(self, payload: Mapping[str, Any], timeout_ms: Optional[int] = None) -> GenericRecord:
        """
        Insert one row.

        Raises:
            ValidationError: If the payload has an undeclared key or no writable columns.
            ConstraintViolation: If the store rejects the row.
        """
        statement = build_insert(self.descriptor, payload, self.dialect)
        result = self._run("create", statement, timeout_ms)
        if not result.rows:
            raise AdapterError(f"INSERT into {self.descriptor.name} returned no row")
        record = self._to_record(result.rows[0])
        logger.info(f"Created {self.descriptor.name} #{record.id}")
        return record

    def update(
        self, record_id: Any, payload: Mapping[str, Any], timeout_ms: Optional[int] = None
    ) -> Optional[GenericRecord]:
        """Update one row by primary key; None if no such row."""
        statement = build_update(self.descriptor, record_id, payload, self.dialect)
        result = self._run("update", statement, timeout_ms)
        if not result.rows:
            return None
        logger.info(f"Updated {self.descriptor.name} #{record_id}")
        return self._to_record(result.rows[0])

    def delete(self, record_id: Any, timeout_ms: Optional[int] = None) -> Optional[Any]:
        """Delete one row by primary key; returns the id, or None if no such row."""
        statement = build_delete(self.descriptor, record_id, self.dialect)
        result = self._run("delete", statement, timeout_ms)
        if not result.rows:
            return None
        logger.info(f"Deleted {self.descriptor.name} #{record_id}")
        return result.rows[0][self.descriptor.primary_key]
