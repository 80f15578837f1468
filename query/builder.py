"""
query/builder.py
----------------
Assembles parameterized SELECT / COUNT / INSERT / UPDATE / DELETE statements.

Statement text only ever contains identifiers taken from a TableDescriptor,
the ASC/DESC keyword and placeholders. Every caller-supplied value,
including LIMIT and OFFSET, travels in `params`.
"""

from typing import Any, Mapping, Sequence

from db.dialect import SQLDialect
from models.resource import ASC, DESC, PageSpec, QueryStatement, SortSpec, TableDescriptor
from query.errors import ValidationError
from query.identifiers import validate_column, validate_table


def _where(clauses: Sequence[str]) -> str:
    return f" WHERE {' AND '.join(clauses)}" if clauses else ""


def _check_predicates(clauses: Sequence[str], params: Sequence[Any]) -> None:
    if len(clauses) != len(params):
        raise ValidationError(
            f"Predicate/parameter mismatch: {len(clauses)} clauses, {len(params)} params"
        )


def _writable_columns(descriptor: TableDescriptor, payload: Mapping[str, Any]) -> list[str]:
    """
    Columns of a mutation payload, in payload order.

    The primary key is never written from a payload; any undeclared key
    rejects the whole payload.
    """
    if not isinstance(payload, Mapping):
        raise ValidationError("Payload must be a mapping of column -> value")
    columns = []
    for key in payload:
        if key == descriptor.primary_key:
            continue
        columns.append(validate_column(descriptor, key))
    if not columns:
        raise ValidationError(f"Payload for {descriptor.name} has no writable columns")
    return columns


def build_select(
    descriptor: TableDescriptor,
    clauses: Sequence[str],
    params: Sequence[Any],
    sort: SortSpec,
    page: PageSpec,
    dialect: SQLDialect,
) -> QueryStatement:
    """SELECT * ... ORDER BY ... LIMIT ? OFFSET ? with limit/offset bound."""
    table = validate_table(descriptor)
    _check_predicates(clauses, params)
    if sort.field not in descriptor.sortable:
        raise ValidationError(f"Field {sort.field!r} is not sortable on {table}")
    if sort.direction not in (ASC, DESC):
        raise ValidationError(f"Invalid sort direction: {sort.direction!r}")

    text = (
        f"SELECT * FROM {table}{_where(clauses)}"
        f" ORDER BY {sort.field} {sort.direction}"
        f" LIMIT {dialect.placeholder} OFFSET {dialect.placeholder}"
    )
    return QueryStatement(text, tuple(params) + (page.limit, page.offset))


def build_count(
    descriptor: TableDescriptor,
    clauses: Sequence[str],
    params: Sequence[Any],
) -> QueryStatement:
    table = validate_table(descriptor)
    _check_predicates(clauses, params)
    return QueryStatement(f"SELECT COUNT(*) AS total FROM {table}{_where(clauses)}", tuple(params))


def build_find_one(descriptor: TableDescriptor, record_id: Any, dialect: SQLDialect) -> QueryStatement:
    table = validate_table(descriptor)
    return QueryStatement(
        f"SELECT * FROM {table} WHERE {descriptor.primary_key} = {dialect.placeholder}",
        (record_id,),
    )


def build_insert(
    descriptor: TableDescriptor, payload: Mapping[str, Any], dialect: SQLDialect
) -> QueryStatement:
    """
    INSERT INTO t (a, b) VALUES (?, ?) RETURNING *

    Column list and values come from the same pass over the payload, so
    they stay aligned without a separate ordering step.
    """
    table = validate_table(descriptor)
    columns = _writable_columns(descriptor, payload)
    values = tuple(payload[c] for c in columns)
    text = (
        f"INSERT INTO {table} ({', '.join(columns)})"
        f" VALUES ({dialect.placeholders(len(columns))}) RETURNING *"
    )
    return QueryStatement(text, values)


def build_update(
    descriptor: TableDescriptor, record_id: Any, payload: Mapping[str, Any], dialect: SQLDialect
) -> QueryStatement:
    """UPDATE t SET a = ?, b = ? WHERE pk = ? RETURNING *"""
    table = validate_table(descriptor)
    columns = _writable_columns(descriptor, payload)
    assignments = ", ".join(f"{c} = {dialect.placeholder}" for c in columns)
    text = (
        f"UPDATE {table} SET {assignments}"
        f" WHERE {descriptor.primary_key} = {dialect.placeholder} RETURNING *"
    )
    return QueryStatement(text, tuple(payload[c] for c in columns) + (record_id,))


def build_delete(descriptor: TableDescriptor, record_id: Any, dialect: SQLDialect) -> QueryStatement:
    # Single-row deletes only; there is no delete-by-filter.
    table = validate_table(descriptor)
    pk = descriptor.primary_key
    return QueryStatement(
        f"DELETE FROM {table} WHERE {pk} = {dialect.placeholder} RETURNING {pk}",
        (record_id,),
    )
