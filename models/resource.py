"""
models/resource.py
------------------
Data types for the generic resource adapter.

A TableDescriptor is built once per table and shared by every call; the
other types are created and thrown away per operation.
"""

from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from query.errors import ValidationError
from query.identifiers import require_identifiers

ASC = "ASC"
DESC = "DESC"


@dataclass(frozen=True)
class SortSpec:
    """A validated sort request: one column and ASC or DESC."""
    field: str
    direction: str = DESC


@dataclass(frozen=True)
class PageSpec:
    """A clamped page request."""
    limit: int
    offset: int = 0


@dataclass(frozen=True)
class QueryStatement:
    """
    The only thing ever sent to a store.

    Attributes:
        text: SQL with positional placeholders and validated identifiers only.
        params: Bound values, in placeholder order.
    """
    text: str
    params: tuple = ()


@dataclass(frozen=True)
class TableDescriptor:
    """
    Trusted declaration of one table.

    Attributes:
        name: Table name.
        primary_key: Primary key column; used for find_one/update/delete.
        columns: Columns that may be filtered and written.
        sortable: Columns allowed in ORDER BY (defaults to columns + primary key).
        default_sort: Sort used when a request names no valid field.
    """
    name: str
    primary_key: str
    columns: frozenset
    sortable: Optional[frozenset] = None
    default_sort: Optional[SortSpec] = None

    def __post_init__(self):
        require_identifiers([self.name], "table")
        require_identifiers([self.primary_key], "primary key")
        if isinstance(self.columns, str) or isinstance(self.sortable, str):
            raise ValidationError("columns and sortable must be collections of names, not a string")

        # frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "columns", frozenset(self.columns))
        sortable = self.sortable
        if sortable is None:
            sortable = self.columns | {self.primary_key}
        object.__setattr__(self, "sortable", frozenset(sortable))
        if self.default_sort is None:
            object.__setattr__(self, "default_sort", SortSpec(self.primary_key, DESC))

        require_identifiers(sorted(self.columns, key=str), "column")
        require_identifiers(sorted(self.sortable, key=str), "sort")

        known = self.columns | {self.primary_key}
        extra = self.sortable - known
        if extra:
            raise ValidationError(
                f"Sortable fields not declared on {self.name}: {sorted(extra)}"
            )
        if self.default_sort.field not in self.sortable:
            raise ValidationError(
                f"Default sort field {self.default_sort.field!r} is not sortable on {self.name}"
            )
        if self.default_sort.direction not in (ASC, DESC):
            raise ValidationError(f"Invalid sort direction: {self.default_sort.direction!r}")


@dataclass
class GenericRecord:
    """
    One row of any table.

    Attributes:
        id: Value of the table's primary key column.
        fields: Column name -> value, as returned by the store.
    """
    id: Any
    fields: dict = field(default_factory=dict)

    @classmethod
    def from_row(cls, descriptor: TableDescriptor, row: dict) -> "GenericRecord":
        return cls(id=row.get(descriptor.primary_key), fields=dict(row))

    def __getitem__(self, column: str) -> Any:
        return self.fields[column]

    def get(self, column: str, default: Any = None) -> Any:
        return self.fields.get(column, default)

    def to_dict(self) -> dict:
        return {"id": self.id, "params": dict(self.fields)}


def make_descriptor(
    name: str,
    primary_key: str,
    columns: Iterable[str],
    sortable: Optional[Iterable[str]] = None,
    default_sort: Optional[SortSpec] = None,
) -> TableDescriptor:
    """Convenience constructor accepting any iterables for the column sets."""
    return TableDescriptor(
        name=name,
        primary_key=primary_key,
        columns=columns,
        sortable=sortable,
        default_sort=default_sort,
    )
