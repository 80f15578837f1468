"""
query/filters.py
----------------
Translates a generic column -> value filter map into WHERE predicates
and their bound parameters.
"""

from typing import Any, Mapping, Optional

from db.dialect import SQLDialect
from query.errors import ValidationError
from query.identifiers import validate_column

WILDCARD = "*"
_LIKE_ESCAPE = "\\"


def is_empty_filter_value(value: Any) -> bool:
    """None and "" mean "no filter on this column", not "match empty"."""
    return value is None or (isinstance(value, str) and value == "")


def to_like_pattern(value: str) -> str:
    """
    Turn a `*` wildcard string into a LIKE pattern.

    LIKE metacharacters already in the value are escaped first, so `*`
    is the only wildcard a caller can use.
    """
    escaped = (
        value.replace(_LIKE_ESCAPE, _LIKE_ESCAPE * 2)
        .replace("%", _LIKE_ESCAPE + "%")
        .replace("_", _LIKE_ESCAPE + "_")
    )
    return escaped.replace(WILDCARD, "%")


def translate(
    descriptor, filter_map: Optional[Mapping[str, Any]], dialect: SQLDialect
) -> tuple[list[str], list[Any]]:
    """
    Build predicates for a filter map.

    Keys are visited in ascending order so the same logical filter always
    produces the same statement. Every key is checked against the
    descriptor, including keys whose value is empty: an undeclared column
    fails the whole call.

    Args:
        descriptor: TableDescriptor of the target table.
        filter_map: Column -> scalar value or `*` wildcard string.
        dialect: Supplies the placeholder token and pattern operator.

    Returns:
        (clauses, params) with one parameter per clause, in the same order.

    Raises:
        ValidationError: If any key is not a declared column.
    """
    clauses: list[str] = []
    params: list[Any] = []
    if not filter_map:
        return clauses, params

    keys = list(filter_map.keys())
    for key in keys:
        validate_column(descriptor, key)

    for column in sorted(keys):
        value = filter_map[column]
        if is_empty_filter_value(value):
            continue
        if isinstance(value, (list, tuple, set, frozenset, dict)):
            raise ValidationError(f"Filter on {column} must be a scalar value")
        if isinstance(value, str) and WILDCARD in value:
            clauses.append(
                f"{column} {dialect.like_operator} {dialect.placeholder} ESCAPE '{_LIKE_ESCAPE}'"
            )
            params.append(to_like_pattern(value))
        else:
            clauses.append(f"{column} = {dialect.placeholder}")
            params.append(value)
    return clauses, params
