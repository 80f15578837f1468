"""
query/paging.py
---------------
Sort and pagination normalization.

Both functions are total: malformed input is coerced to a default,
never rejected.
"""

from typing import Any, Iterable, Mapping, Optional

from config import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from models.resource import ASC, DESC, PageSpec, SortSpec

MAX_LIMIT = MAX_PAGE_LIMIT
DEFAULT_LIMIT = min(DEFAULT_PAGE_LIMIT, MAX_LIMIT)
DEFAULT_OFFSET = 0
# largest value a BIGINT / SQLite INTEGER parameter can carry
MAX_OFFSET = 2**63 - 1


def normalize_sort(
    allowed_fields: Iterable[str],
    requested: Optional[Mapping[str, Any]],
    default: SortSpec,
) -> SortSpec:
    """
    Resolve a free-form sort request against an allow-list.

    Args:
        allowed_fields: Columns that may appear in ORDER BY.
        requested: Mapping with optional "field" (or "sortBy") and "direction".
        default: Returned as-is when the requested field is absent or not allowed.

    Returns:
        A SortSpec whose field is always in `allowed_fields` or is `default.field`.
    """
    requested = requested or {}
    field = requested.get("field", requested.get("sortBy"))
    if not isinstance(field, str) or field not in set(allowed_fields):
        return default

    direction = requested.get("direction")
    if isinstance(direction, str) and direction.lower() == "asc":
        return SortSpec(field, ASC)
    return SortSpec(field, DESC)


def _coerce_non_negative(value: Any, default: int) -> int:
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value if value >= 0 else default
    if isinstance(value, float):
        return int(value) if value.is_integer() and value >= 0 else default
    if isinstance(value, str):
        text = value.strip()
        return int(text) if text.isascii() and text.isdigit() else default
    return default


def normalize_page(requested: Optional[Mapping[str, Any]]) -> PageSpec:
    """
    Coerce a page request into a PageSpec.

    Non-numeric or negative values fall back to limit=20, offset=0.
    The limit is then clamped to [0, MAX_LIMIT] and the offset to [0, MAX_OFFSET].
    """
    requested = requested or {}
    limit = _coerce_non_negative(requested.get("limit"), DEFAULT_LIMIT)
    offset = _coerce_non_negative(requested.get("offset"), DEFAULT_OFFSET)
    return PageSpec(limit=min(limit, MAX_LIMIT), offset=min(offset, MAX_OFFSET))
