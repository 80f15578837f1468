"""
query/identifiers.py
--------------------
Whitelist checks for table and column names.

Identifiers cannot be bound as parameters, so the only names that ever
reach statement text are the ones declared on a TableDescriptor.
"""

import re
from typing import Any, Iterable, Optional

from query.errors import ValidationError
from utils.logger import get_logger

logger = get_logger(__name__)

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def is_safe_identifier(name: Any) -> bool:
    """True if `name` is a plain SQL identifier (letters, digits, underscore)."""
    return isinstance(name, str) and bool(_IDENTIFIER_RE.fullmatch(name))


def require_identifiers(names: Iterable[Any], what: str) -> None:
    """Raise ValidationError for the first entry that is not a plain identifier."""
    for name in names:
        if not is_safe_identifier(name):
            raise ValidationError(f"Invalid {what} identifier: {name!r}")


def validate_column(descriptor, name: Any) -> str:
    """
    Return `name` unchanged if it is a declared column of `descriptor`.

    The match is exact and case-sensitive. There is no normalization and
    no fallback: anything else raises ValidationError.
    """
    if isinstance(name, str) and name in descriptor.columns:
        return name
    logger.warning(f"Rejected column {name!r} for table {descriptor.name}")
    raise ValidationError(f"Unknown column for table {descriptor.name}: {name!r}")


def validate_table(descriptor, requested: Optional[str] = None) -> str:
    """
    Return the descriptor's table name.

    When `requested` is given it must equal the declared name exactly.
    """
    if not is_safe_identifier(descriptor.name):
        raise ValidationError(f"Invalid table identifier: {descriptor.name!r}")
    if requested is not None and requested != descriptor.name:
        logger.warning(f"Rejected table {requested!r}")
        raise ValidationError(f"Unknown table: {requested!r}")
    return descriptor.name
