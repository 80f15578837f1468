"""
query/errors.py
---------------
Error taxonomy shared by the query layer, the stores and the repositories.

NotFound is not an exception: operations that target a single primary key
return None when no row matches.
"""

from typing import Optional


class ResourceError(Exception):
    """Base class for every failure surfaced by the resource adapter."""


class ValidationError(ResourceError, ValueError):
    """Caller input was rejected before any statement reached the store."""


class ConstraintViolation(ResourceError):
    """The store refused a write because of a uniqueness, foreign-key or check constraint."""

    def __init__(self, message: str, constraint: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.constraint = constraint


class AdapterError(ResourceError, RuntimeError):
    """Any other store failure (connection loss, timeout, bad statement)."""
