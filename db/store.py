"""
db/store.py
-----------
Single-statement execution against the relational store.

A Store takes one QueryStatement, runs it on one connection, and returns
the rows plus a row count. Driver exceptions are translated into the
adapter's error taxonomy here, so nothing above this layer imports a driver.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import psycopg2
from psycopg2 import extras

from db.connection import pooled_connection
from db.dialect import SQLDialect, get_sql_dialect
from models.resource import QueryStatement
from query.errors import AdapterError, ConstraintViolation


@dataclass
class StoreResult:
    rows: List[Dict[str, Any]] = field(default_factory=list)
    rowcount: int = 0


class Store(ABC):
    engine: str = "unknown"

    @property
    def dialect(self) -> SQLDialect:
        return get_sql_dialect(self.engine)

    @abstractmethod
    def execute(self, statement: QueryStatement, timeout_ms: Optional[int] = None) -> StoreResult:
        raise NotImplementedError

    def ping(self) -> bool:
        """Run a trivial statement to confirm the store is reachable."""
        result = self.execute(QueryStatement("SELECT 1 AS ok"))
        return bool(result.rows)


def _constraint_name(exc: Exception) -> Optional[str]:
    diag = getattr(exc, "diag", None)
    return getattr(diag, "constraint_name", None)


class PostgresStore(Store):
    """Executes statements on connections borrowed from the psycopg2 pool."""

    engine = "postgres"

    def execute(self, statement: QueryStatement, timeout_ms: Optional[int] = None) -> StoreResult:
        """
        Run one statement in its own short transaction.

        Args:
            statement: Parameterized statement to run.
            timeout_ms: Optional caller deadline, applied with SET LOCAL so it
                expires with the transaction.

        Raises:
            ConstraintViolation: On integrity errors.
            AdapterError: On any other driver or pool failure.
        """
        try:
            with pooled_connection() as conn:
                try:
                    with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                        if timeout_ms is not None:
                            cur.execute("SET LOCAL statement_timeout = %s", (int(timeout_ms),))
                        cur.execute(statement.text, statement.params)
                        rows = [dict(r) for r in cur.fetchall()] if cur.description else []
                        rowcount = cur.rowcount
                    conn.commit()
                except psycopg2.Error:
                    conn.rollback()
                    raise
        except psycopg2.IntegrityError as e:
            constraint = _constraint_name(e)
            raise ConstraintViolation(str(e).strip(), constraint=constraint) from e
        except (psycopg2.Error, RuntimeError) as e:
            # RuntimeError: pool not initialized
            raise AdapterError(str(e).strip()) from e
        return StoreResult(rows=rows, rowcount=rowcount if rowcount >= 0 else len(rows))

