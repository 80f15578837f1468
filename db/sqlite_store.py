from __future__ import annotations

import re
import sqlite3
from typing import Any, Dict, Optional

from config import SQLITE_DB_PATH
from db.store import Store, StoreResult
from models.resource import QueryStatement
from query.errors import AdapterError, ConstraintViolation

# "UNIQUE constraint failed: releases.title", "CHECK constraint failed: status_ok"
_CONSTRAINT_RE = re.compile(r"constraint failed: (.+)$")


def _constraint_name(exc: sqlite3.IntegrityError) -> Optional[str]:
    match = _CONSTRAINT_RE.search(str(exc))
    return match.group(1).strip() if match else None


class SQLiteStore(Store):
    engine = "sqlite"

    def __init__(self, source_config: Optional[Dict[str, Any]] = None):
        self.source_config = source_config or {}

    def _db_path(self) -> str:
        raw = self.source_config.get("db_path") or SQLITE_DB_PATH
        if not raw:
            raise AdapterError("SQLITE_DB_PATH is required for the sqlite store")
        return str(raw)

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path())
        conn.row_factory = sqlite3.Row
        return conn

    def execute(self, statement: QueryStatement, timeout_ms: Optional[int] = None) -> StoreResult:
        conn = None
        try:
            conn = self._connect()
            if timeout_ms is not None:
                conn.execute(f"PRAGMA busy_timeout = {int(timeout_ms)}")
            cur = conn.cursor()
            cur.execute(statement.text, statement.params)
            rows = [dict(row) for row in cur.fetchall()] if cur.description else []
            rowcount = cur.rowcount
            conn.commit()
        except sqlite3.IntegrityError as e:
            conn.rollback()
            raise ConstraintViolation(str(e), constraint=_constraint_name(e)) from e
        except (sqlite3.Error, OverflowError) as e:
            # OverflowError: integer parameter wider than 64 bits
            if conn is not None:
                conn.rollback()
            raise AdapterError(str(e)) from e
        finally:
            if conn is not None:
                conn.close()
        return StoreResult(rows=rows, rowcount=rowcount if rowcount >= 0 else len(rows))
