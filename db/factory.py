from __future__ import annotations

from typing import Any, Dict, Optional

from config import DB_ENGINE
from db.sqlite_store import SQLiteStore
from db.store import PostgresStore, Store
from query.errors import AdapterError


def get_store(db_engine: Optional[str] = None, source_config: Optional[Dict[str, Any]] = None) -> Store:
    engine = (db_engine or DB_ENGINE).strip().lower()
    if engine in {"postgres", "postgresql"}:
        return PostgresStore()
    if engine == "sqlite":
        return SQLiteStore(source_config=source_config)
    raise AdapterError(f"Unsupported db_engine: {engine}")
