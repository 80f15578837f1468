from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SQLDialect:
    engine: str
    placeholder: str
    like_operator: str

    def placeholders(self, count: int) -> str:
        return ", ".join([self.placeholder] * count)


def get_sql_dialect(db_engine: str) -> SQLDialect:
    engine = (db_engine or "postgres").strip().lower()
    if engine in {"postgres", "postgresql"}:
        return SQLDialect(engine="postgres", placeholder="%s", like_operator="ILIKE")
    if engine == "sqlite":
        # LIKE is already case-insensitive for ASCII in SQLite
        return SQLDialect(engine="sqlite", placeholder="?", like_operator="LIKE")
    raise ValueError(f"Unsupported db_engine: {engine}")
