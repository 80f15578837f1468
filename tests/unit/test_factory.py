import pytest

from db.factory import get_store
from db.sqlite_store import SQLiteStore
from db.store import PostgresStore
from query.errors import AdapterError


def test_get_store_by_engine():
    assert isinstance(get_store("postgres"), PostgresStore)
    assert isinstance(get_store("PostgreSQL"), PostgresStore)
    store = get_store("sqlite", source_config={"db_path": "x.db"})
    assert isinstance(store, SQLiteStore)
    assert store.dialect.placeholder == "?"


def test_get_store_rejects_unknown_engine():
    with pytest.raises(AdapterError, match="Unsupported db_engine: mongo"):
        get_store("mongo")
