import pytest

from db.dialect import get_sql_dialect


def test_postgres_dialect():
    dialect = get_sql_dialect("PostgreSQL")
    assert dialect.engine == "postgres"
    assert dialect.placeholder == "%s"
    assert dialect.like_operator == "ILIKE"
    assert dialect.placeholders(3) == "%s, %s, %s"


def test_sqlite_dialect():
    dialect = get_sql_dialect("sqlite")
    assert dialect.placeholder == "?"
    assert dialect.like_operator == "LIKE"


def test_unknown_engine():
    with pytest.raises(ValueError, match="Unsupported db_engine: oracle"):
        get_sql_dialect("oracle")
