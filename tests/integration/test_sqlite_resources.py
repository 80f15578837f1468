import sqlite3

import pytest

from db.sqlite_store import SQLiteStore
from models.resource import make_descriptor
from query.errors import AdapterError, ConstraintViolation, ValidationError
from repositories.resource_repo import ResourceRepository

RELEASES = make_descriptor("releases", "id", ["title", "genre", "featured"])


@pytest.fixture
def store(tmp_path):
    db_path = tmp_path / "resources.db"
    conn = sqlite3.connect(str(db_path))
    try:
        conn.execute(
            "CREATE TABLE releases ("
            "id INTEGER PRIMARY KEY AUTOINCREMENT, "
            "title TEXT NOT NULL UNIQUE, genre TEXT, featured INTEGER DEFAULT 0)"
        )
        conn.commit()
    finally:
        conn.close()
    return SQLiteStore(source_config={"db_path": str(db_path)})


@pytest.fixture
def repo(store):
    return ResourceRepository(RELEASES, store)


def seed(repo):
    for title, genre in [("Amen", "Jungle"), ("Think", "Jungle Breaks"), ("Pulse", "Techno")]:
        repo.create({"title": title, "genre": genre})


def test_wildcard_find_returns_matching_rows_in_requested_order(repo):
    seed(repo)

    records = repo.find({"genre": "Jungle*"}, {"field": "title", "direction": "asc"})
    assert [r["genre"] for r in records] == ["Jungle", "Jungle Breaks"]
    assert [r["title"] for r in records] == ["Amen", "Think"]

    records = repo.find({"genre": "Jungle*"}, {"field": "title", "direction": "desc"})
    assert [r["title"] for r in records] == ["Think", "Amen"]


def test_pattern_match_is_case_insensitive(repo):
    seed(repo)
    assert repo.count({"genre": "jungle*"}) == 2
    assert repo.count({"genre": "*BREAKS"}) == 1


def test_like_metacharacters_are_literal(repo):
    repo.create({"title": "100% Dub", "genre": "Dub"})
    repo.create({"title": "1000 Dub", "genre": "Dub"})
    assert [r["title"] for r in repo.find({"title": "100%*"})] == ["100% Dub"]


def test_equality_and_empty_filters(repo):
    seed(repo)
    assert repo.count({"genre": "Jungle"}) == 1
    assert repo.count({"genre": "", "title": None}) == 3
    assert repo.count() == 3


def test_pagination(repo):
    seed(repo)
    first = repo.find(sort={"field": "title", "direction": "asc"}, page={"limit": 2, "offset": 0})
    rest = repo.find(sort={"field": "title", "direction": "asc"}, page={"limit": 2, "offset": 2})
    assert [r["title"] for r in first] == ["Amen", "Pulse"]
    assert [r["title"] for r in rest] == ["Think"]
    assert repo.find(page={"limit": 0}) == []


def test_create_then_find_one_round_trip(repo):
    payload = {"title": "X", "genre": "Dubstep", "featured": 1}
    created = repo.create(payload)
    fetched = repo.find_one(created.id)
    assert fetched is not None
    assert fetched.id == created.id
    for key, value in payload.items():
        assert fetched[key] == value


def test_create_ignores_payload_primary_key(repo):
    created = repo.create({"id": 999, "title": "X"})
    assert created.id != 999
    assert repo.find_one(999) is None


def test_unknown_field_is_rejected_and_nothing_is_inserted(repo):
    with pytest.raises(ValidationError):
        repo.create({"title": "X", "unknownField": "y"})
    assert repo.count() == 0


def test_update(repo):
    created = repo.create({"title": "X", "genre": "Techno"})
    updated = repo.update(created.id, {"genre": "Jungle"})
    assert updated is not None
    assert updated["genre"] == "Jungle"
    assert updated["title"] == "X"
    assert repo.update(created.id + 100, {"genre": "Jungle"}) is None


def test_delete_twice_returns_none_the_second_time(repo):
    created = repo.create({"title": "X"})
    assert repo.delete(created.id) == created.id
    assert repo.delete(created.id) is None
    assert repo.find_one(created.id) is None


def test_unique_constraint_is_reported(repo):
    repo.create({"title": "X"})
    with pytest.raises(ConstraintViolation) as excinfo:
        repo.create({"title": "X"})
    assert excinfo.value.constraint == "releases.title"
    assert repo.count() == 1


def test_store_failure_is_an_adapter_error(tmp_path):
    repo = ResourceRepository(RELEASES, SQLiteStore(source_config={"db_path": str(tmp_path / "empty.db")}))
    with pytest.raises(AdapterError, match="no such table"):
        repo.find()


def test_ping(store):
    assert store.ping() is True


def test_huge_offset_returns_an_empty_page(repo):
    seed(repo)
    assert repo.find(page={"offset": "99999999999999999999"}) == []
    assert repo.find(page={"offset": 10**20}) == []


def test_integer_filter_wider_than_64_bits_is_an_adapter_error(repo):
    seed(repo)
    with pytest.raises(AdapterError, match="too large") as excinfo:
        repo.count({"featured": 10**20})
    assert isinstance(excinfo.value.__cause__, OverflowError)
