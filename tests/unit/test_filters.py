import pytest

from db.dialect import get_sql_dialect
from models.resource import make_descriptor
from query.errors import ValidationError
from query.filters import to_like_pattern, translate

RELEASES = make_descriptor("releases", "id", ["title", "genre", "featured"])
PG = get_sql_dialect("postgres")
SQLITE = get_sql_dialect("sqlite")


def test_wildcard_becomes_case_insensitive_pattern_match():
    clauses, params = translate(RELEASES, {"genre": "Jungle*"}, PG)
    assert clauses == ["genre ILIKE %s ESCAPE '\\'"]
    assert params == ["Jungle%"]


def test_plain_values_become_equality_predicates():
    clauses, params = translate(RELEASES, {"title": "X", "featured": True}, PG)
    assert clauses == ["featured = %s", "title = %s"]
    assert params == [True, "X"]


def test_keys_are_visited_in_sorted_order():
    first = translate(RELEASES, {"title": "a", "genre": "b", "featured": False}, PG)
    second = translate(RELEASES, {"featured": False, "genre": "b", "title": "a"}, PG)
    assert first == second
    assert first[0][0].startswith("featured")


def test_empty_values_are_skipped():
    clauses, params = translate(RELEASES, {"title": "", "genre": None, "featured": 0}, PG)
    assert clauses == ["featured = %s"]
    assert params == [0]
    assert len(clauses) == len(params)


def test_empty_filter_map_matches_everything():
    assert translate(RELEASES, {}, PG) == ([], [])
    assert translate(RELEASES, None, PG) == ([], [])


def test_unknown_key_fails_even_when_value_is_empty():
    with pytest.raises(ValidationError, match="Unknown column"):
        translate(RELEASES, {"title": "X", "gnere": "Techno"}, PG)
    with pytest.raises(ValidationError, match="Unknown column"):
        translate(RELEASES, {"gnere": ""}, PG)


def test_non_scalar_values_are_rejected():
    with pytest.raises(ValidationError, match="scalar"):
        translate(RELEASES, {"genre": ["Jungle", "Techno"]}, PG)


def test_like_metacharacters_are_escaped():
    assert to_like_pattern("100%_off*") == "100\\%\\_off%"
    assert to_like_pattern("a\\b*") == "a\\\\b%"
    assert to_like_pattern("*mid*dle*") == "%mid%dle%"


def test_sqlite_dialect_uses_question_marks_and_like():
    clauses, params = translate(RELEASES, {"genre": "*breaks", "title": "X"}, SQLITE)
    assert clauses == ["genre LIKE ? ESCAPE '\\'", "title = ?"]
    assert params == ["%breaks", "X"]
