import pytest

from graphgate.json_like import (
    gather_path_matches,
    get_key,
    get_path,
    group_by,
    group_by_key,
    path_string,
    to_graphql,
)


def test_gather_path_matches():
    data = [{"id": "1"}, {"id": "2"}, {"id": "3"}]
    assert gather_path_matches(data, ["id"]) == [
        ("1", {"id": "1"}),
        ("2", {"id": "2"}),
        ("3", {"id": "3"}),
    ]


def test_gather_path_matches_nested():
    data = {
        "data": [
            {"user": {"id": "1"}},
            {"user": {"id": "2"}},
            {"user": {"id": "3"}},
            {"user": [{"id": "4"}, {"id": "5"}]},
        ]
    }
    assert gather_path_matches(data, ["data", "user", "id"]) == [
        ("1", {"id": "1"}),
        ("2", {"id": "2"}),
        ("3", {"id": "3"}),
        ("4", {"id": "4"}),
        ("5", {"id": "5"}),
    ]


def test_group_by_key():
    pairs = [
        ("1", {"id": "1"}),
        ("2", {"id": "2"}),
        ("2", {"id": "2"}),
        ("3", {"id": "3"}),
    ]
    assert group_by_key(pairs) == {
        "1": [{"id": "1"}],
        "2": [{"id": "2"}, {"id": "2"}],
        "3": [{"id": "3"}],
    }


def test_group_by_numeric_key():
    pairs = [
        (1, {"id": 1}),
        (2, {"id": 2}),
        (2, {"id": 2}),
        (3, {"id": 3}),
    ]
    assert group_by_key(pairs) == {
        "1": [{"id": 1}],
        "2": [{"id": 2}, {"id": 2}],
        "3": [{"id": 3}],
    }


def test_group_by_key_drops_non_scalar_keys():
    assert group_by_key([(None, {"a": 1}), (True, {"b": 2}), ("x", {"c": 3})]) == {"x": [{"c": 3}]}


def test_group_by_float_key():
    assert group_by_key([(1.5, "a"), (2.0, "b")]) == {"1.5": ["a"], "2": ["b"]}


def test_group_by_path():
    data = [{"userId": 1, "t": "a"}, {"userId": 2, "t": "b"}, {"userId": 1, "t": "c"}]
    assert group_by(data, ["userId"]) == {
        "1": [{"userId": 1, "t": "a"}, {"userId": 1, "t": "c"}],
        "2": [{"userId": 2, "t": "b"}],
    }


def test_get_path_through_list_index():
    data = {"a": [{"b": "c"}]}
    assert get_path(data, ["a", "0", "b"]) == "c"


@pytest.mark.parametrize("path", [["a", "x"], ["a", "5"], ["a", "0", "b", "c"], ["missing"]])
def test_get_path_missing(path):
    assert get_path({"a": [{"b": "c"}]}, path) is None


def test_get_path_empty_returns_root():
    data = {"k": 1}
    assert get_path(data, []) == {"k": 1}


def test_get_key():
    assert get_key({"a": 1}, "a") == 1
    assert get_key([1, 2], "0") is None


def test_path_string_scalars():
    data = {"value": {"projectId": "123", "n": 7, "ok": True, "obj": {"x": 1}}}
    assert path_string(data, ["value", "projectId"]) == "123"
    assert path_string(data, ["value", "n"]) == "7"
    assert path_string(data, ["value", "ok"]) == "true"
    assert path_string(data, ["value", "obj"]) is None
    assert path_string(data, ["value", "missing"]) is None


def test_to_graphql_object():
    assert to_graphql({"existing": "nested-test"}) == '{existing: "nested-test"}'


def test_to_graphql_scalars_and_list():
    assert to_graphql(True) == "true"
    assert to_graphql(2) == "2"
    assert to_graphql(None) == "null"
    assert to_graphql("str-test") == '"str-test"'
    assert to_graphql([1, "a", None]) == '[1, "a", null]'


def test_to_graphql_escapes_strings():
    assert to_graphql('a"b\\c\n') == '"a\\"b\\\\c\\n"'