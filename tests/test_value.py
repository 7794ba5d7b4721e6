import pytest

from envtree.tree import ValueKind, get_path, iter_leaves, kind_of, query, validate_tree


_TREE = {
    "db": {"host": "localhost", "port": 5432, "retries": [1, 2, 3]},
    "debug": False,
    "ratio": 0.5,
}


def test_kind_of_distinguishes_bool_from_integer() -> None:
    assert kind_of(True) is ValueKind.BOOL
    assert kind_of(1) is ValueKind.INTEGER
    assert kind_of(1.0) is ValueKind.DOUBLE
    assert kind_of("x") is ValueKind.STRING
    assert kind_of([1]) is ValueKind.ARRAY
    assert kind_of({}) is ValueKind.OBJECT


def test_kind_of_rejects_foreign_types() -> None:
    with pytest.raises(TypeError, match="unsupported tree value type: NoneType"):
        _ = kind_of(None)


def test_validate_tree_accepts_valid_tree() -> None:
    validate_tree(_TREE)


def test_validate_tree_rejects_nested_arrays() -> None:
    with pytest.raises(TypeError, match=r"arrays may only hold literals: a\.b\[1\]"):
        validate_tree({"a": {"b": [1, [2]]}})


def test_validate_tree_rejects_objects_in_arrays_and_foreign_values() -> None:
    with pytest.raises(TypeError, match="arrays may only hold literals"):
        validate_tree({"a": [{"b": 1}]})
    with pytest.raises(TypeError, match=r"unsupported tree value type: tuple at a\.b"):
        validate_tree({"a": {"b": (1, 2)}})


def test_validate_tree_rejects_empty_keys() -> None:
    with pytest.raises(TypeError, match="object keys must be non-empty strings"):
        validate_tree({"a": {"": 1}})


def test_get_path() -> None:
    assert get_path(_TREE, ("db", "port")) == 5432
    assert get_path(_TREE, ()) is _TREE
    with pytest.raises(KeyError, match="db.user"):
        _ = get_path(_TREE, ("db", "user"))
    with pytest.raises(TypeError, match="cannot descend into integer at db.port"):
        _ = get_path(_TREE, ("db", "port", "x"))


def test_query_with_indexes() -> None:
    assert query(_TREE, "db.host") == "localhost"
    assert query(_TREE, "db.retries[1]") == 2
    assert query(_TREE, "db.retries") == [1, 2, 3]
    with pytest.raises(IndexError):
        _ = query(_TREE, "db.retries[7]")
    with pytest.raises(TypeError, match="cannot index string"):
        _ = query(_TREE, "db.host[0]")
    with pytest.raises(ValueError, match="invalid query segment"):
        _ = query(_TREE, "db..host")


def test_iter_leaves_yields_path_order() -> None:
    assert list(iter_leaves(_TREE)) == [
        (("db", "host"), "localhost"),
        (("db", "port"), 5432),
        (("db", "retries"), [1, 2, 3]),
        (("debug",), False),
        (("ratio",), 0.5),
    ]
