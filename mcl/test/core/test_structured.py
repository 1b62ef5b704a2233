"""Tests for mcl.core.structured accessors."""

from mcl.core.structured import (
    as_obj_list,
    as_str_dict,
    get_bool,
    get_float,
    get_int,
    get_list,
    get_str,
    get_table,
    is_str_dict,
)


def test_is_str_dict() -> None:
    assert is_str_dict({"a": 1})
    assert not is_str_dict({1: "a"})
    assert not is_str_dict(["a"])


def test_as_helpers() -> None:
    assert as_str_dict({"a": 1}) == {"a": 1}
    assert as_str_dict("a") is None
    assert as_obj_list([1, 2]) == [1, 2]
    assert as_obj_list({"a": 1}) is None


def test_get_str_strips_and_rejects_empty() -> None:
    table: dict[str, object] = {"a": "  x ", "b": "   ", "c": 3}
    assert get_str(table, "a") == "x"
    assert get_str(table, "b") is None
    assert get_str(table, "c") is None
    assert get_str(table, "missing") is None


def test_numbers_reject_bool() -> None:
    table: dict[str, object] = {"n": 3, "f": 1.5, "t": True}
    assert get_int(table, "n") == 3
    assert get_int(table, "t") is None
    assert get_int(table, "f") is None
    assert get_float(table, "n") == 3.0
    assert get_float(table, "f") == 1.5
    assert get_float(table, "t") is None


def test_get_bool() -> None:
    assert get_bool({"v": False}, "v") is False
    assert get_bool({"v": 0}, "v") is None


def test_nested() -> None:
    table: dict[str, object] = {"t": {"k": "v"}, "l": [1], "s": "x"}
    assert get_table(table, "t") == {"k": "v"}
    assert get_table(table, "s") is None
    assert get_list(table, "l") == [1]
    assert get_list(table, "t") is None
