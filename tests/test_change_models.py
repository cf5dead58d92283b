from __future__ import annotations

import pytest

from changepack.diff import Change, ChangeSet, InvalidUsageError


def test_changes_compare_by_value_even_with_unhashable_values() -> None:
    first = Change(path="items", old_value=[1], new_value=[2])
    second = Change(path="items", old_value=[1], new_value=[2])

    assert first == second
    assert hash(first) == hash(second)
    assert first != Change(path="items", old_value=[1], new_value=[3])


def test_empty_sentinel() -> None:
    assert Change.EMPTY == Change(path="")
    assert Change.EMPTY.is_empty is True
    assert Change(path="", old_value=None, new_value=0).is_empty is False


def test_change_set_collapses_duplicates() -> None:
    changes = ChangeSet()

    assert changes.add(Change(path="a", old_value={"k": 1}, new_value=None)) is True
    assert changes.add(Change(path="a", old_value={"k": 1}, new_value=None)) is False
    assert changes.add(Change(path="a", old_value={"k": 2}, new_value=None)) is True
    assert len(changes) == 2
    assert changes.count == 2


def test_change_set_never_holds_empty_change() -> None:
    changes = ChangeSet([Change.EMPTY, Change(path="")])

    assert len(changes) == 0
    assert not changes


def test_path_queries() -> None:
    changes = ChangeSet(
        [
            Change(path="customer.name", old_value="Ann", new_value="Bob"),
            Change(path="lines.0.sku", old_value="a", new_value="b"),
        ]
    )

    assert changes.has_change_at("customer.name")
    assert not changes.has_change_at("customer")
    assert changes.has_change_within("customer")
    assert changes.has_change_within("lines.0")
    assert not changes.has_change_within("total")


def test_selector_query() -> None:
    changes = ChangeSet([Change(path="customer.name", old_value="Ann", new_value="Bob")])

    assert changes.has_change_for(lambda order: order.customer.name)
    assert not changes.has_change_for(lambda order: order.customer)


def test_selector_query_rejects_computed_values() -> None:
    with pytest.raises(InvalidUsageError):
        ChangeSet().has_change_for(lambda order: 42)


def test_change_matching() -> None:
    change = Change(path="lines.0.sku", old_value="a", new_value="b")

    assert change.matches("lines.0.sku")
    assert not change.matches("lines.0")
    assert change.is_within("lines")
    assert not change.is_within("customer")


def test_change_text() -> None:
    assert str(Change(path="a.b", old_value=1, new_value=2)) == "a.b: {1} -> {2}"
    assert str(Change(path="", old_value="foo", new_value="bar")) == "{foo} -> {bar}"


def test_change_set_serialization_is_sorted_by_path() -> None:
    changes = ChangeSet(
        [
            Change(path="b", old_value=1, new_value=2),
            Change(path="a", old_value=None, new_value="x"),
        ]
    )

    assert [change.path for change in changes.to_list()] == ["a", "b"]
    assert changes.to_dict() == {
        "count": 2,
        "changes": [
            {"path": "a", "old_value": None, "new_value": "x"},
            {"path": "b", "old_value": 1, "new_value": 2},
        ],
    }
