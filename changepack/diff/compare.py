"""Shallow comparison of scalar values."""

from __future__ import annotations

from typing import Any

from changepack.diff.models import Change


def compare_shallow(path: str, old_value: Any, new_value: Any) -> Change:
    """Compare two scalar values without recursing.

    Returns ``Change.EMPTY`` when nothing differs. A value that is absent on
    exactly one side is always a change. Identity is checked before ``==``,
    as Python containers do, so a NaN is equal to itself.
    """
    if old_value is None and new_value is None:
        return Change.EMPTY

    if old_value is None or new_value is None:
        return Change(path=path, old_value=old_value, new_value=new_value)

    if old_value is new_value or old_value == new_value:
        return Change.EMPTY

    return Change(path=path, old_value=old_value, new_value=new_value)
