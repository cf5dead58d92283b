from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import Decimal
from enum import Enum
from pathlib import Path
from uuid import uuid4

import pytest

from changepack.core import (
    classify,
    classify_pair,
    materialize_sequence,
    tracks_identity,
)


def _module_function() -> None:
    return None


class Color(Enum):
    RED = "red"


@dataclass
class Point:
    x: int
    y: int


@pytest.mark.parametrize(
    "value",
    [
        "text",
        b"bytes",
        1,
        1.5,
        True,
        Decimal("1.10"),
        date(2026, 1, 1),
        datetime(2026, 1, 1, 12, 0),
        timedelta(seconds=3),
        uuid4(),
        Color.RED,
        Path("/tmp/x"),
        len,
        _module_function,
        Point,
        Point(1, 2).__eq__,
        ValueError("bad"),
    ],
)
def test_scalar_values(value: object) -> None:
    assert classify(value) == "scalar"


@pytest.mark.parametrize("value", [[1], (1,), {1}, frozenset({1}), deque([1])])
def test_sequence_values(value: object) -> None:
    assert classify(value) == "sequence"


@pytest.mark.parametrize("value", [{"a": 1}, Point(1, 2), object()])
def test_composite_values(value: object) -> None:
    assert classify(value) == "composite"


def test_none_is_unknown() -> None:
    assert classify(None) == "unknown"
    assert classify_pair(None, None) == "unknown"


def test_pair_uses_the_present_side() -> None:
    assert classify_pair(None, [1]) == "sequence"
    assert classify_pair(Point(1, 2), None) == "composite"
    assert classify_pair(None, "x") == "scalar"


def test_pair_with_different_kinds_is_scalar() -> None:
    assert classify_pair(1, [1]) == "scalar"
    assert classify_pair({"a": 1}, [1]) == "scalar"


def test_extra_scalar_types() -> None:
    assert classify(Point(1, 2), extra_scalar_types=(Point,)) == "scalar"
    assert classify_pair(Point(1, 2), Point(1, 3), extra_scalar_types=(Point,)) == "scalar"


def test_materialize_sequence() -> None:
    assert materialize_sequence(None) == []
    assert materialize_sequence((1, 2)) == [1, 2]
    assert materialize_sequence({10, 9}) == [10, 9]


def test_identity_tracking_skips_immutable_sequences_and_scalars() -> None:
    assert tracks_identity([1], "sequence") is True
    assert tracks_identity((1,), "sequence") is False
    assert tracks_identity(frozenset({1}), "sequence") is False
    assert tracks_identity(Point(1, 2), "composite") is True
    assert tracks_identity("x", "scalar") is False
    assert tracks_identity(None, "composite") is False
