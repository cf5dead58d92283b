"""Runtime value classification for the change walker."""

from __future__ import annotations

from collections.abc import Sequence, Set
from datetime import date, time, timedelta
from enum import Enum
from numbers import Number
from pathlib import PurePath
from types import BuiltinFunctionType, FunctionType, MethodType
from typing import Any
from uuid import UUID

from changepack.core.types import ValueKind

# Compared by equality, never traversed. Checked before the sequence test so
# that str/bytes/range are not walked element by element.
SCALAR_TYPES: tuple[type, ...] = (
    str,
    bytes,
    bytearray,
    Number,
    date,
    time,
    timedelta,
    UUID,
    Enum,
    PurePath,
    range,
    # No readable members; compared by equality so swaps are reported.
    type,
    FunctionType,
    BuiltinFunctionType,
    MethodType,
    BaseException,
)

# Equal literals of these types may share one object, so identity is not a
# reliable visited marker for them.
UNTRACKED_SEQUENCE_TYPES: tuple[type, ...] = (tuple, frozenset)


def classify_type(
    value_type: type,
    *,
    extra_scalar_types: tuple[type, ...] = (),
) -> ValueKind:
    """Classify a concrete runtime type."""
    if issubclass(value_type, SCALAR_TYPES) or (
        extra_scalar_types and issubclass(value_type, extra_scalar_types)
    ):
        return "scalar"
    if issubclass(value_type, (Sequence, Set)):
        return "sequence"
    return "composite"


def classify(value: Any, *, extra_scalar_types: tuple[type, ...] = ()) -> ValueKind:
    if value is None:
        return "unknown"
    return classify_type(type(value), extra_scalar_types=extra_scalar_types)


def classify_pair(
    old_value: Any,
    new_value: Any,
    *,
    extra_scalar_types: tuple[type, ...] = (),
) -> ValueKind:
    """Classify an old/new pair by whichever side is present.

    The old side wins when both are present. If the two present sides fall
    into different kinds the pair is compared as a scalar so that the shape
    change is reported once at the pair's own path.
    """
    if old_value is None:
        return classify(new_value, extra_scalar_types=extra_scalar_types)

    old_kind = classify(old_value, extra_scalar_types=extra_scalar_types)
    if new_value is None:
        return old_kind

    new_kind = classify(new_value, extra_scalar_types=extra_scalar_types)
    if old_kind != new_kind:
        return "scalar"
    return old_kind


def tracks_identity(value: Any, kind: ValueKind) -> bool:
    """Return True when ``value`` should enter a visited-identity set."""
    if value is None:
        return False
    if kind == "composite":
        return True
    if kind == "sequence":
        return not isinstance(value, UNTRACKED_SEQUENCE_TYPES)
    return False


def materialize_sequence(value: Any) -> list[Any]:
    """Return the elements of a sequence as an indexable list.

    Sets have no natural order; they are sorted by ``repr`` so that one run
    always pairs elements the same way.
    """
    if value is None:
        return []
    if isinstance(value, Set):
        return sorted(value, key=repr)
    return list(value)
