"""Stable public API surface for ChangeKit.

This module is the supported import path for library users.
"""

from __future__ import annotations

from typing import Any, Callable

from changepack.core.classify import classify_pair
from changepack.core.paths import record_path
from changepack.diff import (
    Change,
    ChangeSet,
    DiffConfig,
    DiffConfigError,
    DiffError,
    InvalidUsageError,
    TraversalError,
    TraversalLimitError,
    diff_values,
    render_changes,
)

__version__ = "0.1.0"

Selector = Callable[[Any], Any]


def get_changes(
    old: Any,
    new: Any,
    *,
    selector: Selector | None = None,
    path_prefix: str = "",
    config: DiffConfig | None = None,
) -> ChangeSet:
    """Collect every difference between two values.

    Args:
        old: Value before the change.
        new: Value after the change.
        selector: Optional projection applied to both values before walking,
            e.g. ``lambda order: order.customer``. A ``None`` side stays
            ``None``.
        path_prefix: Literal dotted path reported for the projected root.
            It is used as given and never derived from ``selector``.
        config: Walk configuration.

    Returns:
        The set of unique changes, empty when nothing differs.
    """
    old_value, new_value = _project(old, new, selector, path_prefix)
    return diff_values(old_value, new_value, path=path_prefix, config=config)


def get_change(old: Any, new: Any, *, config: DiffConfig | None = None) -> Change:
    """Compare two scalar values.

    Returns:
        The single change, or ``Change.EMPTY`` when the values are equal.

    Raises:
        InvalidUsageError: if the pair is a sequence or composite.
    """
    scalar_types = config.scalar_types if config is not None else ()
    kind = classify_pair(old, new, extra_scalar_types=scalar_types)
    if kind in ("sequence", "composite"):
        raise InvalidUsageError(
            f"get_change only compares scalar values; got a {kind} pair. Use get_changes instead."
        )

    for change in diff_values(old, new, config=config):
        return change
    return Change.EMPTY


def has_changes(
    old: Any,
    new: Any,
    *,
    selector: Selector | None = None,
    path_prefix: str = "",
    config: DiffConfig | None = None,
) -> bool:
    """Return True if any difference exists; stops at the first one found."""
    old_value, new_value = _project(old, new, selector, path_prefix)
    changes = diff_values(
        old_value,
        new_value,
        path=path_prefix,
        stop_at_first_change=True,
        config=config,
    )
    return bool(changes)


def resolve_path(selector: Selector) -> str:
    """Return the dotted member path read by ``selector``.

    ``resolve_path(lambda order: order.lines[0].sku)`` is ``"lines.0.sku"``.
    """
    path = record_path(selector)
    if path is None:
        raise InvalidUsageError("Selector must return the member it reads.")
    return path


def _project(
    old: Any,
    new: Any,
    selector: Selector | None,
    path_prefix: str,
) -> tuple[Any, Any]:
    if selector is None:
        return old, new
    return _apply(selector, old, path_prefix), _apply(selector, new, path_prefix)


def _apply(selector: Selector, value: Any, path_prefix: str) -> Any:
    if value is None:
        return None
    try:
        return selector(value)
    except Exception as error:
        raise TraversalError(path_prefix, f"{error.__class__.__name__}: {error}") from error


__all__ = [
    "__version__",
    "Change",
    "ChangeSet",
    "DiffConfig",
    "DiffError",
    "DiffConfigError",
    "InvalidUsageError",
    "TraversalError",
    "TraversalLimitError",
    "Selector",
    "get_changes",
    "get_change",
    "has_changes",
    "render_changes",
    "resolve_path",
]
