"""Data models for detected changes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Iterable, Iterator

from changepack.core.paths import record_path
from changepack.diff.exceptions import InvalidUsageError


@dataclass(frozen=True, slots=True)
class Change:
    """A single value difference at a dotted member path.

    ``path`` is empty for the comparison root. ``Change.EMPTY`` means no
    difference was found.
    """

    path: str
    old_value: Any = None
    new_value: Any = None

    EMPTY: ClassVar["Change"]

    # Values may be unhashable (lists, dicts); equal changes always share a path.
    def __hash__(self) -> int:
        return hash(self.path)

    @property
    def is_empty(self) -> bool:
        return self == Change.EMPTY

    def matches(self, path: str) -> bool:
        return self.path == path

    def is_within(self, path: str) -> bool:
        return self.path.startswith(path)

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "old_value": self.old_value,
            "new_value": self.new_value,
        }

    def __str__(self) -> str:
        prefix = f"{self.path}: " if self.path else ""
        return f"{prefix}{{{self.old_value}}} -> {{{self.new_value}}}"


Change.EMPTY = Change(path="")


class ChangeSet:
    """Unordered collection of unique changes."""

    __slots__ = ("_changes",)

    def __init__(self, changes: Iterable[Change] = ()) -> None:
        self._changes: set[Change] = set()
        for change in changes:
            self.add(change)

    def add(self, change: Change) -> bool:
        """Add ``change``; return False for duplicates and ``Change.EMPTY``."""
        if change.is_empty or change in self._changes:
            return False
        self._changes.add(change)
        return True

    def __len__(self) -> int:
        return len(self._changes)

    def __iter__(self) -> Iterator[Change]:
        return iter(self._changes)

    def __contains__(self, change: object) -> bool:
        return change in self._changes

    def __bool__(self) -> bool:
        return bool(self._changes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChangeSet):
            return NotImplemented
        return self._changes == other._changes

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"ChangeSet({self.to_list()!r})"

    @property
    def count(self) -> int:
        return len(self._changes)

    def has_change_at(self, path: str) -> bool:
        return any(change.matches(path) for change in self._changes)

    def has_change_within(self, path: str) -> bool:
        return any(change.is_within(path) for change in self._changes)

    def has_change_for(self, selector: Callable[[Any], Any]) -> bool:
        """Check for a change at the member path a selector reads.

        ``selector`` must only read attributes or items, e.g.
        ``lambda order: order.customer.name``.
        """
        path = record_path(selector)
        if path is None:
            raise InvalidUsageError("Selector must return the member it reads.")
        return self.has_change_at(path)

    def paths(self) -> set[str]:
        return {change.path for change in self._changes}

    def to_list(self) -> list[Change]:
        return sorted(self._changes, key=lambda change: (change.path, repr(change)))

    def to_dict(self) -> dict[str, Any]:
        return {
            "count": len(self._changes),
            "changes": [change.to_dict() for change in self.to_list()],
        }
