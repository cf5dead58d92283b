"""Human-readable rendering for change sets."""

from __future__ import annotations

from typing import Iterable

from changepack.diff.models import Change, ChangeSet


def render_change_summary(changes: ChangeSet) -> str:
    paths = changes.paths()
    return f"changes={len(changes)} paths={len(paths)} root_changed={'' in paths}"


def render_changes(changes: ChangeSet | Iterable[Change], *, max_changes: int = 8) -> str:
    ordered = changes.to_list() if isinstance(changes, ChangeSet) else list(changes)
    if not ordered:
        return "no changes detected"

    lines: list[str] = [f"{len(ordered)} change(s):"]
    for change in ordered[:max_changes]:
        lines.append(f"  {_label(change)}: {change.old_value!r} -> {change.new_value!r}")
    if len(ordered) > max_changes:
        lines.append(f"  ... {len(ordered) - max_changes} additional changes omitted")

    return "\n".join(lines)


def _label(change: Change) -> str:
    return change.path or "<root>"
