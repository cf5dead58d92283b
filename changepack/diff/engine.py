"""Breadth-first change walker over two parallel object graphs."""

from __future__ import annotations

from collections import deque
import logging
from dataclasses import dataclass, field
from typing import Any

import structlog

from changepack.core.classify import classify_pair, materialize_sequence, tracks_identity
from changepack.core.members import Member, enumerate_members, read_member
from changepack.core.paths import join_path
from changepack.core.types import ValueKind
from changepack.diff.compare import compare_shallow
from changepack.diff.config import DEFAULT_DIFF_CONFIG, DiffConfig
from changepack.diff.exceptions import TraversalError, TraversalLimitError
from changepack.diff.models import Change, ChangeSet
from changepack.plugins import DiffEndEvent, DiffStartEvent, get_active_plugin_manager

# Routed through stdlib logging so the host application decides what is emitted.
logger = structlog.wrap_logger(
    logging.getLogger(__name__),
    wrapper_class=structlog.stdlib.BoundLogger,
)


def diff_values(
    old_value: Any,
    new_value: Any,
    *,
    path: str = "",
    stop_at_first_change: bool = False,
    config: DiffConfig | None = None,
) -> ChangeSet:
    """Walk two values side by side and collect every leaf difference.

    Composites are expanded member by member and sequences index by index,
    breadth first. When a leaf under a sequence differs, a change for the
    whole sequence is recorded alongside it.
    """
    resolved_config = config or DEFAULT_DIFF_CONFIG
    root_kind = classify_pair(
        old_value,
        new_value,
        extra_scalar_types=resolved_config.scalar_types,
    )

    plugin_manager = get_active_plugin_manager()
    plugin_manager.on_diff_start(
        DiffStartEvent(
            path=path,
            root_kind=root_kind,
            stop_at_first_change=stop_at_first_change,
            max_nodes=resolved_config.max_nodes,
        )
    )
    logger.debug("Diff walk started", path=path, root_kind=root_kind)

    walk = _Walk(config=resolved_config, stop_at_first_change=stop_at_first_change)
    try:
        changes = walk.run(old_value, new_value, path=path, root_kind=root_kind)
    except Exception as error:
        plugin_manager.on_diff_end(
            DiffEndEvent(
                path=path,
                status="error",
                processed_nodes=walk.processed,
                error_type=error.__class__.__name__,
                error_message=str(error),
            )
        )
        raise

    plugin_manager.on_diff_end(
        DiffEndEvent(
            path=path,
            status="ok",
            change_count=len(changes),
            processed_nodes=walk.processed,
            stopped_early=walk.stopped,
        )
    )
    logger.debug(
        "Diff walk finished",
        path=path,
        change_count=len(changes),
        processed_nodes=walk.processed,
        stopped_early=walk.stopped,
    )
    return changes


@dataclass(frozen=True, slots=True)
class _WorkItem:
    old_value: Any
    new_value: Any
    path: str
    # Sequence-level changes owed to every differing leaf below this item.
    container_changes: tuple[Change, ...] = ()


@dataclass(slots=True)
class _Walk:
    """State for one walk; never shared between calls."""

    config: DiffConfig
    stop_at_first_change: bool = False
    changes: ChangeSet = field(default_factory=ChangeSet)
    queue: deque[_WorkItem] = field(default_factory=deque)
    # id() -> object; holding the object keeps its id from being reused mid-walk.
    visited_old: dict[int, Any] = field(default_factory=dict)
    visited_new: dict[int, Any] = field(default_factory=dict)
    processed: int = 0
    stopped: bool = False

    def run(self, old_value: Any, new_value: Any, *, path: str, root_kind: ValueKind) -> ChangeSet:
        if root_kind == "unknown":
            return self.changes

        root = _WorkItem(old_value=old_value, new_value=new_value, path=path)
        self._count_node()

        if root_kind == "scalar":
            self._record(compare_shallow(path, old_value, new_value), ())
            return self.changes

        self._mark_visited(root, root_kind)
        self._expand(root, root_kind)

        while self.queue and not self.stopped:
            item = self.queue.popleft()
            self._count_node()
            self._visit(item)

        return self.changes

    def _visit(self, item: _WorkItem) -> None:
        kind = classify_pair(
            item.old_value,
            item.new_value,
            extra_scalar_types=self.config.scalar_types,
        )
        if kind == "unknown":
            return

        if kind == "scalar":
            change = compare_shallow(item.path, item.old_value, item.new_value)
            if not change.is_empty:
                self._record(change, item.container_changes)
            return

        if self._already_visited(item, kind):
            return

        self._mark_visited(item, kind)
        self._expand(item, kind)

    def _expand(self, item: _WorkItem, kind: ValueKind) -> None:
        if kind == "sequence":
            self._expand_sequence(item)
        else:
            self._expand_composite(item)

    def _expand_sequence(self, item: _WorkItem) -> None:
        old_items = materialize_sequence(item.old_value)
        new_items = materialize_sequence(item.new_value)
        max_len = max(len(old_items), len(new_items))

        container = Change(path=item.path, old_value=item.old_value, new_value=item.new_value)
        container_changes = item.container_changes
        if container not in container_changes:
            container_changes = container_changes + (container,)

        for idx in range(max_len):
            old_element = old_items[idx] if idx < len(old_items) else None
            new_element = new_items[idx] if idx < len(new_items) else None
            if old_element is None and new_element is None:
                continue
            self.queue.append(
                _WorkItem(
                    old_value=old_element,
                    new_value=new_element,
                    path=join_path(item.path, str(idx)),
                    container_changes=container_changes,
                )
            )

    def _expand_composite(self, item: _WorkItem) -> None:
        members = enumerate_members(
            item.old_value,
            item.new_value,
            include_private=self.config.include_private,
        )
        for member in members:
            child_path = join_path(item.path, member.name)
            self.queue.append(
                _WorkItem(
                    old_value=_read(item.old_value, member, child_path),
                    new_value=_read(item.new_value, member, child_path),
                    path=child_path,
                    container_changes=item.container_changes,
                )
            )

    def _already_visited(self, item: _WorkItem, kind: ValueKind) -> bool:
        if tracks_identity(item.old_value, kind) and id(item.old_value) in self.visited_old:
            return True
        if tracks_identity(item.new_value, kind) and id(item.new_value) in self.visited_new:
            return True
        return False

    def _mark_visited(self, item: _WorkItem, kind: ValueKind) -> None:
        if tracks_identity(item.old_value, kind):
            self.visited_old[id(item.old_value)] = item.old_value
        if tracks_identity(item.new_value, kind):
            self.visited_new[id(item.new_value)] = item.new_value

    def _record(self, change: Change, container_changes: tuple[Change, ...]) -> None:
        if change.is_empty:
            return
        self.changes.add(change)
        for container in container_changes:
            self.changes.add(container)
        if self.stop_at_first_change:
            self.stopped = True

    def _count_node(self) -> None:
        self.processed += 1
        max_nodes = self.config.max_nodes
        if max_nodes is not None and self.processed > max_nodes:
            raise TraversalLimitError(
                f"Diff walk exceeded max_nodes={max_nodes} (processed {self.processed} nodes)."
            )


def _read(instance: Any, member: Member, path: str) -> Any:
    try:
        return read_member(instance, member)
    except Exception as error:
        raise TraversalError(path, f"{error.__class__.__name__}: {error}") from error
