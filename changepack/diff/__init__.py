"""Diff subsystem for ChangeKit."""

from changepack.diff.compare import compare_shallow
from changepack.diff.config import DEFAULT_DIFF_CONFIG, DiffConfig
from changepack.diff.engine import diff_values
from changepack.diff.exceptions import (
    DiffConfigError,
    DiffError,
    InvalidUsageError,
    TraversalError,
    TraversalLimitError,
)
from changepack.diff.formatting import render_change_summary, render_changes
from changepack.diff.models import Change, ChangeSet

__all__ = [
    "Change",
    "ChangeSet",
    "DiffConfig",
    "DEFAULT_DIFF_CONFIG",
    "DiffError",
    "DiffConfigError",
    "InvalidUsageError",
    "TraversalError",
    "TraversalLimitError",
    "compare_shallow",
    "diff_values",
    "render_change_summary",
    "render_changes",
]
