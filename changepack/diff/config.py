"""Configuration for change detection walks."""

from __future__ import annotations

from dataclasses import dataclass, field

from changepack.diff.exceptions import DiffConfigError


@dataclass(slots=True)
class DiffConfig:
    """Tuning knobs for a single diff walk.

    ``max_nodes`` bounds how many work items one call may process; ``None``
    leaves the walk unbounded. ``scalar_types`` lists extra types that are
    compared by equality instead of being walked.
    """

    max_nodes: int | None = None
    scalar_types: tuple[type, ...] = field(default_factory=tuple)
    include_private: bool = False

    def __post_init__(self) -> None:
        if self.max_nodes is not None:
            if isinstance(self.max_nodes, bool) or not isinstance(self.max_nodes, int):
                raise DiffConfigError("max_nodes must be an integer or None")
            if self.max_nodes < 1:
                raise DiffConfigError("max_nodes must be at least 1")

        self.scalar_types = tuple(self.scalar_types)
        invalid = [item for item in self.scalar_types if not isinstance(item, type)]
        if invalid:
            raise DiffConfigError(
                f"scalar_types entries must be types: {', '.join(repr(item) for item in invalid)}"
            )

        if not isinstance(self.include_private, bool):
            raise DiffConfigError("include_private must be a boolean")


DEFAULT_DIFF_CONFIG = DiffConfig()
