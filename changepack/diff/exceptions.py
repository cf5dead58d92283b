"""Diff subsystem exceptions."""


class DiffError(Exception):
    """Base class for change detection errors."""


class DiffConfigError(DiffError):
    """Invalid diff configuration."""


class InvalidUsageError(DiffError):
    """An entry point was called with values it does not support."""


class TraversalError(DiffError):
    """Reading a member failed while walking the object graph."""

    def __init__(self, path: str, message: str) -> None:
        super().__init__(f"Failed to read member at path {path!r}: {message}")
        self.path = path


class TraversalLimitError(DiffError):
    """The walk exceeded the configured node budget."""
