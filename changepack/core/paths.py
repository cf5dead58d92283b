"""Dotted path helpers and selector-to-path recording."""

from __future__ import annotations

from typing import Any, Callable

from changepack.core.types import PATH_SEPARATOR


def join_path(base: str, segment: str) -> str:
    """Append ``segment`` to ``base``; the root path is the empty string."""
    if not base:
        return segment
    return f"{base}{PATH_SEPARATOR}{segment}"


class _PathRecorder:
    """Stand-in object that remembers the attribute and item accesses made on it."""

    __slots__ = ("_segments",)

    def __init__(self, segments: tuple[str, ...] = ()) -> None:
        object.__setattr__(self, "_segments", segments)

    def __getattr__(self, name: str) -> "_PathRecorder":
        if name.startswith("__"):
            raise AttributeError(name)
        return _PathRecorder(self._segments + (name,))

    def __getitem__(self, key: Any) -> "_PathRecorder":
        return _PathRecorder(self._segments + (str(key),))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("path selectors must not assign attributes")


def record_path(selector: Callable[[Any], Any]) -> str | None:
    """Run ``selector`` against a recorder and return the dotted path it reads.

    Returns ``None`` when the selector does not return the recorder, e.g. when
    it computes a value instead of reading a member.
    """
    result = selector(_PathRecorder())
    if not isinstance(result, _PathRecorder):
        return None
    return PATH_SEPARATOR.join(object.__getattribute__(result, "_segments"))
