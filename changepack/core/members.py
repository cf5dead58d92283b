"""Member enumeration for composite values."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields, is_dataclass
from functools import lru_cache
import inspect
from typing import Any

_MISSING = object()


@dataclass(frozen=True, slots=True)
class Member:
    """A named member of a composite value.

    ``key`` is the mapping key for item members and the attribute name
    otherwise. ``name`` is the path segment.
    """

    name: str
    key: Any
    is_item: bool = False


def enumerate_members(
    old_value: Any,
    new_value: Any,
    *,
    include_private: bool = False,
) -> list[Member]:
    """List the members to compare for an old/new composite pair.

    Members are the union over both sides, old side first.
    """
    members: list[Member] = []
    seen: set[tuple[bool, Any]] = set()

    for instance in (old_value, new_value):
        if instance is None:
            continue
        for member in _instance_members(instance, include_private=include_private):
            marker = (member.is_item, member.key)
            if marker in seen:
                continue
            seen.add(marker)
            members.append(member)

    return members


def read_member(instance: Any, member: Member) -> Any:
    """Read ``member`` from ``instance``; absent members read as ``None``.

    Exceptions raised by property getters propagate to the caller.
    """
    if instance is None:
        return None

    if member.is_item:
        if not isinstance(instance, Mapping):
            return None
        return instance.get(member.key)

    descriptor = inspect.getattr_static(type(instance), member.key, _MISSING)
    if isinstance(descriptor, property):
        return getattr(instance, member.key)
    return getattr(instance, member.key, None)


def _instance_members(instance: Any, *, include_private: bool) -> list[Member]:
    if isinstance(instance, Mapping):
        return [Member(name=str(key), key=key, is_item=True) for key in instance.keys()]

    names = list(_declared_names(type(instance), include_private))
    instance_dict = getattr(instance, "__dict__", None)
    if isinstance(instance_dict, dict):
        declared = set(names)
        names.extend(
            name
            for name in instance_dict
            if isinstance(name, str)
            and name not in declared
            and _is_visible(name, include_private)
        )
    return [Member(name=name, key=name) for name in names]


@lru_cache(maxsize=512)
def _declared_names(value_type: type, include_private: bool) -> tuple[str, ...]:
    names: list[str] = []

    if is_dataclass(value_type):
        names.extend(field.name for field in fields(value_type))

    for klass in reversed(value_type.__mro__):
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        names.extend(slot for slot in slots if slot not in ("__dict__", "__weakref__"))

    for klass in value_type.__mro__:
        for name, attribute in vars(klass).items():
            if isinstance(attribute, property):
                names.append(name)

    unique: list[str] = []
    for name in names:
        if name in unique or not _is_visible(name, include_private):
            continue
        unique.append(name)
    return tuple(unique)


def _is_visible(name: str, include_private: bool) -> bool:
    if name.startswith("__"):
        return False
    if name.startswith("_"):
        return include_private
    return True
