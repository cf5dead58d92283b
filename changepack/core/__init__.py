"""Value classification and introspection primitives for ChangeKit."""

from changepack.core.classify import (
    SCALAR_TYPES,
    classify,
    classify_pair,
    classify_type,
    materialize_sequence,
    tracks_identity,
)
from changepack.core.members import Member, enumerate_members, read_member
from changepack.core.paths import join_path, record_path
from changepack.core.types import PATH_SEPARATOR, VALUE_KINDS, ValueKind

__all__ = [
    "SCALAR_TYPES",
    "PATH_SEPARATOR",
    "VALUE_KINDS",
    "ValueKind",
    "Member",
    "classify",
    "classify_pair",
    "classify_type",
    "enumerate_members",
    "join_path",
    "materialize_sequence",
    "read_member",
    "record_path",
    "tracks_identity",
]
