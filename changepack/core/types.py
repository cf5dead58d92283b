"""Type definitions for ChangeKit value classification."""

from typing import Literal

ValueKind = Literal["scalar", "sequence", "composite", "unknown"]

VALUE_KINDS: tuple[str, ...] = (
    "scalar",
    "sequence",
    "composite",
    "unknown",
)

PATH_SEPARATOR = "."
