"""Build nested records from dotted header paths.

A record value is either a scalar string or a mapping of further values.
Records are plain dictionaries so they can be serialised to JSON directly.
"""
from __future__ import annotations

import copy
from typing import Any, Dict, Sequence, Tuple, Union

from .errors import InvalidHeaderError

PATH_SEPARATOR = "."

NestedValue = Union[str, Dict[str, Any]]
NestedRecord = Dict[str, NestedValue]
FieldPath = Tuple[str, ...]


def is_object(value: object) -> bool:
    return isinstance(value, dict)


def split_path(header: str) -> FieldPath:
    """Turn a header cell such as ``address.city`` into its path segments."""
    segments = tuple(header.strip().split(PATH_SEPARATOR))
    if any(segment == "" for segment in segments):
        raise InvalidHeaderError(f"Invalid header path: {header!r}")
    return segments


def lift_path(path: Sequence[str], value: str) -> NestedRecord:
    """Return a single-branch record holding ``value`` at ``path``."""
    if not path:
        raise InvalidHeaderError("A field path needs at least one segment")

    node: NestedValue = value
    for segment in reversed(path):
        node = {segment: node}
    return node  # type: ignore[return-value]


def merge_into(target: NestedRecord, source: NestedRecord) -> NestedRecord:
    """Deep-merge ``source`` into ``target`` and return ``target``.

    Objects present on both sides are merged recursively. Anything else is
    overwritten by the source value, so a later scalar replaces an earlier
    object at the same key and vice versa.
    """
    for key, value in source.items():
        existing = target.get(key)
        if is_object(value) and is_object(existing):
            merge_into(existing, value)  # type: ignore[arg-type]
        elif is_object(value):
            target[key] = copy.deepcopy(value)
        else:
            target[key] = value
    return target
