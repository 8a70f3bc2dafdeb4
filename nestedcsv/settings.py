"""Shared configuration constants for nestedcsv."""
from __future__ import annotations

DB_PATH_ENV = "NESTEDCSV_DB"
CSV_PATH_ENV = "NESTEDCSV_CSV_PATH"
BATCH_SIZE_ENV = "NESTEDCSV_BATCH_SIZE"

DEFAULT_DB_PATH = "users.db"
DEFAULT_BATCH_SIZE = 1000


def resolve_batch_size(value: str | int | None) -> int:
    """Return ``value`` as a positive batch size, or the default when unset."""
    if value is None or value == "":
        return DEFAULT_BATCH_SIZE
    try:
        size = int(value)
    except ValueError as exc:
        raise ValueError(f"Batch size must be an integer (received {value!r})") from exc
    if size < 1:
        raise ValueError(f"Batch size must be a positive integer (received {size})")
    return size
