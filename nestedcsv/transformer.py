"""Validate nested records and reshape them into the ``users`` schema."""
from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .decoder import DecodedRecord
from .errors import ValidationError
from .nested import NestedRecord, NestedValue, is_object
from .observers import PipelineObserver

FIXED_COLUMNS = ("name", "age", "address")

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass(frozen=True)
class TransformedRecord:
    name: str
    age: int
    address: Optional[NestedRecord] = None
    additional_info: Optional[NestedRecord] = None
    line_number: int = 0

    def to_row(self) -> dict:
        """Return the insert payload with structured values as JSON text."""
        return {
            "name": self.name,
            "age": self.age,
            "address": _to_json(self.address),
            "additional_info": _to_json(self.additional_info),
        }


def _to_json(value: Optional[NestedRecord]) -> Optional[str]:
    if value is None:
        return None
    return json.dumps(value)


def _non_empty_text(value: Optional[NestedValue]) -> bool:
    return isinstance(value, str) and value != ""


def parse_age(value: NestedValue, line_number: int) -> int:
    """Read the leading integer of ``value`` the way ``parseInt`` does."""
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        if match:
            return int(match.group(1))
    raise ValidationError(line_number, "age", f"Field 'age' is not an integer: {value!r}")


def transform_record(record: NestedRecord, line_number: int) -> TransformedRecord:
    name = record.get("name")
    if not is_object(name) or not (
        _non_empty_text(name.get("firstName")) and _non_empty_text(name.get("lastName"))  # type: ignore[union-attr]
    ):
        raise ValidationError(
            line_number,
            "name",
            "Missing mandatory field 'name.firstName' or 'name.lastName'",
        )

    age = record.get("age")
    if not age:
        raise ValidationError(line_number, "age", "Missing mandatory field 'age'")

    address = record.get("address")
    additional_info = {
        key: value for key, value in record.items() if key not in FIXED_COLUMNS
    }

    return TransformedRecord(
        name=f"{name['firstName']} {name['lastName']}",  # type: ignore[index]
        age=parse_age(age, line_number),
        address=address if is_object(address) else None,  # type: ignore[arg-type]
        additional_info=additional_info or None,
        line_number=line_number,
    )


def transform(
    records: Sequence[DecodedRecord],
    observer: Optional[PipelineObserver] = None,
) -> List[TransformedRecord]:
    """Transform every record or raise on the first invalid one.

    Validation is all-or-nothing: a single failing row aborts the pass and no
    transformed records are returned.
    """
    observer = observer or PipelineObserver()
    transformed = [transform_record(record.fields, record.line_number) for record in records]
    observer.on_transformed(len(transformed))
    return transformed
