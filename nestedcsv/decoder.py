"""Decode CSV text with dotted headers into nested records."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from .errors import EmptyInputError
from .nested import FieldPath, NestedRecord, lift_path, merge_into, split_path
from .observers import PipelineObserver, RowShapeWarning
from .tokenizer import tokenize


@dataclass(frozen=True)
class DecodedRecord:
    """A nested record together with the source line it came from."""

    line_number: int
    fields: NestedRecord


def _non_empty_lines(content: str) -> List[Tuple[int, str]]:
    return [
        (number, line)
        for number, line in enumerate(content.split("\n"), start=1)
        if line.strip()
    ]


def parse_header(line: str) -> List[FieldPath]:
    return [split_path(cell) for cell in tokenize(line)]


def build_record(headers: List[FieldPath], values: List[str]) -> NestedRecord:
    record: NestedRecord = {}
    for path, value in zip(headers, values):
        merge_into(record, lift_path(path, value))
    return record


def decode(
    content: str,
    observer: Optional[PipelineObserver] = None,
) -> List[DecodedRecord]:
    """Decode ``content`` into records, in input order.

    The first non-blank line holds the header paths. Rows whose field count
    differs from the header are reported to ``observer`` and dropped.
    """
    observer = observer or PipelineObserver()
    lines = _non_empty_lines(content)
    if not lines:
        raise EmptyInputError()

    _, header_line = lines[0]
    headers = parse_header(header_line)

    records: List[DecodedRecord] = []
    for line_number, line in lines[1:]:
        values = tokenize(line)
        if len(values) != len(headers):
            observer.on_row_skipped(
                RowShapeWarning(
                    line_number=line_number,
                    expected=len(headers),
                    actual=len(values),
                )
            )
            continue
        records.append(DecodedRecord(line_number, build_record(headers, values)))

    observer.on_decoded(len(records))
    return records


def decode_records(content: str) -> List[NestedRecord]:
    """Like :func:`decode` but return only the nested mappings."""
    return [record.fields for record in decode(content)]
