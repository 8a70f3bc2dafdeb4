"""Chunked bulk insertion of transformed records."""
from __future__ import annotations

import math
from typing import Iterator, List, Mapping, Optional, Protocol, Sequence

from .errors import SinkError
from .observers import BatchOutcome, PipelineObserver
from .transformer import TransformedRecord

DEFAULT_BATCH_SIZE = 1000


class BulkInsertSink(Protocol):
    def insert(self, rows: Sequence[Mapping[str, object]]) -> int:
        """Persist ``rows`` in one round trip and return the committed count."""
        ...


def iter_batches(
    records: Sequence[TransformedRecord],
    batch_size: int,
) -> Iterator[Sequence[TransformedRecord]]:
    for start in range(0, len(records), batch_size):
        yield records[start:start + batch_size]


def load(
    records: Sequence[TransformedRecord],
    sink: BulkInsertSink,
    batch_size: int = DEFAULT_BATCH_SIZE,
    observer: Optional[PipelineObserver] = None,
) -> int:
    """Insert ``records`` batch by batch and return the total inserted.

    Batches run strictly one after another. The first failing batch raises
    :class:`SinkError`; rows from earlier batches stay committed and later
    batches are never attempted.
    """
    if batch_size < 1:
        raise ValueError(f"Batch size must be a positive integer, got {batch_size}")

    observer = observer or PipelineObserver()
    total_batches = math.ceil(len(records) / batch_size)
    total_inserted = 0

    for batch_number, batch in enumerate(iter_batches(records, batch_size), start=1):
        rows: List[dict] = [record.to_row() for record in batch]
        try:
            inserted = sink.insert(rows)
        except Exception as exc:
            observer.on_batch_failed(batch_number, total_batches, exc)
            raise SinkError(batch_number, total_batches, total_inserted, str(exc)) from exc
        total_inserted += inserted
        observer.on_batch_complete(
            BatchOutcome(
                batch_number=batch_number,
                total_batches=total_batches,
                inserted=inserted,
                running_total=total_inserted,
            )
        )

    observer.on_load_complete(total_inserted)
    return total_inserted
