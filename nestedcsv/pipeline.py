"""End-to-end orchestration: read, decode, transform, load, report."""
from __future__ import annotations

import time
from dataclasses import dataclass
from pathlib import Path
from sqlite3 import Connection
from typing import Optional

from . import batch_loader, database, decoder, reporting, source, transformer
from .batch_loader import BulkInsertSink
from .errors import EmptyInputError
from .observers import PipelineObserver
from .reporting import AgeDistribution


@dataclass
class PipelineSummary:
    rows_loaded: int
    source: str
    duration: float
    distribution: Optional[AgeDistribution] = None

    def __str__(self) -> str:
        return f"Loaded {self.rows_loaded} rows from {self.source} in {self.duration:.2f}s"


def run_pipeline(
    content: str,
    sink: BulkInsertSink,
    *,
    batch_size: int = batch_loader.DEFAULT_BATCH_SIZE,
    observer: Optional[PipelineObserver] = None,
) -> int:
    """Decode, transform and load ``content``; return the inserted count.

    Raises :class:`EmptyInputError` when no data row survives decoding.
    """
    records = decoder.decode(content, observer)
    if not records:
        raise EmptyInputError("No valid records found in CSV file")
    transformed = transformer.transform(records, observer)
    return batch_loader.load(transformed, sink, batch_size, observer)


def process_file(
    conn: Connection,
    path: Path | str,
    *,
    batch_size: int = batch_loader.DEFAULT_BATCH_SIZE,
    observer: Optional[PipelineObserver] = None,
    sink: Optional[BulkInsertSink] = None,
) -> PipelineSummary:
    started = time.perf_counter()
    content = source.read_all(path)
    inserted = run_pipeline(
        content,
        sink or database.SQLiteSink(conn),
        batch_size=batch_size,
        observer=observer,
    )
    distribution = reporting.age_distribution(conn)
    return PipelineSummary(
        rows_loaded=inserted,
        source=str(path),
        duration=time.perf_counter() - started,
        distribution=distribution,
    )
