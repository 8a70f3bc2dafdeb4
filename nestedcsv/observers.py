"""Progress reporting hooks for the pipeline stages.

The decoding, transform and load functions never print or log on their own;
they call the hooks of the observer they are given.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class RowShapeWarning:
    """A data row whose field count differs from the header's."""

    line_number: int
    expected: int
    actual: int

    def __str__(self) -> str:
        return (
            f"Row {self.line_number}: Column count mismatch. "
            f"Expected {self.expected}, got {self.actual}. Skipping."
        )


@dataclass(frozen=True)
class BatchOutcome:
    batch_number: int
    total_batches: int
    inserted: int
    running_total: int


class PipelineObserver:
    """No-op base observer; subclasses override the hooks they care about."""

    def on_row_skipped(self, warning: RowShapeWarning) -> None:
        pass

    def on_decoded(self, count: int) -> None:
        pass

    def on_transformed(self, count: int) -> None:
        pass

    def on_batch_complete(self, outcome: BatchOutcome) -> None:
        pass

    def on_batch_failed(self, batch_number: int, total_batches: int, error: BaseException) -> None:
        pass

    def on_load_complete(self, total: int) -> None:
        pass


class LoggingObserver(PipelineObserver):
    """Report pipeline progress through the standard ``logging`` module."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self.logger = logger or logging.getLogger("nestedcsv.pipeline")

    def on_row_skipped(self, warning: RowShapeWarning) -> None:
        self.logger.warning("%s", warning)

    def on_decoded(self, count: int) -> None:
        self.logger.info("Parsed %d records from CSV", count)

    def on_transformed(self, count: int) -> None:
        self.logger.info("Transformed %d records", count)

    def on_batch_complete(self, outcome: BatchOutcome) -> None:
        self.logger.info(
            "Batch %d/%d: inserted %d records",
            outcome.batch_number,
            outcome.total_batches,
            outcome.inserted,
        )

    def on_batch_failed(self, batch_number: int, total_batches: int, error: BaseException) -> None:
        self.logger.error("Batch %d/%d failed: %s", batch_number, total_batches, error)

    def on_load_complete(self, total: int) -> None:
        self.logger.info("Total inserted: %d records", total)


@dataclass
class RecordingObserver(PipelineObserver):
    """Keep every reported event in memory."""

    skipped: List[RowShapeWarning] = field(default_factory=list)
    batches: List[BatchOutcome] = field(default_factory=list)
    failures: List[int] = field(default_factory=list)
    decoded: Optional[int] = None
    transformed: Optional[int] = None
    loaded: Optional[int] = None

    def on_row_skipped(self, warning: RowShapeWarning) -> None:
        self.skipped.append(warning)

    def on_decoded(self, count: int) -> None:
        self.decoded = count

    def on_transformed(self, count: int) -> None:
        self.transformed = count

    def on_batch_complete(self, outcome: BatchOutcome) -> None:
        self.batches.append(outcome)

    def on_batch_failed(self, batch_number: int, total_batches: int, error: BaseException) -> None:
        self.failures.append(batch_number)

    def on_load_complete(self, total: int) -> None:
        self.loaded = total


class CompositeObserver(PipelineObserver):
    """Forward every hook to each wrapped observer in order."""

    def __init__(self, *observers: PipelineObserver) -> None:
        self.observers = observers

    def on_row_skipped(self, warning: RowShapeWarning) -> None:
        for observer in self.observers:
            observer.on_row_skipped(warning)

    def on_decoded(self, count: int) -> None:
        for observer in self.observers:
            observer.on_decoded(count)

    def on_transformed(self, count: int) -> None:
        for observer in self.observers:
            observer.on_transformed(count)

    def on_batch_complete(self, outcome: BatchOutcome) -> None:
        for observer in self.observers:
            observer.on_batch_complete(outcome)

    def on_batch_failed(self, batch_number: int, total_batches: int, error: BaseException) -> None:
        for observer in self.observers:
            observer.on_batch_failed(batch_number, total_batches, error)

    def on_load_complete(self, total: int) -> None:
        for observer in self.observers:
            observer.on_load_complete(total)
