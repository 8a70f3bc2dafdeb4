"""Exception hierarchy for the CSV pipeline."""
from __future__ import annotations


class PipelineError(Exception):
    """Base class for every failure that terminates a run."""


class SourceUnavailableError(PipelineError):
    """The source file exists but could not be read."""


class SourceNotFoundError(SourceUnavailableError):
    """The source file does not exist."""

    def __init__(self, path: object) -> None:
        super().__init__(f"File not found: {path}")
        self.path = path


class EmptyInputError(PipelineError):
    """No usable lines remained after dropping blank ones."""

    def __init__(self, message: str = "CSV file is empty") -> None:
        super().__init__(message)


class InvalidHeaderError(PipelineError):
    """A header cell does not describe a valid dotted path."""


class ValidationError(PipelineError):
    """A record failed the mandatory-field checks."""

    def __init__(self, line_number: int, field: str, message: str) -> None:
        super().__init__(f"Row {line_number}: {message}")
        self.line_number = line_number
        self.field = field


class SinkError(PipelineError):
    """A bulk insert failed.

    ``inserted`` is the number of rows committed by the batches that
    completed before the failing one; those rows stay in the store.
    """

    def __init__(
        self,
        batch_number: int,
        total_batches: int,
        inserted: int,
        reason: str,
    ) -> None:
        super().__init__(
            f"Batch {batch_number}/{total_batches} failed after {inserted} rows "
            f"were inserted: {reason}"
        )
        self.batch_number = batch_number
        self.total_batches = total_batches
        self.inserted = inserted
