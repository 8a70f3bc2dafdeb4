import logging

from nestedcsv.observers import (
    BatchOutcome,
    CompositeObserver,
    LoggingObserver,
    RecordingObserver,
    RowShapeWarning,
)


def _emit_all(observer):
    observer.on_row_skipped(RowShapeWarning(line_number=3, expected=3, actual=2))
    observer.on_decoded(4)
    observer.on_transformed(4)
    observer.on_batch_complete(BatchOutcome(batch_number=1, total_batches=2, inserted=2, running_total=2))
    observer.on_batch_failed(2, 2, RuntimeError("boom"))
    observer.on_load_complete(2)


def test_composite_forwards_every_hook():
    first = RecordingObserver()
    second = RecordingObserver()

    _emit_all(CompositeObserver(first, second))

    for recorder in (first, second):
        assert [warning.line_number for warning in recorder.skipped] == [3]
        assert recorder.decoded == 4
        assert recorder.transformed == 4
        assert [outcome.batch_number for outcome in recorder.batches] == [1]
        assert recorder.failures == [2]
        assert recorder.loaded == 2


def test_logging_observer_logs_every_hook(caplog):
    logger = logging.getLogger("nestedcsv.test")

    with caplog.at_level(logging.INFO, logger="nestedcsv.test"):
        _emit_all(CompositeObserver(RecordingObserver(), LoggingObserver(logger)))

    messages = [record.getMessage() for record in caplog.records]
    assert messages == [
        "Row 3: Column count mismatch. Expected 3, got 2. Skipping.",
        "Parsed 4 records from CSV",
        "Transformed 4 records",
        "Batch 1/2: inserted 2 records",
        "Batch 2/2 failed: boom",
        "Total inserted: 2 records",
    ]
