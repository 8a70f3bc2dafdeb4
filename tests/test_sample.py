from pathlib import Path

import pytest

from nestedcsv import database, pipeline, sample
from nestedcsv.decoder import decode
from nestedcsv.observers import RecordingObserver


def test_generate_sample_writes_header_and_rows(tmp_path: Path):
    path = sample.generate_sample(tmp_path / "data" / "large.csv", 25, seed=7)

    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == sample.HEADER
    assert len(lines) == 26

    records = decode(path.read_text(encoding="utf-8"))
    assert len(records) == 25
    first = records[0].fields
    assert first["name"]["firstName"] in sample.FIRST_NAMES
    assert first["address"]["city"] in sample.CITIES
    assert 15 <= int(first["age"]) <= 75


def test_generate_sample_is_reproducible_with_seed(tmp_path: Path):
    first = sample.generate_sample(tmp_path / "a.csv", 10, seed=1).read_text(encoding="utf-8")
    second = sample.generate_sample(tmp_path / "b.csv", 10, seed=1).read_text(encoding="utf-8")

    assert first == second


def test_generate_sample_rejects_negative_rows(tmp_path: Path):
    with pytest.raises(ValueError):
        sample.generate_sample(tmp_path / "bad.csv", -1)


def test_generated_sample_loads_in_several_batches(sqlite_connection, tmp_path: Path):
    path = sample.generate_sample(tmp_path / "large.csv", 2500, seed=3)
    observer = RecordingObserver()

    summary = pipeline.process_file(sqlite_connection, path, batch_size=1000, observer=observer)

    assert summary.rows_loaded == 2500
    assert [outcome.inserted for outcome in observer.batches] == [1000, 1000, 500]
    assert observer.skipped == []
    assert database.count_users(sqlite_connection) == 2500
    assert summary.distribution.total == 2500
