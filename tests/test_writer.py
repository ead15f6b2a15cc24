"""Tests for the queue-draining log writer."""
from __future__ import annotations

import queue
import threading
from datetime import datetime, timedelta
from pathlib import Path

from work_watcher.csvlog import ensure_log_file, read_records
from work_watcher.models import SessionRecord
from work_watcher.writer import LogWriter

T0 = datetime(2024, 1, 1, 9, 0, 0)


def make_record(index: int) -> SessionRecord:
    start = T0 + timedelta(minutes=index)
    return SessionRecord(
        started_at=start,
        ended_at=start + timedelta(seconds=10),
        process_name=f"proc{index}",
        window_title=f"Window {index}",
    )


def test_process_one_on_empty_queue(tmp_path: Path, records, reporter):
    writer = LogWriter(records, tmp_path / "activity_log.csv", reporter)
    assert writer.process_one() is False


def test_records_are_written_in_queue_order(tmp_path: Path, records, reporter):
    path = tmp_path / "activity_log.csv"
    ensure_log_file(path)
    writer = LogWriter(records, path, reporter)
    expected = [make_record(i) for i in range(3)]
    for record in expected:
        records.put(record)

    while writer.process_one():
        pass

    assert list(read_records(path)) == expected


def test_order_preserved_with_concurrent_producer(tmp_path: Path, records, reporter):
    path = tmp_path / "activity_log.csv"
    ensure_log_file(path)
    writer = LogWriter(records, path, reporter, idle_interval=0.01)
    halted = threading.Event()
    thread = threading.Thread(target=writer.run, args=(halted,), daemon=True)
    thread.start()

    expected = [make_record(i) for i in range(50)]
    for record in expected:
        records.put(record)

    assert writer.wait_drained(timeout=5)
    halted.set()
    thread.join(timeout=5)
    assert list(read_records(path)) == expected


def test_write_failure_is_reported_and_record_dropped(tmp_path: Path, records, reporter):
    writer = LogWriter(records, tmp_path / "missing" / "activity_log.csv", reporter)
    records.put(make_record(0))
    records.put(make_record(1))

    assert writer.process_one() is True

    good_path = tmp_path / "activity_log.csv"
    ensure_log_file(good_path)
    writer.log_path = good_path
    assert writer.process_one() is True

    assert list(read_records(good_path)) == [make_record(1)]
    error_text = "".join(
        path.read_text(encoding="utf-8") for path in reporter.directory.glob("error_log_*.txt")
    )
    assert "FileNotFoundError" in error_text
    assert writer.wait_drained(timeout=0)


def test_wait_drained_times_out_with_pending_records(tmp_path: Path, records, reporter):
    writer = LogWriter(records, tmp_path / "activity_log.csv", reporter)
    records.put(make_record(0))
    assert writer.wait_drained(timeout=0.05) is False
    assert writer.pending() == 1


def test_unexpected_error_does_not_stop_the_writer(tmp_path: Path, records, reporter, monkeypatch):
    import work_watcher.writer as writer_module

    path = tmp_path / "activity_log.csv"
    ensure_log_file(path)
    real_append = writer_module.append_record
    calls = []

    def flaky_append(log_path, record):
        calls.append(record)
        if len(calls) == 1:
            raise RuntimeError("serializer broke")
        real_append(log_path, record)

    monkeypatch.setattr(writer_module, "append_record", flaky_append)
    writer = LogWriter(records, path, reporter, idle_interval=0.01)
    halted = threading.Event()
    thread = threading.Thread(target=writer.run, args=(halted,), daemon=True)
    thread.start()
    for index in range(3):
        records.put(make_record(index))

    assert writer.wait_drained(timeout=5)
    halted.set()
    thread.join(timeout=5)

    assert not thread.is_alive()
    assert list(read_records(path)) == [make_record(1), make_record(2)]
    error_text = "".join(
        log.read_text(encoding="utf-8") for log in reporter.directory.glob("error_log_*.txt")
    )
    assert "RuntimeError: serializer broke" in error_text
