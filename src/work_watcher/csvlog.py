"""CSV activity log: one line per qualifying focus session."""

from __future__ import annotations

import csv
import io
from datetime import datetime
from pathlib import Path
from typing import Iterator

from .models import SessionRecord


HEADER = ("StartTimestamp", "EndTimestamp", "Duration", "ProcessName", "WindowTitle")
TIMESTAMP_FMT = "%Y-%m-%d %H:%M:%S"
ENCODING = "utf-8"


def format_duration(seconds: float) -> str:
    """Render as HH:MM:SS, hours unbounded, fractional seconds truncated."""
    total_seconds = int(seconds)
    hours, remainder = divmod(total_seconds, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def format_record(record: SessionRecord) -> str:
    """Serialize a record as a single newline-terminated CSV line."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(
        [
            record.started_at.strftime(TIMESTAMP_FMT),
            record.ended_at.strftime(TIMESTAMP_FMT),
            format_duration(record.duration_seconds),
            record.process_name,
            record.window_title,
        ]
    )
    return buffer.getvalue()


def ensure_log_file(path: Path) -> None:
    """Create the log with its header line if it does not exist yet."""
    path = Path(path)
    if path.exists():
        return
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding=ENCODING, newline="") as handle:
        csv.writer(handle, lineterminator="\n").writerow(HEADER)


def append_record(path: Path, record: SessionRecord) -> None:
    line = format_record(record)
    with Path(path).open("a", encoding=ENCODING, newline="") as handle:
        handle.write(line)


def read_records(path: Path) -> Iterator[SessionRecord]:
    """Parse a log written by :func:`append_record` back into records."""
    with Path(path).open("r", encoding=ENCODING, newline="") as handle:
        reader = csv.reader(handle)
        for row in reader:
            if not row or tuple(row) == HEADER:
                continue
            if len(row) != len(HEADER):
                raise ValueError(f"Malformed activity log row: {row!r}")
            start, end, _duration, process_name, window_title = row
            yield SessionRecord(
                started_at=datetime.strptime(start, TIMESTAMP_FMT),
                ended_at=datetime.strptime(end, TIMESTAMP_FMT),
                process_name=process_name,
                window_title=window_title,
            )
