"""Simple reporting utilities for CLI output."""

from __future__ import annotations

from collections import defaultdict
from datetime import datetime
from pathlib import Path
from typing import Iterable

from .csvlog import format_duration, read_records
from .models import SessionRecord


class SummaryPrinter:
    """Render human-readable summaries of the activity log in the console."""

    def __init__(self, log_path: Path) -> None:
        self.log_path = Path(log_path)

    def print_daily_summary(self, day: datetime) -> None:
        records = records_for_day(self._load(), day)
        if not records:
            print("No activity recorded for the selected day.")
            return

        total = sum(record.duration_seconds for record in records)

        print(f"Summary for {day.strftime('%Y-%m-%d')}")
        print("-" * 40)
        print(f"Tracked time: {format_duration(total)}")
        print(f"Sessions:     {len(records)}")
        print()

        top_entries = aggregate_by_process(records)
        if top_entries:
            print("Top processes:")
            for process, seconds in top_entries[:5]:
                print(f"  {process:<30} {format_duration(seconds)}")

        top_windows = aggregate_top_windows(records)
        if top_windows:
            print()
            print("Top windows:")
            for process, window, seconds in top_windows[:5]:
                label = window or "(untitled)"
                print(f"  {process:<12} {label[:45]:<45} {format_duration(seconds)}")

    def _load(self) -> list[SessionRecord]:
        if not self.log_path.exists():
            return []
        return list(read_records(self.log_path))


def records_for_day(records: Iterable[SessionRecord], day: datetime) -> list[SessionRecord]:
    target = day.date()
    return [record for record in records if record.started_at.date() == target]


def aggregate_by_process(records: Iterable[SessionRecord]) -> list[tuple[str, float]]:
    totals: defaultdict[str, float] = defaultdict(float)
    for record in records:
        totals[record.process_name] += record.duration_seconds
    return sorted(totals.items(), key=lambda item: item[1], reverse=True)


def aggregate_top_windows(records: Iterable[SessionRecord]) -> list[tuple[str, str, float]]:
    totals: defaultdict[tuple[str, str], float] = defaultdict(float)
    for record in records:
        totals[(record.process_name, record.window_title)] += record.duration_seconds
    sorted_items = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    return [(proc, window, seconds) for (proc, window), seconds in sorted_items]
