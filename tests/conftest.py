"""Shared pytest fixtures."""
from __future__ import annotations

import queue
from datetime import datetime, timedelta
from pathlib import Path
from typing import Optional

import pytest

from work_watcher.config import TrackerSettings
from work_watcher.errors import ErrorReporter
from work_watcher.probe import FocusedWindow


class FakeClock:
    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


class FakeProbe:
    """Serves a scripted focus target; ``None`` means nothing focused."""

    def __init__(self) -> None:
        self.current: Optional[tuple[str, str]] = None
        self.process_error: Optional[Exception] = None
        self.calls = 0

    def focus(self, process_name: Optional[str], window_title: Optional[str] = None) -> None:
        if process_name is None:
            self.current = None
        else:
            self.current = (process_name, window_title or "")

    def get_focused_window(self) -> FocusedWindow:
        self.calls += 1
        if self.current is None:
            return FocusedWindow(handle=0, window_title=None)
        return FocusedWindow(handle=42, window_title=self.current[1])

    def get_owning_process_name(self, handle: int) -> str:
        if self.process_error is not None:
            raise self.process_error
        assert self.current is not None
        return self.current[0]


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 1, 1, 9, 0, 0))


@pytest.fixture
def probe() -> FakeProbe:
    return FakeProbe()


@pytest.fixture
def reporter(tmp_path: Path) -> ErrorReporter:
    return ErrorReporter(tmp_path / "errors")


@pytest.fixture
def records() -> queue.Queue:
    return queue.Queue()


@pytest.fixture
def fast_settings() -> TrackerSettings:
    return TrackerSettings.from_intervals(
        sample_seconds=0.01,
        min_duration_seconds=5.0,
        writer_idle_seconds=0.01,
        grace_seconds=2.0,
    )
