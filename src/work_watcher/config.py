"""Configuration models and helpers for the work watcher."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta


@dataclass(slots=True)
class TrackerSettings:
    """Runtime configuration for the activity tracker."""

    sample_interval: timedelta = timedelta(seconds=1)
    min_duration: timedelta = timedelta(seconds=5)
    writer_idle_interval: timedelta = timedelta(seconds=1)
    shutdown_grace: timedelta = timedelta(seconds=2)

    @classmethod
    def from_intervals(
        cls,
        sample_seconds: float,
        min_duration_seconds: float = 5.0,
        writer_idle_seconds: float | None = None,
        grace_seconds: float = 2.0,
    ) -> "TrackerSettings":
        writer_idle = writer_idle_seconds if writer_idle_seconds is not None else sample_seconds
        return cls(
            sample_interval=timedelta(seconds=sample_seconds),
            min_duration=timedelta(seconds=min_duration_seconds),
            writer_idle_interval=timedelta(seconds=writer_idle),
            shutdown_grace=timedelta(seconds=grace_seconds),
        )
