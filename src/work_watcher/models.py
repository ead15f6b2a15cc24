"""Domain models for focus sessions."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional


@dataclass(slots=True, frozen=True)
class FocusSample:
    """What held focus at a single poll. Missing fields mean focus was unknown."""

    window_title: Optional[str]
    process_name: Optional[str]
    timestamp: datetime

    @property
    def resolved(self) -> bool:
        return self.window_title is not None and self.process_name is not None


@dataclass(slots=True, frozen=True)
class ActiveSession:
    """The window currently holding focus and when it gained it."""

    window_title: str
    process_name: str
    started_at: datetime


@dataclass(slots=True, frozen=True)
class SessionRecord:
    """A completed focus session, ready to be persisted."""

    started_at: datetime
    ended_at: datetime
    process_name: str
    window_title: str

    @property
    def duration(self) -> timedelta:
        return self.ended_at - self.started_at

    @property
    def duration_seconds(self) -> float:
        return self.duration.total_seconds()
