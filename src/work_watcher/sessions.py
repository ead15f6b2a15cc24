"""Session segmentation for the stream of focus samples."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Optional

from .models import ActiveSession, FocusSample, SessionRecord

logger = logging.getLogger(__name__)

MIN_DURATION = timedelta(seconds=5)


def finalize(
    session: ActiveSession,
    now: datetime,
    min_duration: timedelta = MIN_DURATION,
) -> Optional[SessionRecord]:
    """Close ``session`` at ``now``; sessions shorter than ``min_duration`` are discarded."""
    if now - session.started_at < min_duration:
        return None
    return SessionRecord(
        started_at=session.started_at,
        ended_at=now,
        process_name=session.process_name,
        window_title=session.window_title,
    )


class SessionTracker:
    """Two-state machine: no session, or one active session.

    Each observed sample either keeps the active session (same window and
    process), or ends it and possibly opens a new one seeded from the sample.
    """

    def __init__(self, min_duration: timedelta = MIN_DURATION) -> None:
        self.min_duration = min_duration
        self._active: Optional[ActiveSession] = None

    @property
    def active(self) -> Optional[ActiveSession]:
        return self._active

    def observe(self, sample: FocusSample) -> Optional[SessionRecord]:
        """Feed one sample; return the record of a session it ended, if it qualifies."""
        if not self._changed(sample):
            return None

        record: Optional[SessionRecord] = None
        if self._active is not None:
            record = finalize(self._active, sample.timestamp, self.min_duration)
            if record is None:
                logger.debug(
                    "Discarded short session: process=%s title=%s",
                    self._active.process_name,
                    self._active.window_title,
                )

        if sample.resolved:
            self._active = ActiveSession(
                window_title=sample.window_title,  # type: ignore[arg-type]
                process_name=sample.process_name,  # type: ignore[arg-type]
                started_at=sample.timestamp,
            )
            logger.debug(
                "Focus changed: process=%s title=%s",
                sample.process_name,
                sample.window_title,
            )
        else:
            self._active = None
        return record

    def close(self, now: datetime) -> Optional[SessionRecord]:
        """End the open session at ``now`` as if focus had moved away."""
        session, self._active = self._active, None
        if session is None:
            return None
        return finalize(session, now, self.min_duration)

    def _changed(self, sample: FocusSample) -> bool:
        current = self._active
        if current is None:
            return sample.resolved
        if not sample.resolved:
            return True
        return (sample.window_title, sample.process_name) != (
            current.window_title,
            current.process_name,
        )
