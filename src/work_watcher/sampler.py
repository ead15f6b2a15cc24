"""Focus sampling loop."""

from __future__ import annotations

import logging
import queue
import threading
from datetime import datetime
from typing import Callable, Optional

from .config import TrackerSettings
from .errors import ErrorReporter
from .models import SessionRecord
from .probe import WindowProbe, read_focus_sample
from .sessions import SessionTracker

logger = logging.getLogger(__name__)


class Sampler:
    """Samples the focused window at a fixed interval and queues finished sessions."""

    def __init__(
        self,
        probe: WindowProbe,
        records: "queue.Queue[SessionRecord]",
        settings: TrackerSettings,
        reporter: ErrorReporter,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.probe = probe
        self.records = records
        self.settings = settings
        self.reporter = reporter
        self._clock = clock
        self._sessions = SessionTracker(min_duration=settings.min_duration)
        self.error: Optional[BaseException] = None

    @property
    def sessions(self) -> SessionTracker:
        return self._sessions

    def sample_once(self) -> Optional[SessionRecord]:
        sample = read_focus_sample(self.probe, self._clock())
        record = self._sessions.observe(sample)
        if record:
            self._enqueue(record)
        return record

    def flush(self) -> Optional[SessionRecord]:
        """Finalize the open session at the current time."""
        record = self._sessions.close(self._clock())
        if record:
            self._enqueue(record)
        return record

    def run_until_stopped(self, stop_event: threading.Event) -> None:
        """Run the sampler until the provided event is set."""
        interval = self.settings.sample_interval.total_seconds()
        logger.info("Sampler started; polling every %.1fs", interval)
        try:
            while not stop_event.is_set():
                self.sample_once()
                stop_event.wait(interval)
        except Exception as exc:
            self.error = exc
            logger.exception("Sampler failed; shutting down.")
            self.reporter.report(exc)
        finally:
            self.flush()
            logger.info("Sampler stopped.")

    def _enqueue(self, record: SessionRecord) -> None:
        self.records.put(record)
        logger.debug(
            "Queued session: process=%s title=%s duration=%.1fs",
            record.process_name,
            record.window_title,
            record.duration_seconds,
        )
