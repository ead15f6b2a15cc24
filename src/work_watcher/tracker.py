"""Lifecycle engine wiring the sampler and log writer together."""

from __future__ import annotations

import logging
import queue
import threading
import time
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

from .config import TrackerSettings
from .csvlog import ensure_log_file
from .errors import ErrorReporter
from .models import SessionRecord
from .probe import WindowProbe
from .sampler import Sampler
from .writer import LogWriter

logger = logging.getLogger(__name__)


class ActivityTracker:
    """Runs the sampler and log writer on two background threads.

    Hosts call :meth:`start` and :meth:`stop`; console use goes through
    :meth:`run_forever`.
    """

    def __init__(
        self,
        probe: WindowProbe,
        log_path: Path,
        settings: TrackerSettings,
        reporter: ErrorReporter,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.log_path = Path(log_path)
        self.settings = settings
        self.reporter = reporter
        self.records: "queue.Queue[SessionRecord]" = queue.Queue()
        self.sampler = Sampler(probe, self.records, settings, reporter, clock=clock)
        self.writer = LogWriter(
            self.records,
            self.log_path,
            reporter,
            idle_interval=settings.writer_idle_interval.total_seconds(),
        )
        self._lock = threading.Lock()
        self._stop_event: Optional[threading.Event] = None
        self._sampler_thread: Optional[threading.Thread] = None
        self._writer_thread: Optional[threading.Thread] = None
        self._writer_halt: Optional[threading.Event] = None

    def start(self) -> None:
        with self._lock:
            if self._sampler_thread and self._sampler_thread.is_alive():
                return
            ensure_log_file(self.log_path)
            stop_event = threading.Event()
            if not (self._writer_thread and self._writer_thread.is_alive()):
                self._writer_halt = threading.Event()
                self._writer_thread = threading.Thread(
                    target=self.writer.run,
                    args=(self._writer_halt,),
                    name="work-watcher-writer",
                    daemon=True,
                )
                self._writer_thread.start()
            self._sampler_thread = threading.Thread(
                target=self.sampler.run_until_stopped,
                args=(stop_event,),
                name="work-watcher-sampler",
                daemon=True,
            )
            self._stop_event = stop_event
            self._sampler_thread.start()
            logger.info("Activity tracker started; logging to %s", self.log_path)

    def stop(self) -> None:
        with self._lock:
            stop_event, self._stop_event = self._stop_event, None
            sampler_thread, self._sampler_thread = self._sampler_thread, None
            writer_thread, self._writer_thread = self._writer_thread, None
            writer_halt, self._writer_halt = self._writer_halt, None
        if stop_event is None:
            return
        stop_event.set()
        if sampler_thread:
            self._join_sampler(sampler_thread)

        grace = self.settings.shutdown_grace.total_seconds()
        if not self.writer.wait_drained(grace):
            logger.warning(
                "Log writer did not drain within %.1fs; %d session(s) abandoned.",
                grace,
                self.writer.pending(),
            )
        if writer_halt is not None:
            writer_halt.set()
        if writer_thread:
            writer_thread.join(timeout=self.settings.writer_idle_interval.total_seconds() + 1)
        logger.info("Activity tracker stopped.")

    def _join_sampler(self, thread: threading.Thread) -> None:
        timeout = (
            self.settings.sample_interval + self.settings.shutdown_grace
        ).total_seconds()
        thread.join(timeout=timeout)
        if thread.is_alive():
            exc = TimeoutError(f"Sampler did not stop within {timeout:.1f}s")
            logger.warning("%s; continuing shutdown without it.", exc)
            self.reporter.report(exc, context="The focus probe may be blocked.")

    def is_running(self) -> bool:
        with self._lock:
            return bool(self._sampler_thread and self._sampler_thread.is_alive())

    @property
    def failed(self) -> bool:
        return self.sampler.error is not None

    def run_forever(self) -> None:
        """Block until interrupted or the sampler fails, then shut down."""
        self.start()
        try:
            while self.is_running():
                time.sleep(self.settings.sample_interval.total_seconds())
        except KeyboardInterrupt:
            logger.info("Tracker interrupted; flushing remaining sessions.")
        finally:
            self.stop()
