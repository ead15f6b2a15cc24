"""Queue-draining log writer."""

from __future__ import annotations

import logging
import queue
import threading
from pathlib import Path

from .csvlog import append_record
from .errors import ErrorReporter
from .models import SessionRecord

logger = logging.getLogger(__name__)


class LogWriter:
    """Polls the record queue and appends each record to the activity log."""

    def __init__(
        self,
        records: "queue.Queue[SessionRecord]",
        log_path: Path,
        reporter: ErrorReporter,
        idle_interval: float = 1.0,
    ) -> None:
        self.records = records
        self.log_path = Path(log_path)
        self.reporter = reporter
        self.idle_interval = idle_interval

    def process_one(self) -> bool:
        """Write the next queued record. Returns False if the queue was empty."""
        try:
            record = self.records.get_nowait()
        except queue.Empty:
            return False
        try:
            append_record(self.log_path, record)
        except (OSError, ValueError) as exc:
            logger.error("Error writing to log file %s: %s", self.log_path, exc)
            self.reporter.report(exc)
        finally:
            self.records.task_done()
        return True

    def run(self, halted: threading.Event) -> None:
        """Poll until ``halted`` is set. Each writer thread gets its own event."""
        logger.info("Log writer started; appending to %s", self.log_path)
        while not halted.is_set():
            try:
                handled = self.process_one()
            except Exception as exc:
                logger.exception("Unexpected error writing to log file %s", self.log_path)
                self.reporter.report(exc)
                continue
            if not handled:
                halted.wait(self.idle_interval)
        logger.debug("Log writer halted.")

    def wait_drained(self, timeout: float) -> bool:
        """Block until every queued record has been handled or ``timeout`` elapses."""
        condition = self.records.all_tasks_done
        with condition:
            return condition.wait_for(lambda: not self.records.unfinished_tasks, timeout)

    def pending(self) -> int:
        return self.records.qsize()
