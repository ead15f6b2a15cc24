"""Best-effort error side log."""

from __future__ import annotations

import logging
import traceback
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

logger = logging.getLogger(__name__)

ENTRY_TIMESTAMP_FMT = "%Y-%m-%d %H:%M:%S"


class ErrorReporter:
    """Appends failures to a day-named text file and never raises."""

    def __init__(
        self,
        directory: Path,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.directory = Path(directory)
        self._clock = clock

    def log_path_for(self, moment: datetime) -> Path:
        return self.directory / f"error_log_{moment:%Y%m%d}.txt"

    def report(self, exc: BaseException, context: Optional[str] = None) -> None:
        try:
            now = self._clock()
            details = context or "".join(
                traceback.format_exception(type(exc), exc, exc.__traceback__)
            ).rstrip("\n")
            entry = (
                f"{now.strftime(ENTRY_TIMESTAMP_FMT)} - {type(exc).__name__}: {exc}\n"
                f"{details}\n\n"
            )
            self.directory.mkdir(parents=True, exist_ok=True)
            with self.log_path_for(now).open("a", encoding="utf-8") as handle:
                handle.write(entry)
        except Exception:
            logger.debug("Failed to write error log entry.", exc_info=True)
