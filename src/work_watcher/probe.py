"""Foreground window probes."""

from __future__ import annotations

import ctypes
import logging
import sys
from ctypes import wintypes
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Protocol

import psutil

from .models import FocusSample

logger = logging.getLogger(__name__)

UNKNOWN_PROCESS = "Unknown"
MAX_TITLE_LENGTH = 256


@dataclass(slots=True, frozen=True)
class FocusedWindow:
    handle: int
    window_title: Optional[str]


class WindowProbe(Protocol):
    def get_focused_window(self) -> FocusedWindow: ...

    def get_owning_process_name(self, handle: int) -> str: ...


class WindowsWindowProbe:
    """Retrieves the foreground window title and owning process name."""

    def __init__(self) -> None:
        self._user32 = ctypes.windll.user32  # type: ignore[attr-defined]

    def get_focused_window(self) -> FocusedWindow:
        hwnd = self._user32.GetForegroundWindow()
        if not hwnd:
            return FocusedWindow(handle=0, window_title=None)

        buffer = ctypes.create_unicode_buffer(MAX_TITLE_LENGTH)
        length = self._user32.GetWindowTextW(hwnd, buffer, MAX_TITLE_LENGTH)
        window_title = buffer.value if length > 0 else None
        return FocusedWindow(handle=hwnd, window_title=window_title)

    def get_owning_process_name(self, handle: int) -> str:
        pid = wintypes.DWORD()
        self._user32.GetWindowThreadProcessId(handle, ctypes.byref(pid))
        if not pid.value:
            return UNKNOWN_PROCESS
        try:
            return process_name_for_pid(pid.value)
        except (psutil.Error, ProcessLookupError):
            logger.debug("Could not resolve process for pid %s", pid.value)
            return UNKNOWN_PROCESS


def process_name_for_pid(pid: int) -> str:
    """Return the executable name without extension, e.g. ``chrome``."""
    name = psutil.Process(pid).name()
    if name.lower().endswith(".exe"):
        name = name[: -len(".exe")]
    return name


def create_default_probe() -> WindowProbe:
    if sys.platform != "win32":
        raise RuntimeError("Foreground window tracking is only supported on Windows.")
    return WindowsWindowProbe()


def read_focus_sample(probe: WindowProbe, timestamp: datetime) -> FocusSample:
    """Query the probe once; the process is only looked up for a titled window."""
    window = probe.get_focused_window()
    if window.window_title is None:
        return FocusSample(window_title=None, process_name=None, timestamp=timestamp)
    try:
        process_name = probe.get_owning_process_name(window.handle) or UNKNOWN_PROCESS
    except (psutil.Error, OSError):
        logger.debug("Process lookup failed for handle %s", window.handle, exc_info=True)
        process_name = UNKNOWN_PROCESS
    return FocusSample(
        window_title=window.window_title,
        process_name=process_name,
        timestamp=timestamp,
    )
