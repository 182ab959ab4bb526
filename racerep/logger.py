"""Simple logger that writes timestamped lines to the console and to a file."""

from __future__ import annotations

import enum
import threading
from datetime import datetime
from typing import TextIO

DEFAULT_LOG_FILE = "iRacingReputation.log"

_START_MESSAGE = "=== iRacing Reputation System Started ==="
_SHUTDOWN_MESSAGE = "=== iRacing Reputation System Shutdown ==="


class LogLevel(enum.IntEnum):
    """Severity of a log message; lower values are less severe."""

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3
    CRITICAL = 4


_LABELS = {
    LogLevel.DEBUG: "DEBUG",
    LogLevel.INFO: "INFO",
    LogLevel.WARNING: "WARN",
    LogLevel.ERROR: "ERROR",
    LogLevel.CRITICAL: "CRIT",
}


class _Sink:
    """Shared state of the process-wide logger."""

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.file: TextIO | None = None
        self.min_level = LogLevel.INFO
        self.initialized = False

    def open(self, filename: str) -> None:
        try:
            self.file = open(filename, "a", encoding="utf-8")
        except OSError:
            self.file = None
        self.initialized = True

    def close(self) -> None:
        if self.file is not None:
            self.file.close()
            self.file = None

    def emit(self, label: str, message: str) -> None:
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        line = f"[{timestamp}] [{label}] {message}"
        print(line, flush=True)
        if self.file is not None:
            self.file.write(line + "\n")
            self.file.flush()


_sink = _Sink()


def configure(filename: str = DEFAULT_LOG_FILE, min_level: int = LogLevel.INFO) -> None:
    """Open (or reopen) the log file in append mode and set the minimum level."""
    with _sink.lock:
        _sink.min_level = LogLevel(min_level)
        _sink.close()
        _sink.open(filename)
        _sink.emit(_LABELS[LogLevel.INFO], _START_MESSAGE)


def shutdown() -> None:
    """Write the closing line and close the log file."""
    with _sink.lock:
        if _sink.file is not None:
            _sink.emit(_LABELS[LogLevel.INFO], _SHUTDOWN_MESSAGE)
            _sink.close()
        _sink.initialized = False


def set_level(level: int) -> None:
    """Set the minimum level a message needs to be written."""
    _sink.min_level = LogLevel(level)


def _write(level: LogLevel, message: str) -> None:
    if level < _sink.min_level:
        return
    with _sink.lock:
        if not _sink.initialized:
            _sink.open(DEFAULT_LOG_FILE)
        _sink.emit(_LABELS[level], message)


def debug(message: str) -> None:
    _write(LogLevel.DEBUG, message)


def info(message: str) -> None:
    _write(LogLevel.INFO, message)


def warning(message: str) -> None:
    _write(LogLevel.WARNING, message)


def error(message: str) -> None:
    _write(LogLevel.ERROR, message)


def critical(message: str) -> None:
    _write(LogLevel.CRITICAL, message)