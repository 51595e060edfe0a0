"""Thread-safe levelled logging with optional colour and file output."""

from __future__ import annotations

import enum
import sys
import threading
import time
from typing import IO, Optional


class LogLevel(enum.IntEnum):
    """Severity of a log message; lower levels are filtered first."""

    INFO = 0
    SUCCESS = 1
    WARN = 2
    ERROR = 3
    DEBUG = 4


_COLORS = {
    LogLevel.INFO: "\033[1;37m",
    LogLevel.SUCCESS: "\033[1;32m",
    LogLevel.WARN: "\033[1;33m",
    LogLevel.ERROR: "\033[1;31m",
    LogLevel.DEBUG: "\033[1;36m",
}
_RESET = "\033[0m"


def _timestamp() -> str:
    return time.strftime("[%H:%M:%S]", time.localtime())


def _format(message: str, args: tuple) -> str:
    return message.format(*args) if args else message


class Logger:
    """Writes formatted, timestamped messages to the console or a file."""

    def __init__(self, *, console: Optional[IO[str]] = None,
                 minimum_level: LogLevel = LogLevel.INFO) -> None:
        self.color_enabled = True
        self.auto_flush = True
        self.minimum_level = LogLevel(minimum_level)
        self._console = console
        self._file: Optional[IO[str]] = None
        self._lock = threading.Lock()

    def set_color_enabled(self, enabled: bool) -> None:
        self.color_enabled = bool(enabled)

    def set_minimum_level(self, level: LogLevel) -> None:
        self.minimum_level = LogLevel(level)

    def set_auto_flush(self, enabled: bool) -> None:
        self.auto_flush = bool(enabled)

    def set_log_file(self, filepath) -> None:
        """Send output to ``filepath`` (appending); fall back to the console on failure."""
        with self._lock:
            self._close_file()
            try:
                self._file = open(filepath, "a", encoding="utf-8")
            except OSError:
                self._file = None

    def reset_output_to_console(self) -> None:
        with self._lock:
            self._close_file()

    def _close_file(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None

    def _stream(self) -> IO[str]:
        if self._file is not None:
            return self._file
        return self._console if self._console is not None else sys.stdout

    def log(self, level: LogLevel, message: str, *args) -> None:
        """Format ``message`` with ``args`` and print it unless below the minimum level."""
        if LogLevel(level) < self.minimum_level:
            return
        self.print(level, _format(message, args))

    def raise_error(self, message: str, *args) -> None:
        """Print an error message and raise it as a RuntimeError."""
        text = _format(message, args)
        self.print(LogLevel.ERROR, text)
        raise RuntimeError(text)

    def print(self, level: LogLevel, message: str) -> None:
        level = LogLevel(level)
        color = _COLORS[level] if self.color_enabled else ""
        reset = _RESET if self.color_enabled else ""
        line = f"{color}{_timestamp()} [{level.name}] {message}{reset}\n"
        with self._lock:
            out = self._stream()
            out.write(line)
            if self.auto_flush:
                out.flush()


default_logger = Logger()


def log_info(message: str, *args) -> None:
    default_logger.log(LogLevel.INFO, message, *args)


def log_success(message: str, *args) -> None:
    default_logger.log(LogLevel.SUCCESS, message, *args)


def log_warn(message: str, *args) -> None:
    default_logger.log(LogLevel.WARN, message, *args)


def log_error(message: str, *args) -> None:
    default_logger.log(LogLevel.ERROR, message, *args)


def log_debug(message: str, *args) -> None:
    default_logger.log(LogLevel.DEBUG, message, *args)


def log_throw(message: str, *args) -> None:
    default_logger.raise_error(message, *args)


class ScopedLog:
    """Context manager logging a message on entry and an elapsed time on exit."""

    def __init__(self, name: str, on_create_msg: str, on_destroy_msg: str,
                 logger: Optional[Logger] = None) -> None:
        self.name = name
        self.on_create_msg = on_create_msg
        self.on_destroy_msg = on_destroy_msg
        self._logger = logger
        self._start = 0.0

    @property
    def logger(self) -> Logger:
        return self._logger if self._logger is not None else default_logger

    def __enter__(self) -> "ScopedLog":
        self._start = time.monotonic()
        self.logger.log(LogLevel.INFO, "[{}] {}", self.name, self.on_create_msg)
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        elapsed = int((time.monotonic() - self._start) * 1000)
        self.logger.log(LogLevel.SUCCESS, "[{}] {} (elapsed: {} ms)",
                        self.name, self.on_destroy_msg, elapsed)
        return False