"""Small structured logger with pluggable formatters, handlers and filters."""

from __future__ import annotations

import sys
import threading
import time
from abc import ABC, abstractmethod
from enum import IntEnum
from typing import ClassVar, TextIO


class LogLevel(IntEnum):
    """Severity of a log record, ordered from least to most severe."""

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3
    FATAL = 4
    UNKNOWN = 5


class Formatter(ABC):
    """Turns a log record into a single line of text."""

    @abstractmethod
    def format(self, message: str, level: LogLevel, logger_name: str, timestamp: str) -> str:
        """Return the formatted record."""


class SimpleFormatter(Formatter):
    """Formats records as ``[timestamp][LEVEL][name]: "message"``."""

    # WARNING deliberately has no label: it is rendered as an empty level field.
    _LABELS: ClassVar[dict[LogLevel, str]] = {
        LogLevel.DEBUG: "DEBUG",
        LogLevel.INFO: "INFO",
        LogLevel.ERROR: "ERROR",
        LogLevel.FATAL: "FATAL",
        LogLevel.UNKNOWN: "UNKNOWN",
    }

    def format(self, message: str, level: LogLevel, logger_name: str, timestamp: str) -> str:
        label = self._LABELS.get(level, "")
        return f'[{timestamp}][{label}][{logger_name}]: "{message}"'


class Handler(ABC):
    """Destination for formatted log records."""

    def __init__(self, formatter: Formatter) -> None:
        self.formatter = formatter

    @abstractmethod
    def emit(self, message: str, level: LogLevel, logger_name: str, timestamp: str) -> None:
        """Write one record."""


class ConsoleHandler(Handler):
    """Writes records to stdout, or to stderr for ERROR, FATAL and UNKNOWN."""

    _TO_STDERR = frozenset({LogLevel.ERROR, LogLevel.FATAL, LogLevel.UNKNOWN})

    def __init__(
        self,
        formatter: Formatter,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
    ) -> None:
        super().__init__(formatter)
        self._stdout = stdout
        self._stderr = stderr

    def emit(self, message: str, level: LogLevel, logger_name: str, timestamp: str) -> None:
        formatted = self.formatter.format(message, level, logger_name, timestamp)
        if level in self._TO_STDERR:
            stream = self._stderr if self._stderr is not None else sys.stderr
        else:
            stream = self._stdout if self._stdout is not None else sys.stdout
        print(formatted, file=stream, flush=True)


class FileHandler(Handler):
    """Appends records to a file; records are dropped if the file cannot be opened."""

    def __init__(self, filename: str, formatter: Formatter) -> None:
        super().__init__(formatter)
        self.filename = filename
        self._file: TextIO | None
        try:
            self._file = open(filename, "a", encoding="utf-8")
        except OSError:
            self._file = None
            print(f"cannot open log file: {filename}", file=sys.stderr)

    def emit(self, message: str, level: LogLevel, logger_name: str, timestamp: str) -> None:
        if self._file is None or self._file.closed:
            return
        formatted = self.formatter.format(message, level, logger_name, timestamp)
        self._file.write(formatted + "\n")
        self._file.flush()

    def close(self) -> None:
        """Close the underlying file."""
        if self._file is not None and not self._file.closed:
            self._file.close()

    def __enter__(self) -> FileHandler:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class Filter(ABC):
    """Decides whether a record is passed on to the handlers."""

    @abstractmethod
    def filter(self, message: str, level: LogLevel, logger_name: str) -> bool:
        """Return True to keep the record, False to drop it."""


class Logger:
    """Named logger dispatching records to its handlers."""

    _lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(self, name: str, level: LogLevel = LogLevel.INFO) -> None:
        self.name = name
        self.level = LogLevel(level)
        self.handlers: list[Handler] = []
        self.filters: list[Filter] = []

    def add_handler(self, handler: Handler) -> None:
        self.handlers.append(handler)

    def add_filter(self, filter: Filter) -> None:  # noqa: A002
        self.filters.append(filter)

    def set_level(self, level: LogLevel) -> None:
        self.level = LogLevel(level)

    def should_log(self, message: str, level: LogLevel) -> bool:
        """True if the level passes the threshold and every filter accepts the record."""
        if level < self.level:
            return False
        return all(f.filter(message, level, self.name) for f in self.filters)

    def log(self, message: str, level: LogLevel) -> None:
        if not self.should_log(message, level):
            return
        timestamp = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime())
        with self._lock:
            for handler in self.handlers:
                handler.emit(message, level, self.name, timestamp)

    def debug(self, message: str) -> None:
        self.log(message, LogLevel.DEBUG)

    def info(self, message: str) -> None:
        self.log(message, LogLevel.INFO)

    def warning(self, message: str) -> None:
        self.log(message, LogLevel.WARNING)

    def error(self, message: str) -> None:
        self.log(message, LogLevel.ERROR)

    def fatal(self, message: str) -> None:
        self.log(message, LogLevel.FATAL)

    def unknown(self, message: str) -> None:
        self.log(message, LogLevel.UNKNOWN)


class LoggerManager:
    """Process-wide registry of loggers by name."""

    _instance: ClassVar[LoggerManager | None] = None
    _instance_lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(self) -> None:
        self._loggers: dict[str, Logger] = {}
        self._loggers_lock = threading.Lock()

    @classmethod
    def get_instance(cls) -> LoggerManager:
        with cls._instance_lock:
            if cls._instance is None:
                cls._instance = cls()
            return cls._instance

    def get_logger(self, name: str) -> Logger:
        """Return the logger called ``name``, creating it at INFO level if needed."""
        with self._loggers_lock:
            logger = self._loggers.get(name)
            if logger is None:
                logger = self._loggers[name] = Logger(name)
            return logger


def get_logger(name: str) -> Logger:
    """Return the shared logger called ``name``."""
    return LoggerManager.get_instance().get_logger(name)