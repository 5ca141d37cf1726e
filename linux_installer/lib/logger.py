"""Installer-facing log facade.

A ``Logger`` is a formatter value plus a sink value. Nothing is subclassed per
destination: swap the sink to change where lines go, swap the formatter to
change how they look.
"""

from __future__ import annotations

import enum
import logging
import sys
from dataclasses import dataclass, field
from typing import Optional, Protocol, TextIO


class LogType(enum.Enum):
    ERROR = "Error"
    WARNING = "Warning"
    INFO = "Info"


@dataclass(frozen=True)
class LogEntry:
    type: LogType
    message: str


class LogFormatter(Protocol):
    def format(self, entry: LogEntry) -> str:
        ...


class LogSink(Protocol):
    def emit(self, entry: LogEntry, line: str) -> None:
        ...


class SimpleLogFormatter:
    def format(self, entry: LogEntry) -> str:
        return f"[{entry.type.value:<7}]-{entry.message}"


@dataclass
class ConsoleSink:
    """Errors go to stderr, everything else to stdout."""

    stdout: Optional[TextIO] = None
    stderr: Optional[TextIO] = None

    def emit(self, entry: LogEntry, line: str) -> None:
        if entry.type is LogType.ERROR:
            stream = self.stderr or sys.stderr
        else:
            stream = self.stdout or sys.stdout
        stream.write(line + "\n")
        stream.flush()


_LEVELS = {
    LogType.ERROR: logging.ERROR,
    LogType.WARNING: logging.WARNING,
    LogType.INFO: logging.INFO,
}


@dataclass
class LoggingSink:
    """Forward entries into stdlib logging (and so into the installer log file)."""

    name: str = "linux_installer.run"

    def emit(self, entry: LogEntry, line: str) -> None:
        logging.getLogger(self.name).log(_LEVELS[entry.type], "%s", line)


class NullSink:
    def emit(self, entry: LogEntry, line: str) -> None:
        pass


@dataclass
class TeeSink:
    sinks: tuple

    def emit(self, entry: LogEntry, line: str) -> None:
        for sink in self.sinks:
            sink.emit(entry, line)


@dataclass
class Logger:
    formatter: LogFormatter = field(default_factory=SimpleLogFormatter)
    sink: LogSink = field(default_factory=ConsoleSink)

    def log(self, entry: LogEntry) -> None:
        self.sink.emit(entry, self.formatter.format(entry))

    def error(self, message: str) -> None:
        self.log(LogEntry(LogType.ERROR, message))

    def warning(self, message: str) -> None:
        self.log(LogEntry(LogType.WARNING, message))

    def info(self, message: str) -> None:
        self.log(LogEntry(LogType.INFO, message))


def null_logger() -> Logger:
    """A logger that drops everything."""
    return Logger(sink=NullSink())
