"""Sinks: destinations that receive, buffer and write log events."""

from __future__ import annotations

import sys
import threading
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Iterable, Sequence, TextIO

from soralog.circular_buffer import CircularBuffer
from soralog.level import Level, level_to_str
from soralog.threads import get_thread_name, get_thread_number

__all__ = [
    "ThreadInfoType",
    "Stream",
    "Event",
    "Sink",
    "NullSink",
    "ConsoleSink",
    "FileSink",
    "SyslogSink",
    "Multisink",
]

DEFAULT_CAPACITY = 64
DEFAULT_MAX_MESSAGE_LENGTH = 512
DEFAULT_BUFFER_SIZE = 4 * 1024 * 1024
DEFAULT_LATENCY = 0


class ThreadInfoType(Enum):
    """What to tell about the emitting thread in each line."""

    NONE = "none"
    NAME = "name"
    ID = "id"


class Stream(Enum):
    """Console stream a console sink writes to."""

    STDOUT = "stdout"
    STDERR = "stderr"


@dataclass(frozen=True)
class Event:
    """One log event as captured at push time."""

    timestamp: float
    thread_number: int
    thread_name: str
    logger_name: str
    level: Level
    message: str


_COLORS = {
    Level.CRITICAL: "\x1b[1;91m",
    Level.ERROR: "\x1b[91m",
    Level.WARN: "\x1b[93m",
    Level.INFO: "\x1b[92m",
    Level.VERBOSE: "\x1b[96m",
    Level.DEBUG: "\x1b[94m",
    Level.TRACE: "\x1b[90m",
}
_RESET = "\x1b[0m"


def _render(format: Any, args: Sequence[Any]) -> str:
    text = str(format)
    try:
        return text.format(*args)
    except (IndexError, KeyError, ValueError, AttributeError, TypeError) as exc:
        return f"{text}  <format error: {exc}>"


def _format_line(
    event: Event,
    thread_info_type: ThreadInfoType,
    with_color: bool = False,
    with_time: bool = True,
) -> str:
    parts = []
    if with_time:
        stamp = datetime.fromtimestamp(event.timestamp)
        parts.append(stamp.strftime("%y.%m.%d %H:%M:%S.%f"))
    if thread_info_type is ThreadInfoType.NAME:
        parts.append(f"{event.thread_name:<15}")
    elif thread_info_type is ThreadInfoType.ID:
        parts.append(f"T:{event.thread_number:<6}")
    level_name = f"{level_to_str(event.level):<8}"
    logger_name = event.logger_name
    if with_color:
        color = _COLORS.get(event.level, "")
        level_name = f"{color}{level_name}{_RESET}"
        logger_name = f"{color}{logger_name}{_RESET}"
    parts.extend([level_name, logger_name, event.message])
    return "  ".join(parts)


class Sink(ABC):
    """Receives events, keeps them in a ring and writes them out on flush."""

    def __init__(
        self,
        name: str,
        thread_info_type: ThreadInfoType = ThreadInfoType.NONE,
        capacity: int | None = None,
        max_message_length: int | None = None,
        buffer_size: int | None = None,
        latency: int | None = None,
    ) -> None:
        self._name = name
        self.thread_info_type = thread_info_type
        self.max_message_length = (
            DEFAULT_MAX_MESSAGE_LENGTH if max_message_length is None else max_message_length
        )
        self.buffer_size = DEFAULT_BUFFER_SIZE if buffer_size is None else buffer_size
        self.latency = DEFAULT_LATENCY if latency is None else latency
        self._buffer: CircularBuffer[Event] = CircularBuffer(
            DEFAULT_CAPACITY if capacity is None else capacity
        )
        self._state_lock = threading.Lock()
        self._flush_lock = threading.RLock()
        self._pending_size = 0
        self._last_flush = time.monotonic()

    @property
    def name(self) -> str:
        return self._name

    def _make_event(self, logger_name: str, level: Level, format: Any, args: Sequence[Any]) -> Event:
        message = _render(format, args)[: self.max_message_length]
        return Event(
            timestamp=time.time(),
            thread_number=get_thread_number(),
            thread_name=get_thread_name(),
            logger_name=logger_name,
            level=Level(level),
            message=message,
        )

    def push(self, logger_name: str, level: Level, format: Any, *args: Any) -> None:
        """Format an event and queue it, flushing when due."""
        event = self._make_event(logger_name, level, format, args)
        while not self._buffer.put(event):
            self.flush()
        with self._state_lock:
            self._pending_size += len(event.message)
            due = (
                self.latency == 0
                or self._pending_size >= self.buffer_size
                or (time.monotonic() - self._last_flush) * 1000 >= self.latency
            )
        if due:
            self.flush()

    def flush(self) -> None:
        """Write out every queued event now."""
        with self._flush_lock:
            events = list(iter(self._buffer.get, None))
            with self._state_lock:
                self._pending_size = 0
                self._last_flush = time.monotonic()
            if events:
                self._write(events)

    def async_flush(self) -> None:
        """Request that queued events be written out."""
        self.flush()

    def rotate(self) -> None:
        """Reopen the destination, where that means anything."""

    @abstractmethod
    def _write(self, events: list[Event]) -> None:
        """Write a batch of events to the destination."""


class NullSink(Sink):
    """Sink that discards everything."""

    def __init__(self, name: str = "*") -> None:
        super().__init__(name)

    def push(self, logger_name: str, level: Level, format: Any, *args: Any) -> None:
        return None

    def _write(self, events: list[Event]) -> None:
        return None


class ConsoleSink(Sink):
    """Sink that writes to standard output or standard error."""

    def __init__(
        self,
        name: str,
        stream: Stream = Stream.STDOUT,
        with_color: bool = False,
        thread_info_type: ThreadInfoType = ThreadInfoType.NONE,
        capacity: int | None = None,
        max_message_length: int | None = None,
        buffer_size: int | None = None,
        latency: int | None = None,
    ) -> None:
        super().__init__(name, thread_info_type, capacity, max_message_length, buffer_size, latency)
        self.stream = stream
        self.with_color = with_color

    def _output(self) -> TextIO:
        return sys.stderr if self.stream is Stream.STDERR else sys.stdout

    def _write(self, events: list[Event]) -> None:
        out = self._output()
        out.write(
            "".join(
                _format_line(event, self.thread_info_type, self.with_color) + "\n"
                for event in events
            )
        )
        out.flush()


class FileSink(Sink):
    """Sink that appends to a file; rotate() reopens it."""

    def __init__(
        self,
        name: str,
        path: str | Path,
        thread_info_type: ThreadInfoType = ThreadInfoType.NONE,
        capacity: int | None = None,
        max_message_length: int | None = None,
        buffer_size: int | None = None,
        latency: int | None = None,
    ) -> None:
        super().__init__(name, thread_info_type, capacity, max_message_length, buffer_size, latency)
        self.path = Path(path)
        self._file: TextIO | None = None

    def _write(self, events: list[Event]) -> None:
        if self._file is None:
            self._file = self.path.open("a", encoding="utf-8")
        self._file.write(
            "".join(_format_line(event, self.thread_info_type) + "\n" for event in events)
        )
        self._file.flush()

    def rotate(self) -> None:
        with self._flush_lock:
            self.flush()
            if self._file is not None:
                self._file.close()
                self._file = None


class SyslogSink(Sink):
    """Sink that sends events to the system log."""

    def __init__(
        self,
        name: str,
        ident: str,
        thread_info_type: ThreadInfoType = ThreadInfoType.NONE,
        capacity: int | None = None,
        max_message_length: int | None = None,
        buffer_size: int | None = None,
        latency: int | None = None,
    ) -> None:
        super().__init__(name, thread_info_type, capacity, max_message_length, buffer_size, latency)
        try:
            import syslog
        except ImportError as exc:
            raise RuntimeError("system log is not available on this platform") from exc
        self._syslog = syslog
        self.ident = ident
        self._priorities = {
            Level.CRITICAL: syslog.LOG_CRIT,
            Level.ERROR: syslog.LOG_ERR,
            Level.WARN: syslog.LOG_WARNING,
            Level.INFO: syslog.LOG_NOTICE,
            Level.VERBOSE: syslog.LOG_INFO,
            Level.DEBUG: syslog.LOG_DEBUG,
            Level.TRACE: syslog.LOG_DEBUG,
        }
        syslog.openlog(ident, syslog.LOG_PID, syslog.LOG_USER)

    def _write(self, events: list[Event]) -> None:
        for event in events:
            priority = self._priorities.get(event.level, self._syslog.LOG_DEBUG)
            self._syslog.syslog(
                priority, _format_line(event, self.thread_info_type, with_time=False)
            )


class Multisink(Sink):
    """Sink that forwards every event to several other sinks."""

    def __init__(self, name: str, sinks: Iterable[Sink]) -> None:
        super().__init__(name)
        self.sinks: tuple[Sink, ...] = tuple(sinks)

    def push(self, logger_name: str, level: Level, format: Any, *args: Any) -> None:
        for sink in self.sinks:
            sink.push(logger_name, level, format, *args)

    def flush(self) -> None:
        for sink in self.sinks:
            sink.async_flush()
        for sink in self.sinks:
            sink.flush()

    def async_flush(self) -> None:
        for sink in self.sinks:
            sink.async_flush()

    def rotate(self) -> None:
        for sink in self.sinks:
            sink.rotate()

    def _write(self, events: list[Event]) -> None:
        for sink in self.sinks:
            sink._write(events)