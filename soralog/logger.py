"""Loggers: filter events by level and hand them to a sink."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Optional, Protocol, Union

from soralog.group import Group
from soralog.level import Level

if TYPE_CHECKING:
    from soralog.sink import Sink

__all__ = ["LoggerFactory", "Logger"]


class _Registry(Protocol):
    def get_group(self, name: str) -> Optional[Group]: ...

    def get_sink(self, name: str) -> Optional["Sink"]: ...


class LoggerFactory(ABC):
    """Something that hands out loggers by name and group."""

    @abstractmethod
    def get_logger(
        self,
        logger_name: str,
        group_name: str,
        sink_name: Optional[str] = None,
        level: Optional[Level] = None,
    ) -> "Logger":
        """Return the named logger, creating it if needed, with optional overrides."""


class Logger:
    """Named logger bound to a group, with its own or inherited level and sink."""

    def __init__(self, system: _Registry, name: str, group: Group) -> None:
        self._system = system
        self._name = name
        self._group = group
        self._sink: Optional[Sink] = group.sink
        self._is_sink_overridden = False
        self._level: Level = group.level
        self._is_level_overridden = False

    def __repr__(self) -> str:
        return f"Logger({self._name!r}, level={self._level.name})"

    @property
    def name(self) -> str:
        return self._name

    def _push(self, level: Level, format: Any, args: tuple) -> None:
        if self._level >= level:
            self._sink.push(self._name, level, format, *args)
            if self._level >= Level.CRITICAL:
                self._sink.flush()

    def _push_at(self, level: Level, format: Any, args: tuple) -> None:
        # A lone argument is logged as a value, never read as a format.
        if args:
            self._push(level, format, args)
        else:
            self._push(level, "{}", (format,))

    def log(self, level: Level, format: Any, *args: Any) -> None:
        """Log an event with the given level."""
        self._push(Level(level), format, args)

    def trace(self, format: Any, *args: Any) -> None:
        self._push_at(Level.TRACE, format, args)

    def debug(self, format: Any, *args: Any) -> None:
        self._push_at(Level.DEBUG, format, args)

    def verbose(self, format: Any, *args: Any) -> None:
        self._push_at(Level.VERBOSE, format, args)

    def info(self, format: Any, *args: Any) -> None:
        self._push_at(Level.INFO, format, args)

    def warn(self, format: Any, *args: Any) -> None:
        self._push_at(Level.WARN, format, args)

    def error(self, format: Any, *args: Any) -> None:
        self._push_at(Level.ERROR, format, args)

    def critical(self, format: Any, *args: Any) -> None:
        self._push_at(Level.CRITICAL, format, args)

    def flush(self) -> None:
        """Flush everything accumulated in the sink."""
        self._sink.flush()

    # Level

    @property
    def level(self) -> Level:
        return self._level

    @property
    def is_level_overridden(self) -> bool:
        return self._is_level_overridden

    def reset_level(self) -> None:
        """Take the level from the logger's group and mark it inherited."""
        self.set_level_from_group(self._group)

    def set_level(self, level: Level) -> None:
        """Set an own level, marked as overridden."""
        self._is_level_overridden = True
        self._level = Level(level)

    def set_level_from_group(self, group: Union[Group, str]) -> None:
        """Copy the level of a group, given as an object or by name."""
        if isinstance(group, str):
            found = self._system.get_group(group)
            if found is None:
                return
            group = found
        self._is_level_overridden = group is not self._group
        self._level = group.level

    # Sink

    @property
    def sink(self) -> Optional["Sink"]:
        return self._sink

    @property
    def is_sink_overridden(self) -> bool:
        return self._is_sink_overridden

    def reset_sink(self) -> None:
        """Take the sink from the logger's group and mark it inherited."""
        self.set_sink_from_group(self._group)

    def set_sink(self, sink: Union["Sink", str]) -> None:
        """Set an own sink, given as an object or by name; unknown names are ignored."""
        if isinstance(sink, str):
            found = self._system.get_sink(sink)
            if found is None:
                return
            sink = found
        if sink is None:
            raise ValueError("sink must be given")
        self._is_sink_overridden = True
        self._sink = sink

    def set_sink_from_group(self, group: Union[Group, str]) -> None:
        """Copy the sink of a group, given as an object or by name."""
        if isinstance(group, str):
            found = self._system.get_group(group)
            if found is None:
                return
            group = found
        self._is_sink_overridden = group is not self._group
        self._sink = group.sink

    # Group

    @property
    def group(self) -> Group:
        return self._group

    def set_group(self, group: Union[Group, str]) -> None:
        """Move to another group, inheriting every property that is not overridden."""
        if isinstance(group, str):
            found = self._system.get_group(group)
            if found is None:
                return
            group = found
        self._group = group
        if not self._is_sink_overridden:
            self.set_sink_from_group(group)
        if not self._is_level_overridden:
            self.set_level_from_group(group)