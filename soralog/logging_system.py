"""The logging system: owns sinks and groups and keeps track of loggers."""

from __future__ import annotations

import threading
import weakref
from typing import Optional, Union

from soralog.configurator import ConfigResult, Configurator
from soralog.group import Group
from soralog.level import Level
from soralog.logger import Logger, LoggerFactory
from soralog.sink import NullSink, Sink

__all__ = ["LoggingSystem"]


class LoggingSystem(LoggerFactory):
    """Holds sinks and groups and updates loggers when their properties change."""

    def __init__(self, configurator: Configurator) -> None:
        self._configurator = configurator
        self._is_configured = False
        self._lock = threading.RLock()
        self._loggers: weakref.WeakValueDictionary[str, Logger] = weakref.WeakValueDictionary()
        self._sinks: dict[str, Sink] = {}
        self._groups: dict[str, Group] = {}
        self._fallback_group: Optional[Group] = None
        self.make_sink(NullSink("*"))

    def configure(self) -> ConfigResult:
        """Apply the configurator; a system can be configured only once."""
        with self._lock:
            if self._is_configured:
                raise RuntimeError("Logging system is already configured")
            result = self._configurator.apply_on(self)
            self._is_configured = True
            return result

    # Lookup and creation

    def get_logger(
        self,
        logger_name: str,
        group_name: str,
        sink_name: Union[str, Level, None] = None,
        level: Optional[Level] = None,
    ) -> Logger:
        """Return the named logger, creating it in the group (or the fallback group)."""
        if isinstance(sink_name, Level) and level is None:
            sink_name, level = None, sink_name
        with self._lock:
            logger = self._loggers.get(logger_name)
            if logger is not None:
                return logger
            group = self._groups.get(group_name)
            if group is None:
                group = self._fallback_group
            if group is None:
                raise LookupError(f"Group '{group_name}' does not exist and there is no fallback group")
            logger = Logger(self, logger_name, group)
            if sink_name is not None:
                logger.set_sink(sink_name)
            if level is not None:
                logger.set_level(level)
            self._loggers[logger_name] = logger
            return logger

    def get_sink(self, name: str) -> Optional[Sink]:
        with self._lock:
            return self._sinks.get(name)

    def get_group(self, name: str) -> Optional[Group]:
        with self._lock:
            return self._groups.get(name)

    def make_sink(self, sink: Sink) -> Sink:
        """Register a sink under its name, replacing any sink of that name."""
        with self._lock:
            self._sinks[sink.name] = sink
            return sink

    def make_group(
        self,
        name: str,
        parent: Optional[str],
        sink: Optional[str],
        level: Optional[Level],
    ) -> Group:
        """Create and register a group; the first group becomes the fallback one."""
        with self._lock:
            if parent is None and sink is None:
                sink = "*"
            group = Group(self, name, parent, sink, level)
            self._groups[name] = group
            if self._fallback_group is None:
                self._fallback_group = group
            return group

    def set_fallback_group(self, group_name: str) -> bool:
        with self._lock:
            group = self._groups.get(group_name)
            if group is None:
                return False
            self._fallback_group = group
            return True

    def get_fallback_group(self) -> Optional[Group]:
        with self._lock:
            return self._fallback_group

    # Groups

    def set_parent_of_group(self, group_name: str, parent: str) -> bool:
        """Re-parent a group; inherited properties follow the new parent."""
        with self._lock:
            group = self._groups.get(group_name)
            parent_group = self._groups.get(parent)
            if group is None or parent_group is None:
                return False
            if self._is_ancestor_or_self(group, parent_group):
                return False
            group.set_parent_group(parent_group)
            self._propagate(group)
            return True

    def unset_parent_of_group(self, group_name: str) -> bool:
        with self._lock:
            group = self._groups.get(group_name)
            if group is None:
                return False
            group.unset_parent_group()
            self._propagate(group)
            return True

    def set_sink_of_group(self, group_name: str, sink_name: str) -> bool:
        with self._lock:
            group = self._groups.get(group_name)
            sink = self._sinks.get(sink_name)
            if group is None or sink is None:
                return False
            group.set_sink(sink)
            self._propagate(group)
            return True

    def reset_sink_of_group(self, group_name: str) -> bool:
        with self._lock:
            group = self._groups.get(group_name)
            if group is None:
                return False
            group.reset_sink()
            self._propagate(group)
            return True

    def set_level_of_group(self, group_name: str, level: Level) -> bool:
        with self._lock:
            group = self._groups.get(group_name)
            if group is None:
                return False
            group.set_level(level)
            self._propagate(group)
            return True

    def reset_level_of_group(self, group_name: str) -> bool:
        with self._lock:
            group = self._groups.get(group_name)
            if group is None:
                return False
            group.reset_level()
            self._propagate(group)
            return True

    # Loggers

    def set_group_of_logger(self, logger_name: str, group_name: str) -> bool:
        with self._lock:
            logger = self._loggers.get(logger_name)
            group = self._groups.get(group_name)
            if logger is None or group is None:
                return False
            logger.set_group(group)
            return True

    def set_sink_of_logger(self, logger_name: str, sink_name: str) -> bool:
        with self._lock:
            logger = self._loggers.get(logger_name)
            sink = self._sinks.get(sink_name)
            if logger is None or sink is None:
                return False
            logger.set_sink(sink)
            return True

    def reset_sink_of_logger(self, logger_name: str) -> bool:
        with self._lock:
            logger = self._loggers.get(logger_name)
            if logger is None:
                return False
            logger.reset_sink()
            return True

    def set_level_of_logger(self, logger_name: str, level: Level) -> bool:
        with self._lock:
            logger = self._loggers.get(logger_name)
            if logger is None:
                return False
            logger.set_level(level)
            return True

    def reset_level_of_logger(self, logger_name: str) -> bool:
        with self._lock:
            logger = self._loggers.get(logger_name)
            if logger is None:
                return False
            logger.reset_level()
            return True

    # Internals

    @staticmethod
    def _is_ancestor_or_self(group: Group, candidate: Group) -> bool:
        """True if the group is the candidate or one of the candidate's ancestors."""
        current: Optional[Group] = candidate
        while current is not None:
            if current is group:
                return True
            current = current.parent
        return False

    def _propagate(self, group: Group) -> None:
        """Push the group's properties down to inheriting children and loggers."""
        for child in list(self._groups.values()):
            if child is group or child.parent is not group:
                continue
            if not child.is_sink_overridden:
                child.set_sink_from_group(group)
            if not child.is_level_overridden:
                child.set_level_from_group(group)
            self._propagate(child)
        for logger in list(self._loggers.values()):
            if logger.group is not group:
                continue
            if not logger.is_sink_overridden:
                logger.set_sink_from_group(group)
            if not logger.is_level_overridden:
                logger.set_level_from_group(group)