"""Logging levels and their textual names."""

from __future__ import annotations

from enum import IntEnum

__all__ = ["Level", "level_to_char", "level_to_str"]


class Level(IntEnum):
    """Detail level of logging or of an event; higher means more detailed."""

    OFF = 0
    CRITICAL = 1
    ERROR = 2
    WARN = 3
    INFO = 4
    VERBOSE = 5
    DEBUG = 6
    TRACE = 7


_NAMES = {
    Level.OFF: "?Off",
    Level.CRITICAL: "Critical",
    Level.ERROR: "Error",
    Level.WARN: "Warning",
    Level.INFO: "Info",
    Level.VERBOSE: "Verbose",
    Level.DEBUG: "Debug",
    Level.TRACE: "Trace",
}


def level_to_str(level: Level | int) -> str:
    """Return the display name of a level."""
    return _NAMES[Level(level)]


def level_to_char(level: Level | int) -> str:
    """Return the one-character symbol of a level."""
    return level_to_str(level)[0]