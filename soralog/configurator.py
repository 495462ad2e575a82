"""Configurators: objects that populate a logging system with sinks and groups."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

from soralog.level import Level, level_to_str
from soralog.sink import ConsoleSink, Stream

if TYPE_CHECKING:
    from soralog.logging_system import LoggingSystem

__all__ = ["ConfigResult", "Configurator", "FallbackConfigurator"]


@dataclass
class ConfigResult:
    """Outcome of applying a configuration."""

    has_error: bool = False
    has_warning: bool = False
    message: str = ""


class Configurator(ABC):
    """Sets up sinks and groups of a logging system."""

    @abstractmethod
    def apply_on(self, system: "LoggingSystem") -> ConfigResult:
        """Populate the system and report what happened."""


class FallbackConfigurator(Configurator):
    """Sends everything to standard output through one root group named '*'."""

    def __init__(self, level: Level = Level.INFO, with_color: bool = False) -> None:
        self.level = Level(level)
        self.with_color = with_color

    def apply_on(self, system: "LoggingSystem") -> ConfigResult:
        system.make_sink(ConsoleSink("console", Stream.STDOUT, self.with_color))
        system.make_group("*", None, "console", self.level)
        color = "color " if self.with_color else ""
        return ConfigResult(
            has_error=False,
            has_warning=True,
            message=(
                "I: Using fallback configurator for logger system\n"
                f"I: All logs will be write into {color}standard output "
                f"with '{level_to_str(self.level)}' level"
            ),
        )