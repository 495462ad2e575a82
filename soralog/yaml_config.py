"""Configurator that reads sinks and groups from a YAML document or file."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional, Union

import yaml

from soralog.configurator import ConfigResult, Configurator
from soralog.level import Level
from soralog.yaml_sinks import ConfigReport, _as_bool, _is_scalar, _text, parse_sinks

if TYPE_CHECKING:
    from soralog.logging_system import LoggingSystem

__all__ = ["YamlConfigurator", "parse_level"]

_LEVELS = {
    "off": Level.OFF,
    "critical": Level.CRITICAL,
    "crit": Level.CRITICAL,
    "error": Level.ERROR,
    "warning": Level.WARN,
    "warn": Level.WARN,
    "info": Level.INFO,
    "verbose": Level.VERBOSE,
    "debug": Level.DEBUG,
    "deb": Level.DEBUG,
    "trace": Level.TRACE,
}

_NULL_TAG = "tag:yaml.org,2002:null"


class _ScalarLoader(yaml.SafeLoader):
    """Safe loader that keeps every scalar as text, except nulls."""


_ScalarLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag == _NULL_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def parse_level(text: str) -> Level:
    """Return the level named by a configuration word; raise ValueError if unknown."""
    try:
        return _LEVELS[text]
    except KeyError:
        raise ValueError(f"Invalid level: {text}") from None


class _Applicator:
    """Walks a loaded document and applies it to a logging system."""

    def __init__(self, system: "LoggingSystem", report: ConfigReport) -> None:
        self.system = system
        self.report = report

    def parse(self, node: Any) -> None:
        if not isinstance(node, dict):
            self.report.error("Config is not YAML map")
            return

        if "groups" not in node:
            self.report.error("Groups are undefined")

        for key in node:
            text = _text(key)
            if text not in ("sinks", "groups"):
                self.report.warning(f"Unknown property: {text}")

        if "sinks" in node:
            parse_sinks(node["sinks"], self.system, self.report)
        if "groups" in node:
            self.parse_groups(node["groups"], None)

    def parse_groups(self, groups: Any, parent: Optional[str]) -> None:
        if groups is None:
            self.report.error("Node 'groups' is empty")
            return
        if not isinstance(groups, list):
            self.report.error("Node 'groups' is not a sequence")
            return
        for number, group in enumerate(groups):
            if not isinstance(group, dict):
                self.report.error(f"Element #{number} of 'groups' is not a map")
                continue
            self.parse_group(number, group, parent)

    def parse_group(self, number: int, node: dict, parent: Optional[str]) -> None:
        report = self.report
        system = self.system
        fail = False
        is_fallback = False

        tmp_name = f"node #{number}"
        if "name" not in node:
            fail = True
            report.lines.append(f"W: Not found 'name' of group {tmp_name}")
            report.has_error = True
        elif not _is_scalar(node["name"]):
            fail = True
            report.error(f"Property 'name' of group {tmp_name} is not scalar")
        else:
            tmp_name = f"'{_text(node['name'])}'"

        if "is_fallback" in node:
            raw = node["is_fallback"]
            if not _is_scalar(raw):
                fail = True
                report.error(f"Property 'is_fallback' of group {tmp_name} is not scalar")
            else:
                value = _as_bool(raw)
                if value is None:
                    fail = True
                    report.error(
                        f"Property 'is_fallback' of group {tmp_name} is not true or false"
                    )
                else:
                    is_fallback = value

        sink: Optional[str] = None
        if "sink" in node:
            raw = node["sink"]
            if not _is_scalar(raw):
                fail = True
                report.error(f"Property 'sink' of group {tmp_name} is not scalar")
            else:
                sink = _text(raw)
                if system.get_sink(sink) is None:
                    fail = True
                    report.error(f"Sink '{sink}' of group {tmp_name} is undefined")
        elif parent is None:
            sink = "*"

        level_string: Optional[str] = None
        if "level" in node:
            raw = node["level"]
            if not _is_scalar(raw):
                fail = True
                report.error(f"Property 'level' of group {tmp_name} is not scalar")
            else:
                level_string = _text(raw)
        elif parent is None:
            fail = True
            report.error(f"Not found 'level' of root group {tmp_name}")

        children = node.get("children")
        if "children" in node and children is not None and not isinstance(children, list):
            fail = True
            report.error(f"Property 'children' of group {tmp_name} is not sequence")

        for key in node:
            text = _text(key)
            if text not in ("name", "is_fallback", "sink", "level", "children"):
                report.warning(f"Unknown property of group {tmp_name}: {text}")

        if sink is not None and system.get_sink(sink) is None:
            report.error(f"Unknown sink in group {tmp_name}: {sink}")

        level: Optional[Level] = None
        if level_string is not None:
            try:
                level = parse_level(level_string)
            except ValueError:
                report.error(f"Invalid level in group {tmp_name}: {level_string}")

        if fail:
            report.warning(
                f"There are probably more bugs in the group {tmp_name}; "
                "Fix the existing ones first."
            )
            return

        name = _text(node["name"])
        if name == "*":
            report.error("Group name '*' is reserved; Try to use some other else")
            return

        if system.get_group(name) is not None:
            if parent is not None:
                system.set_parent_of_group(name, parent)
            if sink is not None:
                system.set_sink_of_group(name, sink)
            if level is not None:
                system.set_level_of_group(name, level)
        else:
            try:
                system.make_group(name, parent, sink, level)
            except ValueError as exc:
                report.error(f"Can't create group {tmp_name}: {exc}")
                return

        if is_fallback:
            system.set_fallback_group(name)

        if isinstance(children, list):
            self.parse_groups(children, name)


class YamlConfigurator(Configurator):
    """Applies a YAML configuration given as text or as a path.

    A path must be a path-like object; a plain string is taken as YAML content.
    A previous configurator, if given, is applied first.
    """

    def __init__(
        self,
        config: Union[str, os.PathLike],
        previous: Optional[Configurator] = None,
    ) -> None:
        self.config = config
        self.previous = previous

    def _load(self, report: ConfigReport) -> Any:
        if isinstance(self.config, os.PathLike):
            path = Path(self.config)
            try:
                return yaml.load(path.read_text(encoding="utf-8"), Loader=_ScalarLoader)
            except (OSError, UnicodeDecodeError, yaml.YAMLError) as exc:
                report.error(f"Can't parse file `{path.resolve()}': {exc}")
                return None
        try:
            return yaml.load(str(self.config), Loader=_ScalarLoader)
        except yaml.YAMLError as exc:
            report.error(f"Can't parse content: {exc}")
            return None

    def apply_on(self, system: "LoggingSystem") -> ConfigResult:
        result = self.previous.apply_on(system) if self.previous is not None else ConfigResult()
        report = ConfigReport()
        node = self._load(report)
        if not report.has_error:
            _Applicator(system, report).parse(node)

        result.has_error = result.has_error or report.has_error
        result.has_warning = result.has_warning or report.has_warning
        if report.has_error or report.has_warning:
            result.message += "I: Some problems are found in config:\n" + report.message
        return result