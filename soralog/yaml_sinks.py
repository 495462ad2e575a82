"""Reading sink definitions from a parsed YAML document."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional

from soralog.sink import (
    DEFAULT_MAX_MESSAGE_LENGTH,
    ConsoleSink,
    FileSink,
    Multisink,
    Sink,
    Stream,
    SyslogSink,
    ThreadInfoType,
)

if TYPE_CHECKING:
    from soralog.logging_system import LoggingSystem

__all__ = ["ConfigReport", "parse_sinks", "parse_sink", "MIN_CAPACITY", "MIN_BUFFER_SIZE"]

MIN_CAPACITY = 4
MIN_BUFFER_SIZE = 4 * DEFAULT_MAX_MESSAGE_LENGTH
_MIN_MESSAGE_LENGTH = 64

_INT_RE = re.compile(r"[-+]?\d+")
_TRUE_WORDS = {"y", "yes", "true", "on"}
_FALSE_WORDS = {"n", "no", "false", "off"}

_COMMON_KEYS = ("name", "type", "thread", "capacity", "buffer", "max_message_length", "latency")


@dataclass
class ConfigReport:
    """Collects the problems found while reading a configuration."""

    has_error: bool = False
    has_warning: bool = False
    lines: list[str] = field(default_factory=list)

    def error(self, message: str) -> None:
        """Record an error."""
        self.lines.append(f"E: {message}")
        self.has_error = True

    def warning(self, message: str) -> None:
        """Record a warning."""
        self.lines.append(f"W: {message}")
        self.has_warning = True

    @property
    def message(self) -> str:
        """All recorded lines, each ending with a newline."""
        return "".join(f"{line}\n" for line in self.lines)


def _is_scalar(value: Any) -> bool:
    return value is not None and not isinstance(value, (dict, list))


def _text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "~"
    return str(value)


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and _INT_RE.fullmatch(value.strip()):
        return int(value)
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        word = value.strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
    return None


def parse_sinks(node: Any, system: "LoggingSystem", report: ConfigReport) -> None:
    """Read the 'sinks' sequence and register every valid sink in the system."""
    if node is None:
        report.error("Sinks list is empty")
        return
    if not isinstance(node, list):
        report.error("Sinks is not a YAML sequence")
        return
    for number, sink_node in enumerate(node):
        if not isinstance(sink_node, dict):
            report.warning(f"Element #{number} of 'sinks' is not a YAML map")
            continue
        parse_sink(number, sink_node, system, report)


def parse_sink(number: int, node: dict, system: "LoggingSystem", report: ConfigReport) -> None:
    """Read one sink definition and register it in the system."""
    fail = False

    if "name" not in node:
        report.error(f"Not found 'name' of sink node #{number}")
        fail = True
    elif not _is_scalar(node["name"]):
        report.error(f"Property 'name' of sink node #{number} is not scalar")
        fail = True

    if "type" not in node:
        report.error(f"Not found 'type' of sink node #{number}")
        fail = True
    elif not _is_scalar(node["type"]):
        report.error(f"Property 'type' of sink node #{number} is not scalar")
        fail = True

    if fail:
        return

    name = _text(node["name"])
    sink_type = _text(node["type"])

    if name == "*":
        report.error("Sink name '*' is reserved; Try to use some other else")
        return

    parsers = {
        "console": _parse_console,
        "file": _parse_file,
        "syslog": _parse_syslog,
        "multisink": _parse_multisink,
    }
    parser = parsers.get(sink_type)
    if parser is None:
        report.error(f"Unknown 'type' of sink node '{name}': {sink_type}")
        return
    parser(name, node, system, report)


def _parse_common(
    name: str, node: dict, report: ConfigReport, *, strict_length: bool
) -> dict[str, Any]:
    """Read the options shared by buffered sinks, returning constructor arguments."""
    options: dict[str, Any] = {
        "thread_info_type": ThreadInfoType.NONE,
        "capacity": None,
        "max_message_length": None,
        "buffer_size": None,
        "latency": None,
    }

    if "thread" in node:
        raw = node["thread"]
        if not _is_scalar(raw):
            report.warning("Property 'thread' of sink node is not scalar")
        else:
            text = _text(raw)
            if text == "name":
                options["thread_info_type"] = ThreadInfoType.NAME
            elif text == "id":
                options["thread_info_type"] = ThreadInfoType.ID
            elif text != "none":
                report.warning(f"Wrong property 'thread' value of sink '{name}': {text}")

    if "capacity" in node:
        raw = node["capacity"]
        if not _is_scalar(raw):
            report.warning("Property 'capacity' of sink node is not scalar")
        else:
            value = _as_int(raw)
            if value is not None and value >= MIN_CAPACITY:
                options["capacity"] = value
            else:
                report.warning(f"Wrong property 'capacity' value of sink '{name}': {_text(raw)}")

    if "buffer" in node:
        raw = node["buffer"]
        if not _is_scalar(raw):
            report.warning("Property 'buffer' of sink node is not scalar")
        else:
            value = _as_int(raw)
            if value is not None and value >= MIN_BUFFER_SIZE:
                options["buffer_size"] = value
            else:
                report.warning(f"Wrong property 'buffer' value of sink '{name}': {_text(raw)}")

    if "max_message_length" in node:
        raw = node["max_message_length"]
        if not _is_scalar(raw):
            report.warning("Property 'max_message_length' of sink node is not scalar")
        else:
            value = _as_int(raw)
            acceptable = value is not None and (
                value > _MIN_MESSAGE_LENGTH if strict_length else value >= _MIN_MESSAGE_LENGTH
            )
            if acceptable:
                options["max_message_length"] = value
            else:
                report.warning(
                    f"Wrong property 'max_message_length' value of sink '{name}': {_text(raw)}"
                )

    if "latency" in node:
        raw = node["latency"]
        if not _is_scalar(raw):
            report.warning("Property 'latency' of sink node is not scalar")
        else:
            value = _as_int(raw)
            if value is None or str(value) != _text(raw) or value < 0:
                report.warning(
                    f"Wrong value of property 'latency' value of sink '{name}': {_text(raw)}"
                )
            else:
                options["latency"] = value

    return options


def _report_unknown_keys(
    name: str, node: dict, known: tuple[str, ...], report: ConfigReport, suffix: str = ""
) -> None:
    for key in node:
        text = _text(key)
        if text not in known:
            report.warning(f"Unknown property of sink '{name}'{suffix}: {text}")


def _register(name: str, sink: Sink, system: "LoggingSystem", report: ConfigReport) -> None:
    if system.get_sink(name) is not None:
        report.warning(
            f"Already exists sink with name '{name}'; Previous version will be overridden"
        )
    system.make_sink(sink)


def _parse_console(name: str, node: dict, system: "LoggingSystem", report: ConfigReport) -> None:
    color = False
    stream = Stream.STDOUT

    if "color" in node:
        raw = node["color"]
        value = _as_bool(raw) if _is_scalar(raw) else None
        if value is None:
            report.warning("Property 'color' of sink node is not true or false")
        else:
            color = value

    if "stream" in node:
        raw = node["stream"]
        text = _text(raw) if _is_scalar(raw) else None
        if text == "stdout":
            stream = Stream.STDOUT
        elif text == "stderr":
            stream = Stream.STDERR
        else:
            report.warning("Property 'stream' of sink node is not stdout or stderr")

    options = _parse_common(name, node, report, strict_length=True)
    _report_unknown_keys(
        name, node, _COMMON_KEYS + ("stream", "color"), report, " with type 'console'"
    )
    _register(name, ConsoleSink(name, stream, color, **options), system, report)


def _require_scalar(name: str, node: dict, key: str, report: ConfigReport) -> bool:
    if key not in node:
        report.error(f"Not found '{key}' of sink '{name}'")
        return False
    if not _is_scalar(node[key]):
        report.error(f"Property '{key}' of sink '{name}' is not scalar")
        return False
    return True


def _parse_file(name: str, node: dict, system: "LoggingSystem", report: ConfigReport) -> None:
    ok = _require_scalar(name, node, "path", report)
    options = _parse_common(name, node, report, strict_length=False)
    _report_unknown_keys(name, node, _COMMON_KEYS + ("path",), report)
    if not ok:
        return
    _register(name, FileSink(name, _text(node["path"]), **options), system, report)


def _parse_syslog(name: str, node: dict, system: "LoggingSystem", report: ConfigReport) -> None:
    ok = _require_scalar(name, node, "ident", report)
    options = _parse_common(name, node, report, strict_length=False)
    _report_unknown_keys(name, node, _COMMON_KEYS + ("ident",), report)
    if not ok:
        return
    try:
        sink = SyslogSink(name, _text(node["ident"]), **options)
    except RuntimeError as exc:
        report.error(f"Can't create sink '{name}': {exc}")
        return
    _register(name, sink, system, report)


def _parse_multisink(
    name: str, node: dict, system: "LoggingSystem", report: ConfigReport
) -> None:
    ok = True
    if "sinks" not in node:
        report.error(f"Not found 'sinks' of sink '{name}'")
        ok = False
    elif not isinstance(node["sinks"], list):
        report.error(f"Property 'sinks' of sink '{name}' is not list")
        ok = False

    _report_unknown_keys(name, node, ("name", "type", "sinks"), report)
    if not ok:
        return

    members: list[Sink] = []
    for raw in node["sinks"]:
        sink_name = _text(raw)
        sink = system.get_sink(sink_name)
        if sink is None:
            report.warning(f"Sink '{sink_name}' must be defined before sink '{name}'")
        else:
            members.append(sink)

    system.make_sink(Multisink(name, members))