import yaml
import pytest

from soralog.configurator import FallbackConfigurator
from soralog.logging_system import LoggingSystem
from soralog.sink import ConsoleSink, FileSink, Multisink, NullSink, Stream, ThreadInfoType
from soralog.yaml_sinks import ConfigReport, parse_sink, parse_sinks


@pytest.fixture
def system():
    return LoggingSystem(FallbackConfigurator())


def run(text, system):
    report = ConfigReport()
    parse_sinks(yaml.safe_load(text), system, report)
    return report


def test_report_error_and_warning():
    report = ConfigReport()
    report.error("bad")
    report.warning("odd")
    assert report.has_error and report.has_warning
    assert report.message == "E: bad\nW: odd\n"


def test_console_sink_parsed(system):
    report = run(
        """
- name: console
  type: console
  color: true
  stream: stderr
  thread: name
""",
        system,
    )
    assert not report.has_error and not report.has_warning
    sink = system.get_sink("console")
    assert isinstance(sink, ConsoleSink)
    assert sink.with_color is True
    assert sink.stream is Stream.STDERR
    assert sink.thread_info_type is ThreadInfoType.NAME


def test_file_sink_parsed(system, tmp_path):
    path = tmp_path / "log.txt"
    report = run(f"- {{name: f, type: file, path: '{path}', thread: id, latency: 10}}", system)
    assert not report.has_error
    sink = system.get_sink("f")
    assert isinstance(sink, FileSink)
    assert sink.path == path
    assert sink.thread_info_type is ThreadInfoType.ID
    assert sink.latency == 10


def test_file_sink_without_path(system):
    report = run("- {name: f, type: file}", system)
    assert report.has_error
    assert "E: Not found 'path' of sink 'f'" in report.message
    assert system.get_sink("f") is None


def test_unknown_type(system):
    report = run("- {name: x, type: pigeon}", system)
    assert report.has_error
    assert "Unknown 'type' of sink node 'x': pigeon" in report.message
    assert system.get_sink("x") is None


def test_reserved_name(system):
    report = run("- {name: '*', type: console}", system)
    assert report.has_error
    assert isinstance(system.get_sink("*"), NullSink)


def test_missing_name_and_type(system):
    report = ConfigReport()
    parse_sink(3, {}, system, report)
    assert report.has_error
    assert "Not found 'name' of sink node #3" in report.message
    assert "Not found 'type' of sink node #3" in report.message


def test_small_capacity_warns(system):
    report = run("- {name: c, type: console, capacity: 2}", system)
    assert report.has_warning and not report.has_error
    assert "Wrong property 'capacity' value of sink 'c': 2" in report.message
    assert isinstance(system.get_sink("c"), ConsoleSink)


def test_negative_latency_warns(system):
    report = run("- {name: c, type: console, latency: -1}", system)
    assert report.has_warning
    assert system.get_sink("c").latency != -1


def test_max_message_length_boundary_differs(system, tmp_path):
    report = run("- {name: c, type: console, max_message_length: 64}", system)
    assert report.has_warning
    report = run(
        f"- {{name: f, type: file, path: '{tmp_path / 'a.log'}', max_message_length: 64}}",
        system,
    )
    assert not report.has_warning
    assert system.get_sink("f").max_message_length == 64


def test_unknown_property_warns(system):
    report = run("- {name: c, type: console, shiny: 1}", system)
    assert report.has_warning
    assert "Unknown property of sink 'c' with type 'console': shiny" in report.message


def test_duplicate_sink_overrides(system):
    report = run("- {name: c, type: console}\n- {name: c, type: console, color: true}", system)
    assert report.has_warning
    assert "Already exists sink with name 'c'" in report.message
    assert system.get_sink("c").with_color is True


def test_multisink_collects_known_members(system):
    report = run(
        """
- {name: a, type: console}
- {name: b, type: console}
- {name: m, type: multisink, sinks: [a, missing, b]}
""",
        system,
    )
    assert report.has_warning
    assert "Sink 'missing' must be defined before sink 'm'" in report.message
    multi = system.get_sink("m")
    assert isinstance(multi, Multisink)
    assert multi.sinks == (system.get_sink("a"), system.get_sink("b"))


def test_multisink_without_list(system):
    report = run("- {name: m, type: multisink, sinks: a}", system)
    assert report.has_error
    assert system.get_sink("m") is None


def test_sinks_empty_or_not_sequence(system):
    report = ConfigReport()
    parse_sinks(None, system, report)
    assert report.message == "E: Sinks list is empty\n"
    report = ConfigReport()
    parse_sinks({"name": "x"}, system, report)
    assert report.message == "E: Sinks is not a YAML sequence\n"


def test_element_not_map(system):
    report = run("- just_text\n- {name: c, type: console}", system)
    assert "Element #0 of 'sinks' is not a YAML map" in report.message
    assert isinstance(system.get_sink("c"), ConsoleSink)