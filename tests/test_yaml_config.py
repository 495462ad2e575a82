from pathlib import Path

import pytest

from soralog.level import Level
from soralog.logging_system import LoggingSystem
from soralog.yaml_config import YamlConfigurator, parse_level


def configure(text, previous=None):
    system = LoggingSystem(YamlConfigurator(text, previous))
    return system, system.configure()


BASIC = """
sinks:
  - name: console
    type: console
groups:
  - name: main
    sink: console
    level: info
    children:
      - name: child
        level: debug
"""


@pytest.mark.parametrize(
    "text, level",
    [
        ("off", Level.OFF),
        ("critical", Level.CRITICAL),
        ("crit", Level.CRITICAL),
        ("error", Level.ERROR),
        ("warning", Level.WARN),
        ("warn", Level.WARN),
        ("info", Level.INFO),
        ("verbose", Level.VERBOSE),
        ("debug", Level.DEBUG),
        ("deb", Level.DEBUG),
        ("trace", Level.TRACE),
    ],
)
def test_parse_level(text, level):
    assert parse_level(text) == level


def test_parse_level_rejects_unknown_word():
    with pytest.raises(ValueError):
        parse_level("loud")


def test_basic_config_builds_groups():
    system, result = configure(BASIC)
    assert not result.has_error
    assert not result.has_warning
    assert result.message == ""
    main = system.get_group("main")
    child = system.get_group("child")
    assert main.level == Level.INFO
    assert main.sink is system.get_sink("console")
    assert child.parent is main
    assert child.level == Level.DEBUG
    assert child.is_level_overridden
    assert child.sink is system.get_sink("console")
    assert not child.is_sink_overridden


def test_level_off_is_read_as_word():
    system, result = configure("groups:\n  - name: g\n    level: off\n")
    assert not result.has_error
    assert system.get_group("g").level == Level.OFF


def test_config_not_a_map():
    _, result = configure("- a\n- b\n")
    assert result.has_error
    assert result.message.startswith("I: Some problems are found in config:\n")
    assert "E: Config is not YAML map\n" in result.message


def test_empty_content_is_an_error():
    _, result = configure("")
    assert result.has_error
    assert "E: Config is not YAML map" in result.message


def test_groups_undefined():
    system, result = configure("sinks:\n  - name: c\n    type: console\n")
    assert result.has_error
    assert "E: Groups are undefined" in result.message
    assert system.get_sink("c").name == "c"


def test_unknown_top_property_is_a_warning():
    _, result = configure("extra: 1\ngroups:\n  - name: g\n    level: info\n")
    assert not result.has_error
    assert result.has_warning
    assert "W: Unknown property: extra" in result.message


def test_root_group_without_level():
    system, result = configure("groups:\n  - name: g\n")
    assert result.has_error
    assert "E: Not found 'level' of root group 'g'" in result.message
    assert "There are probably more bugs in the group 'g'" in result.message
    assert system.get_group("g") is None


def test_undefined_sink_of_group():
    system, result = configure("groups:\n  - name: g\n    sink: nowhere\n    level: info\n")
    assert result.has_error
    assert "E: Sink 'nowhere' of group 'g' is undefined" in result.message
    assert system.get_group("g") is None


def test_root_group_without_sink_uses_null_sink():
    system, result = configure("groups:\n  - name: g\n    level: info\n")
    assert not result.has_error
    assert system.get_group("g").sink is system.get_sink("*")


def test_is_fallback_selects_fallback_group():
    system, result = configure(
        "groups:\n"
        "  - name: a\n    level: info\n"
        "  - name: b\n    level: info\n    is_fallback: true\n"
    )
    assert not result.has_error
    assert system.get_fallback_group() is system.get_group("b")


def test_reserved_group_name():
    system, result = configure("groups:\n  - name: '*'\n    level: info\n")
    assert result.has_error
    assert "Group name '*' is reserved" in result.message


def test_invalid_level_of_child_keeps_parent_level():
    system, result = configure(
        "groups:\n"
        "  - name: p\n    level: warn\n"
        "    children:\n      - name: c\n        level: loud\n"
    )
    assert result.has_error
    assert "E: Invalid level in group 'c': loud" in result.message
    child = system.get_group("c")
    assert child.level == system.get_group("p").level
    assert not child.is_level_overridden


def test_children_not_a_sequence():
    _, result = configure("groups:\n  - name: g\n    level: info\n    children: x\n")
    assert result.has_error
    assert "Property 'children' of group 'g' is not sequence" in result.message


def test_unknown_group_property():
    _, result = configure("groups:\n  - name: g\n    level: info\n    colour: red\n")
    assert result.has_warning
    assert "W: Unknown property of group 'g': colour" in result.message


def test_group_without_name():
    _, result = configure("groups:\n  - level: info\n")
    assert result.has_error
    assert "W: Not found 'name' of group node #0" in result.message


def test_unparsable_content():
    _, result = configure("groups: [\n")
    assert result.has_error
    assert "E: Can't parse content:" in result.message


def test_config_from_file(tmp_path):
    path = tmp_path / "logger.yml"
    path.write_text(BASIC, encoding="utf-8")
    system, result = configure(path)
    assert not result.has_error
    assert system.get_group("child").parent is system.get_group("main")


def test_missing_file(tmp_path):
    _, result = configure(Path(tmp_path / "absent.yml"))
    assert result.has_error
    assert "E: Can't parse file `" in result.message


def test_cascade_reparents_previous_group():
    previous = YamlConfigurator("groups:\n  - name: lib\n    level: info\n    is_fallback: true\n")
    system, result = configure(
        "groups:\n"
        "  - name: app\n    level: trace\n    is_fallback: true\n"
        "    children:\n      - name: lib\n",
        previous,
    )
    assert not result.has_error
    lib = system.get_group("lib")
    app = system.get_group("app")
    assert lib.parent is app
    assert lib.level == Level.TRACE
    assert system.get_fallback_group() is app


def test_cascade_updates_existing_group_level():
    previous = YamlConfigurator("groups:\n  - name: g\n    level: info\n")
    system, _ = configure("groups:\n  - name: g\n    level: error\n", previous)
    assert system.get_group("g").level == Level.ERROR


def test_errors_of_previous_configurator_are_kept():
    previous = YamlConfigurator("- not a map\n")
    _, result = configure("groups:\n  - name: g\n    level: info\n", previous)
    assert result.has_error
    assert "E: Config is not YAML map" in result.message