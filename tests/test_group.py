import pytest

from soralog.group import Group
from soralog.level import Level
from soralog.sink import NullSink


class _Registry:
    def __init__(self):
        self.sinks = {}
        self.groups = {}

    def get_sink(self, name):
        return self.sinks.get(name)

    def get_group(self, name):
        return self.groups.get(name)

    def add(self, group):
        self.groups[group.name] = group
        return group


def _registry_with_sinks():
    reg = _Registry()
    for i in range(1, 5):
        reg.sinks[f"sink{i}"] = NullSink(f"sink{i}")
    return reg, [reg.sinks[f"sink{i}"] for i in range(1, 5)]


def test_make_group():
    reg, (s1, _, s3, _) = _registry_with_sinks()
    g1 = reg.add(Group(reg, "first", None, "sink1", Level.TRACE))
    g2 = reg.add(Group(reg, "second", "first", None, None))
    g3 = reg.add(Group(reg, "third", "second", "sink3", Level.DEBUG))

    assert g1.parent is None
    assert g1.level == Level.TRACE
    assert not g1.is_level_overridden
    assert g1.sink is s1
    assert not g1.is_sink_overridden

    assert g2.parent is g1
    assert g2.level == Level.TRACE
    assert not g2.is_level_overridden
    assert g2.sink is s1
    assert not g2.is_sink_overridden

    assert g3.parent is g2
    assert g3.level == Level.DEBUG
    assert g3.is_level_overridden
    assert g3.sink is s3
    assert g3.is_sink_overridden


def test_change_level():
    reg, _ = _registry_with_sinks()
    reg.add(Group(reg, "first", None, "sink1", Level.TRACE))
    g2 = reg.add(Group(reg, "second", "first", None, None))
    g3 = reg.add(Group(reg, "third", "second", "sink3", Level.DEBUG))

    g2.set_level(Level.CRITICAL)
    g3.set_level(Level.INFO)
    assert g2.level == Level.CRITICAL
    assert g2.is_level_overridden
    assert g3.level == Level.INFO
    assert g3.is_level_overridden

    g2.reset_level()
    g3.reset_level()
    assert g2.level == Level.TRACE
    assert not g2.is_level_overridden
    assert g3.level == Level.TRACE
    assert not g3.is_level_overridden


def test_change_sink():
    reg, (s1, _, s3, s4) = _registry_with_sinks()
    reg.add(Group(reg, "first", None, "sink1", Level.TRACE))
    g2 = reg.add(Group(reg, "second", "first", None, None))
    g3 = reg.add(Group(reg, "third", "second", "sink3", Level.DEBUG))

    g2.set_sink(s3)
    g3.set_sink(s4)
    assert g2.sink is s3
    assert g2.is_sink_overridden
    assert g3.sink is s4
    assert g3.is_sink_overridden

    g2.reset_sink()
    g3.reset_sink()
    assert g2.sink is s1
    assert not g2.is_sink_overridden
    assert g3.sink is s1
    assert not g3.is_sink_overridden


def test_change_group():
    reg, (_, _, s3, s4) = _registry_with_sinks()
    reg.add(Group(reg, "first", None, "sink1", Level.TRACE))
    g2 = reg.add(Group(reg, "second", "first", None, None))
    g3 = reg.add(Group(reg, "third", "second", "sink3", Level.DEBUG))
    g4 = reg.add(Group(reg, "four", None, "sink4", Level.VERBOSE))

    g2.set_parent_group(g4)
    g3.set_parent_group(g4)

    assert g2.parent is g4
    assert g2.level == Level.VERBOSE
    assert not g2.is_level_overridden
    assert g2.sink is s4
    assert not g2.is_sink_overridden

    assert g3.parent is g4
    assert g3.level == Level.DEBUG
    assert g3.is_level_overridden
    assert g3.sink is s3
    assert g3.is_sink_overridden

    g2.unset_parent_group()
    g3.unset_parent_group()

    assert g2.parent is None
    assert g2.level == Level.VERBOSE
    assert not g2.is_level_overridden
    assert g2.sink is s4
    assert not g2.is_sink_overridden

    assert g3.parent is None
    assert g3.level == Level.DEBUG
    assert g3.is_level_overridden
    assert g3.sink is s3
    assert g3.is_sink_overridden


def test_set_parent_by_name():
    reg, (_, _, _, s4) = _registry_with_sinks()
    reg.add(Group(reg, "first", None, "sink1", Level.TRACE))
    g2 = reg.add(Group(reg, "second", "first", None, None))
    g4 = reg.add(Group(reg, "four", None, "sink4", Level.VERBOSE))

    g2.set_parent_group("four")
    assert g2.parent is g4
    assert g2.sink is s4


def test_unknown_names_are_ignored():
    reg, (s1, _, _, _) = _registry_with_sinks()
    g1 = reg.add(Group(reg, "first", None, "sink1", Level.TRACE))
    g2 = reg.add(Group(reg, "second", "first", None, None))

    g2.set_parent_group("missing")
    g2.set_sink("missing")
    g2.set_level_from_group("missing")
    assert g2.parent is g1
    assert g2.sink is s1
    assert g2.level == Level.TRACE


def test_sink_and_level_from_other_group_mark_overridden():
    reg, (_, _, _, s4) = _registry_with_sinks()
    g1 = reg.add(Group(reg, "first", None, "sink1", Level.TRACE))
    g2 = reg.add(Group(reg, "second", "first", None, None))
    g4 = reg.add(Group(reg, "four", None, "sink4", Level.VERBOSE))

    g2.set_sink_from_group("four")
    g2.set_level_from_group(g4)
    assert g2.sink is s4
    assert g2.is_sink_overridden
    assert g2.level == Level.VERBOSE
    assert g2.is_level_overridden
    g2.set_level_from_group(g1)
    assert not g2.is_level_overridden
    assert g2.level == Level.TRACE


def test_root_reset_is_noop():
    reg, (s1, _, _, _) = _registry_with_sinks()
    g1 = reg.add(Group(reg, "first", None, "sink1", Level.TRACE))

    g1.set_level(Level.ERROR)
    g1.reset_level()
    g1.reset_sink()
    assert g1.level == Level.ERROR
    assert not g1.is_level_overridden
    assert g1.sink is s1


def test_constructor_errors():
    reg, _ = _registry_with_sinks()
    with pytest.raises(ValueError):
        Group(reg, "x", "nonexisting_group", None, None)
    with pytest.raises(ValueError):
        Group(reg, "x", None, "nonexisting_sink", Level.INFO)
    with pytest.raises(ValueError):
        Group(reg, "x", None, "sink1", None)


def test_name():
    reg, _ = _registry_with_sinks()
    g1 = Group(reg, "first", None, "sink1", Level.TRACE)
    assert g1.name == "first"