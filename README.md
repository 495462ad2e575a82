# soralog

A logging system built around three ideas:

- **Sinks** say where events go: the console (`ConsoleSink`), a file
  (`FileSink`), the system log (`SyslogSink`), nowhere (`NullSink`), or
  several sinks at once (`Multisink`). All live in `soralog.sink`.
- **Groups** (`soralog.group.Group`) form a tree. A group holds a sink and a
  level. A child group takes both from its parent unless it overrides them.
- **Loggers** (`soralog.logger.Logger`) belong to a group and take its sink
  and level, unless the logger overrides them.

A change made through the logging system to a group reaches every child
group and logger that has not overridden that property. Because groups and
loggers remember which of their properties were overridden, a property can
be reset later and then follows the parent again.

## Installation

```
pip install soralog
```

For running the tests:

```
pip install "soralog[test]"
pytest
```

## Levels

`soralog.level.Level` is an `IntEnum` ordered from quietest to most detailed:

`OFF`, `CRITICAL`, `ERROR`, `WARN`, `INFO`, `VERBOSE`, `DEBUG`, `TRACE`

A logger writes an event when the event's level is no higher than the
logger's level. `level_to_str` gives the display name of a level, for
example `"Warning"`, and `level_to_char` gives its first character.

## Quick start

```python
from soralog.configurator import FallbackConfigurator
from soralog.logging_system import LoggingSystem

system = LoggingSystem(FallbackConfigurator())
result = system.configure()
if result.message:
    print(result.message)

log = system.get_logger("main", "example_group")
log.info("Started with {} workers", 4)
log.debug("Not shown at the default level")
```

`FallbackConfigurator(level=Level.INFO, with_color=False)` registers one
console sink named `console` and one root group named `*`. The first group
made in a system becomes its fallback group; a logger asked for in a group
that does not exist is placed in the fallback group. `configure()` may be
called only once per system; a second call raises `RuntimeError`.

Messages are filled in with `str.format`, so `{}` placeholders take the
extra arguments in order. A call with a single argument logs that value as
it is. When the format does not match its arguments, the raw format is
written followed by a `<format error: ...>` note. Messages are cut to the
sink's `max_message_length` (512 characters by default).

```python
log.warn("Value '{}' out of range", value)
log.error("Failed {} of {} attempts", failed, total)
log.critical("Shutting down")
log.flush()
```

`get_logger(logger_name, group_name, sink_name=None, level=None)` returns
the existing logger of that name if there is one; otherwise it creates it,
overriding its sink and level when they are given. A `Level` may also be
passed in place of the sink name.

## Changing settings at run time

Groups and loggers are addressed by name through the logging system:

```python
from soralog.level import Level

system.set_level_of_group("network", Level.DEBUG)
system.reset_level_of_group("network")          # follow the parent again

system.set_sink_of_logger("main", "file")
system.reset_sink_of_logger("main")             # follow the group again

system.set_parent_of_group("network", "io")
system.unset_parent_of_group("network")
system.set_group_of_logger("main", "network")
system.set_fallback_group("network")
```

Each of these returns `True` when the named group, logger or sink exists and
the change was made. `set_parent_of_group` also returns `False`, changing
nothing, when the new parent would make a cycle.

Sinks and groups can be added directly:

```python
from soralog.sink import FileSink

system.make_sink(FileSink("file", "app.log"))
system.make_group("io", None, "file", Level.INFO)
system.make_group("network", "io", None, None)
```

`make_group(name, parent, sink, level)` raises `ValueError` when the parent
or sink does not exist, or when a group without a parent has no level. A
root group given no sink uses the sink `*`, which discards everything.

## Sinks

Buffered sinks accept `thread_info_type` (`ThreadInfoType.NONE`, `NAME` or
`ID`), `capacity`, `max_message_length`, `buffer_size` and `latency` (in
milliseconds; `0`, the default, writes every event at once). Events are
queued in a `soralog.circular_buffer.CircularBuffer` and written on flush.
`ConsoleSink` also takes `stream` (`Stream.STDOUT` or `Stream.STDERR`) and
`with_color`. `FileSink.rotate()` closes the file so that it is reopened on
the next write. `SyslogSink` raises `RuntimeError` where the `syslog` module
is not available.

Thread names come from `soralog.threads`: `set_thread_name`,
`get_thread_name` (both keep at most 15 characters) and `get_thread_number`.

## YAML configuration

`soralog.yaml_config.YamlConfigurator` reads a configuration such as:

```yaml
sinks:
  - name: console
    type: console
    color: true
    thread: name
  - name: file
    type: file
    path: app.log
groups:
  - name: main
    is_fallback: true
    sink: console
    level: info
    children:
      - name: network
        level: debug
      - name: storage
        sink: file
```

A plain string is taken as YAML content; to read a file, pass a path object:

```python
from pathlib import Path
from soralog.yaml_config import YamlConfigurator

system = LoggingSystem(YamlConfigurator(Path("logger.yml")))
```

A second argument names a previous configurator, which is applied first;
groups mentioned again in the later configuration are updated rather than
made anew.

Sink types are `console`, `file` (needs `path`), `syslog` (needs `ident`)
and `multisink` (needs `sinks`, a list of sink names defined earlier). A
root group must name a level; children take what they do not set from their
parent. Level names, read by `parse_level`, are `off`, `critical` (or
`crit`), `error`, `warning` (or `warn`), `info`, `verbose`, `debug` (or
`deb`) and `trace`. The name `*` is reserved for sinks and groups.

Problems found in the configuration are gathered into the `ConfigResult`
returned by `configure()`: its `has_error` and `has_warning` flags tell how
bad they are, and `message` lists them line by line, each prefixed with
`E:` or `W:`.

## Example program

A small demonstration that configures a system, logs from several threads
and shows how levels filter events:

```
soralog-example
soralog-example --mode customized
soralog-example path/to/logger.yml
```

`--mode` is one of `fallback`, `customized`, `file`, `content` and
`cascade`; without a file the default is `cascade`. It exits with status 1
when the configuration has errors.

## What it does not do

Flushing happens in the calling thread: there is no background writer, and
`async_flush()` simply flushes. The package does not hook into Python's
standard `logging` module.