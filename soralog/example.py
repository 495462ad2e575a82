"""Demonstration program exercising loggers, groups and configurators."""

from __future__ import annotations

import argparse
import sys
import threading
from pathlib import Path
from typing import Optional, Sequence

from soralog.configurator import Configurator, FallbackConfigurator
from soralog.level import Level
from soralog.logger import LoggerFactory
from soralog.logging_system import LoggingSystem
from soralog.threads import set_thread_name
from soralog.yaml_config import YamlConfigurator

__all__ = ["LoggingObject", "main"]

_CONTENT_CONFIG = """
sinks:
  - name: console
    type: console
    color: true
groups:
  - name: main_
    is_fallback: true
    sink: console
    level: trace
  - name: azaza
"""

_CASCADE_BASE_CONFIG = """
groups:
  - name: 3rd_party
    is_fallback: true
    level: info
    children:
      - name: first-1
        children:
          - name: second-1-1
          - name: second-1-2
            children:
              - name: third-1-2-1
                level: critical
          - name: second-1-3
      - name: first-2
        children:
          - name: second-2-1
          - name: second-2-2
      - name: first-3
"""

_CASCADE_TOP_CONFIG = """
sinks:
  - name: console
    type: console
    color: true
    thread: name
groups:
  - name: example_group
    is_fallback: true
    sink: console
    level: trace
    children:
      - name: 3rd_party
"""

_MODES = ("fallback", "customized", "file", "content", "cascade")
_WORKER_NAMES = ("SecondThread", "ThirdThread", "FourthThread", "FifthThread")


class LoggingObject:
    """An object that logs one message of every level."""

    def __init__(self, logger_factory: LoggerFactory) -> None:
        self._log = logger_factory.get_logger("ObjectTag", "example")

    def method(self) -> None:
        log = self._log
        log.trace("Example of trace log message")
        log.debug("There is a debug value in this line: {}", 0xDEADBEEF)
        log.verbose("Let's gossip about something")
        log.info("This is simple info message")
        log.warn("This is formatted message with level '{}'", "warning")
        log.error("This is message with level '{}' and number {}", "error", 777)
        log.critical("This is example of critical situations")


def _make_configurator(mode: str, path: Optional[Path]) -> Configurator:
    if mode == "fallback":
        return FallbackConfigurator()
    if mode == "customized":
        return FallbackConfigurator(Level.TRACE, True)
    if mode == "content":
        return YamlConfigurator(_CONTENT_CONFIG)
    if mode == "cascade":
        return YamlConfigurator(_CASCADE_TOP_CONFIG, YamlConfigurator(_CASCADE_BASE_CONFIG))
    return YamlConfigurator(Path(path))


def _calculated(tag: str) -> str:
    print(f"CALCULATED: {tag}", flush=True)
    return tag


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Run the logging demonstration.")
    parser.add_argument("config", nargs="?", type=Path, help="YAML configuration file")
    parser.add_argument("--mode", choices=_MODES, help="which configurator to use")
    args = parser.parse_args(argv)

    mode = args.mode or ("file" if args.config is not None else "cascade")
    if mode == "file" and args.config is None:
        parser.error("mode 'file' needs a configuration file")

    log_system = LoggingSystem(_make_configurator(mode, args.config))
    result = log_system.configure()
    if result.message:
        out = sys.stderr if result.has_error else sys.stdout
        print(result.message, file=out, flush=True)
    if result.has_error:
        return 1

    set_thread_name("MainThread")

    main_log = log_system.get_logger("main", "example_group")

    main_log.info("Bad logging (one arg for two placeholders): {} {}", 1)
    main_log.info("Bad logging (unclosed placeholders): {", 1)

    main_log.info("Start")

    main_log.set_level(Level.TRACE)
    main_log.debug("{}", _calculated("logger: debug msg for trace level"))
    if main_log.level >= Level.DEBUG:
        main_log.debug("{}", _calculated("macro: debug msg for trace level"))

    main_log.set_level(Level.INFO)
    main_log.debug("{}", _calculated("logger: debug msg for info level"))
    if main_log.level >= Level.DEBUG:
        main_log.debug("{}", _calculated("macro: debug msg for info level"))

    generated_format = "<{}>"
    main_log.debug(generated_format, "works!")

    def worker(name: str) -> None:
        set_thread_name(name)
        LoggingObject(log_system).method()

    threads = [
        threading.Thread(target=worker, args=(name,), name=name) for name in _WORKER_NAMES
    ]
    for thread in threads:
        thread.start()

    main_log.info(
        "Very long message  |.....30->|.....40->|.....50->|.....60->|.....70->|"
        ".....80->|.....90->|....100->|....110->|....120->|....130->|....140->|"
    )

    dynamic_format = "Custom made format: {} ==>" + "<== {}"
    main_log.info(dynamic_format, 1, 2)
    main_log.info(dynamic_format, 3, 4)

    LoggingObject(log_system).method()

    for thread in threads:
        thread.join()

    main_log.info("Finish")
    main_log.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())