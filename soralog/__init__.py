"""Hierarchical logging: sinks, groups and loggers, configurable from YAML."""

__version__ = "0.1.0"