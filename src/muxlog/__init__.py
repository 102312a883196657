"""
muxlog — multiplexing logger with runtime-configurable levels.

A single log call fans out to any number of sinks. Each sink listens to
its own set of named levels, and levels can be defined and undefined
while the logger is in use.

Public API:
    Logger           — levels, sinks, and log()
    LogRecord        — what a sink's writer receives
    SinkNotFound     — raised by getters for an unknown sink id
    StreamWriter     — writer for stderr/stdout/any text stream
    FileWriter       — append-only file writer
    make_writer      — build a writer from a destination name
    SinkConfig       — declarative sink description
    parse_sink_spec  — parse ID:LEVELS:DEST:LOCATION:FORMAT
    build_logger     — Logger from levels + SinkConfigs
    trace            — function tracing decorator
"""

from muxlog._version import __version__, __app_name__
from muxlog.levels import DEBUG, DEFAULT_LEVELS, LevelRegistry
from muxlog.accept import AcceptSet
from muxlog.logger import Logger, LogRecord, SinkNotFound
from muxlog.writers import (
    FileWriter, StreamWriter, format_json, format_text, make_writer,
)
from muxlog.sinkspec import SinkConfig, build_logger, parse_sink_spec
from muxlog.trace import trace

__all__ = [
    "__version__", "__app_name__",
    "DEBUG", "DEFAULT_LEVELS", "LevelRegistry", "AcceptSet",
    "Logger", "LogRecord", "SinkNotFound",
    "FileWriter", "StreamWriter", "format_json", "format_text", "make_writer",
    "SinkConfig", "build_logger", "parse_sink_spec",
    "trace",
]
