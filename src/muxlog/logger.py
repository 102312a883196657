"""
Logger — fans a single log call out to every interested sink.

Each Logger owns its own LevelRegistry and SinkTable; two loggers never
share state. A log call walks the live sinks in table order and hands a
LogRecord to every sink whose AcceptSet accepts the level.

Anomalies never raise. Duplicate sink ids and non-string level names are
reported through the logger itself at the debug level; unknown sink ids
and unknown level names are no-ops. The exception is get_writer() and
get_log_id(), which raise SinkNotFound for an id with no live sink.

Usage::

    log = Logger(['info', 'error'])
    log.add_sink('console', StreamWriter(), None)     # hears all levels
    log.add_sink('file', FileWriter('app.log'), ['info'])
    log.log('info', 'Hello world!')                   # both write
    log.hear_levels('file', 'error')
"""

import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from .levels import DEBUG, DEFAULT_LEVELS, LevelRegistry
from .sinks import Sink, SinkTable


LevelNames = Union[str, Iterable[str]]

DUPLICATE_SINK = "Attempted to add sink with duplicate id: {}"


class SinkNotFound(LookupError):
    """Raised by getters when no live sink has the requested id."""

    def __init__(self, sink_id):
        super().__init__(f"No live sink with id {sink_id!r}")
        self.sink_id = sink_id


@dataclass
class LogRecord:
    """What a writer receives for each accepted message.

    Attributes:
        id: Id of the sink being written to
        log_id: The sink's flag for displaying its id
        date: Timestamp taken when log() was called
        message: The message as passed to log()
        level: The level name as passed to log(), not validated
    """
    id: str
    log_id: bool
    date: datetime
    message: Any
    level: Any


def _as_list(levels: Optional[LevelNames]) -> List:
    """Accept a single level name as shorthand for a one-item list."""
    if levels is None:
        return []
    if isinstance(levels, (str, bytes, bytearray)):
        return [levels]
    try:
        return list(levels)
    except TypeError:
        return [levels]


class Logger:
    """Multiplexing logger with runtime-configurable levels.

    Args:
        levels: Levels to define on top of debug. None means
            DEFAULT_LEVELS ('error', 'info').
        clock: Zero-argument callable returning the record timestamp.
            Called once per log() call. Defaults to datetime.now.
    """

    def __init__(self, levels: Optional[LevelNames] = None,
                 clock: Callable[[], datetime] = None):
        self._lock = threading.RLock()
        self._clock = clock or datetime.now
        self._registry = LevelRegistry()
        self._sinks = SinkTable(self._registry)
        self.define_levels(DEFAULT_LEVELS if levels is None else levels)

    # -------------------------------------------------------------------------
    # Dispatch
    # -------------------------------------------------------------------------
    def log(self, level: str, message: Any) -> None:
        """Write message to every live sink that accepts level."""
        with self._lock:
            date = self._clock()

            def dispatch(sink: Sink) -> None:
                if sink.accept.accepts(level, self._registry):
                    sink.writer(LogRecord(
                        id=sink.id,
                        log_id=sink.log_id,
                        date=date,
                        message=message,
                        level=level,
                    ))

            self._sinks.for_each_live(None, dispatch)

    # -------------------------------------------------------------------------
    # Sinks
    # -------------------------------------------------------------------------
    def add_sink(self, sink_id: str, writer: Callable,
                 levels: Optional[LevelNames] = None,
                 log_id: bool = False) -> None:
        """Register a sink.

        levels=None subscribes to every level defined at this moment.
        A duplicate id is refused with a debug diagnostic.
        """
        with self._lock:
            if levels is not None:
                levels = _as_list(levels)
            if not self._sinks.add(sink_id, writer, levels, log_id):
                self.log(DEBUG, DUPLICATE_SINK.format(sink_id))

    def remove_sink(self, sink_id: str) -> None:
        with self._lock:
            self._sinks.remove(sink_id)

    def hear_levels(self, sink_id: Optional[str], levels: LevelNames) -> None:
        """Subscribe one sink (or all, with sink_id=None) to levels."""
        names = _as_list(levels)
        with self._lock:
            def hear(sink: Sink) -> None:
                for name in names:
                    sink.accept.add(name, self._registry)

            self._sinks.for_each_live(sink_id, hear)

    def ignore_levels(self, sink_id: Optional[str], levels: LevelNames) -> None:
        """Unsubscribe one sink (or all, with sink_id=None) from levels."""
        names = _as_list(levels)
        with self._lock:
            def ignore(sink: Sink) -> None:
                for name in names:
                    sink.accept.remove(name, self._registry)

            self._sinks.for_each_live(sink_id, ignore)

    def set_writer(self, sink_id: Optional[str], writer: Callable) -> None:
        with self._lock:
            def assign(sink: Sink) -> None:
                sink.writer = writer

            self._sinks.for_each_live(sink_id, assign)

    def get_writer(self, sink_id: str) -> Callable:
        return self._require(sink_id).writer

    def set_log_id(self, sink_id: Optional[str], log_id: bool) -> None:
        with self._lock:
            def assign(sink: Sink) -> None:
                sink.log_id = bool(log_id)

            self._sinks.for_each_live(sink_id, assign)

    def get_log_id(self, sink_id: str) -> bool:
        return self._require(sink_id).log_id

    def _require(self, sink_id: str) -> Sink:
        with self._lock:
            sink = self._sinks.find(sink_id)
        if sink is None:
            raise SinkNotFound(sink_id)
        return sink

    # -------------------------------------------------------------------------
    # Levels
    # -------------------------------------------------------------------------
    def define_levels(self, levels: LevelNames) -> None:
        """Define new levels. Non-string entries are skipped with a diagnostic."""
        with self._lock:
            rejected = self._registry.define(_as_list(levels))
            for _ in rejected:
                self.log(DEBUG, "Blocked the definition of a non-string log level identifier")

    def undefine_levels(self, levels: LevelNames) -> None:
        """Remove levels (never debug) and keep every sink consistent.

        The removed tag is dropped from every AcceptSet before the
        registry compacts. If another level was moved onto the freed
        tag, every AcceptSet holding its old tag is rewritten.
        """
        with self._lock:
            for name in _as_list(levels):
                change = self._registry.undefine(name)
                if change is None:
                    continue
                freed, moved = change

                def rewrite(sink: Sink) -> None:
                    sink.accept.discard_tag(freed)
                    if moved is not None:
                        sink.accept.retag(moved, freed)

                self._sinks.for_each_live(None, rewrite)

    # -------------------------------------------------------------------------
    # Inspection
    # -------------------------------------------------------------------------
    def defined_levels(self) -> Dict[str, int]:
        """Mapping of defined level names to tags, in tag order."""
        with self._lock:
            return dict(self._registry.items())

    def sink_ids(self) -> List[str]:
        with self._lock:
            return [s.id for s in self._sinks.live()]

    def heard_levels(self, sink_id: str) -> List[str]:
        """Defined levels the sink currently accepts."""
        with self._lock:
            return self._require(sink_id).accept.levels(self._registry)

    @property
    def registry(self) -> LevelRegistry:
        return self._registry

    @property
    def sinks(self) -> SinkTable:
        return self._sinks
