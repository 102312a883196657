"""
Sink spec parsing — declarative sink configuration.

A sink spec describes one sink of a Logger: its id, the levels it hears,
and where its records go.

Sink spec syntax (compact, positional):
    ID:LEVELS:DEST:LOCATION:FORMAT

    Examples:
        console                         # All levels, stderr, text
        console:info,error              # Two levels, stderr
        audit:security:file:audit.log   # File destination
        events:*:stdout::json           # All levels, stdout, json

LEVELS is comma-separated; empty or '*' means every level defined when
the sink is added. Empty slots use :: (empty between colons).

Config files carry the same information as mappings, see
SinkConfig.from_dict().
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from .levels import DEBUG
from .logger import DUPLICATE_SINK, Logger
from .writers import make_writer


ALL_LEVELS = '*'


@dataclass
class SinkConfig:
    """Declarative description of a single sink."""
    id: str
    levels: Optional[List[str]] = None   # None = all defined levels
    destination: Optional[str] = None    # 'stderr', 'stdout', 'file'
    location: Optional[str] = None       # File path for file dest
    format: Optional[str] = None         # 'text', 'json'
    log_id: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SinkConfig':
        """Build a SinkConfig from a config-file mapping.

        ``levels`` may be a list, a comma-separated string, '*' or absent.

        Raises:
            ValueError: If data is not a mapping or has no id
        """
        if not isinstance(data, dict):
            raise ValueError(f"Sink config must be a mapping or a spec string: {data!r}")
        sink_id = data.get('id')
        if not sink_id:
            raise ValueError(f"Sink config without an id: {data!r}")
        return cls(
            id=sink_id,
            levels=parse_levels(data.get('levels')),
            destination=data.get('destination'),
            location=data.get('location'),
            format=data.get('format'),
            log_id=bool(data.get('log_id', False)),
        )

    @classmethod
    def from_entry(cls, entry: Any) -> 'SinkConfig':
        """Build a SinkConfig from a config-file entry: a spec string or a mapping."""
        if isinstance(entry, str):
            return parse_sink_spec(entry)
        return cls.from_dict(entry)


def parse_levels(value: Any) -> Optional[List[str]]:
    """Normalize a levels value from a spec or config file.

    A string is comma-separated; empty or '*' gives None (all levels).
    A list or tuple is taken as is.

    Raises:
        ValueError: For any other type
    """
    if value is None:
        return None
    if isinstance(value, str):
        text = value.strip()
        if not text or text == ALL_LEVELS:
            return None
        return [name.strip() for name in text.split(',') if name.strip()]
    if isinstance(value, (list, tuple)):
        return list(value)
    raise ValueError(f"Levels must be a list or a comma-separated string: {value!r}")


def parse_sink_spec(spec: str) -> SinkConfig:
    """Parse a sink spec string into a SinkConfig.

    Handles the compact positional syntax:
        ID:LEVELS:DEST:LOCATION:FORMAT

    Windows drive letters (e.g., C:\\path) are detected and rejoined.

    Args:
        spec: Sink spec string like "console:info" or "f:*:file:C:\\logs\\out.log"

    Returns:
        SinkConfig with parsed values

    Raises:
        ValueError: If the id slot is empty
    """
    parts = spec.split(':')

    # Handle Windows drive letters: rejoin 'C' + '\path' into 'C:\path'
    rejoined = []
    i = 0
    while i < len(parts):
        if (len(parts[i]) == 1 and parts[i].isalpha()
                and i + 1 < len(parts)
                and len(rejoined) == 3):  # Only in LOCATION slot
            rejoined.append(f"{parts[i]}:{parts[i+1]}")
            i += 2
        else:
            rejoined.append(parts[i])
            i += 1
    parts = rejoined

    sink_id = parts[0].strip()
    if not sink_id:
        raise ValueError(f"Sink spec has no id: {spec!r}")

    levels = parse_levels(parts[1]) if len(parts) > 1 else None
    dest = parts[2] if len(parts) > 2 and parts[2] else None
    location = parts[3] if len(parts) > 3 and parts[3] else None
    fmt = parts[4] if len(parts) > 4 and parts[4] else None

    return SinkConfig(id=sink_id, levels=levels, destination=dest,
                      location=location, format=fmt)


def build_logger(levels: Optional[Iterable[str]] = None,
                 sinks: Iterable[SinkConfig] = ()) -> Logger:
    """Create a Logger with the given levels and one writer per sink config.

    A config whose id is already attached is skipped before its writer is
    built, with the usual duplicate-id diagnostic. If a writer cannot be
    built, the writers opened so far are closed before the error propagates.

    Args:
        levels: Extra levels to define; None uses the logger defaults
        sinks: Sink configurations, added in order

    Raises:
        ValueError: If a sink's destination or format is invalid
    """
    logger = Logger(None if levels is None else list(levels))
    try:
        for cfg in sinks:
            if cfg.id in logger.sink_ids():
                logger.log(DEBUG, DUPLICATE_SINK.format(cfg.id))
                continue
            writer = make_writer(cfg.destination, cfg.location, cfg.format)
            logger.add_sink(cfg.id, writer, cfg.levels, cfg.log_id)
    except Exception:
        close_writers(logger)
        raise
    return logger


def close_writers(logger: Logger) -> None:
    """Close every live sink writer that has a close() method."""
    for sink_id in logger.sink_ids():
        close = getattr(logger.get_writer(sink_id), 'close', None)
        if callable(close):
            close()
