"""
Record formatters and writer callables.

Writers are plain callables taking a LogRecord, so anything with that
shape can be handed to Logger.add_sink(). The ones here cover the common
destinations:

    StreamWriter   text stream (stderr by default)
    FileWriter     append-only file, one record per line
    make_writer    build one of the above from a sink spec/config

Two line formats are available:

    text   2026-01-15 10:30:00.123456 : info (console) >> Hello world!
    json   {"id": "console", "log_id": true, "date": "...", ...}
"""

import json
import sys
import threading
from pathlib import Path
from typing import Callable, Dict, Optional, TextIO


def format_text(record) -> str:
    """Render a record as ``date : level[ (id)] >> message``."""
    sink = f" ({record.id})" if record.log_id else ""
    return f"{record.date} : {record.level}{sink} >> {record.message}"


def format_json(record) -> str:
    """Render a record as a single-line JSON object."""
    date = record.date.isoformat() if hasattr(record.date, 'isoformat') else record.date
    return json.dumps({
        "id": record.id,
        "log_id": record.log_id,
        "date": date,
        "level": record.level,
        "message": record.message,
    }, default=str)


FORMATTERS: Dict[str, Callable] = {
    'text': format_text,
    'json': format_json,
}

DESTINATIONS = ('stderr', 'stdout', 'file')


def get_formatter(fmt: Optional[str]) -> Callable:
    """Look up a formatter by name (None means 'text')."""
    try:
        return FORMATTERS[fmt or 'text']
    except KeyError:
        raise ValueError(
            f"Unknown format {fmt!r} (expected one of: {', '.join(FORMATTERS)})"
        ) from None


class StreamWriter:
    """Write formatted records to a text stream.

    With stream=None the stream is looked up as sys.stderr on every
    write, so redirection (and pytest capture) is honored.
    """

    def __init__(self, stream: TextIO = None, fmt: str = 'text',
                 use_stdout: bool = False):
        self._stream = stream
        self._use_stdout = use_stdout
        self._format = get_formatter(fmt)

    @property
    def stream(self) -> TextIO:
        if self._stream is not None:
            return self._stream
        return sys.stdout if self._use_stdout else sys.stderr

    def __call__(self, record) -> None:
        print(self._format(record), file=self.stream)


class FileWriter:
    """Append formatted records to a file, one per line.

    The file is opened on construction (parent directories are created)
    and flushed after every record.
    """

    def __init__(self, path, fmt: str = 'text'):
        self.path = Path(path)
        self._format = get_formatter(fmt)
        self._lock = threading.Lock()
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._file = open(self.path, "a", encoding="utf-8")

    def __call__(self, record) -> None:
        line = self._format(record) + "\n"
        with self._lock:
            self._file.write(line)
            self._file.flush()

    def close(self) -> None:
        with self._lock:
            if not self._file.closed:
                self._file.close()

    @property
    def closed(self) -> bool:
        return self._file.closed


def make_writer(destination: Optional[str] = None, location=None,
                fmt: Optional[str] = None) -> Callable:
    """Build a writer for a destination name.

    Args:
        destination: 'stderr' (default), 'stdout' or 'file'
        location: File path, required for 'file'
        fmt: 'text' (default) or 'json'

    Raises:
        ValueError: Unknown destination/format, or 'file' without location
    """
    dest = destination or 'stderr'
    fmt = fmt or 'text'
    if dest == 'stderr':
        return StreamWriter(fmt=fmt)
    if dest == 'stdout':
        return StreamWriter(fmt=fmt, use_stdout=True)
    if dest == 'file':
        if not location:
            raise ValueError("File destination needs a location (path)")
        return FileWriter(location, fmt=fmt)
    raise ValueError(
        f"Unknown destination {dest!r} (expected one of: {', '.join(DESTINATIONS)})"
    )
