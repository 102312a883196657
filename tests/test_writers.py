"""Tests for muxlog.writers — formatters and stream/file writers."""

import io
import json
import sys
from datetime import datetime

import pytest

from muxlog.logger import LogRecord
from muxlog.writers import (
    FileWriter, StreamWriter, format_json, format_text, get_formatter, make_writer,
)


DATE = datetime(2026, 1, 15, 10, 30, 0)


def _record(log_id=False, level='info', message='Hello world!'):
    return LogRecord(id='console', log_id=log_id, date=DATE,
                     message=message, level=level)


class TestFormatters:
    """Test text and json line rendering."""

    def test_text_without_id(self):
        assert format_text(_record()) == "2026-01-15 10:30:00 : info >> Hello world!"

    def test_text_with_id(self):
        assert format_text(_record(log_id=True)) == (
            "2026-01-15 10:30:00 : info (console) >> Hello world!"
        )

    def test_json(self):
        data = json.loads(format_json(_record(log_id=True)))
        assert data == {
            "id": "console", "log_id": True, "date": "2026-01-15T10:30:00",
            "level": "info", "message": "Hello world!",
        }

    def test_json_non_serializable_message(self):
        data = json.loads(format_json(_record(message=DATE)))
        assert data["message"] == "2026-01-15 10:30:00"

    def test_unknown_format(self):
        with pytest.raises(ValueError, match="Unknown format"):
            get_formatter("xml")


class TestStreamWriter:
    """Test StreamWriter."""

    def test_writes_line(self):
        buf = io.StringIO()
        StreamWriter(buf)(_record())
        assert buf.getvalue() == "2026-01-15 10:30:00 : info >> Hello world!\n"

    def test_defaults_to_stderr(self, capsys):
        StreamWriter()(_record())
        captured = capsys.readouterr()
        assert "Hello world!" in captured.err
        assert captured.out == ""

    def test_stdout(self, capsys):
        StreamWriter(use_stdout=True, fmt='json')(_record())
        assert '"message": "Hello world!"' in capsys.readouterr().out


class TestFileWriter:
    """Test FileWriter."""

    def test_appends_lines(self, tmp_path):
        path = tmp_path / "logs" / "app.log"
        w = FileWriter(path)
        w(_record(message='one'))
        w(_record(message='two'))
        w.close()
        assert w.closed
        assert path.read_text(encoding="utf-8").splitlines() == [
            "2026-01-15 10:30:00 : info >> one",
            "2026-01-15 10:30:00 : info >> two",
        ]

    def test_appends_to_existing(self, tmp_path):
        path = tmp_path / "app.log"
        path.write_text("earlier\n", encoding="utf-8")
        w = FileWriter(path, fmt='json')
        w(_record())
        w.close()
        lines = path.read_text(encoding="utf-8").splitlines()
        assert lines[0] == "earlier"
        assert json.loads(lines[1])["level"] == "info"

    def test_close_twice(self, tmp_path):
        w = FileWriter(tmp_path / "a.log")
        w.close()
        w.close()


class TestMakeWriter:
    """Test make_writer()."""

    def test_default_is_stderr(self):
        w = make_writer()
        assert isinstance(w, StreamWriter)
        assert w.stream is sys.stderr

    def test_file(self, tmp_path):
        w = make_writer('file', tmp_path / "x.log", 'json')
        assert isinstance(w, FileWriter)
        w.close()

    def test_file_needs_location(self):
        with pytest.raises(ValueError, match="location"):
            make_writer('file')

    def test_unknown_destination(self):
        with pytest.raises(ValueError, match="Unknown destination"):
            make_writer('syslog')
