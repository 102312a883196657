"""Shared test fixtures for muxlog test suite."""

import os
from datetime import datetime
from unittest.mock import patch

import pytest

from muxlog import output as _output_mod
from muxlog.logger import Logger


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: spawns subprocesses")


# ---------------------------------------------------------------------------
# Record capture
# ---------------------------------------------------------------------------
class RecordingWriter:
    """Writer that keeps every LogRecord it receives."""

    def __init__(self):
        self.records = []

    def __call__(self, record):
        self.records.append(record)

    @property
    def messages(self):
        return [r.message for r in self.records]

    @property
    def levels(self):
        return [r.level for r in self.records]


@pytest.fixture
def recorder():
    """Factory for RecordingWriter instances."""
    return RecordingWriter


FIXED_DATE = datetime(2026, 1, 15, 10, 30, 0)


@pytest.fixture
def logger():
    """A Logger with the default levels and a fixed clock."""
    return Logger(clock=lambda: FIXED_DATE)


@pytest.fixture
def scenario_logger():
    """Logger with info, error, trace, security defined (debug built in)."""
    log = Logger(['info', 'error'], clock=lambda: FIXED_DATE)
    log.define_levels(['trace', 'security'])
    return log


# ---------------------------------------------------------------------------
# Temporary directory fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def tmp_config_home(tmp_path):
    """Provide a temporary home directory for ~/.muxlog/config.json."""
    home = tmp_path / "home"
    home.mkdir()
    with patch.dict(os.environ, {"HOME": str(home), "USERPROFILE": str(home)}):
        with patch("pathlib.Path.home", return_value=home):
            yield home


@pytest.fixture
def tmp_project(tmp_path, tmp_config_home, monkeypatch):
    """A project directory used as cwd, isolated from the real home."""
    project = tmp_path / "project"
    project.mkdir()
    monkeypatch.chdir(project)
    return project


# ---------------------------------------------------------------------------
# CLI output
# ---------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def _reset_output():
    """Reset the CLI output logger between tests."""
    old = _output_mod._output
    _output_mod._output = None
    yield
    _output_mod._output = old
