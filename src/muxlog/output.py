"""Output helpers for the muxlog CLI.

The CLI reports through a muxlog Logger of its own with a single
'console' sink on stderr. Verbosity decides which levels that sink hears:

    ←── quieter ────────── default ────────── louder ──→
      -3        -2       -1          0              1
    nothing   error   +warning   +info        +debug

-v increments, -Q decrements. They compose: -v -Q = 0.
"""

from typing import Optional

from muxlog.levels import DEBUG
from muxlog.logger import Logger
from muxlog.writers import StreamWriter


CLI_LEVELS = ('info', 'warning', 'error')

# Levels heard at each verbosity, clamped to the ends of the axis
_VERBOSITY_LEVELS = {
    -3: [],
    -2: ['error'],
    -1: ['warning', 'error'],
    0: ['info', 'warning', 'error'],
    1: [DEBUG, 'info', 'warning', 'error'],
}


def levels_for_verbosity(verbosity: int) -> list:
    """Return the CLI levels shown at a verbosity."""
    return list(_VERBOSITY_LEVELS[max(-3, min(1, verbosity))])


def _cli_format(record) -> str:
    prefix = {'error': 'ERROR: ', 'warning': 'WARN: ', DEBUG: 'debug: '}
    return f"  {prefix.get(record.level, '')}{record.message}"


class _CliWriter(StreamWriter):
    """Plain stderr lines without the date/level header."""

    def __call__(self, record) -> None:
        print(_cli_format(record), file=self.stream)


# =============================================================================
# Module-level CLI logger
# =============================================================================

_output: Optional[Logger] = None


def init_output(verbosity: int = 0) -> Logger:
    """Initialize the CLI logger for a verbosity.

    Call once at program startup after parsing CLI arguments.
    """
    global _output
    _output = Logger(CLI_LEVELS)
    _output.add_sink('console', _CliWriter(), levels_for_verbosity(verbosity))
    return _output


def get_output() -> Logger:
    """Get the CLI logger, creating a default (verbosity 0) if needed."""
    if _output is None:
        return init_output()
    return _output


def print_ok(msg):
    """Report a success message."""
    get_output().log('info', f"[OK] {msg}")


def print_info(msg):
    get_output().log('info', msg)


def print_warn(msg):
    get_output().log('warning', msg)


def print_error(msg):
    """Report an error. Hidden only at the quietest verbosity."""
    get_output().log('error', msg)


def print_debug(msg):
    get_output().log(DEBUG, msg)
