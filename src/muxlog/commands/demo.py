"""muxlog demo — walk through level routing with two sinks.

Defines info and error (plus the built-in debug), then trace and
security, and attaches:

    console   stdout, hears every level defined at that point
    file      appends to --file (default log.txt), hears only info

It then logs a few messages, changes both subscriptions, and logs again,
so the output shows which sink heard what.
"""

import argparse

from muxlog.logger import Logger
from muxlog.output import print_ok
from muxlog.writers import FileWriter, StreamWriter


def register(subparsers, parents):
    """Register the 'demo' subcommand."""
    p = subparsers.add_parser(
        "demo",
        help="Run a two-sink routing demonstration",
        description=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("--file", metavar="PATH", default="log.txt",
                   help="File sink location (default: log.txt)")
    p.set_defaults(func=run)


def run_demo(console, file_writer):
    """Drive the demonstration against two writers. Returns the logger."""
    logger = Logger(['info', 'error'])
    logger.define_levels(['trace', 'security'])

    logger.add_sink('console', console, None)
    logger.add_sink('file', file_writer, ['info'])

    # Both sinks hear this.
    logger.log('info', 'Hello world!')

    # 'file' does not hear the next two.
    logger.log('debug', 'Uh oh, something went wrong!')
    logger.log('security', 'Break-in attempt detected!')

    logger.hear_levels('file', ['security', 'error'])
    logger.ignore_levels('console', ['info', 'error'])

    # Now 'file' hears this, but 'console' does not.
    logger.log('error', 'There was an error.')
    return logger


def run(args):
    """Execute the demo command."""
    file_writer = FileWriter(args.file)
    try:
        run_demo(StreamWriter(use_stdout=True), file_writer)
    finally:
        file_writer.close()
    print_ok(f"File sink records appended to {file_writer.path}")
    return 0
