"""muxlog levels — list defined levels, their tags and listening sinks."""

import argparse

from muxlog.commands import build_logger_from_args
from muxlog.output import print_error
from muxlog.sinkspec import close_writers


def register(subparsers, parents):
    """Register the 'levels' subcommand."""
    p = subparsers.add_parser(
        "levels",
        parents=parents,
        help="List defined levels and the sinks hearing them",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.set_defaults(func=run)


def format_levels(logger) -> str:
    """One line per level: name, tag, and the ids of sinks hearing it."""
    levels = logger.defined_levels()
    heard = {sid: set(logger.heard_levels(sid)) for sid in logger.sink_ids()}
    width = max(len(name) for name in levels)
    lines = []
    for name, tag in levels.items():
        sinks = ", ".join(sid for sid, names in heard.items() if name in names)
        lines.append(f"  {name:<{width}}  {tag:>3}  {sinks or '-'}")
    return "\n".join(lines)


def run(args):
    """Execute the levels command."""
    try:
        logger = build_logger_from_args(args)
    except ValueError as e:
        print_error(str(e))
        return 2

    try:
        print(format_levels(logger))
    finally:
        close_writers(logger)
    return 0
