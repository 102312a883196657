"""muxlog emit — log one message through the configured sinks.

The logger is assembled from the resolved config (project, then global)
plus any --level/--sink flags, then the message is logged once. Every
sink that accepts the level writes it; undefined levels reach only sinks
listening to debug.
"""

import argparse

from muxlog.commands import build_logger_from_args
from muxlog.output import print_debug, print_error
from muxlog.sinkspec import close_writers


def register(subparsers, parents):
    """Register the 'emit' subcommand."""
    p = subparsers.add_parser(
        "emit",
        parents=parents,
        help="Log a message through the configured sinks",
        description=(
            "Log MESSAGE at LEVEL. Sinks come from .muxlog.json, the global\n"
            "config and --sink flags; with none configured, a console sink\n"
            "on stderr hears every level."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("level_name", metavar="LEVEL", help="Level name")
    p.add_argument("message", metavar="MESSAGE", nargs="+",
                   help="Message text (words are joined with spaces)")
    p.set_defaults(func=run)


def run(args):
    """Execute the emit command."""
    try:
        logger = build_logger_from_args(args)
    except ValueError as e:
        print_error(str(e))
        return 2

    if args.level_name not in logger.registry:
        print_debug(f"Level '{args.level_name}' is not defined; "
                    "routing to debug listeners")

    try:
        logger.log(args.level_name, " ".join(args.message))
    finally:
        close_writers(logger)
    return 0
