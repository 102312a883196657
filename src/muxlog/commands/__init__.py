"""muxlog subcommands.

Each module exports:
  register(subparsers, parents) — add itself to the subparser
  run(args) — execute the command
"""

from muxlog.config import resolve_config
from muxlog.output import print_debug
from muxlog.sinkspec import SinkConfig, build_logger


DEFAULT_SINK_ID = "console"


def build_logger_from_args(args):
    """Build a Logger from resolved config plus --level/--sink flags.

    With no sinks configured anywhere, a 'console' sink on stderr that
    hears every level is attached.

    Raises:
        ValueError: If a sink spec or config entry is malformed
    """
    resolved = resolve_config(args)
    sinks = resolved["sinks"] or [SinkConfig(id=DEFAULT_SINK_ID)]
    print_debug(f"Levels: {', '.join(resolved['levels'])}")
    print_debug(f"Sinks: {', '.join(s.id for s in sinks)}")
    return build_logger(resolved["levels"], sinks)
