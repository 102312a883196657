"""
Function tracing decorator.

Routes call traces through a muxlog Logger at a chosen level (default
'trace'). Only sinks listening to that level see them; if the level is
not defined, the records go to sinks listening to debug.
"""

import functools
import inspect
from pathlib import Path


def _abridged(value):
    if isinstance(value, Path):
        return f"Path('{value}')"
    if isinstance(value, str) and len(value) > 50:
        return f"'{value[:47]}...'"
    if isinstance(value, (list, tuple)) and len(value) > 3:
        return f"[...{len(value)} items...]"
    return repr(value)


def trace(logger, level='trace'):
    """Decorator factory to trace function calls via ``logger``.

    Logs function entry with arguments, the return value (if not None),
    and any exception raised, which is re-raised unchanged.

    Usage::

        @trace(log)
        def load(path): ...
    """
    def decorator(func):
        module = inspect.getmodule(func)
        module_name = module.__name__ if module else "unknown"
        where = f"{module_name}.{func.__qualname__}"

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            args_repr = [_abridged(a) for a in args]
            args_repr += [f"{k}={_abridged(v)}" for k, v in kwargs.items()]
            logger.log(level, f"[TRACE] >> {where}({', '.join(args_repr)})")

            try:
                result = func(*args, **kwargs)
            except Exception as e:
                logger.log(level, f"[TRACE] !! {where} raised: {type(e).__name__}: {e}")
                raise

            if result is not None:
                logger.log(level, f"[TRACE] << {where} returned: {_abridged(result)}")
            return result

        return wrapper

    return decorator
