"""
Function tracing decorator.

Logs entry, return value and raised exceptions at TRACE level, attributed
to the decorated function's own file, line and name rather than to the
wrapper.
"""

import functools
from pathlib import Path

from .levels import Level
from .line import Line


def _short_repr(value) -> str:
    if isinstance(value, Path):
        return f"Path('{value}')"
    if isinstance(value, str) and len(value) > 50:
        return f"'{value[:47]}...'"
    if isinstance(value, (list, tuple)) and len(value) > 3:
        return f"[...{len(value)} items...]"
    return repr(value)


def _format_args(func, args, kwargs) -> str:
    args_repr = []

    # Methods show 'self' instead of the instance repr
    params = getattr(func, '__code__', None)
    first = params.co_varnames[0] if params and params.co_argcount else None
    remaining_args = args
    if args and first in ('self', 'cls'):
        args_repr.append(first)
        remaining_args = args[1:]

    args_repr.extend(_short_repr(arg) for arg in remaining_args)
    args_repr.extend(f"{key}={_short_repr(value)}" for key, value in kwargs.items())
    return ', '.join(args_repr)


def trace(func=None, *, manager=None):
    """Decorator to trace function calls through the log manager.

    Does no formatting work unless some worker accepts TRACE lines.
    Can be applied bare (``@trace``) or with a manager
    (``@trace(manager=mgr)``).
    """
    if func is None:
        return functools.partial(trace, manager=manager)

    code = getattr(func, '__code__', None)
    file = code.co_filename if code else '<unknown>'
    lineno = code.co_firstlineno if code else 0
    name = func.__name__

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        # Lazy import to avoid circular dependency
        from .manager import get_manager

        mgr = manager if manager is not None else get_manager()
        if not mgr.accepts(Level.TRACE):
            return func(*args, **kwargs)

        def _emit(*parts):
            with Line(Level.TRACE, file, lineno, name, manager=mgr) as line:
                line.write(*parts)

        _emit(">> ", name, "(", _format_args(func, args, kwargs), ")")
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            _emit("!! ", name, " raised: ", type(e).__name__, ": ", e)
            raise
        if result is not None:
            _emit("<< ", name, " returned: ", _short_repr(result))
        return result

    return wrapper
