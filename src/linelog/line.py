"""
Line — one log statement in flight.

A Line records where it was created (level, file, line, function) and
collects message text. It is dispatched to the manager exactly once,
when its ``with`` block ends, whichever way the block is left::

    with log(INFO) as line:
        line << "served " << count << " requests"

For a message that is already assembled, the one-shot helpers do the
same in a single call::

    info("served ", count, " requests")
"""

import os
import sys
from typing import Any

from .levels import Level


class Line:
    """Captured metadata plus an accumulating message.

    Lines are tied to the statement that created them: copying or
    pickling one raises TypeError.
    """

    def __init__(self, level: Level, file: str, lineno: int, func: str,
                 manager=None):
        self._level = Level(level)
        self._file = os.path.basename(os.fspath(file))
        self._lineno = int(lineno)
        self._func = func
        self._manager = manager
        self._parts = []
        self._dispatched = False

    @property
    def level(self) -> Level:
        return self._level

    @property
    def file(self) -> str:
        return self._file

    @property
    def lineno(self) -> int:
        return self._lineno

    @property
    def func(self) -> str:
        return self._func

    @property
    def msg(self) -> str:
        return ''.join(self._parts)

    @property
    def dispatched(self) -> bool:
        return self._dispatched

    def __lshift__(self, obj: Any) -> 'Line':
        try:
            self._parts.append(obj if isinstance(obj, str) else str(obj))
        except Exception:
            self._parts.append(f"<unprintable {type(obj).__name__}>")
        return self

    def write(self, *values: Any) -> 'Line':
        """Append each value in order, with no separators."""
        for value in values:
            self << value
        return self

    def dispatch(self) -> None:
        """Hand the line to the manager. Later calls do nothing."""
        if self._dispatched:
            return
        self._dispatched = True
        manager = self._manager
        if manager is None:
            # Lazy import to avoid circular dependency
            from .manager import get_manager
            manager = get_manager()
        manager.log(self)

    def __enter__(self) -> 'Line':
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.dispatch()
        return False

    def __copy__(self):
        raise TypeError("Line objects cannot be copied")

    def __deepcopy__(self, memo):
        raise TypeError("Line objects cannot be copied")

    def __reduce_ex__(self, protocol):
        raise TypeError("Line objects cannot be pickled")

    def __repr__(self) -> str:
        return (f"Line({self._level.name}, {self._file}:{self._lineno} "
                f"in {self._func}(), {self.msg!r})")


def _caller(depth: int):
    """File, line and function ``depth`` frames above the caller."""
    try:
        frame = sys._getframe(depth + 1)
    except ValueError:
        return '<unknown>', 0, '<unknown>'
    code = frame.f_code
    return code.co_filename, frame.f_lineno, code.co_name


def log(level: Level, manager=None, *, stacklevel: int = 1) -> Line:
    """Open a Line at the caller's location.

    Args:
        level: Severity of the line
        manager: Manager to dispatch to (default: the process manager)
        stacklevel: 1 attributes the line to the direct caller; helpers
            that wrap log() pass a higher value to skip themselves

    Returns:
        A Line to be used as a context manager.
    """
    file, lineno, func = _caller(stacklevel)
    return Line(level, file, lineno, func, manager=manager)


def emit(level: Level, *parts: Any, manager=None, stacklevel: int = 1) -> None:
    """Log ``parts`` as one line right away."""
    with log(level, manager, stacklevel=stacklevel + 1) as line:
        line.write(*parts)


def critical(*parts: Any, manager=None) -> None:
    emit(Level.CRITICAL, *parts, manager=manager, stacklevel=2)


def error(*parts: Any, manager=None) -> None:
    emit(Level.ERROR, *parts, manager=manager, stacklevel=2)


def warning(*parts: Any, manager=None) -> None:
    emit(Level.WARNING, *parts, manager=manager, stacklevel=2)


def info(*parts: Any, manager=None) -> None:
    emit(Level.INFO, *parts, manager=manager, stacklevel=2)


def debug(*parts: Any, manager=None) -> None:
    emit(Level.DEBUG, *parts, manager=manager, stacklevel=2)


def trace_log(*parts: Any, manager=None) -> None:
    emit(Level.TRACE, *parts, manager=manager, stacklevel=2)
