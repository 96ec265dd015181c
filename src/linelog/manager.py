"""
Manager — the process-wide owner of all log workers.

One lock guards both the worker list and the dispatch of each line, so
a line is written to every destination before the next line (or the
next add/remove) gets a turn. Writes from different threads never
interleave, at the cost of a slow file briefly blocking every logger.

Lifecycle:
    init_logging()      — take a reference, creating the manager on first use
    shutdown_logging()  — drop a reference; the last one closes every worker
    get_manager()       — access the current manager (creates a default)
    logging_session()   — context manager pairing the two

Call init_logging() once at startup before any thread logs, and
shutdown_logging() only after the last log call.
"""

import os
import sys
import threading
from contextlib import contextmanager
from typing import Iterator, List, Optional, TextIO, Tuple, Union

from .formatting import format_line, level_str, time_str
from .levels import INFO, Level
from .line import _caller, log
from .sink import ConsoleSink
from .worker import (
    CONSOLE, Identity, Worker, describe_identity, normalize_identity,
)


class Manager:
    """Registry of workers plus the lock that serializes them.

    Usage::

        mgr = Manager()
        mgr.add_worker('', Level.INFO)                  # console
        mgr.add_worker('logs/app.log', Level.DEBUG)     # file
        with log(Level.INFO, mgr) as line:
            line << "ready"
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._workers: List[Worker] = []

    def add_worker(self, path: Union[str, os.PathLike, None], level: Level,
                   color: Optional[bool] = None,
                   stream: Optional[TextIO] = None) -> None:
        """Add a worker at ``path`` or update the level of the existing one.

        Args:
            path: File location, or '' for the console
            level: Threshold for the worker
            color: Console only; None keeps the current setting (or the
                NO_COLOR-derived default for a new console worker)
            stream: Console only; write here instead of sys.stdout
        """
        identity = normalize_identity(path)
        level = Level(level)
        with self._lock:
            for worker in self._workers:
                if worker.path == identity:
                    worker.set_level(level)
                    if color is not None and worker.console:
                        worker.color = bool(color)
                    return
            worker = Worker(identity, level, color=color, stream=stream)
            opened = worker.good()
            if opened:
                self._workers.append(worker)
            else:
                worker.close()
            listeners = len(self._workers)

        if not opened:
            self._report_open_failure(identity, listeners)
            return
        with log(Level.DEBUG, self) as line:
            line.write("Added log worker at ", describe_identity(identity),
                       " (level: ", level_str(level), ")")

    def remove_worker(self, path: Union[str, os.PathLike, None]) -> None:
        """Remove the worker at ``path``. No effect if there is none.

        The announcement is logged before removal, so the departing
        worker still sees it.
        """
        identity = normalize_identity(path)
        with log(Level.DEBUG, self) as line:
            line.write("Removing log worker at ", describe_identity(identity))
        with self._lock:
            for i, worker in enumerate(self._workers):
                if worker.path == identity:
                    del self._workers[i]
                    worker.close()
                    break

    def log(self, line) -> None:
        """Send ``line`` to every worker, in registration order."""
        with self._lock:
            for worker in self._workers:
                try:
                    worker.log(line)
                except Exception:
                    # One broken destination must not starve the others
                    # or raise into the caller.
                    continue

    def get_worker(self, path: Union[str, os.PathLike, None]) -> Optional[Worker]:
        identity = normalize_identity(path)
        with self._lock:
            for worker in self._workers:
                if worker.path == identity:
                    return worker
        return None

    @property
    def workers(self) -> Tuple[Worker, ...]:
        """Snapshot of the registered workers."""
        with self._lock:
            return tuple(self._workers)

    @property
    def identities(self) -> Tuple[Identity, ...]:
        with self._lock:
            return tuple(w.path for w in self._workers)

    def accepts(self, level: Level) -> bool:
        """True if at least one healthy worker would write ``level``."""
        with self._lock:
            return any(w.good() and level <= w.level for w in self._workers)

    def close(self) -> None:
        """Close and drop every worker."""
        with self._lock:
            workers, self._workers = self._workers, []
        for worker in workers:
            worker.close()

    def __len__(self) -> int:
        with self._lock:
            return len(self._workers)

    def _report_open_failure(self, identity: Identity, listeners: int) -> None:
        """Warn that a destination could not be opened.

        With no worker left to hear it, the warning goes to stderr
        instead of vanishing, unless the process has no stderr at all.
        """
        if listeners:
            with log(Level.WARNING, self, stacklevel=2) as line:
                line.write("Failed to open log at ", describe_identity(identity))
            return
        if sys.stderr is None:
            return
        file, lineno, func = _caller(1)
        ConsoleSink(sys.stderr).write(format_line(
            time_str(), Level.WARNING, os.path.basename(file), lineno, func,
            f"Failed to open log at {describe_identity(identity)}",
        ))


# =============================================================================
# Module-level handle
# =============================================================================

_manager: Optional[Manager] = None
_ref_count = 0
_init_lock = threading.Lock()


def init_logging() -> Manager:
    """Take a reference to the process manager, creating it if needed.

    Returns:
        The process-wide Manager
    """
    global _manager, _ref_count
    with _init_lock:
        _ref_count += 1
        if _manager is None:
            _manager = Manager()
        return _manager


def shutdown_logging() -> None:
    """Release a reference; the last release closes all workers."""
    global _manager, _ref_count
    with _init_lock:
        if _ref_count == 0:
            return
        _ref_count -= 1
        if _ref_count > 0 or _manager is None:
            return
        manager, _manager = _manager, None
    manager.close()


def get_manager() -> Manager:
    """Get the process manager, creating an unreferenced default if needed."""
    global _manager
    with _init_lock:
        if _manager is None:
            _manager = Manager()
        return _manager


def ref_count() -> int:
    return _ref_count


@contextmanager
def logging_session() -> Iterator[Manager]:
    """Hold a reference to the process manager for the block."""
    manager = init_logging()
    try:
        yield manager
    finally:
        shutdown_logging()


# =============================================================================
# Registration API
# =============================================================================

def add_console(level: Level = INFO, color: Optional[bool] = None) -> None:
    """Log to stdout at ``level``. If already logging there, update the level."""
    get_manager().add_worker(CONSOLE, level, color=color)


def remove_console() -> None:
    """Stop logging to stdout. No effect if not logging there."""
    get_manager().remove_worker(CONSOLE)


def add_file(path: Union[str, os.PathLike], level: Level = INFO) -> None:
    """Append to the log file at ``path``. If already open, update the level."""
    get_manager().add_worker(path, level)


def remove_file(path: Union[str, os.PathLike]) -> None:
    """Stop logging to ``path``. No effect if not logging there."""
    get_manager().remove_worker(path)
