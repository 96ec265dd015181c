"""
linelog — process-wide line logger with per-destination thresholds.

Log to the console and any number of files at once, each with its own
severity threshold. Every line is written to all destinations under one
lock, so output from different threads never interleaves.

Public API:
    Level, CRITICAL .. TRACE    — severity levels (lower = more urgent)
    add_console / remove_console
    add_file / remove_file
    log                         — open a Line at the call site (``with``)
    emit, critical, error, warning, info, debug, trace_log — one-shot lines
    trace                       — function tracing decorator
    Manager, init_logging, shutdown_logging, get_manager, logging_session

Usage::

    import linelog
    from linelog import INFO, DEBUG

    with linelog.logging_session():
        linelog.add_console(INFO)
        linelog.add_file("logs/app.log", DEBUG)
        with linelog.log(INFO) as line:
            line << "listening on port " << 8080
"""

from linelog._version import __version__, __app_name__
from linelog.levels import (
    Level, CRITICAL, ERROR, WARNING, INFO, DEBUG, TRACE, parse_level,
)
from linelog.line import (
    Line, log, emit, critical, error, warning, info, debug, trace_log,
)
from linelog.manager import (
    Manager, init_logging, shutdown_logging, get_manager, logging_session,
    add_console, remove_console, add_file, remove_file,
)
from linelog.trace import trace
from linelog.worker import CONSOLE, Worker

__all__ = [
    '__version__', '__app_name__',
    'Level', 'CRITICAL', 'ERROR', 'WARNING', 'INFO', 'DEBUG', 'TRACE',
    'parse_level',
    'Line', 'log', 'emit', 'critical', 'error', 'warning', 'info', 'debug',
    'trace_log',
    'Manager', 'init_logging', 'shutdown_logging', 'get_manager',
    'logging_session',
    'add_console', 'remove_console', 'add_file', 'remove_file',
    'trace', 'CONSOLE', 'Worker',
]
