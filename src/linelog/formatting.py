"""
Text rendering for log lines.

Everything here is a pure function of its inputs so a rendered line is
byte-for-byte reproducible once the timestamp is fixed. Layout::

    2026-10-18 09:12:44.031 | [   INFO] server.py:42 in serve(): first line
                                         -> second line

Continuation lines are indented to sit under the location field and
marked with an arrow, so they cannot be mistaken for new entries.
"""

from datetime import datetime
from typing import Optional

from .levels import LEVEL_COLORS, LEVEL_NAMES, RESET_COLOR, Level

LEVEL_FMT_WIDTH = 8
TIME_FMT_WIDTH = 25     # timestamp plus the " |" that follows it
FULL_LOG_WIDTH = 100

CONTINUATION_PREFIX = ' ' * (TIME_FMT_WIDTH + LEVEL_FMT_WIDTH + 3) + ' -> '


def time_str(now: Optional[datetime] = None) -> str:
    """Local time as ``YYYY-MM-DD HH:MM:SS.mmm``."""
    if now is None:
        now = datetime.now()
    return f"{now:%Y-%m-%d %H:%M:%S}.{now.microsecond // 1000:03d}"


def level_str(level: Level) -> str:
    return LEVEL_NAMES[level]


def color_str(level: Level) -> str:
    return LEVEL_COLORS[level]


def session_header(timestamp: str) -> str:
    """Separator written when a log file is opened.

    A blank line, a dashed rule as wide as the timestamp column, then the
    timestamp followed by a rule out to FULL_LOG_WIDTH.
    """
    return (
        "\n"
        + '-' * TIME_FMT_WIDTH + "\n"
        + timestamp + " | " + '-' * (FULL_LOG_WIDTH - TIME_FMT_WIDTH - 1) + "\n"
    )


def format_body(msg: str) -> str:
    """Strip trailing newlines and mark every continuation line."""
    msg = msg.rstrip('\n')
    return ('\n' + CONTINUATION_PREFIX).join(msg.split('\n'))


def format_line(timestamp: str, level: Level, file: str, lineno: int,
                func: str, msg: str, color: bool = False) -> str:
    """Render one complete log entry, including the final newline.

    Args:
        timestamp: Pre-rendered time (see time_str)
        level: Severity of the entry
        file: Source file name, already stripped of directories
        lineno: Source line number
        func: Calling function name
        msg: Accumulated message text; may span several lines
        color: Wrap the entry in the ANSI color for its level

    Returns:
        The text to hand to a sink.
    """
    parts = []
    if color:
        parts.append(color_str(level))
    parts.append(
        f"{timestamp} | [{level_str(level):>{LEVEL_FMT_WIDTH}}] "
        f"{file}:{lineno} in {func}(): "
    )
    parts.append(format_body(msg))
    if color:
        parts.append(RESET_COLOR)
    parts.append("\n")
    return ''.join(parts)
