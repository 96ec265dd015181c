"""
Severity levels for log lines.

Lower ordinal means more urgent. The filter rule is simple:

    line.level <= threshold  →  line is written

Level assignments:
    ←── more urgent ──────────────────── more verbose ──→
    0         1      2        3     4      5
    CRITICAL  ERROR  WARNING  INFO  DEBUG  TRACE
"""

from enum import IntEnum
from typing import Dict, Union


class Level(IntEnum):
    CRITICAL = 0    # Unrecoverable error, should only precede a crash
    ERROR = 1       # Recoverable error, not expected during normal execution
    WARNING = 2     # Something unexpected occurred, but it is not a problem
    INFO = 3        # General runtime information about what is happening
    DEBUG = 4       # Detailed runtime information
    TRACE = 5       # Highly detailed runtime information


CRITICAL = Level.CRITICAL
ERROR = Level.ERROR
WARNING = Level.WARNING
INFO = Level.INFO
DEBUG = Level.DEBUG
TRACE = Level.TRACE

LEVEL_NAMES: Dict[Level, str] = {
    Level.CRITICAL: 'CRITICAL',
    Level.ERROR:    'ERROR',
    Level.WARNING:  'WARNING',
    Level.INFO:     'INFO',
    Level.DEBUG:    'DEBUG',
    Level.TRACE:    'TRACE',
}

# ANSI prefixes for console output; INFO is left uncolored
LEVEL_COLORS: Dict[Level, str] = {
    Level.CRITICAL: '\033[31;1m',
    Level.ERROR:    '\033[31m',
    Level.WARNING:  '\033[33m',
    Level.INFO:     '',
    Level.DEBUG:    '\033[2m',
    Level.TRACE:    '\033[2;3m',
}

RESET_COLOR = '\033[0m'

_ALIASES = {
    'WARN': Level.WARNING,
    'FATAL': Level.CRITICAL,
}


def parse_level(value: Union[Level, int, str]) -> Level:
    """Turn a level name, ordinal, or Level into a Level.

    Names are case-insensitive; 'warn' and 'fatal' are accepted as
    aliases. Digit strings are read as ordinals.

    Raises:
        ValueError: if the value names no level
    """
    if isinstance(value, Level):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Not a log level: {value!r}")
    if isinstance(value, int):
        try:
            return Level(value)
        except ValueError:
            raise ValueError(f"Not a log level: {value!r}") from None
    if isinstance(value, str):
        text = value.strip().upper()
        if text.isdigit():
            return parse_level(int(text))
        if text in Level.__members__:
            return Level[text]
        if text in _ALIASES:
            return _ALIASES[text]
    raise ValueError(f"Not a log level: {value!r}")


def format_level_list() -> str:
    """Format the known levels for display.

    Returns:
        Formatted string listing every level with its ordinal.
    """
    lines = ["Available levels (most to least urgent):"]
    width = max(len(name) for name in LEVEL_NAMES.values())
    for level in Level:
        lines.append(f"  {level.value}  {LEVEL_NAMES[level]:<{width}}")
    return "\n".join(lines)
