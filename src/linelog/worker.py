"""
Worker — one destination plus the threshold that gates it.
"""

import os
from pathlib import Path
from typing import Optional, TextIO, Union

from .formatting import format_line, session_header, time_str
from .levels import Level
from .sink import ConsoleSink, FileSink

# Identity of the console destination; files are identified by Path
CONSOLE = ''

Identity = Union[str, Path]


def normalize_identity(path: Union[str, os.PathLike, None]) -> Identity:
    """Map a user-supplied destination to its dedup key."""
    if path is None or path == CONSOLE:
        return CONSOLE
    return Path(path)


def describe_identity(identity: Identity) -> str:
    return 'console' if identity == CONSOLE else str(identity)


def color_default() -> bool:
    """Console color is on unless NO_COLOR is set (https://no-color.org)."""
    return not os.environ.get('NO_COLOR')


class Worker:
    """Filters lines by level and writes the accepted ones to its sink.

    A file worker writes a session separator as soon as its file is
    opened, marking where this process started appending.

    Usage::

        w = Worker(Path('logs/app.log'), Level.DEBUG)
        if w.good():
            w.log(line)
    """

    def __init__(self, path: Union[str, os.PathLike, None], level: Level,
                 color: Optional[bool] = None, stream: Optional[TextIO] = None):
        self.path = normalize_identity(path)
        self.level = Level(level)
        if self.console:
            self.sink = ConsoleSink(stream)
            self.color = color_default() if color is None else bool(color)
        else:
            self.sink = FileSink(self.path)
            self.color = False
            if self.sink.good():
                self.sink.write(session_header(time_str()))

    @property
    def console(self) -> bool:
        return self.path == CONSOLE

    def good(self) -> bool:
        return self.sink.good()

    def set_level(self, level: Level) -> None:
        self.level = Level(level)

    def log(self, line) -> None:
        """Write ``line`` if it is at least as urgent as the threshold."""
        if not self.good() or line.level > self.level:
            return
        self.sink.write(format_line(
            time_str(), line.level, line.file, line.lineno, line.func,
            line.msg, color=self.color,
        ))

    def close(self) -> None:
        self.sink.close()

    def __repr__(self) -> str:
        return (f"Worker({describe_identity(self.path)!r}, "
                f"{self.level.name}, good={self.good()})")
