"""
Output sinks: the console stream and append-mode log files.

A sink only knows how to write text and whether it is still healthy.
Write failures are swallowed and mark the sink unhealthy; the owning
worker checks good() before every line, so at most the failing line is
lost.
"""

import sys
from pathlib import Path
from typing import Optional, TextIO


class ConsoleSink:
    """Writes to standard output.

    The stream is looked up on every write unless one was given, so
    redirecting ``sys.stdout`` after registration is honored.
    """

    def __init__(self, stream: Optional[TextIO] = None):
        self._stream = stream
        self._failed = False
        self._released = False

    @property
    def stream(self) -> Optional[TextIO]:
        return self._stream if self._stream is not None else sys.stdout

    def good(self) -> bool:
        stream = self.stream
        if self._failed or self._released or stream is None:
            return False
        return not getattr(stream, 'closed', False)

    def write(self, text: str) -> None:
        stream = self.stream
        if stream is None:
            return
        try:
            try:
                stream.write(text)
            except UnicodeEncodeError:
                # One unencodable message does not make the stream unhealthy
                encoding = getattr(stream, 'encoding', None) or 'ascii'
                stream.write(text.encode(encoding, 'replace').decode(encoding))
            stream.flush()
        except (OSError, ValueError):
            self._failed = True

    def close(self) -> None:
        """Release the console. The stream itself is never closed."""
        self._released = True


class FileSink:
    """Appends UTF-8 text to a single file.

    Missing parent directories are created before opening. Failure to
    create them or to open the file leaves the sink unhealthy rather than
    raising.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._file: Optional[TextIO] = None
        self._failed = False
        try:
            if not self.path.exists() and self.path.parent != Path('.'):
                self.path.parent.mkdir(parents=True, exist_ok=True)
            self._file = open(self.path, 'a', encoding='utf-8')
        except (OSError, ValueError):
            self._failed = True

    def good(self) -> bool:
        return (not self._failed and self._file is not None
                and not self._file.closed)

    def write(self, text: str) -> None:
        if self._file is None:
            return
        try:
            self._file.write(text)
            self._file.flush()
        except (OSError, ValueError):
            self._failed = True

    def close(self) -> None:
        if self._file is None:
            return
        try:
            self._file.close()
        except OSError:
            self._failed = True
        self._file = None
