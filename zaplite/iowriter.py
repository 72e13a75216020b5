"""A file-like writer that turns each written line into a log entry."""

from __future__ import annotations

from typing import Any

from zaplite.core import Level, Logger


class Writer:
    """Writes to a Logger, one log entry per line.

    Data is buffered until a newline arrives, or until ``sync`` or
    ``close`` is called. Close the writer when finished, or use it as a
    context manager, so that buffered data reaches the logger.
    """

    def __init__(self, log: Logger, level: Level = Level.INFO) -> None:
        self.log = log
        self.level = Level(level)
        self._buffer = bytearray()

    def write(self, data: bytes | str) -> int:
        """Log every complete line in *data*; return the length of *data*."""
        size = len(data)
        if not self.log.core.enabled(self.level):
            return size
        remaining = data.encode("utf-8") if isinstance(data, str) else bytes(data)
        while remaining:
            remaining = self._write_line(remaining)
        return size

    def _write_line(self, data: bytes) -> bytes:
        line, newline, remaining = data.partition(b"\n")
        if not newline:
            self._buffer.extend(line)
            return b""
        if not self._buffer:
            self._log(line)
            return remaining
        self._buffer.extend(line)
        # Keep empty lines from the middle of the stream ("foo\n\nbar").
        self._flush(allow_empty=True)
        return remaining

    def sync(self) -> None:
        """Log any buffered data as an entry even without a trailing newline."""
        self._flush(allow_empty=False)

    def close(self) -> None:
        """Flush buffered data to the logger."""
        self.sync()

    def __enter__(self) -> "Writer":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def _flush(self, allow_empty: bool) -> None:
        if allow_empty or self._buffer:
            self._log(bytes(self._buffer))
        self._buffer.clear()

    def _log(self, line: bytes) -> None:
        checked = self.log.check(self.level, line.decode("utf-8", errors="replace"))
        if checked is not None:
            checked.write()