"""Writers that can also flush buffered data."""

from __future__ import annotations

import threading
from typing import Any, Iterable

from zaplite.core import MultiError


class WriteSyncer:
    """Wraps a plain writer and gives it a no-op ``sync``."""

    def __init__(self, writer: Any) -> None:
        self.writer = writer

    def write(self, data: bytes) -> int:
        written = self.writer.write(data)
        return len(data) if written is None else written

    def sync(self) -> None:
        return None


def _is_write_syncer(obj: Any) -> bool:
    return callable(getattr(obj, "write", None)) and callable(getattr(obj, "sync", None))


def add_sync(writer: Any) -> Any:
    """Return *writer* if it can already sync, else wrap it with a no-op sync."""
    if _is_write_syncer(writer):
        return writer
    return WriteSyncer(writer)


class LockedWriteSyncer(WriteSyncer):
    """Serialises writes and syncs of the wrapped syncer with a lock."""

    def __init__(self, syncer: Any) -> None:
        super().__init__(syncer)
        self._lock = threading.Lock()

    def write(self, data: bytes) -> int:
        with self._lock:
            written = self.writer.write(data)
        return len(data) if written is None else written

    def sync(self) -> None:
        with self._lock:
            self.writer.sync()


def lock(syncer: Any) -> LockedWriteSyncer:
    """Make *syncer* safe for concurrent use; already locked syncers pass through."""
    if isinstance(syncer, LockedWriteSyncer):
        return syncer
    return LockedWriteSyncer(syncer)


def _raise_errors(errors: list[BaseException]) -> None:
    if len(errors) == 1:
        raise errors[0]
    if errors:
        raise MultiError(errors)


class MultiWriteSyncer:
    """Duplicates writes and syncs to several syncers."""

    def __init__(self, syncers: Iterable[Any]) -> None:
        self.syncers = tuple(syncers)

    def write(self, data: bytes) -> int:
        """Write to every syncer; return the smallest non-zero count written.

        Every syncer is written even if an earlier one fails; failures are
        raised together afterwards.
        """
        errors: list[BaseException] = []
        smallest = 0
        for syncer in self.syncers:
            try:
                written = syncer.write(data)
            except Exception as exc:
                errors.append(exc)
                continue
            if written is None:
                written = len(data)
            if smallest == 0 and written != 0:
                smallest = written
            elif written < smallest:
                smallest = written
        _raise_errors(errors)
        return smallest

    def sync(self) -> None:
        errors: list[BaseException] = []
        for syncer in self.syncers:
            try:
                syncer.sync()
            except Exception as exc:
                errors.append(exc)
        _raise_errors(errors)


def new_multi_write_syncer(*syncers: Any) -> Any:
    """Combine syncers; a single syncer is returned unchanged."""
    if len(syncers) == 1:
        return syncers[0]
    return MultiWriteSyncer(syncers)