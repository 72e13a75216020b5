"""A core that keeps logged entries in memory, for inspecting log output in tests."""

from __future__ import annotations

import dataclasses
import threading
from datetime import datetime
from typing import Any, Callable, Iterable

from zaplite.core import Core, Entry, Field, Level, add_core, CheckedEntry


@dataclasses.dataclass
class LoggedEntry:
    """An encoding-agnostic record of one log entry and its context fields."""

    entry: Entry = dataclasses.field(default_factory=Entry)
    context: list[Field] = dataclasses.field(default_factory=list)

    @property
    def level(self) -> Level:
        return self.entry.level

    @property
    def message(self) -> str:
        return self.entry.message

    @property
    def time(self) -> datetime | None:
        return self.entry.time

    def context_map(self) -> dict[str, Any]:
        """Return the context as a dict; namespaces become nested dicts."""
        result: dict[str, Any] = {}
        current = result
        for ctx_field in self.context:
            if ctx_field.is_namespace:
                nested: dict[str, Any] = {}
                current[ctx_field.key] = nested
                current = nested
            else:
                current[ctx_field.key] = ctx_field.value
        return result


class ObservedLogs:
    """A thread-safe, ordered collection of observed log entries."""

    def __init__(self, logs: Iterable[LoggedEntry] = ()) -> None:
        self._lock = threading.Lock()
        self._logs: list[LoggedEntry] = list(logs)

    def __len__(self) -> int:
        with self._lock:
            return len(self._logs)

    def all(self) -> list[LoggedEntry]:
        """Return a copy of all observed entries."""
        with self._lock:
            return list(self._logs)

    def take_all(self) -> list[LoggedEntry]:
        """Return all observed entries and clear the collection."""
        with self._lock:
            taken, self._logs = self._logs, []
        return taken

    def all_untimed(self) -> list[LoggedEntry]:
        """Return a copy of all entries with their timestamps cleared."""
        return [
            LoggedEntry(dataclasses.replace(logged.entry, time=None), list(logged.context))
            for logged in self.all()
        ]

    def filter_level_exact(self, level: int) -> "ObservedLogs":
        return self.filter(lambda logged: logged.level == level)

    def filter_message(self, message: str) -> "ObservedLogs":
        return self.filter(lambda logged: logged.message == message)

    def filter_message_snippet(self, snippet: str) -> "ObservedLogs":
        return self.filter(lambda logged: snippet in logged.message)

    def filter_field(self, field: Field) -> "ObservedLogs":
        return self.filter(lambda logged: any(ctx == field for ctx in logged.context))

    def filter_field_key(self, key: str) -> "ObservedLogs":
        return self.filter(lambda logged: any(ctx.key == key for ctx in logged.context))

    def filter(self, keep: Callable[[LoggedEntry], bool]) -> "ObservedLogs":
        """Return a new collection holding only the entries *keep* accepts."""
        return ObservedLogs(logged for logged in self.all() if keep(logged))

    def _add(self, logged: LoggedEntry) -> None:
        with self._lock:
            self._logs.append(logged)


class ContextObserver(Core):
    """A core that records entries, with accumulated context, into ObservedLogs."""

    def __init__(self, enabler: Any, logs: ObservedLogs, context: Iterable[Field] = ()) -> None:
        super().__init__(enabler)
        self.logs = logs
        self.context: tuple[Field, ...] = tuple(context)

    def enabled(self, level: int) -> bool:
        return self.enabler.enabled(level)

    def check(self, entry: Entry, checked: CheckedEntry | None) -> CheckedEntry | None:
        if self.enabled(entry.level):
            return add_core(checked, entry, self)
        return checked

    def with_fields(self, fields: Iterable[Field]) -> "ContextObserver":
        return ContextObserver(self.enabler, self.logs, self.context + tuple(fields))

    def write(self, entry: Entry, fields: Iterable[Field] | None) -> None:
        self.logs._add(LoggedEntry(entry, [*self.context, *(fields or ())]))

    def sync(self) -> None:
        return None


def new(enabler: Any) -> tuple[ContextObserver, ObservedLogs]:
    """Create an observing core and the collection it records into."""
    logs = ObservedLogs()
    return ContextObserver(enabler, logs), logs