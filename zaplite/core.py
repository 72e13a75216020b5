"""Levels, entries, fields, cores and the loggers built on them."""

from __future__ import annotations

import dataclasses
import enum
import sys
from datetime import datetime, timezone
from typing import Any, Iterable


class Level(enum.IntEnum):
    """Logging priority; higher levels are more important."""

    DEBUG = -1
    INFO = 0
    WARN = 1
    ERROR = 2
    DPANIC = 3
    PANIC = 4
    FATAL = 5

    def __str__(self) -> str:
        return self.name.lower()

    def __format__(self, spec: str) -> str:
        return format(str(self), spec)

    def enabled(self, level: int) -> bool:
        """Report whether *level* is at or above this level."""
        return level >= self


@dataclasses.dataclass(frozen=True)
class Field:
    """A key/value pair attached to a log entry."""

    key: str
    value: Any = None
    is_namespace: bool = False


def field(key: str, value: Any) -> Field:
    """Build a plain key/value field."""
    return Field(key, value)


def namespace(key: str) -> Field:
    """Build a field that nests all following fields under *key*."""
    return Field(key, None, is_namespace=True)


@dataclasses.dataclass(frozen=True)
class Entry:
    """A single log event, without its context fields."""

    level: Level = Level.INFO
    message: str = ""
    time: datetime | None = None
    logger_name: str = ""


class MultiError(Exception):
    """Several errors raised together; nested MultiErrors are flattened."""

    def __init__(self, errors: Iterable[BaseException]) -> None:
        flat: list[BaseException] = []
        for err in errors:
            if isinstance(err, MultiError):
                flat.extend(err.errors)
            else:
                flat.append(err)
        self.errors = tuple(flat)
        super().__init__("; ".join(str(err) for err in flat))


def _combine(errors: list[BaseException]) -> BaseException | None:
    if not errors:
        return None
    if len(errors) == 1:
        return errors[0]
    return MultiError(errors)


@dataclasses.dataclass
class CheckedEntry:
    """An entry together with the cores that agreed to write it."""

    entry: Entry
    cores: list = dataclasses.field(default_factory=list)
    terminal: bool = False
    error_output: Any = None

    def write(self, *fields: Field) -> None:
        """Write the entry with *fields* to every collected core.

        Write errors go to ``error_output`` when it is set and are raised
        otherwise. A terminal PANIC entry raises RuntimeError afterwards,
        a terminal FATAL entry raises SystemExit.
        """
        errors: list[BaseException] = []
        for core in self.cores:
            try:
                core.write(self.entry, list(fields))
            except Exception as exc:
                errors.append(exc)
        error = _combine(errors)
        if error is not None:
            if self.error_output is None:
                raise error
            self.error_output.write(f"{self.entry.time} write error: {error}\n")
            flush = getattr(self.error_output, "flush", None)
            if callable(flush):
                flush()
        if self.terminal:
            if self.entry.level == Level.FATAL:
                raise SystemExit(1)
            if self.entry.level == Level.PANIC:
                raise RuntimeError(self.entry.message)


def add_core(checked: CheckedEntry | None, entry: Entry, core: "Core") -> CheckedEntry:
    """Add *core* to *checked*, creating the checked entry if needed."""
    if checked is None:
        checked = CheckedEntry(entry)
    checked.cores.append(core)
    return checked


class Core:
    """A core that accepts entries at enabled levels and discards them.

    Subclasses override ``write`` (and usually ``with_fields``) to send
    entries somewhere.
    """

    def __init__(self, enabler: Any = Level.DEBUG) -> None:
        self.enabler = enabler

    def enabled(self, level: int) -> bool:
        return self.enabler.enabled(level)

    def with_fields(self, fields: Iterable[Field]) -> "Core":
        return self

    def check(self, entry: Entry, checked: CheckedEntry | None) -> CheckedEntry | None:
        if self.enabled(entry.level):
            return add_core(checked, entry, self)
        return checked

    def write(self, entry: Entry, fields: Iterable[Field] | None) -> None:
        return None

    def sync(self) -> None:
        return None


class NopCore(Core):
    """A core that is never enabled."""

    def __init__(self) -> None:
        super().__init__(Level.FATAL)

    def enabled(self, level: int) -> bool:
        return False

    def __eq__(self, other: object) -> bool:
        return isinstance(other, NopCore)

    def __hash__(self) -> int:
        return hash(NopCore)


class MultiCore(Core):
    """A core that duplicates entries into several cores."""

    def __init__(self, cores: Iterable[Core]) -> None:
        self.cores = tuple(cores)

    def enabled(self, level: int) -> bool:
        return any(core.enabled(level) for core in self.cores)

    def with_fields(self, fields: Iterable[Field]) -> "MultiCore":
        fields = list(fields)
        return MultiCore(core.with_fields(fields) for core in self.cores)

    def check(self, entry: Entry, checked: CheckedEntry | None) -> CheckedEntry | None:
        for core in self.cores:
            checked = core.check(entry, checked)
        return checked

    def write(self, entry: Entry, fields: Iterable[Field] | None) -> None:
        fields = list(fields or ())
        errors: list[BaseException] = []
        for core in self.cores:
            try:
                core.write(entry, fields)
            except Exception as exc:
                errors.append(exc)
        error = _combine(errors)
        if error is not None:
            raise error

    def sync(self) -> None:
        errors: list[BaseException] = []
        for core in self.cores:
            try:
                core.sync()
            except Exception as exc:
                errors.append(exc)
        error = _combine(errors)
        if error is not None:
            raise error


def new_tee(*cores: Core) -> Core:
    """Combine cores: none gives a NopCore, one is returned unchanged."""
    if not cores:
        return NopCore()
    if len(cores) == 1:
        return cores[0]
    return MultiCore(cores)


def _format_value(value: Any) -> str:
    if value is None:
        return "<nil>"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def sprint(*args: Any) -> str:
    """Join values, putting a space between two neighbours that are not strings."""
    parts: list[str] = []
    previous_is_string = True
    for position, arg in enumerate(args):
        is_string = isinstance(arg, str)
        if position > 0 and not is_string and not previous_is_string:
            parts.append(" ")
        parts.append(_format_value(arg))
        previous_is_string = is_string
    return "".join(parts)


def sprintln(*args: Any) -> str:
    """Join values with single spaces, without a trailing newline."""
    return " ".join(_format_value(arg) for arg in args)


def _message(template: str, args: tuple) -> str:
    if not args:
        return template
    if template:
        return template % args
    if len(args) == 1 and isinstance(args[0], str):
        return args[0]
    return sprint(*args)


class Logger:
    """Structured logger that sends entries to a core."""

    def __init__(self, core: Core, *, error_output: Any = None) -> None:
        self.core = core
        self.error_output = error_output

    def with_fields(self, *fields: Field) -> "Logger":
        return Logger(self.core.with_fields(list(fields)), error_output=self.error_output)

    def check(self, level: int, message: str) -> CheckedEntry | None:
        """Return a checked entry if the message should be logged, else None."""
        level = Level(level)
        entry = Entry(level, message, datetime.now(timezone.utc))
        checked = self.core.check(entry, None)
        if level >= Level.PANIC:
            if checked is None:
                checked = CheckedEntry(entry)
            checked.terminal = True
        if checked is not None:
            checked.error_output = (
                self.error_output if self.error_output is not None else sys.stderr
            )
        return checked

    def log(self, level: int, message: str, *fields: Field) -> None:
        checked = self.check(level, message)
        if checked is not None:
            checked.write(*fields)

    def debug(self, message: str, *fields: Field) -> None:
        self.log(Level.DEBUG, message, *fields)

    def info(self, message: str, *fields: Field) -> None:
        self.log(Level.INFO, message, *fields)

    def warn(self, message: str, *fields: Field) -> None:
        self.log(Level.WARN, message, *fields)

    def error(self, message: str, *fields: Field) -> None:
        self.log(Level.ERROR, message, *fields)

    def fatal(self, message: str, *fields: Field) -> None:
        """Log at FATAL, then raise SystemExit."""
        self.log(Level.FATAL, message, *fields)

    def sugar(self) -> "SugaredLogger":
        return SugaredLogger(self)


class SugaredLogger:
    """Loosely typed logger that builds messages from arbitrary values."""

    def __init__(self, base: Logger) -> None:
        self.base = base

    def _log(self, level: Level, template: str, args: tuple) -> None:
        if level < Level.DPANIC and not self.base.core.enabled(level):
            return
        self.base.log(level, _message(template, args))

    def debug(self, *args: Any) -> None:
        self._log(Level.DEBUG, "", args)

    def info(self, *args: Any) -> None:
        self._log(Level.INFO, "", args)

    def warn(self, *args: Any) -> None:
        self._log(Level.WARN, "", args)

    def error(self, *args: Any) -> None:
        self._log(Level.ERROR, "", args)

    def fatal(self, *args: Any) -> None:
        self._log(Level.FATAL, "", args)

    def debugf(self, template: str, *args: Any) -> None:
        self._log(Level.DEBUG, template, args)

    def infof(self, template: str, *args: Any) -> None:
        self._log(Level.INFO, template, args)

    def warnf(self, template: str, *args: Any) -> None:
        self._log(Level.WARN, template, args)

    def errorf(self, template: str, *args: Any) -> None:
        self._log(Level.ERROR, template, args)

    def fatalf(self, template: str, *args: Any) -> None:
        self._log(Level.FATAL, template, args)