"""A logger with the method set that gRPC's logging interface expects."""

from __future__ import annotations

from typing import Any, Callable

from zaplite.core import Level, Logger, sprintln

_GRPC_INFO = 0
_GRPC_WARN = 1
_GRPC_ERROR = 2
_GRPC_FATAL = 3

_GRPC_TO_LEVEL = {
    _GRPC_INFO: Level.INFO,
    _GRPC_WARN: Level.WARN,
    _GRPC_ERROR: Level.ERROR,
    _GRPC_FATAL: Level.FATAL,
}

Option = Callable[["GrpcLogger"], None]


class _Printer:
    """Print, printf and println for one level."""

    def __init__(
        self,
        enabler: Any,
        level: Level,
        print_fn: Callable[..., None],
        printf_fn: Callable[..., None],
    ) -> None:
        self.enabler = enabler
        self.level = level
        self.print_fn = print_fn
        self.printf_fn = printf_fn

    def print(self, *args: Any) -> None:
        self.print_fn(*args)

    def printf(self, template: str, *args: Any) -> None:
        self.printf_fn(template, *args)

    def println(self, *args: Any) -> None:
        if self.enabler.enabled(self.level):
            self.print_fn(sprintln(*args))


def with_debug() -> Option:
    """Make print, printf and println log at DEBUG instead of INFO."""

    def apply(logger: GrpcLogger) -> None:
        logger._print = _Printer(
            logger._enabler, Level.DEBUG, logger._delegate.debug, logger._delegate.debugf
        )

    return apply


def _with_warn() -> Option:
    """Send the fatal methods to WARN instead, so they do not exit."""

    def apply(logger: GrpcLogger) -> None:
        logger._fatal = _Printer(
            logger._enabler, Level.WARN, logger._delegate.warn, logger._delegate.warnf
        )

    return apply


class GrpcLogger:
    """Adapts a Logger to gRPC's logger interfaces."""

    def __init__(self, logger: Logger, *options: Option) -> None:
        self._delegate = logger.sugar()
        self._enabler = logger.core
        self._print = _Printer(
            self._enabler, Level.INFO, self._delegate.info, self._delegate.infof
        )
        self._fatal = _Printer(
            self._enabler, Level.FATAL, self._delegate.fatal, self._delegate.fatalf
        )
        for option in options:
            option(self)

    def print(self, *args: Any) -> None:
        self._print.print(*args)

    def printf(self, template: str, *args: Any) -> None:
        self._print.printf(template, *args)

    def println(self, *args: Any) -> None:
        self._print.println(*args)

    def info(self, *args: Any) -> None:
        self._delegate.info(*args)

    def infoln(self, *args: Any) -> None:
        if self._enabler.enabled(Level.INFO):
            self._delegate.info(sprintln(*args))

    def infof(self, template: str, *args: Any) -> None:
        self._delegate.infof(template, *args)

    def warning(self, *args: Any) -> None:
        self._delegate.warn(*args)

    def warningln(self, *args: Any) -> None:
        if self._enabler.enabled(Level.WARN):
            self._delegate.warn(sprintln(*args))

    def warningf(self, template: str, *args: Any) -> None:
        self._delegate.warnf(template, *args)

    def error(self, *args: Any) -> None:
        self._delegate.error(*args)

    def errorln(self, *args: Any) -> None:
        if self._enabler.enabled(Level.ERROR):
            self._delegate.error(sprintln(*args))

    def errorf(self, template: str, *args: Any) -> None:
        self._delegate.errorf(template, *args)

    def fatal(self, *args: Any) -> None:
        self._fatal.print(*args)

    def fatalln(self, *args: Any) -> None:
        self._fatal.println(*args)

    def fatalf(self, template: str, *args: Any) -> None:
        self._fatal.printf(template, *args)

    def v(self, level: int) -> bool:
        """Report whether the given gRPC verbosity level is enabled."""
        return self._enabler.enabled(_GRPC_TO_LEVEL.get(level, Level.INFO))