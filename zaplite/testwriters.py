"""Writers and syncers that are handy in tests."""

from __future__ import annotations


class Syncer:
    """A spy for ``sync``: records calls and can be told to fail."""

    def __init__(self) -> None:
        self._error: BaseException | None = None
        self._called = False

    def set_error(self, error: BaseException | None) -> None:
        """Make later ``sync`` calls raise *error*."""
        self._error = error

    def sync(self) -> None:
        self._called = True
        if self._error is not None:
            raise self._error

    def called(self) -> bool:
        """Report whether ``sync`` has been called."""
        return self._called


class Discarder(Syncer):
    """Throws away everything written to it."""

    def write(self, data: bytes) -> int:
        return len(data)


class FailWriter(Syncer):
    """Fails every write."""

    def write(self, data: bytes) -> int:
        raise OSError("failed")


class ShortWriter(Syncer):
    """Reports writing one byte fewer than it was given."""

    def write(self, data: bytes) -> int:
        return len(data) - 1


class Buffer(Syncer):
    """Collects writes in memory and splits them into lines."""

    def __init__(self) -> None:
        super().__init__()
        self._data = bytearray()

    def write(self, data: bytes | str) -> int:
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._data.extend(data)
        return len(data)

    def getvalue(self) -> str:
        return self._data.decode("utf-8")

    def lines(self) -> list[str]:
        """Return the output split on newlines, without the trailing ones."""
        return self.stripped().split("\n")

    def stripped(self) -> str:
        """Return the output with trailing newlines removed."""
        return self.getvalue().rstrip("\n")