"""Line sources feeding the parser one raw line at a time."""

from __future__ import annotations

from pathlib import Path
from typing import IO, Protocol

import portalocker

from poparser import locks


class LineSource(Protocol):
    def ended(self) -> bool: ...

    def next_line(self) -> str: ...

    def close(self) -> None: ...


def split_lines(text: str) -> list[str]:
    lines = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    # A final newline terminates the last line; it does not open a new one.
    if lines and lines[-1] == "":
        lines.pop()
    return lines


class StringSource:
    """Serve the lines of an in-memory PO text."""

    def __init__(self, text: str) -> None:
        self._lines = split_lines(text)
        self._position = 0
        self.closed = False

    def ended(self) -> bool:
        return self._position >= len(self._lines)

    def next_line(self) -> str:
        if self.ended():
            raise EOFError("string source exhausted")
        line = self._lines[self._position]
        self._position += 1
        return line

    def close(self) -> None:
        self.closed = True


class FileSource:
    """Read a PO file line by line, optionally under a shared lock.

    The shared lock lets concurrent readers proceed while refusing to read a
    file that a writer holds exclusively; contention raises
    ``portalocker.exceptions.LockException`` immediately.
    """

    def __init__(self, path: Path, *, encoding: str = "utf-8", lock: bool = True) -> None:
        self.path = Path(path)
        self._lock: portalocker.Lock | None = None
        self._handle: IO[str]
        if lock:
            self._lock, self._handle = locks.open_locked_for_read(self.path, encoding=encoding)
        else:
            self._handle = self.path.open("r", encoding=encoding, newline="")
        self.closed = False
        try:
            self._pending = self._handle.readline()
        except UnicodeDecodeError:
            self.close()
            raise

    def ended(self) -> bool:
        return self._pending == ""

    def next_line(self) -> str:
        if self.ended():
            raise EOFError(f"file source exhausted: {self.path}")
        line = self._pending
        self._pending = self._handle.readline()
        return line.rstrip("\r\n")

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        if self._lock is not None:
            self._lock.release()
        else:
            self._handle.close()
