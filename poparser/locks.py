from __future__ import annotations

from pathlib import Path
from typing import IO

import portalocker

SHARED_READ_FLAGS = portalocker.LockFlags.SHARED | portalocker.LockFlags.NON_BLOCKING


def shared_read_lock(path: Path, *, encoding: str) -> portalocker.Lock:
    return portalocker.Lock(
        str(path),
        mode="r",
        timeout=0,
        flags=SHARED_READ_FLAGS,
        encoding=encoding,
        newline="",
    )


def open_locked_for_read(path: Path, *, encoding: str) -> tuple[portalocker.Lock, IO[str]]:
    if not path.is_file():
        raise FileNotFoundError(f"PO file not found: {path}")
    lock = shared_read_lock(path, encoding=encoding)
    handle = lock.acquire()
    return lock, handle
