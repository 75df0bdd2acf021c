"""FIFO frontier of (path, state) entries awaiting expansion."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, Optional

from .path_store import Path, PathStore

__all__ = ["Frontier", "FrontierEntry"]


@dataclass(frozen=True)
class FrontierEntry:
    path: Path
    state: int


class Frontier:
    """Queue that owns one path reference per entry.

    Entries are appended on the right and taken from the left, so the
    exploration order is the insertion order.  Closing the frontier (or
    leaving its ``with`` block) releases the paths of every entry still
    queued.
    """

    def __init__(self, store: PathStore) -> None:
        self._store = store
        self._entries: Deque[FrontierEntry] = deque()
        self._closed = False
        self.peak = 0

    def __len__(self) -> int:
        return len(self._entries)

    def enqueue(self, path: Path, state: int) -> None:
        """Queue ``state``; the frontier takes over the caller's reference to ``path``."""

        if self._closed:
            raise RuntimeError("cannot enqueue into a closed frontier")
        self._entries.append(FrontierEntry(path=path, state=state))
        if len(self._entries) > self.peak:
            self.peak = len(self._entries)

    def dequeue(self) -> Optional[FrontierEntry]:
        """Pop the oldest entry; the caller now owns its path reference."""

        if not self._entries:
            return None
        return self._entries.popleft()

    def close(self) -> None:
        while self._entries:
            entry = self._entries.popleft()
            self._store.release(entry.path)
        self._closed = True

    def __enter__(self) -> "Frontier":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
