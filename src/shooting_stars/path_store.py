"""Shared-tail, reference-counted move paths.

A path is a singly linked chain of :class:`PathNode` objects holding moves in
reverse chronological order; the empty path is ``None``.  Extending a path
allocates one node pointing at the untouched existing chain, so sibling paths
share their common suffix::

    [1 | 1] -> [2 | 2] -> [9 | 1] -> None
    [5 | 1] ---^

Each node counts its owners.  Releasing ``[1 | 1]`` above retires that node
only and leaves ``[2 | 1] -> [9 | 1]`` alive for the ``[5 | 1]`` path.

The store keeps the counters of a single search run, which is what makes
leaks observable: after every owner released its references ``live`` is zero.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

__all__ = ["EMPTY_PATH", "Path", "PathNode", "PathReleaseError", "PathStore"]


class PathReleaseError(RuntimeError):
    """Raised when a retired node is used again or released twice."""


@dataclass(eq=False)
class PathNode:
    """One move plus a shared reference to the moves that preceded it."""

    move: int
    rest: Optional["PathNode"]
    references: int = 1

    @property
    def retired(self) -> bool:
        return self.references <= 0


Path = Optional[PathNode]
EMPTY_PATH: Path = None


class PathStore:
    """Allocation bookkeeping for the move paths of one search run."""

    def __init__(self) -> None:
        self._live = 0
        self._allocated = 0

    @property
    def live(self) -> int:
        """Number of nodes that still have at least one owner."""

        return self._live

    @property
    def allocated(self) -> int:
        """Number of nodes ever created by :meth:`extend`."""

        return self._allocated

    def empty(self) -> Path:
        return EMPTY_PATH

    def extend(self, path: Path, move: int) -> PathNode:
        """Return a new path with ``move`` on top of ``path``.

        The rest of the path is shared, not copied: ``path`` gains one owner
        (the new node) and the caller owns the single reference of the result.
        O(1) in time and space.
        """

        self._check_alive(path, "extend")
        if path is not None:
            path.references += 1
        node = PathNode(move=move, rest=path)
        self._live += 1
        self._allocated += 1
        return node

    def retain(self, path: Path) -> Path:
        """Record one more owner of ``path`` and return it."""

        self._check_alive(path, "retain")
        if path is not None:
            path.references += 1
        return path

    def release(self, path: Path) -> None:
        """Drop one reference to ``path``.

        A node whose count reaches zero is retired and releases its own rest,
        so an unshared chain is retired entirely.  The walk stops at the first
        node that is still owned by someone else.
        """

        self._check_alive(path, "release")
        node = path
        while node is not None:
            node.references -= 1
            if node.references > 0:
                break
            self._live -= 1
            rest = node.rest
            node.rest = None
            node = rest

    def to_moves(self, path: Path) -> Tuple[int, ...]:
        """Return the moves of ``path`` oldest-first without consuming it."""

        reversed_moves: List[int] = []
        node = path
        while node is not None:
            if node.retired:
                raise PathReleaseError(f"cannot traverse retired path node for move {node.move}")
            reversed_moves.append(node.move)
            node = node.rest
        reversed_moves.reverse()
        return tuple(reversed_moves)

    def length(self, path: Path) -> int:
        count = 0
        node = path
        while node is not None:
            count += 1
            node = node.rest
        return count

    @staticmethod
    def _check_alive(path: Path, action: str) -> None:
        if path is not None and path.retired:
            raise PathReleaseError(f"cannot {action} a retired path node (move {path.move})")
