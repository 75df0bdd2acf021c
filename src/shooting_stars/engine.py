"""Breadth-first search for the shortest winning sequence of explosions."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from .frontier import Frontier
from .grid import Outcome, active_cells, classify, ensure_state, explode
from .path_store import Path, PathStore

__all__ = [
    "BreadthFirstSearch",
    "SearchPhase",
    "SearchStats",
    "VisitedSet",
    "shortest_winning_path",
    "solve",
]

_LOGGER = logging.getLogger(__name__)


class SearchPhase(Enum):
    INITIALIZED = "initialized"
    RUNNING = "running"
    FOUND = "found"
    EXHAUSTED = "exhausted"


class VisitedSet:
    """Presence bitset over the 512 grid states."""

    __slots__ = ("_bits",)

    def __init__(self) -> None:
        self._bits = 0

    def add(self, state: int) -> None:
        self._bits |= 1 << state

    def __contains__(self, state: int) -> bool:
        return bool(self._bits >> state & 1)

    def __len__(self) -> int:
        return bin(self._bits).count("1")


@dataclass
class SearchStats:
    dequeued: int = 0
    expanded: int = 0
    enqueued: int = 0
    duplicates: int = 0
    peak_frontier: int = 0

    def to_payload(self) -> Dict[str, Any]:
        return asdict(self)


class BreadthFirstSearch:
    """Single-use search from one initial grid.

    The frontier is explored in insertion order, so grids are classified in
    non-decreasing order of path length and the first winning grid dequeued
    carries a shortest solution.  Successors are generated in ascending cell
    order, which fixes the solution returned when several are equally short.
    """

    def __init__(self, initial: int, store: PathStore | None = None) -> None:
        self.initial = ensure_state(initial)
        self.store = store if store is not None else PathStore()
        self.phase = SearchPhase.INITIALIZED
        self.stats = SearchStats()

    def run(self) -> Path:
        """Run the search and return the winning path, or ``None`` when exhausted.

        The caller owns the returned path and must hand it back to
        ``self.store.release`` once done with it.  A zero-move solution is the
        empty path, so check :attr:`phase` to tell it apart from exhaustion.
        """

        if self.phase is not SearchPhase.INITIALIZED:
            raise RuntimeError(f"search already ran (phase={self.phase.value})")
        self.phase = SearchPhase.RUNNING

        store = self.store
        stats = self.stats
        visited = VisitedSet()

        with Frontier(store) as frontier:
            frontier.enqueue(store.empty(), self.initial)
            try:
                while True:
                    entry = frontier.dequeue()
                    if entry is None:
                        self.phase = SearchPhase.EXHAUSTED
                        return None
                    stats.dequeued += 1

                    try:
                        if entry.state in visited:
                            stats.duplicates += 1
                            continue
                        visited.add(entry.state)

                        outcome = classify(entry.state)
                        if outcome is Outcome.WON:
                            self.phase = SearchPhase.FOUND
                            return store.retain(entry.path)
                        if outcome is Outcome.LOST:
                            continue

                        stats.expanded += 1
                        for cell in active_cells(entry.state):
                            successor = explode(entry.state, cell)
                            if successor in visited:
                                continue
                            frontier.enqueue(store.extend(entry.path, cell), successor)
                            stats.enqueued += 1
                    finally:
                        store.release(entry.path)
            finally:
                stats.peak_frontier = frontier.peak
                _LOGGER.debug(
                    "search from %03d ended %s: dequeued=%d expanded=%d enqueued=%d",
                    self.initial,
                    self.phase.value,
                    stats.dequeued,
                    stats.expanded,
                    stats.enqueued,
                )


def shortest_winning_path(initial: int, store: PathStore) -> Tuple[SearchPhase, Path]:
    """Search from ``initial`` and return the terminal phase with the owned winning path."""

    search = BreadthFirstSearch(initial, store)
    path = search.run()
    return search.phase, path


def solve(initial: int) -> Optional[Tuple[int, ...]]:
    """Return the shortest sequence of moves (oldest first) or ``None``."""

    store = PathStore()
    phase, path = shortest_winning_path(initial, store)
    if phase is not SearchPhase.FOUND:
        return None
    try:
        return store.to_moves(path)
    finally:
        store.release(path)
