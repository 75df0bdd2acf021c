"""Explicit transition graph over all 512 grids.

The engine never materialises the graph; this module does, so that search
results can be cross-checked against independently computed distances.
"""

from __future__ import annotations

from collections import deque
from functools import lru_cache
from typing import Deque, Dict, List, Mapping, Optional, Tuple

from .grid import STATE_COUNT, TARGET_STATE, active_cells, ensure_state, explode

__all__ = ["distances_to_target", "predecessors", "shortest_distance", "transition_graph"]

Edge = Tuple[int, int]


@lru_cache(maxsize=1)
def transition_graph() -> Mapping[int, Tuple[Edge, ...]]:
    """Map every grid to its ``(cell, successor)`` edges in ascending cell order."""

    return {
        state: tuple((cell, explode(state, cell)) for cell in active_cells(state))
        for state in range(STATE_COUNT)
    }


@lru_cache(maxsize=1)
def predecessors() -> Mapping[int, Tuple[int, ...]]:
    incoming: Dict[int, List[int]] = {state: [] for state in range(STATE_COUNT)}
    for state, edges in transition_graph().items():
        if state == TARGET_STATE:
            continue
        for _cell, successor in edges:
            incoming[successor].append(state)
    return {state: tuple(sources) for state, sources in incoming.items()}


@lru_cache(maxsize=1)
def distances_to_target() -> Mapping[int, int]:
    """Length of the shortest route from each grid to the target.

    Grids with no route are absent from the mapping.
    """

    distances: Dict[int, int] = {TARGET_STATE: 0}
    pending: Deque[int] = deque([TARGET_STATE])
    incoming = predecessors()
    while pending:
        state = pending.popleft()
        for source in incoming[state]:
            if source not in distances:
                distances[source] = distances[state] + 1
                pending.append(source)
    return distances


def shortest_distance(state: int) -> Optional[int]:
    return distances_to_target().get(ensure_state(state))
