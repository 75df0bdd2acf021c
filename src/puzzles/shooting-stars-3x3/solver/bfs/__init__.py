"""Breadth-first solver backed by the shared-tail path store."""

from __future__ import annotations

from typing import Any, Dict, Optional

from shooting_stars.engine import BreadthFirstSearch, SearchPhase
from shooting_stars.grid import classify
from shooting_stars.path_store import PathStore

DESCRIPTOR = {
    "module_id": "shooting-stars-3x3:solver/bfs@1.0.0",
    "puzzle_kind": "shooting-stars-3x3",
    "role": "solver",
    "impl_id": "bfs",
    "module_version": "1.0.0",
    "contracts": "verdict@1",
    "capabilities": {"parallelizable": False, "idempotent": True, "stateless": True},
}


def port_solve(state: int, *, options: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Search from ``state`` and return a verdict payload.

    ``options["trace"]`` adds the terminal search phase to the payload.
    """

    store = PathStore()
    search = BreadthFirstSearch(state, store)
    path = search.run()

    moves = None
    if search.phase is SearchPhase.FOUND:
        try:
            moves = list(store.to_moves(path))
        finally:
            store.release(path)

    stats = search.stats.to_payload()
    stats["nodes_allocated"] = store.allocated
    stats["nodes_live"] = store.live

    payload: Dict[str, Any] = {
        "initial_state": search.initial,
        "outcome": classify(search.initial).value,
        "solvable": moves is not None,
        "moves": moves,
        "length": None if moves is None else len(moves),
        "stats": stats,
    }
    if options and options.get("trace"):
        payload["trace"] = {"phase": search.phase.value, "impl": DESCRIPTOR["impl_id"]}
    return payload


__all__ = ["DESCRIPTOR", "port_solve"]
