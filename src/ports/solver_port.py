"""Facade for solver implementations."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from orchestrator.router import ResolvedModule, resolve
from shooting_stars.grid import ensure_state

from ._loader import get_handler
from ._utils import build_env


def solve_state(
    puzzle_kind: str,
    state: int,
    *,
    options: Optional[Dict[str, Any]] = None,
    profile: str = "dev",
    env: Mapping[str, str] | None = None,
) -> tuple[Dict[str, Any], ResolvedModule]:
    """Dispatch a shortest-solution search to the configured solver.

    ``state`` is validated here so that no implementation ever receives a
    value outside the grid range.
    """

    initial = ensure_state(state)
    env_map = build_env(env)
    resolved = resolve(puzzle_kind, "solver", profile, env_map)
    handler = get_handler(resolved, "port_solve")
    payload = handler(initial, options=options)
    return payload, resolved


__all__ = ["solve_state"]
