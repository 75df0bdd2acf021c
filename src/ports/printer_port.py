"""Facade for printer implementations."""

from __future__ import annotations

from typing import Mapping, Optional, Sequence

from orchestrator.router import ResolvedModule, resolve

from ._loader import get_handler
from ._utils import build_env


def render_grid(
    puzzle_kind: str,
    state: int,
    *,
    profile: str = "dev",
    env: Mapping[str, str] | None = None,
) -> tuple[str, ResolvedModule]:
    env_map = build_env(env)
    resolved = resolve(puzzle_kind, "printer", profile, env_map)
    handler = get_handler(resolved, "port_render_grid")
    return handler(state), resolved


def render_solution(
    puzzle_kind: str,
    moves: Optional[Sequence[int]],
    *,
    initial: Optional[int] = None,
    show_steps: bool = False,
    profile: str = "dev",
    env: Mapping[str, str] | None = None,
) -> tuple[str, ResolvedModule]:
    """Render ``moves`` (``None`` meaning unsolvable) with the configured printer."""

    env_map = build_env(env)
    resolved = resolve(puzzle_kind, "printer", profile, env_map)
    handler = get_handler(resolved, "port_render_solution")
    text = handler(moves, initial=initial, show_steps=show_steps)
    return text, resolved


__all__ = ["render_grid", "render_solution"]
