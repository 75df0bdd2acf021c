"""Facade for grid parser implementations."""

from __future__ import annotations

from typing import Mapping

from orchestrator.router import ResolvedModule, resolve

from ._loader import get_handler
from ._utils import build_env


def parse_grid(
    puzzle_kind: str,
    text: str,
    *,
    profile: str = "dev",
    env: Mapping[str, str] | None = None,
) -> tuple[int, ResolvedModule]:
    """Turn ``text`` into a grid state with the configured parser.

    Invalid text raises :class:`contracts.errors.GridParseError`.
    """

    env_map = build_env(env)
    resolved = resolve(puzzle_kind, "parser", profile, env_map)
    handler = get_handler(resolved, "port_parse")
    return handler(text), resolved


__all__ = ["parse_grid"]
