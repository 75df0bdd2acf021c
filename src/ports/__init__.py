"""Puzzle-first port facades."""

from __future__ import annotations

from .parser_port import parse_grid
from .printer_port import render_grid, render_solution
from .solver_port import solve_state

__all__ = [
    "parse_grid",
    "render_grid",
    "render_solution",
    "solve_state",
]
