"""Plain-text rendering of grids and solutions."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from project_config import get_section
from shooting_stars.grid import CELLS, explode, is_active

DESCRIPTOR = {
    "module_id": "shooting-stars-3x3:printer/text@1.0.0",
    "puzzle_kind": "shooting-stars-3x3",
    "role": "printer",
    "impl_id": "text",
    "module_version": "1.0.0",
    "capabilities": {"idempotent": True, "stateless": True},
}

NO_SOLUTION = "There's no winning sequence of moves!"
ALREADY_SOLVED = "The grid is already solved, no moves are needed."


def port_render_grid(state: int) -> str:
    puzzle: Dict[str, Any] = get_section("PUZZLE", default={})
    active = str(puzzle.get("active", "*"))
    inactive = str(puzzle.get("inactive", "."))
    separator = str(puzzle.get("row_separator", "\n"))

    glyphs = [active if is_active(state, cell) else inactive for cell in CELLS]
    return separator.join("".join(glyphs[row : row + 3]) for row in range(0, len(glyphs), 3))


def port_render_solution(
    moves: Optional[Sequence[int]],
    *,
    initial: Optional[int] = None,
    show_steps: bool = False,
) -> str:
    """Render ``moves`` oldest-first, one per line.

    With ``show_steps`` and a known ``initial`` grid every move is followed by
    the grid it produces.
    """

    if moves is None:
        return NO_SOLUTION
    if not moves:
        return ALREADY_SOLVED
    if not show_steps or initial is None:
        return "\n".join(str(move) for move in moves)

    blocks: List[str] = [f"start:\n{port_render_grid(initial)}"]
    state = initial
    for step, move in enumerate(moves, start=1):
        state = explode(state, move)
        blocks.append(f"{step}. explode {move}:\n{port_render_grid(state)}")
    return "\n\n".join(blocks)


__all__ = ["ALREADY_SOLVED", "DESCRIPTOR", "NO_SOLUTION", "port_render_grid", "port_render_solution"]
