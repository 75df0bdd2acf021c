"""Text parser for 3x3 shooting-stars grids.

The accepted format is exactly three rows of three glyphs separated by a
single newline, eleven characters in total::

    *..
    ...
    ...
"""

from __future__ import annotations

from typing import Any, Dict, Tuple

from contracts.errors import GridParseError
from project_config import get_section
from shooting_stars.grid import CELLS, EMPTY_STATE, cell_bit

DESCRIPTOR = {
    "module_id": "shooting-stars-3x3:parser/text@1.0.0",
    "puzzle_kind": "shooting-stars-3x3",
    "role": "parser",
    "impl_id": "text",
    "module_version": "1.0.0",
    "capabilities": {"idempotent": True, "stateless": True},
}

_ROW_WIDTH = 3
_EXPECTED_LENGTH = 11


def _glyphs() -> Tuple[str, str, str]:
    puzzle: Dict[str, Any] = get_section("PUZZLE", default={})
    return (
        str(puzzle.get("active", "*")),
        str(puzzle.get("inactive", ".")),
        str(puzzle.get("row_separator", "\n")),
    )


def port_parse(text: str) -> int:
    """Return the grid state described by ``text``."""

    if not isinstance(text, str):
        raise GridParseError("type", f"expected str, got {type(text).__name__}")
    if len(text) != _EXPECTED_LENGTH:
        raise GridParseError("length", f"expected {_EXPECTED_LENGTH} characters, got {len(text)}")

    active, inactive, separator = _glyphs()
    rows = text.split(separator)
    if len(rows) != _ROW_WIDTH or any(len(row) != _ROW_WIDTH for row in rows):
        raise GridParseError("layout", "expected three rows of three cells")

    state = EMPTY_STATE
    for cell, glyph in zip(CELLS, "".join(rows)):
        if glyph == active:
            state |= cell_bit(cell)
        elif glyph != inactive:
            raise GridParseError("character", f"unexpected {glyph!r} in cell {cell}")
    return state


__all__ = ["DESCRIPTOR", "port_parse"]
