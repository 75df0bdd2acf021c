"""Grid encoding and transition rules for the 3x3 shooting-stars puzzle.

A grid is a single integer in ``[0, 511]``.  Cell ``c`` (numbered 1..9 in
row-major order) lives in bit ``9 - c``, so cell 1 is the most significant of
the nine bits and cell 9 the least significant::

    1 2 3
    4 5 6
    7 8 9

Grids are plain integers, which makes them hashable, cheap to copy and usable
directly as indices into the 512-entry visited set.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Iterable, Iterator, Mapping, Tuple

__all__ = [
    "CELLS",
    "EMPTY_STATE",
    "InvalidMoveError",
    "InvalidStateError",
    "Outcome",
    "STATE_COUNT",
    "TARGET_STATE",
    "TOGGLES",
    "active_cells",
    "cell_bit",
    "classify",
    "ensure_state",
    "explode",
    "is_active",
    "is_valid_state",
    "replay",
    "toggle_mask",
]

CELLS: Tuple[int, ...] = tuple(range(1, 10))
STATE_COUNT = 1 << len(CELLS)

EMPTY_STATE = 0b000000000
TARGET_STATE = 0b111101111

TOGGLES: Mapping[int, Tuple[int, ...]] = {
    1: (1, 2, 4, 5),
    2: (1, 2, 3),
    3: (2, 3, 5, 6),
    4: (1, 4, 7),
    5: (2, 4, 5, 6, 8),
    6: (3, 6, 9),
    7: (4, 5, 7, 8),
    8: (7, 8, 9),
    9: (5, 6, 8, 9),
}


class InvalidStateError(ValueError):
    """Raised when a value outside ``[0, 511]`` is offered as a grid state."""


class InvalidMoveError(ValueError):
    """Raised when a move names an unknown cell or a cell that is not active."""


class Outcome(Enum):
    """Terminal classification of a grid."""

    WON = "won"
    LOST = "lost"
    CONTINUE = "continue"


def cell_bit(cell: int) -> int:
    """Return the bit that stores ``cell``."""

    if cell not in TOGGLES:
        raise InvalidMoveError(f"cell must be within 1..9, got {cell!r}")
    return 1 << (len(CELLS) - cell)


def _build_masks() -> Dict[int, int]:
    masks: Dict[int, int] = {}
    for cell, toggled in TOGGLES.items():
        mask = 0
        for other in toggled:
            mask |= cell_bit(other)
        masks[cell] = mask
    return masks


_MASKS = _build_masks()


def toggle_mask(cell: int) -> int:
    """Return the XOR mask applied when ``cell`` explodes."""

    try:
        return _MASKS[cell]
    except KeyError:
        raise InvalidMoveError(f"cell must be within 1..9, got {cell!r}") from None


def is_valid_state(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    return 0 <= value < STATE_COUNT


def ensure_state(value: object) -> int:
    """Return ``value`` if it encodes a grid, raise :class:`InvalidStateError` otherwise."""

    if not is_valid_state(value):
        raise InvalidStateError(f"grid state must be an integer in [0, {STATE_COUNT - 1}], got {value!r}")
    return int(value)  # type: ignore[arg-type]


def is_active(state: int, cell: int) -> bool:
    """Return ``True`` when ``cell`` holds a star; unknown cells are never active."""

    if cell not in TOGGLES:
        return False
    return bool(state & cell_bit(cell))


def explode(state: int, cell: int) -> int:
    """Explode ``cell`` in ``state``.

    Exploding an inactive (or unknown) cell is a no-op and returns ``state``
    unchanged.
    """

    if not is_active(state, cell):
        return state
    return state ^ _MASKS[cell]


def classify(state: int) -> Outcome:
    if state == TARGET_STATE:
        return Outcome.WON
    if state == EMPTY_STATE:
        return Outcome.LOST
    return Outcome.CONTINUE


def active_cells(state: int) -> Iterator[int]:
    """Yield the active cells of ``state`` in ascending order."""

    for cell in CELLS:
        if state & cell_bit(cell):
            yield cell


def replay(state: int, moves: Iterable[int]) -> int:
    """Apply ``moves`` oldest-first and return the resulting grid.

    Unlike :func:`explode`, a move on an inactive cell is rejected because a
    recorded solution must only contain legal explosions.
    """

    current = ensure_state(state)
    for step, move in enumerate(moves, start=1):
        if not is_active(current, move):
            raise InvalidMoveError(f"move #{step} explodes cell {move!r} which holds no star")
        current ^= _MASKS[move]
    return current
