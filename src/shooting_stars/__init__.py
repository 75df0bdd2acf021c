"""Shortest-solution search for the 3x3 shooting-stars puzzle."""

from __future__ import annotations

from .engine import BreadthFirstSearch, SearchPhase, SearchStats, shortest_winning_path, solve
from .frontier import Frontier, FrontierEntry
from .grid import (
    EMPTY_STATE,
    STATE_COUNT,
    TARGET_STATE,
    InvalidMoveError,
    InvalidStateError,
    Outcome,
    classify,
    explode,
    is_active,
    replay,
)
from .path_store import EMPTY_PATH, PathNode, PathReleaseError, PathStore

__version__ = "1.0.0"

__all__ = [
    "BreadthFirstSearch",
    "EMPTY_PATH",
    "EMPTY_STATE",
    "Frontier",
    "FrontierEntry",
    "InvalidMoveError",
    "InvalidStateError",
    "Outcome",
    "PathNode",
    "PathReleaseError",
    "PathStore",
    "STATE_COUNT",
    "SearchPhase",
    "SearchStats",
    "TARGET_STATE",
    "classify",
    "explode",
    "is_active",
    "replay",
    "shortest_winning_path",
    "solve",
]
