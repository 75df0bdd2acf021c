"""Utility helpers for port facades."""

from __future__ import annotations

import os
from typing import Dict, Mapping

ENV_PREFIXES = ("PUZZLE_", "CLI_PUZZLE_")


def build_env(overrides: Mapping[str, str] | None = None) -> Dict[str, str]:
    """Merge the puzzle-related process environment with ``overrides``.

    Only ``PUZZLE_*`` and ``CLI_PUZZLE_*`` variables are taken from the
    process; overrides are kept whatever their name.  Values are stringified
    so that callers may pass flags as ``1`` or ``True``.
    """

    env: Dict[str, str] = {
        str(k): str(v) for k, v in os.environ.items() if str(k).upper().startswith(ENV_PREFIXES)
    }
    if overrides:
        env.update({str(k): str(v) for k, v in overrides.items()})
    return env


__all__ = ["ENV_PREFIXES", "build_env"]
