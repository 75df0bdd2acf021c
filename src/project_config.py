"""Utility helpers for loading project-wide configuration."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # pragma: no cover - fallback for older Python
    import tomli as tomllib  # type: ignore[import-untyped]


CONFIG_ENV_VAR = "PUZZLE_CONFIG_PATH"
_CONFIG_FILENAME = "config.toml"
_MISSING = object()


def config_path() -> Path:
    """Location of the active configuration file.

    ``PUZZLE_CONFIG_PATH`` replaces the ``config.toml`` shipped at the
    project root.
    """

    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path(__file__).resolve().parents[1] / _CONFIG_FILENAME


@lru_cache(maxsize=1)
def get_config() -> Dict[str, Any]:
    """Load and cache the project configuration as a dictionary."""

    path = config_path()
    try:
        with path.open("rb") as fh:
            return tomllib.load(fh)
    except FileNotFoundError as exc:
        raise RuntimeError(f"Configuration file '{path}' was not found") from exc
    except tomllib.TOMLDecodeError as exc:
        raise RuntimeError(f"Configuration file '{path}' is not valid TOML: {exc}") from exc


def reload() -> None:
    """Drop the cached configuration so the next lookup re-reads the file."""

    get_config.cache_clear()


def get_section(path: str, default: Any = _MISSING) -> Any:
    """Retrieve a nested configuration value using dotted notation.

    Segments may contain dashes (``modules.shooting-stars-3x3.solver``) since
    TOML bare keys allow them.
    """

    data: Any = get_config()
    for part in path.split("."):
        if isinstance(data, dict) and part in data:
            data = data[part]
        elif default is not _MISSING:
            return default
        else:
            raise KeyError(f"Configuration path '{path}' not found")
    return data


__all__ = ["CONFIG_ENV_VAR", "config_path", "get_config", "get_section", "reload"]
