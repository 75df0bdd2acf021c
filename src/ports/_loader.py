"""Helpers for loading puzzle role implementations by file path."""

from __future__ import annotations

import importlib.util
import sys
from pathlib import Path
from types import ModuleType
from typing import Any, Callable, Dict

from orchestrator.router import ResolvedModule

_MODULE_CACHE: Dict[Path, ModuleType] = {}


def load_module(resolved: ResolvedModule) -> ModuleType:
    """Import the implementation package described by ``resolved`` once."""

    module_path = resolved.module_path.resolve()
    cached = _MODULE_CACHE.get(module_path)
    if cached is not None:
        return cached

    # Puzzle directories carry dashes, so the package gets a synthetic name.
    module_name = (
        f"puzzle_{resolved.puzzle_kind.replace('-', '_')}_"
        f"{resolved.role}_{resolved.impl_id}"
    )
    spec = importlib.util.spec_from_file_location(module_name, module_path)
    if spec is None or spec.loader is None:
        raise ImportError(f"Could not load module from {module_path}")

    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except BaseException:
        sys.modules.pop(module_name, None)
        raise
    _MODULE_CACHE[module_path] = module
    return module


def get_handler(resolved: ResolvedModule, name: str) -> Callable[..., Any]:
    """Return the port function ``name`` exported by the resolved implementation."""

    module = load_module(resolved)
    try:
        return getattr(module, name)
    except AttributeError as exc:
        raise AttributeError(
            f"Implementation '{resolved.module_id}' does not expose '{name}'"
        ) from exc


__all__ = ["get_handler", "load_module"]
