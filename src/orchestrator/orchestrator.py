"""Shooting-stars pipeline driver (Text -> Grid -> Verdict -> Report)."""

from __future__ import annotations

import logging
import uuid
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from contracts.jsoncanon import jcs_sha256
from contracts.verdict import validate_verdict
from ports import parser_port, printer_port, solver_port
from ports._utils import build_env
from project_config import get_section
from shooting_stars import graph
from shooting_stars.grid import STATE_COUNT, TARGET_STATE, InvalidMoveError, replay

from . import log as run_log

_LOGGER = logging.getLogger(__name__)


class Mode(str, Enum):
    """Reporting mode of a pipeline run."""

    CHATTY = "chatty"
    SILENT = "silent"


def _coerce_bool(value: str | bool | None) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        normalised = value.strip().lower()
        if normalised in {"1", "true", "yes", "on"}:
            return True
        if normalised in {"0", "false", "no", "off"}:
            return False
    return None


def _run_setting(key: str, profile: str) -> Any:
    run_cfg = get_section("run", default={})
    if not isinstance(run_cfg, dict):
        return None
    by_profile = run_cfg.get("by_profile")
    if isinstance(by_profile, dict):
        profile_cfg = by_profile.get(profile.lower())
        if isinstance(profile_cfg, dict) and profile_cfg.get(key):
            return profile_cfg[key]
    return run_cfg.get(key)


def _select_puzzle_kind(cli_override: Optional[str], env: Mapping[str, str], profile: str) -> str:
    if cli_override:
        return cli_override

    env_override = env.get("PUZZLE_KIND")
    if env_override:
        return env_override

    value = _run_setting("puzzle_kind", profile)
    if isinstance(value, str) and value:
        return value

    raise RuntimeError(
        "Puzzle kind must be selected explicitly via --puzzle, PUZZLE_KIND or run.puzzle_kind"
    )


def _select_mode(mode: Mode | str | None, profile: str) -> Mode:
    value = mode if mode is not None else _run_setting("mode", profile)
    if value is None:
        return Mode.CHATTY
    try:
        return Mode(value)
    except ValueError:
        raise RuntimeError(f"Unknown reporting mode '{value}'") from None


def _events_enabled(env: Mapping[str, str]) -> bool:
    logging_cfg = get_section("logging", default={})
    enabled = bool(logging_cfg.get("events_enabled", False))
    override = _coerce_bool(env.get("PUZZLE_EVENTS_ENABLED"))
    if override is not None:
        enabled = override
    if not enabled:
        return False

    base_dir = env.get("PUZZLE_EVENTS_DIR") or logging_cfg.get("events_dir", "logs/runs")
    max_mb = logging_cfg.get("events_max_mb")
    max_bytes = int(max_mb) * 1024 * 1024 if isinstance(max_mb, int) and max_mb > 0 else None
    run_log.configure(base_dir, max_bytes=max_bytes)
    return True


def derive_run_id(puzzle_kind: str, state: int, impl: str) -> str:
    """Deterministic identifier of solving ``state`` with ``impl``."""

    return f"run-{uuid.uuid5(uuid.NAMESPACE_URL, f'{puzzle_kind}|{impl}|{state}').hex[:12]}"


def solve_one(
    state: int,
    *,
    puzzle_kind: Optional[str] = None,
    mode: Mode | str | None = None,
    profile: str = "dev",
    show_steps: bool = False,
    env_overrides: Mapping[str, str] | None = None,
) -> Dict[str, Any]:
    """Solve an already parsed grid and build the run report."""

    env_map = build_env(env_overrides)
    selected_puzzle = _select_puzzle_kind(puzzle_kind, env_map, profile)
    selected_mode = _select_mode(mode, profile)
    return _solve_and_report(
        state,
        puzzle_kind=selected_puzzle,
        mode=selected_mode,
        profile=profile,
        show_steps=show_steps,
        env_map=env_map,
        modules={},
    )


def _solve_and_report(
    state: int,
    *,
    puzzle_kind: str,
    mode: Mode,
    profile: str,
    show_steps: bool,
    env_map: Dict[str, str],
    modules: Dict[str, Dict[str, Any]],
) -> Dict[str, Any]:
    verdict, solver_module = solver_port.solve_state(
        puzzle_kind,
        state,
        profile=profile,
        env=env_map,
    )
    validate_verdict(verdict)
    modules["solver"] = solver_module.journal()

    run_id = derive_run_id(puzzle_kind, state, solver_module.impl_id)
    _LOGGER.info(
        "%s: grid %03d solved by %s, solvable=%s length=%s",
        run_id,
        state,
        solver_module.module_id,
        verdict["solvable"],
        verdict["length"],
    )

    rendered: Optional[str] = None
    if mode is Mode.CHATTY:
        rendered, printer_module = printer_port.render_solution(
            puzzle_kind,
            verdict["moves"],
            initial=state,
            show_steps=show_steps,
            profile=profile,
            env=env_map,
        )
        modules["printer"] = printer_module.journal()

    result: Dict[str, Any] = {
        "run_id": run_id,
        "puzzle_kind": puzzle_kind,
        "profile": profile,
        "mode": mode.value,
        "initial_state": state,
        "verdict": verdict,
        "verdict_digest": jcs_sha256(verdict),
        "modules": modules,
        "rendered": rendered,
    }

    if _events_enabled(env_map):
        path = run_log.append_event(
            {
                "event": "stars.solve",
                "run_id": run_id,
                "puzzle_kind": puzzle_kind,
                "initial_state": state,
                "solvable": verdict["solvable"],
                "length": verdict["length"],
                "impl": solver_module.impl_id,
                "stats": verdict["stats"],
            }
        )
        result["event_log"] = str(path)
    return result


def run_pipeline(
    grid_text: str,
    *,
    mode: Mode | str | None = None,
    puzzle_kind: Optional[str] = None,
    profile: str = "dev",
    show_steps: bool = False,
    env_overrides: Mapping[str, str] | None = None,
) -> Dict[str, Any]:
    """Parse ``grid_text``, solve it and return the run report.

    Invalid text raises :class:`contracts.errors.GridParseError` before any
    search starts.
    """

    env_map = build_env(env_overrides)
    selected_puzzle = _select_puzzle_kind(puzzle_kind, env_map, profile)
    selected_mode = _select_mode(mode, profile)

    state, parser_module = parser_port.parse_grid(
        selected_puzzle,
        grid_text,
        profile=profile,
        env=env_map,
    )
    return _solve_and_report(
        state,
        puzzle_kind=selected_puzzle,
        mode=selected_mode,
        profile=profile,
        show_steps=show_steps,
        env_map=env_map,
        modules={"parser": parser_module.journal()},
    )


def _check_solution(state: int, verdict: Mapping[str, Any]) -> Optional[str]:
    expected = graph.shortest_distance(state)
    moves = verdict["moves"]
    if moves is None:
        if expected is not None:
            return f"reported unsolvable but a {expected}-move solution exists"
        return None
    if expected is None:
        return "reported a solution for an unsolvable grid"
    try:
        final = replay(state, moves)
    except InvalidMoveError as exc:
        return str(exc)
    if final != TARGET_STATE:
        return f"moves end on grid {final:03d} instead of the target"
    if len(moves) != expected:
        return f"solution has {len(moves)} moves, shortest is {expected}"
    return None


def replay_all(
    *,
    puzzle_kind: Optional[str] = None,
    profile: str = "dev",
    env_overrides: Mapping[str, str] | None = None,
) -> Dict[str, Any]:
    """Solve every grid silently and cross-check each verdict.

    Every solution is replayed move by move and its length compared with the
    distance computed on the explicit transition graph.  The live node counts
    reported by the solver are summed so that any leaked path node shows up.
    """

    env_map = build_env(env_overrides)
    selected_puzzle = _select_puzzle_kind(puzzle_kind, env_map, profile)

    unsolvable: List[int] = []
    mismatches: List[Dict[str, Any]] = []
    leaked = 0
    allocated = 0
    longest = {"state": None, "length": -1}
    impl = None

    for state in range(STATE_COUNT):
        verdict, solver_module = solver_port.solve_state(
            selected_puzzle,
            state,
            profile=profile,
            env=env_map,
        )
        impl = solver_module.impl_id
        validate_verdict(verdict)

        leaked += verdict["stats"]["nodes_live"]
        allocated += verdict["stats"]["nodes_allocated"]
        if not verdict["solvable"]:
            unsolvable.append(state)
        elif verdict["length"] > longest["length"]:
            longest = {"state": state, "length": verdict["length"]}

        problem = _check_solution(state, verdict)
        if problem is not None:
            _LOGGER.warning("grid %03d: %s", state, problem)
            mismatches.append({"state": state, "reason": problem})

    summary = {
        "puzzle_kind": selected_puzzle,
        "impl": impl,
        "states": STATE_COUNT,
        "solvable": STATE_COUNT - len(unsolvable),
        "unsolvable": unsolvable,
        "longest": longest,
        "nodes_allocated": allocated,
        "leaked_nodes": leaked,
        "mismatches": mismatches,
        "ok": not mismatches and leaked == 0,
    }
    _LOGGER.info(
        "replayed %d grids with %s: %d solvable, %d mismatches, %d leaked nodes",
        STATE_COUNT,
        impl,
        summary["solvable"],
        len(mismatches),
        leaked,
    )
    return summary


__all__ = ["Mode", "derive_run_id", "replay_all", "run_pipeline", "solve_one"]
