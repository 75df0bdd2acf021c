"""Command line front-end for the shooting-stars solver."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Dict, List

from contracts.errors import GridParseError
from orchestrator.orchestrator import Mode, replay_all, run_pipeline
from orchestrator.router import RouterError
from project_config import get_section

_ROW_SEPARATORS = ("/", ",")


def _configure_logging(verbosity: int) -> None:
    logging_cfg = get_section("logging", default={})
    level = {
        0: str(logging_cfg.get("level", "WARNING")).upper(),
        1: "INFO",
    }.get(verbosity, "DEBUG")
    logging.basicConfig(
        level=level,
        format=logging_cfg.get("format", "%(asctime)s - %(levelname)s - %(message)s"),
    )


def _cli_env(args: argparse.Namespace) -> Dict[str, str]:
    env: Dict[str, str] = {}
    if getattr(args, "solver_impl", None):
        env["CLI_PUZZLE_SOLVER_IMPL"] = args.solver_impl
    if getattr(args, "events_dir", None):
        env["PUZZLE_EVENTS_ENABLED"] = "1"
        env["PUZZLE_EVENTS_DIR"] = args.events_dir
    return env


def _read_grid(args: argparse.Namespace) -> str:
    if args.grid is not None:
        text = args.grid
        for separator in _ROW_SEPARATORS:
            text = text.replace(separator, "\n")
        return text
    if args.file is not None:
        raw = Path(args.file).read_text(encoding="utf-8")
    else:
        raw = sys.stdin.read()
    # Files conventionally end with a newline that is not part of the grid.
    return raw[:-1] if raw.endswith("\n") else raw


def cmd_solve(args: argparse.Namespace) -> int:
    mode = Mode.SILENT if args.silent else None
    try:
        result = run_pipeline(
            _read_grid(args),
            mode=mode,
            puzzle_kind=args.puzzle,
            profile=args.profile,
            show_steps=args.steps,
            env_overrides=_cli_env(args),
        )
    except GridParseError as exc:
        raise SystemExit(f"Invalid grid ({exc})") from exc
    except RouterError as exc:
        raise SystemExit(str(exc)) from exc

    if args.json:
        print(json.dumps(result, indent=2, sort_keys=True))
    elif result["rendered"] is not None:
        print(result["rendered"])
    return 0


def cmd_replay_all(args: argparse.Namespace) -> int:
    try:
        summary = replay_all(
            puzzle_kind=args.puzzle,
            profile=args.profile,
            env_overrides=_cli_env(args),
        )
    except RouterError as exc:
        raise SystemExit(str(exc)) from exc

    if args.json:
        print(json.dumps(summary, indent=2, sort_keys=True))
    else:
        print(
            f"{summary['states']} grids replayed with {summary['impl']}: "
            f"{summary['solvable']} solvable, {len(summary['mismatches'])} mismatches, "
            f"{summary['leaked_nodes']} leaked path nodes"
        )
    return 0 if summary["ok"] else 1


def _add_common(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--profile", default="dev")
    parser.add_argument("--puzzle", default=None)
    parser.add_argument("--solver-impl", default=None, help="Override the solver implementation")
    parser.add_argument("--json", action="store_true", help="Print the full report as JSON")
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (-v for INFO, -vv for DEBUG)",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Shortest solutions for 3x3 shooting-stars grids")
    sub = parser.add_subparsers(dest="command", required=True)

    solve = sub.add_parser("solve", help="Solve a single grid")
    source = solve.add_mutually_exclusive_group()
    source.add_argument(
        "--grid",
        default=None,
        help="Grid rows separated by '/', ',' or newlines, e.g. '*../.../...'",
    )
    source.add_argument("--file", default=None, help="Read the grid from a file (default: stdin)")
    solve.add_argument("--silent", action="store_true", help="Solve without printing the moves")
    solve.add_argument("--steps", action="store_true", help="Show the grid after every move")
    solve.add_argument("--events-dir", default=None, help="Append a JSONL event for this run")
    _add_common(solve)
    solve.set_defaults(func=cmd_solve)

    replay = sub.add_parser("replay-all", help="Solve and cross-check all 512 grids")
    _add_common(replay)
    replay.set_defaults(func=cmd_replay_all)

    return parser


def main(argv: List[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)
    return args.func(args)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
