from __future__ import annotations

import json

import pytest

from contracts.errors import GridParseError
from orchestrator import orchestrator
from orchestrator.orchestrator import Mode, replay_all, run_pipeline, solve_one

LONE_CORNER = "*..\n...\n..."


def test_chatty_run_reports_the_moves():
    result = run_pipeline(LONE_CORNER, mode="chatty")

    assert result["puzzle_kind"] == "shooting-stars-3x3"
    assert result["mode"] == "chatty"
    assert result["initial_state"] == 256
    assert result["verdict"]["moves"] == [1, 2, 1, 3, 6, 3, 2, 9, 8, 5]
    assert result["rendered"] == "1\n2\n1\n3\n6\n3\n2\n9\n8\n5"
    assert set(result["modules"]) == {"parser", "solver", "printer"}
    assert result["run_id"].startswith("run-")
    assert result["verdict_digest"].startswith("sha256-")


def test_runs_are_deterministic():
    first = run_pipeline(LONE_CORNER, mode=Mode.SILENT)
    second = run_pipeline(LONE_CORNER, mode=Mode.SILENT)

    assert first["run_id"] == second["run_id"]
    assert first["verdict_digest"] == second["verdict_digest"]


def test_silent_run_skips_the_printer():
    result = run_pipeline(LONE_CORNER, mode=Mode.SILENT)

    assert result["rendered"] is None
    assert "printer" not in result["modules"]


def test_profile_selects_the_mode():
    assert run_pipeline(LONE_CORNER, profile="ci")["mode"] == "silent"
    assert run_pipeline(LONE_CORNER, profile="dev")["mode"] == "chatty"


def test_unknown_mode_is_rejected():
    with pytest.raises(RuntimeError, match="Unknown reporting mode"):
        run_pipeline(LONE_CORNER, mode="loud")


def test_invalid_text_never_reaches_the_solver():
    with pytest.raises(GridParseError):
        run_pipeline("**\n...\n....")


def test_solved_and_unsolvable_grids_are_reported_distinctly():
    solved = solve_one(0b111101111)
    assert solved["verdict"]["moves"] == []
    assert solved["rendered"] == "The grid is already solved, no moves are needed."

    empty = solve_one(0)
    assert empty["verdict"]["moves"] is None
    assert empty["rendered"] == "There's no winning sequence of moves!"


def test_events_are_appended_when_enabled(tmp_path):
    env = {"PUZZLE_EVENTS_ENABLED": "1", "PUZZLE_EVENTS_DIR": str(tmp_path)}
    result = run_pipeline(LONE_CORNER, mode=Mode.SILENT, env_overrides=env)

    lines = (tmp_path / result["event_log"]).read_text(encoding="utf-8").splitlines()
    event = json.loads(lines[-1])
    assert event["event"] == "stars.solve"
    assert event["run_id"] == result["run_id"]
    assert event["length"] == 10
    assert event["stats"]["nodes_live"] == 0


def test_events_are_off_by_default():
    result = run_pipeline(LONE_CORNER, mode=Mode.SILENT, env_overrides={"PUZZLE_EVENTS_ENABLED": "0"})
    assert "event_log" not in result


def test_replay_all_cross_checks_every_grid():
    summary = replay_all()

    assert summary["ok"] is True
    assert summary["states"] == 512
    assert summary["solvable"] == 511
    assert summary["unsolvable"] == [0]
    assert summary["longest"] == {"state": 16, "length": 11}
    assert summary["leaked_nodes"] == 0
    assert summary["mismatches"] == []
    assert summary["impl"] == "bfs"


def test_replay_all_falls_back_to_the_default_solver():
    summary = replay_all(env_overrides={"CLI_PUZZLE_SOLVER_IMPL": "astar"})
    assert summary["impl"] == "bfs"
    assert summary["ok"] is True


@pytest.mark.parametrize(
    "state, moves, reason",
    [
        (256, [1], "instead of the target"),
        (256, None, "reported unsolvable"),
        (256, [2], "holds no star"),
        (0, [], "unsolvable grid"),
        (511, [2, 4, 6, 8, 5], None),
    ],
)
def test_solution_checks(state, moves, reason):
    problem = orchestrator._check_solution(state, {"moves": moves})
    if reason is None:
        assert problem is None
    else:
        assert reason in problem
