from __future__ import annotations

from ports._utils import build_env


def test_only_puzzle_variables_are_inherited(monkeypatch):
    monkeypatch.setenv("PUZZLE_KIND", "shooting-stars-3x3")
    monkeypatch.setenv("CLI_PUZZLE_SOLVER_IMPL", "bfs")
    monkeypatch.setenv("HOME_DIR_FOR_TEST", "/tmp")

    env = build_env()

    assert env["PUZZLE_KIND"] == "shooting-stars-3x3"
    assert env["CLI_PUZZLE_SOLVER_IMPL"] == "bfs"
    assert "HOME_DIR_FOR_TEST" not in env


def test_overrides_win_and_are_stringified(monkeypatch):
    monkeypatch.setenv("PUZZLE_EVENTS_ENABLED", "0")
    env = build_env({"PUZZLE_EVENTS_ENABLED": 1, "EXTRA": True})
    assert env["PUZZLE_EVENTS_ENABLED"] == "1"
    assert env["EXTRA"] == "True"
