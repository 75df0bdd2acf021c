from __future__ import annotations

import io
import json

import pytest

from tools.cli import stars


def test_solve_prints_moves_oldest_first(capsys):
    assert stars.main(["solve", "--grid", "*../.../..."]) == 0
    assert capsys.readouterr().out == "1\n2\n1\n3\n6\n3\n2\n9\n8\n5\n"


def test_solve_reads_a_grid_file(tmp_path, capsys):
    grid = tmp_path / "grid.txt"
    grid.write_text("***\n***\n***\n", encoding="utf-8")

    assert stars.main(["solve", "--file", str(grid)]) == 0
    assert capsys.readouterr().out.split() == ["2", "4", "6", "8", "5"]


def test_solve_reads_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("...\n...\n...\n"))

    assert stars.main(["solve"]) == 0
    assert capsys.readouterr().out == "There's no winning sequence of moves!\n"


def test_silent_solve_prints_nothing(capsys):
    assert stars.main(["solve", "--grid", "*..,...,...", "--silent"]) == 0
    assert capsys.readouterr().out == ""


def test_json_report(capsys):
    assert stars.main(["solve", "--grid", "***/*.*/***", "--json"]) == 0
    report = json.loads(capsys.readouterr().out)
    assert report["verdict"]["moves"] == []
    assert report["modules"]["solver"]["impl"] == "bfs"


def test_invalid_grid_exits_with_a_message():
    with pytest.raises(SystemExit, match="Invalid grid"):
        stars.main(["solve", "--grid", "*./.../..."])


def test_events_dir_flag(tmp_path, capsys):
    assert stars.main(["solve", "--grid", "*../.../...", "--json", "--events-dir", str(tmp_path)]) == 0
    report = json.loads(capsys.readouterr().out)
    assert report["event_log"].startswith(str(tmp_path))


def test_replay_all(capsys):
    assert stars.main(["replay-all"]) == 0
    assert capsys.readouterr().out.strip() == (
        "512 grids replayed with bfs: 511 solvable, 0 mismatches, 0 leaked path nodes"
    )
