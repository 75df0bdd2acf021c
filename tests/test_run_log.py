from __future__ import annotations

import json

from orchestrator import log as run_log


def test_events_are_written_as_json_lines(tmp_path):
    run_log.configure(tmp_path)
    path = run_log.append_event({"event": "stars.solve", "initial_state": 16})
    run_log.append_event({"event": "stars.solve", "initial_state": 17, "ts": "fixed"})

    assert path == run_log.current_log_path()
    assert path.parent.parent == tmp_path
    records = [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]
    assert [record["initial_state"] for record in records] == [16, 17]
    assert "ts" in records[0]
    assert records[1]["ts"] == "fixed"


def test_files_rotate_once_full(tmp_path):
    run_log.configure(tmp_path, max_bytes=120)
    paths = {run_log.append_event({"event": "stars.solve", "pad": "x" * 20}) for _ in range(4)}

    assert len(paths) > 1
    assert sorted(path.name for path in paths)[0] == "stars_00.jsonl"
    for path in paths:
        assert path.stat().st_size <= 120
