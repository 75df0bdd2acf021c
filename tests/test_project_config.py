from __future__ import annotations

import pytest

from project_config import get_config, get_section, reload


def setup_function():
    reload()


def test_puzzle_section():
    puzzle = get_section("PUZZLE")
    assert puzzle["name"] == "shooting-stars-3x3"
    assert (puzzle["active"], puzzle["inactive"]) == ("*", ".")


def test_dotted_lookup_through_dashed_keys():
    assert get_section("modules.shooting-stars-3x3.solver.impl") == "bfs"


def test_missing_paths():
    with pytest.raises(KeyError):
        get_section("modules.lights-out-5x5")
    assert get_section("modules.lights-out-5x5", default=None) is None
    assert get_section("run.missing", default="fallback") == "fallback"


def test_configuration_is_cached():
    assert get_config() is get_config()


def test_config_path_can_be_overridden(tmp_path, monkeypatch):
    custom = tmp_path / "stars.toml"
    custom.write_text('[PUZZLE]\nname = "custom"\n', encoding="utf-8")
    monkeypatch.setenv("PUZZLE_CONFIG_PATH", str(custom))
    reload()
    try:
        assert get_section("PUZZLE.name") == "custom"
        assert get_section("modules", default={}) == {}
    finally:
        monkeypatch.delenv("PUZZLE_CONFIG_PATH")
        reload()
    assert get_section("PUZZLE.name") == "shooting-stars-3x3"


def test_broken_config_is_reported(tmp_path, monkeypatch):
    broken = tmp_path / "broken.toml"
    broken.write_text("[PUZZLE\n", encoding="utf-8")
    monkeypatch.setenv("PUZZLE_CONFIG_PATH", str(broken))
    reload()
    try:
        with pytest.raises(RuntimeError, match="not valid TOML"):
            get_config()
    finally:
        monkeypatch.delenv("PUZZLE_CONFIG_PATH")
        reload()
