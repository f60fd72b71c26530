"""
test_config_manager.py
----------------------
Tests for config file loading and merging.
"""

import json

import pytest

from skyclimb.core.services import config_manager
from skyclimb.core.services.config_manager import load_config, merge_dicts, resolve_path


def test_merge_is_recursive_and_skips_notes():
    merged = merge_dicts({"a": {"x": 1, "y": 2}, "b": 1}, {"a": {"y": 3}, "_notes": "hi"})
    assert merged == {"a": {"x": 1, "y": 3}, "b": 1}


def test_merge_does_not_mutate_defaults():
    default = {"a": {"x": 1}}
    merge_dicts(default, {"a": {"x": 2}})
    assert default == {"a": {"x": 1}}


def test_load_json(tmp_path):
    path = tmp_path / "cfg.json"
    path.write_text(json.dumps({"player": {"gravity": 0.4}}))
    assert load_config(str(path), {"player": {"gravity": 0.5, "jump_force": 12}}) == {
        "player": {"gravity": 0.4, "jump_force": 12}
    }


def test_load_python_module(tmp_path):
    path = tmp_path / "cfg.py"
    path.write_text("DEFAULT_CONFIG = {'canvas': {'width': 400}}\n")
    assert load_config(str(path)) == {"canvas": {"width": 400}}


def test_invalid_json_falls_back_to_defaults(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json")
    assert load_config(str(path), {"a": 1}) == {"a": 1}


def test_non_object_rejected_in_strict_mode(tmp_path):
    path = tmp_path / "list.json"
    path.write_text("[1, 2]")
    with pytest.raises(FileNotFoundError):
        load_config(str(path), strict=True)


def test_resolve_path_searches_config_dirs(tmp_path, monkeypatch):
    (tmp_path / "hard.json").write_text("{}")
    monkeypatch.setattr(config_manager, "SEARCH_DIRS", [str(tmp_path)])
    assert resolve_path("hard") == str(tmp_path / "hard.json")


def test_env_config_dir_is_searched(tmp_path, monkeypatch):
    (tmp_path / "custom.py").write_text("DEFAULT_CONFIG = {'world': {'fall_limit': 500}}\n")
    monkeypatch.setenv(config_manager.CONFIG_DIR_ENV, str(tmp_path))
    assert load_config("custom") == {"world": {"fall_limit": 500}}


def test_broken_python_config_strict(tmp_path):
    path = tmp_path / "broken.py"
    path.write_text("DEFAULT_CONFIG = {\n")
    with pytest.raises(FileNotFoundError):
        load_config(str(path), strict=True)
