"""
test_cli.py
-----------
Tests for the `python -m skyclimb` entry point.
"""

from unittest.mock import patch

import pytest

from skyclimb.__main__ import main, parse_args
from skyclimb.core.debug.debug_logger import LoggerConfig
from skyclimb.systems.leaderboard.leaderboard_client import LeaderboardClient


@pytest.fixture(autouse=True)
def restore_log_level(monkeypatch):
    monkeypatch.setattr(LoggerConfig, "LOG_LEVEL", LoggerConfig.LOG_LEVEL)


def test_defaults():
    args = parse_args([])
    assert args.config is None
    assert not args.no_leaderboard


def test_missing_config_file_is_an_error(tmp_path):
    assert main(["--config", str(tmp_path / "missing.json")]) == 2


def test_invalid_config_values_are_an_error(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text('{"platform": {"min_live": 0}}')
    assert main(["--config", str(path)]) == 2


def test_wrong_type_config_values_are_an_error(tmp_path):
    path = tmp_path / "typo.json"
    path.write_text('{"platform": {"min_gap": "sixty"}}')
    assert main(["--config", str(path)]) == 2


def test_wires_simulation_and_leaderboard():
    with patch("skyclimb.core.runtime.main_loop.MainLoop") as loop_cls:
        assert main(["--leaderboard-url", "https://example.invalid/x"]) == 0

    _, kwargs = loop_cls.call_args
    assert isinstance(kwargs["leaderboard"], LeaderboardClient)
    assert kwargs["leaderboard"].api_url == "https://example.invalid/x"
    loop_cls.return_value.run.assert_called_once()


def test_no_leaderboard_flag():
    with patch("skyclimb.core.runtime.main_loop.MainLoop") as loop_cls:
        main(["--no-leaderboard", "--log-level", "ERROR"])

    assert loop_cls.call_args.kwargs["leaderboard"] is None
    assert LoggerConfig.LOG_LEVEL == "ERROR"
