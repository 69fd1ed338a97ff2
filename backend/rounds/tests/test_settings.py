"""Tests for RoundsSettings configuration."""

import pytest
from pydantic import ValidationError

from rounds.settings import RoundsSettings


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch):
    for name in (
        "ROUNDS_DATA_DIR",
        "ROUNDS_LOG_DIR",
        "ROUNDS_LOG_FORMAT",
        "ROUNDS_LOG_LEVEL",
        "ROUNDS_RECENT_GAME_THRESHOLD",
    ):
        monkeypatch.delenv(name, raising=False)


class TestRoundsSettings:
    def test_defaults(self):
        settings = RoundsSettings()

        assert settings.data_dir == "data/gameData"
        assert settings.log_dir is None
        assert settings.log_format == "console"
        assert settings.log_level == "INFO"
        assert settings.recent_game_threshold == 3

    def test_data_dir_from_env(self, monkeypatch):
        monkeypatch.setenv("ROUNDS_DATA_DIR", "custom/games")
        assert RoundsSettings().data_dir == "custom/games"

    def test_log_dir_from_env(self, monkeypatch):
        monkeypatch.setenv("ROUNDS_LOG_DIR", "logs/rounds")
        assert RoundsSettings().log_dir == "logs/rounds"

    def test_threshold_from_env(self, monkeypatch):
        monkeypatch.setenv("ROUNDS_RECENT_GAME_THRESHOLD", "5")
        assert RoundsSettings().recent_game_threshold == 5

    def test_threshold_must_be_positive(self, monkeypatch):
        monkeypatch.setenv("ROUNDS_RECENT_GAME_THRESHOLD", "0")
        with pytest.raises(ValidationError, match="recent_game_threshold"):
            RoundsSettings()

    def test_empty_data_dir_rejected(self, monkeypatch):
        monkeypatch.setenv("ROUNDS_DATA_DIR", "")
        with pytest.raises(ValidationError, match="data_dir"):
            RoundsSettings()

    def test_log_format_from_env_is_case_insensitive(self, monkeypatch):
        monkeypatch.setenv("ROUNDS_LOG_FORMAT", "JSON")
        assert RoundsSettings().log_format == "json"

    def test_invalid_log_format_rejected(self, monkeypatch):
        monkeypatch.setenv("ROUNDS_LOG_FORMAT", "xml")
        with pytest.raises(ValidationError, match="log_format"):
            RoundsSettings()

    def test_log_level_from_env_is_case_insensitive(self, monkeypatch):
        monkeypatch.setenv("ROUNDS_LOG_LEVEL", "debug")
        assert RoundsSettings().log_level == "DEBUG"

    def test_invalid_log_level_rejected(self, monkeypatch):
        monkeypatch.setenv("ROUNDS_LOG_LEVEL", "bogus")
        with pytest.raises(ValidationError, match="log_level"):
            RoundsSettings()
