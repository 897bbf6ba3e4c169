"""Tests for process settings and engine configuration."""

from pathlib import Path

from exercises import EngineConfig
from settings import get_settings
from storage import DEFAULT_DB_PATH


class TestSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("EXERCISE_ENGINE_DB_PATH", raising=False)
        monkeypatch.delenv("EXERCISE_ENGINE_SEED", raising=False)
        settings = get_settings()
        assert settings.db_path == DEFAULT_DB_PATH
        assert settings.seed is None

    def test_environment_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("EXERCISE_ENGINE_DB_PATH", str(tmp_path / "x.db"))
        monkeypatch.setenv("EXERCISE_ENGINE_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("EXERCISE_ENGINE_SEED", "7")
        settings = get_settings()
        assert settings.db_path == Path(tmp_path / "x.db")
        assert settings.log_level == "DEBUG"
        assert settings.seed == 7

    def test_cached(self):
        assert get_settings() is get_settings()


class TestEngineConfig:
    """Tests for EngineConfig defaults."""

    def test_defaults(self):
        config = EngineConfig()
        assert config.matching.unique_targets is False
        assert config.matching.shuffle_items is True
        assert config.ordering.reshuffle_on_reset is True
        assert config.completion.require_all_answers is True
        assert config.multiple_choice.require_selection is True
        assert config.reset.require_confirmation is True

    def test_from_dict(self):
        config = EngineConfig.model_validate({"matching": {"unique_targets": True}})
        assert config.matching.unique_targets is True
        assert config.ordering.shuffle_items is True
