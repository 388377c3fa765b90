"""Tests for configuration management."""

from __future__ import annotations

from pathlib import Path

import pytest

from quizclash.core.config import (
    CombatSettings,
    EconomySettings,
    QuizSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)
from quizclash.core.exceptions import ConfigurationError


class TestCombatSettings:
    """Tests for CombatSettings configuration."""

    def test_default_values(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test default combat rules."""
        monkeypatch.chdir(tmp_path)

        settings = CombatSettings()

        assert settings.crit_chance == 0.15
        assert settings.crit_multiplier == 2.5
        assert settings.block_chance == 0.30
        assert settings.heal_cooldown_seconds == 5.0
        assert settings.normal_potion_heal == 50
        assert settings.epic_potion_heal == 100
        assert settings.max_player_health == 100
        assert settings.victory_coins_min == 10
        assert settings.victory_coins_max == 20
        assert settings.regen_interval_seconds == 17.5

    def test_victory_range_validation(self) -> None:
        """Test that the victory coin range must not be inverted."""
        with pytest.raises(ConfigurationError) as exc_info:
            CombatSettings(victory_coins_min=30, victory_coins_max=20)

        assert "victory_coins_min" in str(exc_info.value)

    def test_env_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test environment variables override defaults."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("QUIZCLASH_COMBAT_BLOCK_CHANCE", "0.5")

        settings = CombatSettings()

        assert settings.block_chance == 0.5


class TestQuizAndEconomySettings:
    """Tests for the quiz and economy sections."""

    def test_quiz_defaults(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)

        settings = QuizSettings()

        assert settings.questions_per_quiz == 5
        assert settings.instant_win_coins == 15

    def test_economy_defaults(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)

        settings = EconomySettings()

        assert settings.starting_coins == 5
        assert settings.starting_normal_potions == 2
        assert settings.starting_epic_potions == 1
        assert settings.starting_totems == 0
        assert settings.normal_lootbox_cost == 5
        assert settings.epic_lootbox_cost == 15


class TestSettings:
    """Tests for main Settings configuration."""

    def test_default_settings(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test default settings initialization."""
        monkeypatch.chdir(tmp_path)

        settings = Settings()

        assert settings.app_name == "Quiz Clash"
        assert settings.app_version == "0.1.0"
        assert settings.debug is False
        assert settings.log_level == "INFO"
        assert settings.json_logs is False

    def test_env_vars_reach_nested_sections(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        mock_env_vars: dict[str, str],
    ) -> None:
        """Test section prefixes apply to the nested settings."""
        monkeypatch.chdir(tmp_path)

        settings = Settings()

        assert settings.debug is True
        assert settings.log_level == "DEBUG"
        assert settings.combat.crit_chance == 0.5
        assert settings.economy.starting_coins == 50


class TestGetSettings:
    """Tests for get_settings singleton function."""

    def test_returns_settings_instance(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test get_settings returns Settings instance."""
        monkeypatch.chdir(tmp_path)

        settings = get_settings()

        assert isinstance(settings, Settings)

    def test_caching(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test settings are cached until the cache is cleared."""
        monkeypatch.chdir(tmp_path)

        first = get_settings()
        assert get_settings() is first

        clear_settings_cache()

        assert get_settings() is not first

    def test_invalid_env_wrapped(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that load failures surface as ConfigurationError."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("QUIZCLASH_LOG_LEVEL", "LOUD")

        with pytest.raises(ConfigurationError):
            get_settings()
