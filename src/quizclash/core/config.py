"""Configuration management for the QuizClash engine.

Centralized configuration using pydantic-settings, supporting environment
variables, .env files, and runtime overrides. Every tunable number the
engine uses (probabilities, heal amounts, rewards, costs, timings) lives
here so tests and the presentation layer can override it.

Example:
    >>> from quizclash.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.combat.crit_chance
    0.15

Environment Variables:
    QUIZCLASH_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    QUIZCLASH_JSON_LOGS: Emit JSON log lines instead of console output
    QUIZCLASH_COMBAT_REGEN_INTERVAL_SECONDS: Seconds between boss regeneration ticks
    QUIZCLASH_QUIZ_QUESTIONS_PER_QUIZ: Questions drawn per quiz attempt
    QUIZCLASH_ECONOMY_STARTING_COINS: Coins a new player starts with
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from quizclash.core.exceptions import ConfigurationError


class CombatSettings(BaseSettings):
    """Configuration for combat resolution.

    Attributes:
        crit_chance: Probability that an attack is a critical hit.
        crit_multiplier: Damage multiplier for critical hits (result is floored).
        block_chance: Probability that the player blocks an enemy attack.
        heal_cooldown_seconds: Minimum real time between successful heals.
        normal_potion_heal: HP restored by a normal potion.
        epic_potion_heal: HP restored by an epic potion.
        max_player_health: Player health cap and totem revive value.
        victory_coins_min: Lower bound of the victory coin bonus.
        victory_coins_max: Upper bound of the victory coin bonus (inclusive).
        regen_interval_seconds: Default period of boss regeneration.
    """

    model_config = SettingsConfigDict(
        env_prefix="QUIZCLASH_COMBAT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    crit_chance: float = Field(default=0.15, ge=0.0, le=1.0, description="Critical hit chance")
    crit_multiplier: float = Field(default=2.5, ge=1.0, description="Critical hit multiplier")
    block_chance: float = Field(default=0.30, ge=0.0, le=1.0, description="Block chance")
    heal_cooldown_seconds: float = Field(
        default=5.0,
        ge=0.0,
        description="Seconds between successful heals",
    )
    normal_potion_heal: int = Field(default=50, ge=0, description="Normal potion heal")
    epic_potion_heal: int = Field(default=100, ge=0, description="Epic potion heal")
    max_player_health: int = Field(default=100, ge=1, description="Player health cap")
    victory_coins_min: int = Field(default=10, ge=0, description="Minimum victory bonus")
    victory_coins_max: int = Field(default=20, ge=0, description="Maximum victory bonus")
    regen_interval_seconds: float = Field(
        default=17.5,
        gt=0,
        description="Seconds between boss regeneration ticks",
    )

    @model_validator(mode="after")
    def validate_victory_range(self) -> "CombatSettings":
        """Ensure the victory coin range is not inverted.

        Returns:
            Self if validation passes.

        Raises:
            ConfigurationError: If victory_coins_min > victory_coins_max.
        """
        if self.victory_coins_min > self.victory_coins_max:
            raise ConfigurationError(
                f"victory_coins_min ({self.victory_coins_min}) must not exceed "
                f"victory_coins_max ({self.victory_coins_max})",
                config_key="victory_coins_min",
            )
        return self


class QuizSettings(BaseSettings):
    """Configuration for the quiz gate.

    Attributes:
        questions_per_quiz: Number of questions drawn per attempt.
        instant_win_coins: Coins awarded for a perfect quiz.
    """

    model_config = SettingsConfigDict(
        env_prefix="QUIZCLASH_QUIZ_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    questions_per_quiz: int = Field(default=5, ge=1, description="Questions per attempt")
    instant_win_coins: int = Field(default=15, ge=0, description="Perfect quiz bonus")


class EconomySettings(BaseSettings):
    """Configuration for starting inventory and lootbox prices."""

    model_config = SettingsConfigDict(
        env_prefix="QUIZCLASH_ECONOMY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    starting_coins: int = Field(default=5, ge=0)
    starting_normal_potions: int = Field(default=2, ge=0)
    starting_epic_potions: int = Field(default=1, ge=0)
    starting_totems: int = Field(default=0, ge=0)
    normal_lootbox_cost: int = Field(default=5, ge=0)
    epic_lootbox_cost: int = Field(default=15, ge=0)


class Settings(BaseSettings):
    """Main application settings aggregating all configuration domains.

    Attributes:
        app_name: Application name.
        app_version: Application version string.
        debug: Enable debug mode.
        log_level: Application logging level.
        json_logs: Render logs as JSON.
        combat: Combat settings.
        quiz: Quiz gate settings.
        economy: Starting inventory and price settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="QUIZCLASH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(default="Quiz Clash", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    json_logs: bool = Field(default=False, description="Emit JSON log lines")

    combat: CombatSettings = Field(default_factory=CombatSettings)
    quiz: QuizSettings = Field(default_factory=QuizSettings)
    economy: EconomySettings = Field(default_factory=EconomySettings)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The application Settings instance.

    Raises:
        ConfigurationError: If configuration is missing or invalid.
    """
    try:
        return Settings()
    except ConfigurationError:
        raise
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access."""
    get_settings.cache_clear()


__all__ = [
    "CombatSettings",
    "QuizSettings",
    "EconomySettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
