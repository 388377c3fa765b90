"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        QuizClashError: Base exception for all application errors.
        ConfigurationError: Configuration-related errors.
        ValidationError: Data validation errors.
        GameEngineError and its combat/economy subclasses.

    Configuration:
        Settings: Main application settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        get_logger: Get a configured logger instance.
        bind_context: Add context to log entries.
        clear_context: Clear logging context.
"""

from __future__ import annotations

from quizclash.core.config import (
    CombatSettings,
    EconomySettings,
    QuizSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)
from quizclash.core.exceptions import (
    CombatError,
    ConfigurationError,
    GameEngineError,
    HealCooldownActiveError,
    HealRejectedError,
    InsufficientFundsError,
    InsufficientPotionsError,
    InvalidGameStateError,
    PlayerDefeatedFatalError,
    QuizClashError,
    UnknownWeaponError,
    UnrecognizedActionError,
    ValidationError,
)
from quizclash.core.logging import (
    bind_context,
    clear_context,
    configure_logging,
    configure_logging_from_settings,
    get_logger,
    unbind_context,
)


__all__ = [
    # Base exception
    "QuizClashError",
    # Configuration exceptions
    "ConfigurationError",
    "ValidationError",
    # Game engine exceptions
    "GameEngineError",
    "InvalidGameStateError",
    "CombatError",
    "UnknownWeaponError",
    "HealRejectedError",
    "HealCooldownActiveError",
    "InsufficientPotionsError",
    "UnrecognizedActionError",
    "PlayerDefeatedFatalError",
    "InsufficientFundsError",
    # Configuration
    "Settings",
    "CombatSettings",
    "QuizSettings",
    "EconomySettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "configure_logging_from_settings",
    "get_logger",
    "bind_context",
    "unbind_context",
    "clear_context",
]
