"""Custom exception hierarchy for the QuizClash encounter engine.

All exceptions inherit from QuizClashError, enabling unified error handling
at the presentation boundary while preserving domain-specific context.

Recoverable combat errors (UnknownWeaponError, HealRejectedError subclasses,
UnrecognizedActionError) are caught by the combat engine and turned into a
re-prompt. PlayerDefeatedFatalError is the only terminal condition that
leaves the core.

Example:
    >>> from quizclash.core.exceptions import UnknownWeaponError
    >>> raise UnknownWeaponError("spoon", owned_weapons=["wooden sword"])
"""

from __future__ import annotations

from typing import Any


class QuizClashError(Exception):
    """Base exception for all QuizClash errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Configuration & Validation Exceptions
# =============================================================================


class ConfigurationError(QuizClashError):
    """Raised when application configuration is invalid."""

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with config key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


class ValidationError(QuizClashError):
    """Raised when caller-supplied data fails validation."""

    def __init__(
        self,
        message: str,
        *,
        field_name: str | None = None,
        invalid_value: Any | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize validation error with field context.

        Args:
            message: Human-readable error description.
            field_name: Name of the field that failed validation.
            invalid_value: The value that failed validation.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if field_name:
            combined_details["field_name"] = field_name
        if invalid_value is not None:
            combined_details["invalid_value"] = invalid_value
        super().__init__(message, details=combined_details)


# =============================================================================
# Game Engine Exceptions
# =============================================================================


class GameEngineError(QuizClashError):
    """Base exception for encounter, quiz and progression errors."""


class InvalidGameStateError(GameEngineError):
    """Raised when a state transition is not allowed from the current state."""

    def __init__(
        self,
        message: str,
        *,
        current_state: str | None = None,
        expected_states: list[str] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize invalid game state error with state context.

        Args:
            message: Human-readable error description.
            current_state: The current state identifier.
            expected_states: States the operation is valid from.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if current_state:
            combined_details["current_state"] = current_state
        if expected_states:
            combined_details["expected_states"] = expected_states
        super().__init__(message, details=combined_details)


class CombatError(GameEngineError):
    """Raised when combat resolution encounters an error."""


class UnknownWeaponError(CombatError):
    """Raised when the player attacks with a weapon they do not own.

    The message enumerates the owned weapons so the caller can display them.
    Recoverable: the round is re-offered and the opponent does not attack.
    """

    def __init__(self, weapon_name: str, *, owned_weapons: list[str]) -> None:
        self.weapon_name = weapon_name
        self.owned_weapons = list(owned_weapons)
        super().__init__(
            f"Invalid weapon: '{weapon_name}'. Available weapons: {', '.join(self.owned_weapons)}",
            details={"weapon": weapon_name},
        )


class HealRejectedError(CombatError):
    """Base class for heal attempts that restore nothing.

    Recoverable and informational: no potion is consumed and the opponent
    does not get a free attack.
    """


class HealCooldownActiveError(HealRejectedError):
    """Raised when a potion is used before the heal cooldown has elapsed."""

    def __init__(self, *, remaining_seconds: float) -> None:
        self.remaining_seconds = remaining_seconds
        super().__init__(
            "Wait before drinking another potion",
            details={"remaining_seconds": round(remaining_seconds, 2)},
        )


class InsufficientPotionsError(HealRejectedError):
    """Raised when the requested potion kind is unavailable."""

    def __init__(self, potion_kind: str) -> None:
        self.potion_kind = potion_kind
        super().__init__("No potions left", details={"potion_kind": potion_kind})


class UnrecognizedActionError(CombatError):
    """Raised when a top-level combat action cannot be parsed.

    Unlike the other recoverable errors, this one costs the player the turn.
    """

    def __init__(self, choice: str) -> None:
        self.choice = choice
        super().__init__("Invalid choice, turn forfeited", details={"choice": choice})


class PlayerDefeatedFatalError(CombatError):
    """Raised when the session is used after the player has fallen for good.

    This is the only terminal condition: the session cannot continue.
    """


class InsufficientFundsError(GameEngineError):
    """Raised when the player cannot afford a purchase."""

    def __init__(self, *, cost: int, balance: int) -> None:
        self.cost = cost
        self.balance = balance
        super().__init__(
            f"You need {cost} coins for this purchase",
            details={"cost": cost, "balance": balance},
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
]
