"""Application-wide constants for the QuizClash engine.

Fixed rules and data keys that are not meant to be tuned at runtime.
Tunable numbers live in :mod:`quizclash.core.config`.
"""

from __future__ import annotations

# =============================================================================
# Player
# =============================================================================

STARTING_WEAPON_NAME = "wooden sword"
"""Weapon every player owns from construction."""

STARTING_WEAPON_DAMAGE = 10
"""Base damage of the starting weapon."""

# =============================================================================
# Quiz
# =============================================================================

MIN_QUESTION_BANK_SIZE = 5
"""A question bank must be able to fill a full quiz without replacement."""

# =============================================================================
# Map
# =============================================================================

MAP_SIZE = 5
"""The campus map is a square grid of this many cells per side."""

MAP_START = (2, 2)
"""Starting (row, column) of the player on the map."""

# =============================================================================
# Regeneration
# =============================================================================

REGEN_JOIN_TIMEOUT_SECONDS = 5.0
"""Upper bound on waiting for a regeneration worker to exit after stop."""


__all__ = [
    "STARTING_WEAPON_NAME",
    "STARTING_WEAPON_DAMAGE",
    "MIN_QUESTION_BANK_SIZE",
    "MAP_SIZE",
    "MAP_START",
    "REGEN_JOIN_TIMEOUT_SECONDS",
]
