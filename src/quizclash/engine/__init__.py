"""Game engine module for QuizClash.

This module provides the encounter engine: seedable dice, the boss's
background regeneration, the combat state machine, the quiz gate,
progression flags, lootboxes, the campus map and the session object that
ties them together.

Submodules:
    dice: Injectable, seedable random source
    regeneration: Cancellable periodic health regeneration
    combat: Round-by-round combat resolution
    quiz_gate: Quiz in front of teacher encounters
    progression: Defeated/consumed flags
    loot: Lootbox purchases
    map_grid: Campus map navigation
    session: GameSession context object

Example:
    >>> from quizclash.engine import GameSession
    >>>
    >>> session = GameSession.new("Felix", seed=7)
    >>> result = session.challenge("lars", intents=my_intents)
    >>> if result.is_terminal:
    ...     print("Game over")
"""

from __future__ import annotations

# =============================================================================
# Dice
# =============================================================================
from quizclash.engine.dice import DiceRoller, RandomSource

# =============================================================================
# Regeneration
# =============================================================================
from quizclash.engine.regeneration import (
    RegenerationEvent,
    RegenerationListener,
    RegenerationProcess,
    RegenState,
)

# =============================================================================
# Combat
# =============================================================================
from quizclash.engine.combat import (
    CombatEngine,
    CombatPhase,
    CombatView,
    EncounterOutcome,
    EncounterResult,
    IntentSource,
    RoundRecord,
    parse_action,
)

# =============================================================================
# Quiz
# =============================================================================
from quizclash.engine.quiz_gate import (
    AnswerProvider,
    QuizContext,
    QuizGate,
    QuizOutcome,
    QuizResult,
)

# =============================================================================
# Progression, loot and map
# =============================================================================
from quizclash.engine.progression import ProgressionTracker
from quizclash.engine.loot import LootboxService, LootReward
from quizclash.engine.map_grid import CampusMap

# =============================================================================
# Session
# =============================================================================
from quizclash.engine.session import ChallengeResult, GameSession


__all__ = [
    # === Dice ===
    "DiceRoller",
    "RandomSource",
    # === Regeneration ===
    "RegenerationEvent",
    "RegenerationListener",
    "RegenerationProcess",
    "RegenState",
    # === Combat ===
    "CombatEngine",
    "CombatPhase",
    "CombatView",
    "EncounterOutcome",
    "EncounterResult",
    "IntentSource",
    "RoundRecord",
    "parse_action",
    # === Quiz ===
    "AnswerProvider",
    "QuizContext",
    "QuizGate",
    "QuizOutcome",
    "QuizResult",
    # === Progression, loot and map ===
    "ProgressionTracker",
    "LootboxService",
    "LootReward",
    "CampusMap",
    # === Session ===
    "ChallengeResult",
    "GameSession",
]
