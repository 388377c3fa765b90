"""Pydantic V2 models for the QuizClash engine.

Submodules:
    enums: Enumeration types (OpponentKind, PotionKind, CombatAction, etc.)
    player: PlayerCharacter, Weapon and attack/status read models
    opponents: Opponent with its optional regeneration capability
    quiz: QuizQuestion and QuestionBank
    roster: Default weapons, opponents, loot pools and map layout

Example:
    >>> from quizclash.models import create_player, create_teacher
    >>> player = create_player("Felix")
    >>> johanna = create_teacher("johanna", "Johanna", 100, 1, 10)
"""

from __future__ import annotations

# =============================================================================
# Enumerations
# =============================================================================
from quizclash.models.enums import (
    CombatAction,
    Direction,
    LootKind,
    LootTier,
    OpponentKind,
    PotionKind,
    WeaponGrant,
)

# =============================================================================
# Entities
# =============================================================================
from quizclash.models.player import (
    AttackOutcome,
    PlayerCharacter,
    PlayerStatus,
    Weapon,
    create_player,
    normalize_weapon_name,
)
from quizclash.models.opponents import (
    Opponent,
    RegenerationProfile,
    create_boss,
    create_teacher,
)

# =============================================================================
# Quiz
# =============================================================================
from quizclash.models.quiz import QuestionBank, QuizQuestion, normalize_answer

# =============================================================================
# Roster
# =============================================================================
from quizclash.models.roster import (
    BOSS_ID,
    DEFAULT_LAYOUT,
    LOOT_POOLS,
    WEAPONS,
    LootEntry,
    MapLocation,
    build_opponents,
)


__all__ = [
    # === Enumerations ===
    "CombatAction",
    "Direction",
    "LootKind",
    "LootTier",
    "OpponentKind",
    "PotionKind",
    "WeaponGrant",
    # === Entities ===
    "AttackOutcome",
    "PlayerCharacter",
    "PlayerStatus",
    "Weapon",
    "create_player",
    "normalize_weapon_name",
    "Opponent",
    "RegenerationProfile",
    "create_boss",
    "create_teacher",
    # === Quiz ===
    "QuestionBank",
    "QuizQuestion",
    "normalize_answer",
    # === Roster ===
    "BOSS_ID",
    "DEFAULT_LAYOUT",
    "LOOT_POOLS",
    "WEAPONS",
    "LootEntry",
    "MapLocation",
    "build_opponents",
]
