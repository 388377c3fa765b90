"""Enumeration types for the QuizClash engine."""

from __future__ import annotations

from enum import StrEnum


class OpponentKind(StrEnum):
    """Opponent variants.

    Scripted opponents (teachers) only attack. Regenerating opponents
    (the boss) additionally heal on a timer while an encounter is active.
    """

    SCRIPTED = "scripted"
    REGENERATING = "regenerating"


class PotionKind(StrEnum):
    """Healing potion kinds."""

    NORMAL = "normal"
    EPIC = "epic"


class WeaponGrant(StrEnum):
    """Outcome of adding a weapon to the inventory."""

    GRANTED = "granted"
    ALREADY_OWNED = "already_owned"


class CombatAction(StrEnum):
    """Top-level actions a player can take in a round."""

    ATTACK = "attack"
    HEAL = "heal"
    WAIT = "wait"

    @classmethod
    def aliases(cls) -> dict[str, "CombatAction"]:
        """Menu numbers and names accepted for each action."""
        return {
            "1": cls.ATTACK,
            "attack": cls.ATTACK,
            "2": cls.HEAL,
            "heal": cls.HEAL,
            "3": cls.WAIT,
            "wait": cls.WAIT,
        }


class LootTier(StrEnum):
    """Lootbox tiers."""

    NORMAL = "normal"
    EPIC = "epic"


class LootKind(StrEnum):
    """What a lootbox entry grants."""

    WEAPON = "weapon"
    NORMAL_POTION = "normal_potion"
    EPIC_POTION = "epic_potion"
    TOTEM = "totem"


class Direction(StrEnum):
    """Map movement keys."""

    UP = "w"
    LEFT = "a"
    DOWN = "s"
    RIGHT = "d"

    @property
    def delta(self) -> tuple[int, int]:
        """(row, column) offset of one step in this direction."""
        return {
            Direction.UP: (-1, 0),
            Direction.DOWN: (1, 0),
            Direction.LEFT: (0, -1),
            Direction.RIGHT: (0, 1),
        }[self]


__all__ = [
    "OpponentKind",
    "PotionKind",
    "WeaponGrant",
    "CombatAction",
    "LootTier",
    "LootKind",
    "Direction",
]
