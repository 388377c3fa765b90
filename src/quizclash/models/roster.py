"""Default game data: weapons, opponents, loot pools and the map layout.

This is the roster the stock game ships with. Sessions build fresh
opponent instances from it, so defeating an opponent in one session never
leaks into another.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from quizclash.models.enums import LootKind, LootTier
from quizclash.models.opponents import Opponent, create_boss, create_teacher
from quizclash.models.player import Weapon


# =============================================================================
# Weapons
# =============================================================================

WEAPONS: dict[str, Weapon] = {
    weapon.name: weapon
    for weapon in (
        Weapon(name="pie", damage=3),
        Weapon(name="wooden sword", damage=10),
        Weapon(name="stick", damage=10),
        Weapon(name="katana", damage=15),
        Weapon(name="dagger", damage=17),
        Weapon(name="iron sword", damage=20),
        Weapon(name="kukri", damage=25),
        Weapon(name="battle axe", damage=35),
        Weapon(name="lightsaber", damage=50),
        Weapon(name="frying pan", damage=69),
    )
}


# =============================================================================
# Loot pools
# =============================================================================


class LootEntry(BaseModel):
    """One possible lootbox reward."""

    model_config = ConfigDict(frozen=True)

    kind: LootKind
    weapon: Weapon | None = None

    @property
    def label(self) -> str:
        return self.weapon.name if self.weapon is not None else self.kind.value


def _weapon_entry(name: str) -> LootEntry:
    return LootEntry(kind=LootKind.WEAPON, weapon=WEAPONS[name])


LOOT_POOLS: dict[LootTier, tuple[LootEntry, ...]] = {
    LootTier.NORMAL: (
        _weapon_entry("kukri"),
        _weapon_entry("iron sword"),
        LootEntry(kind=LootKind.NORMAL_POTION),
        _weapon_entry("katana"),
        _weapon_entry("dagger"),
        _weapon_entry("stick"),
    ),
    LootTier.EPIC: (
        LootEntry(kind=LootKind.EPIC_POTION),
        _weapon_entry("battle axe"),
        LootEntry(kind=LootKind.TOTEM),
        _weapon_entry("lightsaber"),
        _weapon_entry("frying pan"),
    ),
}


# =============================================================================
# Opponents
# =============================================================================

BOSS_ID = "lars"

# (id, name, health, min_damage, max_damage)
TEACHERS: tuple[tuple[str, str, int, int, int], ...] = (
    ("johanna", "Johanna", 100, 1, 10),
    ("ronja", "Ronja", 110, 5, 15),
    ("henrik", "Henrik", 125, 8, 18),
    ("victor", "Victor", 135, 1, 13),
    ("david", "David", 150, 9, 20),
    ("mirrela", "Mirrela", 200, 11, 25),
)


def build_opponents(*, regen_interval_seconds: float) -> dict[str, Opponent]:
    """Create fresh opponent instances for a new session.

    Args:
        regen_interval_seconds: Period of the boss's regeneration.

    Returns:
        Opponents keyed by id, teachers first and the boss last.
    """
    opponents = {
        opponent_id: create_teacher(opponent_id, name, health, low, high)
        for opponent_id, name, health, low, high in TEACHERS
    }
    opponents[BOSS_ID] = create_boss(
        BOSS_ID,
        "Lars",
        500,
        20,
        50,
        regen_amount=20,
        regen_interval_seconds=regen_interval_seconds,
    )
    return opponents


# =============================================================================
# Map layout
# =============================================================================


class MapLocation(BaseModel):
    """A map cell that fires a one-shot encounter.

    Attributes:
        id: Location identifier used by the progression tracker.
        cell: (row, column) on the map grid.
        opponent_id: The opponent met at this location.
        marker: Single-letter marker a display can show for the location.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    cell: tuple[int, int]
    opponent_id: str
    marker: str


DEFAULT_LAYOUT: tuple[MapLocation, ...] = (
    MapLocation(id="room_johanna", cell=(0, 0), opponent_id="johanna", marker="J"),
    MapLocation(id="room_ronja", cell=(0, 4), opponent_id="ronja", marker="R"),
    MapLocation(id="room_henrik", cell=(2, 0), opponent_id="henrik", marker="H"),
    MapLocation(id="room_victor", cell=(2, 4), opponent_id="victor", marker="V"),
    MapLocation(id="room_david", cell=(4, 0), opponent_id="david", marker="D"),
    MapLocation(id="room_mirrela", cell=(4, 4), opponent_id="mirrela", marker="M"),
    MapLocation(id="room_lars", cell=(3, 3), opponent_id=BOSS_ID, marker="L"),
)


__all__ = [
    "WEAPONS",
    "LootEntry",
    "LOOT_POOLS",
    "BOSS_ID",
    "TEACHERS",
    "build_opponents",
    "MapLocation",
    "DEFAULT_LAYOUT",
]
