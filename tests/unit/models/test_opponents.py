"""Tests for opponent models and the default roster."""

from __future__ import annotations

from typing import Any

import pytest
from pydantic import ValidationError as PydanticValidationError

from quizclash.models.enums import LootKind, LootTier, OpponentKind
from quizclash.models.opponents import Opponent, RegenerationProfile, create_teacher
from quizclash.models.roster import BOSS_ID, DEFAULT_LAYOUT, LOOT_POOLS, WEAPONS, build_opponents


class TestOpponent:
    """Tests for the Opponent model."""

    def test_teacher_defaults(self, teacher: Opponent) -> None:
        assert teacher.kind == OpponentKind.SCRIPTED
        assert teacher.max_health == 100
        assert teacher.can_regenerate is False
        assert teacher.regenerating is False

    def test_max_health_defaults_to_health(self) -> None:
        opponent = Opponent(id="x", name="X", health=40, min_damage=1, max_damage=2)
        assert opponent.max_health == 40

    def test_inverted_damage_range_rejected(self) -> None:
        with pytest.raises(PydanticValidationError):
            create_teacher("x", "X", 50, 10, 5)

    def test_profile_requires_regenerating_kind(self) -> None:
        with pytest.raises(PydanticValidationError):
            Opponent(
                id="x",
                name="X",
                health=40,
                min_damage=1,
                max_damage=2,
                regeneration=RegenerationProfile(amount=5, interval_seconds=1.0),
            )

    def test_regenerating_kind_requires_profile(self) -> None:
        with pytest.raises(PydanticValidationError):
            Opponent(
                id="x",
                name="X",
                kind=OpponentKind.REGENERATING,
                health=40,
                min_damage=1,
                max_damage=2,
            )

    def test_damage_clamped(self, teacher: Opponent) -> None:
        assert teacher.apply_damage(150) == 100
        assert teacher.health == 0
        assert teacher.is_defeated is True

    def test_restore_clamped_to_max(self, boss: Opponent) -> None:
        boss.apply_damage(10)
        assert boss.restore(20) == 10
        assert boss.health == 500

    def test_restore_never_resurrects(self, boss: Opponent) -> None:
        boss.defeat()
        assert boss.restore(20) == 0
        assert boss.health == 0

    def test_roll_damage_uses_range(self, teacher: Opponent, roller: Any, scripted_random: Any) -> None:
        scripted_random.queue_ints(7)
        assert teacher.roll_damage(roller) == 7

    def test_locked_is_reentrant(self, teacher: Opponent) -> None:
        with teacher.locked():
            teacher.apply_damage(10)
            assert teacher.health == 90


class TestRoster:
    """Tests for the default game data."""

    def test_build_opponents(self) -> None:
        opponents = build_opponents(regen_interval_seconds=17.5)

        assert list(opponents)[-1] == BOSS_ID
        assert len(opponents) == 7
        boss = opponents[BOSS_ID]
        assert boss.health == 500
        assert boss.regeneration is not None
        assert boss.regeneration.amount == 20
        assert opponents["mirrela"].max_damage == 25

    def test_fresh_instances(self) -> None:
        first = build_opponents(regen_interval_seconds=1.0)
        second = build_opponents(regen_interval_seconds=1.0)
        first["johanna"].defeat()

        assert second["johanna"].health == 100

    def test_loot_pools(self) -> None:
        normal = {entry.label for entry in LOOT_POOLS[LootTier.NORMAL]}
        epic = {entry.label for entry in LOOT_POOLS[LootTier.EPIC]}

        assert normal == {"kukri", "iron sword", "normal_potion", "katana", "dagger", "stick"}
        assert epic == {"epic_potion", "battle axe", "totem", "lightsaber", "frying pan"}
        assert all(
            entry.weapon is not None
            for entry in LOOT_POOLS[LootTier.EPIC]
            if entry.kind == LootKind.WEAPON
        )

    def test_weapon_damages(self) -> None:
        assert WEAPONS["frying pan"].damage == 69
        assert WEAPONS["lightsaber"].damage == 50

    def test_layout_cells_unique(self) -> None:
        cells = [location.cell for location in DEFAULT_LAYOUT]
        assert len(cells) == len(set(cells))
