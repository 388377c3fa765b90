"""Tests for the injectable dice roller."""

from __future__ import annotations

from typing import Any

import pytest

from quizclash.core.exceptions import ValidationError
from quizclash.engine.dice import DiceRoller
from quizclash.models.player import PlayerCharacter, Weapon


class TestDiceRoller:
    """Tests for the DiceRoller class."""

    def test_same_seed_same_sequence(self) -> None:
        """Test that a seed replays the same rolls."""
        first = DiceRoller(seed=1234)
        second = DiceRoller(seed=1234)

        rolls_a = [first.roll_between(1, 100) for _ in range(20)]
        rolls_b = [second.roll_between(1, 100) for _ in range(20)]

        assert rolls_a == rolls_b

    def test_roll_between_bounds(self, seeded_roller: DiceRoller) -> None:
        for _ in range(200):
            assert 10 <= seeded_roller.roll_between(10, 20) <= 20

    def test_roll_between_single_value(self, seeded_roller: DiceRoller) -> None:
        assert seeded_roller.roll_between(7, 7) == 7

    def test_inverted_range(self, seeded_roller: DiceRoller) -> None:
        with pytest.raises(ValidationError):
            seeded_roller.roll_between(5, 1)

    def test_roll_chance_extremes(self, seeded_roller: DiceRoller) -> None:
        assert not any(seeded_roller.roll_chance(0.0) for _ in range(100))
        assert all(seeded_roller.roll_chance(1.0) for _ in range(100))

    def test_draw_without_replacement(self, seeded_roller: DiceRoller) -> None:
        items = list(range(10))

        drawn = seeded_roller.draw(items, 5)

        assert len(drawn) == 5
        assert len(set(drawn)) == 5
        assert set(drawn) <= set(items)

    def test_draw_too_many(self, seeded_roller: DiceRoller) -> None:
        with pytest.raises(ValidationError):
            seeded_roller.draw([1, 2], 3)

    def test_scripted_source(self, roller: DiceRoller, scripted_random: Any) -> None:
        """Test that an injected source drives every roll."""
        scripted_random.queue_chances(0.1).queue_ints(17).queue_sample(["b"])

        assert roller.roll_chance(0.15) is True
        assert roller.roll_between(10, 20) == 17
        assert roller.choose(["a", "b", "c"]) == "b"


class TestCriticalRate:
    """Statistical checks over a seeded roller."""

    def test_crit_rate_converges(self, settings: Any) -> None:
        """Test the observed critical rate approaches 15%."""
        roller = DiceRoller(seed=42)
        player = PlayerCharacter(name="Felix")
        player.add_weapon(Weapon(name="katana", damage=15))

        trials = 10_000
        crits = 0
        for _ in range(trials):
            outcome = player.resolve_attack("katana", roller, rules=settings.combat)
            if outcome.critical:
                crits += 1
                assert outcome.damage == 37
            else:
                assert outcome.damage == 15

        assert crits / trials == pytest.approx(0.15, abs=0.02)
