"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the QuizClash test suite.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, TypeVar

import pytest


if TYPE_CHECKING:
    from collections.abc import Generator

T = TypeVar("T")


# =============================================================================
# Test doubles
# =============================================================================


class ScriptedRandom:
    """Random source that replays queued results.

    Empty queues fall back to neutral values: ``random()`` returns 0.99 (no
    critical hit, no block), ``randint`` returns the low bound and
    ``sample`` returns the first ``k`` items in order.
    """

    def __init__(self) -> None:
        self.chances: list[float] = []
        self.ints: list[int] = []
        self.samples: list[list[Any]] = []
        self.calls: list[str] = []

    def queue_chances(self, *values: float) -> "ScriptedRandom":
        self.chances.extend(values)
        return self

    def queue_ints(self, *values: int) -> "ScriptedRandom":
        self.ints.extend(values)
        return self

    def queue_sample(self, values: list[Any]) -> "ScriptedRandom":
        self.samples.append(values)
        return self

    def random(self) -> float:
        self.calls.append("random")
        return self.chances.pop(0) if self.chances else 0.99

    def randint(self, a: int, b: int) -> int:
        self.calls.append("randint")
        return self.ints.pop(0) if self.ints else a

    def sample(self, population: Sequence[T], k: int) -> list[T]:
        self.calls.append("sample")
        if self.samples:
            return self.samples.pop(0)
        return list(population[:k])


class ScriptedIntents:
    """IntentSource replaying scripted player decisions.

    Running out of scripted decisions raises IndexError, which surfaces as
    an exception from the encounter.
    """

    def __init__(
        self,
        actions: Sequence[str] = (),
        weapons: Sequence[str] = (),
        potions: Sequence[str] = (),
    ) -> None:
        self.actions = list(actions)
        self.weapons = list(weapons)
        self.potions = list(potions)
        self.views: list[Any] = []

    def choose_action(self, view: Any) -> str:
        self.views.append(view)
        return self.actions.pop(0)

    def choose_weapon(self, view: Any) -> str:
        return self.weapons.pop(0)

    def choose_potion(self, view: Any) -> str:
        return self.potions.pop(0)


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def __call__(self) -> float:
        return self.now


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from quizclash.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def mock_env_vars(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set up mock environment variables for testing.

    Returns:
        Dictionary of environment variables that were set.
    """
    env_vars = {
        "QUIZCLASH_DEBUG": "true",
        "QUIZCLASH_LOG_LEVEL": "DEBUG",
        "QUIZCLASH_COMBAT_CRIT_CHANCE": "0.5",
        "QUIZCLASH_ECONOMY_STARTING_COINS": "50",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


@pytest.fixture
def settings(tmp_path: Any, monkeypatch: pytest.MonkeyPatch) -> Any:
    """Default settings, isolated from any local .env file.

    Returns:
        Settings instance.
    """
    from quizclash.core.config import Settings

    monkeypatch.chdir(tmp_path)
    return Settings()


# =============================================================================
# Engine Fixtures
# =============================================================================


@pytest.fixture
def scripted_random() -> ScriptedRandom:
    """Provide a random source with queued results."""
    return ScriptedRandom()


@pytest.fixture
def roller(scripted_random: ScriptedRandom) -> Any:
    """Create a DiceRoller backed by the scripted random source.

    Returns:
        DiceRoller instance.
    """
    from quizclash.engine.dice import DiceRoller

    return DiceRoller(source=scripted_random)


@pytest.fixture
def seeded_roller() -> Any:
    """Create a DiceRoller with a fixed seed for reproducible tests.

    Returns:
        DiceRoller instance with fixed seed.
    """
    from quizclash.engine.dice import DiceRoller

    return DiceRoller(seed=42)


@pytest.fixture
def clock() -> FakeClock:
    """Provide a controllable clock."""
    return FakeClock()


@pytest.fixture
def intents() -> type[ScriptedIntents]:
    """Provide the scripted IntentSource class."""
    return ScriptedIntents


@pytest.fixture
def progression() -> Any:
    """Create an empty ProgressionTracker."""
    from quizclash.engine.progression import ProgressionTracker

    return ProgressionTracker()


@pytest.fixture
def combat_engine(settings: Any, roller: Any, progression: Any, clock: FakeClock) -> Any:
    """Create a CombatEngine wired to the scripted roller and fake clock.

    Returns:
        CombatEngine instance.
    """
    from quizclash.engine.combat import CombatEngine

    return CombatEngine(settings=settings, roller=roller, progression=progression, clock=clock)


# =============================================================================
# Model Fixtures
# =============================================================================


@pytest.fixture
def player(settings: Any) -> Any:
    """Create a player with the default starting inventory.

    Returns:
        PlayerCharacter instance.
    """
    from quizclash.models.player import create_player

    return create_player("Felix", settings=settings)


@pytest.fixture
def teacher() -> Any:
    """Create a scripted teacher with 100 HP and 1-10 damage.

    Returns:
        Opponent instance.
    """
    from quizclash.models.opponents import create_teacher

    return create_teacher("johanna", "Johanna", 100, 1, 10)


@pytest.fixture
def boss() -> Any:
    """Create a regenerating boss with a short tick interval.

    Returns:
        Opponent instance.
    """
    from quizclash.models.opponents import create_boss

    return create_boss(
        "lars",
        "Lars",
        500,
        20,
        50,
        regen_amount=20,
        regen_interval_seconds=0.02,
    )


@pytest.fixture
def question_bank() -> Any:
    """Create a five-question bank for the scripted teacher.

    Returns:
        QuestionBank instance.
    """
    from quizclash.models.quiz import QuestionBank

    return QuestionBank(
        opponent_id="johanna",
        questions=[
            ("What is 2 + 2?", "4"),
            ("Capital of Sweden?", "Stockholm"),
            ("Chemical symbol for water?", "H2O"),
            ("How many sides does a hexagon have?", "6"),
            ("Which planet is known as the red planet?", "Mars"),
        ],
    )


@pytest.fixture
def correct_answers() -> Any:
    """Answer provider that always answers correctly."""
    return lambda question: question.answer
