"""Random outcome source for encounter resolution.

Every random decision in the engine (critical hits, blocks, enemy damage,
coin bonuses, quiz draws, loot draws) goes through a DiceRoller. The roller
wraps an injectable random source so that tests can seed it or replace it
with a scripted sequence.
"""

from __future__ import annotations

import random
from collections.abc import Sequence
from typing import Protocol, TypeVar

from quizclash.core.exceptions import ValidationError
from quizclash.core.logging import get_logger


logger = get_logger(__name__)

T = TypeVar("T")


class RandomSource(Protocol):
    """The subset of :class:`random.Random` the engine relies on."""

    def random(self) -> float: ...

    def randint(self, a: int, b: int) -> int: ...

    def sample(self, population: Sequence[T], k: int) -> list[T]: ...


class DiceRoller:
    """Draws every random outcome of an encounter.

    Example:
        >>> roller = DiceRoller(seed=7)
        >>> roller.roll_chance(0.15, label="critical")
        False
        >>> 10 <= roller.roll_between(10, 20, label="victory_coins") <= 20
        True
    """

    def __init__(self, *, seed: int | None = None, source: RandomSource | None = None) -> None:
        """Initialize the roller.

        Args:
            seed: Optional seed for a private random.Random instance.
            source: Explicit random source. Takes precedence over ``seed``.
        """
        self._seed = seed
        self._source: RandomSource = source if source is not None else random.Random(seed)
        logger.debug("DiceRoller initialized", seed=seed, scripted=source is not None)

    def roll_chance(self, probability: float, *, label: str = "chance") -> bool:
        """Return True with the given probability.

        Args:
            probability: Success probability in [0, 1].
            label: Name of the check, for logging.

        Returns:
            Whether the check succeeded.
        """
        value = self._source.random()
        success = value < probability
        logger.debug("Chance rolled", label=label, probability=probability, success=success)
        return success

    def roll_between(self, low: int, high: int, *, label: str = "between") -> int:
        """Draw an integer uniformly from ``[low, high]`` inclusive.

        Raises:
            ValidationError: If the range is inverted.
        """
        if low > high:
            raise ValidationError(
                f"Invalid range {low}..{high}",
                field_name=label,
                details={"low": low, "high": high},
            )
        value = self._source.randint(low, high)
        logger.debug("Value rolled", label=label, low=low, high=high, value=value)
        return value

    def draw(self, population: Sequence[T], k: int, *, label: str = "draw") -> list[T]:
        """Draw ``k`` items without replacement, in random order.

        Raises:
            ValidationError: If ``k`` exceeds the population size.
        """
        if k > len(population):
            raise ValidationError(
                f"Cannot draw {k} items from a population of {len(population)}",
                field_name=label,
            )
        picked = self._source.sample(list(population), k)
        logger.debug("Items drawn", label=label, k=k, population=len(population))
        return picked

    def choose(self, population: Sequence[T], *, label: str = "choice") -> T:
        """Pick a single item uniformly."""
        return self.draw(population, 1, label=label)[0]


__all__ = [
    "RandomSource",
    "DiceRoller",
]
