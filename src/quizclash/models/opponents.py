"""Opponent model.

A single Opponent model covers both variants. The ``kind`` tag says which
one it is, and the optional ``regeneration`` profile is the capability the
combat engine checks before launching a regeneration process. The engine
only needs uniform access to name, health and attack, plus that optional
capability.

Health is shared between the encounter thread and the regeneration worker,
so every health mutation goes through the opponent's lock.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, model_validator

from quizclash.core.logging import get_logger
from quizclash.models.enums import OpponentKind


if TYPE_CHECKING:
    from quizclash.engine.dice import DiceRoller

logger = get_logger(__name__)


class RegenerationProfile(BaseModel):
    """Regeneration capability of an opponent.

    Attributes:
        amount: Health restored per tick.
        interval_seconds: Wall-clock seconds between ticks.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    amount: Annotated[int, Field(ge=1, description="Health per tick")]
    interval_seconds: Annotated[float, Field(gt=0, description="Seconds between ticks")]


class Opponent(BaseModel):
    """An opponent the player can fight.

    Attributes:
        id: Stable identifier used by the progression tracker.
        name: Display name.
        kind: Scripted or regenerating.
        health: Current health, clamped to [0, max_health].
        max_health: Health cap; defaults to the starting health.
        min_damage: Lowest attack damage (inclusive).
        max_damage: Highest attack damage (inclusive).
        regeneration: Regeneration capability, present only on regenerating opponents.
        regenerating: True while a regeneration process is active.
    """

    model_config = ConfigDict(
        extra="forbid",
        validate_assignment=True,
    )

    id: str = Field(min_length=1, frozen=True, description="Opponent identifier")
    name: str = Field(min_length=1, description="Display name")
    kind: OpponentKind = Field(default=OpponentKind.SCRIPTED, frozen=True)
    health: int = Field(ge=0, description="Current health")
    max_health: int = Field(default=0, ge=0, description="Health cap")
    min_damage: int = Field(ge=0, description="Minimum attack damage")
    max_damage: int = Field(ge=0, description="Maximum attack damage")
    regeneration: RegenerationProfile | None = Field(default=None, frozen=True)
    regenerating: bool = Field(default=False, description="Regeneration active")

    _lock: Any = PrivateAttr(default_factory=threading.RLock)

    @model_validator(mode="before")
    @classmethod
    def default_max_health(cls, data: object) -> object:
        if isinstance(data, dict) and not data.get("max_health"):
            data = {**data, "max_health": data.get("health", 0)}
        return data

    @model_validator(mode="after")
    def validate_consistency(self) -> "Opponent":
        if self.min_damage > self.max_damage:
            raise ValueError(
                f"min_damage ({self.min_damage}) exceeds max_damage ({self.max_damage})"
            )
        if self.health > self.max_health:
            raise ValueError(f"health ({self.health}) exceeds max_health ({self.max_health})")
        has_profile = self.regeneration is not None
        if has_profile != (self.kind == OpponentKind.REGENERATING):
            raise ValueError("Only regenerating opponents carry a regeneration profile")
        return self

    @property
    def is_defeated(self) -> bool:
        return self.health <= 0

    @property
    def can_regenerate(self) -> bool:
        return self.regeneration is not None

    @contextmanager
    def locked(self) -> Iterator["Opponent"]:
        """Hold the health lock across a read-decide-write sequence."""
        with self._lock:
            yield self

    def roll_damage(self, roller: "DiceRoller") -> int:
        """Draw this opponent's attack damage uniformly from [min, max]."""
        return roller.roll_between(self.min_damage, self.max_damage, label="enemy_damage")

    def apply_damage(self, amount: int) -> int:
        """Subtract health, clamped at zero.

        Returns:
            Health actually lost.
        """
        if amount <= 0:
            return 0
        with self._lock:
            before = self.health
            self.health = max(0, self.health - amount)
            return before - self.health

    def restore(self, amount: int) -> int:
        """Add health, clamped at max_health. Defeated opponents stay defeated.

        Returns:
            Health actually restored.
        """
        if amount <= 0:
            return 0
        with self._lock:
            if self.is_defeated:
                return 0
            before = self.health
            self.health = min(self.max_health, self.health + amount)
            return self.health - before

    def defeat(self) -> None:
        """Force health to zero."""
        with self._lock:
            self.health = 0
        logger.info("Opponent defeated", opponent=self.id)


def create_teacher(
    opponent_id: str,
    name: str,
    health: int,
    min_damage: int,
    max_damage: int,
) -> Opponent:
    """Create a scripted opponent."""
    return Opponent(
        id=opponent_id,
        name=name,
        kind=OpponentKind.SCRIPTED,
        health=health,
        max_health=health,
        min_damage=min_damage,
        max_damage=max_damage,
    )


def create_boss(
    opponent_id: str,
    name: str,
    health: int,
    min_damage: int,
    max_damage: int,
    *,
    regen_amount: int,
    regen_interval_seconds: float,
) -> Opponent:
    """Create a regenerating opponent."""
    return Opponent(
        id=opponent_id,
        name=name,
        kind=OpponentKind.REGENERATING,
        health=health,
        max_health=health,
        min_damage=min_damage,
        max_damage=max_damage,
        regeneration=RegenerationProfile(
            amount=regen_amount,
            interval_seconds=regen_interval_seconds,
        ),
    )


__all__ = [
    "RegenerationProfile",
    "Opponent",
    "create_teacher",
    "create_boss",
]
