"""Player character model.

The player is owned by a single game session and mutated only through the
operations defined here (attack, heal, block check, totem use, coin award)
or by the engines that call them. Validation runs on every assignment, so
negative coin or potion counts and out-of-range health are rejected by
pydantic rather than silently stored.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Annotated

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from quizclash.core.config import CombatSettings, get_settings
from quizclash.core.constants import STARTING_WEAPON_DAMAGE, STARTING_WEAPON_NAME
from quizclash.core.exceptions import (
    HealCooldownActiveError,
    HealRejectedError,
    InsufficientFundsError,
    InsufficientPotionsError,
    UnknownWeaponError,
    ValidationError,
)
from quizclash.core.logging import get_logger
from quizclash.models.enums import PotionKind, WeaponGrant


if TYPE_CHECKING:
    from quizclash.core.config import Settings
    from quizclash.engine.dice import DiceRoller

logger = get_logger(__name__)


def normalize_weapon_name(name: str) -> str:
    """Normalize a weapon name for inventory lookups.

    Example:
        >>> normalize_weapon_name("  Katana ")
        'katana'
    """
    return name.strip().lower()


class Weapon(BaseModel):
    """A weapon that can be granted to the player.

    Attributes:
        name: Normalized weapon name (lowercase, trimmed).
        damage: Base damage per attack.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1, description="Weapon name")
    damage: Annotated[int, Field(ge=0, description="Base damage")]

    @field_validator("name", mode="after")
    @classmethod
    def normalize_name(cls, value: str) -> str:
        normalized = normalize_weapon_name(value)
        if not normalized:
            raise ValueError("Weapon name must not be blank")
        return normalized


class AttackOutcome(BaseModel):
    """Result of a successful attack roll.

    Attributes:
        weapon: Normalized name of the weapon used.
        base_damage: Inventory damage of the weapon.
        damage: Damage dealt (base, or floored multiple on a critical hit).
        critical: Whether the attack was a critical hit.
    """

    model_config = ConfigDict(frozen=True)

    weapon: str
    base_damage: int
    damage: int
    critical: bool = False


class PlayerStatus(BaseModel):
    """Read-only snapshot of the player for status display."""

    model_config = ConfigDict(frozen=True)

    name: str
    health: int
    max_health: int
    coins: int
    totems: int
    normal_potions: int
    epic_potions: int
    weapons: dict[str, int]


class PlayerCharacter(BaseModel):
    """The player character.

    Attributes:
        name: Player name, immutable after construction.
        health: Current health, 0..max_health.
        max_health: Health cap for healing and totem revival.
        coins: Coin balance.
        totems: Revival totems held.
        normal_potions: Normal potions held.
        epic_potions: Epic potions held.
        last_heal_at: Clock reading of the last successful heal.
        weapons: Normalized weapon name to base damage.

    Example:
        >>> player = PlayerCharacter(name="Elliot")
        >>> sorted(player.weapons)
        ['wooden sword']
    """

    model_config = ConfigDict(
        extra="forbid",
        validate_assignment=True,
    )

    name: str = Field(min_length=1, max_length=100, frozen=True, description="Player name")
    health: int = Field(default=100, ge=0, description="Current health")
    max_health: int = Field(default=100, ge=1, frozen=True, description="Health cap")
    coins: int = Field(default=5, ge=0, description="Coin balance")
    totems: int = Field(default=0, ge=0, description="Revival totems")
    normal_potions: int = Field(default=2, ge=0, description="Normal potions")
    epic_potions: int = Field(default=1, ge=0, description="Epic potions")
    last_heal_at: float | None = Field(default=None, description="Last successful heal time")
    weapons: dict[str, int] = Field(default_factory=dict, description="Weapon inventory")

    @field_validator("weapons", mode="after")
    @classmethod
    def normalize_inventory(cls, value: dict[str, int]) -> dict[str, int]:
        normalized: dict[str, int] = {}
        for name, damage in value.items():
            key = normalize_weapon_name(name)
            if not key:
                raise ValueError("Weapon names must not be blank")
            if key in normalized:
                raise ValueError(f"Duplicate weapon after normalization: {key!r}")
            normalized[key] = damage
        return normalized

    @model_validator(mode="after")
    def validate_health_cap(self) -> "PlayerCharacter":
        if self.health > self.max_health:
            raise ValueError(f"health ({self.health}) exceeds max_health ({self.max_health})")
        return self

    def model_post_init(self, __context: object) -> None:
        if STARTING_WEAPON_NAME not in self.weapons:
            self.add_weapon(
                Weapon(name=STARTING_WEAPON_NAME, damage=STARTING_WEAPON_DAMAGE),
                silent=True,
            )

    # -------------------------------------------------------------------------
    # Read accessors
    # -------------------------------------------------------------------------

    @property
    def is_alive(self) -> bool:
        return self.health > 0

    @property
    def weapon_names(self) -> list[str]:
        return list(self.weapons)

    def potion_count(self, kind: PotionKind) -> int:
        return self.normal_potions if kind == PotionKind.NORMAL else self.epic_potions

    def status(self) -> PlayerStatus:
        """Snapshot the player for display."""
        return PlayerStatus(
            name=self.name,
            health=self.health,
            max_health=self.max_health,
            coins=self.coins,
            totems=self.totems,
            normal_potions=self.normal_potions,
            epic_potions=self.epic_potions,
            weapons=dict(self.weapons),
        )

    # -------------------------------------------------------------------------
    # Inventory
    # -------------------------------------------------------------------------

    def add_weapon(self, weapon: Weapon, *, silent: bool = False) -> WeaponGrant | None:
        """Insert a weapon unless one with the same name is already owned.

        Args:
            weapon: The weapon to grant.
            silent: Suppress the grant signal entirely (used at construction).

        Returns:
            GRANTED or ALREADY_OWNED, or None in silent mode.
        """
        owned = weapon.name in self.weapons
        if not owned:
            self.weapons[weapon.name] = weapon.damage
        if silent:
            return None

        grant = WeaponGrant.ALREADY_OWNED if owned else WeaponGrant.GRANTED
        logger.info("Weapon grant", player=self.name, weapon=weapon.name, grant=grant)
        return grant

    def grant_potion(self, kind: PotionKind) -> None:
        if kind == PotionKind.NORMAL:
            self.normal_potions += 1
        else:
            self.epic_potions += 1

    def grant_totem(self) -> None:
        self.totems += 1

    # -------------------------------------------------------------------------
    # Combat operations
    # -------------------------------------------------------------------------

    def resolve_attack(
        self,
        weapon_name: str,
        roller: "DiceRoller",
        *,
        rules: CombatSettings | None = None,
    ) -> AttackOutcome:
        """Compute the damage of an attack with an owned weapon.

        Args:
            weapon_name: Weapon to attack with; normalized before lookup.
            roller: Random source for the critical hit check.
            rules: Combat settings; defaults to the application settings.

        Returns:
            The attack outcome.

        Raises:
            UnknownWeaponError: If the weapon is not in the inventory.
        """
        rules = rules or get_settings().combat
        key = normalize_weapon_name(weapon_name)
        if key not in self.weapons:
            raise UnknownWeaponError(key, owned_weapons=self.weapon_names)

        base = self.weapons[key]
        if roller.roll_chance(rules.crit_chance, label="critical_hit"):
            damage = math.floor(base * rules.crit_multiplier)
            logger.info("Critical hit", weapon=key, base=base, damage=damage)
            return AttackOutcome(weapon=key, base_damage=base, damage=damage, critical=True)
        return AttackOutcome(weapon=key, base_damage=base, damage=base)

    def resolve_heal(
        self,
        kind: PotionKind | str,
        *,
        now: float,
        rules: CombatSettings | None = None,
        strict: bool = False,
    ) -> int:
        """Consume a potion and report how much health it restores.

        Health itself is not changed here; see :meth:`apply_healing`.
        A rejected heal leaves potions and the cooldown timer untouched.

        Args:
            kind: Potion kind ("normal" or "epic").
            now: Current clock reading in seconds.
            rules: Combat settings; defaults to the application settings.
            strict: Raise instead of returning 0 on rejection.

        Returns:
            The amount to restore, or 0 if the heal was rejected.

        Raises:
            HealCooldownActiveError: In strict mode, if the cooldown is active.
            InsufficientPotionsError: In strict mode, if no potion of that kind
                is available or the kind is unknown.
        """
        rules = rules or get_settings().combat
        try:
            restored = self._consume_potion(kind, now=now, rules=rules)
        except HealRejectedError as exc:
            logger.info("Heal rejected", player=self.name, reason=exc.message, **exc.details)
            if strict:
                raise
            return 0

        logger.info("Potion consumed", player=self.name, kind=str(kind), restores=restored)
        return restored

    def _consume_potion(self, kind: PotionKind | str, *, now: float, rules: CombatSettings) -> int:
        if self.last_heal_at is not None:
            elapsed = now - self.last_heal_at
            if elapsed < rules.heal_cooldown_seconds:
                raise HealCooldownActiveError(
                    remaining_seconds=rules.heal_cooldown_seconds - elapsed
                )

        try:
            potion = PotionKind(str(kind).strip().lower())
        except ValueError:
            raise InsufficientPotionsError(str(kind)) from None

        if self.potion_count(potion) <= 0:
            raise InsufficientPotionsError(potion.value)

        if potion == PotionKind.NORMAL:
            self.normal_potions -= 1
            restored = rules.normal_potion_heal
        else:
            self.epic_potions -= 1
            restored = rules.epic_potion_heal
        self.last_heal_at = now
        return restored

    def apply_healing(self, amount: int) -> int:
        """Add health, clamped to max_health.

        Returns:
            Health actually restored.
        """
        if amount <= 0:
            return 0
        before = self.health
        self.health = min(self.max_health, self.health + amount)
        return self.health - before

    def apply_damage(self, amount: int) -> int:
        """Subtract health, clamped at zero.

        Returns:
            Health actually lost.
        """
        if amount <= 0:
            return 0
        before = self.health
        self.health = max(0, self.health - amount)
        return before - self.health

    def roll_block(self, roller: "DiceRoller", *, rules: CombatSettings | None = None) -> bool:
        """Roll whether the next enemy attack is blocked."""
        rules = rules or get_settings().combat
        return roller.roll_chance(rules.block_chance, label="block")

    def use_totem(self) -> bool:
        """Spend a totem to restore full health.

        Returns:
            True if a totem was used, False if none were held.
        """
        if self.totems <= 0:
            return False
        self.totems -= 1
        self.health = self.max_health
        logger.info("Totem used", player=self.name, totems_left=self.totems)
        return True

    # -------------------------------------------------------------------------
    # Economy
    # -------------------------------------------------------------------------

    def award_coins(self, amount: int) -> int:
        """Credit coins unconditionally.

        Returns:
            The new balance.
        """
        if amount < 0:
            raise ValidationError(
                "Coin awards must be non-negative",
                field_name="amount",
                invalid_value=amount,
            )
        self.coins += amount
        logger.info("Coins awarded", player=self.name, amount=amount, balance=self.coins)
        return self.coins

    def spend_coins(self, amount: int) -> int:
        """Debit coins.

        Raises:
            InsufficientFundsError: If the balance is lower than ``amount``.
        """
        if self.coins < amount:
            raise InsufficientFundsError(cost=amount, balance=self.coins)
        self.coins -= amount
        return self.coins


def create_player(name: str, *, settings: "Settings | None" = None) -> PlayerCharacter:
    """Create a player with the configured starting inventory.

    Args:
        name: Player name.
        settings: Application settings; defaults to the cached settings.

    Returns:
        A new PlayerCharacter holding the starting weapon.
    """
    settings = settings or get_settings()
    economy = settings.economy
    return PlayerCharacter(
        name=name,
        health=settings.combat.max_player_health,
        max_health=settings.combat.max_player_health,
        coins=economy.starting_coins,
        totems=economy.starting_totems,
        normal_potions=economy.starting_normal_potions,
        epic_potions=economy.starting_epic_potions,
    )


__all__ = [
    "normalize_weapon_name",
    "Weapon",
    "AttackOutcome",
    "PlayerStatus",
    "PlayerCharacter",
    "create_player",
]
