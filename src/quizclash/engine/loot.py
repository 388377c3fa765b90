"""Lootbox purchases.

Opening a box spends coins up front and draws one reward uniformly from the
tier's pool. A weapon the player already owns is a dud: the coins stay
spent and nothing is added.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from quizclash.core.config import Settings, get_settings
from quizclash.core.exceptions import ValidationError
from quizclash.core.logging import get_logger
from quizclash.engine.dice import DiceRoller
from quizclash.models.enums import LootKind, LootTier, PotionKind, WeaponGrant
from quizclash.models.roster import LOOT_POOLS, LootEntry


if TYPE_CHECKING:
    from quizclash.models.player import PlayerCharacter

logger = get_logger(__name__)


@dataclass(frozen=True)
class LootReward:
    """What a lootbox produced.

    Attributes:
        tier: Tier of the opened box.
        kind: Kind of reward drawn.
        item: Weapon name or reward label.
        granted: False when the drawn weapon was already owned.
        cost: Coins spent on the box.
    """

    tier: LootTier
    kind: LootKind
    item: str
    granted: bool
    cost: int


class LootboxService:
    """Sells lootboxes to the player."""

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        roller: DiceRoller | None = None,
        pools: dict[LootTier, tuple[LootEntry, ...]] | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.roller = roller or DiceRoller()
        self.pools = pools or LOOT_POOLS

    def cost(self, tier: LootTier | str) -> int:
        tier = self._parse_tier(tier)
        economy = self.settings.economy
        return economy.epic_lootbox_cost if tier == LootTier.EPIC else economy.normal_lootbox_cost

    def open(self, player: "PlayerCharacter", tier: LootTier | str) -> LootReward:
        """Buy and open one lootbox.

        Args:
            player: The buyer.
            tier: "normal" or "epic".

        Returns:
            The reward drawn.

        Raises:
            ValidationError: If the tier is unknown.
            InsufficientFundsError: If the player cannot afford the box.
                Nothing changes in that case.
        """
        tier = self._parse_tier(tier)
        price = self.cost(tier)
        player.spend_coins(price)

        entry = self.roller.choose(self.pools[tier], label=f"loot_{tier.value}")
        granted = self._apply(player, entry)
        reward = LootReward(
            tier=tier,
            kind=entry.kind,
            item=entry.label,
            granted=granted,
            cost=price,
        )
        logger.info(
            "Lootbox opened",
            player=player.name,
            tier=tier,
            item=reward.item,
            granted=granted,
            balance=player.coins,
        )
        return reward

    def _apply(self, player: "PlayerCharacter", entry: LootEntry) -> bool:
        if entry.kind == LootKind.WEAPON and entry.weapon is not None:
            return player.add_weapon(entry.weapon) == WeaponGrant.GRANTED
        if entry.kind == LootKind.NORMAL_POTION:
            player.grant_potion(PotionKind.NORMAL)
        elif entry.kind == LootKind.EPIC_POTION:
            player.grant_potion(PotionKind.EPIC)
        elif entry.kind == LootKind.TOTEM:
            player.grant_totem()
        return True

    @staticmethod
    def _parse_tier(tier: LootTier | str) -> LootTier:
        try:
            return LootTier(str(tier).strip().lower())
        except ValueError:
            raise ValidationError(
                f"Unknown lootbox tier: {tier}",
                field_name="tier",
                invalid_value=tier,
            ) from None


__all__ = ["LootReward", "LootboxService"]
