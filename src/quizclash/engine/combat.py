"""Combat resolution for a single encounter.

The CombatEngine drives one encounter round by round, asking the player's
IntentSource for each decision and blocking on it with no timeout. Recovery
rules:

- An unknown weapon, a heal during cooldown, or a missing potion re-offers
  the round. The opponent gets no free attack.
- An unrecognized top-level action forfeits the player's turn. The opponent
  still attacks.
- Player death with a totem revives to full health and the fight goes on;
  without one the encounter ends in a terminal loss.

For regenerating opponents the engine owns a RegenerationProcess for the
lifetime of the encounter and stops it on every exit path.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Protocol
from uuid import uuid4

from quizclash.core.config import Settings, get_settings
from quizclash.core.exceptions import (
    HealRejectedError,
    UnknownWeaponError,
    UnrecognizedActionError,
)
from quizclash.core.logging import bind_context, get_logger, unbind_context
from quizclash.engine.dice import DiceRoller
from quizclash.engine.progression import ProgressionTracker
from quizclash.engine.regeneration import RegenerationListener, RegenerationProcess
from quizclash.models.enums import CombatAction


if TYPE_CHECKING:
    from quizclash.models.opponents import Opponent
    from quizclash.models.player import PlayerCharacter, PlayerStatus

logger = get_logger(__name__)


# =============================================================================
# States and results
# =============================================================================


class CombatPhase(StrEnum):
    """Phases of the per-round combat state machine."""

    AWAITING_PLAYER_ACTION = "awaiting_player_action"
    ACTION_RESOLVED = "action_resolved"
    OPPONENT_DEFEATED = "opponent_defeated"
    AWAITING_ENEMY_ATTACK = "awaiting_enemy_attack"
    ROUND_COMPLETE = "round_complete"
    PLAYER_DEFEATED = "player_defeated"
    REVIVED = "revived"
    GAME_OVER = "game_over"


class EncounterOutcome(StrEnum):
    """How an encounter ended."""

    VICTORY = "victory"
    LOSS = "loss"
    ALREADY_DEFEATED = "already_defeated"


@dataclass(frozen=True)
class CombatView:
    """Snapshot handed to the intent source before each decision.

    Attributes:
        round_number: Current round, starting at 1.
        phase: Current combat phase.
        player: Player status snapshot.
        opponent_id: Opponent identifier.
        opponent_name: Opponent display name.
        opponent_health: Opponent health at snapshot time.
        opponent_max_health: Opponent health cap.
        notice: Message from a rejected attempt this round, if any.
    """

    round_number: int
    phase: CombatPhase
    player: "PlayerStatus"
    opponent_id: str
    opponent_name: str
    opponent_health: int
    opponent_max_health: int
    notice: str | None = None


class IntentSource(Protocol):
    """Supplies the player's decisions. Every call may block indefinitely."""

    def choose_action(self, view: CombatView) -> str: ...

    def choose_weapon(self, view: CombatView) -> str: ...

    def choose_potion(self, view: CombatView) -> str: ...


@dataclass
class RoundRecord:
    """What happened in one completed round.

    Attributes:
        round_number: The round this record describes.
        action: Action taken, or None if the turn was forfeited.
        weapon: Weapon used for an attack.
        damage_dealt: Health removed from the opponent.
        critical: Whether the attack was a critical hit.
        healed: Health restored to the player.
        forfeited: The player entered an unrecognized action.
        rejections: Messages from re-prompted attempts within the round.
        enemy_damage: Damage rolled by the opponent, if it attacked.
        blocked: Whether the player blocked the attack.
        revived: Whether a totem was used this round.
        phase: Phase the round ended in.
    """

    round_number: int
    action: CombatAction | None = None
    weapon: str | None = None
    damage_dealt: int = 0
    critical: bool = False
    healed: int = 0
    forfeited: bool = False
    rejections: list[str] = field(default_factory=list)
    enemy_damage: int | None = None
    blocked: bool = False
    revived: bool = False
    phase: CombatPhase = CombatPhase.AWAITING_PLAYER_ACTION


@dataclass
class EncounterResult:
    """Result of resolving an encounter.

    Attributes:
        outcome: Victory, loss, or already defeated.
        opponent_id: The opponent fought.
        rounds: Rounds completed.
        coins_awarded: Victory bonus paid to the player.
        revives_used: Totems spent during the encounter.
        log: Per-round records.
    """

    outcome: EncounterOutcome
    opponent_id: str
    rounds: int = 0
    coins_awarded: int = 0
    revives_used: int = 0
    log: list[RoundRecord] = field(default_factory=list)

    @property
    def is_victory(self) -> bool:
        return self.outcome == EncounterOutcome.VICTORY

    @property
    def is_terminal(self) -> bool:
        """A loss ends the session; nothing else does."""
        return self.outcome == EncounterOutcome.LOSS


def parse_action(choice: str) -> CombatAction:
    """Map a menu entry to a combat action.

    Raises:
        UnrecognizedActionError: If the choice matches no action.
    """
    action = CombatAction.aliases().get(choice.strip().lower())
    if action is None:
        raise UnrecognizedActionError(choice)
    return action


# =============================================================================
# Engine
# =============================================================================


class CombatEngine:
    """Resolves encounters between the player and one opponent.

    Attributes:
        settings: Application settings (combat rules).
        roller: Random source for every roll.
        progression: Tracker updated on victory.
    """

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        roller: DiceRoller | None = None,
        progression: ProgressionTracker | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the engine.

        Args:
            settings: Application settings; defaults to the cached settings.
            roller: Random source; defaults to an unseeded roller.
            progression: Progression tracker; defaults to a fresh tracker.
            clock: Monotonic clock used for the heal cooldown.
        """
        self.settings = settings or get_settings()
        self.roller = roller or DiceRoller()
        self.progression = progression or ProgressionTracker()
        self._clock = clock
        self._round_callbacks: list[Callable[[RoundRecord], None]] = []
        self._regen_listeners: list[RegenerationListener] = []

    def add_round_callback(self, callback: Callable[[RoundRecord], None]) -> None:
        """Register a callback invoked after every completed round."""
        self._round_callbacks.append(callback)

    def add_regeneration_listener(self, listener: RegenerationListener) -> None:
        """Register a listener attached to every regeneration process."""
        self._regen_listeners.append(listener)

    def resolve_encounter(
        self,
        player: "PlayerCharacter",
        opponent: "Opponent",
        intents: IntentSource,
    ) -> EncounterResult:
        """Fight until the opponent or the player falls.

        Args:
            player: The player character.
            opponent: The opponent to fight.
            intents: Source of player decisions.

        Returns:
            The encounter result. An already defeated opponent returns
            immediately with ALREADY_DEFEATED and nothing changes.
        """
        if self.progression.is_defeated(opponent.id) or opponent.is_defeated:
            logger.info("Encounter skipped, opponent already defeated", opponent_id=opponent.id)
            return EncounterResult(outcome=EncounterOutcome.ALREADY_DEFEATED, opponent_id=opponent.id)

        bind_context(encounter_id=uuid4().hex[:12], opponent_id=opponent.id)
        regen: RegenerationProcess | None = None
        if opponent.can_regenerate:
            regen = RegenerationProcess(opponent, listeners=self._regen_listeners)

        logger.info(
            "Encounter started",
            player=player.name,
            opponent=opponent.name,
            opponent_health=opponent.health,
            player_health=player.health,
        )
        try:
            if regen is not None:
                regen.start()
            return self._run(player, opponent, intents, regen)
        finally:
            if regen is not None:
                regen.stop()
            unbind_context("encounter_id", "opponent_id")

    # -------------------------------------------------------------------------
    # Round loop
    # -------------------------------------------------------------------------

    def _run(
        self,
        player: "PlayerCharacter",
        opponent: "Opponent",
        intents: IntentSource,
        regen: RegenerationProcess | None,
    ) -> EncounterResult:
        rules = self.settings.combat
        result = EncounterResult(outcome=EncounterOutcome.LOSS, opponent_id=opponent.id)
        round_number = 0

        while True:
            round_number += 1
            record = self._player_turn(player, opponent, intents, round_number)

            with opponent.locked():
                defeated = opponent.is_defeated

            if defeated:
                # Stop after releasing the lock so a waiting tick can observe defeat
                if regen is not None:
                    regen.stop()
                coins = self.roller.roll_between(
                    rules.victory_coins_min,
                    rules.victory_coins_max,
                    label="victory_coins",
                )
                player.award_coins(coins)
                self.progression.mark_defeated(opponent.id)
                self._transition(record, CombatPhase.OPPONENT_DEFEATED)
                result.outcome = EncounterOutcome.VICTORY
                result.coins_awarded = coins
                self._finish_round(result, record)
                logger.info("Encounter won", rounds=round_number, coins=coins)
                return result

            self._transition(record, CombatPhase.AWAITING_ENEMY_ATTACK)
            self._enemy_turn(player, opponent, record)

            if player.health <= 0:
                self._transition(record, CombatPhase.PLAYER_DEFEATED)
                if player.use_totem():
                    record.revived = True
                    result.revives_used += 1
                    self._transition(record, CombatPhase.REVIVED)
                    self._finish_round(result, record)
                    continue

                self._transition(record, CombatPhase.GAME_OVER)
                result.outcome = EncounterOutcome.LOSS
                self._finish_round(result, record)
                logger.warning("Encounter lost", rounds=round_number, opponent_health=opponent.health)
                return result

            self._transition(record, CombatPhase.ROUND_COMPLETE)
            self._finish_round(result, record)

    def _player_turn(
        self,
        player: "PlayerCharacter",
        opponent: "Opponent",
        intents: IntentSource,
        round_number: int,
    ) -> RoundRecord:
        rules = self.settings.combat
        record = RoundRecord(round_number=round_number)
        notice: str | None = None

        while True:
            view = self._view(player, opponent, round_number, notice)
            choice = intents.choose_action(view)
            try:
                action = parse_action(choice)
            except UnrecognizedActionError as exc:
                record.forfeited = True
                record.rejections.append(exc.message)
                logger.info("Turn forfeited", choice=choice)
                self._transition(record, CombatPhase.ACTION_RESOLVED)
                return record

            if action == CombatAction.ATTACK:
                weapon = intents.choose_weapon(view)
                try:
                    attack = player.resolve_attack(weapon, self.roller, rules=rules)
                except UnknownWeaponError as exc:
                    notice = exc.message
                    record.rejections.append(exc.message)
                    logger.info("Attack rejected", weapon=exc.weapon_name)
                    continue
                with opponent.locked():
                    dealt = opponent.apply_damage(attack.damage)
                record.action = action
                record.weapon = attack.weapon
                record.damage_dealt = dealt
                record.critical = attack.critical
                logger.info(
                    "Player attacked",
                    weapon=attack.weapon,
                    damage=attack.damage,
                    critical=attack.critical,
                    opponent_health=opponent.health,
                )

            elif action == CombatAction.HEAL:
                kind = intents.choose_potion(view)
                try:
                    amount = player.resolve_heal(kind, now=self._clock(), rules=rules, strict=True)
                except HealRejectedError as exc:
                    notice = exc.message
                    record.rejections.append(exc.message)
                    continue
                record.action = action
                record.healed = player.apply_healing(amount)
                logger.info("Player healed", healed=record.healed, health=player.health)

            else:
                record.action = action
                logger.info("Player waited")

            self._transition(record, CombatPhase.ACTION_RESOLVED)
            return record

    def _enemy_turn(
        self,
        player: "PlayerCharacter",
        opponent: "Opponent",
        record: RoundRecord,
    ) -> None:
        damage = opponent.roll_damage(self.roller)
        record.enemy_damage = damage
        if player.roll_block(self.roller, rules=self.settings.combat):
            record.blocked = True
            logger.info("Attack blocked", damage=damage)
            return
        player.apply_damage(damage)
        logger.info("Opponent attacked", damage=damage, player_health=player.health)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _view(
        self,
        player: "PlayerCharacter",
        opponent: "Opponent",
        round_number: int,
        notice: str | None,
    ) -> CombatView:
        return CombatView(
            round_number=round_number,
            phase=CombatPhase.AWAITING_PLAYER_ACTION,
            player=player.status(),
            opponent_id=opponent.id,
            opponent_name=opponent.name,
            opponent_health=opponent.health,
            opponent_max_health=opponent.max_health,
            notice=notice,
        )

    def _transition(self, record: RoundRecord, phase: CombatPhase) -> None:
        logger.debug("Combat phase", round=record.round_number, from_phase=record.phase, to_phase=phase)
        record.phase = phase

    def _finish_round(self, result: EncounterResult, record: RoundRecord) -> None:
        result.rounds = record.round_number
        result.log.append(record)
        for callback in self._round_callbacks:
            callback(record)


__all__ = [
    "CombatPhase",
    "EncounterOutcome",
    "CombatView",
    "IntentSource",
    "RoundRecord",
    "EncounterResult",
    "parse_action",
    "CombatEngine",
]
