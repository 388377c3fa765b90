"""Game session: the context object for one playthrough.

The session owns the player, the opponent roster, progression, the map and
the engines, and is passed explicitly wherever session-wide state is
needed. Once an encounter ends in a terminal loss the session is over and
every further mutating call raises PlayerDefeatedFatalError.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass

from quizclash.core.config import Settings, get_settings
from quizclash.core.exceptions import PlayerDefeatedFatalError, ValidationError
from quizclash.core.logging import get_logger
from quizclash.engine.combat import CombatEngine, EncounterResult, IntentSource
from quizclash.engine.dice import DiceRoller
from quizclash.engine.loot import LootboxService, LootReward
from quizclash.engine.map_grid import CampusMap
from quizclash.engine.progression import ProgressionTracker
from quizclash.engine.quiz_gate import AnswerProvider, QuizGate, QuizOutcome, QuizResult
from quizclash.models.enums import Direction, LootTier
from quizclash.models.opponents import Opponent
from quizclash.models.player import PlayerCharacter, PlayerStatus, create_player
from quizclash.models.quiz import QuestionBank
from quizclash.models.roster import DEFAULT_LAYOUT, MapLocation, build_opponents


logger = get_logger(__name__)


@dataclass
class ChallengeResult:
    """Result of challenging one opponent.

    Attributes:
        opponent_id: The opponent challenged.
        skipped: The opponent was already defeated; nothing ran.
        quiz: Quiz gate result, for opponents with a question bank.
        combat: Encounter result, if combat ran.
    """

    opponent_id: str
    skipped: bool = False
    quiz: QuizResult | None = None
    combat: EncounterResult | None = None

    @property
    def victory(self) -> bool:
        if self.quiz is not None and self.quiz.outcome == QuizOutcome.INSTANT_WIN:
            return True
        return self.combat is not None and self.combat.is_victory

    @property
    def is_terminal(self) -> bool:
        return self.combat is not None and self.combat.is_terminal


class GameSession:
    """State and services for one playthrough.

    Attributes:
        settings: Application settings.
        roller: Shared random source.
        player: The player character.
        opponents: Opponents keyed by id.
        question_banks: Question banks keyed by opponent id.
        progression: Defeated and consumed flags.
        map: Campus map.
        combat: Combat engine.
        quiz_gate: Quiz gate.
        loot: Lootbox service.
        quiz_attempts: Number of quizzes started this session.
        game_over: Set after a terminal loss.
    """

    def __init__(
        self,
        *,
        player: PlayerCharacter,
        opponents: Mapping[str, Opponent],
        question_banks: Mapping[str, QuestionBank] | None = None,
        settings: Settings | None = None,
        roller: DiceRoller | None = None,
        clock: Callable[[], float] = time.monotonic,
        layout: tuple[MapLocation, ...] = DEFAULT_LAYOUT,
    ) -> None:
        self.settings = settings or get_settings()
        self.roller = roller or DiceRoller()
        self.clock = clock
        self.player = player
        self.opponents: dict[str, Opponent] = dict(opponents)
        self.question_banks: dict[str, QuestionBank] = dict(question_banks or {})
        for opponent_id, bank in self.question_banks.items():
            if bank.opponent_id != opponent_id:
                raise ValidationError(
                    f"Question bank for {bank.opponent_id} registered under {opponent_id}",
                    field_name="question_banks",
                    invalid_value=opponent_id,
                )

        self.progression = ProgressionTracker()
        self.map = CampusMap(self.progression, layout)
        self.combat = CombatEngine(
            settings=self.settings,
            roller=self.roller,
            progression=self.progression,
            clock=clock,
        )
        self.quiz_gate = QuizGate(
            settings=self.settings,
            roller=self.roller,
            progression=self.progression,
            combat=self.combat,
        )
        self.loot = LootboxService(settings=self.settings, roller=self.roller)
        self.quiz_attempts = 0
        self.game_over = False

    @classmethod
    def new(
        cls,
        player_name: str,
        *,
        settings: Settings | None = None,
        seed: int | None = None,
        question_banks: Mapping[str, QuestionBank] | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> "GameSession":
        """Start a session with the default roster and map.

        Args:
            player_name: Name of the player character.
            settings: Application settings; defaults to the cached settings.
            seed: Seed for reproducible rolls.
            question_banks: Question banks keyed by opponent id.
            clock: Monotonic clock used for the heal cooldown.

        Returns:
            A fresh session.
        """
        settings = settings or get_settings()
        session = cls(
            player=create_player(player_name, settings=settings),
            opponents=build_opponents(regen_interval_seconds=settings.combat.regen_interval_seconds),
            question_banks=question_banks,
            settings=settings,
            roller=DiceRoller(seed=seed),
            clock=clock,
        )
        logger.info("Session started", player=player_name, seed=seed)
        return session

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def status(self) -> PlayerStatus:
        return self.player.status()

    def is_defeated(self, opponent_id: str) -> bool:
        return self.progression.is_defeated(opponent_id)

    def is_consumed(self, location_id: str) -> bool:
        return self.progression.is_consumed(location_id)

    def opponent(self, opponent_id: str) -> Opponent:
        """Look up an opponent.

        Raises:
            ValidationError: If the id is unknown.
        """
        try:
            return self.opponents[opponent_id]
        except KeyError:
            raise ValidationError(
                f"Unknown opponent: {opponent_id}",
                field_name="opponent_id",
                invalid_value=opponent_id,
            ) from None

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def mark_consumed(self, location_id: str) -> bool:
        self._ensure_active()
        return self.progression.mark_consumed(location_id)

    def challenge(
        self,
        opponent_id: str,
        *,
        answers: AnswerProvider | None = None,
        intents: IntentSource,
    ) -> ChallengeResult:
        """Challenge an opponent through its quiz gate, or directly.

        Args:
            opponent_id: The opponent to challenge.
            answers: Answer provider, required for opponents with a bank.
            intents: Player decisions during combat.

        Returns:
            The challenge result.

        Raises:
            PlayerDefeatedFatalError: If the session is already over.
            ValidationError: If the opponent is unknown, or has a bank and
                no answer provider was given.
        """
        self._ensure_active()
        opponent = self.opponent(opponent_id)
        if self.progression.is_defeated(opponent_id):
            logger.info("Challenge skipped", opponent_id=opponent_id)
            return ChallengeResult(opponent_id=opponent_id, skipped=True)

        result = ChallengeResult(opponent_id=opponent_id)
        bank = self.question_banks.get(opponent_id)
        self._require_answers(opponent_id, answers)
        if bank is not None and answers is not None:
            result.quiz = self.quiz_gate.resolve(
                self.player, opponent, bank, answers, intents, context=self
            )
            result.combat = result.quiz.combat
        else:
            result.combat = self.combat.resolve_encounter(self.player, opponent, intents)

        if result.is_terminal:
            self.game_over = True
            logger.warning("Game over", opponent_id=opponent_id)
        return result

    def visit(
        self,
        location_id: str,
        *,
        answers: AnswerProvider | None = None,
        intents: IntentSource,
    ) -> ChallengeResult | None:
        """Fire the one-shot encounter at a map location.

        The location is consumed once the encounter resolves, won or lost.
        An exception from the encounter leaves it open.

        Returns:
            The challenge result, or None if the location was consumed.
        """
        self._ensure_active()
        location = self.map.location(location_id)
        if location is None:
            raise ValidationError(
                f"Unknown location: {location_id}",
                field_name="location_id",
                invalid_value=location_id,
            )
        if self.progression.is_consumed(location_id):
            return None
        result = self.challenge(location.opponent_id, answers=answers, intents=intents)
        self.progression.mark_consumed(location_id)
        return result

    def move(self, direction: Direction | str) -> MapLocation | None:
        """Move on the campus map and return an unconsumed location reached."""
        self._ensure_active()
        return self.map.move(direction)

    def open_lootbox(self, tier: LootTier | str) -> LootReward:
        self._ensure_active()
        return self.loot.open(self.player, tier)

    def _require_answers(self, opponent_id: str, answers: AnswerProvider | None) -> None:
        if answers is not None or opponent_id not in self.question_banks:
            return
        if not self.progression.is_defeated(opponent_id):
            raise ValidationError(
                "An answer provider is required for a quiz",
                field_name="answers",
            )

    def _ensure_active(self) -> None:
        if self.game_over:
            raise PlayerDefeatedFatalError("The game is over")


__all__ = ["ChallengeResult", "GameSession"]
