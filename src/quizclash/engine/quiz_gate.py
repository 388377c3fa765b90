"""Quiz gate in front of teacher encounters.

A perfect quiz defeats the teacher outright. The first wrong answer ends
the quiz and routes the player into exactly one combat encounter.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Protocol

from quizclash.core.config import Settings, get_settings
from quizclash.core.exceptions import ValidationError
from quizclash.core.logging import get_logger
from quizclash.engine.combat import CombatEngine, EncounterResult, IntentSource
from quizclash.engine.dice import DiceRoller
from quizclash.engine.progression import ProgressionTracker
from quizclash.models.quiz import QuestionBank, QuizQuestion


if TYPE_CHECKING:
    from quizclash.models.opponents import Opponent
    from quizclash.models.player import PlayerCharacter

logger = get_logger(__name__)

AnswerProvider = Callable[[QuizQuestion], str]


class QuizContext(Protocol):
    """Holder of the per-session quiz attempt counter."""

    quiz_attempts: int


class QuizOutcome(StrEnum):
    """How a quiz gate resolved."""

    INSTANT_WIN = "instant_win"
    ROUTED_TO_COMBAT = "routed_to_combat"
    ALREADY_DEFEATED = "already_defeated"


@dataclass
class QuizResult:
    """Result of a quiz gate.

    Attributes:
        outcome: Instant win, routed to combat, or already defeated.
        answered: Questions answered before the quiz ended.
        correct: Questions answered correctly.
        coins_awarded: Coins paid by the gate itself (not by combat).
        combat: The encounter result when the quiz routed to combat.
    """

    outcome: QuizOutcome
    answered: int = 0
    correct: int = 0
    coins_awarded: int = 0
    combat: EncounterResult | None = None


class QuizGate:
    """Runs a quiz and decides between an instant win and combat."""

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        roller: DiceRoller | None = None,
        progression: ProgressionTracker | None = None,
        combat: CombatEngine | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.roller = roller or DiceRoller()
        self.progression = progression or ProgressionTracker()
        self.combat = combat or CombatEngine(
            settings=self.settings,
            roller=self.roller,
            progression=self.progression,
        )

    def resolve(
        self,
        player: "PlayerCharacter",
        opponent: "Opponent",
        bank: QuestionBank,
        answer_provider: AnswerProvider,
        intents: IntentSource,
        *,
        context: QuizContext | None = None,
    ) -> QuizResult:
        """Quiz the player, then either defeat the opponent or fight it.

        Args:
            player: The player character.
            opponent: The teacher behind the gate.
            bank: Questions to draw from.
            answer_provider: Returns the player's answer to a question.
            intents: Player decisions if the quiz routes to combat.
            context: Session holding the quiz attempt counter.

        Returns:
            The quiz result.

        Raises:
            ValidationError: If the bank cannot fill a quiz.
        """
        if self.progression.is_defeated(opponent.id) or opponent.is_defeated:
            logger.info("Quiz skipped, opponent already defeated", opponent_id=opponent.id)
            return QuizResult(outcome=QuizOutcome.ALREADY_DEFEATED)

        count = self.settings.quiz.questions_per_quiz
        if len(bank) < count:
            raise ValidationError(
                "Question bank is too small for a quiz",
                field_name="bank",
                invalid_value=len(bank),
            )

        if context is not None:
            context.quiz_attempts += 1

        questions = self.roller.draw(bank.questions, count, label="quiz_questions")
        logger.info("Quiz started", opponent_id=opponent.id, questions=count)

        result = QuizResult(outcome=QuizOutcome.ROUTED_TO_COMBAT)
        for question in questions:
            answer = answer_provider(question)
            result.answered += 1
            if not question.is_correct(answer):
                logger.info(
                    "Quiz answer wrong",
                    opponent_id=opponent.id,
                    answered=result.answered,
                    correct=result.correct,
                )
                result.combat = self.combat.resolve_encounter(player, opponent, intents)
                return result
            result.correct += 1
            logger.debug("Quiz answer correct", opponent_id=opponent.id, correct=result.correct)

        opponent.defeat()
        self.progression.mark_defeated(opponent.id)
        result.coins_awarded = self.settings.quiz.instant_win_coins
        player.award_coins(result.coins_awarded)
        result.outcome = QuizOutcome.INSTANT_WIN
        logger.info("Quiz passed", opponent_id=opponent.id, coins=result.coins_awarded)
        return result


__all__ = [
    "AnswerProvider",
    "QuizContext",
    "QuizOutcome",
    "QuizResult",
    "QuizGate",
]
