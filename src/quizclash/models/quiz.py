"""Quiz question models.

Question text is content owned by the presentation layer; these models only
carry it and define how an answer is compared.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from quizclash.core.constants import MIN_QUESTION_BANK_SIZE


def normalize_answer(answer: str) -> str:
    """Normalize an answer for comparison (trimmed, case-insensitive)."""
    return answer.strip().casefold()


class QuizQuestion(BaseModel):
    """A single prompt with its expected answer."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    prompt: str = Field(min_length=1)
    answer: str = Field(min_length=1)

    def is_correct(self, given: str) -> bool:
        return normalize_answer(given) == normalize_answer(self.answer)


class QuestionBank(BaseModel):
    """Ordered questions for one opponent.

    Attributes:
        opponent_id: The opponent these questions gate.
        questions: At least enough questions to fill one quiz.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    opponent_id: str = Field(min_length=1)
    questions: tuple[QuizQuestion, ...] = Field(min_length=MIN_QUESTION_BANK_SIZE)

    @field_validator("questions", mode="before")
    @classmethod
    def coerce_pairs(cls, value: object) -> object:
        """Accept ``(prompt, answer)`` pairs as well as QuizQuestion objects."""
        if isinstance(value, (list, tuple)):
            return tuple(
                QuizQuestion(prompt=item[0], answer=item[1])
                if isinstance(item, (list, tuple))
                else item
                for item in value
            )
        return value

    def __len__(self) -> int:
        return len(self.questions)


__all__ = [
    "normalize_answer",
    "QuizQuestion",
    "QuestionBank",
]
