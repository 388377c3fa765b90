"""Tests for quiz question models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError as PydanticValidationError

from quizclash.models.quiz import QuestionBank, QuizQuestion, normalize_answer


class TestQuizQuestion:
    """Tests for answer comparison."""

    @pytest.mark.parametrize("given", ["Stockholm", " stockholm ", "STOCKHOLM"])
    def test_answer_ignores_case_and_whitespace(self, given: str) -> None:
        question = QuizQuestion(prompt="Capital of Sweden?", answer="Stockholm ")
        assert question.is_correct(given) is True

    def test_wrong_answer(self) -> None:
        question = QuizQuestion(prompt="Capital of Sweden?", answer="Stockholm")
        assert question.is_correct("Oslo") is False

    def test_normalize_answer(self) -> None:
        assert normalize_answer("  H2O\n") == "h2o"


class TestQuestionBank:
    """Tests for question banks."""

    def test_accepts_pairs(self, question_bank: QuestionBank) -> None:
        assert len(question_bank) == 5
        assert question_bank.questions[0].prompt == "What is 2 + 2?"

    def test_too_few_questions(self) -> None:
        with pytest.raises(PydanticValidationError):
            QuestionBank(opponent_id="johanna", questions=[("a?", "a")] * 4)
