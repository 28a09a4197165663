"""Scoring of submitted quiz answers."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Sequence

from learnbot.common.schema import QuizItem


@dataclass(frozen=True)
class QuizScore:
    correct: int
    total: int
    percent: int


def score_quiz(items: Sequence[QuizItem], answers: Sequence[str | None]) -> QuizScore:
    """
    Score answers (option letters) against the quiz, position by position.

    Missing answers count as wrong; extra answers are ignored.
    """
    if not items:
        return QuizScore(correct=0, total=0, percent=0)
    correct = sum(
        1 for item, answer in zip(items, answers)
        if answer is not None and answer.strip().upper() == item.correct
    )
    # Round half up, as a percentage display would.
    percent = int(correct * 100 / len(items) + 0.5)
    return QuizScore(correct=correct, total=len(items), percent=percent)


def grade_band(percent: int) -> str:
    if percent >= 80:
        return "high"
    if percent >= 60:
        return "medium"
    return "low"
