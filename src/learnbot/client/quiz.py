"""Validation of quiz JSON produced in structured-output mode.

Items that fail the shape check are dropped one by one; the batch only
fails when the text is not JSON, is not a list, or nothing survives.
"""
from __future__ import annotations
import json
import logging
from typing import Any

from learnbot.common.errors import MalformedResponse, NoValidQuestions, UnexpectedShape
from learnbot.common.schema import OPTION_LETTERS, QuizBatch, QuizItem

LOGGER = logging.getLogger("learnbot.client.quiz")

QUIZ_RESPONSE_SCHEMA: dict[str, Any] = {
    "type": "ARRAY",
    "description": "A list of 5 multiple-choice questions.",
    "items": {
        "type": "OBJECT",
        "properties": {
            "question": {"type": "STRING", "description": "The question text."},
            "options": {
                "type": "ARRAY",
                "description": "An array of exactly 4 possible answer strings.",
                "items": {"type": "STRING"},
            },
            "correct": {
                "type": "STRING",
                "description": "The letter of the correct option (e.g., 'A', 'B', 'C', 'D').",
            },
            "explanation": {"type": "STRING", "description": "A detailed explanation for the correct answer."},
        },
        "required": ["question", "options", "correct", "explanation"],
    },
}


def _is_valid_item(item: Any) -> bool:
    if not isinstance(item, dict):
        return False
    options = item.get("options")
    return (
        isinstance(item.get("question"), str)
        and isinstance(options, list)
        and len(options) == len(OPTION_LETTERS)
        and all(isinstance(opt, str) for opt in options)
        and isinstance(item.get("correct"), str)
        and item["correct"] in OPTION_LETTERS
        and isinstance(item.get("explanation"), str)
    )


def label_options(options: list[str]) -> tuple[str, str, str, str]:
    """Prefix each option with ``"A) "``..``"D) "`` unless it already has its own label."""
    labelled = []
    for letter, opt in zip(OPTION_LETTERS, options):
        prefix = f"{letter}) "
        labelled.append(opt if opt.startswith(prefix) else prefix + opt)
    return tuple(labelled)  # type: ignore[return-value]


def parse_quiz(raw_text: str) -> QuizBatch:
    """
    Parse and validate a quiz response.

    Args:
        raw_text: Generated text, expected to be a JSON array of questions.

    Returns:
        Retained items in source order, and how many were dropped.

    Raises:
        MalformedResponse: text is not JSON.
        UnexpectedShape: top-level JSON value is not an array.
        NoValidQuestions: no item passed validation.
    """
    try:
        parsed = json.loads(raw_text)
    except (ValueError, TypeError, RecursionError) as e:
        LOGGER.error("Failed to parse quiz JSON: %r", raw_text)
        raise MalformedResponse("Quiz response is not valid JSON", raw_text=raw_text) from e

    if not isinstance(parsed, list):
        LOGGER.error("Quiz response is a %s, expected a list: %r", type(parsed).__name__, raw_text)
        raise UnexpectedShape("Quiz response was not an array of questions", raw_text=raw_text)

    items = [
        QuizItem(
            question=item["question"],
            options=label_options(item["options"]),
            correct=item["correct"],
            explanation=item["explanation"],
        )
        for item in parsed
        if _is_valid_item(item)
    ]
    dropped = len(parsed) - len(items)

    if not items:
        raise NoValidQuestions(dropped)
    if dropped:
        LOGGER.warning("Dropped %d malformed quiz item(s), kept %d", dropped, len(items))
    return QuizBatch(items=tuple(items), dropped=dropped)


def validate_quiz_response(raw_text: str) -> list[QuizItem]:
    return list(parse_quiz(raw_text).items)
