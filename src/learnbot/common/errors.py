"""Failure types raised by the gateway and the quiz validator."""
from __future__ import annotations
from typing import Any


class LearnBotError(RuntimeError):
    """Base class for every failure surfaced by the tutor client."""


class TransportFailure(LearnBotError):
    """Network error or non-2xx status from the generation endpoint."""

    def __init__(self, message: str, status_code: int | None = None, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class EmptyGeneration(LearnBotError):
    """2xx response without a candidate or without extractable text."""

    def __init__(self, finish_reason: str, safety_ratings: Any = None) -> None:
        super().__init__(f"No content returned from model. Finish reason: {finish_reason}")
        self.finish_reason = finish_reason
        self.safety_ratings = safety_ratings


class MalformedResponse(LearnBotError):
    """Generated text (or response body) is not valid JSON."""

    def __init__(self, message: str, raw_text: str) -> None:
        super().__init__(message)
        self.raw_text = raw_text


class UnexpectedShape(MalformedResponse):
    """Valid JSON whose top-level value is not a list."""


class NoValidQuestions(LearnBotError):
    """Every quiz item was dropped during validation."""

    def __init__(self, dropped: int) -> None:
        super().__init__(f"No valid questions could be parsed from the model response ({dropped} dropped)")
        self.dropped = dropped
