"""Dataclasses for generation requests, quiz items and chat turns."""
from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Literal

SAFETY_CATEGORIES = (
    "HARM_CATEGORY_HARASSMENT",
    "HARM_CATEGORY_HATE_SPEECH",
    "HARM_CATEGORY_SEXUALLY_EXPLICIT",
    "HARM_CATEGORY_DANGEROUS_CONTENT",
)
SAFETY_THRESHOLD = "BLOCK_MEDIUM_AND_ABOVE"

MIME_TYPES = {"plain": "text/plain", "json": "application/json"}

OPTION_LETTERS = ("A", "B", "C", "D")


@dataclass(frozen=True)
class GenerationOptions:
    """Sampling parameters for one generateContent call.

    ``generation_config`` is merged on top of the derived config, key by key.
    """
    max_output_tokens: int = 2048
    temperature: float = 0.7
    top_p: float = 0.95
    top_k: int = 40
    response_mime_type: Literal["plain", "json"] | None = None
    response_schema: dict[str, Any] | None = None
    generation_config: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.response_mime_type is not None and self.response_mime_type not in MIME_TYPES:
            raise ValueError(f"unknown response_mime_type: {self.response_mime_type!r}")
        # Ranges are checked on the merged config so overrides cannot bypass them.
        config = self.to_generation_config()
        if not config["maxOutputTokens"] > 0:
            raise ValueError("maxOutputTokens must be positive")
        if not 0.0 <= config["temperature"] <= 1.0:
            raise ValueError("temperature must be in [0, 1]")
        if not 0.0 <= config["topP"] <= 1.0:
            raise ValueError("topP must be in [0, 1]")
        if not config["topK"] > 0:
            raise ValueError("topK must be positive")

    def to_generation_config(self) -> dict[str, Any]:
        config: dict[str, Any] = {
            "maxOutputTokens": self.max_output_tokens,
            "temperature": self.temperature,
            "topP": self.top_p,
            "topK": self.top_k,
        }
        if self.response_mime_type is not None:
            config["responseMimeType"] = MIME_TYPES[self.response_mime_type]
        if self.response_schema is not None:
            config["responseSchema"] = self.response_schema
        config.update(self.generation_config)
        return config


@dataclass(frozen=True)
class GenerationRequest:
    """A prompt plus its options, rendered into the request body."""
    prompt: str
    options: GenerationOptions = field(default_factory=GenerationOptions)

    def to_payload(self) -> dict[str, Any]:
        return {
            "contents": [{"parts": [{"text": self.prompt}]}],
            "generationConfig": self.options.to_generation_config(),
            "safetySettings": [
                {"category": category, "threshold": SAFETY_THRESHOLD}
                for category in SAFETY_CATEGORIES
            ],
        }


@dataclass(frozen=True)
class QuizItem:
    """One validated multiple-choice question with A-D labelled options."""
    question: str
    options: tuple[str, str, str, str]
    correct: str
    explanation: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "question": self.question,
            "options": list(self.options),
            "correct": self.correct,
            "explanation": self.explanation,
        }


@dataclass(frozen=True)
class QuizBatch:
    """Validated items plus the number of source items that were dropped."""
    items: tuple[QuizItem, ...]
    dropped: int = 0


@dataclass(frozen=True)
class ChatTurn:
    id: str
    role: Literal["user", "assistant"]
    content: str
    timestamp: datetime

    @classmethod
    def user(cls, content: str, turn_id: int | str) -> "ChatTurn":
        return cls(id=str(turn_id), role="user", content=content, timestamp=datetime.now(timezone.utc))

    @classmethod
    def assistant(cls, content: str, turn_id: int | str) -> "ChatTurn":
        return cls(id=str(turn_id), role="assistant", content=content, timestamp=datetime.now(timezone.utc))
