"""Public tutor entry points: learn content, quiz questions, chat answers."""
from __future__ import annotations
import logging

from learnbot.client.gateway import ModelGateway
from learnbot.client.quiz import QUIZ_RESPONSE_SCHEMA, parse_quiz
from learnbot.common.config import GatewayConfig
from learnbot.common.schema import GenerationOptions, QuizBatch, QuizItem
from learnbot.common.templates import build_ask_prompt, build_learn_prompt, build_quiz_prompt

LOGGER = logging.getLogger("learnbot.client.api")

LEARN_OPTIONS = GenerationOptions(max_output_tokens=4096)
QUIZ_OPTIONS = GenerationOptions(
    max_output_tokens=8192,
    response_mime_type="json",
    response_schema=QUIZ_RESPONSE_SCHEMA,
)
ASK_OPTIONS = GenerationOptions(max_output_tokens=1000)


class TutorClient:
    """Stateless facade over a ``ModelGateway``; safe to share across concurrent calls.

    Gateway and validator errors propagate unchanged.
    """

    def __init__(self, gateway: ModelGateway) -> None:
        self.gateway = gateway

    @classmethod
    def from_config(cls, config: GatewayConfig) -> "TutorClient":
        return cls(ModelGateway(config))

    async def fetch_learn_content(self, subject: str, topic: str) -> str:
        LOGGER.info("Fetching learn content for %s / %s", subject, topic)
        return await self.gateway.generate(build_learn_prompt(subject, topic), LEARN_OPTIONS)

    async def fetch_test_batch(self, subject: str, topic: str) -> QuizBatch:
        LOGGER.info("Fetching quiz for %s / %s", subject, topic)
        raw = await self.gateway.generate(build_quiz_prompt(subject, topic), QUIZ_OPTIONS)
        return parse_quiz(raw)

    async def fetch_test_questions(self, subject: str, topic: str) -> list[QuizItem]:
        batch = await self.fetch_test_batch(subject, topic)
        return list(batch.items)

    async def ask_question(self, subject: str, topic: str, question: str) -> str:
        return await self.gateway.generate(build_ask_prompt(subject, topic, question), ASK_OPTIONS)
