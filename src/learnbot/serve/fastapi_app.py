"""FastAPI surface for the tutor.

Endpoints:
- GET /health
- GET /subjects
- POST /learn       { "subject": "...", "topic": "..." }
- POST /test        { "subject": "...", "topic": "..." }
- POST /test/score  { "questions": [...], "answers": ["A", ...] }
- POST /ask         { "subject": "...", "topic": "...", "question": "..." }
"""
from __future__ import annotations
import logging
import os
from datetime import datetime
from functools import lru_cache
from typing import Literal

from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel, Field

from learnbot.catalog import is_known_selection, list_subjects, topics_for
from learnbot.client.api import TutorClient
from learnbot.common.config import load_config
from learnbot.common.errors import LearnBotError
from learnbot.common.logging_setup import setup_logging
from learnbot.common.schema import ChatTurn, QuizItem
from learnbot.scoring import grade_band, score_quiz

LOGGER = logging.getLogger("learnbot.serve.app")
setup_logging()

CONFIG_PATH = os.getenv("LEARNBOT_CONFIG", "configs/learnbot.yaml")

LEARN_FALLBACK = "Failed to load content: {error}. Please try again."
CHAT_FALLBACK = "Sorry, I encountered an error. Please try again."


class SelectionIn(BaseModel):
    subject: str
    topic: str


class AskIn(SelectionIn):
    question: str
    turn_id: int = Field(default=0, ge=0, description="Id for the user turn; the answer gets turn_id + 1.")


class LearnOut(BaseModel):
    content: str
    ok: bool
    known_selection: bool


class QuizItemModel(BaseModel):
    question: str
    options: list[str] = Field(min_length=4, max_length=4)
    correct: Literal["A", "B", "C", "D"]
    explanation: str


class QuizOut(BaseModel):
    questions: list[QuizItemModel]
    dropped: int
    known_selection: bool


class ScoreIn(BaseModel):
    questions: list[QuizItemModel]
    answers: list[str | None]


class ScoreOut(BaseModel):
    correct: int
    total: int
    percent: int
    band: str


class ChatTurnOut(BaseModel):
    id: str
    role: Literal["user", "assistant"]
    content: str
    timestamp: datetime


class AskOut(BaseModel):
    user: ChatTurnOut
    assistant: ChatTurnOut
    ok: bool


@lru_cache(maxsize=1)
def get_tutor() -> TutorClient:
    return TutorClient.from_config(load_config(CONFIG_PATH))


def _turn_out(turn: ChatTurn) -> ChatTurnOut:
    return ChatTurnOut(id=turn.id, role=turn.role, content=turn.content, timestamp=turn.timestamp)


app = FastAPI(title="LearnBot API")


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/subjects")
def subjects() -> dict[str, list[str]]:
    return {subject: topics_for(subject) for subject in list_subjects()}


@app.post("/learn", response_model=LearnOut)
async def learn(body: SelectionIn, tutor: TutorClient = Depends(get_tutor)) -> LearnOut:
    known = is_known_selection(body.subject, body.topic)
    try:
        content = await tutor.fetch_learn_content(body.subject, body.topic)
    except LearnBotError as e:
        LOGGER.error("Error loading content: %s", e)
        return LearnOut(content=LEARN_FALLBACK.format(error=e), ok=False, known_selection=known)
    return LearnOut(content=content, ok=True, known_selection=known)


@app.post("/test", response_model=QuizOut)
async def quiz(body: SelectionIn, tutor: TutorClient = Depends(get_tutor)) -> QuizOut:
    try:
        batch = await tutor.fetch_test_batch(body.subject, body.topic)
    except LearnBotError as e:
        LOGGER.error("Error loading quiz: %s", e)
        raise HTTPException(status_code=502, detail=str(e))
    return QuizOut(
        questions=[QuizItemModel(**item.to_dict()) for item in batch.items],
        dropped=batch.dropped,
        known_selection=is_known_selection(body.subject, body.topic),
    )


@app.post("/test/score", response_model=ScoreOut)
def score(body: ScoreIn) -> ScoreOut:
    items = [
        QuizItem(question=q.question, options=tuple(q.options), correct=q.correct, explanation=q.explanation)
        for q in body.questions
    ]
    result = score_quiz(items, body.answers)
    return ScoreOut(correct=result.correct, total=result.total, percent=result.percent, band=grade_band(result.percent))


@app.post("/ask", response_model=AskOut)
async def ask(body: AskIn, tutor: TutorClient = Depends(get_tutor)) -> AskOut:
    user_turn = ChatTurn.user(body.question, body.turn_id)
    ok = True
    try:
        answer = await tutor.ask_question(body.subject, body.topic, body.question)
    except LearnBotError as e:
        LOGGER.error("Error getting answer: %s", e)
        answer, ok = CHAT_FALLBACK, False
    assistant_turn = ChatTurn.assistant(answer, body.turn_id + 1)
    return AskOut(user=_turn_out(user_turn), assistant=_turn_out(assistant_turn), ok=ok)
