"""Gemini gateway, quiz validation and the tutor entry points."""
from learnbot.client.api import TutorClient
from learnbot.client.gateway import ModelGateway
from learnbot.client.quiz import parse_quiz, validate_quiz_response

__all__ = ["TutorClient", "ModelGateway", "parse_quiz", "validate_quiz_response"]
