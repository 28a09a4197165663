"""Command-line entry point: learn, quiz, ask, subjects and serve."""
from __future__ import annotations
import argparse
import asyncio
import logging
import sys
from typing import Callable, Sequence

from learnbot.catalog import list_subjects, topics_for
from learnbot.client.api import TutorClient
from learnbot.common.config import load_config
from learnbot.common.errors import LearnBotError
from learnbot.common.logging_setup import setup_logging
from learnbot.common.schema import QuizItem
from learnbot.scoring import score_quiz

LOGGER = logging.getLogger("learnbot.cli")


def _print_subjects() -> None:
    for subject in list_subjects():
        print(f"{subject}: {', '.join(topics_for(subject))}")


def run_quiz(items: Sequence[QuizItem], read: Callable[[str], str] = input) -> int:
    """Ask each question on stdin, show feedback, and return the percentage score."""
    answers: list[str | None] = []
    for n, item in enumerate(items, start=1):
        print(f"\nQuestion {n} of {len(items)}: {item.question}")
        for opt in item.options:
            print(f"  {opt}")
        try:
            answer = read("Your answer (A-D): ").strip().upper() or None
        except EOFError:
            # Input closed: remaining questions stay unanswered.
            print()
            break
        answers.append(answer)
        print("Correct!" if answer == item.correct else f"Incorrect (answer: {item.correct})")
        print(item.explanation)
    result = score_quiz(items, answers)
    print(f"\nTest complete: {result.correct} out of {result.total} correct ({result.percent}%)")
    return result.percent


def _print_quiz_key(items: Sequence[QuizItem]) -> None:
    for n, item in enumerate(items, start=1):
        print(f"{n}. {item.question}")
        for opt in item.options:
            print(f"   {opt}")
        print(f"   Answer: {item.correct} - {item.explanation}")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="learnbot", description="AI computer science tutor")
    ap.add_argument("--cfg", default="configs/learnbot.yaml", help="Config path")
    ap.add_argument("--verbose", action="store_true", help="Debug logging")
    sub = ap.add_subparsers(dest="command", required=True)

    sub.add_parser("subjects", help="List subjects and topics")

    for name, help_text in (("learn", "Explain a topic"), ("quiz", "Take a 5-question quiz"), ("ask", "Ask the tutor")):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("--subject", required=True)
        p.add_argument("--topic", required=True)
        if name == "ask":
            p.add_argument("--question", required=True)
        if name == "quiz":
            p.add_argument("--no-interactive", action="store_true", help="Print questions with answers")

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)
    return ap


def main(argv: Sequence[str] | None = None, tutor: TutorClient | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING, stream=sys.stderr)

    if args.command == "subjects":
        _print_subjects()
        return 0

    if args.command == "serve":
        import uvicorn

        uvicorn.run("learnbot.serve.fastapi_app:app", host=args.host, port=args.port)
        return 0

    tutor = tutor or TutorClient.from_config(load_config(args.cfg))
    try:
        if args.command == "learn":
            print(asyncio.run(tutor.fetch_learn_content(args.subject, args.topic)))
        elif args.command == "ask":
            print(asyncio.run(tutor.ask_question(args.subject, args.topic, args.question)))
        else:
            items = asyncio.run(tutor.fetch_test_questions(args.subject, args.topic))
            if args.no_interactive:
                _print_quiz_key(items)
            else:
                run_quiz(items)
    except LearnBotError as e:
        LOGGER.debug("Command %s failed", args.command, exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
