"""
Out-of-band question authoring.

    python -m quiz_app.admin add questions.json [--backend URL]

The file holds one question object or a list of them:
    {"question": "...", "options": [{"text": "..."}], "explanation": "..."}
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import List

import httpx
from pydantic import TypeAdapter, ValidationError

from .models import NewQuestion
from .services.quiz_api_client import QuizApiClient

logger = logging.getLogger("quiz_app")


def read_questions(path: str) -> List[NewQuestion]:
    with open(path, "r", encoding="utf-8") as f:
        raw = json.load(f)
    if isinstance(raw, dict):
        raw = [raw]
    return TypeAdapter(List[NewQuestion]).validate_python(raw)


async def add_questions(client: QuizApiClient, questions: List[NewQuestion]) -> List[str]:
    messages = []
    for question in questions:
        messages.append(await client.add_question(question))
    return messages


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="quiz_app.admin", description="Quiz backend administration")
    sub = parser.add_subparsers(dest="command", required=True)
    add = sub.add_parser("add", help="Add questions from a JSON file")
    add.add_argument("path")
    add.add_argument("--backend", default=None, help="Backend base URL (defaults to QUIZ_BACKEND_URL)")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")

    try:
        questions = read_questions(args.path)
    except (OSError, ValueError, ValidationError) as e:
        print(f"  Could not read {args.path}: {e}", file=sys.stderr)
        return 2

    try:
        messages = asyncio.run(add_questions(QuizApiClient(base_url=args.backend), questions))
    except (httpx.HTTPError, ValidationError) as e:
        print(f"  Could not add question: {e}", file=sys.stderr)
        return 1

    for message in messages:
        print(f"  {message}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
