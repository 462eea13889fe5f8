"""Shared fixtures: question payloads and a mocked question backend."""

import httpx
import pytest

from quiz_app.models import QuizQuestion
from quiz_app.services.quiz_api_client import QuizApiClient

BACKEND = "http://backend.test"


def question_payload(n: int, correct_index: int = 1, option_count: int = 4) -> list:
    """Build ``n`` wire-format questions; only the correct option carries the flag."""
    items = []
    for q in range(n):
        options = []
        for o in range(option_count):
            option = {"_id": f"q{q}o{o}", "text": f"Option {o} of question {q}"}
            if o == correct_index:
                option["correct"] = True
            options.append(option)
        items.append({
            "_id": f"q{q}",
            "question": f"Question text {q}",
            "options": options,
            "explanation": f"Explanation {q}",
        })
    return items


def make_questions(n: int, correct_index: int = 1, option_count: int = 4) -> list:
    return [QuizQuestion.model_validate(item) for item in question_payload(n, correct_index, option_count)]


class FakeBackend:
    """Records requests and answers each one with a fresh canned response."""

    def __init__(self, status_code: int = 200, error: Exception | None = None, **body):
        self.error = error
        self.requests = []
        self.reply(status_code, **body)

    def reply(self, status_code: int = 200, **body) -> None:
        self.status_code = status_code
        self.body = body

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, **self.body)

    def client(self) -> QuizApiClient:
        return QuizApiClient(base_url=BACKEND, timeout=5, transport=httpx.MockTransport(self.handler))


@pytest.fixture
def backend_with():
    def _make(questions=None, *, status_code=200, content=None, error=None):
        if content is not None:
            return FakeBackend(status_code, error=error, content=content)
        return FakeBackend(status_code, error=error, json={"data": questions if questions is not None else []})
    return _make
