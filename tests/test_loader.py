"""Tests for the backend client and the one-shot question loader."""

import asyncio
import json

import httpx
import pytest

from conftest import question_payload
from quiz_app.models import LoadStatus, NewOption, NewQuestion, QuizOption
from quiz_app.services.loader import QuizLoader
from quiz_app.services.quiz_api_client import LoadError


class TestQuizOption:

    def test_missing_correct_flag_means_incorrect(self):
        assert QuizOption.model_validate({"_id": "a", "text": "A"}).correct is False

    def test_null_correct_flag_means_incorrect(self):
        assert QuizOption.model_validate({"_id": "a", "text": "A", "correct": None}).correct is False

    def test_correct_flag_kept(self):
        assert QuizOption.model_validate({"_id": "a", "text": "A", "correct": True}).correct is True


class TestFetchQuestions:

    def test_requests_questions_endpoint(self, backend_with):
        backend = backend_with(question_payload(3))
        questions = asyncio.run(backend.client().fetch_questions())
        assert [q.id for q in questions] == ["q0", "q1", "q2"]
        assert backend.requests[0].method == "GET"
        assert backend.requests[0].url == "http://backend.test/api/quize/getQuestions"

    def test_non_2xx_is_load_error(self, backend_with):
        backend = backend_with(status_code=500, content=b"oops")
        with pytest.raises(LoadError, match="status code 500"):
            asyncio.run(backend.client().fetch_questions())

    def test_transport_failure_is_load_error(self, backend_with):
        backend = backend_with(error=httpx.ConnectError("connection refused"))
        with pytest.raises(LoadError, match="Network error: connection refused"):
            asyncio.run(backend.client().fetch_questions())

    def test_invalid_json_is_load_error(self, backend_with):
        backend = backend_with(content=b"<html>")
        with pytest.raises(LoadError, match="not valid JSON"):
            asyncio.run(backend.client().fetch_questions())

    def test_schema_mismatch_is_load_error(self, backend_with):
        backend = backend_with(content=b'{"data": [{"question": "no options"}]}')
        with pytest.raises(LoadError, match="Malformed response"):
            asyncio.run(backend.client().fetch_questions())


class TestQuizLoader:

    def test_starts_pending(self, backend_with):
        assert QuizLoader(backend_with([]).client()).status == LoadStatus.pending

    def test_success(self, backend_with):
        result = asyncio.run(QuizLoader(backend_with(question_payload(2)).client()).load())
        assert result.status == LoadStatus.success
        assert len(result.questions) == 2
        assert result.error is None

    def test_empty_set_is_distinct_status(self, backend_with):
        result = asyncio.run(QuizLoader(backend_with([]).client()).load())
        assert result.status == LoadStatus.empty
        assert result.questions == []

    def test_failure_records_message(self, backend_with):
        backend = backend_with(error=httpx.ConnectError("connection refused"))
        result = asyncio.run(QuizLoader(backend.client()).load())
        assert result.status == LoadStatus.failure
        assert result.error == "Network error: connection refused"
        assert result.questions == []

    def test_fetches_only_once(self, backend_with):
        backend = backend_with(question_payload(2))
        loader = QuizLoader(backend.client())

        async def load_twice():
            first = await loader.load()
            second = await loader.load()
            return first, second

        first, second = asyncio.run(load_twice())
        assert len(backend.requests) == 1
        assert first == second

    def test_failure_is_terminal(self, backend_with):
        backend = backend_with(status_code=503, content=b"")
        loader = QuizLoader(backend.client())
        asyncio.run(loader.load())
        backend.reply(200, json={"data": question_payload(1)})
        assert asyncio.run(loader.load()).status == LoadStatus.failure
        assert len(backend.requests) == 1

    def test_unexpected_error_still_ends_in_failure(self):
        class BrokenClient:
            calls = 0

            async def fetch_questions(self):
                self.calls += 1
                raise RuntimeError("decoder exploded")

        client = BrokenClient()
        loader = QuizLoader(client)

        result = asyncio.run(loader.load())

        assert result.status == LoadStatus.failure
        assert result.error == "Unexpected error: decoder exploded"
        assert asyncio.run(loader.load()).status == LoadStatus.failure
        assert client.calls == 1


class TestAddQuestion:

    def test_posts_question(self, backend_with):
        backend = backend_with()
        backend.reply(201, json={"message": "Question added"})
        question = NewQuestion(question="2 + 2?", options=[NewOption(text="4"), NewOption(text="5")], explanation="Arithmetic")

        message = asyncio.run(backend.client().add_question(question))

        assert message == "Question added"
        request = backend.requests[0]
        assert request.method == "POST"
        assert request.url.path == "/api/questionAdd"
        assert json.loads(request.content) == question.model_dump()
