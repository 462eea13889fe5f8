import logging
from time import perf_counter
from typing import List, Optional
import httpx
from pydantic import ValidationError
from ..config import settings
from ..models import QuizQuestion, QuestionsResponse, NewQuestion, NewQuestionResponse

logger = logging.getLogger("quiz_app")

class LoadError(Exception):
    """Fetching the question set failed: transport error, non-2xx status or a malformed payload."""

class QuizApiClient:
    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        self.base_url = (base_url or settings.backend_base_url).rstrip("/")
        self.timeout = settings.request_timeout if timeout is None else timeout
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout, transport=self.transport)

    async def fetch_questions(self) -> List[QuizQuestion]:
        start = perf_counter()
        try:
            async with self._client() as client:
                response = await client.get(settings.questions_path)
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPStatusError as e:
            raise LoadError(f"Request failed with status code {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise LoadError(f"Network error: {e}") from e
        except ValueError as e:
            raise LoadError("Malformed response: body is not valid JSON") from e
        try:
            questions = QuestionsResponse.model_validate(payload).data
        except ValidationError as e:
            raise LoadError(f"Malformed response: {e.error_count()} invalid field(s)") from e
        logger.debug({
            "event": "questions_fetched",
            "count": len(questions),
            "latency_ms": int((perf_counter() - start) * 1000),
        })
        return questions

    async def add_question(self, question: NewQuestion) -> str:
        async with self._client() as client:
            response = await client.post(settings.question_add_path, json=question.model_dump())
            response.raise_for_status()
        message = NewQuestionResponse.model_validate(response.json()).message
        logger.info({"event": "question_added", "question": question.question, "message": message})
        return message
