import logging
from typing import List, Optional
from pydantic import BaseModel, Field
from ..models import LoadStatus, QuizQuestion
from .quiz_api_client import LoadError, QuizApiClient

logger = logging.getLogger("quiz_app")

class LoadResult(BaseModel):
    status: LoadStatus = LoadStatus.pending
    questions: List[QuizQuestion] = Field(default_factory=list)
    error: Optional[str] = None

class QuizLoader:
    """Fetches the question set once per session.

    Moves from ``pending`` to exactly one of ``success``, ``failure`` or
    ``empty`` and never leaves it; later ``load()`` calls return the recorded
    result without touching the network.
    """

    def __init__(self, client: QuizApiClient) -> None:
        self.client = client
        self.result = LoadResult()
        self._started = False

    @property
    def status(self) -> LoadStatus:
        return self.result.status

    async def load(self) -> LoadResult:
        if self._started:
            logger.debug({"event": "load_ignored", "status": self.result.status.value})
            return self.result
        self._started = True
        try:
            questions = await self.client.fetch_questions()
        except LoadError as e:
            logger.warning({"event": "load_failed", "error": str(e)})
            self.result = LoadResult(status=LoadStatus.failure, error=str(e))
            return self.result
        except Exception as e:
            logger.exception("load_crashed")
            self.result = LoadResult(status=LoadStatus.failure, error=f"Unexpected error: {e}")
            return self.result
        if not questions:
            logger.warning({"event": "load_empty"})
            self.result = LoadResult(status=LoadStatus.empty)
        else:
            self.result = LoadResult(status=LoadStatus.success, questions=questions)
        return self.result
