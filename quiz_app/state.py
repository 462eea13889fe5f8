import logging
import threading
from typing import Dict, List, Optional
from .config import settings
from .models import LoadStatus, QuizEvent, QuizQuestion, QuizSession, QuizView
from .services.loader import LoadResult, QuizLoader
from .services.quiz_api_client import QuizApiClient
from .services.quiz_engine import initial_session, reduce
from .services.view_builder import ViewBuilder

logger = logging.getLogger("quiz_app")

class SessionNotReady(Exception):
	pass

class SessionData:
	def __init__(self, loader: QuizLoader) -> None:
		self.loader = loader
		self.session: Optional[QuizSession] = None
		self.lock = threading.Lock()

	@property
	def questions(self) -> List[QuizQuestion]:
		return self.loader.result.questions

class SessionStore:
	def __init__(self, max_sessions: Optional[int] = None) -> None:
		self.sessions: Dict[str, SessionData] = {}
		self.max_sessions = max_sessions or settings.max_sessions
		self.view_builder = ViewBuilder()
		self._lock = threading.Lock()

	def create_session(self, session_id: str, client: QuizApiClient) -> None:
		with self._lock:
			# dicts keep insertion order, so the first key is the oldest session
			while len(self.sessions) >= self.max_sessions:
				evicted = next(iter(self.sessions))
				del self.sessions[evicted]
				logger.debug({"event": "session_evicted", "session_id": evicted})
			self.sessions[session_id] = SessionData(QuizLoader(client))

	def has_session(self, session_id: str) -> bool:
		return session_id in self.sessions

	def end_session(self, session_id: str) -> None:
		self.sessions.pop(session_id, None)

	def get_status(self, session_id: str) -> LoadStatus:
		return self.sessions[session_id].loader.status

	def get_session(self, session_id: str) -> Optional[QuizSession]:
		return self.sessions[session_id].session

	async def load(self, session_id: str) -> Optional[LoadResult]:
		data = self.sessions.get(session_id)
		if data is None:
			logger.debug({"event": "load_skipped", "session_id": session_id, "reason": "session_gone"})
			return None
		result = await data.loader.load()
		if result.status == LoadStatus.success and data.session is None:
			data.session = initial_session(result.questions)
			logger.debug({"event": "session_initialized", "session_id": session_id, "question_count": len(result.questions)})
		return result

	def dispatch(self, session_id: str, event: QuizEvent) -> QuizSession:
		data = self.sessions[session_id]
		with data.lock:
			if data.session is None:
				raise SessionNotReady(data.loader.status.value)
			# swap the whole value so readers never see a half-applied transition
			data.session = reduce(data.session, event, data.questions)
		logger.debug({
			"event": "transition",
			"session_id": session_id,
			"type": event.type,
			"index": data.session.current_question_index,
			"show_explanation": data.session.show_explanation,
		})
		return data.session

	def get_view(self, session_id: str) -> QuizView:
		data = self.sessions[session_id]
		if data.session is None:
			return self.view_builder.build_status(data.loader.status, data.loader.result.error)
		return self.view_builder.build(data.session, data.questions)

session_store = SessionStore()
