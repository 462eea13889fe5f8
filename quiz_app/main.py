from fastapi import FastAPI, HTTPException, Request, BackgroundTasks
from fastapi.responses import ORJSONResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel
from typing import Literal
import logging
import os
import uuid
from time import perf_counter
from .state import SessionNotReady, session_store
from .models import (
	JumpToQuestion, Navigate, QuizEvent, QuizView, SelectOption,
	StartSessionResponse, ToggleExplanation,
)
from .services.quiz_api_client import QuizApiClient
from .services.quiz_engine import InvalidTransition
from .config import settings

logging.basicConfig(level=settings.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s %(message)s")
logger = logging.getLogger("quiz_app")

app = FastAPI(default_response_class=ORJSONResponse)

templates = Jinja2Templates(directory=os.path.join(os.path.dirname(__file__), "templates"))

api_client = QuizApiClient()

class EventRequest(BaseModel):
	event: QuizEvent

@app.on_event("startup")
def on_startup() -> None:
	logger.info({
		"event": "api_startup",
		"backend": settings.backend_base_url,
		"progress_columns": settings.progress_columns,
		"strict_transitions": settings.strict_transitions,
	})

@app.middleware("http")
async def timing_middleware(request: Request, call_next):
	start = perf_counter()
	response = await call_next(request)
	duration_ms = int((perf_counter() - start) * 1000)
	logger.debug({
		"event": "request_timing",
		"method": request.method,
		"path": request.url.path,
		"status_code": response.status_code,
		"duration_ms": duration_ms,
	})
	return response

def _start_session(background_tasks: BackgroundTasks) -> str:
	session_id = str(uuid.uuid4())
	session_store.create_session(session_id, api_client)
	background_tasks.add_task(session_store.load, session_id)
	logger.debug({"event": "session_started", "session_id": session_id})
	return session_id

def _require_session(session_id: str) -> None:
	if not session_store.has_session(session_id):
		raise HTTPException(status_code=404, detail="session_not_found")

def _dispatch(session_id: str, event: QuizEvent) -> QuizView:
	_require_session(session_id)
	try:
		session_store.dispatch(session_id, event)
	except SessionNotReady:
		raise HTTPException(status_code=409, detail="session_not_ready")
	except InvalidTransition as e:
		raise HTTPException(status_code=422, detail=str(e))
	return session_store.get_view(session_id)

@app.post("/api/session/start", response_model=StartSessionResponse)
def start_session(background_tasks: BackgroundTasks):
	return StartSessionResponse(session_id=_start_session(background_tasks))

@app.get("/api/session/{session_id}/view", response_model=QuizView)
def get_view(session_id: str):
	_require_session(session_id)
	return session_store.get_view(session_id)

@app.post("/api/session/{session_id}/select", response_model=QuizView)
def select_option(session_id: str, payload: SelectOption):
	return _dispatch(session_id, payload)

@app.post("/api/session/{session_id}/explanation/toggle", response_model=QuizView)
def toggle_explanation(session_id: str):
	return _dispatch(session_id, ToggleExplanation())

@app.post("/api/session/{session_id}/navigate", response_model=QuizView)
def navigate(session_id: str, payload: Navigate):
	return _dispatch(session_id, payload)

@app.post("/api/session/{session_id}/jump", response_model=QuizView)
def jump_to_question(session_id: str, payload: JumpToQuestion):
	return _dispatch(session_id, payload)

@app.post("/api/session/{session_id}/events", response_model=QuizView)
def apply_event(session_id: str, payload: EventRequest):
	return _dispatch(session_id, payload.event)

@app.delete("/api/session/{session_id}", status_code=204)
def end_session(session_id: str):
	_require_session(session_id)
	session_store.end_session(session_id)
	logger.debug({"event": "session_ended", "session_id": session_id})

# HTML page: forms post a transition and bounce back to the page

def _back_to_page(session_id: str) -> RedirectResponse:
	return RedirectResponse(url=f"/quiz/{session_id}", status_code=303)

@app.get("/")
def index(background_tasks: BackgroundTasks):
	return _back_to_page(_start_session(background_tasks))

@app.get("/quiz/{session_id}")
def quiz_page(request: Request, session_id: str):
	_require_session(session_id)
	view = session_store.get_view(session_id)
	return templates.TemplateResponse(request, "quiz.html", {"session_id": session_id, "view": view})

@app.post("/quiz/{session_id}/select/{option_index}")
def page_select_option(session_id: str, option_index: int):
	_dispatch(session_id, SelectOption(option_index=option_index))
	return _back_to_page(session_id)

@app.post("/quiz/{session_id}/explanation")
def page_toggle_explanation(session_id: str):
	_dispatch(session_id, ToggleExplanation())
	return _back_to_page(session_id)

@app.post("/quiz/{session_id}/navigate/{direction}")
def page_navigate(session_id: str, direction: Literal["prev", "next"]):
	_dispatch(session_id, Navigate(direction=direction))
	return _back_to_page(session_id)

@app.post("/quiz/{session_id}/jump/{index}")
def page_jump_to_question(session_id: str, index: int):
	_dispatch(session_id, JumpToQuestion(index=index))
	return _back_to_page(session_id)
