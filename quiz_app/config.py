import os
from pydantic import BaseModel
from dotenv import load_dotenv

load_dotenv()

class Settings(BaseModel):
    backend_base_url: str = os.getenv("QUIZ_BACKEND_URL", "http://localhost:5000")
    questions_path: str = os.getenv("QUIZ_QUESTIONS_PATH", "/api/quize/getQuestions")
    question_add_path: str = os.getenv("QUIZ_QUESTION_ADD_PATH", "/api/questionAdd")
    request_timeout: float = float(os.getenv("QUIZ_REQUEST_TIMEOUT", "10"))
    progress_columns: int = int(os.getenv("QUIZ_PROGRESS_COLUMNS", "5"))
    max_sessions: int = int(os.getenv("QUIZ_MAX_SESSIONS", "1000"))
    strict_transitions: bool = os.getenv("STRICT_TRANSITIONS", "false").lower() == "true"
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

settings = Settings()
