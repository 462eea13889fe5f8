import logging
from typing import Sequence
from ..config import settings
from ..models import QuizEvent, QuizQuestion, QuizSession, SelectOption, ToggleExplanation, Navigate, JumpToQuestion

logger = logging.getLogger("quiz_app")

class EmptyQuestionSet(Exception):
    pass

class InvalidTransition(ValueError):
    pass

def initial_session(questions: Sequence[QuizQuestion]) -> QuizSession:
    if not questions:
        raise EmptyQuestionSet("no questions available")
    return QuizSession()

def _reject(session: QuizSession, message: str, strict: bool) -> QuizSession:
    if strict:
        raise InvalidTransition(message)
    logger.warning({"event": "transition_rejected", "reason": message, "index": session.current_question_index})
    return session

def reduce(session: QuizSession, event: QuizEvent, questions: Sequence[QuizQuestion], strict: bool | None = None) -> QuizSession:
    """Apply one event and return the next session; the input is never modified."""
    strict = settings.strict_transitions if strict is None else strict
    count = len(questions)
    current = session.current_question_index

    if isinstance(event, SelectOption):
        option_count = len(questions[current].options)
        if not 0 <= event.option_index < option_count:
            return _reject(session, f"option_index {event.option_index} out of range for {option_count} options", strict)
        answers = dict(session.selected_answers)
        answers[current] = event.option_index
        return session.model_copy(update={"selected_answers": answers})

    if isinstance(event, ToggleExplanation):
        return session.model_copy(update={"show_explanation": not session.show_explanation})

    if isinstance(event, Navigate):
        step = 1 if event.direction == "next" else -1
        index = max(0, min(current + step, count - 1))
        return session.model_copy(update={"current_question_index": index, "show_explanation": False})

    if isinstance(event, JumpToQuestion):
        if not 0 <= event.index < count:
            return _reject(session, f"question index {event.index} out of range for {count} questions", strict)
        return session.model_copy(update={"current_question_index": event.index, "show_explanation": False})

    raise TypeError(f"unknown quiz event: {event!r}")
