from typing import List, Optional, Sequence
from ..config import settings
from ..models import (
    LoadStatus, OptionState, OptionView, ProgressCell, ProgressState,
    QuestionView, QuizQuestion, QuizSession, QuizView,
)

def option_state(session: QuizSession, question: QuizQuestion, index: int) -> OptionState:
    if session.selected_answers.get(session.current_question_index) != index:
        return OptionState.neutral
    if not session.show_explanation:
        return OptionState.selected_pending
    if question.options[index].correct:
        return OptionState.selected_correct
    return OptionState.selected_incorrect

def progress_state(session: QuizSession, index: int) -> ProgressState:
    # positional only; answered questions are not tracked here
    if index == session.current_question_index:
        return ProgressState.current
    if index < session.current_question_index:
        return ProgressState.visited
    return ProgressState.unvisited

class ViewBuilder:
    def __init__(self, columns: Optional[int] = None) -> None:
        self.columns = columns or settings.progress_columns

    def progress_grid(self, session: QuizSession, count: int) -> List[List[ProgressCell]]:
        cells = [ProgressCell(index=i, label=str(i + 1), state=progress_state(session, i)) for i in range(count)]
        return [cells[i:i + self.columns] for i in range(0, count, self.columns)]

    def build(self, session: QuizSession, questions: Sequence[QuizQuestion]) -> QuizView:
        index = session.current_question_index
        question = questions[index]
        options = [
            OptionView(index=i, id=o.id, text=o.text, state=option_state(session, question, i))
            for i, o in enumerate(question.options)
        ]
        return QuizView(
            status=LoadStatus.success,
            question=QuestionView(
                number=index + 1,
                text=question.question,
                options=options,
                explanation=question.explanation if session.show_explanation else None,
            ),
            counter=f"Question {index + 1}/{len(questions)}",
            prev_disabled=index == 0,
            next_disabled=index == len(questions) - 1,
            show_explanation=session.show_explanation,
            explanation_label="Hide Explanation" if session.show_explanation else "Show Explanation",
            progress=self.progress_grid(session, len(questions)),
        )

    def build_status(self, status: LoadStatus, error: Optional[str] = None) -> QuizView:
        if status == LoadStatus.empty:
            error = "No questions available"
        return QuizView(status=status, error=error)
