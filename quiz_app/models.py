from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Annotated, Dict, List, Literal, Optional, Union

class QuizOption(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(alias="_id")
    text: str
    correct: bool = False

    @field_validator("correct", mode="before")
    @classmethod
    def _absent_means_incorrect(cls, value):
        # backend only sends the flag on the correct option
        return False if value is None else value

class QuizQuestion(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(alias="_id")
    question: str
    options: List[QuizOption]
    explanation: str = ""

class QuestionsResponse(BaseModel):
    data: List[QuizQuestion]

class NewOption(BaseModel):
    text: str

class NewQuestion(BaseModel):
    question: str
    options: List[NewOption]
    explanation: str

class NewQuestionResponse(BaseModel):
    message: str

class QuizSession(BaseModel):
    model_config = ConfigDict(frozen=True)

    current_question_index: int = 0
    selected_answers: Dict[int, int] = Field(default_factory=dict)
    show_explanation: bool = False

class SelectOption(BaseModel):
    type: Literal["select_option"] = "select_option"
    option_index: int

class ToggleExplanation(BaseModel):
    type: Literal["toggle_explanation"] = "toggle_explanation"

class Navigate(BaseModel):
    type: Literal["navigate"] = "navigate"
    direction: Literal["prev", "next"]

class JumpToQuestion(BaseModel):
    type: Literal["jump_to_question"] = "jump_to_question"
    index: int

QuizEvent = Annotated[
    Union[SelectOption, ToggleExplanation, Navigate, JumpToQuestion],
    Field(discriminator="type"),
]

class LoadStatus(str, Enum):
    pending = "pending"
    success = "success"
    failure = "failure"
    empty = "empty"

class OptionState(str, Enum):
    neutral = "neutral"
    selected_pending = "selected_pending"
    selected_correct = "selected_correct"
    selected_incorrect = "selected_incorrect"

class ProgressState(str, Enum):
    current = "current"
    visited = "visited"
    unvisited = "unvisited"

class OptionView(BaseModel):
    index: int
    id: str
    text: str
    state: OptionState

class ProgressCell(BaseModel):
    index: int
    label: str
    state: ProgressState

class QuestionView(BaseModel):
    number: int
    text: str
    options: List[OptionView]
    explanation: Optional[str] = None

class QuizView(BaseModel):
    status: LoadStatus
    error: Optional[str] = None
    question: Optional[QuestionView] = None
    counter: Optional[str] = None
    prev_disabled: bool = True
    next_disabled: bool = True
    show_explanation: bool = False
    explanation_label: str = "Show Explanation"
    progress: List[List[ProgressCell]] = Field(default_factory=list)

class StartSessionResponse(BaseModel):
    session_id: str
