from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from trivia.config import GameConfig
from trivia.fsm import QuizState


# --- Enums ---
class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


# --- Entities ---
class Question(BaseModel):
    text: str
    options: list[str]
    correct_option_index: int
    category: str = "General Knowledge"

    @model_validator(mode="after")
    def _check_correct_index(self) -> "Question":
        if not 0 <= self.correct_option_index < len(self.options):
            raise ValueError(
                f"correct_option_index {self.correct_option_index} "
                f"out of range for {len(self.options)} options"
            )
        return self

    @property
    def correct_option(self) -> str:
        return self.options[self.correct_option_index]


class AnsweredRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    question_index: int
    selected_option_index: int
    was_correct: bool


class QuizRequest(BaseModel):
    """
    Selection criteria handed to a question source.
    """

    categories: frozenset[str]
    difficulty: Difficulty = Difficulty.EASY
    question_count: int = Field(
        default=GameConfig.DEFAULT_QUESTIONS,
        ge=GameConfig.MIN_QUESTIONS,
        le=GameConfig.MAX_QUESTIONS,
    )

    @field_validator("categories")
    @classmethod
    def _not_empty(cls, value: frozenset[str]) -> frozenset[str]:
        if not value:
            raise ValueError("at least one category is required")
        return value


class GameSession(BaseModel):
    """
    Encapsulates the state of one quiz attempt.
    Only the GameController mutates it.
    """

    state: QuizState = QuizState.SETUP
    selected_categories: set[str] = Field(default_factory=set)
    difficulty: Difficulty = Difficulty(GameConfig.DEFAULT_DIFFICULTY)
    question_count: int = GameConfig.DEFAULT_QUESTIONS
    questions: list[Question] = Field(default_factory=list)
    current_index: int = 0
    score: int = 0
    answers: list[AnsweredRecord] = Field(default_factory=list)
    selected_option: int | None = None
    error: str | None = None

    @property
    def current_question(self) -> Question | None:
        if 0 <= self.current_index < len(self.questions):
            return self.questions[self.current_index]
        return None

    def start_round(self, questions: list[Question]) -> None:
        self.questions = list(questions)
        self.current_index = 0
        self.score = 0
        self.answers = []
        self.selected_option = None
        self.error = None

    def record_answer(self) -> AnsweredRecord:
        """Appends the record for the current question from the pending selection."""
        question = self.current_question
        if question is None or self.selected_option is None:
            raise ValueError("no pending selection to record")

        was_correct = self.selected_option == question.correct_option_index
        record = AnsweredRecord(
            question_index=self.current_index,
            selected_option_index=self.selected_option,
            was_correct=was_correct,
        )
        self.answers.append(record)
        if was_correct:
            self.score += 1
        return record

    def next_question(self) -> None:
        self.current_index += 1
        self.selected_option = None

    def snapshot(self) -> "GameSnapshot":
        return GameSnapshot(
            state=self.state,
            selected_categories=frozenset(self.selected_categories),
            difficulty=self.difficulty,
            question_count=self.question_count,
            questions=tuple(q.model_copy(deep=True) for q in self.questions),
            current_index=self.current_index,
            score=self.score,
            answers=tuple(self.answers),
            selected_option=self.selected_option,
            error=self.error,
        )


class GameSnapshot(BaseModel):
    """Read-only view of a GameSession handed to the presentation layer."""

    model_config = ConfigDict(frozen=True)

    state: QuizState
    selected_categories: frozenset[str]
    difficulty: Difficulty
    question_count: int
    questions: tuple[Question, ...]
    current_index: int
    score: int
    answers: tuple[AnsweredRecord, ...]
    selected_option: int | None
    error: str | None

    @property
    def total(self) -> int:
        return len(self.questions)

    @property
    def current_question(self) -> Question | None:
        if 0 <= self.current_index < len(self.questions):
            return self.questions[self.current_index]
        return None

    @property
    def is_revealed(self) -> bool:
        return self.state == QuizState.ANSWER_REVEALED

    @property
    def score_percentage(self) -> int:
        return round(self.score / self.total * 100) if self.total else 0
