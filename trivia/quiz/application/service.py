from pydantic import ValidationError

from trivia.quiz.domain.errors import InvalidRequestError
from trivia.quiz.domain.models import Difficulty, Question, QuizRequest
from trivia.quiz.domain.ports import IQuestionSource
from trivia.shared.telemetry import Telemetry, measure_time


class QuizService:
    def __init__(self, source: IQuestionSource):
        self.source = source
        self.telemetry = Telemetry("QuizService")

    @staticmethod
    def build_request(
        categories: set[str], difficulty: Difficulty | str, question_count: int
    ) -> QuizRequest:
        if not categories:
            raise InvalidRequestError("Please select at least one category!")
        try:
            return QuizRequest(
                categories=frozenset(categories),
                difficulty=Difficulty(difficulty),
                question_count=question_count,
            )
        except (ValidationError, ValueError) as e:
            raise InvalidRequestError(str(e)) from e

    @measure_time("load_questions")
    def load_questions(self, request: QuizRequest) -> list[Question]:
        """
        Raises NoQuestionsAvailableError when no source can produce questions.
        """
        questions = self.source.fetch(request)[: request.question_count]
        self.telemetry.log_info(
            "Questions loaded",
            requested=request.question_count,
            received=len(questions),
            difficulty=request.difficulty.value,
        )
        return questions

    def close(self) -> None:
        self.source.close()
