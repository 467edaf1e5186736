from trivia.quiz.domain.errors import SourceUnavailableError
from trivia.quiz.domain.models import Question, QuizRequest
from trivia.quiz.domain.ports import IQuestionSource


class FakeSource(IQuestionSource):
    """Returns canned questions, or raises when `error` is set."""

    name = "fake"

    def __init__(
        self, questions: list[Question] | None = None, error: Exception | None = None
    ):
        self.questions = list(questions or [])
        self.error = error
        self.requests: list[QuizRequest] = []

    def fetch(self, request: QuizRequest) -> list[Question]:
        self.requests.append(request)
        if self.error:
            raise self.error
        return self.questions[: request.question_count]


class BrokenSource(FakeSource):
    name = "broken"

    def __init__(self, reason: str = "simulated network error"):
        super().__init__(error=SourceUnavailableError("broken", reason))
