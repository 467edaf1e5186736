from trivia.quiz.domain.errors import NoQuestionsAvailableError
from trivia.quiz.domain.models import Question, QuizRequest
from trivia.quiz.domain.ports import IQuestionSource
from trivia.shared.telemetry import Telemetry, measure_time


class ResilientQuestionSource(IQuestionSource):
    """
    Tries the primary source once and falls back to the local catalog on any
    failure. Only an empty final result is reported to the caller.

    Without a fallback the primary is the last resort: an empty result raises
    NoQuestionsAvailableError and no fallback is counted.
    """

    name = "resilient"

    def __init__(
        self, primary: IQuestionSource, fallback: IQuestionSource | None = None
    ) -> None:
        self.primary = primary
        self.fallback = fallback
        self.telemetry = Telemetry("ResilientQuestionSource")

    @measure_time("fetch_questions")
    def fetch(self, request: QuizRequest) -> list[Question]:
        if self.fallback is None:
            return self._require(self.primary.fetch(request), request)

        try:
            questions = self.primary.fetch(request)
            if questions:
                return questions
            self.telemetry.log_warning(
                "Primary source returned nothing", primary=self.primary.name
            )
        except Exception as e:
            # Any upstream failure (network, parse, provider code) is recoverable here.
            self.telemetry.log_error(
                "Primary source failed, using fallback", e, primary=self.primary.name
            )

        self.telemetry.count_fallback(self.primary.name)
        return self._require(self.fallback.fetch(request), request)

    def close(self) -> None:
        self.primary.close()
        if self.fallback is not None:
            self.fallback.close()

    def _require(self, questions: list[Question], request: QuizRequest) -> list[Question]:
        if not questions:
            tried = [s.name for s in (self.primary, self.fallback) if s is not None]
            raise NoQuestionsAvailableError(
                f"no questions for {sorted(request.categories)} from {' or '.join(tried)}"
            )
        return questions
