from abc import ABC, abstractmethod

from trivia.quiz.domain.models import Question, QuizRequest


class IQuestionSource(ABC):
    name: str = "source"

    @abstractmethod
    def fetch(self, request: QuizRequest) -> list[Question]:
        """
        Returns up to request.question_count normalized questions.
        Raises SourceUnavailableError when the source cannot deliver.
        """
        pass

    def close(self) -> None:
        """Releases network clients owned by the source."""
        pass


class ITextGenerator(ABC):
    @abstractmethod
    async def generate(self, prompt: str) -> str:
        """Returns the full generated text for a prompt."""
        pass
