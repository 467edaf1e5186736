import random

import httpx

from trivia.config import Category, GameConfig
from trivia.quiz.domain.errors import SourceUnavailableError
from trivia.quiz.domain.models import Question, QuizRequest
from trivia.quiz.domain.normalizer import QuestionNormalizer
from trivia.quiz.domain.ports import IQuestionSource
from trivia.shared.telemetry import Telemetry, measure_time


class OpenTriviaSource(IQuestionSource):
    """
    Remote multiple-choice questions from the Open Trivia DB.
    The provider accepts one category per request, so one of the selected
    categories is picked at random.
    """

    name = "opentdb"

    def __init__(
        self,
        client: httpx.Client | None = None,
        base_url: str = GameConfig.OPENTDB_URL,
        rng: random.Random | None = None,
    ) -> None:
        self._owns_client = client is None
        self.client = client or httpx.Client(timeout=GameConfig.HTTP_TIMEOUT_SECONDS)
        self.base_url = base_url
        self.rng = rng or random.Random()
        self.normalizer = QuestionNormalizer(self.rng)
        self.telemetry = Telemetry("OpenTriviaSource")

    def build_params(self, request: QuizRequest) -> tuple[str, dict[str, str | int]]:
        # sorted() keeps the random pick reproducible for a seeded rng
        category = self.rng.choice(sorted(request.categories))
        params: dict[str, str | int] = {
            "amount": request.question_count,
            "category": Category.provider_id_for(category),
            "difficulty": request.difficulty.value,
            "type": "multiple",
            "encode": "url3986",
        }
        return category, params

    def close(self) -> None:
        if self._owns_client:
            self.client.close()

    @measure_time("fetch_opentdb")
    def fetch(self, request: QuizRequest) -> list[Question]:
        category, params = self.build_params(request)
        self.telemetry.log_info("Requesting questions", label=category, **params)

        try:
            response = self.client.get(self.base_url, params=params)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            raise SourceUnavailableError(self.name, f"request failed: {e}") from e
        except ValueError as e:
            raise SourceUnavailableError(self.name, f"invalid JSON: {e}") from e

        code = data.get("response_code") if isinstance(data, dict) else None
        if code != 0:
            raise SourceUnavailableError(self.name, f"response_code={code}")

        results = data.get("results") or []
        if not results:
            raise SourceUnavailableError(self.name, "empty result set")

        try:
            return [self.normalizer.from_open_trivia(item, category) for item in results]
        except (KeyError, TypeError, ValueError) as e:
            raise SourceUnavailableError(self.name, f"malformed item: {e}") from e
