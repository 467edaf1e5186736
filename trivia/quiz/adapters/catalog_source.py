import json
import os
import random

from trivia.config import GameConfig
from trivia.quiz.domain.models import Question, QuizRequest
from trivia.quiz.domain.normalizer import QuestionNormalizer
from trivia.quiz.domain.ports import IQuestionSource
from trivia.shared.telemetry import Telemetry


class CatalogSource(IQuestionSource):
    """
    Local fixed catalog used when the remote sources are unavailable.
    The catalog file is a JSON list of Question objects.
    """

    name = "catalog"

    def __init__(
        self,
        questions: list[Question] | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.questions = list(questions or [])
        self.normalizer = QuestionNormalizer(rng)
        self.telemetry = Telemetry("CatalogSource")

    @classmethod
    def from_file(
        cls, path: str = GameConfig.CATALOG_PATH, rng: random.Random | None = None
    ) -> "CatalogSource":
        telemetry = Telemetry("CatalogSource")
        if not os.path.exists(path):
            telemetry.log_error("Catalog file NOT found", Exception(f"Missing: {path}"))
            return cls([], rng)

        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        questions = [Question(**q) for q in data]
        telemetry.log_info("Loaded catalog", path=path, count=len(questions))
        return cls(questions, rng)

    def categories(self) -> list[str]:
        return sorted({q.category for q in self.questions})

    def fetch(self, request: QuizRequest) -> list[Question]:
        wanted = {c.lower() for c in request.categories}
        pool = [q for q in self.questions if q.category.lower() in wanted]
        if not pool:
            self.telemetry.log_info(
                "No catalog match, using whole catalog",
                categories=sorted(request.categories),
            )
            pool = self.questions

        selection = self.normalizer.sample(pool, request.question_count)
        self.telemetry.log_info(
            "Selected fallback questions", pool=len(pool), selected=len(selection)
        )
        return selection
