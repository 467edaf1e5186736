import random

import httpx

from trivia.config import GameConfig
from trivia.quiz.domain.errors import ModelOutputError, SourceUnavailableError
from trivia.quiz.domain.models import Question, QuizRequest
from trivia.quiz.domain.normalizer import QuestionNormalizer
from trivia.quiz.domain.output_parser import parse_model_output
from trivia.quiz.domain.ports import IQuestionSource
from trivia.shared.telemetry import Telemetry, measure_time

PROMPT_TEMPLATE = """Generate exactly {count} trivia questions with the following specifications:
- Categories: {categories}
- Difficulty: {difficulty}
- Format: Multiple choice with 4 options

Respond ONLY with a valid JSON object in this exact format:
{{
  "questions": [
    {{
      "question": "What is the chemical symbol for gold?",
      "options": ["Au", "Ag", "Go", "Gd"],
      "correctAnswer": 0,
      "category": "Science"
    }}
  ]
}}"""


def build_prompt(request: QuizRequest) -> str:
    return PROMPT_TEMPLATE.format(
        count=request.question_count,
        categories=", ".join(sorted(request.categories)),
        difficulty=request.difficulty.value,
    )


class GenerativeSource(IQuestionSource):
    """
    Questions written by a generative model behind the /api/generateTrivia proxy.
    """

    name = "generative"

    def __init__(
        self,
        client: httpx.Client | None = None,
        proxy_url: str = GameConfig.PROXY_URL,
        rng: random.Random | None = None,
    ) -> None:
        self._owns_client = client is None
        # Model calls are slow; allow several times the normal timeout.
        self.client = client or httpx.Client(
            timeout=GameConfig.HTTP_TIMEOUT_SECONDS * 4
        )
        self.proxy_url = proxy_url
        self.normalizer = QuestionNormalizer(rng)
        self.telemetry = Telemetry("GenerativeSource")

    def close(self) -> None:
        if self._owns_client:
            self.client.close()

    @measure_time("fetch_generative")
    def fetch(self, request: QuizRequest) -> list[Question]:
        try:
            response = self.client.post(
                self.proxy_url, json={"prompt": build_prompt(request)}
            )
            response.raise_for_status()
            text = response.json().get("text", "")
        except httpx.HTTPError as e:
            raise SourceUnavailableError(self.name, f"proxy call failed: {e}") from e
        except (ValueError, AttributeError) as e:
            raise SourceUnavailableError(self.name, f"invalid proxy response: {e}") from e

        try:
            items = parse_model_output(text)
        except ModelOutputError as e:
            self.telemetry.log_warning(
                "Unparseable model output",
                kind=type(e).__name__,
                chars=len(text) if isinstance(text, str) else 0,
            )
            raise SourceUnavailableError(self.name, f"{type(e).__name__}: {e}") from e

        default_category = sorted(request.categories)[0]
        questions = [
            q
            for q in (self.normalizer.from_generated(i, default_category) for i in items)
            if q is not None
        ]
        if not questions:
            raise SourceUnavailableError(self.name, "model returned no usable questions")

        self.telemetry.log_info(
            "Generated questions", usable=len(questions), raw=len(items)
        )
        return questions[: request.question_count]
