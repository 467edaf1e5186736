import random
from urllib.parse import unquote

from trivia.quiz.domain.models import Question


class QuestionNormalizer:
    """
    Pure domain logic that turns provider items into Question records.
    The random generator is injectable so tests can pin the permutation.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng or random.Random()

    @staticmethod
    def decode(value: str) -> str:
        """Undoes the RFC 3986 percent-encoding used by the remote trivia API."""
        return unquote(value)

    def shuffle_options(
        self, correct: str, incorrect: list[str]
    ) -> tuple[list[str], int]:
        """
        Combines the answers and applies an unbiased Fisher-Yates shuffle.

        Returns:
            The shuffled options and the new index of the correct answer.
        """
        candidates = [correct] + list(incorrect)
        order = list(range(len(candidates)))
        self.rng.shuffle(order)
        options = [candidates[i] for i in order]
        return options, order.index(0)

    def from_open_trivia(self, item: dict, category: str) -> Question:
        correct = self.decode(item["correct_answer"])
        incorrect = [self.decode(a) for a in item["incorrect_answers"]]
        options, correct_index = self.shuffle_options(correct, incorrect)
        return Question(
            text=self.decode(item["question"]),
            options=options,
            correct_option_index=correct_index,
            category=category,
        )

    def from_generated(self, item: dict, default_category: str) -> Question | None:
        """
        Maps one {question, options, correctAnswer, category} item.
        Returns None for items that cannot form a valid question.
        """
        text = item.get("question")
        options = item.get("options")
        answer = item.get("correctAnswer")

        if not isinstance(text, str) or not isinstance(options, list):
            return None
        options = [str(o) for o in options]
        if len(options) < 2 or not isinstance(answer, int) or isinstance(answer, bool):
            return None
        if not 0 <= answer < len(options):
            return None

        correct = options[answer]
        incorrect = options[:answer] + options[answer + 1 :]
        shuffled, correct_index = self.shuffle_options(correct, incorrect)
        return Question(
            text=text,
            options=shuffled,
            correct_option_index=correct_index,
            category=str(item.get("category") or default_category),
        )

    def sample(self, pool: list[Question], count: int) -> list[Question]:
        """Shuffles a copy of the pool and takes the first `count` items."""
        pooled = list(pool)
        self.rng.shuffle(pooled)
        return pooled[:count]
