import os
from enum import Enum
from typing import Final

# Open Trivia DB id used for any category we do not know about.
GENERAL_KNOWLEDGE_ID: Final[int] = 9


class Category(Enum):
    # Enum Member = ("Category Name", Open Trivia DB id, "Icon")
    SCIENCE = ("Science", 17, "🔬")
    HISTORY = ("History", 23, "📜")
    GEOGRAPHY = ("Geography", 22, "🌍")
    SPORTS = ("Sports", 21, "⚽")
    TECHNOLOGY = ("Technology", 18, "💻")

    def __init__(self, label: str, provider_id: int, icon: str):
        self.label = label
        self.provider_id = provider_id
        self.icon = icon

    @classmethod
    def from_label(cls, label: str) -> "Category | None":
        for category in cls:
            if category.label.lower() == label.strip().lower():
                return category
        return None

    @classmethod
    def provider_id_for(cls, label: str) -> int:
        """Returns the provider id for a category name, or General Knowledge."""
        category = cls.from_label(label)
        return category.provider_id if category else GENERAL_KNOWLEDGE_ID

    @classmethod
    def get_icon(cls, label: str) -> str:
        category = cls.from_label(label)
        return category.icon if category else "❓"

    @classmethod
    def all_labels(cls) -> list[str]:
        return [c.label for c in cls]


class GameConfig:
    # --- App Identity ---
    APP_TITLE = "Trivia Game"

    # --- Game Rules ---
    MIN_QUESTIONS: Final[int] = 1
    MAX_QUESTIONS: Final[int] = 20
    DEFAULT_QUESTIONS: Final[int] = 5
    DEFAULT_DIFFICULTY: Final[str] = "easy"
    OPTIONS_PER_QUESTION: Final[int] = 4

    CATEGORIES = Category.all_labels()

    # --- Question Sources ---
    # One of: "opentdb", "generative", "catalog"
    QUESTION_SOURCE: str = os.getenv("TRIVIA_QUESTION_SOURCE", "opentdb")
    OPENTDB_URL: str = os.getenv("TRIVIA_OPENTDB_URL", "https://opentdb.com/api.php")
    PROXY_URL: str = os.getenv(
        "TRIVIA_PROXY_URL", "http://localhost:8001/api/generateTrivia"
    )
    CATALOG_PATH: str = os.getenv(
        "TRIVIA_CATALOG_PATH",
        os.path.join(os.path.dirname(__file__), "data", "fallback_questions.json"),
    )
    HTTP_TIMEOUT_SECONDS: float = float(os.getenv("TRIVIA_HTTP_TIMEOUT", "15"))

    # Upper bound on how much model output the brace scanner will look at.
    MAX_SCAN_CHARS: Final[int] = 200_000

    # --- Generative Proxy ---
    GEMINI_API_URL: str = os.getenv(
        "GEMINI_API_URL", "https://generativelanguage.googleapis.com/v1beta"
    )
    GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemma-3-27b-it")

    # --- Observability ---
    METRICS_PORT: int = int(os.getenv("TRIVIA_METRICS_PORT", "8000"))

    @staticmethod
    def clamp_question_count(value: int) -> int:
        return max(GameConfig.MIN_QUESTIONS, min(GameConfig.MAX_QUESTIONS, value))
