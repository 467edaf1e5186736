from collections.abc import Callable

from trivia.config import GameConfig
from trivia.quiz.adapters.catalog_source import CatalogSource
from trivia.quiz.adapters.generative_source import GenerativeSource
from trivia.quiz.adapters.opentdb_source import OpenTriviaSource
from trivia.quiz.adapters.resilient_source import ResilientQuestionSource
from trivia.quiz.domain.ports import IQuestionSource


class SourceRegistry:
    _factories: dict[str, Callable[[], IQuestionSource]] = {}

    @classmethod
    def register(cls, name: str, factory: Callable[[], IQuestionSource]) -> None:
        cls._factories[name] = factory

    @classmethod
    def names(cls) -> list[str]:
        return sorted(cls._factories)

    @classmethod
    def create(cls, name: str) -> IQuestionSource:
        factory = cls._factories.get(name, cls._factories["opentdb"])
        return factory()


SourceRegistry.register("opentdb", OpenTriviaSource)
SourceRegistry.register("generative", GenerativeSource)
SourceRegistry.register("catalog", CatalogSource.from_file)


def build_question_source(name: str = GameConfig.QUESTION_SOURCE) -> IQuestionSource:
    """Primary source chosen by name, always backed by the local catalog."""
    fallback = CatalogSource.from_file(GameConfig.CATALOG_PATH)
    if name == "catalog":
        return ResilientQuestionSource(fallback)
    return ResilientQuestionSource(SourceRegistry.create(name), fallback)
