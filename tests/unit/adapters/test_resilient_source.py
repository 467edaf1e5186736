from unittest.mock import Mock, patch

import pytest

from trivia.quiz.adapters.catalog_source import CatalogSource
from trivia.quiz.adapters.resilient_source import ResilientQuestionSource
from trivia.quiz.domain.errors import NoQuestionsAvailableError
from trivia.quiz.domain.models import QuizRequest
from trivia.quiz.domain.ports import IQuestionSource
from tests.drivers.fakes import BrokenSource, FakeSource


@pytest.fixture
def science_request():
    return QuizRequest(
        categories=frozenset({"Science"}), difficulty="easy", question_count=5
    )


def test_uses_primary_when_it_succeeds(science_request, science_questions, catalog):
    primary = FakeSource(science_questions)
    source = ResilientQuestionSource(primary, catalog)

    assert source.fetch(science_request) == science_questions


def test_falls_back_on_primary_error(science_request, catalog):
    source = ResilientQuestionSource(BrokenSource(), catalog)

    with patch.object(source.telemetry, "count_fallback") as counted:
        result = source.fetch(science_request)

    assert len(result) == 5
    assert all(q.category == "Science" for q in result)
    counted.assert_called_once_with("broken")


def test_falls_back_on_unexpected_exception(science_request, catalog):
    source = ResilientQuestionSource(FakeSource(error=KeyError("results")), catalog)

    assert len(source.fetch(science_request)) == 5


def test_falls_back_on_empty_primary(science_request, catalog):
    source = ResilientQuestionSource(FakeSource([]), catalog)

    assert len(source.fetch(science_request)) == 5


def test_empty_fallback_is_a_hard_failure(science_request, rng):
    source = ResilientQuestionSource(BrokenSource(), CatalogSource([], rng=rng))

    with pytest.raises(NoQuestionsAvailableError):
        source.fetch(science_request)


def test_without_fallback_returns_primary_questions(science_request, catalog):
    source = ResilientQuestionSource(catalog)

    assert len(source.fetch(science_request)) == 5


def test_without_fallback_empty_result_is_not_counted(science_request, rng):
    primary = CatalogSource([], rng=rng)
    source = ResilientQuestionSource(primary)

    with patch.object(primary, "fetch", wraps=primary.fetch) as fetched, patch.object(
        source.telemetry, "count_fallback"
    ) as counted:
        with pytest.raises(NoQuestionsAvailableError):
            source.fetch(science_request)

    fetched.assert_called_once()
    counted.assert_not_called()


def test_close_releases_both_sources():
    primary, fallback = Mock(spec=IQuestionSource), Mock(spec=IQuestionSource)

    ResilientQuestionSource(primary, fallback).close()

    primary.close.assert_called_once()
    fallback.close.assert_called_once()
