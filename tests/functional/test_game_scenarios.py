import random

import httpx

from trivia.config import GameConfig
from trivia.fsm import QuizState
from trivia.quiz.adapters.catalog_source import CatalogSource
from trivia.quiz.adapters.opentdb_source import OpenTriviaSource
from trivia.quiz.adapters.resilient_source import ResilientQuestionSource
from trivia.quiz.application.service import QuizService
from trivia.quiz.presentation.state_provider import InMemoryStateProvider
from trivia.quiz.presentation.viewmodel import GameController
from tests.drivers.fakes import BrokenSource
from tests.drivers.game_driver import GameDriver


def offline_opentdb() -> OpenTriviaSource:
    def handler(req):
        raise httpx.ConnectError("simulated network error", request=req)

    client = httpx.Client(transport=httpx.MockTransport(handler))
    return OpenTriviaSource(client=client, rng=random.Random(0))


def build_driver(primary, catalog) -> GameDriver:
    service = QuizService(ResilientQuestionSource(primary, catalog))
    return GameDriver(GameController(service, InMemoryStateProvider()))


def test_science_fallback_when_remote_is_down():
    """Remote fetch fails: the five bundled Science questions are served instead."""
    catalog = CatalogSource.from_file(GameConfig.CATALOG_PATH, rng=random.Random(0))
    driver = build_driver(offline_opentdb(), catalog)

    driver.setup(["Science"], difficulty="easy", count=5).start()

    driver.assert_state(QuizState.QUESTION_ACTIVE)
    assert driver.visited == [
        QuizState.SETUP,
        QuizState.LOADING,
        QuizState.QUESTION_ACTIVE,
    ]
    questions = driver.snapshot.questions
    expected = {q.text for q in catalog.questions if q.category == "Science"}
    assert len(questions) == 5
    assert {q.text for q in questions} == expected


def test_short_fallback_pool_still_plays(catalog):
    """Twenty requested, five available: play the five without error."""
    driver = build_driver(BrokenSource(), catalog)

    driver.setup(["History"], count=20).start()

    driver.assert_state(QuizState.QUESTION_ACTIVE)
    assert driver.snapshot.total == 5
    for _ in range(5):
        driver.answer_correctly()
    driver.assert_state(QuizState.FINISHED).assert_score(5)


def test_full_round_keeps_invariants(catalog):
    driver = build_driver(BrokenSource(), catalog)
    driver.setup(["Science", "Geography"], count=8).start()

    rng = random.Random(99)
    while driver.controller.current_state != QuizState.FINISHED:
        if rng.random() < 0.5:
            driver.answer_correctly()
        else:
            driver.answer_wrong()

        snap = driver.snapshot
        assert snap.score == sum(1 for a in snap.answers if a.was_correct)
        if snap.state == QuizState.QUESTION_ACTIVE:
            assert snap.current_index == len(snap.answers)
        assert [a.question_index for a in snap.answers] == list(range(len(snap.answers)))

    snap = driver.snapshot
    assert len(snap.answers) == len(snap.questions) == 8
    assert snap.current_index == len(snap.questions) - 1


def test_play_again_returns_to_clean_setup(catalog):
    driver = build_driver(BrokenSource(), catalog)
    driver.setup(["Science"], count=2).start()
    driver.answer_wrong().answer_correctly()
    driver.assert_state(QuizState.FINISHED).assert_score(1)

    driver.controller.reset()

    driver.assert_state(QuizState.SETUP)
    snap = driver.snapshot
    assert snap.selected_categories == frozenset()
    assert snap.questions == ()
    assert snap.question_count == GameConfig.DEFAULT_QUESTIONS


def test_everything_down_returns_to_setup(rng):
    driver = build_driver(BrokenSource(), CatalogSource([], rng=rng))

    driver.setup(["Science"]).start()

    driver.assert_state(QuizState.SETUP)
    assert driver.visited[-2:] == [QuizState.LOADING, QuizState.SETUP]
    assert driver.snapshot.error is not None
