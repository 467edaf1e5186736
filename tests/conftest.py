import random

import pytest
import streamlit as st

from trivia.quiz.adapters.catalog_source import CatalogSource
from trivia.quiz.application.service import QuizService
from trivia.quiz.domain.models import Question
from trivia.quiz.presentation.state_provider import InMemoryStateProvider
from trivia.quiz.presentation.viewmodel import GameController
from tests.drivers.fakes import FakeSource


class MockSessionState(dict):
    """
    Mock for st.session_state that behaves like both a dict and an object.
    """

    def __getattr__(self, name):
        try:
            return self[name]
        except KeyError as err:
            raise AttributeError(
                f"'MockSessionState' object has no attribute '{name}'"
            ) from err

    def __setattr__(self, name, value):
        self[name] = value

    def __delattr__(self, name):
        try:
            del self[name]
        except KeyError as err:
            raise AttributeError(
                f"'MockSessionState' object has no attribute '{name}'"
            ) from err


@pytest.fixture(autouse=True)
def mock_streamlit_session():
    """
    Auto-use fixture that ensures st.session_state exists for all tests.
    """
    original_session_state = getattr(st, "session_state", None)
    st.session_state = MockSessionState()

    yield st.session_state

    st.session_state.clear()
    if original_session_state is not None:
        st.session_state = original_session_state


def make_questions(category: str, count: int) -> list[Question]:
    return [
        Question(
            text=f"{category} question {i}?",
            options=[f"{category}-{i}-{k}" for k in range(4)],
            correct_option_index=i % 4,
            category=category,
        )
        for i in range(count)
    ]


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def sample_question():
    return Question(
        text="What is the chemical symbol for gold?",
        options=["Au", "Ag", "Go", "Gd"],
        correct_option_index=0,
        category="Science",
    )


@pytest.fixture
def science_questions():
    return make_questions("Science", 5)


@pytest.fixture
def catalog(rng):
    """Five questions per category, like the bundled catalog."""
    questions = []
    for category in ["Science", "History", "Geography"]:
        questions.extend(make_questions(category, 5))
    return CatalogSource(questions, rng=rng)


@pytest.fixture
def fake_source():
    return FakeSource(make_questions("Science", 3))


@pytest.fixture
def controller(fake_source):
    return GameController(QuizService(fake_source), InMemoryStateProvider())
