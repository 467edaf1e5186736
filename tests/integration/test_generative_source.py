import json
import random
from unittest.mock import patch

import httpx
import pytest

from trivia.quiz.adapters.generative_source import GenerativeSource, build_prompt
from trivia.quiz.domain.errors import SourceUnavailableError
from trivia.quiz.domain.models import QuizRequest

MODEL_JSON = {
    "questions": [
        {
            "question": "What is the chemical symbol for gold?",
            "options": ["Au", "Ag", "Go", "Gd"],
            "correctAnswer": 0,
            "category": "Science",
        },
        {
            "question": "Who painted the Mona Lisa?",
            "options": ["Michelangelo", "Leonardo da Vinci", "Raphael", "Donatello"],
            "correctAnswer": 1,
            "category": "History",
        },
        {"question": "Broken item", "options": ["a"], "correctAnswer": 3},
    ]
}


@pytest.fixture
def science_request():
    return QuizRequest(
        categories=frozenset({"Science", "History"}), difficulty="medium", question_count=5
    )


def make_source(handler):
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return GenerativeSource(
        client=client, proxy_url="http://proxy.test/api/generateTrivia", rng=random.Random(3)
    )


def test_build_prompt_mentions_criteria(science_request):
    prompt = build_prompt(science_request)

    assert "Generate exactly 5 trivia questions" in prompt
    assert "- Categories: History, Science" in prompt
    assert "- Difficulty: medium" in prompt
    assert '"correctAnswer": 0' in prompt


def test_posts_prompt_and_parses_chatty_output(science_request):
    sent = {}

    def handler(req: httpx.Request) -> httpx.Response:
        sent.update(json.loads(req.content))
        text = "Here you go!\n```json\n" + json.dumps(MODEL_JSON) + "\n```"
        return httpx.Response(200, json={"text": text})

    questions = make_source(handler).fetch(science_request)

    assert "prompt" in sent
    assert len(questions) == 2
    assert questions[0].correct_option == "Au"
    assert questions[1].correct_option == "Leonardo da Vinci"
    assert questions[1].category == "History"


def test_truncates_to_requested_count():
    req = QuizRequest(categories=frozenset({"Science"}), question_count=1)
    source = make_source(lambda r: httpx.Response(200, json={"text": json.dumps(MODEL_JSON)}))

    assert len(source.fetch(req)) == 1


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, json={"text": "Sorry, I can't do that."}),
        httpx.Response(200, json={"text": '{"questions": "nope"}'}),
        httpx.Response(200, json={"text": '{"questions": []}'}),
        httpx.Response(200, json={"text": {"parts": [{"text": "{}"}]}}),
        httpx.Response(200, json={"text": None}),
        httpx.Response(500, json={"error": "Failed to generate questions"}),
    ],
    ids=["no-json", "bad-shape", "no-questions", "text-object", "text-null", "proxy-500"],
)
def test_failures_raise_source_unavailable(science_request, response):
    with pytest.raises(SourceUnavailableError):
        make_source(lambda req: response).fetch(science_request)


def test_structured_text_is_logged_as_unparseable(science_request):
    source = make_source(
        lambda req: httpx.Response(200, json={"text": {"parts": []}})
    )

    with patch.object(source.telemetry, "log_warning") as warned:
        with pytest.raises(SourceUnavailableError, match="InvalidQuestionPayloadError"):
            source.fetch(science_request)

    warned.assert_called_once()
    assert warned.call_args.kwargs["kind"] == "InvalidQuestionPayloadError"


def test_close_releases_default_client():
    source = GenerativeSource()

    source.close()

    assert source.client.is_closed
