import json
from typing import Any

from trivia.config import GameConfig
from trivia.quiz.domain.errors import (
    InvalidQuestionPayloadError,
    MalformedJsonError,
    NoJsonFoundError,
)


def extract_json_block(text: str, max_chars: int = GameConfig.MAX_SCAN_CHARS) -> str:
    """
    Returns the first balanced top-level {...} block in `text`.

    Braces inside JSON strings are ignored. Only the first `max_chars`
    characters are scanned.

    Example:
        >>> extract_json_block('Sure! {"a": "}"} Hope it helps')
        '{"a": "}"}'
    """
    window = text[:max_chars]
    start = window.find("{")
    if start == -1:
        raise NoJsonFoundError("no '{' in model output")

    depth = 0
    in_string = False
    escaped = False
    for pos in range(start, len(window)):
        ch = window[pos]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue

        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return window[start : pos + 1]

    raise NoJsonFoundError("unbalanced braces in model output")


def parse_model_output(text: str) -> list[dict[str, Any]]:
    """
    Two-stage parser for generated question sets.

    1. Strict: the whole text is JSON.
    2. Recovery: the first balanced {...} block is JSON.

    Returns the raw "questions" items.
    """
    if not isinstance(text, str):
        raise InvalidQuestionPayloadError("model output is not text")

    try:
        payload = json.loads(text)
    except json.JSONDecodeError:
        block = extract_json_block(text)
        try:
            payload = json.loads(block)
        except json.JSONDecodeError as e:
            raise MalformedJsonError(f"embedded block is not valid JSON: {e}") from e

    if not isinstance(payload, dict):
        raise InvalidQuestionPayloadError("top-level JSON value is not an object")

    questions = payload.get("questions")
    if not isinstance(questions, list):
        raise InvalidQuestionPayloadError('missing "questions" list')

    return [q for q in questions if isinstance(q, dict)]
