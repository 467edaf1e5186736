class TriviaError(Exception):
    """Base class for every error raised by the trivia package."""


class InvalidRequestError(TriviaError):
    """The player's selection cannot be turned into a quiz request."""


class SourceUnavailableError(TriviaError):
    """A question source could not deliver questions (network, HTTP, empty result)."""

    def __init__(self, source: str, reason: str):
        super().__init__(f"{source}: {reason}")
        self.source = source
        self.reason = reason


class NoQuestionsAvailableError(TriviaError):
    """Neither the primary source nor the fallback catalog produced a question."""


# --- Model output parsing ---
class ModelOutputError(TriviaError):
    """Generated text could not be turned into a question payload."""


class NoJsonFoundError(ModelOutputError):
    """No balanced {...} block exists in the text."""


class MalformedJsonError(ModelOutputError):
    """A {...} block was found but is not valid JSON."""


class InvalidQuestionPayloadError(ModelOutputError):
    """The JSON parsed but has no usable "questions" list."""
