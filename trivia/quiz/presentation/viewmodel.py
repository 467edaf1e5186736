from collections.abc import Callable
from dataclasses import dataclass

from trivia.config import GameConfig
from trivia.fsm import QuizAction, QuizState, QuizStateMachine
from trivia.quiz.application.service import QuizService
from trivia.quiz.domain.errors import InvalidRequestError, NoQuestionsAvailableError
from trivia.quiz.domain.models import (
    Difficulty,
    GameSession,
    GameSnapshot,
    Question,
    QuizRequest,
)
from trivia.quiz.presentation.state_provider import IStateProvider
from trivia.shared.telemetry import Telemetry

SESSION_KEY = "game_session"
GENERATION_KEY = "load_generation"
PROMPT_KEY = "prompt"

CHOOSE_ANSWER_PROMPT = "Please choose an answer first!"
ANSWER_LOCKED_PROMPT = "The answer has already been revealed."
NO_QUESTIONS_ERROR = "Failed to generate questions. Please try again."


@dataclass(frozen=True)
class LoadTicket:
    """Identifies one in-flight load. Stale tickets are discarded on delivery."""

    generation: int
    request: QuizRequest


class GameController:
    """
    Single owner of the GameSession.
    Drives the FSM and hands read-only snapshots to the views.
    """

    def __init__(self, service: QuizService, state_provider: IStateProvider):
        self.service = service
        self.state = state_provider
        self.telemetry = Telemetry("GameController")
        self._listeners: list[Callable[[GameSnapshot], None]] = []

        if self.state.get(SESSION_KEY) is None:
            self.state.set(SESSION_KEY, GameSession())
        if self.state.get(GENERATION_KEY) is None:
            self.state.set(GENERATION_KEY, 0)

        self.fsm = QuizStateMachine(initial_state=self.session.state)

    # --- Properties ---
    @property
    def session(self) -> GameSession:
        return self.state.get(SESSION_KEY)

    @property
    def current_state(self) -> QuizState:
        return self.fsm.current_state

    @property
    def generation(self) -> int:
        return self.state.get(GENERATION_KEY, 0)

    @property
    def prompt(self) -> str | None:
        return self.state.get(PROMPT_KEY)

    def snapshot(self) -> GameSnapshot:
        return self.session.snapshot()

    def subscribe(self, listener: Callable[[GameSnapshot], None]) -> None:
        self._listeners.append(listener)

    def consume_prompt(self) -> str | None:
        message = self.prompt
        self.state.set(PROMPT_KEY, None)
        return message

    # --- Setup actions ---
    def toggle_category(self, category: str) -> None:
        if self.current_state != QuizState.SETUP:
            return
        selected = self.session.selected_categories
        if category in selected:
            selected.discard(category)
        else:
            selected.add(category)
        self._publish()

    def set_difficulty(self, difficulty: Difficulty | str) -> None:
        if self.current_state != QuizState.SETUP:
            return
        self.session.difficulty = Difficulty(difficulty)
        self._publish()

    def set_question_count(self, count: int) -> None:
        if self.current_state != QuizState.SETUP:
            return
        self.session.question_count = GameConfig.clamp_question_count(int(count))
        self._publish()

    # --- Loading ---
    def start(self) -> None:
        """Starts a round and loads questions synchronously."""
        ticket = self.begin_loading()
        if ticket is None:
            return
        try:
            questions = self.service.load_questions(ticket.request)
        except NoQuestionsAvailableError as e:
            self.telemetry.log_error("No questions available", e)
            self.fail_loading(ticket, NO_QUESTIONS_ERROR)
            return
        self.deliver(ticket, questions)

    def begin_loading(self) -> LoadTicket | None:
        Telemetry.start_trace()
        if self.current_state != QuizState.SETUP:
            self.telemetry.log_info("Start ignored", state=self.current_state.name)
            return None

        session = self.session
        try:
            request = self.service.build_request(
                session.selected_categories, session.difficulty, session.question_count
            )
        except InvalidRequestError as e:
            self._set_prompt(str(e))
            return None

        self.telemetry.log_info(
            "Action: Start Quiz",
            categories=sorted(request.categories),
            difficulty=request.difficulty.value,
            count=request.question_count,
        )
        session.error = None
        self._transition(QuizAction.START)
        generation = self.generation + 1
        self.state.set(GENERATION_KEY, generation)
        return LoadTicket(generation=generation, request=request)

    def deliver(self, ticket: LoadTicket, questions: list[Question]) -> bool:
        """Applies a load result. Returns False when the result is stale."""
        if not self._is_current(ticket):
            return False
        if not questions:
            return self.fail_loading(ticket, NO_QUESTIONS_ERROR)

        self.session.start_round(questions)
        self._transition(QuizAction.LOAD_SUCCESS)
        return True

    def fail_loading(self, ticket: LoadTicket, message: str) -> bool:
        if not self._is_current(ticket):
            return False
        self.session.error = message
        self._transition(QuizAction.LOAD_FAILED)
        return True

    # --- Playing ---
    def select_option(self, index: int) -> bool:
        if self.current_state == QuizState.ANSWER_REVEALED:
            self._set_prompt(ANSWER_LOCKED_PROMPT)
            return False
        question = self.session.current_question
        if self.current_state != QuizState.QUESTION_ACTIVE or question is None:
            return False
        if not 0 <= index < len(question.options):
            self.telemetry.log_warning("Option out of range", index=index)
            return False

        self.session.selected_option = index
        self._publish()
        return True

    def check_answer(self) -> bool:
        if self.current_state != QuizState.QUESTION_ACTIVE:
            return False
        if self.session.selected_option is None:
            self._set_prompt(CHOOSE_ANSWER_PROMPT)
            return False
        return self._transition(QuizAction.CHECK_ANSWER)

    def advance(self) -> bool:
        """
        Records the answer to the current question and moves on.
        From QUESTION_ACTIVE the answer is revealed first.
        """
        Telemetry.start_trace()
        if self.current_state == QuizState.QUESTION_ACTIVE and not self.check_answer():
            return False
        if self.current_state != QuizState.ANSWER_REVEALED:
            return False

        session = self.session
        record = session.record_answer()
        self.telemetry.log_info(
            "Answer recorded",
            index=record.question_index,
            correct=record.was_correct,
            score=session.score,
        )

        if session.current_index + 1 < len(session.questions):
            session.next_question()
            return self._transition(QuizAction.NEXT_QUESTION)
        return self._transition(QuizAction.FINISH_QUIZ)

    def answer(self, index: int) -> bool:
        """Single-click flow: select, reveal and advance in one step."""
        return self.select_option(index) and self.advance()

    def reset(self) -> None:
        Telemetry.start_trace()
        # Bumping the generation makes any in-flight ticket stale.
        self.state.set(GENERATION_KEY, self.generation + 1)
        self.state.set(SESSION_KEY, GameSession())
        self.state.set(PROMPT_KEY, None)
        self._transition(QuizAction.RESET)

    # --- Internals ---
    def _is_current(self, ticket: LoadTicket) -> bool:
        stale = ticket.generation != self.generation
        if stale or self.current_state != QuizState.LOADING:
            self.telemetry.log_info(
                "Discarding stale load result",
                ticket=ticket.generation,
                current=self.generation,
            )
            return False
        return True

    def _set_prompt(self, message: str) -> None:
        self.telemetry.log_info("Prompting user", message=message)
        self.state.set(PROMPT_KEY, message)

    def _transition(self, action: QuizAction) -> bool:
        ok = self.fsm.transition(action)
        self.session.state = self.fsm.current_state
        self._publish()
        return ok

    def _publish(self) -> None:
        if not self._listeners:
            return
        snapshot = self.snapshot()
        for listener in self._listeners:
            listener(snapshot)
