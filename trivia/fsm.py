import logging
from enum import Enum, auto

logger = logging.getLogger(__name__)


class QuizState(Enum):
    SETUP = auto()  # Choosing categories, difficulty and count
    LOADING = auto()  # Fetching questions
    QUESTION_ACTIVE = auto()  # Question shown, answer pending
    ANSWER_REVEALED = auto()  # Correct option shown, waiting for "next"
    FINISHED = auto()  # Results screen


class QuizAction(Enum):
    START = auto()
    LOAD_SUCCESS = auto()
    LOAD_FAILED = auto()
    CHECK_ANSWER = auto()
    NEXT_QUESTION = auto()
    FINISH_QUIZ = auto()
    RESET = auto()


PLAYING_STATES = frozenset({QuizState.QUESTION_ACTIVE, QuizState.ANSWER_REVEALED})


class QuizStateMachine:
    """
    Pure FSM Logic.
    It only cares about State Transitions, not UI or question sources.
    """

    def __init__(self, initial_state: QuizState = QuizState.SETUP):
        self._state = initial_state

    @property
    def current_state(self) -> QuizState:
        return self._state

    @property
    def is_playing(self) -> bool:
        return self._state in PLAYING_STATES

    def transition(self, action: QuizAction) -> bool:
        """
        The Transition Table.
        Returns False (and leaves the state alone) for disallowed transitions.
        """
        previous = self._state

        match (self._state, action):
            # SETUP -> LOADING
            case (QuizState.SETUP, QuizAction.START):
                self._state = QuizState.LOADING

            # LOADING -> ACTIVE, or back to SETUP when nothing could be loaded
            case (QuizState.LOADING, QuizAction.LOAD_SUCCESS):
                self._state = QuizState.QUESTION_ACTIVE
            case (QuizState.LOADING, QuizAction.LOAD_FAILED):
                self._state = QuizState.SETUP

            # ACTIVE -> REVEALED
            case (QuizState.QUESTION_ACTIVE, QuizAction.CHECK_ANSWER):
                self._state = QuizState.ANSWER_REVEALED

            # REVEALED -> ACTIVE (Next) or FINISHED (Last question)
            case (QuizState.ANSWER_REVEALED, QuizAction.NEXT_QUESTION):
                self._state = QuizState.QUESTION_ACTIVE
            case (QuizState.ANSWER_REVEALED, QuizAction.FINISH_QUIZ):
                self._state = QuizState.FINISHED

            case (_, QuizAction.RESET):
                self._state = QuizState.SETUP

            case _:
                logger.error(f"⛔ INVALID TRANSITION: {self._state.name} + {action.name}")
                return False

        logger.info(f"🔄 FSM: {previous.name} --[{action.name}]--> {self._state.name}")
        return True
