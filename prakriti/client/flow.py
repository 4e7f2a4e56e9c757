"""Respondent-side survey flow.

A framework-independent state machine mirroring the web form:

    loading -> answering(i) -> collecting_info -> submitting -> result
                                                            \\-> error

Selecting an option records the answer and raises a processing flag; the
flow only advances once the short display delay has passed (`advance()`,
or `answer()` which waits the delay itself). While the flag is up, further
option clicks are ignored and back-navigation is refused. Only one
submission can be in flight at a time.
"""

from __future__ import annotations

import enum
import logging
from typing import Callable, Dict, List, Mapping, Optional, Sequence

import anyio

from prakriti.client.errors import (
    InvalidTransition,
    SubmissionFailed,
    SubmissionRejected,
    SurveyClientError,
)
from prakriti.logic.assembler import ANSWER_LETTERS, answer_key
from prakriti.logic.validators import FieldVerdict, FIELD_VALIDATORS, validate_personal_info
from prakriti.models.question import Question
from prakriti.models.submission import SubmissionResult

logger = logging.getLogger(__name__)

ADVANCE_DELAY_SECONDS = 0.5
NO_QUESTIONS_MESSAGE = "No questions are available right now. Please refresh the page."


class FlowState(str, enum.Enum):
    LOADING = "loading"
    ANSWERING = "answering"
    COLLECTING_INFO = "collecting_info"
    SUBMITTING = "submitting"
    RESULT = "result"
    ERROR = "error"


class SurveyFlow:
    def __init__(
        self,
        fetch_questions: Callable[[], Sequence[Question]],
        submit: Callable[[Mapping[str, str]], SubmissionResult],
        *,
        advance_delay: float = ADVANCE_DELAY_SECONDS,
    ) -> None:
        self._fetch_questions = fetch_questions
        self._submit = submit
        self.advance_delay = advance_delay
        self._reset()
        self.questions: List[Question] = []
        self.state = FlowState.LOADING

    @classmethod
    def from_client(cls, client, **kwargs) -> "SurveyFlow":  # type: ignore[no-untyped-def]
        return cls(client.fetch_questions, client.submit, **kwargs)

    def _reset(self) -> None:
        self.question_index = 0
        self.answers: Dict[int, str] = {}
        self.processing = False
        self.field_errors: Dict[str, str] = {}
        self.form_error: Optional[str] = None
        self.form_details: List[str] = []
        self.error: Optional[str] = None
        self.result: Optional[SubmissionResult] = None

    def _require(self, action: str, *states: FlowState) -> None:
        if self.state not in states:
            raise InvalidTransition(action, self.state.value)

    # -- loading --

    def load(self) -> None:
        self._require("load", FlowState.LOADING)
        try:
            questions = list(self._fetch_questions())
        except SurveyClientError as e:
            logger.warning("flow_load_failed")
            self.error = str(e)
            self.state = FlowState.ERROR
            return
        if not questions:
            self.error = NO_QUESTIONS_MESSAGE
            self.state = FlowState.ERROR
            return
        self.questions = questions
        self.question_index = 0
        self.state = FlowState.ANSWERING

    # -- answering --

    @property
    def total_questions(self) -> int:
        return len(self.questions)

    @property
    def current_question(self) -> Optional[Question]:
        if self.state is not FlowState.ANSWERING:
            return None
        return self.questions[self.question_index]

    @property
    def progress(self) -> float:
        if self.state is FlowState.ANSWERING:
            return (self.question_index + 1) / self.total_questions
        if self.state in (FlowState.COLLECTING_INFO, FlowState.SUBMITTING):
            return 1.0
        return 0.0

    def select_option(self, choice: int | str) -> bool:
        """Record the answer for the current question.

        Returns False, recording nothing, while a previous selection is
        still pending.
        """
        self._require("select an option", FlowState.ANSWERING)
        if self.processing:
            return False
        self.answers[self.question_index] = _to_letter(choice)
        self.processing = True
        return True

    def advance(self) -> None:
        self._require("advance", FlowState.ANSWERING)
        if not self.processing:
            raise InvalidTransition("advance", "no option is selected")
        self.processing = False
        if self.question_index + 1 < self.total_questions:
            self.question_index += 1
        else:
            self.state = FlowState.COLLECTING_INFO

    async def answer(self, choice: int | str) -> bool:
        """Select an option, wait the display delay, then advance."""
        if not self.select_option(choice):
            return False
        await anyio.sleep(self.advance_delay)
        self.advance()
        return True

    def go_back(self) -> None:
        self._require("go back", FlowState.ANSWERING, FlowState.COLLECTING_INFO)
        if self.state is FlowState.COLLECTING_INFO:
            self.field_errors = {}
            self.form_error = None
            self.form_details = []
            self.question_index = self.total_questions - 1
            self.state = FlowState.ANSWERING
            return
        if self.processing or self.question_index == 0:
            raise InvalidTransition("go back", f"answering({self.question_index})")
        self.question_index -= 1

    # -- personal info and submission --

    @staticmethod
    def check_field(field: str, value: Optional[str]) -> FieldVerdict:
        """Live feedback for a single form field."""
        return FIELD_VALIDATORS[field](value)

    def build_payload(self, info: Mapping[str, str]) -> Dict[str, str]:
        payload = {answer_key(i): letter for i, letter in sorted(self.answers.items())}
        payload.update({field: info.get(field, "") for field in FIELD_VALIDATORS})
        return payload

    def submit_info(self, info: Mapping[str, str]) -> bool:
        """Validate the form and, when valid, submit the whole survey.

        Returns True once a result is available. Field problems are left in
        `field_errors`, server-side problems in `form_error`.
        """
        self._require("submit", FlowState.COLLECTING_INFO)
        verdicts = validate_personal_info(info)
        self.field_errors = {f: v.message for f, v in verdicts.items() if not v.is_valid}
        self.form_error = None
        self.form_details = []
        if self.field_errors:
            return False

        self.state = FlowState.SUBMITTING
        try:
            result = self._submit(self.build_payload(info))
        except SubmissionRejected as e:
            self.form_error = str(e)
            self.form_details = e.details
            self.state = FlowState.COLLECTING_INFO
            return False
        except SubmissionFailed as e:
            self.form_error = str(e)
            self.state = FlowState.COLLECTING_INFO
            return False
        except SurveyClientError as e:
            self.error = str(e)
            self.state = FlowState.ERROR
            return False
        except Exception:
            self.state = FlowState.ERROR
            raise
        self.result = result
        self.state = FlowState.RESULT
        logger.info("flow_completed result=%s", result.result)
        return True

    # -- restart --

    def restart(self) -> None:
        self._require("restart", FlowState.RESULT, FlowState.ERROR)
        self._reset()
        self.state = FlowState.LOADING
        self.load()


def _to_letter(choice: int | str) -> str:
    if isinstance(choice, str):
        if choice not in ANSWER_LETTERS:
            raise ValueError(f"unknown option {choice!r}")
        return choice
    if not 0 <= choice < len(ANSWER_LETTERS):
        raise ValueError(f"option index out of range: {choice}")
    return ANSWER_LETTERS[choice]


__all__ = ["FlowState", "SurveyFlow", "ADVANCE_DELAY_SECONDS"]
