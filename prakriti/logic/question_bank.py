"""Question source backed by a JSON question bank.

The bank is fixed content: it is read and validated once at startup and
served unchanged for the life of the process.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional, Protocol, Sequence

from pydantic import ValidationError as PydanticValidationError

from prakriti.logic.errors import QuestionBankError
from prakriti.models.question import Question, QuestionsEnvelope

logger = logging.getLogger(__name__)

DEFAULT_BANK_PATH = Path(__file__).resolve().parent.parent / "data" / "questions.json"


class QuestionSource(Protocol):
    def list_questions(self) -> List[Question]: ...


class StaticQuestionSource:
    def __init__(self, questions: Sequence[Question]) -> None:
        if not questions:
            raise QuestionBankError("question bank is empty")
        self._questions = tuple(questions)

    def list_questions(self) -> List[Question]:
        return list(self._questions)

    def __len__(self) -> int:
        return len(self._questions)


def load_question_bank(path: Optional[str | Path] = None) -> StaticQuestionSource:
    bank_path = Path(path) if path else DEFAULT_BANK_PATH
    try:
        raw = json.loads(bank_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.error("question_bank_unreadable path=%s", str(bank_path))
        raise QuestionBankError(f"cannot read question bank {bank_path}: {e}") from e
    try:
        envelope = QuestionsEnvelope.model_validate(raw)
    except PydanticValidationError as e:
        logger.error("question_bank_invalid path=%s", str(bank_path))
        raise QuestionBankError(f"invalid question bank {bank_path}: {e}") from e
    source = StaticQuestionSource(envelope.questions)
    logger.info("question_bank_loaded path=%s count=%d", bank_path.name, len(source))
    return source


__all__ = ["QuestionSource", "StaticQuestionSource", "DEFAULT_BANK_PATH", "load_question_bank"]
