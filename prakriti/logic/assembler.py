"""Response assembly: validate, tally, classify and build the record.

The submission payload is a flat JSON object merging answers keyed
``q<index>`` (values ``a``/``b``/``c``) with the personal info fields. This
module splits and checks that payload, then turns a valid submission into a
`SurveyResponseRecord`. Nothing here performs I/O; persistence is the
caller's concern (see `prakriti.logic.submission`).
"""

from __future__ import annotations

import re
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from prakriti.logic.classifier import Classification, Tally, classify
from prakriti.logic.errors import MalformedSubmissionError, SubmissionValidationError
from prakriti.logic.validators import (
    PERSONAL_FIELDS,
    collect_failures,
    normalize_personal_info,
    validate_personal_info,
)
from prakriti.models.submission import SurveyResponseRecord

# Option position -> answer letter; letter position -> tally bucket
ANSWER_LETTERS: Tuple[str, ...] = ("a", "b", "c")

# Canonical keys only: ASCII digits, no leading zeros
_ANSWER_KEY_RE = re.compile(r"q(0|[1-9][0-9]*)")
_ANSWER_LIKE_RE = re.compile(r"q\d+")


def answer_key(index: int) -> str:
    return f"q{index}"


def utc_timestamp(now: Optional[datetime] = None) -> str:
    now_utc = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    return now_utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class SubmissionInput:
    answers: Dict[int, str]
    info: Dict[str, Optional[str]]


@dataclass(frozen=True)
class AssembledSubmission:
    record: SurveyResponseRecord
    tally: Tally
    classification: Classification


def parse_submission(payload: Any) -> SubmissionInput:
    """Split a decoded payload into answers and personal info.

    Raises MalformedSubmissionError when the payload is not an object or a
    relevant value is not a string, or when an answer key is not canonical
    (`q00`, `q019`, non-ASCII digits). Other keys are ignored.
    """
    if not isinstance(payload, dict):
        raise MalformedSubmissionError("Submission must be a JSON object.")

    answers: Dict[int, str] = {}
    info: Dict[str, Optional[str]] = {}
    for key, value in payload.items():
        match = _ANSWER_KEY_RE.fullmatch(str(key))
        if match:
            if not isinstance(value, str):
                raise MalformedSubmissionError(f"Answer {key} must be a string.")
            answers[int(match.group(1))] = value
        elif _ANSWER_LIKE_RE.fullmatch(str(key)):
            raise MalformedSubmissionError(f"Answer key {key!r} must be q followed by the question index.")
        elif key in PERSONAL_FIELDS:
            if value is not None and not isinstance(value, str):
                raise MalformedSubmissionError(f"Field {key} must be a string.")
            info[key] = value
    return SubmissionInput(answers=answers, info=info)


def check_answers(answers: Mapping[int, str], question_count: int) -> List[str]:
    """Return messages for unanswered, unknown or out-of-range answers."""
    messages: List[str] = []
    missing = [i for i in range(question_count) if i not in answers]
    if missing:
        numbers = ", ".join(str(i + 1) for i in missing)
        messages.append(f"Please answer all {question_count} questions (unanswered: {numbers}).")
    for index in sorted(answers):
        if index >= question_count:
            messages.append(f"Unknown question {answer_key(index)}.")
        elif answers[index] not in ANSWER_LETTERS:
            messages.append(f"Answer to question {index + 1} must be one of a, b or c.")
    return messages


def tally_answers(answers: Mapping[int, str]) -> Tally:
    counts = [0, 0, 0]
    for letter in answers.values():
        if letter in ANSWER_LETTERS:
            counts[ANSWER_LETTERS.index(letter)] += 1
    return Tally(*counts)


def assemble(
    submission: SubmissionInput,
    question_count: int,
    *,
    now: Optional[datetime] = None,
    id_factory: Callable[[], str] = lambda: str(uuid.uuid4()),
) -> AssembledSubmission:
    """Validate the whole submission and build the record to persist.

    All personal info and answer failures are collected before raising
    SubmissionValidationError, so callers can show every message at once.
    """
    messages = collect_failures(validate_personal_info(submission.info))
    messages.extend(check_answers(submission.answers, question_count))
    if messages:
        raise SubmissionValidationError(messages)

    tally = tally_answers(submission.answers)
    classification = classify(tally)
    info = normalize_personal_info(submission.info)
    record = SurveyResponseRecord(
        id=id_factory(),
        timestamp=utc_timestamp(now),
        name=info["name"],
        gender=info["gender"],
        phone=info["phone"],
        email=info["email"],
        city=info["city"],
        scores=tally.summary(),
        result=classification.label,
        description=classification.description,
    )
    return AssembledSubmission(record=record, tally=tally, classification=classification)


__all__ = [
    "ANSWER_LETTERS",
    "SubmissionInput",
    "AssembledSubmission",
    "answer_key",
    "utc_timestamp",
    "parse_submission",
    "check_answers",
    "tally_answers",
    "assemble",
]
