"""Submission boundary shared by every transport entry point.

Decodes the raw body, assembles the record and persists it. Validation
failures never reach the store.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from prakriti.logic.assembler import assemble, parse_submission
from prakriti.logic.errors import MalformedSubmissionError, SubmissionValidationError
from prakriti.logic.events import SUBMISSION_ACCEPTED, SUBMISSION_REJECTED, publish
from prakriti.logic.repository_responses import ResponseStore
from prakriti.models.submission import Counts, SubmissionResult

logger = logging.getLogger(__name__)


def decode_body(raw: bytes) -> Any:
    try:
        return json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.info("submission_malformed reason=%s", type(e).__name__)
        raise MalformedSubmissionError("Invalid JSON format") from e


def submit_survey(payload: Any, store: ResponseStore, question_count: int) -> SubmissionResult:
    """Validate and persist one submission and return the classification.

    Raises MalformedSubmissionError, SubmissionValidationError or
    ResponseStoreError; the last one means validation passed but the record
    was not stored.
    """
    submission = parse_submission(payload)
    try:
        assembled = assemble(submission, question_count)
    except SubmissionValidationError as e:
        publish(SUBMISSION_REJECTED, {"failures": len(e.messages)})
        raise
    store.insert(assembled.record)
    publish(SUBMISSION_ACCEPTED, {"id": assembled.record.id, "result": assembled.classification.label})
    return SubmissionResult(
        result=assembled.classification.label,
        description=assembled.classification.description,
        counts=Counts(**assembled.tally.as_counts()),
    )


__all__ = ["decode_body", "submit_survey"]
