"""Survey submission endpoint.

Body: a JSON object merging ``q<index>`` answers with the personal info
fields. Errors are returned as problem+json:
- 400 "Invalid JSON format" (or another malformed-payload message) before
  any validation runs
- 400 "Validation failed" with every failure message under ``details``
- 500 when the record could not be stored
"""

from __future__ import annotations

from datetime import datetime, timezone

import anyio
from fastapi import APIRouter, Depends, Request

from prakriti.http.problem import problem_response
from prakriti.logic.errors import MalformedSubmissionError, ResponseStoreError, SubmissionValidationError
from prakriti.logic.question_bank import QuestionSource
from prakriti.logic.repository_responses import ResponseStore
from prakriti.logic.submission import decode_body, submit_survey
from prakriti.models.submission import SubmissionResult
from prakriti.routes.dependencies import get_question_source, get_response_store

router = APIRouter()

PERSISTENCE_ERROR_MESSAGE = "There was a problem saving your result. Please try again."


@router.get("/submit", summary="Describe the submission endpoint")
def describe_submit():
    return {
        "message": "Submit API is working. Use POST method to submit survey data.",
        "timestamp": datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z"),
    }


@router.post(
    "/submit",
    summary="Validate, classify and store one survey submission",
    operation_id="submitSurvey",
    response_model=SubmissionResult,
)
def submit(
    request: Request,
    store: ResponseStore = Depends(get_response_store),
    source: QuestionSource = Depends(get_question_source),
):
    raw = anyio.from_thread.run(request.body)
    try:
        payload = decode_body(raw)
        return submit_survey(payload, store, len(source.list_questions()))
    except MalformedSubmissionError as e:
        return problem_response(400, "Invalid Request", error=str(e))
    except SubmissionValidationError as e:
        return problem_response(400, "Validation failed", error="Validation failed", details=e.messages)
    except ResponseStoreError:
        return problem_response(500, "Internal Server Error", error=PERSISTENCE_ERROR_MESSAGE)


__all__ = ["router", "describe_submit", "submit", "PERSISTENCE_ERROR_MESSAGE"]
